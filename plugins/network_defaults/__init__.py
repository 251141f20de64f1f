"""
Network defaults: fills per-network settings, exposes `env.accounts` and adds
an `accounts` task. Enable it with:

    plugins:
      - plugins.network_defaults
"""
from __future__ import annotations

from typing import Any, Dict

from pylon.config_env import extend_config, extend_environment, override_task, task
from pylon.core.params import argument_types as types

from .extenders import attach_accounts, fill_network_defaults, format_accounts

extend_config(fill_network_defaults)
extend_environment(attach_accounts)


async def accounts_action(args: Dict[str, Any], env: Any, _run_super: Any) -> Any:
    accounts = env.accounts
    if args.get("index") is not None:
        accounts = accounts[args["index"] : args["index"] + 1]
    print(format_accounts(accounts))
    return accounts


async def network_action(args: Dict[str, Any], env: Any, run_super: Any) -> Any:
    result = await run_super(args)
    print("Accounts: {}".format(len(env.accounts)))
    return {**result, "accounts": env.accounts}


task("accounts", "Prints the accounts of the selected network", accounts_action).add_optional_param(
    "index", "Only print the account at this index", type=types.INT
)
override_task("network", network_action)
