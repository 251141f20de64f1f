from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pylon.core.errors import PylonPluginError

PLUGIN_NAME = "plugins.network_defaults"

DEFAULT_TIMEOUT_S = 20.0


def fill_network_defaults(resolved_config: Dict[str, Any], user_config: Mapping[str, Any]) -> None:
    """
    Give every configured network a timeout and an accounts list.

    Values the user wrote are kept as they are.
    """
    for name, network in resolved_config.get("networks", {}).items():
        if not isinstance(network, dict):
            raise PylonPluginError(PLUGIN_NAME, "Network {} must be a mapping".format(name))
        network.setdefault("timeout_s", DEFAULT_TIMEOUT_S)
        network.setdefault("accounts", [])


def attach_accounts(env: Any) -> None:
    network_config = env.network.config or {}
    env.accounts = list(network_config.get("accounts") or [])


def format_accounts(accounts: List[str]) -> str:
    if not accounts:
        return "No accounts configured"
    return "\n".join("{}: {}".format(i, account) for i, account in enumerate(accounts))
