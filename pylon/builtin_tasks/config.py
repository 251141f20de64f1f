from __future__ import annotations

from typing import Any, Dict

import yaml

from pylon.core.tasks.registry import TaskRegistry

from .task_names import TASK_CONFIG


async def config_action(args: Dict[str, Any], env: Any, _run_super: Any) -> Dict[str, Any]:
    if args.get("key"):
        value: Any = env.config
        for part in str(args["key"]).split("."):
            value = value.get(part) if isinstance(value, dict) else None
        print(yaml.safe_dump(value, sort_keys=False, allow_unicode=True), end="")
        return {"key": args["key"], "value": value}
    print(yaml.safe_dump(env.config, sort_keys=False, allow_unicode=True), end="")
    return env.config


def register(registry: TaskRegistry) -> None:
    registry.task(TASK_CONFIG, "Prints the resolved project config as YAML", config_action).add_optional_param(
        "key", "Dotted path of a single config value to print (e.g. paths.root)"
    )
