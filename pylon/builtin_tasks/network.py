from __future__ import annotations

from typing import Any, Dict

import yaml

from pylon.core.tasks.registry import TaskRegistry

from .task_names import TASK_NETWORK


async def network_action(_args: Dict[str, Any], env: Any, _run_super: Any) -> Dict[str, Any]:
    print("Network: {}".format(env.network.name))
    print(yaml.safe_dump(env.network.config or {}, sort_keys=False, allow_unicode=True), end="")
    return {"name": env.network.name, "config": env.network.config}


def register(registry: TaskRegistry) -> None:
    registry.task(TASK_NETWORK, "Prints the selected network and its config", network_action)
