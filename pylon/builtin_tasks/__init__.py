from __future__ import annotations

from pylon.core.tasks.registry import TaskRegistry

from . import config, help, network
from .task_names import SETUP_TASKS, TASK_CONFIG, TASK_HELP, TASK_NETWORK, is_setup_task


def register_builtin_tasks(registry: TaskRegistry) -> None:
    """
    Register the tasks shipped with pylon. Plugins loaded afterwards may override them.
    """
    help.register(registry)
    config.register(registry)
    network.register(registry)


__all__ = [
    "register_builtin_tasks",
    "is_setup_task",
    "SETUP_TASKS",
    "TASK_HELP",
    "TASK_CONFIG",
    "TASK_NETWORK",
]
