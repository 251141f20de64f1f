"""
Registration API for plugins and project task files.

    from pylon.config_env import task, extend_config

    task("hello", "Prints a greeting").add_optional_param("who", default_value="world").set_action(hello)

Everything here writes into the current PylonContext, so it can only be used
while pylon loads the project.
"""
from __future__ import annotations

from typing import Optional, Union

from pylon.context import EnvironmentExtender, get_context
from pylon.core.config.config_resolution import ConfigExtender
from pylon.core.tasks.task_definitions import OverriddenTaskDefinition, TaskAction, TaskDefinition


def task(
    name: str,
    description_or_action: Union[str, TaskAction, None] = None,
    action: Optional[TaskAction] = None,
) -> TaskDefinition:
    return get_context().tasks.task(name, description_or_action, action)


def internal_task(
    name: str,
    description_or_action: Union[str, TaskAction, None] = None,
    action: Optional[TaskAction] = None,
) -> TaskDefinition:
    return get_context().tasks.internal_task(name, description_or_action, action)


def override_task(name: str, action: Optional[TaskAction] = None) -> OverriddenTaskDefinition:
    return get_context().tasks.override_task(name, action)


def extend_environment(extender: EnvironmentExtender) -> EnvironmentExtender:
    """
    Run `extender(env)` once the runtime environment is created. Usable as a decorator.
    """
    get_context().environment_extenders.append(extender)
    return extender


def extend_config(extender: ConfigExtender) -> ConfigExtender:
    """
    Run `extender(resolved_config, user_config)` after the config is resolved. Usable as a decorator.
    """
    get_context().config_extenders.append(extender)
    return extender
