from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS

from .task_definitions import OverriddenTaskDefinition, SimpleTaskDefinition, TaskAction, TaskDefinition

logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    Registry of task definitions by name.

    Each entry is the head of an override chain: registering a name that is
    already taken wraps the previous definition instead of dropping it, so
    the new action can delegate to it through run_super.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, TaskDefinition] = {}

    def register(self, name: str, definition: TaskDefinition) -> None:
        self._tasks[name] = definition

    def override(self, name: str, action: Optional[TaskAction] = None, is_internal: bool = False) -> OverriddenTaskDefinition:
        parent = self._tasks.get(name)
        if parent is None:
            raise PylonError(ERRORS.TASK_DEFINITIONS.OVERRIDDEN_TASK_NOT_FOUND, {"task_name": name})
        definition = OverriddenTaskDefinition(parent, is_internal=is_internal)
        if action is not None:
            definition.set_action(action)
        self._tasks[name] = definition
        logger.debug("Task %s overridden", name)
        return definition

    def get(self, name: str) -> TaskDefinition:
        definition = self._tasks.get(name)
        if definition is None:
            raise PylonError(ERRORS.ARGUMENTS.UNRECOGNIZED_TASK, {"task": name})
        return definition

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def task(
        self,
        name: str,
        description_or_action: Union[str, TaskAction, None] = None,
        action: Optional[TaskAction] = None,
    ) -> TaskDefinition:
        """
        Define a task, or override it when the name is already registered.
        """
        return self._add_task(name, description_or_action, action, is_internal=False)

    def internal_task(
        self,
        name: str,
        description_or_action: Union[str, TaskAction, None] = None,
        action: Optional[TaskAction] = None,
    ) -> TaskDefinition:
        """
        Like task(), but hidden from the task listing in help.
        """
        return self._add_task(name, description_or_action, action, is_internal=True)

    def override_task(self, name: str, action: Optional[TaskAction] = None) -> OverriddenTaskDefinition:
        parent = self._tasks.get(name)
        return self.override(name, action, is_internal=bool(parent is not None and parent.is_internal))

    def _add_task(
        self,
        name: str,
        description_or_action: Union[str, TaskAction, None],
        action: Optional[TaskAction],
        is_internal: bool,
    ) -> TaskDefinition:
        description: Optional[str] = None
        if callable(description_or_action):
            action = description_or_action
        else:
            description = description_or_action

        definition: TaskDefinition
        if name in self._tasks:
            definition = self.override(name, is_internal=is_internal)
        else:
            definition = SimpleTaskDefinition(name, is_internal=is_internal)
            self.register(name, definition)
            logger.debug("Task %s registered", name)

        if description is not None:
            definition.set_description(description)
        if action is not None:
            definition.set_action(action)
        return definition

    def get_task_definitions(self) -> Dict[str, TaskDefinition]:
        return dict(self._tasks)

    def list_tasks(self, include_internal: bool = False) -> List[TaskDefinition]:
        return [
            self._tasks[k]
            for k in sorted(self._tasks.keys())
            if include_internal or not self._tasks[k].is_internal
        ]
