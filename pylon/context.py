from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

from pylon.core.config.config_resolution import ConfigExtender
from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.tasks.registry import TaskRegistry

if TYPE_CHECKING:
    from pylon.core.runtime_env import Environment

EnvironmentExtender = Callable[["Environment"], Any]


class PylonContext:
    """
    Everything plugins register while a project is loaded: tasks, extenders
    and the plugins already imported. One per process run.
    """

    def __init__(self) -> None:
        self.tasks = TaskRegistry()
        self.environment_extenders: List[EnvironmentExtender] = []
        self.config_extenders: List[ConfigExtender] = []
        self.loaded_plugins: List[str] = []
        self._environment: Optional["Environment"] = None

    def set_environment(self, env: "Environment") -> None:
        self._environment = env

    def get_environment(self) -> "Environment":
        if self._environment is None:
            raise PylonError(ERRORS.GENERAL.CONTEXT_ENV_NOT_DEFINED)
        return self._environment


_CONTEXT: Optional[PylonContext] = None


def create_context() -> PylonContext:
    global _CONTEXT
    if _CONTEXT is not None:
        raise PylonError(ERRORS.GENERAL.CONTEXT_ALREADY_CREATED)
    _CONTEXT = PylonContext()
    return _CONTEXT


def get_context() -> PylonContext:
    if _CONTEXT is None:
        raise PylonError(ERRORS.GENERAL.CONTEXT_NOT_CREATED)
    return _CONTEXT


def is_created() -> bool:
    return _CONTEXT is not None


def delete_context() -> None:
    global _CONTEXT
    if _CONTEXT is None:
        raise PylonError(ERRORS.GENERAL.CONTEXT_NOT_CREATED)
    _CONTEXT = None
