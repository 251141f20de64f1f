from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import PylonError
from .errors_list import ERRORS

if TYPE_CHECKING:
    from .runtime_env import Environment, RunSuper


@dataclass(frozen=True)
class ExecutionFrame:
    """The task currently executing, with its environment and run_super."""

    environment: "Environment"
    run_super: "RunSuper"
    task_name: str


_CURRENT_FRAME: ContextVar[Optional[ExecutionFrame]] = ContextVar("pylon_execution_frame", default=None)


def push_frame(frame: ExecutionFrame) -> Token:
    return _CURRENT_FRAME.set(frame)


def pop_frame(token: Token) -> None:
    _CURRENT_FRAME.reset(token)


def current_frame() -> Optional[ExecutionFrame]:
    return _CURRENT_FRAME.get()


def current_environment() -> "Environment":
    frame = _CURRENT_FRAME.get()
    if frame is None:
        raise PylonError(ERRORS.GENERAL.CONTEXT_ENV_NOT_DEFINED)
    return frame.environment
