from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .argument_types import ArgumentType


@dataclass(frozen=True)
class ParamDefinition:
    """
    Declared parameter of a task (or a global pylon param).

    Invariants:
    - a mandatory param has no default value
    - a variadic param resolves to a list; `type` validates each element
    """

    name: str
    description: str = ""
    default_value: Any = None
    type: Optional[ArgumentType] = None
    is_optional: bool = False
    is_flag: bool = False
    is_variadic: bool = False


def cli_flag_name(param_name: str) -> str:
    # dry_run -> --dry-run
    return "--" + param_name.replace("_", "-")
