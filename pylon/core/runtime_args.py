from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RuntimeArgs:
    """
    Global flags of a pylon invocation, parsed upstream and read-only here.

    Values come from the command line first, then PYLON_* environment
    variables, then the param defaults.
    """

    network: Optional[str] = None
    show_stack_traces: bool = False
    version: bool = False
    help: bool = False
    verbose: bool = False
    config: Optional[str] = None
