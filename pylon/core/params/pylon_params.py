from __future__ import annotations

from typing import Dict

from . import argument_types as types
from .param_definitions import ParamDefinition

PYLON_PARAM_DEFINITIONS: Dict[str, ParamDefinition] = {
    "network": ParamDefinition(
        name="network",
        description="The network to connect to.",
        type=types.STRING,
        is_optional=True,
    ),
    "show_stack_traces": ParamDefinition(
        name="show_stack_traces",
        description="Show stack traces.",
        default_value=False,
        type=types.BOOLEAN,
        is_optional=True,
        is_flag=True,
    ),
    "version": ParamDefinition(
        name="version",
        description="Shows pylon's version.",
        default_value=False,
        type=types.BOOLEAN,
        is_optional=True,
        is_flag=True,
    ),
    "help": ParamDefinition(
        name="help",
        description="Shows this message, or a task's help if its name is provided.",
        default_value=False,
        type=types.BOOLEAN,
        is_optional=True,
        is_flag=True,
    ),
    "verbose": ParamDefinition(
        name="verbose",
        description="Enables pylon verbose logging.",
        default_value=False,
        type=types.BOOLEAN,
        is_optional=True,
        is_flag=True,
    ),
    "config": ParamDefinition(
        name="config",
        description="A pylon config file.",
        type=types.INPUT_FILE,
        is_optional=True,
    ),
}

PYLON_SHORT_PARAM_SUBSTITUTIONS: Dict[str, str] = {
    "h": "help",
}
