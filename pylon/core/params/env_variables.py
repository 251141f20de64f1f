from __future__ import annotations

from typing import Any, Dict, Mapping

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS

from .param_definitions import ParamDefinition

ENV_PREFIX = "PYLON_"


def param_name_to_env_variable(param_name: str) -> str:
    # show_stack_traces -> PYLON_SHOW_STACK_TRACES
    return ENV_PREFIX + param_name.upper()


def get_env_runtime_args(param_definitions: Mapping[str, ParamDefinition], environ: Mapping[str, str]) -> Dict[str, Any]:
    """
    Read global params from PYLON_* environment variables.

    Params without a variable get their default value. Values are parsed
    with the param type, so they have the same shape as CLI values.
    """
    out: Dict[str, Any] = {}
    for name, definition in param_definitions.items():
        var_name = param_name_to_env_variable(name)
        raw = environ.get(var_name)
        if raw is None:
            out[name] = definition.default_value
            continue
        if definition.type is None:
            out[name] = raw
            continue
        try:
            out[name] = definition.type.parse(name, raw)
        except PylonError as e:
            raise PylonError(ERRORS.ARGUMENTS.INVALID_ENV_VAR_VALUE, {"var_name": var_name, "value": raw}, parent=e) from e
    return out
