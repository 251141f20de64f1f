from __future__ import annotations

import copy
from typing import Any, Dict, List

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params.param_definitions import ParamDefinition

from .task_definitions import TaskArguments, TaskDefinition


def resolve_task_arguments(task_definition: TaskDefinition, task_arguments: TaskArguments) -> TaskArguments:
    """
    Check arguments against the task's params and fill in defaults.

    Raises the first PylonError found when:
    - a mandatory argument is missing
    - an argument value doesn't match its param type

    Arguments the task doesn't declare are kept as given.
    """
    all_param_definitions: List[ParamDefinition] = [
        *task_definition.param_definitions.values(),
        *task_definition.positional_param_definitions,
    ]

    errors: List[PylonError] = []
    values: Dict[str, Any] = {}
    for param_definition in all_param_definitions:
        try:
            value = resolve_argument(param_definition, task_arguments.get(param_definition.name))
        except PylonError as e:
            e.data = {**(e.data or {}), "task": task_definition.name}
            errors.append(e)
            continue
        if value is not None:
            values[param_definition.name] = value

    # TODO: report every collected error at once once the CLI can print more than one.
    if errors:
        raise errors[0]

    return {**task_arguments, **values}


def resolve_argument(param_definition: ParamDefinition, argument_value: Any) -> Any:
    if argument_value is None:
        if param_definition.is_optional:
            # Defaults are shared by every run of the task.
            return copy.deepcopy(param_definition.default_value)
        raise PylonError(ERRORS.ARGUMENTS.MISSING_TASK_ARGUMENT, {"param": param_definition.name})

    check_type_validation(param_definition, argument_value)
    return argument_value


def check_type_validation(param_definition: ParamDefinition, argument_value: Any) -> None:
    param_type = param_definition.type
    if param_type is None:
        return

    # A variadic argument is a list; each element must pass on its own.
    if param_definition.is_variadic:
        if not isinstance(argument_value, (list, tuple)):
            raise PylonError(
                ERRORS.ARGUMENTS.INVALID_VALUE_FOR_TYPE,
                {"value": argument_value, "name": param_definition.name, "type": "list of {}".format(param_type.name)},
            )
        for value in argument_value:
            param_type.validate(param_definition.name, value)
        return

    param_type.validate(param_definition.name, argument_value)
