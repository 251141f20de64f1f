from __future__ import annotations

import enum
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS, ErrorDescriptor
from pylon.core.params import argument_types as types
from pylon.core.params.argument_types import ArgumentType
from pylon.core.params.param_definitions import ParamDefinition
from pylon.core.params.pylon_params import PYLON_PARAM_DEFINITIONS

if TYPE_CHECKING:
    from pylon.core.runtime_env import Environment, RunSuper

TaskArguments = Dict[str, Any]
TaskAction = Callable[[TaskArguments, "Environment", "RunSuper"], Any]

_PARAM_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class TaskKind(enum.Enum):
    BASE = "base"
    OVERRIDDEN = "overridden"


def _unset_action(task_name: str) -> TaskAction:
    def action(_args: TaskArguments, _env: "Environment", _run_super: "RunSuper") -> Any:
        raise PylonError(ERRORS.TASK_DEFINITIONS.ACTION_NOT_SET, {"task_name": task_name})

    return action


class SimpleTaskDefinition:
    """
    A task as first registered: name, description, params and action.

    Builder methods return `self` so definitions can be chained:

        task("greet", "Says hi").add_param("who").set_action(greet)
    """

    kind = TaskKind.BASE

    def __init__(self, name: str, is_internal: bool = False) -> None:
        self.name = name
        self.is_internal = is_internal
        self.description: Optional[str] = None
        self.action: TaskAction = _unset_action(name)
        self.param_definitions: Dict[str, ParamDefinition] = {}
        self.positional_param_definitions: List[ParamDefinition] = []
        self._positional_param_names: set[str] = set()
        self._has_variadic_param = False
        self._has_optional_positional_param = False

    def set_description(self, description: str) -> "SimpleTaskDefinition":
        self.description = description
        return self

    def set_action(self, action: TaskAction) -> "SimpleTaskDefinition":
        self.action = action
        return self

    def add_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
        is_optional: bool = False,
    ) -> "SimpleTaskDefinition":
        if type is None:
            type = types.STRING
        self._validate_param_name(name)
        self._validate_name_not_used(name)
        self._validate_no_default_value_for_mandatory_param(name, default_value, is_optional)
        self._validate_default_value_type(name, default_value, type)
        self.param_definitions[name] = ParamDefinition(
            name=name,
            description=description,
            default_value=default_value,
            type=type,
            is_optional=is_optional,
        )
        return self

    def add_optional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
    ) -> "SimpleTaskDefinition":
        return self.add_param(name, description, default_value, type, is_optional=True)

    def add_flag(self, name: str, description: str = "") -> "SimpleTaskDefinition":
        self._validate_param_name(name)
        self._validate_name_not_used(name)
        self.param_definitions[name] = ParamDefinition(
            name=name,
            description=description,
            default_value=False,
            type=types.BOOLEAN,
            is_optional=True,
            is_flag=True,
        )
        return self

    def add_positional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
        is_optional: bool = False,
    ) -> "SimpleTaskDefinition":
        if type is None:
            type = types.STRING
        self._validate_not_after_variadic_param(name)
        self._validate_param_name(name)
        self._validate_name_not_used(name)
        self._validate_no_default_value_for_mandatory_param(name, default_value, is_optional)
        self._validate_no_mandatory_params_after_optional_ones(name, is_optional)
        self._validate_default_value_type(name, default_value, type)
        self._add_positional_param_definition(
            ParamDefinition(
                name=name,
                description=description,
                default_value=default_value,
                type=type,
                is_optional=is_optional,
            )
        )
        return self

    def add_optional_positional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
    ) -> "SimpleTaskDefinition":
        return self.add_positional_param(name, description, default_value, type, is_optional=True)

    def add_variadic_positional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
        is_optional: bool = False,
    ) -> "SimpleTaskDefinition":
        if type is None:
            type = types.STRING
        if default_value is not None and not isinstance(default_value, list):
            default_value = [default_value]
        self._validate_not_after_variadic_param(name)
        self._validate_param_name(name)
        self._validate_name_not_used(name)
        self._validate_no_default_value_for_mandatory_param(name, default_value, is_optional)
        self._validate_no_mandatory_params_after_optional_ones(name, is_optional)
        if default_value is not None:
            for element in default_value:
                self._validate_default_value_type(name, element, type)
        self._add_positional_param_definition(
            ParamDefinition(
                name=name,
                description=description,
                default_value=default_value,
                type=type,
                is_optional=is_optional,
                is_variadic=True,
            )
        )
        return self

    def add_optional_variadic_positional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
    ) -> "SimpleTaskDefinition":
        return self.add_variadic_positional_param(name, description, default_value, type, is_optional=True)

    def _add_positional_param_definition(self, definition: ParamDefinition) -> None:
        if definition.is_variadic:
            self._has_variadic_param = True
        if definition.is_optional:
            self._has_optional_positional_param = True
        self._positional_param_names.add(definition.name)
        self.positional_param_definitions.append(definition)

    def _error(self, descriptor: ErrorDescriptor, param_name: str) -> PylonError:
        return PylonError(descriptor, {"param_name": param_name, "task_name": self.name})

    def _validate_not_after_variadic_param(self, name: str) -> None:
        if self._has_variadic_param:
            raise self._error(ERRORS.TASK_DEFINITIONS.PARAM_AFTER_VARIADIC, name)

    def _validate_param_name(self, name: str) -> None:
        if not _PARAM_NAME_RE.match(name):
            raise self._error(ERRORS.TASK_DEFINITIONS.INVALID_PARAM_NAME, name)

    def _validate_name_not_used(self, name: str) -> None:
        if name in self.param_definitions or name in self._positional_param_names:
            raise self._error(ERRORS.TASK_DEFINITIONS.PARAM_ALREADY_DEFINED, name)
        if name in PYLON_PARAM_DEFINITIONS:
            raise self._error(ERRORS.TASK_DEFINITIONS.PARAM_CLASHES_WITH_GLOBAL_PARAM, name)

    def _validate_no_default_value_for_mandatory_param(self, name: str, default_value: Any, is_optional: bool) -> None:
        if default_value is not None and not is_optional:
            raise self._error(ERRORS.TASK_DEFINITIONS.DEFAULT_IN_MANDATORY_PARAM, name)

    def _validate_no_mandatory_params_after_optional_ones(self, name: str, is_optional: bool) -> None:
        if not is_optional and self._has_optional_positional_param:
            raise self._error(ERRORS.TASK_DEFINITIONS.MANDATORY_PARAM_AFTER_OPTIONAL, name)

    def _validate_default_value_type(self, name: str, default_value: Any, type: ArgumentType) -> None:
        if default_value is None:
            return
        try:
            type.validate(name, default_value)
        except PylonError as e:
            raise PylonError(
                ERRORS.TASK_DEFINITIONS.DEFAULT_VALUE_WRONG_TYPE,
                {"param_name": name, "task_name": self.name},
                parent=e,
            ) from e

    def __repr__(self) -> str:
        return "<SimpleTaskDefinition {}>".format(self.name)


class OverriddenTaskDefinition:
    """
    A redefinition of a previously registered task.

    Holds exactly one parent (the definition it replaced, possibly another
    override). Params live on the original definition: optional params and
    flags are forwarded to the parent, anything else is rejected. Description
    and action fall back to the parent's until set.
    """

    kind = TaskKind.OVERRIDDEN

    def __init__(self, parent_task_definition: "TaskDefinition", is_internal: bool = False) -> None:
        self.parent_task_definition = parent_task_definition
        self.is_internal = is_internal
        self._description: Optional[str] = None
        self._action: Optional[TaskAction] = None

    @property
    def name(self) -> str:
        return self.parent_task_definition.name

    @property
    def description(self) -> Optional[str]:
        if self._description is not None:
            return self._description
        return self.parent_task_definition.description

    @property
    def action(self) -> TaskAction:
        if self._action is not None:
            return self._action
        return self.parent_task_definition.action

    @property
    def param_definitions(self) -> Dict[str, ParamDefinition]:
        return self.parent_task_definition.param_definitions

    @property
    def positional_param_definitions(self) -> List[ParamDefinition]:
        return self.parent_task_definition.positional_param_definitions

    def set_description(self, description: str) -> "OverriddenTaskDefinition":
        self._description = description
        return self

    def set_action(self, action: TaskAction) -> "OverriddenTaskDefinition":
        self._action = action
        return self

    def add_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
        is_optional: bool = False,
    ) -> "OverriddenTaskDefinition":
        if not is_optional:
            raise self._no_params_override_error(ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_MANDATORY_PARAMS)
        return self.add_optional_param(name, description, default_value, type)

    def add_optional_param(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        type: Optional[ArgumentType] = None,
    ) -> "OverriddenTaskDefinition":
        self.parent_task_definition.add_optional_param(name, description, default_value, type)
        return self

    def add_flag(self, name: str, description: str = "") -> "OverriddenTaskDefinition":
        self.parent_task_definition.add_flag(name, description)
        return self

    def add_positional_param(self, *args: Any, **kwargs: Any) -> "OverriddenTaskDefinition":
        raise self._no_params_override_error(ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_POSITIONAL_PARAMS)

    def add_optional_positional_param(self, *args: Any, **kwargs: Any) -> "OverriddenTaskDefinition":
        raise self._no_params_override_error(ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_POSITIONAL_PARAMS)

    def add_variadic_positional_param(self, *args: Any, **kwargs: Any) -> "OverriddenTaskDefinition":
        raise self._no_params_override_error(ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_VARIADIC_PARAMS)

    def add_optional_variadic_positional_param(self, *args: Any, **kwargs: Any) -> "OverriddenTaskDefinition":
        raise self._no_params_override_error(ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_VARIADIC_PARAMS)

    def _no_params_override_error(self, descriptor: ErrorDescriptor) -> PylonError:
        return PylonError(descriptor, {"task_name": self.name})

    def __repr__(self) -> str:
        return "<OverriddenTaskDefinition {} -> {!r}>".format(self.name, self.parent_task_definition)


TaskDefinition = Union[SimpleTaskDefinition, OverriddenTaskDefinition]
