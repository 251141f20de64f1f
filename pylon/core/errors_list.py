from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, ItemsView

ERROR_PREFIX = "PL"


@dataclass(frozen=True)
class ErrorRange:
    min: int
    max: int
    title: str


@dataclass(frozen=True)
class ErrorDescriptor:
    """
    Stable description of a framework error.

    `message` is a template with `{name}` placeholders filled from the
    message args given to PylonError.
    """

    number: int
    message: str
    title: str
    description: str = ""
    should_be_reported: bool = False


ERROR_RANGES: Dict[str, ErrorRange] = {
    "GENERAL": ErrorRange(min=0, max=99, title="General errors"),
    "NETWORK": ErrorRange(min=100, max=199, title="Network related errors"),
    "TASK_DEFINITIONS": ErrorRange(min=200, max=299, title="Task definition errors"),
    "ARGUMENTS": ErrorRange(min=300, max=399, title="Arguments related errors"),
    "PLUGINS": ErrorRange(min=800, max=899, title="Plugin system errors"),
    "INTERNAL": ErrorRange(min=900, max=999, title="Internal errors"),
}


class _Group:
    """Attribute access over named entries, iterable in declaration order."""

    def __init__(self, **entries: Any) -> None:
        self._entries = entries
        for name, entry in entries.items():
            setattr(self, name, entry)

    def items(self) -> ItemsView[str, Any]:
        return self._entries.items()


ERRORS: Any = _Group(
    GENERAL=_Group(
        NOT_INSIDE_PROJECT=ErrorDescriptor(
            number=1,
            message="You are not inside a pylon project and task '{task}' requires one.",
            title="You are not inside a pylon project",
            description="Run the command from a directory containing pylon.yml (or one of its subdirectories), or pass --config.",
        ),
        CONTEXT_ALREADY_CREATED=ErrorDescriptor(
            number=3,
            message="PylonContext is already created.",
            title="PylonContext is already created",
            description="The context is a process singleton and can only be created once per run.",
            should_be_reported=True,
        ),
        CONTEXT_NOT_CREATED=ErrorDescriptor(
            number=4,
            message="PylonContext is not created.",
            title="PylonContext is not created",
            description="Tasks and extenders can only be registered while pylon is loading the project config.",
            should_be_reported=True,
        ),
        CONTEXT_ENV_NOT_DEFINED=ErrorDescriptor(
            number=5,
            message="The runtime environment is not available yet.",
            title="Runtime environment not available",
            description="The environment is created after config and plugins are loaded. Access it from a task action.",
        ),
        INVALID_CONFIG=ErrorDescriptor(
            number=6,
            message="Invalid config in {path}: {count} problem(s) found.",
            title="Invalid pylon config",
            description="The config file does not match the expected shape. See the error data for details.",
        ),
        INVALID_CONFIG_FILE=ErrorDescriptor(
            number=7,
            message="Could not read config file {path}: {reason}",
            title="Config file could not be read",
            description="The config file must be a YAML mapping.",
        ),
    ),
    NETWORK=_Group(
        CONFIG_NOT_FOUND=ErrorDescriptor(
            number=100,
            message="Network {network} doesn't exist",
            title="Selected network doesn't exist",
            description="Add the network to the `networks` section of your config or select a different one.",
        ),
    ),
    TASK_DEFINITIONS=_Group(
        PARAM_AFTER_VARIADIC=ErrorDescriptor(
            number=200,
            message="Could not set positional param {param_name} for task {task_name} because there is already a variadic positional param and it has to be the last positional one.",
            title="Could not add positional param",
            description="A variadic positional param must be the last positional param of a task.",
        ),
        PARAM_ALREADY_DEFINED=ErrorDescriptor(
            number=201,
            message="Could not set param {param_name} for task {task_name} because its name is already used.",
            title="Repeated param name",
            description="Param names must be unique within a task.",
        ),
        PARAM_CLASHES_WITH_GLOBAL_PARAM=ErrorDescriptor(
            number=202,
            message="Could not set param {param_name} for task {task_name} because its name is used as a name of a global param.",
            title="Param name clashes with a global param",
            description="Global params such as network or verbose can't be redefined by tasks.",
        ),
        DEFAULT_IN_MANDATORY_PARAM=ErrorDescriptor(
            number=203,
            message="Default value for param {param_name} of task {task_name} shouldn't be set.",
            title="Default value set for a mandatory param",
            description="Only optional params can declare a default value.",
        ),
        MANDATORY_PARAM_AFTER_OPTIONAL=ErrorDescriptor(
            number=204,
            message="Could not set param {param_name} of task {task_name} because it is mandatory and it was added after an optional positional param.",
            title="Mandatory param after an optional one",
            description="Mandatory positional params must come before optional ones.",
        ),
        ACTION_NOT_SET=ErrorDescriptor(
            number=205,
            message="No action set for task {task_name}.",
            title="Task has no action",
            description="Every task needs an action, set it with set_action().",
        ),
        RUNSUPER_NOT_AVAILABLE=ErrorDescriptor(
            number=206,
            message="Tried to call run_super from a non-overridden definition of task {task_name}",
            title="run_super is not available",
            description="run_super only works when a task overrides a previous definition. Check run_super.is_defined before calling it.",
        ),
        DEFAULT_VALUE_WRONG_TYPE=ErrorDescriptor(
            number=207,
            message="Default value for param {param_name} of task {task_name} doesn't match the param type.",
            title="Default value has the wrong type",
            description="The default value of a param must pass its type validation.",
        ),
        INVALID_PARAM_NAME=ErrorDescriptor(
            number=208,
            message="Invalid param name {param_name} in task {task_name}. Param names must be lower snake case.",
            title="Invalid param name",
            description="Param names must match ^[a-z][a-z0-9_]*$.",
        ),
        OVERRIDE_NO_MANDATORY_PARAMS=ErrorDescriptor(
            number=210,
            message="Redefinition of task {task_name} failed. Unsupported operation adding mandatory (non optional) param definitions in an overridden task.",
            title="Attempted to add mandatory params to an overridden task",
            description="Overrides can only add optional params and flags.",
        ),
        OVERRIDE_NO_POSITIONAL_PARAMS=ErrorDescriptor(
            number=211,
            message="Redefinition of task {task_name} failed. Unsupported operation adding positional param definitions in an overridden task.",
            title="Attempted to add positional params to an overridden task",
            description="Overrides can only add optional params and flags.",
        ),
        OVERRIDE_NO_VARIADIC_PARAMS=ErrorDescriptor(
            number=212,
            message="Redefinition of task {task_name} failed. Unsupported operation adding variadic param definitions in an overridden task.",
            title="Attempted to add variadic params to an overridden task",
            description="Overrides can only add optional params and flags.",
        ),
        OVERRIDDEN_TASK_NOT_FOUND=ErrorDescriptor(
            number=213,
            message="Cannot override task {task_name} because it is not defined.",
            title="Overridden task not found",
            description="A task must be registered before it can be overridden.",
        ),
    ),
    ARGUMENTS=_Group(
        INVALID_ENV_VAR_VALUE=ErrorDescriptor(
            number=300,
            message="Invalid environment variable {var_name}'s value: {value}",
            title="Invalid environment variable value",
            description="The value of a PYLON_* environment variable doesn't match the type of its param.",
        ),
        INVALID_VALUE_FOR_TYPE=ErrorDescriptor(
            number=301,
            message="Invalid value {value} for argument {name} of type {type}",
            title="Invalid argument type",
            description="The value given to a param doesn't match the param type.",
        ),
        INVALID_INPUT_FILE=ErrorDescriptor(
            number=302,
            message="Invalid argument {name}: File {value} doesn't exist or is not a readable file.",
            title="Invalid file argument",
            description="An input file param points to a missing or unreadable file.",
        ),
        UNRECOGNIZED_TASK=ErrorDescriptor(
            number=303,
            message="Unrecognized task {task}",
            title="Unrecognized task",
            description="Run the help task to list the available tasks.",
        ),
        UNRECOGNIZED_COMMAND_LINE_ARG=ErrorDescriptor(
            number=304,
            message="Unrecognised command line argument {argument}.",
            title="Unrecognized command line argument",
            description="The argument is not a global param nor a param of the task being run.",
        ),
        MISSING_TASK_ARGUMENT=ErrorDescriptor(
            number=306,
            message="The '{param}' parameter expects a value, but none was passed.",
            title="Missing task argument",
            description="A mandatory param was not given a value.",
        ),
        MISSING_POSITIONAL_ARG=ErrorDescriptor(
            number=307,
            message="Missing positional argument {param}",
            title="Missing positional argument",
            description="A mandatory positional param was not given on the command line.",
        ),
        UNRECOGNIZED_POSITIONAL_ARG=ErrorDescriptor(
            number=308,
            message="Unrecognized positional argument {argument}",
            title="Unrecognized positional argument",
            description="More positional arguments were given than the task declares.",
        ),
        INVALID_JSON_ARGUMENT=ErrorDescriptor(
            number=311,
            message="Error parsing JSON value for argument {param}: {error}",
            title="Invalid JSON parameter",
            description="The value of a JSON param could not be decoded.",
        ),
    ),
    PLUGINS=_Group(
        PLUGIN_NOT_FOUND=ErrorDescriptor(
            number=800,
            message="Plugin {plugin} could not be found.",
            title="Plugin not found",
            description="Plugins are importable module names or .py files relative to the config file.",
        ),
        PLUGIN_LOAD_FAILED=ErrorDescriptor(
            number=801,
            message="Plugin {plugin} failed to load: {error}",
            title="Plugin failed to load",
            description="Importing the plugin module raised an exception.",
        ),
    ),
    INTERNAL=_Group(
        TEMPLATE_INVALID_VARIABLE_NAME=ErrorDescriptor(
            number=900,
            message="Variable names can only include ascii letters, digits and underscores. Invalid: {variable}",
            title="Invalid error message template",
            description="An error message template was given an invalid variable name.",
            should_be_reported=True,
        ),
    ),
)
