from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params.param_definitions import ParamDefinition, cli_flag_name
from pylon.core.params.pylon_params import PYLON_PARAM_DEFINITIONS
from pylon.core.tasks.registry import TaskRegistry
from pylon.core.tasks.task_definitions import TaskDefinition

from .task_names import TASK_HELP

PROGRAM_NAME = "pylon"


def _param_usage(param: ParamDefinition) -> str:
    if param.is_flag:
        usage = cli_flag_name(param.name)
    else:
        usage = "{} <{}>".format(cli_flag_name(param.name), param.type.name.upper() if param.type else "VALUE")
    return "[{}]".format(usage) if param.is_optional else usage


def _positional_usage(param: ParamDefinition) -> str:
    usage = "{}{}".format(param.name, "..." if param.is_variadic else "")
    return "[{}]".format(usage) if param.is_optional else usage


def _describe(param: ParamDefinition) -> str:
    description = param.description or ""
    if param.default_value is not None and not param.is_flag:
        description = "{} (default: {})".format(description, param.default_value).strip()
    return description


def format_global_help(tasks: Mapping[str, TaskDefinition]) -> str:
    lines: List[str] = ["Usage: {} [GLOBAL OPTIONS] <TASK> [TASK OPTIONS]".format(PROGRAM_NAME), "", "GLOBAL OPTIONS:", ""]
    for param in PYLON_PARAM_DEFINITIONS.values():
        lines.append("  {:<24} {}".format(cli_flag_name(param.name), param.description))

    lines.extend(["", "AVAILABLE TASKS:", ""])
    visible = [tasks[name] for name in sorted(tasks) if not tasks[name].is_internal]
    width = max([len(t.name) for t in visible] or [0]) + 2
    for definition in visible:
        lines.append("  {}{}".format(definition.name.ljust(width), definition.description or ""))

    lines.extend(["", "To get help for a specific task run: {} help [task]".format(PROGRAM_NAME)])
    return "\n".join(lines)


def format_task_help(definition: TaskDefinition) -> str:
    params = sorted(definition.param_definitions.values(), key=lambda p: p.name)
    positionals = definition.positional_param_definitions

    usage = " ".join(
        [PROGRAM_NAME, "[GLOBAL OPTIONS]", definition.name]
        + [_param_usage(p) for p in params]
        + [_positional_usage(p) for p in positionals]
    )
    lines: List[str] = [
        "{}: {}".format(PROGRAM_NAME, definition.name),
        "",
        "Usage: {}".format(usage),
    ]
    if params:
        lines.extend(["", "OPTIONS:", ""])
        for p in params:
            lines.append("  {:<24} {}".format(cli_flag_name(p.name), _describe(p)))
    if positionals:
        lines.extend(["", "POSITIONAL ARGUMENTS:", ""])
        for p in positionals:
            lines.append("  {:<24} {}".format(p.name, _describe(p)))
    lines.extend(["", "{}: {}".format(definition.name, definition.description or ""), ""])
    return "\n".join(lines)


async def help_action(args: Dict[str, Any], env: Any, _run_super: Any) -> str:
    task_name = args.get("task")
    if task_name is None:
        text = format_global_help(env.tasks)
    else:
        definition = env.tasks.get(task_name)
        if definition is None:
            raise PylonError(ERRORS.ARGUMENTS.UNRECOGNIZED_TASK, {"task": task_name})
        text = format_task_help(definition)
    print(text)
    return text


def register(registry: TaskRegistry) -> None:
    registry.task(TASK_HELP, "Prints this message", help_action).add_optional_positional_param(
        "task", "An optional task to print more info about"
    )
