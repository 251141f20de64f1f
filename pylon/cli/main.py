from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
import traceback
from typing import List, Optional, Tuple

from pylon import __version__
from pylon.builtin_tasks.task_names import TASK_HELP, is_setup_task
from pylon.context import PylonContext, create_context, delete_context
from pylon.core.config.config_loading import load_config_and_tasks
from pylon.core.errors import PylonError, PylonPluginError
from pylon.core.errors_list import ERRORS
from pylon.core.params.env_variables import get_env_runtime_args
from pylon.core.params.pylon_params import PYLON_PARAM_DEFINITIONS, PYLON_SHORT_PARAM_SUBSTITUTIONS
from pylon.core.runtime_args import RuntimeArgs
from pylon.core.runtime_env import Environment
from pylon.core.tasks.task_definitions import TaskArguments

from .arguments_parser import ArgumentsParser
from .env_file import load_dotenv

logger = logging.getLogger(__name__)

STACK_TRACES_HINT = "For more info run pylon with --show-stack-traces or add --help to display the task's help."


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    pylon_logger = logging.getLogger("pylon")
    if not pylon_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        pylon_logger.addHandler(handler)
    pylon_logger.setLevel(logging.DEBUG)


def _format_cli_error(e: PylonError) -> str:
    """
    Error line plus the structured `data` payload when present
    (e.g. the list of config schema errors).
    """
    if isinstance(e.data, dict) and e.data:
        return "Error {}\n{}".format(e, json.dumps(e.data, ensure_ascii=False, indent=2, default=str))
    return "Error {}".format(e)


def load_environment_and_args(
    ctx: PylonContext,
    runtime_args: RuntimeArgs,
    task_name: Optional[str],
    unparsed_cli_args: List[str],
    parser: Optional[ArgumentsParser] = None,
) -> Tuple[Environment, str, TaskArguments]:
    """
    Load config and plugins, build the environment and parse the task's
    arguments.

    `--help` (or no task at all) runs the help task, with the requested task
    name as its argument.
    """
    if parser is None:
        parser = ArgumentsParser()

    config = load_config_and_tasks(runtime_args, ctx)

    # Unknown tasks are reported before the project and network checks.
    task_definition = ctx.tasks.get(task_name if task_name is not None else TASK_HELP)

    if runtime_args.help or task_name is None:
        task_arguments: TaskArguments = {"task": task_name} if task_name is not None else {}
        task_name = TASK_HELP
        parse_task_args = False
    else:
        task_arguments = {}
        parse_task_args = True

    setup_task = is_setup_task(task_name)
    if not setup_task and config.get("paths") is None:
        raise PylonError(ERRORS.GENERAL.NOT_INSIDE_PROJECT, {"task": task_name})

    env = Environment(
        config,
        runtime_args,
        ctx.tasks.get_task_definitions(),
        ctx.environment_extenders,
        network_required=not setup_task,
    )
    ctx.set_environment(env)

    if parse_task_args:
        task_arguments = parser.parse_task_arguments(task_definition, unparsed_cli_args)

    return env, task_name, task_arguments


def _print_error(e: BaseException, show_stack_traces: bool) -> None:
    if isinstance(e, PylonError):
        print(_format_cli_error(e), file=sys.stderr)
    elif isinstance(e, PylonPluginError):
        print("Error in plugin {}: {}".format(e.plugin_name, e.message), file=sys.stderr)
    else:
        print("An unexpected error occurred: {}".format(e), file=sys.stderr)
        show_stack_traces = True

    print("", file=sys.stderr)
    if show_stack_traces:
        traceback.print_exception(type(e), e, e.__traceback__, file=sys.stderr)
    else:
        print(STACK_TRACES_HINT, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = list(sys.argv[1:] if argv is None else argv)

    # Known before parsing, so parse errors can honour it too.
    show_stack_traces = "--show-stack-traces" in args
    created_context = False
    try:
        ctx = create_context()
        created_context = True

        parser = ArgumentsParser()
        env_args = get_env_runtime_args(PYLON_PARAM_DEFINITIONS, os.environ)
        runtime_args, task_name, unparsed = parser.parse_runtime_args(
            PYLON_PARAM_DEFINITIONS,
            PYLON_SHORT_PARAM_SUBSTITUTIONS,
            env_args,
            args,
        )
        show_stack_traces = bool(runtime_args.show_stack_traces)
        _setup_logging(bool(runtime_args.verbose))

        if runtime_args.version:
            print(__version__)
            return 0

        env, task_name, task_arguments = load_environment_and_args(ctx, runtime_args, task_name, unparsed, parser)
        logger.debug("Running %s with %s", task_name, task_arguments)
        asyncio.run(env.run(task_name, task_arguments))
        return 0
    except Exception as e:  # noqa: BLE001
        _print_error(e, show_stack_traces)
        return 1
    finally:
        if created_context:
            delete_context()


if __name__ == "__main__":
    raise SystemExit(main())
