from __future__ import annotations

import argparse
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params.param_definitions import ParamDefinition, cli_flag_name
from pylon.core.runtime_args import RuntimeArgs
from pylon.core.tasks.task_definitions import TaskArguments, TaskDefinition

_OPTION_RE = re.compile(r"^(--[A-Za-z]|-[A-Za-z])")


def _is_option(token: str) -> bool:
    # "-5" is a value, not an option.
    return bool(_OPTION_RE.match(token))


def _new_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(add_help=False, allow_abbrev=False, exit_on_error=False)


def _add_param(parser: argparse.ArgumentParser, param: ParamDefinition, short_names: List[str]) -> None:
    names = [cli_flag_name(param.name), *("-" + s for s in short_names)]
    if param.is_flag:
        parser.add_argument(*names, dest=param.name, action="store_true", default=None)
    else:
        parser.add_argument(*names, dest=param.name, default=None)


class ArgumentsParser:
    """
    Splits a command line into global params, the task name and the task's
    own arguments, and parses values with each param's type.
    """

    def parse_runtime_args(
        self,
        param_definitions: Mapping[str, ParamDefinition],
        short_param_substitutions: Mapping[str, str],
        env_variable_arguments: Mapping[str, Any],
        argv: List[str],
    ) -> Tuple[RuntimeArgs, Optional[str], List[str]]:
        """
        Returns (runtime_args, task_name, unparsed task arguments).

        Global params may appear anywhere on the command line. CLI values win
        over environment values, which win over param defaults.
        """
        parser = _new_parser()
        shorts_by_param: Dict[str, List[str]] = {}
        for short, name in short_param_substitutions.items():
            shorts_by_param.setdefault(name, []).append(short)
        for param in param_definitions.values():
            _add_param(parser, param, shorts_by_param.get(param.name, []))

        namespace, rest = self._parse_known(parser, argv)

        values: Dict[str, Any] = {}
        for name, param in param_definitions.items():
            raw = getattr(namespace, name)
            if raw is None:
                values[name] = env_variable_arguments.get(name, param.default_value)
            elif param.is_flag or param.type is None:
                values[name] = raw
            else:
                values[name] = param.type.parse(name, raw)

        task_name: Optional[str] = None
        unparsed: List[str] = []
        for token in rest:
            if task_name is None and not _is_option(token):
                task_name = token
                continue
            unparsed.append(token)

        return RuntimeArgs(**values), task_name, unparsed

    def parse_task_arguments(self, task_definition: TaskDefinition, argv: List[str]) -> TaskArguments:
        parser = _new_parser()
        for param in task_definition.param_definitions.values():
            _add_param(parser, param, [])

        namespace, rest = self._parse_known(parser, argv)

        arguments: TaskArguments = {}
        for name, param in task_definition.param_definitions.items():
            raw = getattr(namespace, name)
            if raw is None:
                continue
            if param.is_flag or param.type is None:
                arguments[name] = raw
            else:
                arguments[name] = param.type.parse(name, raw)

        for token in rest:
            if _is_option(token):
                raise PylonError(ERRORS.ARGUMENTS.UNRECOGNIZED_COMMAND_LINE_ARG, {"argument": token})

        arguments.update(self._parse_positional_arguments(task_definition.positional_param_definitions, rest))
        return arguments

    def _parse_positional_arguments(self, definitions: List[ParamDefinition], values: List[str]) -> TaskArguments:
        arguments: TaskArguments = {}
        remaining = list(values)
        for definition in definitions:
            if definition.is_variadic:
                if not remaining:
                    if not definition.is_optional:
                        raise PylonError(ERRORS.ARGUMENTS.MISSING_POSITIONAL_ARG, {"param": definition.name})
                    continue
                arguments[definition.name] = [self._parse_value(definition, v) for v in remaining]
                remaining = []
                break
            if not remaining:
                if not definition.is_optional:
                    raise PylonError(ERRORS.ARGUMENTS.MISSING_POSITIONAL_ARG, {"param": definition.name})
                continue
            arguments[definition.name] = self._parse_value(definition, remaining.pop(0))

        if remaining:
            raise PylonError(ERRORS.ARGUMENTS.UNRECOGNIZED_POSITIONAL_ARG, {"argument": remaining[0]})
        return arguments

    @staticmethod
    def _parse_value(definition: ParamDefinition, raw: str) -> Any:
        if definition.type is None:
            return raw
        return definition.type.parse(definition.name, raw)

    @staticmethod
    def _parse_known(parser: argparse.ArgumentParser, argv: List[str]) -> Tuple[argparse.Namespace, List[str]]:
        try:
            return parser.parse_known_args(argv)
        except argparse.ArgumentError as e:
            raise PylonError(ERRORS.ARGUMENTS.MISSING_TASK_ARGUMENT, {"param": e.argument_name}, parent=e) from e
