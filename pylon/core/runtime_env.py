from __future__ import annotations

import builtins
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Sequence

from .config.config_resolution import ResolvedConfig
from .context_frame import ExecutionFrame, pop_frame, push_frame
from .errors import PylonError
from .errors_list import ERRORS
from .runtime_args import RuntimeArgs
from .tasks.arguments import resolve_task_arguments
from .tasks.task_definitions import TaskArguments, TaskDefinition, TaskKind

logger = logging.getLogger(__name__)

_MISSING = object()

EnvironmentExtender = Callable[["Environment"], Any]


@dataclass(frozen=True)
class Network:
    name: Optional[str]
    config: Optional[Dict[str, Any]]


class RunSuper:
    """
    Callable handed to a task action to delegate to the definition it overrides.

    `is_defined` tells whether there is anything to delegate to; calling an
    undefined run_super always raises. Without arguments the parent runs with
    the same arguments as the caller.
    """

    def __init__(
        self,
        task_name: str,
        task_arguments: TaskArguments,
        runner: Optional[Callable[[TaskArguments], Awaitable[Any]]] = None,
    ) -> None:
        self.task_name = task_name
        self.is_defined = runner is not None
        self._task_arguments = task_arguments
        self._runner = runner

    def __call__(self, task_arguments: Optional[TaskArguments] = None) -> Awaitable[Any]:
        if self._runner is None:
            raise PylonError(ERRORS.TASK_DEFINITIONS.RUNSUPER_NOT_AVAILABLE, {"task_name": self.task_name})
        if task_arguments is None:
            task_arguments = self._task_arguments
        return self._runner(task_arguments)


class Environment:
    """
    The pylon runtime environment: resolved config, runtime args, tasks and
    the selected network, plus whatever extenders attach to it.

    One environment is created per process run, after the config and all
    plugins are loaded. Extenders run in registration order at the end of
    construction.
    """

    _BLACKLISTED_PROPERTIES: Sequence[str] = ("inject_to_global", "_run_task_definition")

    def __init__(
        self,
        config: ResolvedConfig,
        runtime_args: RuntimeArgs,
        tasks: Mapping[str, TaskDefinition],
        extenders: Iterable[EnvironmentExtender] = (),
        network_required: bool = True,
    ) -> None:
        logger.debug("Creating runtime environment")

        network_name = runtime_args.network or config.get("default_network")
        networks = config.get("networks") or {}
        network_config = networks.get(network_name) if network_name is not None else None
        # Setup tasks (e.g. help) run without a configured network.
        if network_config is None and network_required:
            raise PylonError(ERRORS.NETWORK.CONFIG_NOT_FOUND, {"network": network_name})

        self.config = config
        self.runtime_args = runtime_args
        self.tasks = tasks
        self.network = Network(name=network_name, config=network_config)
        self._extenders = list(extenders)

        for extender in self._extenders:
            extender(self)

    async def run(self, name: str, task_arguments: Optional[TaskArguments] = None) -> Any:
        """
        Run the task `name` with the given arguments.

        Raises PL303 for unknown tasks, PL306/PL301 for missing or invalid
        arguments. Returns whatever the task action returns.
        """
        task_definition = self.tasks.get(name)
        logger.debug("Running task %s", name)
        if task_definition is None:
            raise PylonError(ERRORS.ARGUMENTS.UNRECOGNIZED_TASK, {"task": name})

        resolved_arguments = resolve_task_arguments(task_definition, dict(task_arguments or {}))
        return await self._run_task_definition(task_definition, resolved_arguments)

    def inject_to_global(self, blacklist: Optional[Iterable[str]] = None) -> Callable[[], None]:
        """
        Expose the environment's public attributes and `run` as builtins, for
        scripts written against the implicit globals.

        Returns a function that puts back the previous values, deleting names
        that did not exist before.
        """
        skipped = set(self._BLACKLISTED_PROPERTIES if blacklist is None else blacklist)
        injected = {k: v for k, v in self._injectable_items().items() if k not in skipped}

        previous_values: Dict[str, Any] = {}
        for key, value in injected.items():
            previous_values[key] = getattr(builtins, key, _MISSING)
            setattr(builtins, key, value)

        def restore() -> None:
            for key, value in previous_values.items():
                _restore_builtin(key, value)

        return restore

    def _injectable_items(self) -> Dict[str, Any]:
        items = {k: v for k, v in vars(self).items() if not k.startswith("_")}
        items["run"] = self.run
        return items

    async def _run_task_definition(self, task_definition: TaskDefinition, task_arguments: TaskArguments) -> Any:
        if task_definition.kind is TaskKind.OVERRIDDEN:
            parent = task_definition.parent_task_definition

            async def run_parent(arguments: TaskArguments) -> Any:
                logger.debug("Running %s's super", task_definition.name)
                return await self._run_task_definition(parent, arguments)

            run_super = RunSuper(task_definition.name, task_arguments, run_parent)
        else:
            run_super = RunSuper(task_definition.name, task_arguments)

        previous_run_super = getattr(builtins, "run_super", _MISSING)
        setattr(builtins, "run_super", run_super)
        uninject_from_global = self.inject_to_global()
        token = push_frame(ExecutionFrame(environment=self, run_super=run_super, task_name=task_definition.name))

        try:
            result = task_definition.action(task_arguments, self, run_super)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            pop_frame(token)
            uninject_from_global()
            _restore_builtin("run_super", previous_run_super)


def _restore_builtin(key: str, value: Any) -> None:
    if value is _MISSING:
        if hasattr(builtins, key):
            delattr(builtins, key)
    else:
        setattr(builtins, key, value)
