import builtins
import unittest

from pylon.core.context_frame import current_environment, current_frame
from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params import argument_types as types
from pylon.core.runtime_args import RuntimeArgs
from pylon.core.runtime_env import Environment
from pylon.core.tasks.registry import TaskRegistry

CONFIG = {
    "default_network": "localnet",
    "networks": {"localnet": {"url": "http://127.0.0.1:26657"}, "dev": {"url": "http://dev"}},
    "paths": None,
}

INJECTED_NAMES = ("config", "runtime_args", "tasks", "network", "run", "run_super")


def _make_env(registry: TaskRegistry, **kwargs) -> Environment:
    return Environment(CONFIG, kwargs.pop("runtime_args", RuntimeArgs()), registry.get_task_definitions(), **kwargs)


class TestEnvironmentCreation(unittest.TestCase):
    def test_network_selection(self) -> None:
        env = _make_env(TaskRegistry())
        self.assertEqual(env.network.name, "localnet")
        self.assertEqual(env.network.config, {"url": "http://127.0.0.1:26657"})

        env = _make_env(TaskRegistry(), runtime_args=RuntimeArgs(network="dev"))
        self.assertEqual(env.network.name, "dev")

    def test_unknown_network(self) -> None:
        with self.assertRaises(PylonError) as cm:
            _make_env(TaskRegistry(), runtime_args=RuntimeArgs(network="missing"))
        self.assertTrue(cm.exception.is_error(ERRORS.NETWORK.CONFIG_NOT_FOUND))

        env = _make_env(TaskRegistry(), runtime_args=RuntimeArgs(network="missing"), network_required=False)
        self.assertEqual(env.network.name, "missing")
        self.assertIsNone(env.network.config)

    def test_extenders_run_in_order(self) -> None:
        calls = []

        def first(env):
            calls.append("first")
            env.value = 1

        def second(env):
            calls.append("second")
            env.value += 1

        env = _make_env(TaskRegistry(), extenders=[first, second])
        self.assertEqual(calls, ["first", "second"])
        self.assertEqual(env.value, 2)


class TestEnvironmentRun(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        for name in INJECTED_NAMES:
            self.assertFalse(hasattr(builtins, name), name)

    def tearDown(self) -> None:
        for name in INJECTED_NAMES:
            self.assertFalse(hasattr(builtins, name), name)

    async def test_sync_and_async_actions(self) -> None:
        async def async_action(args, env, run_super):
            return args["x"] * 2

        r = TaskRegistry()
        r.task("sync", lambda args, env, run_super: "done")
        r.task("async", async_action).add_optional_param("x", default_value=2, type=types.INT)
        env = _make_env(r)
        self.assertEqual(await env.run("sync"), "done")
        self.assertEqual(await env.run("async"), 4)
        self.assertEqual(await env.run("async", {"x": 5}), 10)

    async def test_unknown_task_does_not_inject(self) -> None:
        env = _make_env(TaskRegistry())
        with self.assertRaises(PylonError) as cm:
            await env.run("nope")
        self.assertTrue(cm.exception.is_error(ERRORS.ARGUMENTS.UNRECOGNIZED_TASK))

    async def test_arguments_are_resolved(self) -> None:
        seen = {}

        def action(args, env, run_super):
            seen.update(args)

        r = TaskRegistry()
        r.task("t", action).add_param("who").add_optional_param("greeting", default_value="hi")
        env = _make_env(r)
        await env.run("t", {"who": "bob"})
        self.assertEqual(seen, {"who": "bob", "greeting": "hi"})

        with self.assertRaises(PylonError) as cm:
            await env.run("t")
        self.assertTrue(cm.exception.is_error(ERRORS.ARGUMENTS.MISSING_TASK_ARGUMENT))

    async def test_overrides_run_last_registered_first(self) -> None:
        order = []

        def base(args, env, run_super):
            order.append("base")
            return "base"

        async def first_override(args, env, run_super):
            order.append("first")
            return (await run_super()) + "1"

        async def second_override(args, env, run_super):
            order.append("second")
            return (await run_super()) + "2"

        r = TaskRegistry()
        r.task("build", base)
        r.task("build", first_override)
        r.override_task("build", second_override)
        env = _make_env(r)

        self.assertEqual(await env.run("build"), "base12")
        self.assertEqual(order, ["second", "first", "base"])

    async def test_list_defaults_are_fresh_on_every_run(self) -> None:
        def action(args, env, run_super):
            args["files"].append("mutated")
            return args["files"]

        r = TaskRegistry()
        r.task("t", action).add_optional_variadic_positional_param("files", default_value=["a"])
        env = _make_env(r)
        self.assertEqual(await env.run("t"), ["a", "mutated"])
        self.assertEqual(await env.run("t"), ["a", "mutated"])

    async def test_run_super_passes_arguments(self) -> None:
        def base(args, env, run_super):
            return args

        async def override(args, env, run_super):
            return await run_super({**args, "extra": True})

        r = TaskRegistry()
        r.task("t", base).add_optional_param("a", default_value="x")
        r.task("t", override)
        env = _make_env(r)
        self.assertEqual(await env.run("t"), {"a": "x", "extra": True})

    async def test_run_super_undefined_for_base_tasks(self) -> None:
        seen = {}

        def action(args, env, run_super):
            seen["is_defined"] = run_super.is_defined
            run_super()

        r = TaskRegistry()
        r.task("t", action)
        env = _make_env(r)
        with self.assertRaises(PylonError) as cm:
            await env.run("t")
        self.assertTrue(cm.exception.is_error(ERRORS.TASK_DEFINITIONS.RUNSUPER_NOT_AVAILABLE))
        self.assertIs(seen["is_defined"], False)

    async def test_globals_are_visible_only_while_running(self) -> None:
        seen = {}

        def action(args, env, run_super):
            seen["config"] = builtins.config
            seen["network"] = builtins.network
            seen["run"] = builtins.run
            seen["run_super"] = builtins.run_super
            seen["value"] = builtins.value
            seen["private"] = hasattr(builtins, "_extenders")

        def extender(env):
            env.value = 42

        r = TaskRegistry()
        r.task("t", action)
        env = _make_env(r, extenders=[extender])
        await env.run("t")

        self.assertIs(seen["config"], env.config)
        self.assertIs(seen["network"], env.network)
        self.assertEqual(seen["run"], env.run)
        self.assertFalse(seen["run_super"].is_defined)
        self.assertEqual(seen["value"], 42)
        self.assertFalse(seen["private"])
        self.assertFalse(hasattr(builtins, "value"))

    async def test_globals_are_restored_after_failure(self) -> None:
        def action(args, env, run_super):
            raise RuntimeError("boom")

        r = TaskRegistry()
        r.task("t", action)
        env = _make_env(r)
        with self.assertRaises(RuntimeError):
            await env.run("t")

    async def test_existing_globals_are_restored(self) -> None:
        builtins.value = "before"
        try:
            seen = {}

            def action(args, env, run_super):
                seen["value"] = builtins.value

            def extender(env):
                env.value = "during"

            r = TaskRegistry()
            r.task("t", action)
            await _make_env(r, extenders=[extender]).run("t")
            self.assertEqual(seen["value"], "during")
            self.assertEqual(builtins.value, "before")
        finally:
            del builtins.value

    async def test_nested_runs_restore_the_outer_frame(self) -> None:
        seen = {}

        def inner(args, env, run_super):
            seen["inner_task"] = current_frame().task_name
            return "inner"

        async def outer(args, env, run_super):
            outer_run_super = builtins.run_super
            result = await env.run("inner")
            seen["outer_task"] = current_frame().task_name
            seen["run_super_restored"] = builtins.run_super is outer_run_super
            seen["environment"] = current_environment()
            return result

        r = TaskRegistry()
        r.task("inner", inner)
        r.task("outer", outer)
        env = _make_env(r)

        self.assertEqual(await env.run("outer"), "inner")
        self.assertEqual(seen["inner_task"], "inner")
        self.assertEqual(seen["outer_task"], "outer")
        self.assertTrue(seen["run_super_restored"])
        self.assertIs(seen["environment"], env)
        self.assertIsNone(current_frame())

    async def test_current_environment_outside_a_task(self) -> None:
        with self.assertRaises(PylonError) as cm:
            current_environment()
        self.assertTrue(cm.exception.is_error(ERRORS.GENERAL.CONTEXT_ENV_NOT_DEFINED))


if __name__ == "__main__":
    unittest.main()
