import unittest

from pylon import config_env
from pylon.context import create_context, delete_context, get_context, is_created
from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.runtime_args import RuntimeArgs
from pylon.core.runtime_env import Environment


class TestPylonContext(unittest.TestCase):
    def tearDown(self) -> None:
        if is_created():
            delete_context()

    def test_singleton_lifecycle(self) -> None:
        self.assertFalse(is_created())
        with self.assertRaises(PylonError) as cm:
            get_context()
        self.assertTrue(cm.exception.is_error(ERRORS.GENERAL.CONTEXT_NOT_CREATED))

        ctx = create_context()
        self.assertIs(get_context(), ctx)
        with self.assertRaises(PylonError) as cm:
            create_context()
        self.assertTrue(cm.exception.is_error(ERRORS.GENERAL.CONTEXT_ALREADY_CREATED))

        delete_context()
        self.assertFalse(is_created())

    def test_environment_must_be_set(self) -> None:
        ctx = create_context()
        with self.assertRaises(PylonError) as cm:
            ctx.get_environment()
        self.assertTrue(cm.exception.is_error(ERRORS.GENERAL.CONTEXT_ENV_NOT_DEFINED))

        env = Environment({"networks": {}}, RuntimeArgs(), {}, network_required=False)
        ctx.set_environment(env)
        self.assertIs(ctx.get_environment(), env)

    def test_config_env_registers_into_the_context(self) -> None:
        ctx = create_context()

        def action(args, env, run_super):
            return None

        config_env.task("a", "A task", action)
        config_env.internal_task("b", action)
        config_env.override_task("a", action)

        @config_env.extend_environment
        def env_extender(env):
            return None

        @config_env.extend_config
        def config_extender(resolved, user):
            return None

        self.assertEqual(ctx.tasks.get("a").kind.value, "overridden")
        self.assertTrue(ctx.tasks.get("b").is_internal)
        self.assertEqual(ctx.environment_extenders, [env_extender])
        self.assertEqual(ctx.config_extenders, [config_extender])

    def test_config_env_without_context(self) -> None:
        with self.assertRaises(PylonError) as cm:
            config_env.task("a")
        self.assertTrue(cm.exception.is_error(ERRORS.GENERAL.CONTEXT_NOT_CREATED))


if __name__ == "__main__":
    unittest.main()
