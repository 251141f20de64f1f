import unittest

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params import argument_types as types
from pylon.core.tasks.task_definitions import OverriddenTaskDefinition, SimpleTaskDefinition, TaskKind


class TestSimpleTaskDefinition(unittest.TestCase):
    def assertPylonError(self, descriptor, fn, *args, **kwargs) -> None:
        with self.assertRaises(PylonError) as cm:
            fn(*args, **kwargs)
        self.assertEqual(cm.exception.number, descriptor.number, str(cm.exception))

    def test_builder_chain(self) -> None:
        d = (
            SimpleTaskDefinition("compile")
            .set_description("Compiles")
            .add_param("target")
            .add_optional_param("jobs", default_value=2, type=types.INT)
            .add_flag("force")
            .add_positional_param("src")
            .add_optional_variadic_positional_param("extra", default_value="x")
        )
        self.assertIs(d.kind, TaskKind.BASE)
        self.assertEqual(d.description, "Compiles")
        self.assertEqual(list(d.param_definitions), ["target", "jobs", "force"])
        self.assertIs(d.param_definitions["force"].is_flag, True)
        self.assertIs(d.param_definitions["force"].default_value, False)
        self.assertEqual([p.name for p in d.positional_param_definitions], ["src", "extra"])
        self.assertEqual(d.positional_param_definitions[1].default_value, ["x"])
        self.assertIs(d.param_definitions["target"].type, types.STRING)

    def test_action_not_set(self) -> None:
        d = SimpleTaskDefinition("empty")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.ACTION_NOT_SET, d.action, {}, None, None)

    def test_param_validations(self) -> None:
        d = SimpleTaskDefinition("t").add_param("a")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.PARAM_ALREADY_DEFINED, d.add_positional_param, "a")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.PARAM_CLASHES_WITH_GLOBAL_PARAM, d.add_param, "network")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.INVALID_PARAM_NAME, d.add_param, "BadName")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.DEFAULT_IN_MANDATORY_PARAM, d.add_param, "b", default_value="x")
        self.assertPylonError(
            ERRORS.TASK_DEFINITIONS.DEFAULT_VALUE_WRONG_TYPE,
            d.add_optional_param,
            "c",
            default_value="x",
            type=types.INT,
        )

    def test_positional_order_validations(self) -> None:
        d = SimpleTaskDefinition("t").add_optional_positional_param("a")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.MANDATORY_PARAM_AFTER_OPTIONAL, d.add_positional_param, "b")

        d = SimpleTaskDefinition("t").add_variadic_positional_param("rest")
        self.assertPylonError(ERRORS.TASK_DEFINITIONS.PARAM_AFTER_VARIADIC, d.add_optional_positional_param, "after")

    def test_variadic_default_elements_are_type_checked(self) -> None:
        d = SimpleTaskDefinition("t")
        self.assertPylonError(
            ERRORS.TASK_DEFINITIONS.DEFAULT_VALUE_WRONG_TYPE,
            d.add_optional_variadic_positional_param,
            "nums",
            default_value=[1, "two"],
            type=types.INT,
        )


class TestOverriddenTaskDefinition(unittest.TestCase):
    def setUp(self) -> None:
        def base_action(args, env, run_super):
            return "base"

        self.parent = SimpleTaskDefinition("deploy").set_description("Deploys").set_action(base_action)
        self.base_action = base_action

    def test_falls_back_to_parent(self) -> None:
        d = OverriddenTaskDefinition(self.parent)
        self.assertIs(d.kind, TaskKind.OVERRIDDEN)
        self.assertEqual(d.name, "deploy")
        self.assertEqual(d.description, "Deploys")
        self.assertIs(d.action, self.base_action)

        d.set_description("Deploys faster")
        self.assertEqual(d.description, "Deploys faster")
        self.assertEqual(self.parent.description, "Deploys")

    def test_optional_params_are_added_to_the_parent(self) -> None:
        d = OverriddenTaskDefinition(self.parent)
        d.add_optional_param("tag").add_flag("dry_run").add_param("note", is_optional=True)
        self.assertEqual(list(self.parent.param_definitions), ["tag", "dry_run", "note"])
        self.assertIs(d.param_definitions, self.parent.param_definitions)

    def test_rejects_mandatory_and_positional_params(self) -> None:
        d = OverriddenTaskDefinition(self.parent)
        cases = [
            (ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_MANDATORY_PARAMS, d.add_param, ("a",)),
            (ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_POSITIONAL_PARAMS, d.add_positional_param, ("a",)),
            (ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_POSITIONAL_PARAMS, d.add_optional_positional_param, ("a",)),
            (ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_VARIADIC_PARAMS, d.add_variadic_positional_param, ("a",)),
            (ERRORS.TASK_DEFINITIONS.OVERRIDE_NO_VARIADIC_PARAMS, d.add_optional_variadic_positional_param, ("a",)),
        ]
        for descriptor, fn, args in cases:
            with self.assertRaises(PylonError) as cm:
                fn(*args)
            self.assertEqual(cm.exception.number, descriptor.number)
        self.assertEqual(self.parent.param_definitions, {})


if __name__ == "__main__":
    unittest.main()
