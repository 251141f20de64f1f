import unittest

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.params.env_variables import get_env_runtime_args, param_name_to_env_variable
from pylon.core.params.pylon_params import PYLON_PARAM_DEFINITIONS


class TestEnvVariables(unittest.TestCase):
    def test_variable_names(self) -> None:
        self.assertEqual(param_name_to_env_variable("network"), "PYLON_NETWORK")
        self.assertEqual(param_name_to_env_variable("show_stack_traces"), "PYLON_SHOW_STACK_TRACES")

    def test_defaults_without_variables(self) -> None:
        args = get_env_runtime_args(PYLON_PARAM_DEFINITIONS, {})
        self.assertIsNone(args["network"])
        self.assertIs(args["verbose"], False)
        self.assertEqual(set(args), set(PYLON_PARAM_DEFINITIONS))

    def test_values_are_parsed_with_the_param_type(self) -> None:
        args = get_env_runtime_args(
            PYLON_PARAM_DEFINITIONS,
            {"PYLON_NETWORK": "devnet", "PYLON_SHOW_STACK_TRACES": "true", "OTHER": "x"},
        )
        self.assertEqual(args["network"], "devnet")
        self.assertIs(args["show_stack_traces"], True)

    def test_invalid_value(self) -> None:
        with self.assertRaises(PylonError) as cm:
            get_env_runtime_args(PYLON_PARAM_DEFINITIONS, {"PYLON_VERBOSE": "maybe"})
        self.assertTrue(cm.exception.is_error(ERRORS.ARGUMENTS.INVALID_ENV_VAR_VALUE))
        self.assertIn("PYLON_VERBOSE", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
