from __future__ import annotations

import json
import os
import re
from typing import Any, Dict

from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS

_DECIMAL_RE = re.compile(r"^-?\d+$")
_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")


class ArgumentType:
    """
    A param type: parses command line / environment text and validates
    programmatic values. `validate` raises PylonError on mismatch.
    """

    name = "any"

    def parse(self, param_name: str, text: str) -> Any:
        return text

    def validate(self, param_name: str, value: Any) -> None:
        return None

    def _invalid(self, param_name: str, value: Any) -> PylonError:
        return PylonError(
            ERRORS.ARGUMENTS.INVALID_VALUE_FOR_TYPE,
            {"value": value, "name": param_name, "type": self.name},
        )

    def __repr__(self) -> str:
        return "<ArgumentType {}>".format(self.name)


class StringType(ArgumentType):
    name = "string"

    def validate(self, param_name: str, value: Any) -> None:
        if not isinstance(value, str):
            raise self._invalid(param_name, value)


class BooleanType(ArgumentType):
    name = "boolean"

    def parse(self, param_name: str, text: str) -> bool:
        lowered = text.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise self._invalid(param_name, text)

    def validate(self, param_name: str, value: Any) -> None:
        if not isinstance(value, bool):
            raise self._invalid(param_name, value)


class IntType(ArgumentType):
    name = "int"

    def parse(self, param_name: str, text: str) -> int:
        s = text.strip()
        if _DECIMAL_RE.match(s):
            return int(s, 10)
        if _HEX_RE.match(s):
            return int(s, 16)
        raise self._invalid(param_name, text)

    def validate(self, param_name: str, value: Any) -> None:
        # bool is an int subclass, but True is not a valid int argument.
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._invalid(param_name, value)


class FloatType(ArgumentType):
    name = "float"

    def parse(self, param_name: str, text: str) -> float:
        s = text.strip()
        if _HEX_RE.match(s):
            return float(int(s, 16))
        try:
            return float(s)
        except ValueError as e:
            raise PylonError(
                ERRORS.ARGUMENTS.INVALID_VALUE_FOR_TYPE,
                {"value": text, "name": param_name, "type": self.name},
                parent=e,
            ) from e

    def validate(self, param_name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._invalid(param_name, value)


class InputFileType(ArgumentType):
    name = "input_file"

    def parse(self, param_name: str, text: str) -> str:
        self._check_readable(param_name, text)
        return text

    def validate(self, param_name: str, value: Any) -> None:
        if not isinstance(value, str):
            raise self._invalid(param_name, value)
        self._check_readable(param_name, value)

    @staticmethod
    def _check_readable(param_name: str, path: str) -> None:
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise PylonError(ERRORS.ARGUMENTS.INVALID_INPUT_FILE, {"name": param_name, "value": path})


class JsonType(ArgumentType):
    name = "json"

    def parse(self, param_name: str, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise PylonError(ERRORS.ARGUMENTS.INVALID_JSON_ARGUMENT, {"param": param_name, "error": e.msg}, parent=e) from e


STRING = StringType()
BOOLEAN = BooleanType()
INT = IntType()
FLOAT = FloatType()
INPUT_FILE = InputFileType()
JSON = JsonType()

ARGUMENT_TYPES: Dict[str, ArgumentType] = {t.name: t for t in (STRING, BOOLEAN, INT, FLOAT, INPUT_FILE, JSON)}
