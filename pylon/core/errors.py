from __future__ import annotations

import inspect
import re
from typing import Any, Dict, Mapping, Optional

from .errors_list import ERROR_PREFIX, ERRORS, ErrorDescriptor

_VARIABLE_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def apply_error_message_template(template: str, values: Mapping[str, Any]) -> str:
    """
    Fill `{name}` tags of an error message template.

    Tags without a value are left untouched so a partially filled message is
    still readable.
    """
    for name in values:
        if not _VARIABLE_NAME_RE.match(name):
            raise PylonError(ERRORS.INTERNAL.TEMPLATE_INVALID_VARIABLE_NAME, {"variable": name})
    return template.format_map(_KeepMissing(values))


class PylonError(Exception):
    """
    Framework error with a stable numeric code.

    str(error) renders as `PL<number>: <message>`.
    """

    def __init__(
        self,
        descriptor: ErrorDescriptor,
        message_args: Optional[Dict[str, Any]] = None,
        parent: Optional[BaseException] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.descriptor = descriptor
        self.number = descriptor.number
        self.code = "{}{}".format(ERROR_PREFIX, descriptor.number)
        self.message_args = dict(message_args or {})
        self.message = "{}: {}".format(self.code, apply_error_message_template(descriptor.message, self.message_args))
        self.parent = parent
        self.data = data
        super().__init__(self.message)
        if parent is not None:
            self.__cause__ = parent

    def __str__(self) -> str:
        return self.message

    @staticmethod
    def is_pylon_error(other: Any) -> bool:
        return isinstance(other, PylonError)

    def is_error(self, descriptor: ErrorDescriptor) -> bool:
        return self.number == descriptor.number


def _infer_plugin_name() -> str:
    # First frame outside of this module is the code that raised the error.
    frame = inspect.currentframe()
    try:
        while frame is not None:
            module_name = frame.f_globals.get("__name__", "")
            if module_name != __name__:
                parts = module_name.split(".")
                if parts[0] == "plugins" and len(parts) > 1:
                    return ".".join(parts[:2])
                return parts[0]
            frame = frame.f_back
    finally:
        del frame
    return "unknown"


class PylonPluginError(Exception):
    """
    Error raised by a plugin or any other collaborator of the framework.

    Accepts `(plugin_name, message, parent)` or `(message, parent)`; in the
    latter form the plugin name is taken from the module that raised it.
    """

    def __init__(
        self,
        plugin_name_or_message: str,
        message_or_parent: Optional[Any] = None,
        parent: Optional[BaseException] = None,
    ) -> None:
        if isinstance(message_or_parent, str):
            self.plugin_name = plugin_name_or_message
            self.message = message_or_parent
            self.parent = parent
        else:
            self.plugin_name = _infer_plugin_name()
            self.message = plugin_name_or_message
            self.parent = message_or_parent
        super().__init__(self.message)
        if self.parent is not None:
            self.__cause__ = self.parent

    def __str__(self) -> str:
        return self.message

    @staticmethod
    def is_pylon_plugin_error(other: Any) -> bool:
        return isinstance(other, PylonPluginError)
