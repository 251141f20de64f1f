from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Iterable, List, Optional

from .errors import PylonError
from .errors_list import ERRORS

logger = logging.getLogger(__name__)


def _module_name_for_file(path: str) -> str:
    stem = os.path.splitext(os.path.basename(path))[0]
    return "pylon_project_plugins.{}".format(stem.replace("-", "_"))


def _load_file(spec_str: str, path: str) -> ModuleType:
    if not os.path.isfile(path):
        raise PylonError(ERRORS.PLUGINS.PLUGIN_NOT_FOUND, {"plugin": spec_str})
    module_name = _module_name_for_file(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PylonError(ERRORS.PLUGINS.PLUGIN_NOT_FOUND, {"plugin": spec_str})
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except PylonError:
        sys.modules.pop(module_name, None)
        raise
    except Exception as e:  # noqa: BLE001
        sys.modules.pop(module_name, None)
        raise PylonError(ERRORS.PLUGINS.PLUGIN_LOAD_FAILED, {"plugin": spec_str, "error": repr(e)}, parent=e) from e
    return module


def _load_module(spec_str: str) -> ModuleType:
    try:
        if spec_str in sys.modules:
            # Imported by an earlier context; run it again so it registers into the current one.
            return importlib.reload(sys.modules[spec_str])
        return importlib.import_module(spec_str)
    except ModuleNotFoundError as e:
        # Only a missing plugin is "not found"; a missing dependency of the plugin is a load failure.
        if e.name is not None and spec_str.startswith(e.name):
            raise PylonError(ERRORS.PLUGINS.PLUGIN_NOT_FOUND, {"plugin": spec_str}, parent=e) from e
        raise PylonError(ERRORS.PLUGINS.PLUGIN_LOAD_FAILED, {"plugin": spec_str, "error": repr(e)}, parent=e) from e
    except PylonError:
        raise
    except Exception as e:  # noqa: BLE001
        raise PylonError(ERRORS.PLUGINS.PLUGIN_LOAD_FAILED, {"plugin": spec_str, "error": repr(e)}, parent=e) from e


def load_plugin(spec_str: str, base_dir: Optional[str] = None) -> ModuleType:
    """
    Import a plugin by spec.

    - "package.module": imported with importlib
    - "tasks.py" / "tools/deploy.py": loaded from a file, relative to base_dir

    Plugins register their tasks and extenders at import time, through
    pylon.config_env, so a module imported before is reloaded.
    """
    if spec_str.endswith(".py"):
        path = spec_str
        if not os.path.isabs(path) and base_dir is not None:
            path = os.path.join(base_dir, path)
        module = _load_file(spec_str, os.path.normpath(path))
    else:
        module = _load_module(spec_str)
    logger.debug("Plugin %s loaded", spec_str)
    return module


def load_plugins(specs: Iterable[str], base_dir: Optional[str] = None, already_loaded: Iterable[str] = ()) -> List[str]:
    """
    Load plugins in order, skipping specs in `already_loaded`. Returns the newly loaded specs.
    """
    skip = set(already_loaded)
    loaded: List[str] = []
    for spec_str in specs:
        if spec_str in skip or spec_str in loaded:
            continue
        load_plugin(spec_str, base_dir)
        loaded.append(spec_str)
    return loaded
