from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pylon.builtin_tasks import register_builtin_tasks
from pylon.context import PylonContext, get_context
from pylon.core.errors import PylonError
from pylon.core.errors_list import ERRORS
from pylon.core.plugins import load_plugins
from pylon.core.project_structure import get_user_config_path
from pylon.core.runtime_args import RuntimeArgs

from .config_resolution import ResolvedConfig, resolve_config
from .config_validation import validate_user_config
from .default_config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def read_user_config(config_path: Path) -> Dict[str, Any]:
    """
    Load a YAML config file. An empty file is an empty config.
    """
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise PylonError(ERRORS.GENERAL.INVALID_CONFIG_FILE, {"path": str(config_path), "reason": e.strerror or repr(e)}, parent=e) from e
    except yaml.YAMLError as e:
        raise PylonError(ERRORS.GENERAL.INVALID_CONFIG_FILE, {"path": str(config_path), "reason": "invalid YAML"}, parent=e) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise PylonError(ERRORS.GENERAL.INVALID_CONFIG_FILE, {"path": str(config_path), "reason": "top level must be a mapping"})

    errors = validate_user_config(raw)
    if errors:
        raise PylonError(
            ERRORS.GENERAL.INVALID_CONFIG,
            {"path": str(config_path), "count": len(errors)},
            data={"errors": errors},
        )
    return raw


def load_config_and_tasks(runtime_args: RuntimeArgs, ctx: Optional[PylonContext] = None) -> ResolvedConfig:
    """
    Register built-in tasks, read the project config, load its plugins and
    resolve the final config.

    Plugins are loaded after the built-in tasks so they can override them.
    Outside of a project the defaults are used and `paths` is None.
    """
    if ctx is None:
        ctx = get_context()

    register_builtin_tasks(ctx.tasks)

    config_path = get_user_config_path(runtime_args.config)
    user_config: Dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        user_config = read_user_config(config_path)
        plugin_specs = user_config.get("plugins") or []
        ctx.loaded_plugins.extend(load_plugins(plugin_specs, base_dir=str(config_path.parent), already_loaded=ctx.loaded_plugins))

    return resolve_config(
        str(config_path) if config_path is not None else None,
        DEFAULT_CONFIG,
        user_config,
        ctx.config_extenders,
    )

