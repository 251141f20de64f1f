from __future__ import annotations

import copy
import logging
import os
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

ResolvedConfig = Dict[str, Any]
ConfigExtender = Callable[[ResolvedConfig, Mapping[str, Any]], None]

DEFAULT_PATHS: Dict[str, str] = {
    "sources": "contracts",
    "cache": "cache",
    "artifacts": "artifacts",
    "tests": "test",
}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Structural merge of two config trees.

    Mappings merge key by key, `override` wins on everything else. Lists are
    replaced as a whole, never concatenated. Inputs are not modified.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config(
    user_config_path: Optional[str],
    default_config: Mapping[str, Any],
    user_config: Mapping[str, Any],
    config_extenders: Sequence[ConfigExtender] = (),
) -> ResolvedConfig:
    """
    Merge the user config over the defaults and derive the project paths.

    `paths` is only set when a config file path is given (i.e. inside a
    project). `networks` is always present. Config extenders then run in
    registration order with the resolved config and the user config as the
    user wrote it.
    """
    resolved: ResolvedConfig = deep_merge(default_config, user_config)
    if user_config_path is not None:
        resolved["paths"] = resolve_project_paths(user_config_path, user_config.get("paths"))
    else:
        resolved["paths"] = None
    if resolved.get("networks") is None:
        resolved["networks"] = {}

    for extender in config_extenders:
        extender(resolved, user_config)

    logger.debug("Config resolved with %d extender(s)", len(config_extenders))
    return resolved


def _resolve_path_from(from_dir: str, default_path: str, path: Optional[str] = None) -> str:
    if path is None:
        path = default_path
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(from_dir, path))


def resolve_project_paths(user_config_path: str, user_paths: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Absolute project layout for a config file.

    - config_file is the given path and can't be overridden
    - absolute paths are used as they are
    - a relative root is resolved from the config file's directory
    - any other relative path is resolved from root
    """
    if user_paths is None:
        user_paths = {}
    config_dir = os.path.dirname(user_config_path)
    root = _resolve_path_from(config_dir, "", user_paths.get("root"))

    paths: Dict[str, str] = {name: _resolve_path_from(root, value) for name, value in user_paths.items()}
    paths["root"] = root
    paths["config_file"] = user_config_path
    for name, default_path in DEFAULT_PATHS.items():
        paths[name] = _resolve_path_from(root, default_path, user_paths.get(name))
    return paths
