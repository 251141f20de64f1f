from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

CONFIG_FILENAMES = ("pylon.yml", "pylon.yaml")


def find_user_config_path(start_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Walk up from start_dir (default: cwd) and return the first pylon config file found.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None


def get_user_config_path(explicit_path: Optional[str] = None) -> Optional[Path]:
    # An explicit --config wins over discovery.
    if explicit_path:
        return Path(os.path.abspath(os.path.expanduser(explicit_path)))
    return find_user_config_path()
