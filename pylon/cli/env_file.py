from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, MutableMapping, Optional

DISABLE_DOTENV_VAR = "PYLON_DISABLE_DOTENV"


def parse_dotenv(text: str) -> Dict[str, str]:
    """`KEY=VALUE` lines; `export`, `#` comments and surrounding quotes are allowed."""
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = value.strip()
        if value[:1] in ("'", '"') and len(value) > 1 and value[-1] == value[0]:
            value = value[1:-1]
        values[key] = value
    return values


def dotenv_disabled(environ: MutableMapping[str, str]) -> bool:
    return environ.get(DISABLE_DOTENV_VAR, "").strip().lower() in ("1", "true", "yes")


def load_dotenv(path: Optional[Path] = None, environ: Optional[MutableMapping[str, str]] = None) -> None:
    """
    Fill PYLON_* (and any other) variables from `<cwd>/.env`.

    Variables already set in the environment win over the file.
    """
    if environ is None:
        environ = os.environ
    if dotenv_disabled(environ):
        return
    if path is None:
        path = Path.cwd() / ".env"
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return
    for key, value in parse_dotenv(text).items():
        environ.setdefault(key, value)
