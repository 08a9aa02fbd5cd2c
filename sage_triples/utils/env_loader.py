"""Environment loader utilities.

Reads `SAGE_*` settings (embedding table path, source kind, model name) from
a local `.env` file so they don't have to live in the shell profile.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional


def _parse_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    # unquoted values may carry a trailing " # comment"
    if " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return value


def read_dotenv(path: str | os.PathLike[str]) -> Dict[str, str]:
    """Parse a .env file into a dict without touching os.environ.

    Accepts `KEY=VALUE` and `export KEY=VALUE` lines. Blank lines, `#`
    comments and lines without `=` are skipped. Later keys win.
    """
    settings: Dict[str, str] = {}
    for raw_line in Path(path).read_text(encoding="utf-8", errors="ignore").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, raw_value = line.split("=", 1)
        key = key.strip()
        if key:
            settings[key] = _parse_value(raw_value)
    return settings


def load_dotenv(
    path: str | os.PathLike[str] = ".env",
    *,
    override: bool = False,
    prefix: Optional[str] = None,
) -> List[str]:
    """Load environment variables from a .env file.

    Args:
        path: Path to .env file (default: ".env" in current working directory).
        override: If True, overwrite existing os.environ keys.
        prefix: Only apply keys starting with this prefix (e.g. "SAGE_").

    Returns:
        Keys written to os.environ; empty if the file does not exist.
    """
    if not Path(path).is_file():
        return []

    applied = []
    for key, value in read_dotenv(path).items():
        if prefix and not key.startswith(prefix):
            continue
        if override or key not in os.environ:
            os.environ[key] = value
            applied.append(key)
    return applied
