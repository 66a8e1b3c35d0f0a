"""Whole-file JSON persistence with owner-only permissions."""

import json
import os
from typing import Any, Optional


def read_text(path: str) -> Optional[str]:
    """Return the file contents, or None if there is no file at ``path``."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except FileNotFoundError:
        return None


def write_private_json(path: str, data: Any):
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
