"""Project-level metadata and paths."""

from __future__ import annotations

import os

VERSION = "unspecified"

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def relative_to_root(path: str) -> str:
    """Return ``path`` joined onto the project root directory."""
    return os.path.normpath(os.path.join(_ROOT, path))