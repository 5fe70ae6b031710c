"""Path helpers for step output."""

import os
from pathlib import Path


def display_path(path: Path, cwd: Path | None = None) -> str:
    """Render ``path`` relative to the working directory, ``./`` prefixed.

    Falls back to the basename when no relative form exists.
    """
    try:
        rel = os.path.relpath(path, cwd or Path.cwd())
    except (ValueError, OSError):
        return path.name
    return f"./{rel}"
