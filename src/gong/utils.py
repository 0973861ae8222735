"""Shared utilities for locating gong's per-user config directory."""

import os
from pathlib import Path


def gong_dir() -> Path:
    """Return gong's config directory.

    Resolution order: $GONG_DIR, then ~/.gong.
    """
    env = os.environ.get("GONG_DIR")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".gong"
