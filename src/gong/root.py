"""Project root discovery.

A project root is the nearest directory, walking upward from a starting
point, that directly contains the zero-byte `.gong` marker file. The
dependency workspace for that project lives at `<root>/.gong.deps`.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MARKER_NAME = ".gong"
DEPS_DIR_NAME = ".gong.deps"


class RootNotFoundError(LookupError):
    """No `.gong` marker exists between the start directory and `/`."""


def locate_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor of *start* (inclusive) holding a marker.

    Args:
        start: Directory to begin the search from. Defaults to the
               current working directory.

    Raises:
        RootNotFoundError: If the filesystem root is reached without
            finding a marker.
        OSError: If the current working directory cannot be determined.
    """
    candidate = Path.cwd() if start is None else Path(start)
    while True:
        if (candidate / MARKER_NAME).exists():
            logger.debug("Found project root at %s", candidate)
            return candidate
        parent = candidate.parent
        if parent == candidate:
            raise RootNotFoundError(
                f"gong: no parent dir with {MARKER_NAME} above {start or 'cwd'}"
            )
        candidate = parent


def deps_dir(root: Path) -> Path:
    """Return the dependency workspace directory for *root*."""
    return root / DEPS_DIR_NAME


def find_deps_dir(start: Path | None = None) -> Path | None:
    """Return the dependency workspace of the enclosing project, or None."""
    try:
        return deps_dir(locate_root(start))
    except RootNotFoundError:
        return None
