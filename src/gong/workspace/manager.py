"""Dependency workspace layout on disk.

Manages the per-project layout:
  - Marker file: <root>/.gong (zero bytes, existence is the signal)
  - Workspace:   <root>/.gong.deps/{src,bin,pkg}
  - Self link:   <root>/.gong.deps/src/<import-path> -> relative path to <root>

Key class: WorkspaceManager.
"""

import logging
import os
from pathlib import Path

from ..root import DEPS_DIR_NAME, MARKER_NAME

logger = logging.getLogger(__name__)

# Owner rwx, group/other rx
DIR_MODE = 0o755

# Subdirectories the toolchain expects in a GOPATH-style workspace
_WORKSPACE_SUBDIRS = [
    "src",
    "bin",
    "pkg",
]


class WorkspaceManager:
    """Manages the gong marker and dependency workspace for one project root."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.marker_file = root / MARKER_NAME
        self.deps_dir = root / DEPS_DIR_NAME
        self.src_dir = self.deps_dir / "src"

    def touch_marker(self) -> None:
        """Create or truncate the zero-byte marker file."""
        with open(self.marker_file, "w"):
            pass
        logger.debug("Wrote marker %s", self.marker_file)

    def init_dirs(self) -> None:
        """Create .gong.deps/{src,bin,pkg}.

        Safe to call multiple times; existing directories are left alone.
        """
        for name in _WORKSPACE_SUBDIRS:
            path = self.deps_dir / name
            path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            logger.debug("Ensured workspace dir %s", path)

    def link_path(self, import_path: str) -> Path:
        """Return where the self link for *import_path* lives."""
        return self.src_dir / import_path

    def link_project(self, import_path: str) -> Path:
        """Create the symlink at src/<import_path> pointing back to the root.

        The target is relative to the link's parent directory so that the
        link keeps resolving to the root if the whole project is moved.

        Args:
            import_path: A validated import path, e.g. ``github.com/u/proj``.

        Returns:
            The symlink path.

        Raises:
            FileExistsError: If the link (or anything else) already exists
                at that location. Existing links are never overwritten.
            OSError: If the base directory or link cannot be created.
        """
        link = self.link_path(import_path)
        base_dir = link.parent
        base_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

        target = os.path.relpath(self.root, base_dir)
        link.symlink_to(target, target_is_directory=True)
        logger.info("Linked project: %s -> %s", link, target)
        return link

    def list_links(self) -> list[str]:
        """List import paths whose link under src/ points back at the root.

        Symlinks belonging to fetched dependencies are skipped.
        """
        if not self.src_dir.is_dir():
            return []
        root = self.root.resolve()
        links: list[str] = []
        # os.walk does not descend into symlinked dirs, so the self link
        # (which points at an ancestor) cannot loop.
        for dirpath, dirnames, filenames in os.walk(self.src_dir):
            for name in dirnames + filenames:
                path = Path(dirpath) / name
                if path.is_symlink() and _resolves_to(path, root):
                    links.append(path.relative_to(self.src_dir).as_posix())
        return sorted(links)


def _resolves_to(link: Path, target: Path) -> bool:
    """True if *link* resolves to *target*. Broken or looping links do not."""
    try:
        return link.resolve() == target
    except (OSError, RuntimeError):
        return False
