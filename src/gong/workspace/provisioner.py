"""Workspace provisioning: marker, directories, and the import path link.

ensure_workspace() is idempotent when not forced: an existing project root
is left untouched. A forced run (``gong setup``) re-touches the marker,
re-creates any missing directories, and asks for a new import path.

Provisioning is not transactional. A failure partway through leaves what
was already created; running ``gong setup`` again is the recovery path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..root import RootNotFoundError, locate_root
from .import_path import prompt_import_path
from .manager import WorkspaceManager

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """Fatal provisioning failure. The dispatcher exits with status 2."""


class WorkspaceError(SetupError):
    """A marker, directory, or symlink could not be created."""


class InputError(SetupError):
    """The import path could not be read from the operator."""


def ensure_workspace(
    force: bool,
    *,
    cwd: Path | None = None,
    read_line: Callable[[str], str] | None = None,
    write: Callable[[str], None] = print,
) -> Path | None:
    """Make sure the enclosing project has a dependency workspace.

    Args:
        force: Re-run provisioning even if a project root already exists.
        cwd: Directory to search from (and to use as the new root if none
             is found). Defaults to the current working directory.
        read_line: Line reader for the import path prompt. Defaults to
                   the builtin ``input``.
        write: Sink for progress messages.

    Returns:
        The root that was provisioned, or None if nothing needed doing.

    Raises:
        WorkspaceError: On any filesystem failure.
        InputError: If the import path prompt cannot be read.
        OSError: If the current working directory cannot be determined.
    """
    if read_line is None:
        read_line = input
    start = Path.cwd() if cwd is None else cwd
    try:
        root = locate_root(start)
    except RootNotFoundError:
        root = start
        logger.debug("No project root above %s, creating one here", start)
    else:
        if not force:
            return None
        write(f"gong: running setup again for {root}")

    _provision(WorkspaceManager(root), read_line, write)
    return root


def _provision(
    wm: WorkspaceManager,
    read_line: Callable[[str], str],
    write: Callable[[str], None],
) -> None:
    step = f"setting up project in {wm.root}..."
    try:
        wm.touch_marker()
        wm.init_dirs()
    except OSError as e:
        write(step)
        raise WorkspaceError(e) from e
    write(f"{step} done.")

    write("what is the project path going to be? (e.g. github.com/robxu9/gong)")
    try:
        import_path = prompt_import_path(read_line, write)
    except EOFError as e:
        raise InputError("couldn't get the path... end of input") from e
    except OSError as e:
        raise InputError(f"couldn't get the path... {e}") from e

    step = "creating symlinks..."
    try:
        wm.link_project(import_path)
    except OSError as e:
        write(step)
        raise WorkspaceError(e) from e
    write(f"{step} done.")

    write("Setup should be completed now! Make sure to use gong as a wrapper")
    write("to your `go` commands so that you have environment variables set correctly.")
