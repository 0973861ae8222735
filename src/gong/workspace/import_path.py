"""Project import path validation and the interactive prompt loop.

The import path (e.g. ``github.com/user/project``) only decides where the
project's self-referential symlink lives inside ``.gong.deps/src``.
Validation is a pure function so the rules can be tested without stdin;
``prompt_import_path`` is the I/O loop wrapped around it.
"""

from __future__ import annotations

from collections.abc import Callable


class ImportPathError(ValueError):
    """A candidate import path was rejected. The prompt asks again."""


def validate_import_path(candidate: str) -> str:
    """Normalize *candidate* and return it, or raise ImportPathError.

    Surrounding whitespace and a single trailing slash are trimmed.
    """
    path = candidate.strip()
    path = path.removesuffix("/")
    if not path:
        raise ImportPathError("can't be empty")
    if path.startswith("/"):
        raise ImportPathError("can't start with a slash ('/')")
    if "//" in path:
        raise ImportPathError("can't use double slashes ('//')")
    return path


def prompt_import_path(
    read_line: Callable[[str], str],
    write: Callable[[str], None] = print,
) -> str:
    """Ask for an import path until a valid one is entered.

    Args:
        read_line: Called with the prompt string, returns one line of input
                   (``input`` in production). EOFError/OSError propagate.
        write: Sink for rejection messages.

    Returns:
        The validated, normalized import path.
    """
    while True:
        line = read_line("  > ")
        try:
            return validate_import_path(line)
        except ImportPathError as e:
            # Empty input just re-prompts silently
            if line.strip().removesuffix("/"):
                write(f"-- {e}")
