"""Application entry point — CLI dispatcher.

Dispatches on the first argument:
  1. (none):       print help, followed by the toolchain's own help; exit 2.
  2. `gong setup`: force (re)provisioning of the project workspace.
  3. `gong help`: print help; exit 0. `gong help <topic>` is forwarded.
  4. Anything else: ensure a workspace exists, then forward all arguments
     to the toolchain with GOPATH pointed at the project's `.gong.deps`.
"""

import logging
import sys
from collections.abc import Sequence

from .root import RootNotFoundError, find_deps_dir, locate_root
from .settings import Settings, load_settings
from .toolchain import FAILURE_EXIT_CODE, forward
from .workspace.manager import WorkspaceManager
from .workspace.provisioner import SetupError, ensure_workspace

logger = logging.getLogger(__name__)


def _print_help(settings: Settings) -> None:
    """Print gong's usage, then the toolchain's own `help` output."""
    print("gong is a nicer tool for managing Go source code\n")

    try:
        root = locate_root()
    except (RootNotFoundError, OSError):
        pass
    else:
        print(f"  -> in project {root}")
        for link in WorkspaceManager(root).list_links():
            print(f"     as {link}")
        print()

    print("Usage: gong command [args]\n")
    print("gong subcommands:")
    print("    setup                                  (re)Setup the project")
    print("Yep, that's it! If you want to manage dependencies, you can use")
    print("`gong get` just like `go get`, which will vendor it to your project.")
    print("Isn't that simple?")
    print()
    print(
        f"and of course we support all of the {settings.toolchain_command} commands. "
        f"`{settings.toolchain_command} help` follows:"
    )
    sys.stdout.flush()
    forward(settings, ["help"], None)


def run(args: Sequence[str], settings: Settings | None = None) -> int:
    """Dispatch one gong invocation and return its exit status."""
    if settings is None:
        settings = Settings()

    if not args:
        _print_help(settings)
        return FAILURE_EXIT_CODE

    cmd = args[0]
    try:
        if cmd == "setup":
            ensure_workspace(force=True)
            return 0
        if cmd == "help" and len(args) == 1:
            _print_help(settings)
            return 0

        ensure_workspace(force=False)
        project_deps = find_deps_dir()
    except SetupError as e:
        print(f"failed! {e}")
        return FAILURE_EXIT_CODE
    except OSError as e:
        print(f"failed! can't get working directory: {e}")
        return FAILURE_EXIT_CODE

    logger.debug("Forwarding %s (deps dir: %s)", list(args), project_deps)
    sys.stdout.flush()
    return forward(settings, args, project_deps)


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}\n")
        print("Check your settings.toml configuration.")
        sys.exit(FAILURE_EXIT_CODE)

    logging.getLogger("gong").setLevel(settings.log_level)

    try:
        sys.exit(run(sys.argv[1:], settings))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
