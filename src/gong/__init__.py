"""gong - a workspace-per-project wrapper around the `go` toolchain.

Locates the project root (the nearest directory holding a `.gong` marker),
provisions a private dependency workspace under `.gong.deps`, and forwards
every other command to the toolchain with GOPATH pointed at that workspace.

Package entry point. Exports the version string only; functional modules
are imported by main.py.
"""

__version__ = "0.1.0"
