"""Tests for workspace/provisioner.py — ensure_workspace."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from gong.workspace.provisioner import (
    InputError,
    SetupError,
    WorkspaceError,
    ensure_workspace,
)


def _reader(*lines: str):
    """Return a read_line stub that yields *lines* then raises EOFError."""
    it = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


def _snapshot(root: Path) -> dict[str, tuple[int, int]]:
    """Map every path under root (no symlink following) to (mtime_ns, size)."""
    snap = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in [".", *dirnames, *filenames]:
            p = Path(dirpath) / name
            st = p.lstat()
            snap[str(p.relative_to(root))] = (st.st_mtime_ns, st.st_size)
    return snap


@pytest.fixture
def provisioned(tmp_path: Path) -> Path:
    """A project root already set up with import path example.com/u/proj."""
    ensure_workspace(
        False, cwd=tmp_path, read_line=_reader("example.com/u/proj"), write=lambda _: None
    )
    return tmp_path


class TestFreshSetup:
    def test_creates_layout(self, tmp_path: Path) -> None:
        root = ensure_workspace(
            False, cwd=tmp_path, read_line=_reader("example.org/x/y"), write=lambda _: None
        )
        assert root == tmp_path
        assert (tmp_path / ".gong").is_file()
        assert (tmp_path / ".gong").stat().st_size == 0
        for name in ["src", "bin", "pkg"]:
            assert (tmp_path / ".gong.deps" / name).is_dir()
        link = tmp_path / ".gong.deps" / "src" / "example.org" / "x" / "y"
        assert link.is_symlink()
        assert link.resolve() == tmp_path.resolve()

    def test_reprompts_invalid_input(self, tmp_path: Path) -> None:
        written: list[str] = []
        ensure_workspace(
            False,
            cwd=tmp_path,
            read_line=_reader("/a/b", "a//b", "", "a/b/"),
            write=written.append,
        )
        assert (tmp_path / ".gong.deps" / "src" / "a" / "b").is_symlink()
        assert "-- can't start with a slash ('/')" in written
        assert "-- can't use double slashes ('//')" in written

    def test_progress_messages(self, tmp_path: Path) -> None:
        written: list[str] = []
        ensure_workspace(False, cwd=tmp_path, read_line=_reader("p"), write=written.append)
        assert written[0] == f"setting up project in {tmp_path}... done."
        assert "creating symlinks... done." in written
        assert not any(line.endswith(" ") for line in written)

    def test_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        ensure_workspace(False, read_line=_reader("p"), write=lambda _: None)
        assert (tmp_path / ".gong").is_file()


class TestExistingRoot:
    def test_not_forced_is_noop(self, provisioned: Path) -> None:
        before = _snapshot(provisioned)
        read_line = _reader()  # Any prompt would raise
        assert (
            ensure_workspace(False, cwd=provisioned, read_line=read_line, write=lambda _: None)
            is None
        )
        assert _snapshot(provisioned) == before

    def test_not_forced_from_subdir(self, provisioned: Path) -> None:
        sub = provisioned / "cmd" / "tool"
        sub.mkdir(parents=True)
        assert ensure_workspace(False, cwd=sub, read_line=_reader(), write=lambda _: None) is None
        assert not (sub / ".gong").exists()

    def test_forced_with_new_path_adds_link(self, provisioned: Path) -> None:
        written: list[str] = []
        keep = provisioned / ".gong.deps" / "pkg" / "cached.a"
        keep.write_text("data")

        root = ensure_workspace(
            True, cwd=provisioned, read_line=_reader("other.org/p"), write=written.append
        )

        assert root == provisioned
        assert written[0] == f"gong: running setup again for {provisioned}"
        assert keep.read_text() == "data"
        assert (provisioned / ".gong").is_file()
        old = provisioned / ".gong.deps" / "src" / "example.com" / "u" / "proj"
        new = provisioned / ".gong.deps" / "src" / "other.org" / "p"
        assert old.resolve() == provisioned.resolve()
        assert new.resolve() == provisioned.resolve()

    def test_forced_from_subdir_uses_existing_root(self, provisioned: Path) -> None:
        sub = provisioned / "internal"
        sub.mkdir()
        root = ensure_workspace(
            True, cwd=sub, read_line=_reader("other.org/p"), write=lambda _: None
        )
        assert root == provisioned
        assert not (sub / ".gong").exists()

    def test_forced_with_reused_path_fails(self, provisioned: Path) -> None:
        with pytest.raises(WorkspaceError):
            ensure_workspace(
                True,
                cwd=provisioned,
                read_line=_reader("example.com/u/proj"),
                write=lambda _: None,
            )


class TestFailures:
    def test_eof_is_input_error(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="couldn't get the path"):
            ensure_workspace(False, cwd=tmp_path, read_line=_reader(), write=lambda _: None)
        # Partial state is left behind
        assert (tmp_path / ".gong").is_file()
        assert (tmp_path / ".gong.deps" / "src").is_dir()

    def test_read_oserror_is_input_error(self, tmp_path: Path) -> None:
        def read_line(prompt: str) -> str:
            raise OSError("stdin closed")

        with pytest.raises(InputError, match="stdin closed"):
            ensure_workspace(False, cwd=tmp_path, read_line=read_line, write=lambda _: None)

    def test_marker_failure_is_workspace_error(self, tmp_path: Path) -> None:
        with patch(
            "gong.workspace.manager.WorkspaceManager.touch_marker",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(WorkspaceError, match="denied"):
                ensure_workspace(False, cwd=tmp_path, read_line=_reader("p"), write=lambda _: None)

    def test_mkdir_failure_is_workspace_error(self, tmp_path: Path) -> None:
        # A regular file where the deps dir should be
        (tmp_path / ".gong.deps").write_text("")
        written: list[str] = []
        with pytest.raises(WorkspaceError):
            ensure_workspace(False, cwd=tmp_path, read_line=_reader("p"), write=written.append)
        # The step is named before the dispatcher prints "failed! ..."
        assert written == [f"setting up project in {tmp_path}..."]

    def test_errors_share_base(self) -> None:
        assert issubclass(WorkspaceError, SetupError)
        assert issubclass(InputError, SetupError)
