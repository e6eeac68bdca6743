"""Tests for oasdocs.fsutil."""

from __future__ import annotations

from pathlib import Path

import pytest

from oasdocs.errors import OutputWriteError
from oasdocs.fsutil import ensure_directory_exists, write_text


class TestEnsureDirectoryExists:
    def test_creates_nested_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c" / "out.json"
        ensure_directory_exists(target)
        assert (tmp_path / "a" / "b" / "c").is_dir()
        assert not target.exists()

    def test_idempotent(self, tmp_path: Path):
        target = tmp_path / "x" / "y" / "out.json"
        ensure_directory_exists(target)
        ensure_directory_exists(target)
        assert [p.name for p in (tmp_path / "x").iterdir()] == ["y"]

    def test_existing_directory(self, tmp_path: Path):
        assert ensure_directory_exists(tmp_path / "out.json") == tmp_path

    def test_accepts_str(self, tmp_path: Path):
        ensure_directory_exists(str(tmp_path / "s" / "out.json"))
        assert (tmp_path / "s").is_dir()

    def test_file_in_the_way_propagates(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(OSError):
            ensure_directory_exists(blocker / "sub" / "out.json")


class TestWriteText:
    def test_writes_utf8_and_creates_dirs(self, tmp_path: Path):
        target = tmp_path / "bundled" / "api.json"
        written = write_text(target, '{"t": "é"}\n')
        assert target.read_text(encoding="utf-8") == '{"t": "é"}\n'
        assert written == len('{"t": "é"}\n'.encode("utf-8"))

    def test_failure_wraps_os_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(OutputWriteError) as exc_info:
            write_text(blocker / "api.json", "{}")
        assert isinstance(exc_info.value.__cause__, OSError)
