"""Tests for the core API over an in-memory filesystem."""

from __future__ import annotations

import errno

import pytest

from gitaware_glob.core import (
    DirEntry,
    EntryKind,
    MemoryFileSystem,
    glob,
    readdir,
    walk,
    walk_entries,
)


class CountingFileSystem(MemoryFileSystem):
    """Records every directory listing."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.listed: list[str] = []

    def list_dir(self, path: str) -> list[DirEntry]:
        self.listed.append(path)
        return super().list_dir(path)


class FailingFileSystem(MemoryFileSystem):
    """Raises an I/O error when one directory is listed."""

    def __init__(self, files: dict[str, str], broken: str):
        super().__init__(files)
        self.broken = broken

    def list_dir(self, path: str) -> list[DirEntry]:
        if path == self.broken:
            raise OSError(errno.EIO, "Input/output error", path)
        return super().list_dir(path)


def test_memory_fs_basics():
    fs = MemoryFileSystem({"/r/a.txt": "hello", "/r/sub/b.txt": ""}, dirs=["/r/empty"])
    assert fs.read_text("/r/a.txt") == "hello"
    assert fs.exists("/r/sub")
    assert not fs.exists("/r/missing")
    assert sorted(fs.list_dir("/r"), key=lambda e: e.name) == [
        DirEntry("a.txt", EntryKind.file),
        DirEntry("empty", EntryKind.directory),
        DirEntry("sub", EntryKind.directory),
    ]
    with pytest.raises(FileNotFoundError):
        fs.read_text("/r/missing")
    with pytest.raises(IsADirectoryError):
        fs.read_text("/r/sub")
    with pytest.raises(NotADirectoryError):
        fs.list_dir("/r/a.txt")
    with pytest.raises(ValueError):
        fs.write_text("relative.txt", "")


def test_scenarios_in_memory():
    fs = MemoryFileSystem(
        {
            "/r/.gitignore": "*.log\n!important.log\ndist/\n",
            "/r/a.log": "",
            "/r/important.log": "",
            "/r/dist/output.js": "",
            "/r/dist/.gitignore": "!output.js\n",
            "/r/src/.gitignore": "*.test.ts\n",
            "/r/src/app.test.ts": "",
            "/r/src/app.ts": "",
            "/r/lib/app.test.ts": "",
        }
    )
    assert list(walk(cwd="/r", fs=fs)) == [
        ".gitignore",
        "important.log",
        "lib/app.test.ts",
        "src/.gitignore",
        "src/app.ts",
    ]
    assert list(glob("**/*.ts", cwd="/r", fs=fs)) == ["lib/app.test.ts", "src/app.ts"]
    assert readdir("/r", fs=fs) == [".gitignore", "important.log", "lib", "src"]


def test_gitignore_above_cwd_applies():
    fs = MemoryFileSystem({"/.gitignore": "*.bak\n", "/r/a.bak": "", "/r/a.txt": ""})
    assert list(walk(cwd="/r", fs=fs)) == ["a.txt"]


def test_excluded_directory_is_never_read():
    fs = CountingFileSystem(
        {"/r/.gitignore": "build/\n", "/r/build/x/y.txt": "", "/r/main.c": ""}
    )
    assert list(walk(cwd="/r", fs=fs)) == [".gitignore", "main.c"]
    assert fs.listed == ["/r"]


def test_walk_is_lazy():
    fs = CountingFileSystem({"/r/a/1.txt": "", "/r/b/2.txt": "", "/r/c/3.txt": ""})
    it = walk(cwd="/r", fs=fs)
    assert fs.listed == []
    assert next(it) == "a/1.txt"
    assert fs.listed == ["/r", "/r/a"]
    it.close()
    assert list(it) == []
    assert fs.listed == ["/r", "/r/a"]


def test_walk_consumed_fully_lists_each_directory_once():
    fs = CountingFileSystem({"/r/a/1.txt": "", "/r/b/2.txt": ""})
    assert list(walk(cwd="/r", fs=fs)) == ["a/1.txt", "b/2.txt"]
    assert fs.listed == ["/r", "/r/a", "/r/b"]


def test_permission_denied_directory_is_skipped():
    fs = MemoryFileSystem(
        {"/r/locked/secret.txt": "", "/r/open/a.txt": "", "/r/top.txt": ""},
        denied=["/r/locked"],
    )
    assert list(walk(cwd="/r", fs=fs)) == ["open/a.txt", "top.txt"]
    assert readdir("/r", fs=fs) == ["locked", "open", "top.txt"]


def test_permission_denied_root_yields_nothing():
    fs = MemoryFileSystem({"/r/a.txt": ""}, denied=["/r"])
    assert list(walk(cwd="/r", fs=fs)) == []


def test_other_errors_propagate():
    fs = FailingFileSystem({"/r/bad/a.txt": "", "/r/ok.txt": ""}, broken="/r/bad")
    with pytest.raises(OSError) as exc_info:
        list(walk(cwd="/r", fs=fs))
    assert exc_info.value.errno == errno.EIO


def test_relative_cwd_is_rejected():
    with pytest.raises(ValueError):
        walk(cwd="r", fs=MemoryFileSystem({"/r/a.txt": ""}))


def test_missing_cwd_is_rejected():
    with pytest.raises(FileNotFoundError):
        walk_entries(cwd="/nope", fs=MemoryFileSystem())


def test_entries_are_typed():
    fs = MemoryFileSystem({"/r/d/f.txt": ""})
    entries = list(walk_entries(cwd="/r", fs=fs))
    assert len(entries) == 1
    entry = entries[0]
    assert (entry.path, entry.name, entry.parent_path, entry.kind) == (
        "d/f.txt",
        "f.txt",
        "/r/d",
        EntryKind.file,
    )
    assert entry.is_file and not entry.is_dir and not entry.is_symlink
