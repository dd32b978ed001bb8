"""
Filesystem capability used by the core.

The core only needs three operations: read a file as text, list a directory
with entry types, and check whether a path exists. Anything implementing
`FileSystem` can be passed in: the real disk, an in-memory tree, or a remote
store.
"""

from __future__ import annotations

import errno
import os
import posixpath
from collections.abc import Iterable, Mapping
from typing import Protocol

from gitaware_glob.core.types import DirEntry, EntryKind


class FileSystem(Protocol):
    """Minimal filesystem interface. Paths are absolute and use `/` separators."""

    def read_text(self, path: str) -> str: ...

    def list_dir(self, path: str) -> list[DirEntry]: ...

    def exists(self, path: str) -> bool: ...


def _kind_of(entry: os.DirEntry[str]) -> EntryKind:
    if entry.is_symlink():
        return EntryKind.symlink
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.directory
    if entry.is_file(follow_symlinks=False):
        return EntryKind.file
    return EntryKind.other


class LocalFileSystem:
    """`FileSystem` backed by the host's disk."""

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    def list_dir(self, path: str) -> list[DirEntry]:
        # Materialize so the scandir handle is closed before anything is yielded.
        with os.scandir(path) as it:
            return [DirEntry(entry.name, _kind_of(entry)) for entry in it]

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)


class MemoryFileSystem:
    """
    In-memory `FileSystem`, mostly for tests.

    Built from a mapping of absolute file paths to text content; parent
    directories are created implicitly. Directories listed in `denied` raise
    `PermissionError` when listed, like an unreadable directory on disk.
    """

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        dirs: Iterable[str] = (),
        denied: Iterable[str] = (),
    ) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}
        self.denied: set[str] = {posixpath.normpath(d) for d in denied}
        for d in dirs:
            self.mkdir(d)
        for path, content in (files or {}).items():
            self.write_text(path, content)

    def mkdir(self, path: str) -> None:
        path = posixpath.normpath(path)
        while path not in self._dirs:
            self._dirs.add(path)
            path = posixpath.dirname(path)

    def write_text(self, path: str, content: str) -> None:
        path = posixpath.normpath(path)
        if not posixpath.isabs(path):
            raise ValueError(f"Path must be absolute: {path}")
        self.mkdir(posixpath.dirname(path))
        self._files[path] = content

    def read_text(self, path: str) -> str:
        path = posixpath.normpath(path)
        if path in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path) from None

    def list_dir(self, path: str) -> list[DirEntry]:
        path = posixpath.normpath(path)
        if path in self._files:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        if path not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        if path in self.denied:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        entries = [
            DirEntry(posixpath.basename(d), EntryKind.directory)
            for d in self._dirs
            if d != path and posixpath.dirname(d) == path
        ]
        entries.extend(
            DirEntry(posixpath.basename(f), EntryKind.file)
            for f in self._files
            if posixpath.dirname(f) == path
        )
        return entries

    def exists(self, path: str) -> bool:
        path = posixpath.normpath(path)
        return path in self._files or path in self._dirs
