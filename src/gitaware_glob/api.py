"""
Convenience wrappers over `gitaware_glob.core` for the local disk.

`cwd` defaults to the process's current directory and `fs` to a fresh
`LocalFileSystem`; both defaults are applied here, at the call boundary.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from gitaware_glob import core
from gitaware_glob.core import FileEntry, FileSystem, IgnoreReason, LocalFileSystem

StrPath = str | Path


def _abs(path: StrPath | None, base: str | None = None) -> str:
    if path is None:
        return Path.cwd().as_posix()
    p = Path(path)
    if not p.is_absolute():
        p = Path(base or os.getcwd()) / p
    return Path(os.path.normpath(p)).as_posix()


def _ignore_files(files: Sequence[StrPath], cwd: str) -> list[str]:
    return [_abs(f, cwd) for f in files]


def glob(
    pattern: str,
    *,
    cwd: StrPath | None = None,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> Iterator[str]:
    """Lazily yield relative paths of non-ignored files matching `pattern`."""
    root = _abs(cwd)
    return core.glob(
        pattern,
        cwd=root,
        fs=fs or LocalFileSystem(),
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def glob_entries(
    pattern: str,
    *,
    cwd: StrPath | None = None,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> Iterator[FileEntry]:
    """Lazily yield `FileEntry` records of non-ignored files matching `pattern`."""
    root = _abs(cwd)
    return core.glob_entries(
        pattern,
        cwd=root,
        fs=fs or LocalFileSystem(),
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def walk(
    *,
    cwd: StrPath | None = None,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> Iterator[str]:
    """Lazily yield relative paths of every non-ignored file."""
    root = _abs(cwd)
    return core.walk(
        cwd=root,
        fs=fs or LocalFileSystem(),
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def walk_entries(
    *,
    cwd: StrPath | None = None,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> Iterator[FileEntry]:
    """Lazily yield `FileEntry` records of every non-ignored file."""
    root = _abs(cwd)
    return core.walk_entries(
        cwd=root,
        fs=fs or LocalFileSystem(),
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def readdir(
    path: StrPath = ".",
    *,
    recursive: bool = False,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> list[str]:
    """Sorted relative paths of the non-ignored entries of `path`."""
    root = _abs(path)
    return core.readdir(
        root,
        fs=fs or LocalFileSystem(),
        recursive=recursive,
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def readdir_entries(
    path: StrPath = ".",
    *,
    recursive: bool = False,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
) -> list[FileEntry]:
    """Sorted `FileEntry` records of the non-ignored entries of `path`."""
    root = _abs(path)
    return core.readdir_entries(
        root,
        fs=fs or LocalFileSystem(),
        recursive=recursive,
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
    )


def find_gitignore_files(
    start_dir: StrPath | None = None, *, fs: FileSystem | None = None
) -> list[str]:
    """Absolute paths of `.gitignore` files from `/` down to `start_dir`."""
    return core.find_gitignore_files(_abs(start_dir), fs or LocalFileSystem())


def find_gitignore_files_recursive(
    root_dir: StrPath | None = None, *, fs: FileSystem | None = None
) -> list[str]:
    """Absolute paths of every `.gitignore` below `root_dir`."""
    return core.find_gitignore_files_recursive(_abs(root_dir), fs or LocalFileSystem())


def gitignore_to_globs(
    path: StrPath, *, base_dir: StrPath | None = None, fs: FileSystem | None = None
) -> list[str]:
    """Normalized glob strings for the rules of one `.gitignore` file."""
    return core.gitignore_to_globs(
        _abs(path), fs or LocalFileSystem(), _abs(base_dir) if base_dir is not None else None
    )


def check_ignore(
    file_path: StrPath,
    *,
    cwd: StrPath | None = None,
    fs: FileSystem | None = None,
    additional_gitignore_files: Sequence[StrPath] = (),
    is_dir: bool | None = None,
) -> IgnoreReason | None:
    """
    Explain why `file_path` is or is not ignored; `None` if no rule matches.
    Whether the path is a directory is looked up on disk unless `is_dir` is given.
    """
    root = _abs(cwd)
    return core.check_ignore(
        Path(file_path).as_posix(),
        cwd=root,
        fs=fs or LocalFileSystem(),
        additional_gitignore_files=_ignore_files(additional_gitignore_files, root),
        is_dir=is_dir,
    )
