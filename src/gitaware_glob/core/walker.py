"""
Gitignore-aware traversal of a directory tree.

Traversal is depth first and lazy: a directory is listed only when the
consumer pulls past the entries before it, so abandoning the generator stops
all further reads. Each directory's own `.gitignore` is read when the
directory is entered and applies to that subtree only. Excluded directories
are never entered, so `.gitignore` files inside them are never read.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from gitaware_glob.core.defaults import GIT_DIR_NAME
from gitaware_glob.core.fs import FileSystem
from gitaware_glob.core.gitignore import PatternStore
from gitaware_glob.core.matching import glob_match, is_excluded
from gitaware_glob.core.types import DirEntry, FileEntry, MatchDecision, Rule

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """A directory being traversed, with the rules in effect inside it."""

    rel_dir: str
    abs_dir: str
    rules: list[Rule]
    entries: Iterator[DirEntry]


def _require_root(cwd: str, fs: FileSystem) -> str:
    if not posixpath.isabs(cwd):
        raise ValueError(f"cwd must be an absolute path: {cwd}")
    root = posixpath.normpath(cwd)
    if not fs.exists(root):
        raise FileNotFoundError(f"Path not found: {cwd}")
    return root


def _resolve_ignore_files(root: str, files: Sequence[str]) -> list[str]:
    return [posixpath.normpath(posixpath.join(root, f)) for f in files]


def _list_sorted(abs_dir: str, fs: FileSystem) -> list[DirEntry] | None:
    """List a directory sorted by name, or `None` if permission is denied."""
    try:
        entries = fs.list_dir(abs_dir)
    except PermissionError:
        logger.debug("Permission denied listing %s", abs_dir)
        return None
    return sorted(entries, key=lambda e: e.name)


def _walk(
    root: str,
    fs: FileSystem,
    additional_gitignore_files: Sequence[str],
    *,
    recursive: bool = True,
    include_dirs: bool = False,
) -> Iterator[FileEntry]:
    """
    Yield non-ignored entries below `root`. Files always; directories too when
    `include_dirs` is set. With `recursive=False` only the top level is listed.
    """
    store = PatternStore(fs, _resolve_ignore_files(root, additional_gitignore_files))
    excluded_dirs: dict[str, MatchDecision] = {}

    top = _list_sorted(root, fs)
    if top is None:
        return
    stack = [_Frame("", root, store.collect(root), iter(top))]

    while stack:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            continue
        if entry.name == GIT_DIR_NAME:
            continue

        rel_path = posixpath.join(frame.rel_dir, entry.name) if frame.rel_dir else entry.name
        result = FileEntry(
            path=rel_path, name=entry.name, parent_path=frame.abs_dir, kind=entry.kind
        )

        if entry.is_dir:
            decision = is_excluded(
                rel_path + "/", frame.rules, root=root, excluded_dirs=excluded_dirs
            )
            if decision.excluded:
                excluded_dirs[rel_path] = decision
                logger.debug(
                    "Pruned %s/ (%s)", rel_path, decision.rule.raw if decision.rule else "?"
                )
                continue
            if include_dirs:
                yield result
            if not recursive:
                continue
            abs_dir = posixpath.join(frame.abs_dir, entry.name)
            children = _list_sorted(abs_dir, fs)
            if children is None:
                continue
            rules = frame.rules + store.load_directory(abs_dir)
            stack.append(_Frame(rel_path, abs_dir, rules, iter(children)))
        else:
            decision = is_excluded(rel_path, frame.rules, root=root, excluded_dirs=excluded_dirs)
            if not decision.excluded:
                yield result


def walk_entries(
    *, cwd: str, fs: FileSystem, additional_gitignore_files: Sequence[str] = ()
) -> Iterator[FileEntry]:
    """Yield every file below `cwd` that Git would not ignore, with type info."""
    root = _require_root(cwd, fs)
    return _walk(root, fs, additional_gitignore_files)


def walk(
    *, cwd: str, fs: FileSystem, additional_gitignore_files: Sequence[str] = ()
) -> Iterator[str]:
    """Yield relative paths of every file below `cwd` that Git would not ignore."""
    return (
        entry.path
        for entry in walk_entries(
            cwd=cwd, fs=fs, additional_gitignore_files=additional_gitignore_files
        )
    )


def glob_entries(
    pattern: str,
    *,
    cwd: str,
    fs: FileSystem,
    additional_gitignore_files: Sequence[str] = (),
) -> Iterator[FileEntry]:
    """
    Yield non-ignored files below `cwd` whose relative path matches the glob
    `pattern` (e.g. `**/*.py`, `src/*.ts`), with type info.
    """
    root = _require_root(cwd, fs)
    pattern = pattern.removeprefix("./")
    return (
        entry
        for entry in _walk(root, fs, additional_gitignore_files)
        if glob_match(entry.path, pattern)
    )


def glob(
    pattern: str,
    *,
    cwd: str,
    fs: FileSystem,
    additional_gitignore_files: Sequence[str] = (),
) -> Iterator[str]:
    """Yield relative paths of non-ignored files below `cwd` matching `pattern`."""
    return (
        entry.path
        for entry in glob_entries(
            pattern, cwd=cwd, fs=fs, additional_gitignore_files=additional_gitignore_files
        )
    )


def readdir_entries(
    path: str,
    *,
    fs: FileSystem,
    recursive: bool = False,
    additional_gitignore_files: Sequence[str] = (),
) -> list[FileEntry]:
    """
    List the non-ignored files and directories in `path`, sorted by relative
    path. With `recursive`, entries of non-ignored subdirectories are included.
    """
    root = _require_root(path, fs)
    entries = list(
        _walk(root, fs, additional_gitignore_files, recursive=recursive, include_dirs=True)
    )
    entries.sort(key=lambda e: e.path)
    return entries


def readdir(
    path: str,
    *,
    fs: FileSystem,
    recursive: bool = False,
    additional_gitignore_files: Sequence[str] = (),
) -> list[str]:
    """Like `readdir_entries`, returning relative paths."""
    return [
        entry.path
        for entry in readdir_entries(
            path, fs=fs, recursive=recursive, additional_gitignore_files=additional_gitignore_files
        )
    ]
