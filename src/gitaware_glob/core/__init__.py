"""
Filesystem-injected core of gitaware-glob.

Every entry point takes an absolute `cwd` and an explicit `fs` implementing
`FileSystem`, so the same code runs against the real disk or an in-memory tree.
No state is shared between calls.

Usage::

    from gitaware_glob.core import MemoryFileSystem, glob

    fs = MemoryFileSystem({
        "/repo/.gitignore": "*.log\\n",
        "/repo/app.py": "",
        "/repo/debug.log": "",
    })
    list(glob("**/*", cwd="/repo", fs=fs))  # [".gitignore", "app.py"]
"""

from gitaware_glob.core.check_ignore import check_ignore, format_reason
from gitaware_glob.core.fs import FileSystem, LocalFileSystem, MemoryFileSystem
from gitaware_glob.core.gitignore import (
    PatternStore,
    find_gitignore_files,
    find_gitignore_files_recursive,
)
from gitaware_glob.core.matching import check_path, glob_match, is_excluded
from gitaware_glob.core.patterns import gitignore_to_globs, parse_gitignore, translate_line
from gitaware_glob.core.types import (
    DirEntry,
    EntryKind,
    FileEntry,
    IgnoreReason,
    MatchDecision,
    Rule,
)
from gitaware_glob.core.walker import (
    glob,
    glob_entries,
    readdir,
    readdir_entries,
    walk,
    walk_entries,
)

__all__ = [
    "DirEntry",
    "EntryKind",
    "FileEntry",
    "FileSystem",
    "IgnoreReason",
    "LocalFileSystem",
    "MatchDecision",
    "MemoryFileSystem",
    "PatternStore",
    "Rule",
    "check_ignore",
    "check_path",
    "find_gitignore_files",
    "find_gitignore_files_recursive",
    "format_reason",
    "gitignore_to_globs",
    "glob",
    "glob_entries",
    "glob_match",
    "is_excluded",
    "parse_gitignore",
    "readdir",
    "readdir_entries",
    "translate_line",
    "walk",
    "walk_entries",
]
