"""
Gitignore-aware file globbing.

Returns the files Git would not ignore, honoring every applicable `.gitignore`
(ancestors of the search root and nested ones), negations, and the rule that
nothing inside an excluded directory can be re-included.

Usage::

    from gitaware_glob import check_ignore, format_reason, glob

    for path in glob("**/*.py", cwd="my-project"):
        print(path)

    reason = check_ignore("build/out.js", cwd="my-project")
    if reason:
        print(format_reason(reason))

The filesystem-injected variants live in `gitaware_glob.core`.
"""

from gitaware_glob.api import (
    check_ignore,
    find_gitignore_files,
    find_gitignore_files_recursive,
    gitignore_to_globs,
    glob,
    glob_entries,
    readdir,
    readdir_entries,
    walk,
    walk_entries,
)
from gitaware_glob.core import (
    EntryKind,
    FileEntry,
    FileSystem,
    IgnoreReason,
    LocalFileSystem,
    MemoryFileSystem,
    format_reason,
)

__all__ = [
    "EntryKind",
    "FileEntry",
    "FileSystem",
    "IgnoreReason",
    "LocalFileSystem",
    "MemoryFileSystem",
    "check_ignore",
    "find_gitignore_files",
    "find_gitignore_files_recursive",
    "format_reason",
    "gitignore_to_globs",
    "glob",
    "glob_entries",
    "readdir",
    "readdir_entries",
    "walk",
    "walk_entries",
]
