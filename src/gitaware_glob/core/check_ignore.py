"""
Explain ignore decisions for single paths, like `git check-ignore -v`.
"""

from __future__ import annotations

import posixpath
from collections.abc import Sequence

from gitaware_glob.core.fs import FileSystem
from gitaware_glob.core.gitignore import find_gitignore_files, load_rules
from gitaware_glob.core.matching import check_path
from gitaware_glob.core.types import EntryKind, IgnoreReason, Rule


def _is_directory(abs_path: str, fs: FileSystem) -> bool:
    """Look `abs_path` up in its parent's listing. Missing or unlistable means no."""
    parent, name = posixpath.split(abs_path)
    if not name or not fs.exists(abs_path):
        return False
    try:
        entries = fs.list_dir(parent)
    except PermissionError:
        return False
    return any(e.name == name and e.kind is EntryKind.directory for e in entries)


def check_ignore(
    file_path: str,
    *,
    cwd: str,
    fs: FileSystem,
    additional_gitignore_files: Sequence[str] = (),
    is_dir: bool | None = None,
) -> IgnoreReason | None:
    """
    Find the rule that decides whether `file_path` is ignored.

    Every `.gitignore` from `/` down to the file's directory is consulted,
    outermost first. If an ancestor directory is excluded, the directory's rule
    is reported, since nothing inside an excluded directory can be re-included.
    Returns `None` when no rule matches the path at all. A path re-included by a
    negation gets a reason with `ignored=False`.

    `is_dir` defaults to what `fs` reports for the path, so directory-only
    rules apply to existing directories. Pass it to check a path that does
    not exist yet.
    """
    if not posixpath.isabs(cwd):
        raise ValueError(f"cwd must be an absolute path: {cwd}")
    cwd = posixpath.normpath(cwd)
    abs_path = posixpath.normpath(posixpath.join(cwd, file_path))

    rules: list[Rule] = []
    for path in additional_gitignore_files:
        rules.extend(load_rules(posixpath.join(cwd, path), fs, scope=cwd))
    for gitignore in find_gitignore_files(posixpath.dirname(abs_path), fs):
        rules.extend(load_rules(gitignore, fs))

    if is_dir is None:
        is_dir = _is_directory(abs_path, fs)
    candidate = abs_path.lstrip("/") + ("/" if is_dir else "")
    decision = check_path(candidate, rules, root="/")
    rule = decision.rule
    if rule is None or rule.source is None:
        return None

    return IgnoreReason(
        gitignore_file=posixpath.relpath(rule.source, cwd),
        line_number=rule.line,
        pattern=rule.raw,
        file_path=posixpath.relpath(abs_path, cwd),
        ignored=decision.excluded,
    )


def format_reason(reason: IgnoreReason) -> str:
    """Format as `<gitignore file>:<line>:<pattern>\\t<path>`."""
    return f"{reason.gitignore_file}:{reason.line_number}:{reason.pattern}\t{reason.file_path}"
