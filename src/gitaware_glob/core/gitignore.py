"""Discovery of `.gitignore` files and collection of their rules."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Sequence

from gitaware_glob.core.defaults import (
    GITIGNORE_FILENAME,
    IMPLICIT_PATTERNS,
    RECURSIVE_SKIP_DIRS,
)
from gitaware_glob.core.fs import FileSystem
from gitaware_glob.core.patterns import parse_gitignore, translate_line
from gitaware_glob.core.types import Rule

logger = logging.getLogger(__name__)


def find_gitignore_in_dir(directory: str, fs: FileSystem) -> str | None:
    """Return the path of `directory/.gitignore` if it exists."""
    candidate = posixpath.join(directory, GITIGNORE_FILENAME)
    if fs.exists(candidate):
        return candidate
    return None


def find_gitignore_files(start_dir: str, fs: FileSystem) -> list[str]:
    """
    Probe `start_dir` and each of its ancestors up to `/` for a `.gitignore`.
    Returns the files found, outermost first.
    """
    found: list[str] = []
    current = posixpath.normpath(start_dir)
    while True:
        gitignore = find_gitignore_in_dir(current, fs)
        if gitignore is not None:
            found.append(gitignore)
        parent = posixpath.dirname(current)
        if parent == current:
            break
        current = parent
    found.reverse()
    return found


def find_gitignore_files_recursive(root_dir: str, fs: FileSystem) -> list[str]:
    """
    Collect every `.gitignore` below `root_dir`, depth first. `.git` and
    `node_modules` are not entered, and unreadable directories count as empty.
    """
    found: list[str] = []
    stack = [posixpath.normpath(root_dir)]
    while stack:
        directory = stack.pop()
        try:
            entries = fs.list_dir(directory)
        except PermissionError:
            logger.debug("Permission denied listing %s", directory)
            continue
        subdirs: list[str] = []
        for entry in sorted(entries, key=lambda e: e.name):
            path = posixpath.join(directory, entry.name)
            if entry.is_dir:
                if entry.name not in RECURSIVE_SKIP_DIRS:
                    subdirs.append(path)
            elif entry.name == GITIGNORE_FILENAME:
                found.append(path)
        stack.extend(reversed(subdirs))
    return found


def load_rules(path: str, fs: FileSystem, scope: str | None = None) -> list[Rule]:
    """
    Read a gitignore-syntax file into rules. `scope` defaults to the file's own
    directory. A missing file contributes no rules.
    """
    if not fs.exists(path):
        logger.debug("Ignore file not found: %s", path)
        return []
    if scope is None:
        scope = posixpath.dirname(path)
    rules = parse_gitignore(fs.read_text(path), scope, path)
    logger.debug("Loaded %d rules from %s", len(rules), path)
    return rules


def implicit_rules(root: str) -> list[Rule]:
    """Rules every traversal carries regardless of `.gitignore` content."""
    rules = [translate_line(pattern, root) for pattern in IMPLICIT_PATTERNS]
    return [rule for rule in rules if rule is not None]


class PatternStore:
    """
    Builds the ordered rule set for a traversal: auxiliary ignore files first
    (lowest priority), then every `.gitignore` from `/` down to the traversal
    root, then the implicit `.git` rule. Rules of nested directories are loaded
    on demand with `load_directory` as the traversal reaches them.
    """

    def __init__(self, fs: FileSystem, additional_gitignore_files: Sequence[str] = ()) -> None:
        self.fs: FileSystem = fs
        self.additional_gitignore_files: list[str] = list(additional_gitignore_files)

    def collect(self, root: str) -> list[Rule]:
        """Ordered rules in effect at `root`, outermost scope first."""
        rules: list[Rule] = []
        for path in self.additional_gitignore_files:
            # Auxiliary files apply from the traversal root, like a global excludes file.
            rules.extend(load_rules(path, self.fs, scope=root))
        for path in find_gitignore_files(root, self.fs):
            rules.extend(load_rules(path, self.fs))
        rules.extend(implicit_rules(root))
        return rules

    def load_directory(self, directory: str) -> list[Rule]:
        """Rules from `directory/.gitignore`, or nothing if there is none."""
        gitignore = find_gitignore_in_dir(directory, self.fs)
        if gitignore is None:
            return []
        return load_rules(gitignore, self.fs)
