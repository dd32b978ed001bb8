"""Data types shared by the pattern translator, evaluator and traversal driver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """
    File type of a directory entry, as reported without following symlinks.
    """

    file = "file"
    directory = "directory"
    symlink = "symlink"
    other = "other"


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing returned by a `FileSystem`."""

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.directory


@dataclass(frozen=True)
class FileEntry:
    """
    A traversal result with file type information.

    `path` is relative to the traversal root with forward slashes; `parent_path`
    is the absolute directory containing the entry.
    """

    path: str
    name: str
    parent_path: str
    kind: EntryKind

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.file

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.directory

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.symlink


@dataclass(frozen=True)
class Rule:
    """
    One parsed `.gitignore` line.

    `pattern` is the match pattern with the `!` prefix, the trailing `/` and the
    leading `/` removed. `raw` is the trimmed source line, kept for diagnostics.
    `scope` is the absolute directory holding the source file; all matching is
    relative to it. `source` is `None` for implicit rules.
    """

    pattern: str
    raw: str
    negation: bool
    directory_only: bool
    anchored: bool
    scope: str
    source: str | None = None
    line: int = 0

    @property
    def is_basename(self) -> bool:
        """Slash-free, unanchored patterns match the last path segment at any depth."""
        return not self.anchored and "/" not in self.pattern and "**" not in self.pattern

    @property
    def globs(self) -> list[str]:
        """Scope-relative glob strings this rule is tested with."""
        if self.anchored:
            bases = [self.pattern]
        elif self.is_basename or self.pattern.startswith("**/"):
            bases = [self.pattern if self.pattern.startswith("**/") else "**/" + self.pattern]
        else:
            bases = [self.pattern, "**/" + self.pattern]
        if self.directory_only:
            return [g for base in bases for g in (base, base + "/**")]
        return bases


@dataclass(frozen=True)
class MatchDecision:
    """
    Outcome of evaluating one candidate path. `rule` is the rule that produced
    the final state: the last plain rule when excluded, or the last negation
    that re-included the path. `None` when no rule matched.
    """

    excluded: bool
    rule: Rule | None = None


NOT_MATCHED = MatchDecision(excluded=False)


@dataclass(frozen=True)
class IgnoreReason:
    """
    Explanation of an ignore decision in the shape of `git check-ignore -v`.
    Paths are relative to the working directory the check ran from.
    """

    gitignore_file: str
    line_number: int
    pattern: str
    file_path: str
    ignored: bool
