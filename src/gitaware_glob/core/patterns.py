"""
Translation of `.gitignore` lines into `Rule` objects.

Gitignore syntax handled here:
- Blank lines and lines starting with `#` are skipped (`\\#` is a literal `#`)
- A leading `!` negates the pattern (`\\!` is a literal `!`)
- A trailing `/` restricts the pattern to directories
- A leading `/` anchors the pattern to the directory of the `.gitignore`
- `*`, `?`, `[...]` and `**` are left as-is for the glob matcher
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable

from gitaware_glob.core.defaults import GITIGNORE_FILENAME
from gitaware_glob.core.fs import FileSystem
from gitaware_glob.core.types import Rule


def _trim(line: str) -> str:
    """Strip surrounding whitespace, keeping one backslash-escaped trailing space."""
    stripped = line.strip()
    if stripped.endswith("\\") and line.rstrip("\r\n").endswith("\\ "):
        return stripped + " "
    return stripped


def translate_line(
    line: str, scope: str, source: str | None = None, line_number: int = 0
) -> Rule | None:
    """
    Convert one `.gitignore` line into a `Rule`, or `None` for blank lines,
    comments, the self-reference `.gitignore`, and lines that are empty once
    their markers are removed.
    """
    raw = _trim(line)
    if not raw or raw.startswith("#") or raw == GITIGNORE_FILENAME:
        return None

    pattern = raw
    negation = pattern.startswith("!")
    if negation:
        pattern = pattern[1:]

    directory_only = pattern.endswith("/") and not pattern.endswith("\\/")
    if directory_only:
        pattern = pattern.rstrip("/")

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern.lstrip("/")

    if not pattern:
        return None

    return Rule(
        pattern=pattern,
        raw=raw,
        negation=negation,
        directory_only=directory_only,
        anchored=anchored,
        scope=scope,
        source=source,
        line=line_number,
    )


def parse_gitignore(content: str, scope: str, source: str | None = None) -> list[Rule]:
    """Parse the full text of a `.gitignore` file. Line numbers are 1-based."""
    rules: list[Rule] = []
    for number, line in enumerate(content.splitlines(), start=1):
        rule = translate_line(line, scope, source, number)
        if rule is not None:
            rules.append(rule)
    return rules


def render_globs(rules: Iterable[Rule], base_dir: str | None = None) -> list[str]:
    """
    Render rules as flat glob strings. Rules scoped below `base_dir` get their
    scope prefixed; negations keep their `!`.
    """
    result: list[str] = []
    for rule in rules:
        prefix = ""
        if base_dir is not None and rule.scope != base_dir:
            rel_scope = posixpath.relpath(rule.scope, base_dir)
            if not rel_scope.startswith(".."):
                prefix = rel_scope + "/"
        bang = "!" if rule.negation else ""
        result.extend(f"{bang}{prefix}{glob}" for glob in rule.globs)
    return result


def gitignore_to_globs(path: str, fs: FileSystem, base_dir: str | None = None) -> list[str]:
    """
    Read one `.gitignore` file and return the normalized glob strings its rules
    are matched with. Debugging aid; the evaluator works on `Rule` objects.
    """
    scope = posixpath.dirname(path)
    rules = parse_gitignore(fs.read_text(path), scope, path)
    return render_globs(rules, base_dir)
