"""
Order-sensitive evaluation of gitignore rules against candidate paths.

Evaluation is a fold over the ordered rules, not a first-match scan: every
rule in scope that matches flips the state, so later (nearer, more specific)
rules win. A directory that ends up excluded hides everything below it, and
no later rule, negations included, can bring its contents back.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping, MutableMapping, Sequence
from functools import cache

import pathspec

from gitaware_glob.core.types import NOT_MATCHED, MatchDecision, Rule

logger = logging.getLogger(__name__)


@cache
def _compile_glob(pattern: str) -> pathspec.PathSpec | None:
    try:
        # Leading slash anchors the glob at the start of the path.
        return pathspec.PathSpec.from_lines("gitignore", ["/" + pattern])
    except ValueError as e:
        logger.debug("Unmatchable pattern %r: %s", pattern, e)
        return None


def glob_match(path: str, pattern: str) -> bool:
    """
    Match a `/`-separated relative path against a glob with `*`, `?`, `[...]`
    and `**`. `*` does not cross `/` and matches dotfiles.
    A glob that is a literal directory path, such as `src`, also matches the
    paths below it; `*` alone matches top-level names only.
    """
    spec = _compile_glob(pattern)
    return spec is not None and spec.match_file(path)


def _relative_to_scope(abs_path: str, scope: str) -> str | None:
    """Return `abs_path` relative to `scope`, or `None` when it lies outside."""
    if scope == "/":
        return abs_path[1:] or None
    if abs_path.startswith(scope + "/"):
        return abs_path[len(scope) + 1 :]
    return None


def _names(rule: Rule, path: str) -> bool:
    """Whether the rule's pattern names `path` itself, flags aside."""
    if rule.is_basename:
        return glob_match(posixpath.basename(path), rule.pattern)

    if rule.anchored or rule.pattern.startswith("**/"):
        globs = [rule.pattern]
    else:
        globs = [rule.pattern, "**/" + rule.pattern]
    if not any(glob_match(path, g) for g in globs):
        return False
    # pathspec also matches below a directory the glob names; those are not named.
    parent = posixpath.dirname(path)
    return not (parent and any(glob_match(parent, g) for g in globs))


def rule_matches(rule: Rule, path: str, is_dir: bool) -> bool:
    """
    Test one rule against a path relative to the rule's scope.

    A rule matches the path it names (directory-only rules name directories
    only) and, unless it is a negation, anything nested under a directory it
    names. A negation re-includes only the path it names.
    """
    if (is_dir or not rule.directory_only) and _names(rule, path):
        return True
    if rule.negation:
        return False
    return any(_names(rule, ancestor) for ancestor in _ancestors(path))


def _ancestors(path: str) -> list[str]:
    """`a/b/c` -> `["a", "a/b"]`."""
    parts = path.split("/")
    return ["/".join(parts[:i]) for i in range(1, len(parts))]


def is_excluded(
    candidate: str,
    rules: Sequence[Rule],
    *,
    root: str,
    excluded_dirs: Mapping[str, MatchDecision] | None = None,
) -> MatchDecision:
    """
    Decide whether `candidate` is ignored.

    `candidate` is relative to `root`, uses `/` separators, and ends with `/`
    when it names a directory. `excluded_dirs` maps directories (relative to
    `root`, no trailing slash) already excluded in this traversal to the
    decision that excluded them; anything below one of them keeps that decision.
    Without `excluded_dirs`, ancestor directories are evaluated first, as in
    `check_path`, so nothing inside an excluded directory is ever re-included.
    """
    if excluded_dirs is None:
        return check_path(candidate, rules, root=root)

    is_dir = candidate.endswith("/")
    path = candidate.rstrip("/")

    if excluded_dirs:
        for ancestor in _ancestors(path):
            if ancestor in excluded_dirs:
                return excluded_dirs[ancestor]

    abs_path = posixpath.join(root, path)
    excluded = False
    matched: Rule | None = None
    for rule in rules:
        scoped = _relative_to_scope(abs_path, rule.scope)
        if scoped is None:
            continue
        if not rule_matches(rule, scoped, is_dir):
            continue
        excluded = not rule.negation
        matched = rule

    if matched is None:
        return NOT_MATCHED
    return MatchDecision(excluded=excluded, rule=matched)


def check_path(
    candidate: str,
    rules: Sequence[Rule],
    *,
    root: str,
    excluded_dirs: MutableMapping[str, MatchDecision] | None = None,
) -> MatchDecision:
    """
    Like `is_excluded`, but first evaluates every ancestor directory of
    `candidate` top-down, so a path inside an excluded directory is reported as
    excluded by the directory's rule. Use this when evaluating a single path
    outside of a traversal.
    """
    if excluded_dirs is None:
        excluded_dirs = {}
    for ancestor in _ancestors(candidate.rstrip("/")):
        if ancestor in excluded_dirs:
            return excluded_dirs[ancestor]
        decision = is_excluded(ancestor + "/", rules, root=root, excluded_dirs=excluded_dirs)
        if decision.excluded:
            excluded_dirs[ancestor] = decision
            return decision
    return is_excluded(candidate, rules, root=root, excluded_dirs=excluded_dirs)
