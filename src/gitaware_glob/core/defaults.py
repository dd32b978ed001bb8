"""
Fixed names and implicit rules used during gitignore discovery.
"""

from __future__ import annotations

GITIGNORE_FILENAME = ".gitignore"

GIT_DIR_NAME = ".git"

# Directories the downward locator never enters.
RECURSIVE_SKIP_DIRS: frozenset[str] = frozenset({GIT_DIR_NAME, "node_modules"})

# Appended to every collected rule set, scoped to the traversal root.
IMPLICIT_PATTERNS: list[str] = [GIT_DIR_NAME]
