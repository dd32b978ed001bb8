"""
Settings for the `gitaware-glob` command from a TOML file.

The nearest `.gitaware-glob.toml`, `gitaware-glob.toml`, or `pyproject.toml`
with a `[tool.gitaware-glob]` table supplies defaults for ignore files and
output format. Flags given on the command line always take precedence.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

TOOL_NAME = "gitaware-glob"

_CONFIG_FILENAMES = [f".{TOOL_NAME}.toml", f"{TOOL_NAME}.toml", "pyproject.toml"]


@dataclass
class GitawareGlobConfig:
    """Configured values; `None` means the key was absent from the file."""

    additional_gitignore_files: list[str] | None = None
    sort: bool | None = None
    with_file_types: bool | None = None


_CONFIG_FIELDS = {f.name for f in fields(GitawareGlobConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the config file nearest to `start_dir`, checking each directory up
    to the filesystem root. A `pyproject.toml` counts only if it has a
    `[tool.gitaware-glob]` table.
    """
    directory = start_dir.resolve()
    for candidate_dir in (directory, *directory.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = candidate_dir / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _has_tool_table(candidate):
                return candidate
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return TOOL_NAME in data.get("tool", {})


def load_config(config_path: Path) -> GitawareGlobConfig:
    """
    Read a config file. Relative `additional-gitignore-files` entries are
    taken relative to the file's directory. Raises `tomllib.TOMLDecodeError`
    (a `ValueError`) on invalid TOML.
    """
    data = tomllib.loads(config_path.read_text())
    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get(TOOL_NAME, {})

    config = _parse_config_data(data)
    if config.additional_gitignore_files is not None:
        base = config_path.resolve().parent
        config.additional_gitignore_files = [
            str(base / f) for f in config.additional_gitignore_files
        ]
    return config


def _parse_config_data(data: dict[str, Any]) -> GitawareGlobConfig:
    # Tables such as [discovery] or [output] are only for grouping.
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    values = {
        key.replace("-", "_"): value
        for key, value in flat.items()
        if key.replace("-", "_") in _CONFIG_FIELDS
    }
    return GitawareGlobConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: GitawareGlobConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Fill options the user did not pass on the command line from `config`.
    `explicit_flags` names the option fields given explicitly.
    """
    if config is None:
        return cli_opts

    for name in _CONFIG_FIELDS:
        value = getattr(config, name)
        if value is None or name in explicit_flags:
            continue
        if hasattr(cli_opts, name):
            setattr(cli_opts, name, value)
    return cli_opts
