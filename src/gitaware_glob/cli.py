#!/usr/bin/env python3
"""
gitaware-glob: List files the way Git sees them, skipping everything ignored

Common usage:
  gitaware-glob                      # every non-ignored file
  gitaware-glob '**/*.py'            # non-ignored files matching a glob
  gitaware-glob --readdir src        # non-ignored entries of one directory
  gitaware-glob -v --check-ignore build/out.js

Output of `--check-ignore -v` uses the `git check-ignore -v` line format.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from gitaware_glob import api
from gitaware_glob.config import find_config_file, load_config, merge_cli_with_config
from gitaware_glob.core import FileEntry, format_reason


@dataclass
class Options:
    """Command-line options for the gitaware-glob tool."""

    pattern: str | None
    cwd: str
    additional_gitignore_files: list[str]
    sort: bool
    with_file_types: bool
    readdir: str | None
    recursive: bool
    list_gitignores: bool
    list_gitignores_recursive: bool
    show_globs: str | None
    check_ignore: list[str] | None
    verbose_reason: bool
    no_config: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which config-backed flags the user explicitly passed (for config merge
    precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="gitaware-glob",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pattern",
        nargs="?",
        default=None,
        help="Glob pattern relative to the working directory (e.g. '**/*.ts'). "
        "Omit to list every non-ignored file",
    )
    parser.add_argument(
        "-C",
        "--cwd",
        type=str,
        default=".",
        metavar="DIR",
        help="Directory to search from (default: current directory)",
    )
    parser.add_argument(
        "--additional-gitignore",
        action="append",
        default=[],
        dest="additional_gitignore_files",
        metavar="FILE",
        help="Extra ignore file applied before project .gitignore files "
        "(e.g. a global excludes file). Can be repeated",
    )
    parser.add_argument(
        "--sort", action="store_true", help="Sort output paths (readdir output is always sorted)"
    )
    parser.add_argument(
        "--with-file-types",
        action="store_true",
        dest="with_file_types",
        help="Print '<kind><TAB><path>' instead of bare paths",
    )
    parser.add_argument(
        "--readdir",
        type=str,
        default=None,
        metavar="DIR",
        help="List non-ignored files and directories in DIR",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="With --readdir, include entries of non-ignored subdirectories",
    )
    parser.add_argument(
        "--list-gitignores",
        action="store_true",
        dest="list_gitignores",
        help="Print the .gitignore files that apply to the working directory, outermost first",
    )
    parser.add_argument(
        "--list-gitignores-recursive",
        action="store_true",
        dest="list_gitignores_recursive",
        help="Print every .gitignore file below the working directory",
    )
    parser.add_argument(
        "--show-globs",
        type=str,
        default=None,
        metavar="FILE",
        help="Print the normalized glob patterns a .gitignore file translates to",
    )
    parser.add_argument(
        "--check-ignore",
        nargs="+",
        default=None,
        dest="check_ignore",
        metavar="PATH",
        help="Print the paths that are ignored (exit 1 if none are)",
    )
    parser.add_argument(
        "-v",
        "--verbose-reason",
        action="store_true",
        dest="verbose_reason",
        help="With --check-ignore, print the matching source, line and pattern",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Do not read .gitaware-glob.toml or pyproject.toml settings",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which config-backed flags were
    # actually supplied. append actions use None as sentinel.
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument(
        "--additional-gitignore", action="append", dest="additional_gitignore_files", default=None
    )
    sentinel_parser.add_argument("--sort", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument(
        "--with-file-types", action="store_true", dest="with_file_types", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    if sentinel_opts.additional_gitignore_files is not None:
        explicit_flags.add("additional_gitignore_files")
    for name in ("sort", "with_file_types"):
        if getattr(sentinel_opts, name) is not _SENTINEL:
            explicit_flags.add(name)

    return (
        Options(
            pattern=opts.pattern,
            cwd=opts.cwd,
            additional_gitignore_files=opts.additional_gitignore_files,
            sort=opts.sort,
            with_file_types=opts.with_file_types,
            readdir=opts.readdir,
            recursive=opts.recursive,
            list_gitignores=opts.list_gitignores,
            list_gitignores_recursive=opts.list_gitignores_recursive,
            show_globs=opts.show_globs,
            check_ignore=opts.check_ignore,
            verbose_reason=opts.verbose_reason,
            no_config=opts.no_config,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _format_entry(entry: FileEntry, with_file_types: bool) -> str:
    if with_file_types:
        return f"{entry.kind.value}\t{entry.path}"
    return entry.path


def _run_check_ignore(paths: list[str], options: Options, cwd: Path) -> int:
    any_ignored = False
    for path in paths:
        reason = api.check_ignore(
            path, cwd=cwd, additional_gitignore_files=options.additional_gitignore_files
        )
        if reason is None:
            continue
        if options.verbose_reason:
            # Like git, -v also reports paths re-included by a negation.
            print(format_reason(reason))
            any_ignored = any_ignored or reason.ignored
        elif reason.ignored:
            print(reason.file_path)
            any_ignored = True
    return 0 if any_ignored else 1


def _run_listing(options: Options, cwd: Path) -> int:
    if options.readdir is not None:
        entries = api.readdir_entries(
            cwd / options.readdir,
            recursive=options.recursive,
            additional_gitignore_files=options.additional_gitignore_files,
        )
    elif options.pattern is not None:
        entries = api.glob_entries(
            options.pattern,
            cwd=cwd,
            additional_gitignore_files=options.additional_gitignore_files,
        )
    else:
        entries = api.walk_entries(
            cwd=cwd, additional_gitignore_files=options.additional_gitignore_files
        )

    if options.sort:
        entries = sorted(entries, key=lambda e: e.path)
    for entry in entries:
        print(_format_entry(entry, options.with_file_types))
    return 0


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the gitaware-glob CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if options.version:
        try:
            version = importlib.metadata.version("gitaware-glob")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    cwd = Path(options.cwd).resolve()
    if not cwd.is_dir():
        print(f"Error: Not a directory: {options.cwd}", file=sys.stderr)
        return 1

    if options.verbose_reason and options.check_ignore is None:
        print("Error: -v/--verbose-reason requires --check-ignore", file=sys.stderr)
        return 1

    if not options.no_config:
        config_path = find_config_file(cwd)
        if config_path:
            try:
                config = load_config(config_path)
            except ValueError as e:
                print(f"Error: Invalid config file {config_path}: {e}", file=sys.stderr)
                return 1
            merge_cli_with_config(options, config, explicit_flags)

    try:
        if options.list_gitignores:
            for path in api.find_gitignore_files(cwd):
                print(path)
            return 0
        if options.list_gitignores_recursive:
            for path in api.find_gitignore_files_recursive(cwd):
                print(path)
            return 0
        if options.show_globs is not None:
            for pattern in api.gitignore_to_globs(cwd / options.show_globs, base_dir=cwd):
                print(pattern)
            return 0
        if options.check_ignore is not None:
            return _run_check_ignore(options.check_ignore, options, cwd)
        return _run_listing(options, cwd)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
