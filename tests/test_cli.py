"""CLI integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitaware_glob.cli import main


def _make_tree(root: Path) -> None:
    """Create a small project with root and nested ignore rules."""
    (root / ".gitignore").write_text("*.log\n!important.log\ndist/\n")
    (root / "a.log").write_text("")
    (root / "important.log").write_text("")
    (root / "README.md").write_text("# Root\n")
    dist = root / "dist"
    dist.mkdir()
    (dist / "output.js").write_text("")
    (dist / ".gitignore").write_text("!output.js\n")
    src = root / "src"
    src.mkdir()
    (src / ".gitignore").write_text("*.test.ts\n")
    (src / "app.ts").write_text("")
    (src / "app.test.ts").write_text("")


def _lines(out: str) -> list[str]:
    return [line for line in out.split("\n") if line]


def test_walk_all_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config"]) == 0
    assert _lines(capsys.readouterr().out) == [
        ".gitignore",
        "README.md",
        "important.log",
        "src/.gitignore",
        "src/app.ts",
    ]


def test_glob_pattern_with_cwd_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "**/*.ts"]) == 0
    assert _lines(capsys.readouterr().out) == ["src/app.ts"]


def test_with_file_types(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "--with-file-types", "*.md"]) == 0
    assert _lines(capsys.readouterr().out) == ["file\tREADME.md"]


def test_readdir(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "--readdir", "."]) == 0
    assert _lines(capsys.readouterr().out) == [".gitignore", "README.md", "important.log", "src"]


def test_readdir_recursive_subdirectory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "--readdir", "src", "-r"]) == 0
    assert _lines(capsys.readouterr().out) == [".gitignore", "app.ts"]


def test_list_gitignores(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    root = tmp_path.resolve()
    assert main(["--no-config", "-C", str(tmp_path / "src"), "--list-gitignores"]) == 0
    lines = _lines(capsys.readouterr().out)
    assert lines[-2:] == [(root / ".gitignore").as_posix(), (root / "src" / ".gitignore").as_posix()]


def test_list_gitignores_recursive(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    root = tmp_path.resolve()
    assert main(["--no-config", "-C", str(tmp_path), "--list-gitignores-recursive"]) == 0
    assert _lines(capsys.readouterr().out) == [
        (root / ".gitignore").as_posix(),
        (root / "dist" / ".gitignore").as_posix(),
        (root / "src" / ".gitignore").as_posix(),
    ]


def test_show_globs(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "--show-globs", ".gitignore"]) == 0
    assert _lines(capsys.readouterr().out) == [
        "**/*.log",
        "!**/important.log",
        "**/dist",
        "**/dist/**",
    ]


def test_check_ignore(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    args = ["--no-config", "-C", str(tmp_path), "--check-ignore"]
    assert main([*args, "a.log", "src/app.ts", "dist/output.js"]) == 0
    assert _lines(capsys.readouterr().out) == ["a.log", "dist/output.js"]


def test_check_ignore_verbose(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    args = ["--no-config", "-C", str(tmp_path), "-v", "--check-ignore"]
    assert main([*args, "a.log", "important.log"]) == 0
    assert _lines(capsys.readouterr().out) == [
        ".gitignore:1:*.log\ta.log",
        ".gitignore:2:!important.log\timportant.log",
    ]


def test_check_ignore_nothing_ignored(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "--check-ignore", "README.md"]) == 1
    assert capsys.readouterr().out == ""


def test_verbose_reason_requires_check_ignore(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["--no-config", "-C", str(tmp_path), "-v"]) == 1
    assert "requires --check-ignore" in capsys.readouterr().err


def test_missing_cwd(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-C", str(tmp_path / "missing")]) == 1
    assert "Not a directory" in capsys.readouterr().err


def test_missing_show_globs_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--no-config", "-C", str(tmp_path), "--show-globs", "nope/.gitignore"]) == 2
    assert "Error:" in capsys.readouterr().err


def test_additional_gitignore_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    (tmp_path / "excludes").write_text("*.md\n")
    args = ["--no-config", "-C", str(tmp_path), "--additional-gitignore", "excludes", "*.md"]
    assert main(args) == 0
    assert capsys.readouterr().out == ""


def test_config_file_applies(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    (tmp_path / "global-ignore").write_text("README.md\n")
    (tmp_path / ".gitaware-glob.toml").write_text(
        'additional-gitignore-files = ["global-ignore"]\nwith-file-types = true\n'
    )
    assert main(["-C", str(tmp_path)]) == 0
    assert _lines(capsys.readouterr().out) == [
        "file\t.gitaware-glob.toml",
        "file\t.gitignore",
        "file\tglobal-ignore",
        "file\timportant.log",
        "file\tsrc/.gitignore",
        "file\tsrc/app.ts",
    ]


def test_no_config_skips_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "a.txt").write_text("")
    (tmp_path / ".gitaware-glob.toml").write_text("with-file-types = true\n")
    assert main(["--no-config", "-C", str(tmp_path), "*.txt"]) == 0
    assert _lines(capsys.readouterr().out) == ["a.txt"]


def test_invalid_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "gitaware-glob.toml").write_text("this is not valid toml [[[")
    assert main(["-C", str(tmp_path)]) == 1
    assert "Invalid config file" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_check_ignore_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "-C", str(tmp_path), "-v", "--check-ignore", "dist"]) == 0
    assert _lines(capsys.readouterr().out) == [".gitignore:3:dist/\tdist"]
