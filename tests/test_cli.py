"""Tests for the changelog-release command-line interface."""

import argparse

import pytest

from changelog_release.cli import build_parser, main, parse_repo

FULL = "## [Unreleased]\n\n* Item A\n* Item B\n\n## [1.0.0] - 2020-05-02\n\n* Item C\n* Item D"


@pytest.fixture
def project(tmp_path, monkeypatch, write_changelog):
    monkeypatch.chdir(tmp_path)
    return write_changelog(FULL)


class TestParseRepo:
    """Test HOST/OWNER/NAME parsing."""

    def test_split(self):
        assert parse_repo("github.com/user/project") == ("github.com", "user/project")

    def test_none(self):
        assert parse_repo(None) == (None, None)

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_repo("github.com")


class TestParser:
    """Test argument parsing."""

    def test_release_flags(self):
        args = build_parser().parse_args(
            ["release", "1.0.1", "--dry-run", "--add-version-url", "--head", "main"]
        )
        assert args.version == "1.0.1"
        assert args.dry_run
        assert args.add_version_url
        assert args.head == "main"

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "changelog-release" in capsys.readouterr().out


class TestCommands:
    """Test command execution against a changelog in the cwd."""

    def test_validate(self, project, capsys):
        main(["validate", "--version", "1.0.1"])
        assert "CHANGELOG.md is valid (1 released version(s))" in capsys.readouterr().out

    def test_validate_error(self, project, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["validate", "--version", "0.1.0"])
        assert excinfo.value.code == 1
        assert 'ERROR: Invalid version "1.0.0"' in capsys.readouterr().err

    def test_notes(self, project, capsys):
        main(["notes", "--latest-version", "1.0.0"])
        assert capsys.readouterr().out == "* Item A\n* Item B\n"

    def test_notes_no_increment(self, project, capsys):
        main(["notes", "--version", "1.0.0", "--no-increment"])
        assert capsys.readouterr().out == "* Item C\n* Item D\n"

    def test_notes_strict_latest(self, tmp_path, monkeypatch, write_changelog, capsys):
        monkeypatch.chdir(tmp_path)
        write_changelog("## [Unreleased]\n\n* Item A", "NEW.md")
        with pytest.raises(SystemExit):
            main(["notes", "--filename", "NEW.md", "--latest-version", "0.9.0"])
        assert "Missing section for previous release" in capsys.readouterr().err

        main(["notes", "--filename", "NEW.md", "--latest-version", "0.9.0", "--no-strict-latest"])
        assert capsys.readouterr().out == "* Item A\n"

    def test_missing_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            main(["notes"])
        assert "No such file" in capsys.readouterr().err

    def test_release(self, project, read_changelog, capsys):
        main(
            [
                "release",
                "1.0.1",
                "--latest-version",
                "1.0.0",
                "--latest-tag",
                "1.0.0",
                "--repo",
                "github.com/user/project",
                "--add-version-url",
            ]
        )
        out = capsys.readouterr().out
        assert "Released 1.0.1 in CHANGELOG.md" in out
        content = read_changelog(project)
        assert content.startswith("## [1.0.1] - ")
        assert content.endswith(
            "[Unreleased]: https://github.com/user/project/compare/1.0.1...HEAD\n"
            "[1.0.1]: https://github.com/user/project/compare/1.0.0...1.0.1\n"
        )

    def test_release_dry_run(self, project, read_changelog, capsys):
        main(["release", "1.0.1", "--dry-run"])
        assert "left unchanged" in capsys.readouterr().out
        assert read_changelog(project) == FULL

    def test_release_uses_project_settings(self, project, tmp_path, read_changelog):
        settings_dir = tmp_path / ".changelog-release"
        settings_dir.mkdir()
        (settings_dir / "settings.yaml").write_text("keepUnreleased: true\n", encoding="utf-8")
        main(["release", "1.0.1"])
        assert read_changelog(project) == FULL

    def test_release_bad_repo(self, project, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["release", "1.0.1", "--repo", "nohost"])
        assert excinfo.value.code == 2
