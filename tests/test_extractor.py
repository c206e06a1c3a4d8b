"""Tests for changelog_release.extractor module."""

import pytest

from changelog_release.context import ReleaseContext
from changelog_release.document import ChangelogDocument
from changelog_release.errors import (
    EmptySectionError,
    MissingPreviousReleaseError,
    MissingSectionError,
)
from changelog_release.extractor import (
    extract_section,
    get_release_notes,
    select_release_label,
)
from changelog_release.settings import ChangelogOptions

FULL = "## [Unreleased]\n\n* Item A\n* Item B\n\n## [1.0.0] - 2020-05-02\n\n* Item C\n* Item D"


def make_document(text: str, filename: str = "CHANGELOG-TEST.md") -> ChangelogDocument:
    return ChangelogDocument.from_text(text, filename=filename)


class TestExtractSection:
    """Test section content extraction."""

    def test_extract_unreleased(self):
        assert extract_section(make_document(FULL), "Unreleased") == "* Item A\n* Item B"

    def test_extract_version_to_end_of_document(self):
        """The last section runs to the end of the text."""
        assert extract_section(make_document(FULL), "1.0.0") == "* Item C\n* Item D"

    def test_fewer_blank_lines(self):
        """Content directly below the heading line is found."""
        text = "## [Unreleased]\n* Item A\n* Item B\n## [1.0.0] - 2020-05-02\n* Item C\n* Item D"
        assert extract_section(make_document(text), "Unreleased") == "* Item A\n* Item B"

    def test_crlf_content_kept(self):
        """Inner line endings are returned as they are."""
        text = "\r\n\r\n## [Unreleased]\r\n\r\n* Item A\r\n* Item B\r\n\r\n## [1.0.0] - 2020-05-02\r\n"
        assert extract_section(make_document(text), "Unreleased") == "* Item A\r\n* Item B"

    def test_subsections_included(self):
        """Deeper headings belong to the section."""
        text = "## [Unreleased]\n\n### Added\n\n- x\n\n### Fixed\n\n- y\n\n## [0.1.0]\n\n- z\n"
        assert (
            extract_section(make_document(text), "Unreleased")
            == "### Added\n\n- x\n\n### Fixed\n\n- y"
        )

    def test_boundary_is_any_heading(self):
        """The section ends at the next heading, whatever its label."""
        text = "## [1.1.0]\n\n* new\n\n## [FOO]\n\n* other\n"
        assert extract_section(make_document(text), "1.1.0") == "* new"

    def test_text_after_closing_bracket_not_content(self):
        """The rest of the heading line (the date) is not part of the entries."""
        assert "2020-05-02" not in extract_section(make_document(FULL), "1.0.0")

    def test_missing_section(self):
        with pytest.raises(MissingSectionError, match='"2.0.0" in CHANGELOG-TEST.md') as excinfo:
            extract_section(make_document(FULL), "2.0.0")
        assert excinfo.value.label == "2.0.0"

    def test_empty_section(self):
        """An all-whitespace section has no entries."""
        text = "## [Unreleased]\n\n\n\n## [1.0.0]\n\n* Item A\n* Item B"
        with pytest.raises(
            EmptySectionError,
            match='There are no entries under "Unreleased" section in CHANGELOG-EMPTY.md',
        ):
            extract_section(make_document(text, "CHANGELOG-EMPTY.md"), "Unreleased")

    def test_empty_section_at_end(self):
        with pytest.raises(EmptySectionError):
            extract_section(make_document("## [Unreleased]\n  \n"), "Unreleased")


class TestSelectReleaseLabel:
    """Test which section holds the release notes."""

    def test_increment_uses_unreleased(self):
        context = ReleaseContext(version="1.0.1", is_increment=True)
        assert select_release_label(make_document(FULL), context) == "Unreleased"

    def test_no_increment_uses_version(self):
        context = ReleaseContext(version="1.0.0", is_increment=False)
        assert select_release_label(make_document(FULL), context) == "1.0.0"

    def test_no_increment_falls_back_to_latest_version(self):
        context = ReleaseContext(latest_version="1.0.0", is_increment=False)
        assert select_release_label(make_document(FULL), context) == "1.0.0"

    def test_first_release_uses_unreleased(self):
        """Without any version section the Unreleased section is used."""
        context = ReleaseContext(version="1.0.0", is_increment=False)
        document = make_document("## [Unreleased]\n\n* Item A")
        assert select_release_label(document, context) == "Unreleased"

    def test_no_increment_without_version(self):
        with pytest.raises(ValueError):
            select_release_label(make_document(FULL), ReleaseContext(is_increment=False))


class TestGetReleaseNotes:
    """Test cached release notes lookup."""

    def test_notes_stored_in_new_context(self):
        context = ReleaseContext(version="1.0.1", latest_version="1.0.0")
        result = get_release_notes(make_document(FULL), ChangelogOptions(), context)
        assert result.changelog == "* Item A\n* Item B"
        assert context.changelog is None

    def test_cached_notes_returned(self):
        """A context with notes is returned as is, without scanning."""
        context = ReleaseContext(version="1.0.1", changelog="cached")
        result = get_release_notes(make_document("garbage"), ChangelogOptions(), context)
        assert result is context

    def test_strict_latest_missing_previous_release(self):
        document = make_document("## [Unreleased]\n\n* Item A\n* Item B", "CHANGELOG-MISSING.md")
        context = ReleaseContext(version="1.0.1", latest_version="1.0.0")
        with pytest.raises(
            MissingPreviousReleaseError,
            match=r'Missing section for previous release \("1\.0\.0"\) in CHANGELOG-MISSING\.md',
        ):
            get_release_notes(document, ChangelogOptions(), context)

    def test_strict_latest_checked_before_empty_section(self):
        document = make_document("## [Unreleased]\n\n")
        context = ReleaseContext(version="1.0.1", latest_version="1.0.0")
        with pytest.raises(MissingPreviousReleaseError):
            get_release_notes(document, ChangelogOptions(), context)

    def test_strict_latest_disabled(self):
        document = make_document("## [Unreleased]\n\n* Item A\n* Item B")
        context = ReleaseContext(version="1.0.1", latest_version="1.0.0")
        options = ChangelogOptions(strict_latest=False)
        assert get_release_notes(document, options, context).changelog == "* Item A\n* Item B"

    def test_strict_latest_without_latest_version(self):
        """Nothing to check when no version has been released yet."""
        document = make_document("## [Unreleased]\n\n* Item A")
        context = ReleaseContext(version="0.1.0")
        assert get_release_notes(document, ChangelogOptions(), context).changelog == "* Item A"

    def test_no_increment_republishes_existing_section(self):
        context = ReleaseContext(version="1.0.0", latest_version="1.0.0", is_increment=False)
        result = get_release_notes(make_document(FULL), ChangelogOptions(), context)
        assert result.changelog == "* Item C\n* Item D"
