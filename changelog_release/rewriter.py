"""Turn the Unreleased section into a dated version section."""

from __future__ import annotations

from datetime import date

from changelog_release.config import RELEASE_DATE_FORMAT, UNRELEASED_LABEL
from changelog_release.document import ChangelogDocument, finalize_text
from changelog_release.errors import MissingUnreleasedSectionError
from changelog_release.headings import find_heading, heading_markup
from changelog_release.logging_config import get_logger

logger = get_logger(__name__)


def format_release_date(day: date | None = None) -> str:
    """Format *day* (default: today's local date) as ``YYYY-MM-DD``."""
    return (day or date.today()).strftime(RELEASE_DATE_FORMAT)


def release_heading(version: str, day: date | None = None) -> str:
    return f"{heading_markup(version)} - {format_release_date(day)}"


def rewrite(
    document: ChangelogDocument,
    version: str,
    release_date: date | None = None,
    *,
    add_unreleased: bool = False,
) -> ChangelogDocument:
    """Return a copy of *document* with the Unreleased heading dated.

    The whole Unreleased heading line is replaced (its line ending is kept),
    so the entries below it now belong to ``## [<version>] - <date>``.
    With *add_unreleased* a fresh, empty Unreleased heading is placed above
    the new version heading.

    Raises:
        MissingUnreleasedSectionError: The document has no Unreleased heading.
    """
    heading = find_heading(document.text, UNRELEASED_LABEL)
    if heading is None:
        raise MissingUnreleasedSectionError(document.filename)

    eol = document.eol
    block = release_heading(version, release_date)
    if add_unreleased:
        block = f"{heading_markup(UNRELEASED_LABEL)}{eol}{eol}{block}"

    old_line = document.text[heading.start : heading.line_end]
    text = document.text[: heading.start] + block + document.text[heading.line_end :]
    logger.debug(f"Replaced {old_line!r} with {block!r}")
    return document.with_text(finalize_text(text, eol))
