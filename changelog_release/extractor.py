"""Section extraction: what goes into the release notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changelog_release.config import UNRELEASED_LABEL
from changelog_release.context import ReleaseContext
from changelog_release.document import ChangelogDocument
from changelog_release.errors import (
    EmptySectionError,
    MissingPreviousReleaseError,
    MissingSectionError,
)
from changelog_release.headings import find_heading, find_next_heading
from changelog_release.logging_config import get_logger

if TYPE_CHECKING:
    from changelog_release.settings import ChangelogOptions

logger = get_logger(__name__)


def extract_section(document: ChangelogDocument, label: str) -> str:
    """Return the trimmed entries under the ``## [label]`` heading.

    Content starts right after the heading line and runs up to the next
    heading of any label, or the end of the document.

    Raises:
        MissingSectionError: No heading with that label.
        EmptySectionError: The section holds only whitespace.
    """
    text = document.text
    heading = find_heading(text, label)
    if heading is None:
        raise MissingSectionError(label, document.filename)

    boundary = find_next_heading(text, heading.content_start)
    end = boundary.start if boundary is not None else len(text)
    content = text[heading.content_start : end].strip()
    if not content:
        raise EmptySectionError(label, document.filename)

    logger.debug(f'Extracted {len(content)} chars from "{label}" in {document.filename}')
    return content


def select_release_label(document: ChangelogDocument, context: ReleaseContext) -> str:
    """Pick the section that holds the notes for this release.

    Unreleased for an increment or a changelog with no versions yet,
    otherwise the already-released version's own section.
    """
    if context.is_increment or not document.version_headings():
        return UNRELEASED_LABEL
    label = context.version or context.latest_version
    if not label:
        raise ValueError("A version is required to re-publish existing release notes")
    return label


def get_release_notes(
    document: ChangelogDocument,
    options: ChangelogOptions,
    context: ReleaseContext,
) -> ReleaseContext:
    """Extract the release notes once and cache them in the returned context.

    Raises:
        MissingPreviousReleaseError: Strict-latest mode and the latest
            version has no section.
        MissingSectionError: The selected section is absent.
        EmptySectionError: The selected section has no entries.
    """
    if context.changelog is not None:
        return context

    latest_version = context.latest_version
    if options.strict_latest and latest_version:
        if not document.has_section(latest_version):
            raise MissingPreviousReleaseError(latest_version, document.filename)

    label = select_release_label(document, context)
    return context.evolve(changelog=extract_section(document, label))
