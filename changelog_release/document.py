"""Changelog document loading, validation and persistence.

The whole file is read once, validated, and written back at most once at
the end of a release. Line endings are never translated on the way in or
out, so a ``\\r\\n`` changelog stays a ``\\r\\n`` changelog.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import semver

from changelog_release.errors import (
    InvalidSectionOrderError,
    InvalidVersionError,
    MissingUnreleasedSectionError,
    TooManyUnreleasedSectionsError,
)
from changelog_release.headings import SectionHeading, find_heading, iter_headings
from changelog_release.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChangelogDocument:
    """Full text of a changelog plus the line ending it uses.

    Attributes:
        text: File content, line endings untouched.
        eol: ``"\\n"`` or ``"\\r\\n"``.
        filename: Name as configured, used in error messages.
        path: Resolved location on disk.
    """

    text: str
    eol: str = "\n"
    filename: str = "CHANGELOG.md"
    path: Path | None = None

    @classmethod
    def from_text(
        cls, text: str, filename: str = "CHANGELOG.md", path: Path | None = None
    ) -> ChangelogDocument:
        return cls(text=text, eol=detect_line_ending(text), filename=filename, path=path)

    def with_text(self, text: str) -> ChangelogDocument:
        return replace(self, text=text)

    def headings(self) -> list[SectionHeading]:
        return list(iter_headings(self.text))

    def version_headings(self) -> list[SectionHeading]:
        return [heading for heading in iter_headings(self.text) if not heading.is_unreleased]

    def has_section(self, label: str) -> bool:
        return find_heading(self.text, label) is not None


def detect_line_ending(text: str) -> str:
    """Return the line ending of the first line break, ``"\\n"`` if there is none."""
    newline = text.find("\n")
    if newline > 0 and text[newline - 1] == "\r":
        return "\r\n"
    return "\n"


def finalize_text(text: str, eol: str) -> str:
    """Trim surrounding whitespace and terminate with exactly one *eol*."""
    return text.strip() + eol


def load(path: str | Path, filename: str | None = None) -> ChangelogDocument:
    """Read a changelog file.

    Args:
        path: Location of the changelog.
        filename: Display name for error messages (defaults to *path* as given).

    Returns:
        The loaded document.

    Raises:
        FileNotFoundError: If the file does not exist (not wrapped).
        OSError: If the file cannot be read (not wrapped).
    """
    resolved = Path(path).resolve()
    with open(resolved, encoding="utf-8", newline="") as f:
        text = f.read()
    document = ChangelogDocument.from_text(
        text, filename=filename or str(path), path=resolved
    )
    logger.debug(
        f"Loaded {resolved} ({len(text)} chars, eol={document.eol!r})"
    )
    return document


def save(document: ChangelogDocument) -> Path:
    """Write the document back to its path in one go.

    Returns:
        The path written to.
    """
    if document.path is None:
        raise ValueError(f"No path to write {document.filename} to")
    with open(document.path, "w", encoding="utf-8", newline="") as f:
        f.write(document.text)
    logger.info(f"Wrote {document.path}")
    return document.path


def parse_version(label: str, filename: str = "CHANGELOG.md") -> semver.Version:
    """Parse a heading label as a semantic version.

    Build metadata is dropped from the result, so two labels that differ
    only after ``+`` compare equal.

    Raises:
        InvalidVersionError: If the label is not a semantic version.
    """
    try:
        version = semver.Version.parse(label)
    except (TypeError, ValueError):
        raise InvalidVersionError(label, filename, "not a semantic version") from None
    return version.replace(build=None)


def validate_structure(
    document: ChangelogDocument, current_version: str | None = None
) -> None:
    """Check the heading structure of a changelog.

    Checks run in order and stop at the first kind of violation:

    1. Exactly one ``Unreleased`` heading.
    2. Every other heading is a semantic version not above *current_version*.
    3. Version headings are strictly descending in document order.

    Args:
        document: The changelog to check.
        current_version: Version about to be released, if already known.

    Raises:
        MissingUnreleasedSectionError: No Unreleased heading.
        TooManyUnreleasedSectionsError: More than one Unreleased heading.
        InvalidVersionError: A label is not a version or exceeds *current_version*.
        InvalidSectionOrderError: Versions are not strictly descending.
    """
    filename = document.filename
    headings = document.headings()

    unreleased_count = sum(1 for heading in headings if heading.is_unreleased)
    if unreleased_count == 0:
        raise MissingUnreleasedSectionError(filename)
    if unreleased_count > 1:
        raise TooManyUnreleasedSectionsError(unreleased_count, filename)

    ceiling = parse_version(current_version, filename) if current_version else None
    versions: list[tuple[str, semver.Version]] = []
    for heading in headings:
        if heading.is_unreleased:
            continue
        version = parse_version(heading.label, filename)
        if ceiling is not None and version > ceiling:
            raise InvalidVersionError(
                heading.label,
                filename,
                f"greater than the version being released ({current_version})",
            )
        versions.append((heading.label, version))

    for (previous_label, previous), (label, version) in zip(versions, versions[1:]):
        if not version < previous:
            raise InvalidSectionOrderError(previous_label, label, filename)

    logger.debug(f"Validated {filename}: {len(versions)} version section(s)")
