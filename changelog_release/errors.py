"""Exceptions raised while validating, extracting from or rewriting a changelog.

Storage failures are not wrapped: a missing file surfaces as the
``FileNotFoundError`` raised by ``open()``, re-exported here as
``MissingFileError`` for callers that want to name it.
"""

from __future__ import annotations

MissingFileError = FileNotFoundError


class ChangelogError(Exception):
    """Base class for structural, content and templating errors."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class MissingUnreleasedSectionError(ChangelogError):
    """Raised when no ``## [Unreleased]`` heading exists."""

    def __init__(self, filename: str) -> None:
        super().__init__(f'Missing "Unreleased" section in {filename}.', filename)


class TooManyUnreleasedSectionsError(ChangelogError):
    """Raised when more than one ``## [Unreleased]`` heading exists."""

    def __init__(self, count: int, filename: str) -> None:
        super().__init__(
            f'Found {count} "Unreleased" sections in {filename}, expected exactly one.',
            filename,
        )
        self.count = count


class InvalidVersionError(ChangelogError):
    """Raised for a heading label that is not a valid or allowed version."""

    def __init__(self, label: str, filename: str, reason: str | None = None) -> None:
        message = f'Invalid version "{label}" in {filename}'
        message += f": {reason}." if reason else "."
        super().__init__(message, filename)
        self.label = label


class InvalidSectionOrderError(ChangelogError):
    """Raised when version headings are not strictly descending."""

    def __init__(self, previous: str, following: str, filename: str) -> None:
        super().__init__(
            f'Version sections in {filename} are not in descending order: '
            f'"{previous}" is followed by "{following}".',
            filename,
        )
        self.previous = previous
        self.following = following


class MissingSectionError(ChangelogError):
    """Raised when a heading for the requested label is absent."""

    def __init__(
        self, label: str, filename: str, message: str | None = None
    ) -> None:
        super().__init__(message or f'Missing section "{label}" in {filename}.', filename)
        self.label = label


class MissingPreviousReleaseError(MissingSectionError):
    """Raised in strict-latest mode when the latest release has no section."""

    def __init__(self, label: str, filename: str) -> None:
        super().__init__(
            label,
            filename,
            f'Missing section for previous release ("{label}") in {filename}.',
        )


class EmptySectionError(ChangelogError):
    """Raised when a section holds nothing but whitespace."""

    def __init__(self, label: str, filename: str) -> None:
        super().__init__(
            f'There are no entries under "{label}" section in {filename}.', filename
        )
        self.label = label


class TemplateSubstitutionError(ChangelogError):
    """Raised when a URL template placeholder is malformed or has no value."""

    def __init__(self, placeholder: str, template: str) -> None:
        super().__init__(
            f'No value for placeholder "{{{placeholder}}}" in URL template "{template}".'
        )
        self.placeholder = placeholder
        self.template = template
