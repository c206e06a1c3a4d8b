"""Section heading finder.

A heading is a line that starts with ``## [<label>]``. Anything after the
closing bracket (such as `` - 2024-01-31``) belongs to the heading line but
not to the label. Deeper headings (``### [x]``) and indented text never match.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from changelog_release.config import HEADING_PREFIX, HEADING_SUFFIX, UNRELEASED_LABEL

_HEADING_PATTERN = re.compile(
    "^" + re.escape(HEADING_PREFIX) + r"(?P<label>[^\]\r\n]*)" + re.escape(HEADING_SUFFIX),
    re.MULTILINE,
)


@dataclass(frozen=True)
class SectionHeading:
    """A ``## [label]`` heading located in a changelog text.

    Attributes:
        label: Text between the brackets.
        start: Offset of the ``#`` that opens the heading.
        end: Offset right after the closing bracket.
        line_end: Offset of the heading line's line ending (``\\r\\n`` or
            ``\n``), or the end of the text.
        content_start: Offset right after that line ending, or the end of
            the text when the heading is the last line.
    """

    label: str
    start: int
    end: int
    line_end: int
    content_start: int

    @property
    def is_unreleased(self) -> bool:
        return self.label == UNRELEASED_LABEL

    @property
    def markup(self) -> str:
        return heading_markup(self.label)


def heading_markup(label: str) -> str:
    """Return the heading markup for *label*, e.g. ``## [1.0.0]``."""
    return f"{HEADING_PREFIX}{label}{HEADING_SUFFIX}"


def _line_bounds(text: str, pos: int) -> tuple[int, int]:
    newline = text.find("\n", pos)
    if newline == -1:
        return len(text), len(text)
    if newline > pos and text[newline - 1] == "\r":
        return newline - 1, newline + 1
    return newline, newline + 1


def iter_headings(text: str, pos: int = 0) -> Iterator[SectionHeading]:
    """Yield every heading in *text* starting at or after *pos*, in order."""
    for match in _HEADING_PATTERN.finditer(text, pos):
        line_end, content_start = _line_bounds(text, match.end())
        yield SectionHeading(
            label=match.group("label"),
            start=match.start(),
            end=match.end(),
            line_end=line_end,
            content_start=content_start,
        )


def find_heading(text: str, label: str) -> SectionHeading | None:
    """Return the first heading whose label equals *label* exactly."""
    for heading in iter_headings(text):
        if heading.label == label:
            return heading
    return None


def find_next_heading(text: str, pos: int) -> SectionHeading | None:
    """Return the first heading of any label at or after *pos*."""
    return next(iter_headings(text, pos), None)
