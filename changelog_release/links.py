"""Reference-style link footer maintenance.

A changelog usually ends with lines such as::

    [Unreleased]: https://github.com/owner/repo/compare/1.0.1...HEAD
    [1.0.1]: https://github.com/owner/repo/compare/1.0.0...1.0.1

:class:`LinkFooter` models every such line of the document keyed by label,
so setting a label twice replaces its line instead of adding another one.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from changelog_release.config import (
    DEFAULT_HEAD,
    DEFAULT_VERSION_URL_FORMATS,
    UNRELEASED_LABEL,
)
from changelog_release.context import ReleaseContext
from changelog_release.document import ChangelogDocument, finalize_text
from changelog_release.errors import TemplateSubstitutionError
from changelog_release.logging_config import get_logger

logger = get_logger(__name__)

LINK_LINE_PATTERN = re.compile(r"^\[(?P<label>[^\]]+)\]:\s*(?P<url>\S.*?)\s*$")
PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]*)\}")


@dataclass
class LinkFooterEntry:
    label: str
    url: str

    def render(self) -> str:
        return f"[{self.label}]: {self.url}"


def _label_key(label: str) -> str:
    # Only the unreleased label is matched case-insensitively
    if label.lower() == UNRELEASED_LABEL.lower():
        return UNRELEASED_LABEL.lower()
    return label


class LinkFooter:
    """Link lines of a document, editable by label.

    Non-link lines are kept as they are; only link lines are replaced,
    inserted or appended.
    """

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines

    @classmethod
    def parse(cls, text: str, eol: str) -> LinkFooter:
        return cls(text.strip().split(eol))

    @staticmethod
    def _match(line: str) -> re.Match[str] | None:
        return LINK_LINE_PATTERN.match(line)

    def _find(self, label: str) -> tuple[int, LinkFooterEntry] | None:
        key = _label_key(label)
        for index, line in enumerate(self._lines):
            match = self._match(line)
            if match and _label_key(match.group("label")) == key:
                return index, LinkFooterEntry(match.group("label"), match.group("url"))
        return None

    def _index(self, label: str) -> int | None:
        found = self._find(label)
        return found[0] if found else None

    def entries(self) -> list[LinkFooterEntry]:
        result = []
        for line in self._lines:
            match = self._match(line)
            if match:
                result.append(LinkFooterEntry(match.group("label"), match.group("url")))
        return result

    def get(self, label: str) -> LinkFooterEntry | None:
        found = self._find(label)
        return found[1] if found else None

    def _append(self, entry: LinkFooterEntry) -> None:
        last = self._lines[-1] if self._lines else ""
        if last.strip() and not self._match(last):
            self._lines.append("")
        self._lines.append(entry.render())

    def set(self, entry: LinkFooterEntry) -> None:
        """Replace the line for ``entry.label`` in place, or append it."""
        index = self._index(entry.label)
        if index is not None:
            self._lines[index] = entry.render()
        else:
            self._append(entry)

    def insert_before(self, entry: LinkFooterEntry, anchor: str | None) -> None:
        """Add *entry* right above the *anchor* link line.

        An existing line for the same label is replaced in place instead;
        without an anchor line the entry is appended.
        """
        index = self._index(entry.label)
        if index is not None:
            self._lines[index] = entry.render()
            return
        anchor_index = self._index(anchor) if anchor else None
        if anchor_index is not None:
            self._lines.insert(anchor_index, entry.render())
        else:
            self._append(entry)

    def render(self, eol: str) -> str:
        return finalize_text(eol.join(self._lines), eol)


def render_template(template: str, values: Mapping[str, str | None]) -> str:
    """Substitute ``{name}`` placeholders in *template*.

    Only bare names are placeholders; attribute access, indexing and format
    specs (``{name.attr}``, ``{name[0]}``, ``{name:>10}``) are rejected.

    Raises:
        TemplateSubstitutionError: A placeholder is malformed or has no (or an
            empty) value.
    """

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = values.get(name) if name.isidentifier() else None
        if not value:
            raise TemplateSubstitutionError(name, template)
        return value

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def build_version_urls(
    context: ReleaseContext,
    formats: Mapping[str, str] | None = None,
    head: str = DEFAULT_HEAD,
) -> tuple[str, str]:
    """Build the unreleased comparison URL and the new version's URL.

    Returns:
        ``(unreleased_url, version_url)``. The version URL compares against
        the previous tag, or points at the release tag for a first release.
    """
    templates = {**DEFAULT_VERSION_URL_FORMATS, **(formats or {})}
    values: dict[str, str | None] = {
        "host": context.repo_host,
        "repository": context.repository,
        "tagName": context.resolved_tag_name,
        "previousTag": context.latest_tag,
        "head": head,
    }
    values["repositoryUrl"] = render_template(templates["repositoryUrl"], values)

    unreleased_url = render_template(templates["unreleasedUrl"], values)
    if context.latest_tag:
        version_url = render_template(templates["versionUrl"], values)
    else:
        version_url = render_template(templates["firstVersionUrl"], values)
    return unreleased_url, version_url


def sync_links(
    document: ChangelogDocument,
    context: ReleaseContext,
    formats: Mapping[str, str] | None = None,
    head: str = DEFAULT_HEAD,
) -> ChangelogDocument:
    """Point the Unreleased link at the new tag and add the new version's link.

    Running it again with the same context yields the same document.

    Raises:
        ValueError: The context has no version.
        TemplateSubstitutionError: A template needs a value the context lacks.
    """
    if not context.version:
        raise ValueError("A version is required to add version links")

    unreleased_url, version_url = build_version_urls(context, formats, head)

    footer = LinkFooter.parse(document.text, document.eol)
    footer.set(LinkFooterEntry(UNRELEASED_LABEL, unreleased_url))
    footer.insert_before(
        LinkFooterEntry(context.version, version_url), context.latest_version
    )
    logger.info(f"Synced links for {context.version} in {document.filename}")
    return document.with_text(footer.render(document.eol))
