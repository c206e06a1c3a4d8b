"""Explicit release context passed between lifecycle steps."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ReleaseContext:
    """Values supplied by the host release process, plus cached results.

    Instances are never mutated; steps that produce a result return a new
    context via :meth:`evolve`.

    Attributes:
        version: Version being released (or re-published without increment).
        latest_version: Most recent released version, if any.
        tag_name: Tag that will point at the new release.
        latest_tag: Tag of the previous release; ``None`` for a first release.
        repo_host: Hosting service, e.g. ``github.com``.
        repository: Repository identifier, e.g. ``owner/name``.
        is_increment: Whether a new version is being cut.
        is_dry_run: Whether the host is only simulating the release.
        changelog: Release notes, once extracted.
        release_date: Date for the new heading; today when unset.
    """

    version: str | None = None
    latest_version: str | None = None
    tag_name: str | None = None
    latest_tag: str | None = None
    repo_host: str | None = None
    repository: str | None = None
    is_increment: bool = True
    is_dry_run: bool = False
    changelog: str | None = None
    release_date: date | None = None

    def evolve(self, **changes: Any) -> ReleaseContext:
        return replace(self, **changes)

    @property
    def has_repo(self) -> bool:
        return bool(self.repo_host or self.repository)

    @property
    def resolved_tag_name(self) -> str | None:
        return self.tag_name or self.version
