"""Release lifecycle: prepare, collect notes, publish.

The host release process calls these in order::

    document = prepare(options, context)              # init
    context = get_release_notes(document, options, context)  # notes
    document = publish(document, options, context)    # before release

Every check runs before the single write in :func:`publish`, so a failing
release never leaves a half-rewritten changelog behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from changelog_release.context import ReleaseContext
from changelog_release.document import ChangelogDocument, load, save, validate_structure
from changelog_release.extractor import get_release_notes
from changelog_release.links import sync_links
from changelog_release.logging_config import get_logger
from changelog_release.rewriter import rewrite
from changelog_release.settings import ChangelogOptions

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of a full release operation."""

    context: ReleaseContext
    document: ChangelogDocument
    written: bool

    @property
    def notes(self) -> str | None:
        return self.context.changelog


def prepare(
    options: ChangelogOptions,
    context: ReleaseContext,
    cwd: Path | None = None,
) -> ChangelogDocument:
    """Load the configured changelog and validate its structure.

    Raises:
        FileNotFoundError: The changelog does not exist.
        ChangelogError: The heading structure is invalid.
    """
    path = (cwd or Path.cwd()) / options.filename
    document = load(path, filename=options.filename)
    validate_structure(document, context.version)
    return document


def should_rewrite(options: ChangelogOptions, context: ReleaseContext) -> bool:
    """Whether publishing a release touches the changelog at all."""
    if context.is_dry_run:
        logger.info("Dry run: changelog left unchanged")
        return False
    if options.keep_unreleased:
        logger.info("keepUnreleased is set: changelog left unchanged")
        return False
    if not context.is_increment:
        logger.info("No version increment: changelog left unchanged")
        return False
    return True


def publish(
    document: ChangelogDocument,
    options: ChangelogOptions,
    context: ReleaseContext,
) -> ChangelogDocument:
    """Date the Unreleased section, sync links and write the file once.

    Returns the document unchanged, without writing, when
    :func:`should_rewrite` says no.

    Raises:
        ValueError: The context has no version.
        TemplateSubstitutionError: Link templates need missing values.
    """
    if not should_rewrite(options, context):
        return document
    if not context.version:
        raise ValueError("A version is required to publish a release")

    updated = rewrite(
        document,
        context.version,
        context.release_date,
        add_unreleased=options.add_unreleased,
    )

    if options.add_version_url:
        if not context.has_repo and not options.has_custom_repository_url():
            logger.warning("No repository host or name available: version links skipped")
        else:
            updated = sync_links(
                updated, context, options.version_url_formats, options.head
            )

    save(updated)
    return updated


def run_release(
    options: ChangelogOptions,
    context: ReleaseContext,
    cwd: Path | None = None,
) -> ReleaseResult:
    """Run the whole release operation against the configured changelog."""
    document = prepare(options, context, cwd)
    context = get_release_notes(document, options, context)
    updated = publish(document, options, context)
    return ReleaseResult(context=context, document=updated, written=updated is not document)
