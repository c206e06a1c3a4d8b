"""Keep a Changelog release notes extractor and rewriter."""

from changelog_release.context import ReleaseContext
from changelog_release.document import (
    ChangelogDocument,
    detect_line_ending,
    load,
    save,
    validate_structure,
)
from changelog_release.errors import (
    ChangelogError,
    EmptySectionError,
    InvalidSectionOrderError,
    InvalidVersionError,
    MissingFileError,
    MissingPreviousReleaseError,
    MissingSectionError,
    MissingUnreleasedSectionError,
    TemplateSubstitutionError,
    TooManyUnreleasedSectionsError,
)
from changelog_release.extractor import extract_section, get_release_notes
from changelog_release.links import sync_links
from changelog_release.release import ReleaseResult, prepare, publish, run_release
from changelog_release.rewriter import rewrite
from changelog_release.settings import ChangelogOptions

__version__ = "0.1.0"

__all__ = [
    "ChangelogDocument",
    "ChangelogError",
    "ChangelogOptions",
    "EmptySectionError",
    "InvalidSectionOrderError",
    "InvalidVersionError",
    "MissingFileError",
    "MissingPreviousReleaseError",
    "MissingSectionError",
    "MissingUnreleasedSectionError",
    "ReleaseContext",
    "ReleaseResult",
    "TemplateSubstitutionError",
    "TooManyUnreleasedSectionsError",
    "detect_line_ending",
    "extract_section",
    "get_release_notes",
    "load",
    "prepare",
    "publish",
    "rewrite",
    "run_release",
    "save",
    "sync_links",
    "validate_structure",
]
