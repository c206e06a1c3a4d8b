"""
Changelog Release Configuration Constants

This module centralizes the heading grammar, option defaults and URL
templates used throughout the codebase.
"""

# ============================================================
# Heading Grammar
# ============================================================

# Label of the section that accumulates not-yet-versioned changes
UNRELEASED_LABEL: str = "Unreleased"

# Markup that opens every section heading: "## [<label>]"
HEADING_PREFIX: str = "## ["
HEADING_SUFFIX: str = "]"

# Date format for dated version headings: "## [1.2.3] - 2024-01-31"
RELEASE_DATE_FORMAT: str = "%Y-%m-%d"

# ============================================================
# Option Defaults
# ============================================================

DEFAULT_FILENAME: str = "CHANGELOG.md"

# Symbolic reference used as the target of the unreleased comparison link
DEFAULT_HEAD: str = "HEAD"

# ============================================================
# Link Templates
# ============================================================

# Placeholders: host, repository, repositoryUrl, tagName, previousTag, head
DEFAULT_VERSION_URL_FORMATS: dict[str, str] = {
    "repositoryUrl": "https://{host}/{repository}",
    "unreleasedUrl": "{repositoryUrl}/compare/{tagName}...{head}",
    "versionUrl": "{repositoryUrl}/compare/{previousTag}...{tagName}",
    "firstVersionUrl": "{repositoryUrl}/releases/tag/{tagName}",
}

VERSION_URL_FORMAT_KEYS: frozenset[str] = frozenset(DEFAULT_VERSION_URL_FORMATS)
