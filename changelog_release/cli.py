#!/usr/bin/env python3
"""changelog-release CLI - validate, extract and release Keep a Changelog files."""

import argparse
import sys

from rich.console import Console
from rich.text import Text

from changelog_release.context import ReleaseContext
from changelog_release.errors import ChangelogError
from changelog_release.extractor import get_release_notes
from changelog_release.logging_config import setup_logging
from changelog_release.release import prepare, publish
from changelog_release.settings import ChangelogOptions


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _error(message: str) -> None:
    Console(stderr=True, highlight=False, soft_wrap=True).print(
        Text(f"ERROR: {message}", style="bold red")
    )


def parse_repo(value: str | None) -> tuple[str | None, str | None]:
    """Split ``host/owner/name`` into ``(host, "owner/name")``."""
    if not value:
        return None, None
    host, _, repository = value.strip("/").partition("/")
    if not repository:
        raise argparse.ArgumentTypeError(
            f"Invalid repository '{value}', expected HOST/OWNER/NAME"
        )
    return host, repository


def load_options(args: argparse.Namespace) -> ChangelogOptions:
    """Merge settings files with the flags given on the command line."""
    overrides = {}
    if args.filename:
        overrides["filename"] = args.filename
    if args.no_strict_latest:
        overrides["strictLatest"] = False
    for flag, key in (
        ("add_unreleased", "addUnreleased"),
        ("keep_unreleased", "keepUnreleased"),
        ("add_version_url", "addVersionUrl"),
    ):
        if getattr(args, flag, False):
            overrides[key] = True
    if getattr(args, "head", None):
        overrides["head"] = args.head
    return ChangelogOptions.load(overrides=overrides)


def cmd_validate(args):
    """Check the heading structure of the changelog."""
    options = load_options(args)
    document = prepare(options, ReleaseContext(version=args.version))
    count = len(document.version_headings())
    _console().print(
        Text(f"{options.filename} is valid ({count} released version(s))", style="green")
    )


def cmd_notes(args):
    """Print the release notes for the next (or an existing) release."""
    options = load_options(args)
    context = ReleaseContext(
        version=args.version,
        latest_version=args.latest_version,
        is_increment=not args.no_increment,
    )
    document = prepare(options, context)
    context = get_release_notes(document, options, context)
    _console().print(context.changelog, markup=False)


def cmd_release(args):
    """Turn the Unreleased section into a dated section for VERSION."""
    options = load_options(args)
    host, repository = parse_repo(args.repo)
    context = ReleaseContext(
        version=args.version,
        latest_version=args.latest_version,
        tag_name=args.tag_name,
        latest_tag=args.latest_tag,
        repo_host=host,
        repository=repository,
        is_dry_run=args.dry_run,
    )
    document = prepare(options, context)
    context = get_release_notes(document, options, context)
    updated = publish(document, options, context)

    console = _console()
    console.print(context.changelog, markup=False)
    if updated is document:
        console.print(Text(f"{options.filename} left unchanged", style="yellow"))
    else:
        console.print(
            Text(f"Released {args.version} in {options.filename}", style="green")
        )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--filename", help="Changelog file (default: CHANGELOG.md)")
    parser.add_argument(
        "--no-strict-latest",
        action="store_true",
        help="Do not require a section for the latest released version",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keep a Changelog release notes extractor and rewriter",
        prog="changelog-release",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # validate
    p_validate = subparsers.add_parser("validate", help="Validate changelog structure")
    _add_common_arguments(p_validate)
    p_validate.add_argument("--version", help="Version about to be released")
    p_validate.set_defaults(func=cmd_validate)

    # notes
    p_notes = subparsers.add_parser("notes", help="Print release notes")
    _add_common_arguments(p_notes)
    p_notes.add_argument("--version", help="Version about to be (or already) released")
    p_notes.add_argument("--latest-version", help="Latest released version")
    p_notes.add_argument(
        "--no-increment",
        action="store_true",
        help="Print the notes of an already released VERSION",
    )
    p_notes.set_defaults(func=cmd_notes)

    # release
    p_release = subparsers.add_parser("release", help="Write the release section")
    _add_common_arguments(p_release)
    p_release.add_argument("version", help="Version being released")
    p_release.add_argument("--latest-version", help="Latest released version")
    p_release.add_argument("--tag-name", help="Tag of the new release (default: VERSION)")
    p_release.add_argument("--latest-tag", help="Tag of the previous release")
    p_release.add_argument("--repo", help="Repository as HOST/OWNER/NAME")
    p_release.add_argument("--dry-run", action="store_true", help="Do not write the file")
    p_release.add_argument(
        "--add-unreleased", action="store_true", help="Keep an empty Unreleased section"
    )
    p_release.add_argument(
        "--keep-unreleased", action="store_true", help="Do not rewrite the file"
    )
    p_release.add_argument(
        "--add-version-url", action="store_true", help="Maintain comparison links"
    )
    p_release.add_argument("--head", help="Reference for the Unreleased link (default: HEAD)")
    p_release.set_defaults(func=cmd_release)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(debug=args.debug)

    try:
        args.func(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except (ChangelogError, OSError, ValueError) as e:
        _error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
