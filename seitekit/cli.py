"""Command-line entry point for the ``seite`` tool."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from seitekit.release_assets import ChecksumError
from seitekit.releases import assemble_releases, write_releases
from seitekit.selfupdate import CURRENT_VERSION, UpdateError, self_update

PROG = "seite"
DESCRIPTION = "A static site generator with LLM integration"


def _add_global_options(parser: argparse.ArgumentParser, *, nested: bool) -> None:
    """Add the options accepted both before and after a subcommand.

    On subcommand parsers the defaults are suppressed so that a value given
    before the subcommand is not overwritten by the subparser.
    """

    def default(value):
        return argparse.SUPPRESS if nested else value

    parser.add_argument(
        "-v", "--verbose", action="store_true", default=default(False),
        help="Enable verbose logging output",
    )
    parser.add_argument(
        "--json", action="store_true", default=default(False),
        help="Output results as JSON",
    )
    parser.add_argument(
        "-c", "--config", default=default(None), help="Path to config file",
    )
    parser.add_argument(
        "-d", "--dir", default=default(None), help="Project directory",
    )
    parser.add_argument(
        "-s", "--site", default=default(None),
        help="Target a specific site in a workspace",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its global options and subcommands."""
    parser = argparse.ArgumentParser(prog=PROG, description=DESCRIPTION)
    parser.add_argument(
        "-V", "--version", action="version", version=f"{PROG} {CURRENT_VERSION}"
    )
    _add_global_options(parser, nested=False)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    update = subparsers.add_parser(
        "self-update", help="Update the seite binary to the latest release"
    )
    _add_global_options(update, nested=True)
    update.add_argument(
        "--target-version", dest="target_version", default=None,
        help='Update to a specific version (e.g., "0.2.0" or "v0.2.0")',
    )
    update.add_argument(
        "--check", action="store_true",
        help="Just check for updates without installing",
    )
    update.add_argument(
        "-V", "--version", action="version", version=f"{PROG} {CURRENT_VERSION}"
    )

    releases = subparsers.add_parser(
        "releases", help="Assemble the releases page from changelog entries"
    )
    _add_global_options(releases, nested=True)
    releases.add_argument("changelog_dir", help="Directory of changelog entries")
    releases.add_argument(
        "-o", "--output", default=None,
        help="File to write (printed to standard output when omitted)",
    )
    releases.add_argument(
        "-V", "--version", action="version", version=f"{PROG} {CURRENT_VERSION}"
    )

    return parser


def _run_releases(args: argparse.Namespace) -> int:
    if args.output is None:
        sys.stdout.write(assemble_releases(args.changelog_dir))
    else:
        write_releases(args.changelog_dir, args.output)
        print(f"Wrote {args.output}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv* and run the chosen command; return the exit code."""
    args = build_parser().parse_args(argv)
    try:
        if args.command == "self-update":
            return self_update(args.target_version, args.check)
        return _run_releases(args)
    except (UpdateError, ChecksumError, RuntimeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())