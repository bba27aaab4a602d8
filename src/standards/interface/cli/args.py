from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema: global diagnostic flags plus one
sub-command per workflow (lint, voice, setup, sync, zip, db).
"""

import argparse

from standards.domain.constants import APP_VERSION

# Sub-command names, including aliases, mapped to their handler key
COMMAND_ALIASES = {
    "lint": "lint",
    "validate": "lint",
    "voice": "voice",
    "setup": "setup",
    "sync": "sync",
    "zip": "zip",
    "db": "db",
}


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the standards CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="standards",
        description="Documentation standards tooling: lint Markdown line lengths, "
                    "manage the local Standards tree and package documents.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a JSON configuration file (default: ~/.standards/config.json).",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")

    # --- lint / validate ---
    lint = sub.add_parser(
        "lint",
        aliases=["validate"],
        help="Check that every Markdown line fits the maximum length.",
    )
    lint.add_argument("directory", nargs="?", default=".", help="Directory to check.")
    lint.add_argument(
        "--fix",
        action="store_true",
        help="Ask the text agent to rewrap offending files, then re-check.",
    )
    lint.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit the report as JSON.",
    )
    lint.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of files read in parallel.",
    )

    # --- voice ---
    voice = sub.add_parser("voice", help="Review voice and tone of every document.")
    voice.add_argument("directory", nargs="?", default=".", help="Directory to review.")

    # --- setup ---
    sub.add_parser("setup", help="Create the Standards tree and project directories.")

    # --- sync ---
    sync = sub.add_parser("sync", help="Pull the latest changes for every project.")
    sync.add_argument(
        "--dir",
        dest="standards_dir",
        default=None,
        help="Standards directory to sync (default: configured directory).",
    )

    # --- zip ---
    zip_cmd = sub.add_parser("zip", help="Convert documents to .docx and archive them.")
    zip_cmd.add_argument("directory", help="Directory holding the Markdown documents.")
    zip_cmd.add_argument(
        "--no-mail",
        action="store_true",
        help="Do not draft an email with the archive attached.",
    )

    # --- db ---
    db = sub.add_parser("db", help="Manage the database schema.")
    db.add_argument("action", choices=["migrate", "revert"], help="Schema operation.")

    return p


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def resolve_command(args: argparse.Namespace) -> str:
    """Canonical handler key for the parsed sub-command ('' if none)."""
    return COMMAND_ALIASES.get(args.command or "", "")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid positive int value: '{value}'")
    return number
