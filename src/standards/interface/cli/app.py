from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading,
dispatch to the selected workflow and result rendering. Every expected
failure surfaces as a StandardsError and is reported as a single
'ERROR:' line with exit code 1.
"""

import argparse
import json
import sys
from typing import Callable, Dict, List, Optional

from standards.core.services.agent import AgentRunner
from standards.core.services.packager import package_directory
from standards.core.services.reporter import relative_to, render_report, report_to_dict
from standards.core.services.scanner import collect_document_files, resolve_directory
from standards.core.services.validator import validate_directory
from standards.core.services.workspace import setup_workspace, sync_workspace
from standards.dal.database import Database
from standards.domain.config import StandardsConfig, load_config
from standards.domain.errors import StandardsError
from standards.domain.lint_models import ValidationResult
from standards.infra.logging import LoggingConfig, configure_logging, get_logger
from standards.infra.network import SagebrushAPIClient
from standards.infra.process import CommandRunner, SubprocessRunner
from standards.interface.cli import args as cli_args

logger = get_logger(__name__)

Handler = Callable[[argparse.Namespace, StandardsConfig, CommandRunner], int]


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, runner: Optional[CommandRunner] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        runner: Process runner for external tools. Defaults to subprocess.

    Returns:
        int: Process exit code (0 success, 1 failure, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only until the log file is known)
    configure_logging(LoggingConfig.for_cli(args.debug), force=True)

    # 3. Configuration resolution
    config, warnings = load_config(args.config_path)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if config.log_file:
        configure_logging(LoggingConfig.for_cli(args.debug, config.log_file), force=True)

    if args.dump_config:
        print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        return 0

    command = cli_args.resolve_command(args)
    if not command:
        parser.print_help(sys.stderr)
        return 2

    # 4. Dispatch
    handler = COMMANDS[command]
    logger.debug(f"Dispatching '{command}'")
    try:
        return handler(args, config, runner or SubprocessRunner())
    except KeyboardInterrupt:
        print("Operation interrupted by user.", file=sys.stderr)
        return 130
    except StandardsError as e:
        logger.debug(f"{command} failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def run_lint(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    root = resolve_directory(args.directory)
    result = _validate(root, config, args.workers)

    if args.fix and not result.is_valid:
        agent = AgentRunner(config, runner, echo=print)
        for file_violation in result.violations:
            print(f"Fixing {relative_to(file_violation.file, root)}...")
            agent.fix_line_length(file_violation.file, file_violation.violations)
        result = _validate(root, config, args.workers)

    if args.json_output:
        print(json.dumps(report_to_dict(result, root), ensure_ascii=False, indent=2))
    else:
        print(render_report(result, root, config.max_line_length))

    return 0 if result.is_valid else 1


def run_voice(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    root = resolve_directory(args.directory)
    files = collect_document_files(root, extension=config.document_extension,
                                   excluded=config.excluded_filenames)
    if not files:
        print(f"No Markdown files found in {root}")
        return 0

    agent = AgentRunner(config, runner, echo=print)
    for path in files:
        print(f"Checking voice in {relative_to(path, root)}...")
        agent.review_voice(path)

    print(f"\n✓ Voice check complete for {len(files)} file(s)")
    return 0


def run_setup(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    client = SagebrushAPIClient(config.api_base_url)
    setup_workspace(config, client, echo=print)
    return 0


def run_sync(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    client = SagebrushAPIClient(config.api_base_url)
    result = sync_workspace(config, client, runner, standards_dir=args.standards_dir, echo=print)
    if not result.ok:
        print(f"ERROR: {len(result.failures)} project(s) failed to pull", file=sys.stderr)
        return 1
    return 0


def run_zip(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    package_directory(args.directory, config, runner, mail=not args.no_mail, echo=print)
    return 0


def run_db(args: argparse.Namespace, config: StandardsConfig, runner: CommandRunner) -> int:
    with Database.connect(config.database) as db:
        if args.action == "migrate":
            tables = db.migrate()
            print(f"✓ Migrated {len(tables)} tables ({config.database.describe()})")
        else:
            tables = db.revert()
            print(f"✓ Reverted {len(tables)} tables ({config.database.describe()})")
    return 0


COMMANDS: Dict[str, Handler] = {
    "lint": run_lint,
    "voice": run_voice,
    "setup": run_setup,
    "sync": run_sync,
    "zip": run_zip,
    "db": run_db,
}


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _validate(root: str, config: StandardsConfig, workers: Optional[int]) -> ValidationResult:
    return validate_directory(
        root,
        max_line_length=config.max_line_length,
        workers=workers or config.workers,
        extension=config.document_extension,
        excluded=config.excluded_filenames,
    )


# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
