from __future__ import annotations

"""
Documentation Packaging Service.

Converts a directory of Markdown documents to Word files and bundles them
into a single flat archive next to the sources, optionally drafting an
email with the archive attached.

Workflow:
    1. Discover documents (case-insensitive extension, exclusions honored).
    2. Refuse to package anything that fails the line-length rule or whose
       converted name clashes with another document.
    3. Convert each document with the external converter into a temp dir.
    4. Write <dir>/<dirname>.zip, replacing any previous archive.
    5. Run the mail hook when enabled.
"""

import logging
import os
import tempfile
import zipfile
from typing import Callable, Dict, List

from standards.core.services.scanner import collect_document_files, resolve_directory
from standards.core.services.validator import ensure_valid, validate_file
from standards.domain.config import StandardsConfig
from standards.domain.errors import DuplicateDocumentError, ExternalToolError
from standards.domain.lint_models import FileViolation, ValidationResult
from standards.domain.workspace_models import PackageResult
from standards.infra.fs import display_path
from standards.infra.process import COMMAND_NOT_FOUND, CommandRunner, run_checked

logger = logging.getLogger(__name__)

CONVERTED_EXTENSION = ".docx"

MAIL_SCRIPT = """\
tell application "Mail"
    set newMessage to make new outgoing message with properties {{subject:"{subject}", visible:true}}
    tell newMessage
        make new attachment with properties {{file name:"{attachment}"}} at after the last paragraph
    end tell
    activate
end tell"""


def _silent(_: str) -> None:
    return None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def package_directory(
        directory: str,
        config: StandardsConfig,
        runner: CommandRunner,
        mail: bool = True,
        echo: Callable[[str], None] = _silent,
) -> PackageResult:
    """
    Convert and archive every document of a directory.

    Args:
        directory: Directory holding the Markdown sources.
        config: Resolved configuration (converter, mail hook, limits).
        runner: Process runner for the converter and the mail hook.
        mail: Draft an email when the configuration also enables it.
        echo: Sink for progress lines.

    Returns:
        PackageResult: Archive path (None when nothing was found) and the
                       converted file names.

    Raises:
        DirectoryNotFoundError: If the directory does not exist.
        ValidationFailedError: If any document breaks the line-length rule.
        DuplicateDocumentError: If two documents share a converted name.
        ExternalToolError: If the converter or the mail hook fails.
    """
    root = resolve_directory(directory)
    result = PackageResult(directory=root)

    sources = collect_document_files(
        root,
        extension=config.document_extension,
        excluded=config.excluded_filenames,
        ignore_case=True,
    )
    if not sources:
        logger.warning(f"No Markdown files found in {root}")
        echo(f"⚠️  No Markdown files found in {display_path(root)}")
        return result

    echo(f"Validating {len(sources)} Markdown file(s)...")
    ensure_valid(check_documents(sources, config.max_line_length))
    check_unique_names(sources, root)

    archive_name = f"{os.path.basename(root)}.zip"
    archive_path = os.path.join(root, archive_name)

    with tempfile.TemporaryDirectory(prefix="standards-zip-") as work_dir:
        converted: List[str] = []
        for source in sources:
            echo(f"Converting {os.path.basename(source)}...")
            converted.append(convert_document(source, work_dir, config, runner))

        write_archive(converted, archive_path)
        result.converted = [os.path.basename(p) for p in converted]

    result.archive_path = archive_path
    echo(f"✓ Created {display_path(archive_path)}")

    if mail and config.mail_enabled:
        draft_mail(archive_path, f"{os.path.basename(root)} docs", config, runner)
        result.mailed = True
        echo("✓ Opened Mail with attachment")

    return result


def check_documents(paths: List[str], max_line_length: int) -> ValidationResult:
    """Build a report for an explicit list of documents."""
    entries: List[FileViolation] = []
    for path in paths:
        violations = validate_file(path, max_line_length)
        if violations:
            entries.append(FileViolation(file=path, violations=violations))
    return ValidationResult(violations=entries, files_checked=len(paths))


def converted_name(source: str) -> str:
    stem = os.path.splitext(os.path.basename(source))[0]
    return stem + CONVERTED_EXTENSION


def check_unique_names(sources: List[str], root: str) -> None:
    """
    Reject sources that would collide once flattened into the archive.

    Names are compared case-insensitively so the archive also extracts
    cleanly on case-insensitive filesystems.

    Raises:
        DuplicateDocumentError: For the first clashing name, listing every
                                source that maps to it.
    """
    by_name: Dict[str, List[str]] = {}
    for source in sources:
        by_name.setdefault(converted_name(source).lower(), []).append(source)

    for paths in by_name.values():
        if len(paths) > 1:
            clashing = [os.path.relpath(p, root) for p in paths]
            raise DuplicateDocumentError(converted_name(paths[0]), clashing)


def convert_document(
        source: str,
        output_dir: str,
        config: StandardsConfig,
        runner: CommandRunner,
) -> str:
    """
    Convert one Markdown document to .docx with the configured converter.

    Returns:
        str: Path of the produced document.

    Raises:
        ExternalToolError: If the converter is missing or fails.
    """
    target = os.path.join(output_dir, converted_name(source))
    args = [*config.pandoc_command, source, "-o", target, "--from=markdown", "--to=docx"]

    result = runner.run(args)
    if result.returncode == COMMAND_NOT_FOUND:
        raise ExternalToolError(
            f"{config.pandoc_command[0]} not found. Please install pandoc",
            result.args, result.returncode, result.output,
        )
    if not result.ok:
        raise ExternalToolError(f"Failed to convert {os.path.basename(source)}",
                                result.args, result.returncode, result.output)

    logger.debug(f"Converted {source} -> {target}")
    return target


def write_archive(files: List[str], archive_path: str) -> str:
    """
    Write a flat, deflated zip of the given files, replacing any existing one.

    Returns:
        str: The archive path.
    """
    if os.path.exists(archive_path):
        os.remove(archive_path)

    with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            zf.write(path, arcname=os.path.basename(path))

    logger.info(f"Archive written: {archive_path} ({len(files)} file(s))")
    return archive_path


def draft_mail(
        attachment: str,
        subject: str,
        config: StandardsConfig,
        runner: CommandRunner,
) -> None:
    """
    Run the mail hook to draft a message with the archive attached.

    Raises:
        ExternalToolError: If the hook exits non-zero.
    """
    script = MAIL_SCRIPT.format(subject=_escape(subject), attachment=_escape(attachment))
    run_checked(runner, [*config.mail_command, script], description="Failed to open Mail")


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
