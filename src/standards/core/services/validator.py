from __future__ import annotations

"""
Line-Length Validation Service.

Runs the scanner and the line checker over a documentation tree and
assembles the directory report. Any per-file read error aborts the whole
run; there is no partial-results mode.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from standards.core.pipeline.components.reader import read_document_lines
from standards.core.services.scanner import collect_document_files
from standards.domain.constants import DOCUMENT_EXTENSION, EXCLUDED_FILENAMES, MAX_LINE_LENGTH
from standards.domain.errors import ValidationFailedError
from standards.domain.lint_models import FileViolation, LineViolation, ValidationResult

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_file(file_path: str, max_line_length: int = MAX_LINE_LENGTH) -> List[LineViolation]:
    """
    Check a single document.

    Args:
        file_path: Path to the document.
        max_line_length: Longest compliant line, in characters.

    Returns:
        List[LineViolation]: Violations in line order; empty if compliant.

    Raises:
        DocumentNotFoundError: If the file disappeared.
        DocumentDecodeError: If the file is not valid UTF-8.
    """
    violations: List[LineViolation] = []
    for index, line in enumerate(read_document_lines(file_path), start=1):
        length = len(line)
        if length > max_line_length:
            violations.append(LineViolation(line_number=index, length=length,
                                            max_length=max_line_length))
    return violations


def validate_directory(
        root: str,
        max_line_length: int = MAX_LINE_LENGTH,
        workers: int = 1,
        extension: str = DOCUMENT_EXTENSION,
        excluded: Tuple[str, ...] = EXCLUDED_FILENAMES,
) -> ValidationResult:
    """
    Validate every candidate document under a directory.

    With more than one worker the files are read in a thread pool; the report
    keeps the scanner's sorted order regardless of completion order, and the
    first failing file (in that order) aborts the run.

    Args:
        root: Directory to scan.
        max_line_length: Longest compliant line, in characters.
        workers: Size of the reader pool; 1 reads sequentially.
        extension: Designated document extension.
        excluded: Exact base names skipped at any depth.

    Returns:
        ValidationResult: The aggregated report.

    Raises:
        DirectoryNotFoundError: If root is missing or not a directory.
    """
    files = collect_document_files(root, extension=extension, excluded=excluded)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="LintWorker") as executor:
            per_file = list(executor.map(lambda p: validate_file(p, max_line_length), files))
    else:
        per_file = [validate_file(p, max_line_length) for p in files]

    entries = [
        FileViolation(file=path, violations=violations)
        for path, violations in zip(files, per_file)
        if violations
    ]

    result = ValidationResult(violations=entries, files_checked=len(files))
    logger.info(f"Checked {result.files_checked} document(s); "
                f"{len(entries)} with violations ({result.violation_count} line(s))")
    return result


def ensure_valid(result: ValidationResult) -> ValidationResult:
    """
    Turn a failing report into a ValidationFailedError.

    Raises:
        ValidationFailedError: If the report holds any violation.
    """
    if not result.is_valid:
        raise ValidationFailedError(result)
    return result
