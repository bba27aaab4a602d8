from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure the CLI or the data-access layer reports to its caller derives
from StandardsError, so the interface layer can map the whole family to a
non-zero exit code while unexpected defects still reach the global supervisor.
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from standards.domain.lint_models import ValidationResult


class StandardsError(Exception):
    """Root of all reportable application errors."""


# -----------------------------------------------------------------------------
# FILESYSTEM & VALIDATION
# -----------------------------------------------------------------------------

class DirectoryNotFoundError(StandardsError):
    """The requested root path is missing or is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' is not a valid directory")
        self.path = path


class DocumentNotFoundError(StandardsError):
    """A candidate document disappeared between enumeration and read."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class DocumentDecodeError(StandardsError):
    """A candidate document could not be decoded as UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot decode {path} as UTF-8: {reason}")
        self.path = path
        self.reason = reason


class ValidationFailedError(StandardsError):
    """
    One or more line-length violations were found.

    This is a control-flow signal rather than a defect: the attached result
    carries the full per-file, per-line detail for reporting.
    """

    def __init__(self, result: "ValidationResult") -> None:
        super().__init__(f"Lint check failed: {result.violation_count} violation(s) "
                         f"in {len(result.violations)} file(s)")
        self.result = result


# -----------------------------------------------------------------------------
# EXTERNAL COLLABORATORS
# -----------------------------------------------------------------------------

class ExternalToolError(StandardsError):
    """A delegated process exited with a non-zero status."""

    def __init__(
            self,
            description: str,
            args: Sequence[str],
            returncode: int,
            output: str = "",
    ) -> None:
        message = f"{description} (exit code {returncode})"
        if output.strip():
            message = f"{message}: {output.strip()}"
        super().__init__(message)
        self.description = description
        self.command = list(args)
        self.returncode = returncode
        self.output = output


class DuplicateDocumentError(StandardsError):
    """Several documents would produce the same entry in a flat archive."""

    def __init__(self, name: str, paths: Sequence[str]) -> None:
        super().__init__(f"Documents would overwrite each other as '{name}': {', '.join(paths)}")
        self.name = name
        self.paths = list(paths)


class WorkspaceError(StandardsError):
    """The local standards working tree could not be prepared."""


class APIClientError(StandardsError):
    """The project listing service could not be reached or returned bad data."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# -----------------------------------------------------------------------------
# DATA ACCESS
# -----------------------------------------------------------------------------

class RecordNotFoundError(StandardsError):
    """An update or delete targeted an identity that does not exist."""

    def __init__(self, table: str, record_id: Optional[int]) -> None:
        super().__init__(f"No record with id {record_id} in '{table}'")
        self.table = table
        self.record_id = record_id
