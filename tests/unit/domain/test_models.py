from __future__ import annotations

"""
Unit tests for the Domain Models and Error Taxonomy.

Verifies the computed properties of the lint and workspace DTOs and the
attributes carried by each error type.
"""

import pytest

from standards.domain.errors import (
    APIClientError,
    DirectoryNotFoundError,
    ExternalToolError,
    RecordNotFoundError,
    StandardsError,
    ValidationFailedError,
    WorkspaceError,
)
from standards.domain.lint_models import FileViolation, LineViolation, ValidationResult
from standards.domain.workspace_models import PullFailure, SyncResult


def test_validation_result_counts():
    result = ValidationResult(
        violations=[
            FileViolation("a.md", [LineViolation(1, 121, 120), LineViolation(2, 130, 120)]),
            FileViolation("b.md", [LineViolation(5, 200, 120)]),
        ],
        files_checked=4,
    )

    assert result.is_valid is False
    assert result.violation_count == 3


def test_empty_validation_result_is_valid():
    result = ValidationResult()
    assert result.is_valid is True
    assert result.violation_count == 0


def test_line_violation_is_immutable():
    v = LineViolation(1, 121, 120)
    with pytest.raises(AttributeError):
        v.length = 5  # type: ignore[misc]


def test_sync_result_ok_reflects_failures():
    result = SyncResult(standards_dir="/s")
    assert result.ok

    result.failures.append(PullFailure(project="alpha", output="boom"))
    assert not result.ok


@pytest.mark.parametrize("error", [
    DirectoryNotFoundError("/x"),
    WorkspaceError("w"),
    APIClientError("api", status_code=503),
    RecordNotFoundError("people", 7),
    ExternalToolError("git pull failed", ["git", "pull"], 1, "out"),
])
def test_all_errors_share_root(error):
    assert isinstance(error, StandardsError)


def test_directory_not_found_message():
    assert str(DirectoryNotFoundError("docs")) == "'docs' is not a valid directory"


def test_external_tool_error_carries_output():
    err = ExternalToolError("pandoc failed", ["pandoc", "a.md"], 3, "  bad input \n")

    assert err.command == ["pandoc", "a.md"]
    assert err.returncode == 3
    assert str(err) == "pandoc failed (exit code 3): bad input"


def test_validation_failed_error_keeps_result():
    result = ValidationResult(violations=[FileViolation("a.md", [LineViolation(1, 121, 120)])])
    err = ValidationFailedError(result)

    assert err.result is result
    assert "1 violation(s) in 1 file(s)" in str(err)


def test_record_not_found_attributes():
    err = RecordNotFoundError("projects", 42)
    assert err.table == "projects"
    assert err.record_id == 42
