from __future__ import annotations

"""
Unit tests for the Line-Length Validation Service.

Verifies the length predicate and its boundary, line numbering, empty and
newline edge cases, directory aggregation, worker pool ordering and the
ensure_valid() control-flow signal.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from standards.core.services import validator
from standards.core.services.validator import ensure_valid, validate_directory, validate_file
from standards.domain.errors import (
    DirectoryNotFoundError,
    DocumentDecodeError,
    ValidationFailedError,
)
from standards.domain.lint_models import LineViolation, ValidationResult


def _write(path: Path, content: str) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return str(path)


# -----------------------------------------------------------------------------
# validate_file
# -----------------------------------------------------------------------------

def test_line_of_exactly_max_is_compliant(tmp_path: Path):
    f = _write(tmp_path / "ok.md", "a" * 120)
    assert validate_file(f) == []


def test_line_over_max_is_reported_with_position(tmp_path: Path):
    f = _write(tmp_path / "long.md", "# Title\n\n" + "a" * 121)

    assert validate_file(f) == [LineViolation(line_number=3, length=121, max_length=120)]


def test_every_offending_line_is_reported_in_order(tmp_path: Path):
    f = _write(tmp_path / "multi.md", "b" * 130 + "\nshort\n" + "c" * 200 + "\n")

    violations = validate_file(f)

    assert [(v.line_number, v.length) for v in violations] == [(1, 130), (3, 200)]


def test_empty_file_has_no_violations(tmp_path: Path):
    f = _write(tmp_path / "empty.md", "")
    assert validate_file(f) == []


def test_crlf_is_not_counted(tmp_path: Path):
    """A 120 character line terminated by CRLF stays compliant."""
    f = _write(tmp_path / "crlf.md", "a" * 120 + "\r\n" + "b" * 120 + "\r\n")
    assert validate_file(f) == []


def test_length_counts_characters_not_bytes(tmp_path: Path):
    f = _write(tmp_path / "unicode.md", "é" * 120 + "\n" + "✓" * 121)

    violations = validate_file(f)

    assert len(violations) == 1
    assert violations[0].line_number == 2
    assert violations[0].length == 121


def test_custom_maximum(tmp_path: Path):
    f = _write(tmp_path / "custom.md", "x" * 11)

    assert validate_file(f, max_line_length=10) == [LineViolation(1, 11, 10)]
    assert validate_file(f, max_line_length=11) == []


def test_undecodable_file_raises(tmp_path: Path):
    f = tmp_path / "bad.md"
    f.write_bytes(b"\xff\xfe\x00broken")

    with pytest.raises(DocumentDecodeError):
        validate_file(str(f))


# -----------------------------------------------------------------------------
# validate_directory
# -----------------------------------------------------------------------------

def test_directory_with_compliant_files_is_valid(tmp_path: Path):
    _write(tmp_path / "a.md", "short\n")
    _write(tmp_path / "sub" / "b.md", "a" * 120 + "\n")

    result = validate_directory(str(tmp_path))

    assert result.is_valid
    assert result.files_checked == 2
    assert result.violation_count == 0


def test_directory_collects_offending_files_in_path_order(tmp_path: Path):
    _write(tmp_path / "z.md", "z" * 125)
    _write(tmp_path / "a.md", "a" * 121 + "\n" + "a" * 122)
    _write(tmp_path / "ok.md", "fine")

    result = validate_directory(str(tmp_path))

    assert not result.is_valid
    assert [Path(fv.file).name for fv in result.violations] == ["a.md", "z.md"]
    assert result.violation_count == 3
    assert result.files_checked == 3


def test_readme_is_ignored_at_any_depth(tmp_path: Path):
    _write(tmp_path / "README.md", "r" * 500)
    _write(tmp_path / "nested" / "deeper" / "README.md", "r" * 500)

    result = validate_directory(str(tmp_path))

    assert result.is_valid
    assert result.files_checked == 0


def test_hidden_directories_are_ignored(tmp_path: Path):
    _write(tmp_path / ".claude" / "agents" / "fmt.md", "x" * 300)

    assert validate_directory(str(tmp_path)).is_valid


def test_missing_directory_raises(tmp_path: Path):
    with pytest.raises(DirectoryNotFoundError):
        validate_directory(str(tmp_path / "missing"))


def test_decode_error_aborts_whole_run(tmp_path: Path):
    _write(tmp_path / "a.md", "fine")
    (tmp_path / "b.md").write_bytes(b"\x80")

    with pytest.raises(DocumentDecodeError):
        validate_directory(str(tmp_path))


def test_worker_pool_keeps_sorted_order(tmp_path: Path):
    names = [f"doc{i:02d}.md" for i in range(12)]
    for name in names:
        _write(tmp_path / name, "x" * 130)

    sequential = validate_directory(str(tmp_path), workers=1)
    parallel = validate_directory(str(tmp_path), workers=4)

    assert [fv.file for fv in parallel.violations] == [fv.file for fv in sequential.violations]
    assert [Path(fv.file).name for fv in parallel.violations] == names


def test_worker_pool_is_used_when_requested(tmp_path: Path):
    _write(tmp_path / "a.md", "a")
    _write(tmp_path / "b.md", "b")

    with patch.object(validator, "ThreadPoolExecutor", wraps=validator.ThreadPoolExecutor) as pool:
        validate_directory(str(tmp_path), workers=2)

    pool.assert_called_once()
    assert pool.call_args.kwargs["max_workers"] == 2


# -----------------------------------------------------------------------------
# ensure_valid
# -----------------------------------------------------------------------------

def test_ensure_valid_passes_through_clean_result():
    result = ValidationResult(files_checked=3)
    assert ensure_valid(result) is result


def test_ensure_valid_raises_with_result_attached(tmp_path: Path):
    _write(tmp_path / "long.md", "y" * 121)
    result = validate_directory(str(tmp_path))

    with pytest.raises(ValidationFailedError) as exc_info:
        ensure_valid(result)

    assert exc_info.value.result is result
    assert "1 violation(s)" in str(exc_info.value)
