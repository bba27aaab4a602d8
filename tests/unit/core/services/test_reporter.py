from __future__ import annotations

"""
Unit tests for Validation Report Rendering.

Compares the console output against the exact expected text and checks
the JSON-friendly dictionary used by 'lint --json'.
"""

import os

from standards.core.services.reporter import (
    FIX_INSTRUCTIONS,
    relative_to,
    render_report,
    report_to_dict,
)
from standards.domain.lint_models import FileViolation, LineViolation, ValidationResult

ROOT = os.path.join(os.sep, "work", "docs")


def _failing_result() -> ValidationResult:
    return ValidationResult(
        violations=[
            FileViolation(
                file=os.path.join(ROOT, "legal", "terms.md"),
                violations=[LineViolation(3, 121, 120), LineViolation(9, 150, 120)],
            ),
            FileViolation(
                file=os.path.join(ROOT, "policy.md"),
                violations=[LineViolation(1, 200, 120)],
            ),
        ],
        files_checked=5,
    )


def test_render_valid_report():
    text = render_report(ValidationResult(files_checked=2), ROOT)
    assert text == "✓ All Markdown files have lines of 120 characters or less"


def test_render_valid_report_quotes_custom_maximum():
    text = render_report(ValidationResult(), ROOT, max_line_length=80)
    assert text == "✓ All Markdown files have lines of 80 characters or less"


def test_render_failing_report_without_instructions():
    text = render_report(_failing_result(), ROOT, include_instructions=False)

    assert text == "\n".join([
        "✗ Found line length violations:",
        "",
        "legal/terms.md:",
        "  Line 3: 121 characters (exceeds 120)",
        "  Line 9: 150 characters (exceeds 120)",
        "",
        "policy.md:",
        "  Line 1: 200 characters (exceeds 120)",
    ])


def test_render_failing_report_appends_instructions():
    text = render_report(_failing_result(), ROOT)

    assert text.startswith("✗ Found line length violations:")
    assert FIX_INSTRUCTIONS.format(max=120).strip() in text
    assert text.endswith("Run 'standards lint .' again after fixing to verify all lines are within the limit.")
    assert "\n\n\n" not in text.split("📝")[0]


def test_relative_to_uses_forward_slashes():
    assert relative_to(os.path.join(ROOT, "a", "b.md"), ROOT) == "a/b.md"


def test_report_to_dict_structure():
    data = report_to_dict(_failing_result(), ROOT)

    assert data["valid"] is False
    assert data["files_checked"] == 5
    assert data["violation_count"] == 3
    assert data["files"][0] == {
        "file": "legal/terms.md",
        "violations": [
            {"line": 3, "length": 121, "max": 120},
            {"line": 9, "length": 150, "max": 120},
        ],
    }


def test_report_to_dict_valid():
    data = report_to_dict(ValidationResult(files_checked=1), ROOT)
    assert data == {"valid": True, "files_checked": 1, "violation_count": 0, "files": []}
