from __future__ import annotations

"""
Validation Report Rendering.

Turns a ValidationResult into console text or a JSON-friendly dictionary.
Paths are shown relative to the validated root.
"""

import os
from typing import Any, Dict, List

from standards.domain.constants import MAX_LINE_LENGTH
from standards.domain.lint_models import ValidationResult

FIX_INSTRUCTIONS = """
📝 Fix Instructions:
All lines in Markdown files must be ≤{max} characters. To fix these violations:

1. Break long lines at natural boundaries (spaces, punctuation)
2. Keep each line as close to {max} characters as possible without exceeding it
3. Maintain readability and proper Markdown formatting
4. For long URLs or code, consider using reference-style links

Run 'standards lint .' again after fixing to verify all lines are within the limit."""


def relative_to(path: str, root: str) -> str:
    """Path of a document relative to the validated root, with '/' separators."""
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return path
    return rel.replace(os.sep, "/")


def render_report(
        result: ValidationResult,
        root: str,
        max_line_length: int = MAX_LINE_LENGTH,
        include_instructions: bool = True,
) -> str:
    """
    Render a report for the console.

    Args:
        result: The aggregated report.
        root: Directory the report was produced for.
        max_line_length: Threshold quoted in the success line and instructions.
        include_instructions: Append the remediation guidance on failure.

    Returns:
        str: Multi-line text without a trailing newline.
    """
    if result.is_valid:
        return f"✓ All Markdown files have lines of {max_line_length} characters or less"

    lines: List[str] = ["✗ Found line length violations:", ""]
    for file_violation in result.violations:
        lines.append(f"{relative_to(file_violation.file, root)}:")
        for v in file_violation.violations:
            lines.append(f"  Line {v.line_number}: {v.length} characters (exceeds {v.max_length})")
        lines.append("")

    if include_instructions:
        lines.append(FIX_INSTRUCTIONS.format(max=max_line_length).lstrip("\n"))

    return "\n".join(lines).rstrip("\n")


def report_to_dict(result: ValidationResult, root: str) -> Dict[str, Any]:
    """Serialize a report for --json output."""
    return {
        "valid": result.is_valid,
        "files_checked": result.files_checked,
        "violation_count": result.violation_count,
        "files": [
            {
                "file": relative_to(fv.file, root),
                "violations": [
                    {"line": v.line_number, "length": v.length, "max": v.max_length}
                    for v in fv.violations
                ],
            }
            for fv in result.violations
        ],
    }
