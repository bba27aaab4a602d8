from __future__ import annotations

"""
Lint Domain Data Models.

Immutable value objects produced by a single validation run. A report is a
pure function of the directory contents at call time and is never persisted.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LineViolation:
    """
    A single line exceeding the configured maximum.

    Attributes:
        line_number: 1-based ordinal of the line in the file.
        length: Observed length in characters.
        max_length: Configured maximum that was exceeded.
    """
    line_number: int
    length: int
    max_length: int


@dataclass(frozen=True)
class FileViolation:
    """All violations found in one document, in line order."""
    file: str
    violations: List[LineViolation] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationResult:
    """
    Aggregated report for a directory.

    Attributes:
        violations: Offending files in scanner (sorted path) order.
        files_checked: Number of candidate documents that were read.
    """
    violations: List[FileViolation] = field(default_factory=list)
    files_checked: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def violation_count(self) -> int:
        return sum(len(fv.violations) for fv in self.violations)
