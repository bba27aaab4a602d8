from __future__ import annotations

"""
Workspace Domain Data Models.

DTOs exchanged between the project listing client, the setup/sync/zip
services and the CLI renderer.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ProjectRef:
    """A project advertised by the listing service."""
    name: str


@dataclass
class SetupResult:
    """Outcome of preparing the standards working tree."""
    standards_dir: str
    created_dirs: List[str] = field(default_factory=list)
    copied_templates: List[str] = field(default_factory=list)
    skipped_templates: List[str] = field(default_factory=list)
    project_count: int = 0


@dataclass(frozen=True)
class PullFailure:
    """A git pull that exited non-zero, with its captured output."""
    project: str
    output: str


@dataclass
class SyncResult:
    """Outcome of refreshing every project directory."""
    standards_dir: str
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    not_repositories: List[str] = field(default_factory=list)
    failures: List[PullFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class PackageResult:
    """Outcome of converting and archiving a documentation directory."""
    directory: str
    archive_path: Optional[str] = None
    converted: List[str] = field(default_factory=list)
    mailed: bool = False
