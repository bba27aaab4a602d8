from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Test doubles for the external process runner and the project source.
3. A StandardsConfig rooted in the per-test temporary directory.
"""

import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from standards.dal.config import DatabaseConfig  # noqa: E402
from standards.domain.config import StandardsConfig  # noqa: E402
from standards.domain.workspace_models import ProjectRef  # noqa: E402
from standards.infra.process import CommandResult, CommandRunner  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class FakeRunner(CommandRunner):
    """
    Records every invocation instead of spawning processes.

    The optional handler receives (args, cwd) and returns either an exit code
    or a (exit code, output) tuple; without one every command succeeds.
    """

    def __init__(self, handler: Optional[Callable[[List[str], Optional[str]], object]] = None) -> None:
        self.handler = handler
        self.calls: List[Tuple[List[str], Optional[str]]] = []

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append((argv, cwd))

        outcome = self.handler(argv, cwd) if self.handler else 0
        if isinstance(outcome, tuple):
            code, output = outcome
        else:
            code, output = (outcome or 0), ""
        return CommandResult(args=argv, returncode=code, output=output)


class FakeProjectClient:
    """In-memory project listing."""

    def __init__(self, names: Sequence[str] = ()) -> None:
        self.projects = [ProjectRef(name=n) for n in names]
        self.calls = 0

    def fetch_projects(self) -> List[ProjectRef]:
        self.calls += 1
        return list(self.projects)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Template directory holding CLAUDE.md and agents/markdown-formatter.md."""
    templates = tmp_path / "templates"
    (templates / "agents").mkdir(parents=True)
    (templates / "CLAUDE.md").write_text("# House Style\n", encoding="utf-8")
    (templates / "agents" / "markdown-formatter.md").write_text("# Formatter\n", encoding="utf-8")
    return templates


@pytest.fixture
def standards_config(tmp_path: Path, template_dir: Path) -> StandardsConfig:
    """
    Return a configuration whose every path lives under tmp_path.

    Returns:
        StandardsConfig: Config with mail disabled and in-memory database.
    """
    return StandardsConfig(
        standards_dir=str(tmp_path / "Standards"),
        template_dir=str(template_dir),
        api_base_url="https://api.test",
        mail_enabled=False,
        database=DatabaseConfig.for_testing(),
    )


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory for runners with a custom (args, cwd) handler."""
    return FakeRunner


@pytest.fixture
def make_client() -> Callable[..., FakeProjectClient]:
    """Factory for project listings."""
    return FakeProjectClient
