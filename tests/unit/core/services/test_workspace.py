from __future__ import annotations

"""
Unit tests for the Standards Working-Tree Service.

Uses an in-memory project listing and a recording process runner, so no
network access or git binary is needed.
"""

import os
from dataclasses import replace
from pathlib import Path

import pytest

from standards.core.services.workspace import (
    project_path,
    setup_workspace,
    sync_workspace,
    template_targets,
)
from standards.domain.errors import WorkspaceError
from standards.domain.workspace_models import ProjectRef


# -----------------------------------------------------------------------------
# setup
# -----------------------------------------------------------------------------

def test_template_targets_layout(standards_config):
    targets = template_targets(standards_config)
    root = standards_config.standards_dir

    assert targets[0][1] == os.path.join(root, "CLAUDE.md")
    assert targets[1][1] == os.path.join(root, ".claude", "agents", "markdown-formatter.md")


def test_setup_creates_tree_templates_and_projects(standards_config, make_client):
    client = make_client(["alpha", "beta"])
    lines = []

    result = setup_workspace(standards_config, client, echo=lines.append)

    root = Path(standards_config.standards_dir)
    assert (root / "CLAUDE.md").read_text(encoding="utf-8") == "# House Style\n"
    assert (root / ".claude" / "agents" / "markdown-formatter.md").exists()
    assert (root / "alpha").is_dir()
    assert (root / "beta").is_dir()

    assert result.project_count == 2
    assert len(result.copied_templates) == 2
    assert result.skipped_templates == []
    assert str(root) in result.created_dirs
    assert lines[-1] == "\n✓ Setup complete!"


def test_setup_never_overwrites_existing_templates(standards_config, make_client):
    root = Path(standards_config.standards_dir)
    root.mkdir()
    (root / "CLAUDE.md").write_text("local edits", encoding="utf-8")

    result = setup_workspace(standards_config, make_client([]))

    assert (root / "CLAUDE.md").read_text(encoding="utf-8") == "local edits"
    assert result.skipped_templates == [str(root / "CLAUDE.md")]
    assert len(result.copied_templates) == 1


def test_setup_is_idempotent(standards_config, make_client):
    client = make_client(["alpha"])
    setup_workspace(standards_config, client)

    second = setup_workspace(standards_config, client)

    assert second.created_dirs == []
    assert second.copied_templates == []
    assert len(second.skipped_templates) == 2


def test_setup_missing_template_raises(standards_config, make_client, tmp_path):
    config = replace(standards_config, template_dir=str(tmp_path / "no-templates"))

    with pytest.raises(WorkspaceError) as exc_info:
        setup_workspace(config, make_client(["alpha"]))

    assert "Template not found" in str(exc_info.value)


def test_setup_rejects_file_in_place_of_directory(standards_config, make_client):
    Path(standards_config.standards_dir).write_text("not a dir", encoding="utf-8")

    with pytest.raises(WorkspaceError):
        setup_workspace(standards_config, make_client([]))


def test_project_path_rejects_escaping_names(tmp_path):
    root = str(tmp_path)
    assert project_path(root, ProjectRef("alpha")) == os.path.join(root, "alpha")

    for bad in ["..", "../evil", "a/b", ".hidden"]:
        with pytest.raises(WorkspaceError):
            project_path(root, ProjectRef(bad))


# -----------------------------------------------------------------------------
# sync
# -----------------------------------------------------------------------------

def _make_repo(root: Path, name: str) -> Path:
    repo = root / name
    (repo / ".git").mkdir(parents=True)
    return repo


def test_sync_requires_existing_tree(standards_config, make_client, fake_runner):
    with pytest.raises(WorkspaceError) as exc_info:
        sync_workspace(standards_config, make_client(["alpha"]), fake_runner)

    assert "standards setup" in str(exc_info.value)


def test_sync_classifies_projects(standards_config, make_client, fake_runner):
    root = Path(standards_config.standards_dir)
    root.mkdir()
    repo = _make_repo(root, "gitproj")
    (root / "plain").mkdir()

    result = sync_workspace(standards_config, make_client(["gitproj", "plain", "fresh"]), fake_runner)

    assert result.updated == ["gitproj"]
    assert result.not_repositories == ["plain"]
    assert result.created == ["fresh"]
    assert (root / "fresh").is_dir()
    assert result.ok

    assert fake_runner.calls == [(["git", "pull"], str(repo))]


def test_sync_records_failures_and_continues(standards_config, make_client, make_runner):
    root = Path(standards_config.standards_dir)
    root.mkdir()
    _make_repo(root, "broken")
    _make_repo(root, "healthy")

    def handler(args, cwd):
        if cwd.endswith("broken"):
            return 1, "fatal: not possible to fast-forward"
        return 0

    runner = make_runner(handler)
    result = sync_workspace(standards_config, make_client(["broken", "healthy"]), runner)

    assert not result.ok
    assert result.updated == ["healthy"]
    assert result.failures[0].project == "broken"
    assert "fast-forward" in result.failures[0].output
    assert len(runner.calls) == 2


def test_sync_uses_directory_override(standards_config, make_client, fake_runner, tmp_path):
    other = tmp_path / "elsewhere"
    other.mkdir()

    result = sync_workspace(standards_config, make_client(["alpha"]), fake_runner,
                            standards_dir=str(other))

    assert result.standards_dir == str(other)
    assert (other / "alpha").is_dir()


def test_sync_uses_configured_git_command(standards_config, make_client, fake_runner):
    config = replace(standards_config, git_command=("git", "-c", "pull.rebase=true"))
    root = Path(config.standards_dir)
    root.mkdir()
    _make_repo(root, "alpha")

    sync_workspace(config, make_client(["alpha"]), fake_runner)

    assert fake_runner.calls[0][0] == ["git", "-c", "pull.rebase=true", "pull"]
