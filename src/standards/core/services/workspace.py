from __future__ import annotations

"""
Standards Working-Tree Service.

Prepares and refreshes the local directory that holds one sub-directory per
project: 'setup' creates the tree and installs the templates, 'sync' pulls
the latest revision of every project that is already a git checkout.
"""

import logging
import os
import shutil
from typing import Callable, List, Optional, Tuple

from standards.domain import constants
from standards.domain.config import StandardsConfig
from standards.domain.errors import WorkspaceError
from standards.domain.workspace_models import ProjectRef, PullFailure, SetupResult, SyncResult
from standards.infra.fs import display_path, ensure_directory
from standards.infra.process import CommandRunner

logger = logging.getLogger(__name__)

Printer = Callable[[str], None]


def _silent(_: str) -> None:
    return None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def template_targets(config: StandardsConfig) -> List[Tuple[str, str]]:
    """
    Map each template source to its destination in the working tree.

    Returns:
        List[Tuple[str, str]]: (source, destination) absolute path pairs.
    """
    agents_target = os.path.join(config.standards_dir, *constants.AGENTS_TARGET_SUBDIR)
    return [
        (
            os.path.join(config.template_dir, constants.STYLE_GUIDE_FILENAME),
            os.path.join(config.standards_dir, constants.STYLE_GUIDE_FILENAME),
        ),
        (
            os.path.join(config.template_dir, constants.AGENTS_TEMPLATE_SUBDIR,
                         constants.FORMATTER_AGENT_FILENAME),
            os.path.join(agents_target, constants.FORMATTER_AGENT_FILENAME),
        ),
    ]


def setup_workspace(
        config: StandardsConfig,
        client,
        echo: Printer = _silent,
) -> SetupResult:
    """
    Create the working tree, install templates and add project directories.

    Existing templates are never overwritten.

    Args:
        config: Resolved configuration.
        client: Project source exposing fetch_projects().
        echo: Sink for progress lines.

    Returns:
        SetupResult: What was created, copied and skipped.

    Raises:
        WorkspaceError: If a directory cannot be created or a template is missing.
        APIClientError: If the project listing fails.
    """
    root = config.standards_dir
    result = SetupResult(standards_dir=root)

    if ensure_directory(root):
        result.created_dirs.append(root)
    echo(f"✓ {display_path(root)} directory ready")

    for source, target in template_targets(config):
        _install_template(source, target, result, echo)

    echo("Fetching projects from Sagebrush API...")
    projects = client.fetch_projects()
    result.project_count = len(projects)
    echo(f"✓ Found {len(projects)} projects")

    for project in projects:
        project_dir = project_path(root, project)
        if ensure_directory(project_dir):
            result.created_dirs.append(project_dir)
            echo(f"✓ Created {display_path(project_dir)}")

    echo("\n✓ Setup complete!")
    return result


def sync_workspace(
        config: StandardsConfig,
        client,
        runner: CommandRunner,
        standards_dir: Optional[str] = None,
        echo: Printer = _silent,
) -> SyncResult:
    """
    Refresh every project directory in the working tree.

    Directories that are git checkouts are pulled; a failing pull is recorded
    with its output and the remaining projects are still processed.

    Args:
        config: Resolved configuration.
        client: Project source exposing fetch_projects().
        runner: Process runner used for git.
        standards_dir: Override of the configured working tree.
        echo: Sink for progress lines.

    Returns:
        SyncResult: Created, updated, skipped and failed projects.

    Raises:
        WorkspaceError: If the working tree does not exist.
        APIClientError: If the project listing fails.
    """
    root = os.path.abspath(standards_dir or config.standards_dir)
    if not os.path.isdir(root):
        raise WorkspaceError(f"{display_path(root)} directory does not exist. "
                             f"Run 'standards setup' first.")

    result = SyncResult(standards_dir=root)

    echo("Fetching projects from Sagebrush API...")
    projects = client.fetch_projects()
    echo(f"✓ Found {len(projects)} projects")

    for project in projects:
        project_dir = project_path(root, project)

        if not os.path.exists(project_dir):
            ensure_directory(project_dir)
            result.created.append(project.name)
            echo(f"✓ Created {display_path(project_dir)}")
            continue

        if not os.path.isdir(os.path.join(project_dir, ".git")):
            result.not_repositories.append(project.name)
            echo(f"⚠️  {display_path(project_dir)} is not a git repository")
            continue

        echo(f"Pulling latest changes for {project.name}...")
        pull = runner.run([*config.git_command, "pull"], cwd=project_dir)
        if pull.ok:
            result.updated.append(project.name)
            echo(f"✓ Updated {display_path(project_dir)}")
        else:
            logger.warning(f"git pull failed for {project.name} (exit {pull.returncode})")
            result.failures.append(PullFailure(project=project.name, output=pull.output))
            echo(f"⚠️  Failed to pull {project.name}: {pull.output.strip()}")

    echo("\n✓ Sync complete!")
    return result


def project_path(root: str, project: ProjectRef) -> str:
    """
    Directory of a project inside the working tree.

    Raises:
        WorkspaceError: If the name would escape the working tree.
    """
    name = project.name
    if name in (".", "..") or "/" in name or "\\" in name or name.startswith("."):
        raise WorkspaceError(f"Invalid project name: {name!r}")
    return os.path.join(root, name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _install_template(source: str, target: str, result: SetupResult, echo: Printer) -> None:
    if os.path.exists(target):
        result.skipped_templates.append(target)
        echo(f"✓ {display_path(target)} already exists")
        return

    if not os.path.isfile(source):
        raise WorkspaceError(f"Template not found: {source}")

    parent = os.path.dirname(target)
    if ensure_directory(parent):
        result.created_dirs.append(parent)

    try:
        shutil.copyfile(source, target)
    except OSError as e:
        raise WorkspaceError(f"Failed to copy {os.path.basename(source)}: {e}") from e

    result.copied_templates.append(target)
    logger.info(f"Installed template {source} -> {target}")
    echo(f"✓ Created {display_path(target)}")
