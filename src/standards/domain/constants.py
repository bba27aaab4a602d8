from __future__ import annotations

"""
Domain Constants.

Centralizes the lint rule parameters, workspace layout names and the default
locations of the external collaborators used by the CLI commands.
"""

from typing import Tuple

APP_VERSION = "0.1.0"

# -----------------------------------------------------------------------------
# LINT RULE
# -----------------------------------------------------------------------------

MAX_LINE_LENGTH = 120
DOCUMENT_EXTENSION = ".md"
EXCLUDED_FILENAMES: Tuple[str, ...] = ("README.md",)
HIDDEN_PREFIX = "."

# -----------------------------------------------------------------------------
# WORKSPACE LAYOUT
# -----------------------------------------------------------------------------

STANDARDS_DIR_NAME = "Standards"
STYLE_GUIDE_FILENAME = "CLAUDE.md"
AGENTS_TEMPLATE_SUBDIR = "agents"
AGENTS_TARGET_SUBDIR = (".claude", "agents")
FORMATTER_AGENT_FILENAME = "markdown-formatter.md"

# -----------------------------------------------------------------------------
# EXTERNAL COLLABORATORS
# -----------------------------------------------------------------------------

DEFAULT_API_BASE_URL = "https://www.sagebrush.services"
DEFAULT_GIT_COMMAND: Tuple[str, ...] = ("git",)
DEFAULT_PANDOC_COMMAND: Tuple[str, ...] = ("pandoc",)
DEFAULT_AGENT_COMMAND: Tuple[str, ...] = ("claude", "--dangerously-skip-permissions", "--print")
DEFAULT_MAIL_COMMAND: Tuple[str, ...] = ("osascript", "-e")
