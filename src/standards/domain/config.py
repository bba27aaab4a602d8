from __future__ import annotations

"""
Configuration Domain Management.

Builds the immutable StandardsConfig that every command receives. Values are
resolved once at process start from three layers: built-in defaults, an
optional JSON file (~/.standards/config.json) and STANDARDS_* environment
variables. Untrusted values are coerced or discarded with a warning instead
of aborting the run.
"""

import json
import logging
import os
import shlex
import sys
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from standards.dal.config import DatabaseConfig
from standards.domain import constants
from standards.infra.fs import get_default_config_path, get_user_data_dir, normalize_path

logger = logging.getLogger(__name__)

# Environment variable -> configuration key
ENV_OVERRIDES: Dict[str, str] = {
    "STANDARDS_DIR": "standards_dir",
    "STANDARDS_TEMPLATE_DIR": "template_dir",
    "STANDARDS_API_URL": "api_base_url",
    "STANDARDS_AGENT_COMMAND": "agent_command",
    "STANDARDS_LOG_FILE": "log_file",
}

_PATH_FIELDS = ("standards_dir", "template_dir")
_STRING_FIELDS = ("api_base_url", "document_extension")
_COMMAND_FIELDS = ("git_command", "pandoc_command", "agent_command", "mail_command")
_POSITIVE_INT_FIELDS = ("max_line_length", "workers")


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StandardsConfig:
    """
    Resolved runtime configuration threaded through every command.

    Attributes:
        standards_dir: Root of the local per-project working tree.
        template_dir: Directory holding CLAUDE.md and agents/ templates.
        api_base_url: Base URL of the project listing service.
        max_line_length: Lint threshold; longer lines are violations.
        document_extension: Extension of candidate documents.
        excluded_filenames: Base names never linted, at any depth.
        git_command: Version-control client invocation.
        pandoc_command: Document converter invocation.
        agent_command: Text agent invocation; the prompt is appended last.
        mail_command: Mail hook invocation; the script is appended last.
        mail_enabled: Whether 'zip' drafts an email with the archive.
        workers: Parallel readers used by the validator.
        log_file: Optional rotating log file.
        database: Data-access layer connection settings.
    """
    standards_dir: str
    template_dir: str
    api_base_url: str = constants.DEFAULT_API_BASE_URL
    max_line_length: int = constants.MAX_LINE_LENGTH
    document_extension: str = constants.DOCUMENT_EXTENSION
    excluded_filenames: Tuple[str, ...] = constants.EXCLUDED_FILENAMES
    git_command: Tuple[str, ...] = constants.DEFAULT_GIT_COMMAND
    pandoc_command: Tuple[str, ...] = constants.DEFAULT_PANDOC_COMMAND
    agent_command: Tuple[str, ...] = constants.DEFAULT_AGENT_COMMAND
    mail_command: Tuple[str, ...] = constants.DEFAULT_MAIL_COMMAND
    mail_enabled: bool = False
    workers: int = 1
    log_file: Optional[str] = None
    database: DatabaseConfig = field(default_factory=DatabaseConfig)

    @property
    def style_guide_path(self) -> str:
        return os.path.join(self.standards_dir, constants.STYLE_GUIDE_FILENAME)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view, used by --dump-config."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        data["database"].pop("password", None)
        return data


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration values.

    Returns:
        Dict[str, Any]: Default values keyed like StandardsConfig fields.
    """
    home = os.path.expanduser("~")
    return {
        "standards_dir": os.path.join(home, constants.STANDARDS_DIR_NAME),
        "template_dir": os.path.join(get_user_data_dir(), "templates"),
        "api_base_url": constants.DEFAULT_API_BASE_URL,
        "max_line_length": constants.MAX_LINE_LENGTH,
        "document_extension": constants.DOCUMENT_EXTENSION,
        "excluded_filenames": list(constants.EXCLUDED_FILENAMES),
        "git_command": list(constants.DEFAULT_GIT_COMMAND),
        "pandoc_command": list(constants.DEFAULT_PANDOC_COMMAND),
        "agent_command": list(constants.DEFAULT_AGENT_COMMAND),
        "mail_command": list(constants.DEFAULT_MAIL_COMMAND),
        "mail_enabled": sys.platform == "darwin",
        "workers": 1,
        "log_file": None,
    }


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------

def load_config(
        config_path: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
) -> Tuple[StandardsConfig, List[str]]:
    """
    Resolve the active configuration.

    Args:
        config_path: Explicit JSON file; defaults to ~/.standards/config.json.
        env: Environment mapping; defaults to os.environ.

    Returns:
        Tuple[StandardsConfig, List[str]]: The configuration and the warnings
                                           raised while normalizing it.
    """
    env = os.environ if env is None else env
    warnings: List[str] = []

    raw: Dict[str, Any] = {}
    raw.update(_read_config_file(config_path or get_default_config_path(), warnings,
                                 explicit=config_path is not None))

    for var, key in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            raw[key] = value

    normalized, validation_warnings = validate_config(raw)
    warnings.extend(validation_warnings)

    normalized["database"] = DatabaseConfig.from_env(env)
    return StandardsConfig(**normalized), warnings


def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Unknown keys are dropped, values are coerced to the expected types and
    anything unusable falls back to the default.

    Args:
        config: Raw configuration data (usually a dictionary).

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized values and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        warnings.append(f"Invalid config type: expected dict, received "
                        f"{type(config).__name__}. Using defaults.")
        config = {}

    for key in config:
        if key not in defaults:
            warnings.append(f"Unknown configuration key '{key}' ignored.")

    merged: Dict[str, Any] = {}

    for name in _PATH_FIELDS:
        value = _as_str(config.get(name), defaults[name], name, warnings)
        merged[name] = normalize_path(value, defaults[name])

    for name in _STRING_FIELDS:
        merged[name] = _as_str(config.get(name), defaults[name], name, warnings)

    for name in _POSITIVE_INT_FIELDS:
        merged[name] = _as_positive_int(config.get(name), defaults[name], name, warnings)

    for name in _COMMAND_FIELDS:
        merged[name] = tuple(_as_command(config.get(name), defaults[name], name, warnings))

    merged["excluded_filenames"] = tuple(
        _as_list_str(config.get("excluded_filenames"), defaults["excluded_filenames"],
                     "excluded_filenames", warnings)
    )
    merged["mail_enabled"] = _as_bool(config.get("mail_enabled"), defaults["mail_enabled"],
                                      "mail_enabled", warnings)

    log_file = config.get("log_file")
    merged["log_file"] = normalize_path(log_file, "") if isinstance(log_file, str) and log_file.strip() else None

    if not merged["document_extension"].startswith("."):
        warnings.append(f"Extension '{merged['document_extension']}' corrected to "
                        f"'.{merged['document_extension']}'.")
        merged["document_extension"] = "." + merged["document_extension"]

    for w in warnings:
        logger.debug(w)

    return merged, warnings

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def _read_config_file(path: str, warnings: List[str], explicit: bool) -> Dict[str, Any]:
    """Load the JSON layer; a missing default file is silently ignored."""
    if not os.path.exists(path):
        if explicit:
            warnings.append(f"Config file not found: {path}. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        warnings.append(f"Failed to load config file {path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        warnings.append(f"Corrupted config file {path}. Using defaults.")
        return {}

    logger.debug(f"Configuration loaded from {path}")
    return data

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, name: str, warnings: List[str]) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    warnings.append(f"Invalid field '{name}': expected str, received "
                    f"{type(value).__name__}. Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, name: str, warnings: List[str]) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "1", "yes", "y", "on"):
            return True
        if s in ("false", "0", "no", "n", "off"):
            return False
    warnings.append(f"Invalid field '{name}': expected bool, received "
                    f"{type(value).__name__}. Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, name: str, warnings: List[str]) -> int:
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    warnings.append(f"Invalid field '{name}': expected positive int, received "
                    f"{value!r}. Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], name: str, warnings: List[str]) -> List[str]:
    if value is None:
        return list(fallback)
    if isinstance(value, str):
        items = [x.strip() for x in value.split(",") if x.strip()]
        return items if items else list(fallback)
    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            else:
                warnings.append(f"Invalid item in '{name}[{i}]': expected str. Item discarded.")
        return out
    warnings.append(f"Invalid field '{name}': expected list[str], received "
                    f"{type(value).__name__}. Using fallback.")
    return list(fallback)


def _as_command(value: Any, fallback: List[str], name: str, warnings: List[str]) -> List[str]:
    """Commands accept either an argv list or a shell-style string."""
    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError as e:
            warnings.append(f"Invalid field '{name}': {e}. Using fallback.")
            return list(fallback)
        return parts if parts else list(fallback)

    parts = _as_list_str(value, fallback, name, warnings)
    return parts if parts else list(fallback)
