from __future__ import annotations

"""
Document Discovery Service.

Traverses a documentation tree and returns the candidate documents in a
deterministic order, so reports are reproducible across runs and platforms.
"""

import logging
import os
from typing import Iterable, Iterator, List

from standards.core.pipeline.components.filters import is_candidate_document, prune_hidden_dirs
from standards.domain.constants import DOCUMENT_EXTENSION, EXCLUDED_FILENAMES
from standards.domain.errors import DirectoryNotFoundError

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def resolve_directory(path: str) -> str:
    """
    Resolve a user supplied root to an absolute directory path.

    Args:
        path: Raw path; "." means the current working directory.

    Returns:
        str: Absolute path of an existing directory.

    Raises:
        DirectoryNotFoundError: If the path is missing or not a directory.
    """
    abs_path = os.path.abspath(path or ".")
    if not os.path.isdir(abs_path):
        raise DirectoryNotFoundError(path)
    return abs_path


def yield_document_files(
        root: str,
        extension: str = DOCUMENT_EXTENSION,
        excluded: Iterable[str] = EXCLUDED_FILENAMES,
        ignore_case: bool = False,
) -> Iterator[str]:
    """
    Lazily walk the tree and yield candidate document paths.

    Hidden directories are pruned before descending and hidden files are
    never yielded. Only regular files qualify.

    Args:
        root: Absolute path of an existing directory.
        extension: Designated document extension.
        excluded: Exact base names skipped at any depth.
        ignore_case: Compare the extension case-insensitively.

    Yields:
        str: Absolute path of each candidate, in walk order.
    """
    excluded_set = frozenset(excluded)

    for current, dirs, files in os.walk(root):
        prune_hidden_dirs(dirs)
        dirs.sort()

        for file_name in sorted(files):
            if not is_candidate_document(file_name, extension, excluded_set, ignore_case):
                continue

            file_path = os.path.join(current, file_name)
            if not os.path.isfile(file_path):
                continue
            yield file_path


def collect_document_files(
        root: str,
        extension: str = DOCUMENT_EXTENSION,
        excluded: Iterable[str] = EXCLUDED_FILENAMES,
        ignore_case: bool = False,
) -> List[str]:
    """
    Enumerate candidate documents sorted by full path.

    Args:
        root: Directory to scan.
        extension: Designated document extension.
        excluded: Exact base names skipped at any depth.
        ignore_case: Compare the extension case-insensitively.

    Returns:
        List[str]: Sorted absolute paths.

    Raises:
        DirectoryNotFoundError: If root is missing or not a directory.
    """
    root_abs = resolve_directory(root)
    files = sorted(yield_document_files(root_abs, extension, excluded, ignore_case))
    logger.debug(f"Scanner found {len(files)} candidate document(s) under {root_abs}")
    return files
