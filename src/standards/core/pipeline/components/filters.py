from __future__ import annotations

"""
Document Filtering and Classification.

Decides which directory entries are walked and which files are candidate
documents for the line-length rule. Hidden entries are never visited and
excluded base names are skipped at any depth.
"""

import os
from typing import Iterable, List

from standards.domain.constants import DOCUMENT_EXTENSION, EXCLUDED_FILENAMES, HIDDEN_PREFIX

# -----------------------------------------------------------------------------
# NAME CLASSIFICATION
# -----------------------------------------------------------------------------

def is_hidden(name: str) -> bool:
    """
    Classify a file or directory name as hidden.

    Args:
        name: Base name of the entry.

    Returns:
        bool: True if the name starts with the hidden-file marker.
    """
    return name.startswith(HIDDEN_PREFIX)


def has_extension(file_name: str, extension: str, ignore_case: bool = False) -> bool:
    """
    Verify the final extension of a file name.

    Args:
        file_name: Base name of the file.
        extension: Expected extension including the dot (e.g. ".md").
        ignore_case: Compare case-insensitively.

    Returns:
        bool: True if the extension matches.
    """
    _, ext = os.path.splitext(file_name)
    if ignore_case:
        return ext.lower() == extension.lower()
    return ext == extension


def is_candidate_document(
        file_name: str,
        extension: str = DOCUMENT_EXTENSION,
        excluded: Iterable[str] = EXCLUDED_FILENAMES,
        ignore_case: bool = False,
) -> bool:
    """
    Classify a file as eligible for validation.

    The exclusion list is always compared exactly, even when the extension
    comparison ignores case.

    Args:
        file_name: Base name of the file.
        extension: Designated document extension.
        excluded: Exact base names that are never candidates.
        ignore_case: Compare the extension case-insensitively.

    Returns:
        bool: True if the file should be checked.
    """
    if is_hidden(file_name):
        return False
    if file_name in excluded:
        return False
    return has_extension(file_name, extension, ignore_case=ignore_case)


def prune_hidden_dirs(dirs: List[str]) -> None:
    """Remove hidden names from an os.walk() directory list, in place."""
    dirs[:] = [d for d in dirs if not is_hidden(d)]
