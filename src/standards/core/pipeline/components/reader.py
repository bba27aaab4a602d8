from __future__ import annotations

"""
Strict Document Reading Component.

Decodes a document as UTF-8 and splits it into lines using universal
newlines: '\\r\\n', '\\n' and '\\r' all terminate a line. Unlike a lenient
reader, undecodable bytes are an error because a replacement character
would change the measured line lengths.
"""

from typing import List

from standards.domain.errors import DocumentDecodeError, DocumentNotFoundError

# -----------------------------------------------------------------------------
# READING OPERATIONS
# -----------------------------------------------------------------------------

def read_document_text(file_path: str) -> str:
    """
    Read the whole document with newline translation.

    Args:
        file_path: Path to the document.

    Returns:
        str: Decoded text where every line separator is '\\n'.

    Raises:
        DocumentNotFoundError: If the file no longer exists.
        DocumentDecodeError: If the bytes are not valid UTF-8.
    """
    try:
        with open(file_path, "r", encoding="utf-8", newline=None) as f:
            return f.read()
    except FileNotFoundError as e:
        raise DocumentNotFoundError(file_path) from e
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(file_path, str(e)) from e


def read_document_lines(file_path: str) -> List[str]:
    """
    Split a document into lines without their terminators.

    A trailing newline yields a final empty line, and a last line with no
    trailing newline is still returned. An empty file yields [""].

    Args:
        file_path: Path to the document.

    Returns:
        List[str]: Lines in file order.
    """
    return read_document_text(file_path).split("\n")
