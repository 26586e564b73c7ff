"""Shared document reading for all extractors."""

from __future__ import annotations

from pathlib import Path

from course_slides.errors import UnreadableFileError


def read_document_lines(path: Path) -> list[str]:
    """Read a UTF-8 document and split it into lines.

    Line endings are normalized, so ``\\r\\n`` files behave like ``\\n``
    files, and a leading byte-order mark is dropped. A trailing newline
    yields a final empty line, keeping line numbers 1-based and aligned
    with the source.

    Raises:
        UnreadableFileError: If the file is missing, unreadable or not
            valid UTF-8.
    """
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableFileError(path, str(e)) from e
    return content.split("\n")
