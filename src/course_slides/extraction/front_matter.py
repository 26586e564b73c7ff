"""Course title lookup from a document's YAML front matter."""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.errors import UnreadableFileError
from course_slides.extraction.base import read_document_lines
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def title_from_lines(lines: list[str], patterns: PatternRegistry) -> str | None:
    """Return the literal ``title:`` value of a leading front matter block.

    Only blank lines may precede the opening delimiter. The value is
    returned with surrounding quotes removed; nothing else about the
    YAML is interpreted.
    """
    delimiter = patterns.front_matter_delimiter
    in_front_matter = False
    for line in lines:
        stripped = line.strip()
        if not in_front_matter:
            if not stripped:
                continue
            if stripped != delimiter:
                return None
            in_front_matter = True
            continue
        if stripped == delimiter:
            return None
        match = patterns.front_matter_title.match(stripped)
        if match:
            return _unquote(match.group(1).strip())
    return None


def extract_course_title(path: Path, patterns: PatternRegistry) -> str:
    """Course title from front matter, falling back to the file stem."""
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error("title_read_failed", path=str(path), reason=e.reason)
        return path.stem

    title = title_from_lines(lines, patterns)
    if title is None:
        logger.debug("title_fallback_to_filename", path=str(path))
        return path.stem
    return title
