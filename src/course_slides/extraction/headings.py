"""Module (H1) and activity (H2) heading extraction from the guide."""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.errors import UnreadableFileError
from course_slides.extraction.base import read_document_lines
from course_slides.models.outline import HeadingRecord
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


def headings_from_lines(
    lines: list[str], patterns: PatternRegistry
) -> list[HeadingRecord]:
    """Collect H1/H2 headings outside fenced code blocks.

    H1 titles containing a title skip term are dropped. H2 headings are
    dropped when indented in the source, when they contain a heading
    skip term, look like a filesystem path, or are too short.
    """
    headings: list[HeadingRecord] = []
    in_code_block = False

    for index, line in enumerate(lines):
        stripped = line.strip()

        if patterns.is_fence(stripped):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            continue

        h1 = patterns.guide_module_header.match(stripped)
        if h1:
            title = h1.group(1).strip()
            if not patterns.should_skip_module_title(title):
                headings.append(HeadingRecord(level=1, title=title, line=index + 1))
            continue

        h2 = patterns.guide_activity_header.match(stripped)
        if h2 and not line[:1].isspace():
            title = h2.group(1).strip()
            if not patterns.should_skip_activity_title(title):
                headings.append(HeadingRecord(level=2, title=title, line=index + 1))

    return headings


def extract_headings(path: Path, patterns: PatternRegistry) -> list[HeadingRecord]:
    """Scan a guide document and return its module/activity headings.

    Returns an empty list when the file cannot be read; the caller
    decides whether that is fatal.
    """
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error("guide_read_failed", path=str(path), reason=e.reason)
        return []

    headings = headings_from_lines(lines, patterns)
    logger.info(
        "headings_extracted",
        path=str(path),
        modules=sum(1 for h in headings if h.level == 1),
        activities=sum(1 for h in headings if h.level == 2),
    )
    return headings
