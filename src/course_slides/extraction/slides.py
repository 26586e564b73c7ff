"""Slide content parsing: split the slide file into module/activity blocks."""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.errors import UnreadableFileError
from course_slides.extraction.base import read_document_lines
from course_slides.models.slides import SlideContentMap, SlideModuleContent
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


class _SlideBlockCollector:
    """Single forward pass state: current module, activity and buffer."""

    def __init__(self) -> None:
        self.modules: SlideContentMap = {}
        self.module: str | None = None
        self.activity: str | None = None
        self.buffer: list[str] = []

    def flush(self) -> None:
        if self.module is None or not self.buffer:
            self.buffer = []
            return
        entry = self.modules[self.module]
        if self.activity is not None:
            entry.activities.setdefault(self.activity, []).extend(self.buffer)
        else:
            entry.content.extend(self.buffer)
        self.buffer = []

    def start_module(self, key: str) -> None:
        self.flush()
        self.module = key
        self.activity = None
        self.modules.setdefault(key, SlideModuleContent())

    def start_activity(self, number: str) -> None:
        self.flush()
        self.activity = number


def slide_content_from_lines(
    lines: list[str], patterns: PatternRegistry
) -> SlideContentMap:
    """Segment slide content lines into per-module, per-activity blocks.

    Each line is, in strict priority order, a module header, an activity
    marker, or free content. Free content is kept right-trimmed unless it
    is blank or starts with the continuation phrase. Lines before the
    first module header belong to no block.
    """
    collector = _SlideBlockCollector()

    for line in lines:
        stripped = line.strip()

        header = patterns.slides_module_header.match(stripped)
        if header:
            collector.start_module(header.group(1))
            continue

        if collector.module is None:
            continue

        number = patterns.match_activity_bullet(stripped)
        if number is not None:
            collector.start_activity(number)
        elif stripped and not stripped.startswith(patterns.continuation_phrase):
            collector.buffer.append(line.rstrip())

    collector.flush()
    return collector.modules


def parse_slide_content(path: Path, patterns: PatternRegistry) -> SlideContentMap:
    """Read the slide content document into a slide content map.

    Returns an empty map when the file cannot be read.
    """
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error("slide_content_read_failed", path=str(path), reason=e.reason)
        return {}

    modules = slide_content_from_lines(lines, patterns)
    logger.info(
        "slide_content_parsed",
        path=str(path),
        modules=len(modules),
        activity_blocks=sum(len(m.activities) for m in modules.values()),
    )
    return modules


def preamble_from_lines(lines: list[str], patterns: PatternRegistry) -> list[str]:
    """Non-blank lines preceding the first slide module header, verbatim."""
    preamble: list[str] = []
    for line in lines:
        stripped = line.strip()
        if patterns.slides_module_header.match(stripped):
            break
        if stripped:
            preamble.append(line)
    return preamble


def read_preamble(path: Path, patterns: PatternRegistry) -> list[str]:
    """Instructional text at the top of the slide content document."""
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error("slide_preamble_read_failed", path=str(path), reason=e.reason)
        return []
    return preamble_from_lines(lines, patterns)
