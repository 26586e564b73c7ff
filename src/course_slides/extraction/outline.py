"""Course outline: build it from guide headings and parse it back.

The outline is the contract between the two passes::

    # <course title>

    ## Module 1: Basics
    - Activity 1-1: Intro

    ## Module 2: Advanced
    - Activity 2-1: Deep dive

Parsing splits each ``## `` line at its last ``": "`` into key and title.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.config import OutputFormat
from course_slides.errors import UnreadableFileError
from course_slides.extraction.base import read_document_lines
from course_slides.extraction.front_matter import extract_course_title
from course_slides.models.outline import HeadingRecord, ModuleEntry, ModuleMap
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


def render_outline(
    headings: list[HeadingRecord],
    course_title: str,
    patterns: PatternRegistry,
    fmt: OutputFormat,
) -> str:
    """Render headings as outline text under the given course title."""
    outline = [f"{fmt.course_heading} {course_title}", ""]
    is_first_module = True

    for heading in headings:
        title = patterns.clean_title(heading.title)
        if heading.level == 1:
            if not is_first_module:
                outline.append("")
            is_first_module = False
            outline.append(f"{fmt.module_heading} {title}")
        else:
            outline.append(f"{patterns.outline_activity_prefix}{title}")

    return "\n".join(outline)


def build_outline(
    headings: list[HeadingRecord],
    guide_path: Path,
    patterns: PatternRegistry,
    fmt: OutputFormat,
) -> str:
    """Build outline text, titled from the guide's front matter."""
    course_title = extract_course_title(guide_path, patterns)
    return render_outline(headings, course_title, patterns, fmt)


def outline_from_lines(lines: list[str], patterns: PatternRegistry) -> ModuleMap:
    """Parse outline lines into an ordered module map.

    Activity bullets seen before the first module header are dropped.
    A repeated key restarts that module's entry.
    """
    modules: ModuleMap = {}
    current: str | None = None
    prefix = patterns.outline_activity_prefix

    for line in lines:
        stripped = line.strip()

        header = patterns.outline_module_header.match(stripped)
        if header:
            current = header.group(1)
            modules[current] = ModuleEntry(title=header.group(2))
        elif current is not None and stripped.startswith(prefix):
            modules[current].activities.append(stripped[len(prefix) :])

    return modules


def parse_outline(path: Path, patterns: PatternRegistry) -> ModuleMap:
    """Read a generated outline file back into a module map.

    Returns an empty map when the file cannot be read.
    """
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error("outline_read_failed", path=str(path), reason=e.reason)
        return {}

    modules = outline_from_lines(lines, patterns)
    logger.info(
        "outline_parsed",
        path=str(path),
        modules=len(modules),
        activities=sum(len(m.activities) for m in modules.values()),
    )
    return modules
