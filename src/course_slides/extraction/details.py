"""Per-module and per-activity details pulled from the guide on demand.

Both scans re-read the guide for every call; results are small and
never cached between projections.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.errors import UnreadableFileError
from course_slides.extraction.base import read_document_lines
from course_slides.models.slides import ActivityDetail
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


def _module_title_key(raw_title: str, patterns: PatternRegistry) -> str:
    title = patterns.clean_title(raw_title.strip())
    prefixed = patterns.module_number_prefix.match(title)
    if prefixed:
        return prefixed.group(1).strip()
    return title


def objectives_from_lines(
    lines: list[str], module_title: str, patterns: PatternRegistry
) -> list[str]:
    """Bullets under ``#### Objectives`` of the module titled *module_title*.

    The module H1 is compared after title cleanup and removal of a
    ``Module N: `` prefix. Collection ends at the next heading; the
    search ends at the next H1 whether or not objectives were found.
    """
    objectives: list[str] = []
    found_module = False
    found_objectives = False
    in_code_block = False

    for line in lines:
        stripped = line.strip()

        if patterns.is_fence(stripped):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            continue

        h1 = patterns.guide_module_header.match(stripped)
        if not found_module:
            if h1 and _module_title_key(h1.group(1), patterns) == module_title:
                found_module = True
            continue

        if h1:
            break

        if not found_objectives:
            if patterns.guide_objectives_header.match(stripped):
                found_objectives = True
            continue

        if patterns.any_heading.match(stripped):
            break
        if patterns.list_bullet.match(stripped):
            text = patterns.list_bullet.sub("", stripped, count=1).strip()
            if text:
                objectives.append(text)

    return objectives


def extract_module_objectives(
    path: Path, module_title: str, patterns: PatternRegistry
) -> list[str]:
    """Objectives listed for a module in the guide; empty when none."""
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error(
            "objectives_read_failed",
            path=str(path),
            module=module_title,
            reason=e.reason,
        )
        return []
    return objectives_from_lines(lines, module_title, patterns)


def _inline_task_title(stripped: str, patterns: PatternRegistry) -> str:
    text = patterns.bullet_marker.sub("", stripped, count=1)
    return patterns.task_bullet_prefix.sub("", text, count=1).strip()


def _is_prose_stop(stripped: str, patterns: PatternRegistry) -> bool:
    return any(p.search(stripped) for p in patterns.prose_stop_markers)


def activity_detail_from_lines(
    lines: list[str], activity_title: str, patterns: PatternRegistry
) -> ActivityDetail:
    """Scenario paragraph and task titles under the activity *activity_title*.

    Within the activity section (up to the next H1 or H2):

    - ``#### Task|Exercise|Step`` headings and inline ``* task N`` style
      bullets add task titles;
    - before the first task or formatted block, the first plain line long
      enough to be prose becomes the single scenario paragraph.

    Once a task, a formatted block or the scenario has been seen, no more
    prose is collected.
    """
    detail = ActivityDetail()
    found_activity = False
    collecting_tasks = False
    in_code_block = False

    for line in lines:
        stripped = line.strip()

        if patterns.is_fence(stripped):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            continue

        h2 = patterns.guide_activity_header.match(stripped)
        if not found_activity:
            if h2 and patterns.clean_title(h2.group(1).strip()) == activity_title:
                found_activity = True
            continue

        if h2 or patterns.guide_module_header.match(stripped):
            break
        if not stripped:
            continue

        task = patterns.guide_task_header.match(stripped)
        if task:
            collecting_tasks = True
            detail.tasks.append(task.group(2).strip())
            continue

        if patterns.is_task_bullet(stripped):
            collecting_tasks = True
            title = _inline_task_title(stripped, patterns)
            if title:
                detail.tasks.append(title)
            continue

        if collecting_tasks:
            continue

        if _is_prose_stop(stripped, patterns):
            collecting_tasks = True
        elif (
            not patterns.non_word_start.match(stripped)
            and len(stripped) > patterns.min_scenario_length
        ):
            detail.scenario.append(stripped)
            collecting_tasks = True

    return detail


def extract_activity_detail(
    path: Path, activity_title: str, patterns: PatternRegistry
) -> ActivityDetail:
    """Scenario and tasks for one activity; empty when not found."""
    try:
        lines = read_document_lines(path)
    except UnreadableFileError as e:
        logger.error(
            "activity_detail_read_failed",
            path=str(path),
            activity=activity_title,
            reason=e.reason,
        )
        return ActivityDetail()
    return activity_detail_from_lines(lines, activity_title, patterns)
