"""Hierarchy flattening for ``*`` bullet blocks from the slide content.

Activity bullets duplicate the activity lines the merge emits itself, so
they are dropped and their children move up one level::

    input (indent)            output depth
    ----------------------    ------------
        * Topic         (2)   1
          * Detail      (3)   2
        * activity 2    (2)   dropped
          * Note        (3)   1
            * Sub-note  (4)   3

Indent level is leading spaces // 2.
"""

from __future__ import annotations

from dataclasses import dataclass

from course_slides.models.slides import FlatLine
from course_slides.patterns import PatternRegistry

# Indent of the bullets that sit directly under a module/activity marker.
TOP_INDENT = 2


@dataclass(frozen=True, slots=True)
class _StackEntry:
    content: str
    is_activity: bool


def _parent_is_activity(stack: list[_StackEntry | None]) -> bool:
    entry = stack[TOP_INDENT - 1] if len(stack) >= TOP_INDENT else None
    return entry is not None and entry.is_activity


def flatten_hierarchy(lines: list[str], patterns: PatternRegistry) -> list[FlatLine]:
    """Re-level bullet lines, eliding activity bullets and promoting children.

    Non-bullet lines pass through unchanged when non-blank.

    Args:
        lines: Raw content lines from one slide module or activity block.
        patterns: Registry providing the activity bullet shapes.

    Returns:
        Flattened lines in input order.
    """
    flattened: list[FlatLine] = []
    stack: list[_StackEntry | None] = []

    for line in lines:
        stripped = line.lstrip()
        if not patterns.star_bullet.match(stripped):
            if line.strip():
                flattened.append(FlatLine(text=line))
            continue

        indent = (len(line) - len(stripped)) // 2
        content = stripped[1:].lstrip()
        is_activity = patterns.is_activity_bullet(stripped)

        # Close every scope at or below this indent, then open this one.
        del stack[indent:]
        stack.extend([None] * (indent - len(stack)))
        if indent > 0:
            stack[indent - 1] = _StackEntry(content, is_activity)

        if indent == TOP_INDENT:
            if not is_activity:
                flattened.append(FlatLine(text=content, depth=1))
        elif indent == TOP_INDENT + 1:
            depth = 1 if _parent_is_activity(stack) else 2
            flattened.append(FlatLine(text=content, depth=depth))
        else:
            depth = indent - 1 if _parent_is_activity(stack) else indent
            flattened.append(FlatLine(text=content, depth=depth))

    return flattened


def render_flattened(lines: list[FlatLine]) -> list[str]:
    return [line.render() for line in lines]


def level_one_bullets(lines: list[str], patterns: PatternRegistry) -> list[str]:
    """Texts of the depth-1 bullets after flattening; everything else dropped."""
    return [
        line.text for line in flatten_hierarchy(lines, patterns) if line.depth == 1
    ]
