"""Projections of the parsed outline and slide content into final documents."""

from __future__ import annotations

from pathlib import Path

import structlog

from course_slides.config import OutputFormat
from course_slides.extraction.details import (
    extract_activity_detail,
    extract_module_objectives,
)
from course_slides.extraction.flatten import (
    flatten_hierarchy,
    level_one_bullets,
    render_flattened,
)
from course_slides.extraction.front_matter import extract_course_title
from course_slides.models.outline import ModuleEntry, ModuleMap
from course_slides.models.slides import SlideContentMap, SlideModuleContent
from course_slides.patterns import PatternRegistry

logger = structlog.get_logger()


def _activity_blocks_in_order(slide_module: SlideModuleContent) -> list[list[str]]:
    """Activity blocks with numeric markers ascending, then the rest as found."""
    numbered = [k for k in slide_module.activities if k.isdigit() and str(int(k)) == k]
    others = [k for k in slide_module.activities if k not in numbered]
    keys = sorted(numbered, key=int) + others
    return [slide_module.activities[k] for k in keys]


class ProjectionEngine:
    """Render the four derived documents from one guide.

    Each method is an independent pass: it re-reads the course title and
    any guide details it needs, and shares no state with the others.

    Activity correlation differs by projection:
    - merge_slides keys slide blocks by the number in the activity text
      ("Activity 1-2: ..." -> "2", the range end);
    - slides_with_titles keys them by the activity's 1-based position.
    """

    def __init__(
        self,
        guide_path: Path,
        patterns: PatternRegistry,
        fmt: OutputFormat,
    ) -> None:
        self._guide_path = guide_path
        self._patterns = patterns
        self._fmt = fmt

    def _course_header(self) -> list[str]:
        title = extract_course_title(self._guide_path, self._patterns)
        return [f"{self._fmt.course_heading} {title}", ""]

    def _module_header(self, key: str, module: ModuleEntry) -> str:
        return f"{self._fmt.module_heading} {key}: {module.title}"

    def activity_number(self, activity: str) -> str | None:
        """Number used to find slide content for an activity, if any."""
        match = self._patterns.activity_number.search(activity)
        if match is None:
            return None
        return match.group(2) or match.group(1)

    # ── Merged slide stubs ──

    def merge_slides(self, modules: ModuleMap, slides: SlideContentMap) -> str:
        """Merge outline, guide details and slide content into slide stubs.

        Args:
            modules: Parsed outline, in output order.
            slides: Parsed slide content keyed by the same module keys.

        Returns:
            Markdown text with a slide-count sentence after the title.
        """
        fmt = self._fmt
        merged = self._course_header()

        for key, module in modules.items():
            merged.append(self._module_header(key, module))

            objectives = extract_module_objectives(
                self._guide_path, module.title, self._patterns
            )
            if objectives:
                merged.append(f"{fmt.bullet_l1} {fmt.objectives_text}")
                merged.extend(f"{fmt.bullet_l2} {o}" for o in objectives)

            slide_module = slides.get(key)
            if slide_module is not None:
                merged.extend(self._flatten(slide_module.content))

            claimed: set[str] = set()
            for activity in module.activities:
                number = self.activity_number(activity)
                if number is None:
                    logger.debug(
                        "activity_number_missing", module=key, activity=activity
                    )
                elif slide_module is not None and number in slide_module.activities:
                    claimed.add(number)
                    merged.extend(self._flatten(slide_module.activities[number]))

                merged.append(f"{fmt.bullet_l1} {activity}")
                merged.extend(self._activity_detail_lines(activity))

            if slide_module is not None:
                self._warn_unclaimed(key, slide_module, claimed)
            merged.append("")

        slide_count = sum(1 for line in merged if line.startswith(fmt.bullet_l1))
        merged[2:2] = [fmt.slide_count_template.format(count=slide_count), ""]

        logger.info("slides_merged", modules=len(modules), slides=slide_count)
        return "\n".join(merged)

    def _flatten(self, lines: list[str]) -> list[str]:
        return render_flattened(flatten_hierarchy(lines, self._patterns))

    def _activity_detail_lines(self, activity: str) -> list[str]:
        fmt = self._fmt
        detail = extract_activity_detail(self._guide_path, activity, self._patterns)
        lines: list[str] = []

        if detail.scenario:
            for paragraph in detail.scenario:
                if not paragraph.strip():
                    continue
                lines.append(f"{fmt.bullet_l2} {paragraph}")
                lines.extend(f"{fmt.bullet_l3} {task}" for task in detail.tasks)
        else:
            lines.extend(f"{fmt.bullet_l2} {task}" for task in detail.tasks)
        return lines

    @staticmethod
    def _warn_unclaimed(
        key: str, slide_module: SlideModuleContent, claimed: set[str]
    ) -> None:
        # Slide blocks are matched by number only; a mismatch drops content.
        for number in slide_module.activities:
            if number not in claimed:
                logger.warning(
                    "slide_content_unmatched",
                    module=key,
                    activity_number=number,
                    lines=len(slide_module.activities[number]),
                )

    # ── Website topics ──

    def course_topics(self, modules: ModuleMap, slides: SlideContentMap) -> str:
        """Top-level topic bullets per slide module, in slide file order."""
        fmt = self._fmt
        topics = self._course_header()

        for key, slide_module in slides.items():
            module = modules.get(key)
            title = module.title if module is not None else key
            topics.append(f"{fmt.module_heading} {title}")

            blocks = [slide_module.content, *_activity_blocks_in_order(slide_module)]
            for block in blocks:
                topics.extend(
                    f"- {text}" for text in level_one_bullets(block, self._patterns)
                )
            topics.append("")

        return "\n".join(topics)

    # ── Website agenda ──

    def website_agenda(self, modules: ModuleMap) -> str:
        """One bullet per module title, without the module key."""
        fmt = self._fmt
        agenda = self._course_header()
        agenda.append(f"{fmt.module_heading} {fmt.agenda_heading}")
        agenda.extend(f"- {module.title}" for module in modules.values())
        return "\n".join(agenda)

    # ── Slides with titles ──

    def slides_with_titles(
        self,
        modules: ModuleMap,
        slides: SlideContentMap,
        preamble: list[str],
    ) -> str:
        """Raw slide content under outline module and activity titles.

        Every outline module is emitted, with or without slide content.
        ``*`` markers become ``-``; indentation and text are untouched.
        """
        fmt = self._fmt
        output = self._course_header()
        output.extend(preamble)

        for key, module in modules.items():
            output.append(self._module_header(key, module))
            output.append("")

            slide_module = slides.get(key)
            if slide_module is not None:
                output.extend(self._dash_bullets(slide_module.content))

            for position, activity in enumerate(module.activities, start=1):
                output.append(f"{fmt.bullet_l1} {activity}")
                if slide_module is not None:
                    block = slide_module.activities.get(str(position), [])
                    output.extend(self._dash_bullets(block))

            output.append("")

        return "\n".join(output)

    def _dash_bullets(self, lines: list[str]) -> list[str]:
        star = self._patterns.star_bullet
        return [star.sub(r"\1-", line, count=1) for line in lines]
