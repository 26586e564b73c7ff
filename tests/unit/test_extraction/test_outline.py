"""Tests for outline building and parsing."""

from collections.abc import Callable
from pathlib import Path

from course_slides.config import OutputFormat
from course_slides.extraction.outline import (
    build_outline,
    outline_from_lines,
    parse_outline,
    render_outline,
)
from course_slides.models.outline import HeadingRecord
from course_slides.patterns import PatternRegistry


def _h(level: int, title: str, line: int = 0) -> HeadingRecord:
    return HeadingRecord(level=level, title=title, line=line)  # type: ignore[arg-type]


class TestRenderOutline:
    def test_layout(self, patterns: PatternRegistry, fmt: OutputFormat) -> None:
        """Course header, modules separated by blank lines, activity bullets."""
        headings = [
            _h(1, "Module 1: Basics"),
            _h(2, "Activity 1-1: Intro"),
            _h(2, "Activity 1-2: Setup"),
            _h(1, "Module 2: Advanced"),
            _h(2, "Activity 2-1: Deep dive"),
        ]

        outline = render_outline(headings, "Demo Course", patterns, fmt)

        assert outline.split("\n") == [
            "# Demo Course",
            "",
            "## Module 1: Basics",
            "- Activity 1-1: Intro",
            "- Activity 1-2: Setup",
            "",
            "## Module 2: Advanced",
            "- Activity 2-1: Deep dive",
        ]

    def test_titles_cleaned(self, patterns: PatternRegistry, fmt: OutputFormat) -> None:
        headings = [
            _h(1, "Module 1: Basics TODO review"),
            _h(2, "Activity 1-1: Intro (15 minutes)"),
        ]

        outline = render_outline(headings, "C", patterns, fmt)

        assert "## Module 1: Basics" in outline.split("\n")
        assert "- Activity 1-1: Intro" in outline.split("\n")
        assert "TODO" not in outline
        assert "minutes" not in outline

    def test_no_headings(self, patterns: PatternRegistry, fmt: OutputFormat) -> None:
        assert render_outline([], "Course", patterns, fmt) == "# Course\n"

    def test_build_reads_front_matter_title(
        self,
        demo_guide: Path,
        patterns: PatternRegistry,
        fmt: OutputFormat,
    ) -> None:
        outline = build_outline([_h(1, "Module 1: Basics")], demo_guide, patterns, fmt)
        assert outline.startswith("# Demo Course\n")


class TestOutlineFromLines:
    def test_modules_and_activities(self, patterns: PatternRegistry) -> None:
        lines = [
            "# Course",
            "",
            "## Module 1: Basics",
            "- Activity 1-1: Intro",
            "",
            "## Section A: Extras",
            "- Reading list",
        ]

        modules = outline_from_lines(lines, patterns)

        assert list(modules) == ["Module 1", "Section A"]
        assert modules["Module 1"].title == "Basics"
        assert modules["Module 1"].activities == ["Activity 1-1: Intro"]
        assert modules["Section A"].activities == ["Reading list"]

    def test_key_is_text_before_last_colon(self, patterns: PatternRegistry) -> None:
        modules = outline_from_lines(["## Module 1: Intro: Part A"], patterns)
        assert list(modules) == ["Module 1: Intro"]
        assert modules["Module 1: Intro"].title == "Part A"

    def test_leading_bullets_dropped(self, patterns: PatternRegistry) -> None:
        modules = outline_from_lines(["- orphan", "## M1: Title", "- kept"], patterns)
        assert modules["M1"].activities == ["kept"]

    def test_headers_without_colon_ignored(self, patterns: PatternRegistry) -> None:
        modules = outline_from_lines(["## Introduction", "- stray"], patterns)
        assert modules == {}

    def test_keys_are_strings(self, patterns: PatternRegistry) -> None:
        modules = outline_from_lines(["## 1: One", "## B: Two"], patterns)
        assert list(modules) == ["1", "B"]


class TestRoundTrip:
    def test_builder_output_parses_back(
        self, patterns: PatternRegistry, fmt: OutputFormat
    ) -> None:
        """Every module/activity rendered is recovered by the parser."""
        headings = [
            _h(1, "Module 1: Basics (draft)"),
            _h(2, "Activity 1-1: Intro TODO"),
            _h(2, "Activity 1-2: Setup"),
            _h(1, "Module 2: Advanced"),
            _h(1, "Module 3: Wrap-up"),
            _h(2, "Activity 3-1: Review (10 min)"),
        ]

        text = render_outline(headings, "Course", patterns, fmt)
        modules = outline_from_lines(text.split("\n"), patterns)

        assert list(modules) == ["Module 1", "Module 2", "Module 3"]
        assert [m.title for m in modules.values()] == ["Basics", "Advanced", "Wrap-up"]
        assert modules["Module 1"].activities == [
            "Activity 1-1: Intro",
            "Activity 1-2: Setup",
        ]
        assert modules["Module 2"].activities == []
        assert modules["Module 3"].activities == ["Activity 3-1: Review"]

    def test_parse_outline_file(
        self,
        write_md: Callable[[str, str], Path],
        patterns: PatternRegistry,
        fmt: OutputFormat,
    ) -> None:
        text = render_outline(
            [_h(1, "Module 1: Basics"), _h(2, "Activity 1-1: Intro")],
            "Course",
            patterns,
            fmt,
        )
        path = write_md("outline.md", text)

        modules = parse_outline(path, patterns)

        assert modules["Module 1"].activities == ["Activity 1-1: Intro"]

    def test_parse_missing_outline_returns_empty(
        self, tmp_path: Path, patterns: PatternRegistry
    ) -> None:
        assert parse_outline(tmp_path / "missing.md", patterns) == {}
