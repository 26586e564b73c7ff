"""Tests for guide heading extraction."""

from collections.abc import Callable
from pathlib import Path

from course_slides.extraction.headings import extract_headings, headings_from_lines
from course_slides.models.outline import HeadingRecord
from course_slides.patterns import PatternRegistry


def _extract(text: str, patterns: PatternRegistry) -> list[HeadingRecord]:
    return headings_from_lines(text.split("\n"), patterns)


class TestHeadingLevels:
    def test_h1_and_h2(self, patterns: PatternRegistry) -> None:
        """# → level 1, ## → level 2, with 1-based line numbers."""
        headings = _extract("# Module 1: Basics\n\n## Activity 1-1: Intro", patterns)

        assert headings == [
            HeadingRecord(level=1, title="Module 1: Basics", line=1),
            HeadingRecord(level=2, title="Activity 1-1: Intro", line=3),
        ]

    def test_deeper_headings_ignored(self, patterns: PatternRegistry) -> None:
        headings = _extract("### Sub\n#### Task 1: Go\n##### Deep", patterns)
        assert headings == []

    def test_titles_trimmed(self, patterns: PatternRegistry) -> None:
        headings = _extract("#   Module 1   \n##  Activity One  ", patterns)
        assert [h.title for h in headings] == ["Module 1", "Activity One"]

    def test_document_order_preserved(self, patterns: PatternRegistry) -> None:
        text = "# A module\n## First act\n## Second act\n# B module\n## Third act"
        headings = _extract(text, patterns)
        assert [(h.level, h.title) for h in headings] == [
            (1, "A module"),
            (2, "First act"),
            (2, "Second act"),
            (1, "B module"),
            (2, "Third act"),
        ]


class TestSkipRules:
    def test_table_of_contents_skipped(self, patterns: PatternRegistry) -> None:
        headings = _extract("# Table of Contents\n# Module 1: Basics", patterns)
        assert [h.title for h in headings] == ["Module 1: Basics"]

    def test_windows_path_h2_skipped(self, patterns: PatternRegistry) -> None:
        headings = _extract("# Module\n## C:/some/path\n## Real activity", patterns)
        assert [h.title for h in headings] == ["Module", "Real activity"]

    def test_unix_path_and_short_h2_skipped(self, patterns: PatternRegistry) -> None:
        headings = _extract("## /etc/hosts\n## Go\n## Abcd", patterns)
        assert [h.title for h in headings] == ["Abcd"]

    def test_heading_skip_terms(self, patterns: PatternRegistry) -> None:
        text = "## References\n## Make sure to update the config\n## Setup steps"
        headings = _extract(text, patterns)
        assert [h.title for h in headings] == ["Setup steps"]

    def test_indented_h2_skipped(self, patterns: PatternRegistry) -> None:
        headings = _extract("   ## Indented activity\n\t## Tabbed activity", patterns)
        assert headings == []

    def test_fenced_code_excluded(self, patterns: PatternRegistry) -> None:
        """Headings inside ``` fences are not headings."""
        text = (
            "# Module 1\n"
            "```bash\n"
            "# install deps\n"
            "## not an activity\n"
            "```\n"
            "## Real activity"
        )
        headings = _extract(text, patterns)
        assert [h.title for h in headings] == ["Module 1", "Real activity"]
        assert headings[1].line == 6


class TestExtractHeadingsFile:
    def test_reads_file(
        self, write_md: Callable[[str, str], Path], patterns: PatternRegistry
    ) -> None:
        path = write_md("guide.md", "# Module 1\n## Activity one")
        headings = extract_headings(path, patterns)
        assert len(headings) == 2

    def test_unreadable_file_returns_empty(
        self, tmp_path: Path, patterns: PatternRegistry
    ) -> None:
        assert extract_headings(tmp_path / "missing.md", patterns) == []

    def test_invalid_utf8_returns_empty(
        self, tmp_path: Path, patterns: PatternRegistry
    ) -> None:
        path = tmp_path / "binary.md"
        path.write_bytes(b"# Module \xff\xfe\n")
        assert extract_headings(path, patterns) == []
