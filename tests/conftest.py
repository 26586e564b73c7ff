"""Shared pytest fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from course_slides.config import OutputFormat
from course_slides.patterns import PatternRegistry

DEMO_GUIDE = """\
---
title: "Demo Course"
---

# Module 1: Basics

## Activity 1-1: Intro

Welcome to the course.

#### Task 1: Say Hello
"""

DEMO_SLIDES = """\
# Module 1
* activity 1
  * key point
"""


@pytest.fixture()
def patterns() -> PatternRegistry:
    return PatternRegistry()


@pytest.fixture()
def fmt() -> OutputFormat:
    return OutputFormat()


@pytest.fixture()
def write_md(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a UTF-8 markdown file under tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def demo_guide(write_md: Callable[[str, str], Path]) -> Path:
    return write_md("guide.md", DEMO_GUIDE)


@pytest.fixture()
def demo_slides(write_md: Callable[[str, str], Path]) -> Path:
    return write_md("slides.md", DEMO_SLIDES)
