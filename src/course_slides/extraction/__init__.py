"""Extraction passes over the guide, the outline and the slide content."""

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
from course_slides.extraction.headings import extract_headings
from course_slides.extraction.outline import build_outline, parse_outline
from course_slides.extraction.slides import parse_slide_content, read_preamble

__all__ = [
    "build_outline",
    "extract_activity_detail",
    "extract_course_title",
    "extract_headings",
    "extract_module_objectives",
    "flatten_hierarchy",
    "level_one_bullets",
    "parse_outline",
    "parse_slide_content",
    "read_preamble",
    "render_flattened",
]
