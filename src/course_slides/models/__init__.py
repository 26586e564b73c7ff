"""Pydantic schemas for extracted course structure."""

from course_slides.models.outline import HeadingRecord, ModuleEntry, ModuleMap
from course_slides.models.slides import (
    ActivityDetail,
    FlatLine,
    SlideContentMap,
    SlideModuleContent,
)

__all__ = [
    "ActivityDetail",
    "FlatLine",
    "HeadingRecord",
    "ModuleEntry",
    "ModuleMap",
    "SlideContentMap",
    "SlideModuleContent",
]
