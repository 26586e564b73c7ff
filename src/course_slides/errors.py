"""Domain-specific exceptions for course-slides."""

from __future__ import annotations

from pathlib import Path


class CourseSlidesError(Exception):
    """Base class for errors that abort a generation run."""


class MissingInputFileError(CourseSlidesError):
    """Raised when the guide or slide content file does not exist."""

    def __init__(self, kind: str, path: Path) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"Input {kind} file '{path}' does not exist")


class UnreadableFileError(CourseSlidesError):
    """Raised when a document cannot be read as UTF-8 text.

    Extractors catch this, log it, and fall back to an empty result.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read '{path}': {reason}")


class NoHeadingsFoundError(CourseSlidesError):
    """Raised when the guide yields no module or activity headings."""


class NoModulesFoundError(CourseSlidesError):
    """Raised when the generated outline contains no modules."""


class OutputWriteError(CourseSlidesError):
    """Raised when an output document cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write '{path}': {reason}")
