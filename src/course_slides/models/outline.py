"""Course outline schemas: guide headings and the parsed module map."""

from typing import Literal

from pydantic import BaseModel, Field


class HeadingRecord(BaseModel):
    """Single H1 (module) or H2 (activity) heading found in the guide.

    ``line`` is the 1-based line number in the source document.
    """

    level: Literal[1, 2]
    title: str
    line: int


class ModuleEntry(BaseModel):
    """One module of a parsed outline with its activities in order."""

    title: str
    activities: list[str] = Field(default_factory=list)


# Keyed by the text before the last ": " of "## <key>: <title>".
# Insertion order is document order and drives output ordering.
ModuleMap = dict[str, ModuleEntry]
