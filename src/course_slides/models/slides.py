"""Slide content schemas and flattened output lines."""

from pydantic import BaseModel, ConfigDict, Field


class SlideModuleContent(BaseModel):
    """Raw content lines of one slide module.

    ``content`` holds lines that precede the first activity marker;
    ``activities`` maps the captured marker number ("1", "2", ...) to
    the lines that follow that marker.
    """

    content: list[str] = Field(default_factory=list)
    activities: dict[str, list[str]] = Field(default_factory=dict)


SlideContentMap = dict[str, SlideModuleContent]


class ActivityDetail(BaseModel):
    """Scenario paragraph and task titles found under a guide activity."""

    scenario: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)


class FlatLine(BaseModel):
    """One line produced by the hierarchy flattener.

    ``depth`` is None for prose passed through unchanged; otherwise it is
    the output bullet depth (1 = top-level slide bullet).
    """

    model_config = ConfigDict(frozen=True)

    text: str
    depth: int | None = None

    @property
    def is_bullet(self) -> bool:
        return self.depth is not None

    def render(self) -> str:
        if self.depth is None:
            return self.text
        return f"{'  ' * self.depth}- {self.text}"
