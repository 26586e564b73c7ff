"""Centralized configuration: environment settings and the per-run config."""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from course_slides.patterns import PatternRegistry, load_registry


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Settings loaded from environment variables and ``.env``.

    Provides the defaults used when a positional CLI argument is omitted.
    Output file names are joined onto ``output_dir``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # --- Inputs ---
    default_guide: Path = Path("merged.md")
    default_slide_content: Path = Path("slide-topics.md")

    # --- Outputs ---
    output_dir: Path = Path("tools/content-generator")
    slides_filename: str = "output/slide-titles-and-initial-content.md"
    outline_filename: str = "output/course-outline.md"
    titled_outline_filename: str = "output/course-outline-with-topics.md"
    topics_filename: str = "output/course-website-topics.md"
    agenda_filename: str = "output/course-website-agenda.md"

    # --- Pattern Registry ---
    # None = built-in defaults (same content as config/patterns.yaml)
    pattern_registry_path: Path | None = None

    def default_paths(self) -> dict[str, Path]:
        """Default path for every input and output of a run."""
        out = self.output_dir
        return {
            "input_guide": self.default_guide,
            "input_slide_content": self.default_slide_content,
            "output_slides": out / self.slides_filename,
            "output_outline": out / self.outline_filename,
            "output_titled_outline": out / self.titled_outline_filename,
            "output_topics": out / self.topics_filename,
            "output_agenda": out / self.agenda_filename,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


class OutputFormat(BaseModel):
    """Markdown prefixes used when rendering generated documents."""

    model_config = ConfigDict(frozen=True)

    course_heading: str = "#"
    module_heading: str = "##"
    bullet_l1: str = "  -"
    bullet_l2: str = "    -"
    bullet_l3: str = "      -"
    objectives_text: str = "What You'll Learn in This Module"
    slide_count_template: str = (
        "Approximately {count} slides will be created for the required "
        "activities and associated content topics."
    )
    agenda_heading: str = "Agenda"


class GeneratorConfig(BaseModel):
    """Immutable configuration for one generation run.

    Built once at process start and passed explicitly to the pipeline;
    extraction and projection code never consults settings directly.
    """

    model_config = ConfigDict(frozen=True)

    input_guide: Path
    input_slide_content: Path
    output_slides: Path
    output_outline: Path
    output_titled_outline: Path
    output_topics: Path
    output_agenda: Path
    patterns: PatternRegistry = Field(default_factory=PatternRegistry)
    fmt: OutputFormat = Field(default_factory=OutputFormat)

    @property
    def output_paths(self) -> list[Path]:
        return [
            self.output_slides,
            self.output_outline,
            self.output_titled_outline,
            self.output_topics,
            self.output_agenda,
        ]

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        pattern_registry_path: Path | None = None,
        **paths: Path | None,
    ) -> GeneratorConfig:
        """Resolve explicit paths against settings defaults.

        Args:
            settings: Source of default paths and registry location.
            pattern_registry_path: YAML registry overriding the settings one.
            **paths: Explicit input/output paths keyed like
                :meth:`Settings.default_paths`; None means "use default".

        Raises:
            TypeError: if an unknown path name is given.
            FileNotFoundError: if the pattern registry file doesn't exist.
            ValueError: if the pattern registry is invalid.
        """
        defaults = settings.default_paths()
        unknown = set(paths) - set(defaults)
        if unknown:
            raise TypeError(f"Unknown path arguments: {sorted(unknown)}")

        registry_path = pattern_registry_path or settings.pattern_registry_path
        patterns = (
            load_registry(registry_path) if registry_path else PatternRegistry()
        )
        resolved = {
            name: paths.get(name) or default for name, default in defaults.items()
        }
        return cls(**resolved, patterns=patterns)
