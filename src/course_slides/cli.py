"""Command-line entry point.

Usage::

    course-slides [input_guide] [input_slide_content] [output_slides]
                  [output_course_outline] [output_course_outline_with_titles]
                  [output_course_website_topics] [output_course_website_agenda]

Every positional argument is optional; omitted ones fall back to the
defaults in :class:`course_slides.config.Settings`.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from course_slides.config import GeneratorConfig, Settings, get_settings
from course_slides.errors import CourseSlidesError
from course_slides.logging_config import configure_logging
from course_slides.pipeline import run

logger = structlog.get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_EXAMPLES = """\
examples:
  course-slides
  course-slides "../merged/My Guide.md"
  course-slides "../merged/My Guide.md" my-slides.md
  course-slides guide.md slides.md final.md outline.md titled.md topics.md agenda.md
"""

# (dest, help); dest names match Settings.default_paths keys
_POSITIONALS: list[tuple[str, str]] = [
    ("input_guide", "Guide markdown file (YAML front matter, H1/H2 structure)"),
    ("input_slide_content", "Slide content file (module headers, activity bullets)"),
    ("output_slides", "Final merged slides output file"),
    ("output_outline", "Intermediate course outline file"),
    ("output_titled_outline", "Slide content with module and activity titles"),
    ("output_topics", "Course website topics output file"),
    ("output_agenda", "Course website agenda output file"),
]


def parse_args(
    argv: list[str] | None = None, settings: Settings | None = None
) -> argparse.Namespace:
    """Parse CLI arguments."""
    defaults = (settings or get_settings()).default_paths()
    parser = argparse.ArgumentParser(
        prog="course-slides",
        description=(
            "Extract a course outline from a guide and generate slide stubs, "
            "website topics and agenda from it and a slide content file."
        ),
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    for dest, help_text in _POSITIONALS:
        parser.add_argument(
            dest,
            nargs="?",
            type=Path,
            default=None,
            help=f"{help_text}. Default: {defaults[dest]}",
        )
    parser.add_argument(
        "--patterns",
        type=Path,
        default=None,
        dest="pattern_registry_path",
        help="YAML pattern registry overriding the built-in document conventions",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level. Default: from settings",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, settings: Settings) -> GeneratorConfig:
    """Resolve parsed arguments against settings into a run config."""
    return GeneratorConfig.from_settings(
        settings,
        pattern_registry_path=args.pattern_registry_path,
        **{dest: getattr(args, dest) for dest, _ in _POSITIONALS},
    )


def main(argv: list[str] | None = None) -> None:
    """Run the generator CLI."""
    settings = get_settings()
    args = parse_args(argv, settings)
    configure_logging(
        environment=settings.environment,
        log_level=args.log_level or settings.log_level,
    )

    try:
        config = build_config(args, settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error("pattern_registry_invalid", error=str(e))
        sys.exit(1)

    logger.info(
        "generation_start",
        guide=str(config.input_guide),
        slide_content=str(config.input_slide_content),
        outline=str(config.output_outline),
    )

    try:
        run(config)
    except CourseSlidesError as e:
        logger.error("generation_failed", error=str(e), error_type=type(e).__name__)
        print("Run with --help for usage information.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
