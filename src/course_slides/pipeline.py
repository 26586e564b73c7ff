"""Generation pipeline: guide + slide content -> five markdown documents.

Steps run strictly in order; the first fatal error aborts the run and
leaves any documents already written in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from course_slides.config import GeneratorConfig
from course_slides.errors import (
    MissingInputFileError,
    NoHeadingsFoundError,
    NoModulesFoundError,
    OutputWriteError,
)
from course_slides.extraction.headings import extract_headings
from course_slides.extraction.outline import build_outline, parse_outline
from course_slides.extraction.slides import parse_slide_content, read_preamble
from course_slides.projections import ProjectionEngine

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Summary of a completed run.

    Attributes:
        heading_count: Module and activity headings kept from the guide.
        module_count: Modules in the parsed outline.
        activity_count: Activities across all outline modules.
        slide_module_count: Modules found in the slide content file.
        written: Output paths in the order they were written.
    """

    heading_count: int
    module_count: int
    activity_count: int
    slide_module_count: int
    written: list[Path] = field(default_factory=list)


def _require_input(kind: str, path: Path) -> None:
    if not path.is_file():
        raise MissingInputFileError(kind, path)


def _reject_input_overwrite(inputs: list[Path], outputs: list[Path]) -> None:
    resolved = {p.resolve() for p in inputs}
    for path in outputs:
        if path.resolve() in resolved:
            raise OutputWriteError(path, "output path is also an input file")


def prepare_output_dirs(paths: list[Path]) -> None:
    """Create parent directories of all outputs, once, before any write."""
    for parent in sorted({p.parent for p in paths}):
        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputWriteError(parent, str(e)) from e
            logger.info("output_dir_created", path=str(parent))


def write_output(path: Path, content: str) -> None:
    """Write one generated document as UTF-8.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, str(e)) from e


def run(config: GeneratorConfig) -> PipelineResult:
    """Generate the outline and the four projections.

    Args:
        config: Resolved paths, pattern registry and output format.

    Returns:
        PipelineResult with counts and written paths.

    Raises:
        MissingInputFileError: If the guide or slide content is missing.
        OutputWriteError: If an output path is one of the inputs, or any
            output cannot be written.
        NoHeadingsFoundError: If the guide yields no headings.
        NoModulesFoundError: If the outline parses to no modules.
    """
    patterns = config.patterns
    log = logger.bind(guide=str(config.input_guide))

    _require_input("guide", config.input_guide)
    _require_input("slide content", config.input_slide_content)
    _reject_input_overwrite(
        [config.input_guide, config.input_slide_content], config.output_paths
    )
    prepare_output_dirs(config.output_paths)

    written: list[Path] = []

    headings = extract_headings(config.input_guide, patterns)
    if not headings:
        raise NoHeadingsFoundError(
            f"No headings found in guide '{config.input_guide}'"
        )

    outline = build_outline(headings, config.input_guide, patterns, config.fmt)
    write_output(config.output_outline, outline)
    written.append(config.output_outline)
    log.info(
        "outline_written",
        path=str(config.output_outline),
        modules=sum(1 for h in headings if h.level == 1),
        activities=sum(1 for h in headings if h.level == 2),
    )

    modules = parse_outline(config.output_outline, patterns)
    slides = parse_slide_content(config.input_slide_content, patterns)
    if not modules:
        raise NoModulesFoundError(
            f"No modules found in outline '{config.output_outline}'"
        )

    engine = ProjectionEngine(config.input_guide, patterns, config.fmt)
    preamble = read_preamble(config.input_slide_content, patterns)

    projections = [
        ("slides", config.output_slides, engine.merge_slides, (modules, slides)),
        ("topics", config.output_topics, engine.course_topics, (modules, slides)),
        ("agenda", config.output_agenda, engine.website_agenda, (modules,)),
        (
            "titled_slides",
            config.output_titled_outline,
            engine.slides_with_titles,
            (modules, slides, preamble),
        ),
    ]
    for name, path, render, args in projections:
        write_output(path, render(*args))
        written.append(path)
        log.info("projection_written", projection=name, path=str(path))

    result = PipelineResult(
        heading_count=len(headings),
        module_count=len(modules),
        activity_count=sum(len(m.activities) for m in modules.values()),
        slide_module_count=len(slides),
        written=written,
    )
    log.info(
        "generation_complete",
        headings=result.heading_count,
        modules=result.module_count,
        activities=result.activity_count,
        slide_modules=result.slide_module_count,
    )
    return result
