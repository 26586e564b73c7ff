"""Pattern registry: every heading/bullet shape the extractors recognize.

Loaded from config/patterns.yaml (or built from defaults), validated by
Pydantic. Extensible: a new document dialect = YAML edit, no code changes.

Case-insensitive shapes carry an inline ``(?i)`` flag so that a pattern
string fully describes its own matching rules.
"""

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

Pattern = re.Pattern[str]


def _compile(*patterns: str) -> list[Pattern]:
    return [re.compile(p) for p in patterns]


class PatternRegistry(BaseModel):
    """Named patterns, skip lists and thresholds used across extraction.

    Groups:
    - guide_*: H1 modules, H2 activities, H4 objectives/tasks in the guide
    - slides_*: module markers in the slide content document
    - outline_*: the ``## <key>: <title>`` line of a generated outline
    - activity_bullets / task_bullets: inline markers that open a block
    - *_suffix / *_prefix: title cleanup applied before comparisons
    """

    model_config = ConfigDict(frozen=True)

    # --- Guide document ---
    guide_module_header: Pattern = re.compile(r"^# (.+)$")
    guide_activity_header: Pattern = re.compile(r"^## (.+)$")
    guide_objectives_header: Pattern = re.compile(r"(?i)^#### Objectives$")
    guide_task_header: Pattern = re.compile(
        r"(?i)^#### (Task|Exercise|Step)(?:\s+\d+)?:?\s*(.+)$"
    )

    # --- Front matter ---
    front_matter_delimiter: str = "---"
    front_matter_title: Pattern = re.compile(r"^title:\s*(.+)$")

    # --- Slide content document ---
    slides_module_header: Pattern = re.compile(r"^# (.+)$")

    # --- Generated outline (legacy "## <key>: <title>" form) ---
    outline_module_header: Pattern = re.compile(r"^## (.+): (.+)$")
    outline_activity_prefix: str = "- "

    # --- Inline markers, tried in order ---
    activity_bullets: list[Pattern] = Field(
        default_factory=lambda: _compile(
            r"(?i)^\s*\*\s*activity[\s\-.]?(\d+)",
            r"(?i)^\s*\*\s*a[\s\-.]?(\d+)",
        )
    )
    task_bullets: list[Pattern] = Field(
        default_factory=lambda: _compile(
            r"(?i)^\s*\*\s*task[\s\-.]?(\d+)",
            r"(?i)^\s*\*\s*exercise[\s\-.]?(\d+)",
            r"(?i)^\s*\*\s*step[\s\-.]?(\d+)",
        )
    )
    bullet_marker: Pattern = re.compile(r"^\s*\*\s*")
    # leading "*" of a bullet, indentation captured
    star_bullet: Pattern = re.compile(r"^(\s*)\*")
    task_bullet_prefix: Pattern = re.compile(
        r"(?i)^(task|exercise|step)[\s\-.]?\d*:?\s*"
    )

    # "Activity 1-2:" -> ("1", "2"); the range end wins when present
    activity_number: Pattern = re.compile(r"(\d+)(?:-(\d+))?:")

    # --- Title cleanup ---
    todo_suffix: Pattern = re.compile(r"\s+TODO.*$")
    parenthetical_suffix: Pattern = re.compile(r"\s+\(.*\)$")
    module_number_prefix: Pattern = re.compile(r"^Module\s+\d+:\s*(.+)$")
    windows_path: Pattern = re.compile(r"^[A-Z]:[/\\]")

    # --- Generic markdown shapes ---
    any_heading: Pattern = re.compile(r"^#{1,6}\s")
    list_bullet: Pattern = re.compile(r"^[*\-+]\s")
    prose_stop_markers: list[Pattern] = Field(
        default_factory=lambda: _compile(
            r"^#{3,6}\s",  # h3-h6
            r"^\d+\.",  # ordered list
            r"^[*\-+]\s",  # unordered list
            r"\*\*",  # bold
            r"```",  # code
            r"^\s*\|",  # table
            r"^\s*>",  # blockquote
            r"^\s*\[",  # leading link
            r"^\s*<!--",  # HTML comment
        )
    )
    non_word_start: Pattern = re.compile(r"^[^\w\s]")
    code_fence: str = "```"

    # --- Skip rules ---
    title_skip_terms: list[str] = Field(
        default_factory=lambda: ["contents", "copyright", "navigation"]
    )
    heading_skip_terms: list[str] = Field(
        default_factory=lambda: [
            "references",
            "c:/",
            "lint the changes",
            "json files are compiled",
            "make sure to update",
        ]
    )
    continuation_phrase: str = "Using that same logic"
    min_heading_length: int = 3
    min_scenario_length: int = 10

    @property
    def all_activity_bullets(self) -> list[Pattern]:
        """Activity markers followed by task markers, in matching order."""
        return [*self.activity_bullets, *self.task_bullets]

    def match_activity_bullet(self, line: str) -> str | None:
        """Return the captured activity number of the first matching marker."""
        for pattern in self.all_activity_bullets:
            match = pattern.match(line)
            if match:
                return match.group(1)
        return None

    def is_activity_bullet(self, line: str) -> bool:
        return self.match_activity_bullet(line) is not None

    def is_task_bullet(self, line: str) -> bool:
        return any(p.match(line) for p in self.task_bullets)

    def clean_title(self, title: str) -> str:
        """Strip a trailing ``TODO...`` and a trailing ``(...)`` suffix."""
        title = self.todo_suffix.sub("", title)
        return self.parenthetical_suffix.sub("", title)

    def is_fence(self, stripped_line: str) -> bool:
        return stripped_line.startswith(self.code_fence)

    def should_skip_module_title(self, title: str) -> bool:
        lowered = title.lower()
        return any(term in lowered for term in self.title_skip_terms)

    def should_skip_activity_title(self, title: str) -> bool:
        lowered = title.lower()
        return (
            any(term in lowered for term in self.heading_skip_terms)
            or self.windows_path.match(title) is not None
            or title.startswith("/")
            or len(title) <= self.min_heading_length
        )


def load_registry(config_path: Path) -> PatternRegistry:
    """Load and validate a pattern registry from YAML.

    Keys missing from the file keep their default patterns.

    Args:
        config_path: Path to patterns.yaml. Typically comes from
            Settings.pattern_registry_path or the --patterns option.

    Raises:
        FileNotFoundError: if YAML file doesn't exist.
        ValueError: if YAML parsing or validation fails.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Pattern registry not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(
            f"Failed to parse pattern registry '{config_path}': {e}"
        ) from e

    return PatternRegistry.model_validate(raw or {})
