import dataclasses
import enum
import os
from typing import List

from rich.errors import StyleSyntaxError
from rich.style import Style

from line_grep.errors import InvalidPatternError


# Environment variables read at startup. A .env file is loaded by the CLI first.
MATCH_STYLE_ENV = "LINE_GREP_MATCH_STYLE"
COLOR_ENV = "LINE_GREP_COLOR"

DEFAULT_MATCH_STYLE = "bold red"


class ColorMode(enum.Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclasses.dataclass(frozen=True)
class SearchConfig:
    """
    The resolved configuration for one search run. Built once, never mutated.

    before_context and after_context are the B and A context line counts.
    """
    pattern: str
    file_path: str
    ignore_case: bool = False
    line_number: bool = False
    whole_word: bool = False
    before_context: int = 0
    after_context: int = 0
    use_regex: bool = False

    def __post_init__(self):
        for name in ("before_context", "after_context"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPatternError(self.pattern, f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidPatternError(self.pattern, f"{name} must not be negative, got {value}")

        if "\n" in self.pattern or "\r" in self.pattern:
            raise InvalidPatternError(self.pattern, "a pattern cannot contain a line break")

    @property
    def active_options(self) -> List[str]:
        """Human readable descriptions of every option that differs from its default."""
        options = []
        if self.ignore_case:
            options.append("Case-insensitive search")
        if self.line_number:
            options.append("Line numbers enabled")
        if self.whole_word:
            options.append("Whole-word search")
        if self.use_regex:
            options.append("Regular-expression search")
        if self.before_context > 0:
            options.append(f"Context before: {self.before_context} lines")
        if self.after_context > 0:
            options.append(f"Context after: {self.after_context} lines")
        return options


def match_style_from_env() -> str:
    """The rich style used to highlight matched text."""
    style = os.getenv(MATCH_STYLE_ENV) or DEFAULT_MATCH_STYLE
    try:
        Style.parse(style)
    except StyleSyntaxError:
        return DEFAULT_MATCH_STYLE
    return style


def color_mode_from_env() -> ColorMode:
    value = (os.getenv(COLOR_ENV) or ColorMode.AUTO.value).strip().lower()
    try:
        return ColorMode(value)
    except ValueError:
        # Unknown values fall back to auto detection
        return ColorMode.AUTO
