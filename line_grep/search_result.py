from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class OutputLine:
    """A single line of the searched file that is going to be printed."""
    line_number: int  # 1-based
    content: str

    @property
    def is_match(self) -> bool:
        return False


@dataclass
class ContextLine(OutputLine):
    """A line printed before or after a match, without highlighting."""


@dataclass
class MatchLine(OutputLine):
    """A line that matched the pattern."""
    spans: List[Tuple[int, int]] = field(default_factory=list)  # Offsets into content to highlight

    @property
    def is_match(self) -> bool:
        return True


@dataclass
class SearchSummary:
    """Counters collected during a single search run."""
    lines_searched: int = 0
    matched_lines: int = 0  # Lines that directly matched the pattern
    match_count: int = 0    # Individual highlighted occurrences across all matched lines
    context_lines: int = 0  # Lines printed as before or after context
