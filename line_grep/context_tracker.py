import collections
import dataclasses
import enum
from typing import Deque, List, Optional, Tuple

from line_grep.matcher import Matcher
from line_grep.search_result import ContextLine, MatchLine, OutputLine, SearchSummary


class Disposition(enum.Enum):
    """What happened to the most recently processed line."""
    MATCH = "match"                  # Printed as a match, possibly after flushing before-context
    AFTER_CONTEXT = "after_context"  # Printed as context owed to a previous match
    BUFFERED = "buffered"            # Held back as possible before-context


@dataclasses.dataclass
class RunState:
    """
    Mutable state of one search run. Created fresh per run and updated exactly
    once per input line.
    """
    before_context: int
    line_count: int = 0
    before_buffer: Optional[Deque[Tuple[int, str]]] = None
    lines_after_match: int = 0
    printing_block_active: bool = False
    summary: SearchSummary = dataclasses.field(default_factory=SearchSummary)

    def __post_init__(self):
        if self.before_buffer is None:
            # maxlen evicts the oldest entry once B lines are held
            self.before_buffer = collections.deque(maxlen=self.before_context)


class ContextWindowTracker:
    """
    The streaming match-and-context engine.

    Lines are fed in one at a time. For each line the tracker decides whether
    to print it as a match, print it as after-context, or buffer it as possible
    before-context for a future match. At most `before_context` lines are ever
    held, whatever the size of the input.

    Transitions, checked in this order:
      1. The line matches: flush the before-context buffer (only when the
         previous line was not printed), clear it, print the match and owe
         `after_context` more lines.
      2. After-context is still owed: print the line as context.
      3. Otherwise buffer the line and mark the printing block as closed.

    Lines still buffered when the input ends are dropped.
    """

    def __init__(self, matcher: Matcher, before_context: int = 0, after_context: int = 0):
        self._matcher = matcher
        self._before_context = before_context
        self._after_context = after_context
        self._state = RunState(before_context=before_context)
        self.last_disposition: Optional[Disposition] = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def summary(self) -> SearchSummary:
        return self._state.summary

    def feed(self, line: str) -> List[OutputLine]:
        """Processes the next line of input and returns the lines to print, in order."""
        state = self._state
        state.line_count += 1
        state.summary.lines_searched += 1

        spans = self._matcher.matches(line)
        if spans is not None:
            return self._on_match(line, spans)
        if state.lines_after_match > 0:
            return self._on_after_context(line)
        self._on_buffer(line)
        return []

    def _on_match(self, line: str, spans) -> List[OutputLine]:
        state = self._state
        output: List[OutputLine] = []

        if not state.printing_block_active:
            if self._before_context > 0:
                for line_number, content in state.before_buffer:
                    output.append(ContextLine(line_number=line_number, content=content))
                state.summary.context_lines += len(state.before_buffer)
        state.before_buffer.clear()

        output.append(MatchLine(line_number=state.line_count, content=line, spans=list(spans)))
        state.summary.matched_lines += 1
        state.summary.match_count += len(spans) or 1

        state.lines_after_match = self._after_context
        state.printing_block_active = True
        self.last_disposition = Disposition.MATCH
        return output

    def _on_after_context(self, line: str) -> List[OutputLine]:
        state = self._state
        state.lines_after_match -= 1
        state.printing_block_active = True
        state.summary.context_lines += 1
        self.last_disposition = Disposition.AFTER_CONTEXT
        return [ContextLine(line_number=state.line_count, content=line)]

    def _on_buffer(self, line: str):
        state = self._state
        state.before_buffer.append((state.line_count, line))
        state.printing_block_active = False
        self.last_disposition = Disposition.BUFFERED
