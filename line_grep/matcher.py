import abc
import re
from typing import List, Optional, Pattern, Tuple

from line_grep.errors import InvalidPatternError
from line_grep.search_config import SearchConfig

# (start, end) offsets into the line, end exclusive
Span = Tuple[int, int]


def _regex_spans(regex: Pattern[str], line: str) -> Optional[List[Span]]:
    found = False
    spans = []
    for match in regex.finditer(line):
        found = True
        if match.end() > match.start():
            spans.append(match.span())
    return spans if found else None


class Matcher(abc.ABC):
    """Answers whether a line matches and where."""

    @abc.abstractmethod
    def matches(self, line: str) -> Optional[List[Span]]:
        """
        Returns None when the line does not match, otherwise the non-overlapping
        match spans from left to right. The list is empty only for a zero-width
        match (for example an empty pattern).
        """


class SubstringMatcher(Matcher):
    """
    Plain literal substring search.

    Case-insensitive search goes through an escaped re.IGNORECASE expression,
    so it folds case exactly like RegexMatcher and spans index the original line.
    """

    def __init__(self, pattern: str, ignore_case: bool = False):
        self._pattern = pattern
        self._folded = re.compile(re.escape(pattern), re.IGNORECASE) if ignore_case else None

    def matches(self, line: str) -> Optional[List[Span]]:
        if self._folded is not None:
            return _regex_spans(self._folded, line)
        if not self._pattern:
            return []

        spans = []
        start = line.find(self._pattern)
        while start != -1:
            end = start + len(self._pattern)
            spans.append((start, end))
            start = line.find(self._pattern, end)
        return spans or None


class RegexMatcher(Matcher):
    """Search with a compiled regular expression."""

    def __init__(self, regex: Pattern[str]):
        self._regex = regex

    def matches(self, line: str) -> Optional[List[Span]]:
        return _regex_spans(self._regex, line)


def compile_pattern(pattern: str, ignore_case: bool = False, whole_word: bool = False,
                    use_regex: bool = False) -> Pattern[str]:
    """
    Compiles the user pattern into a regular expression.

    Literal patterns are escaped first, so the compiled expression finds exactly
    the same lines as a substring search. Whole-word mode requires a non-word
    character or a string boundary on both sides of the pattern.
    """
    expression = pattern if use_regex else re.escape(pattern)
    if whole_word:
        expression = rf"(?<!\w)(?:{expression})(?!\w)"
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(expression, flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def build_matcher(config: SearchConfig) -> Matcher:
    """Picks the matcher implementation for a configuration. Called once per run."""
    if config.use_regex or config.whole_word:
        return RegexMatcher(compile_pattern(config.pattern,
                                            ignore_case=config.ignore_case,
                                            whole_word=config.whole_word,
                                            use_regex=config.use_regex))
    return SubstringMatcher(config.pattern, ignore_case=config.ignore_case)
