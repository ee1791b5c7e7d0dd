from typing import List, Optional

from rich import console
from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from line_grep.search_config import ColorMode, SearchConfig, DEFAULT_MATCH_STYLE
from line_grep.search_result import OutputLine, SearchSummary

LINE_NUMBER_STYLE = "green"


def create_console(color_mode: ColorMode = ColorMode.AUTO, stderr: bool = False, file=None) -> console.Console:
    """Builds a rich Console that honours the --color setting."""
    kwargs = {"stderr": stderr, "file": file, "highlight": False, "emoji": False}
    if color_mode == ColorMode.ALWAYS:
        kwargs["force_terminal"] = True
        kwargs["no_color"] = False
    elif color_mode == ColorMode.NEVER:
        kwargs["no_color"] = True
        kwargs["color_system"] = None
    return console.Console(**kwargs)


class _RawLine:
    """
    A renderable that hands its segments to the console untouched: tabs are
    not expanded and control characters are kept, so styled segments cover
    exactly the characters their spans index.
    """

    def __init__(self, segments: List[Segment]):
        self._segments = segments

    def __rich_console__(self, console_instance, options):
        yield from self._segments
        yield Segment.line()


class ConsolePrinter:
    """
    Renders search output to a rich Console.

    Every call writes immediately. Matched spans are highlighted with
    `match_style`, everything else in a line is printed byte for byte.
    """

    def __init__(self, console_instance: Optional[console.Console] = None, match_style: str = DEFAULT_MATCH_STYLE):
        self._console = console_instance or create_console()
        self._match_style = Style.parse(match_style)
        self._number_style = Style.parse(LINE_NUMBER_STYLE)

    def print_search_info(self, config: SearchConfig):
        banner = Text.assemble(
            "Searching for '", (config.pattern, "bold"), "' in file '", (config.file_path, "bold"), "'...")
        self._console.print(banner, soft_wrap=True)
        for option in config.active_options:
            self._console.print(Text(f"({option})", style="dim"))

    def format_line(self, line: OutputLine, show_number: bool) -> List[Segment]:
        segments = []
        if show_number:
            segments.append(Segment(f"{line.line_number}:", self._number_style))
        content = line.content
        position = 0
        if line.is_match:
            for start, end in line.spans:
                if start > position:
                    segments.append(Segment(content[position:start]))
                segments.append(Segment(content[start:end], self._match_style))
                position = end
        if position < len(content):
            segments.append(Segment(content[position:]))
        return segments

    def print_line(self, line: OutputLine, show_number: bool):
        self._console.print(_RawLine(self.format_line(line, show_number)), soft_wrap=True)

    def print_summary(self, summary: SearchSummary):
        self._console.print()
        self._console.print(f"{summary.match_count} matches")
        self._console.print(f"{summary.matched_lines} matched lines")
        self._console.print(f"{summary.context_lines} context lines")
        self._console.print(f"{summary.lines_searched} lines searched")
