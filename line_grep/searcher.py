from typing import Optional

from rich import console

from line_grep.context_tracker import ContextWindowTracker
from line_grep.line_source import read_lines
from line_grep.matcher import build_matcher
from line_grep.printer import ConsolePrinter
from line_grep.search_config import SearchConfig
from line_grep.search_result import SearchSummary


def run_search(config: SearchConfig, printer: ConsolePrinter,
               debug_console: Optional[console.Console] = None) -> SearchSummary:
    """
    Searches config.file_path and prints the banner followed by every match and
    context line.

    The matcher is built before anything is printed or read, so an invalid
    pattern fails without output. Errors from reading the file propagate to
    the caller; anything already printed stays printed.

    Args:
        config: The resolved search configuration.
        printer: Where the output goes.
        debug_console: If given, every line's disposition is traced here.

    Returns:
        The counters for the run.
    """
    matcher = build_matcher(config)
    tracker = ContextWindowTracker(matcher, config.before_context, config.after_context)

    printer.print_search_info(config)
    if debug_console:
        debug_console.print(f"[dim]Using {type(matcher).__name__}[/dim]")

    for line_number, text in read_lines(config.file_path):
        for output_line in tracker.feed(text):
            printer.print_line(output_line, config.line_number)
        if debug_console:
            state = tracker.state
            debug_console.print(
                f"[dim]line {line_number}: {tracker.last_disposition.value} "
                f"(buffered={len(state.before_buffer)}, after_owed={state.lines_after_match})[/dim]")

    return tracker.summary
