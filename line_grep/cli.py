#! /usr/bin/env python3
import argparse
import sys
from typing import List, Optional

import dotenv
from rich.markup import escape

from line_grep.errors import GrepError
from line_grep.printer import ConsolePrinter, create_console
from line_grep.search_config import ColorMode, SearchConfig, color_mode_from_env, match_style_from_env
from line_grep.searcher import run_search

# Load environment variables from .env file
dotenv.load_dotenv()


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{value}'")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="line-grep",
        description="Search a file for lines containing a pattern, with optional context lines around each match.",
    )
    parser.add_argument("pattern", help="The text to search for.")
    parser.add_argument("file_path", metavar="FILE", help="The file to search in.")
    parser.add_argument(
        "-i", "--ignore-case", action="store_true", help="Ignore case when matching."
    )
    parser.add_argument(
        "-n", "--line-number", action="store_true", help="Prefix every printed line with its line number."
    )
    parser.add_argument(
        "-w", "--word-regexp", dest="whole_word", action="store_true",
        help="Only match the pattern as a whole word.",
    )
    parser.add_argument(
        "-E", "--regex", dest="use_regex", action="store_true",
        help="Treat the pattern as a Python regular expression instead of literal text.",
    )
    parser.add_argument(
        "-B", "--before-context", type=_non_negative_int, default=None, metavar="NUM",
        help="Print NUM lines of context before each match.",
    )
    parser.add_argument(
        "-A", "--after-context", type=_non_negative_int, default=None, metavar="NUM",
        help="Print NUM lines of context after each match.",
    )
    parser.add_argument(
        "-C", "--context", type=_non_negative_int, default=None, metavar="NUM",
        help="Print NUM lines of context before and after each match. -A and -B take precedence.",
    )
    parser.add_argument(
        "--color", choices=[mode.value for mode in ColorMode], default=None,
        help="When to highlight matches (default: $LINE_GREP_COLOR or auto).",
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print match statistics after the results."
    )
    parser.add_argument(
        "--debug", action="store_true", help="Trace how every line was handled to stderr."
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SearchConfig:
    context = args.context or 0
    before_context = args.before_context if args.before_context is not None else context
    after_context = args.after_context if args.after_context is not None else context
    return SearchConfig(
        pattern=args.pattern,
        file_path=args.file_path,
        ignore_case=args.ignore_case,
        line_number=args.line_number,
        whole_word=args.whole_word,
        before_context=before_context,
        after_context=after_context,
        use_regex=args.use_regex,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    color_mode = ColorMode(args.color) if args.color else color_mode_from_env()
    console = create_console(color_mode)
    error_console = create_console(color_mode, stderr=True)

    try:
        config = config_from_args(args)
        printer = ConsolePrinter(console, match_style=match_style_from_env())
        summary = run_search(config, printer, debug_console=error_console if args.debug else None)
    except GrepError as e:
        error_console.print(f"[bold red]Error: {escape(str(e))}[/bold red]", soft_wrap=True)
        return 1

    if args.stats:
        printer.print_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
