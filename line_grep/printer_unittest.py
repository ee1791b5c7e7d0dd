import io
import os
import unittest
from unittest.mock import patch

from rich.console import Console

from line_grep import printer
from line_grep.search_config import ColorMode, SearchConfig
from line_grep.search_result import ContextLine, MatchLine, SearchSummary


def _plain_console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, color_system=None, no_color=True, highlight=False, emoji=False, width=80)


class TestConsolePrinter(unittest.TestCase):
    def setUp(self):
        self.buffer = io.StringIO()
        self.printer = printer.ConsolePrinter(_plain_console(self.buffer))

    def test_banner_with_default_options(self):
        config = SearchConfig(pattern="an", file_path="fruit.txt")
        self.printer.print_search_info(config)
        self.assertEqual(self.buffer.getvalue(), "Searching for 'an' in file 'fruit.txt'...\n")

    def test_banner_lists_only_non_default_options(self):
        config = SearchConfig(pattern="an", file_path="fruit.txt", ignore_case=True, before_context=2)
        self.printer.print_search_info(config)
        self.assertEqual(
            self.buffer.getvalue(),
            "Searching for 'an' in file 'fruit.txt'...\n"
            "(Case-insensitive search)\n"
            "(Context before: 2 lines)\n",
        )

    def test_banner_does_not_interpret_markup_in_pattern(self):
        config = SearchConfig(pattern="[bold]x[/bold] :smile:", file_path="f.txt")
        self.printer.print_search_info(config)
        self.assertIn("'[bold]x[/bold] :smile:'", self.buffer.getvalue())

    def test_plain_line_without_number(self):
        self.printer.print_line(ContextLine(line_number=7, content="cherry"), show_number=False)
        self.assertEqual(self.buffer.getvalue(), "cherry\n")

    def test_plain_line_with_number(self):
        self.printer.print_line(ContextLine(line_number=7, content="cherry"), show_number=True)
        self.assertEqual(self.buffer.getvalue(), "7:cherry\n")

    def test_match_line_text_is_unchanged_without_color(self):
        line = MatchLine(line_number=2, content="banana [x]", spans=[(1, 3), (3, 5)])
        self.printer.print_line(line, show_number=True)
        self.assertEqual(self.buffer.getvalue(), "2:banana [x]\n")

    def test_tabs_and_control_characters_are_printed_verbatim(self):
        line = MatchLine(line_number=4, content="a\tb\rhit\x0cy\x08z\x0b", spans=[(4, 7)])
        self.printer.print_line(line, show_number=True)
        self.assertEqual(self.buffer.getvalue(), "4:a\tb\rhit\x0cy\x08z\x0b\n")

    def test_long_lines_are_not_wrapped(self):
        content = "word " * 60 + "end"
        self.printer.print_line(ContextLine(line_number=1, content=content), show_number=False)
        self.assertEqual(self.buffer.getvalue(), content + "\n")

    def test_empty_line(self):
        self.printer.print_line(ContextLine(line_number=3, content=""), show_number=True)
        self.assertEqual(self.buffer.getvalue(), "3:\n")

    def test_summary(self):
        summary = SearchSummary(lines_searched=10, matched_lines=2, match_count=3, context_lines=4)
        self.printer.print_summary(summary)
        self.assertEqual(
            self.buffer.getvalue(),
            "\n3 matches\n2 matched lines\n4 context lines\n10 lines searched\n",
        )


class TestFormatLine(unittest.TestCase):
    def setUp(self):
        self.printer = printer.ConsolePrinter(_plain_console(io.StringIO()), match_style="bold red")

    def _styled(self, segments):
        return [(segment.text, str(segment.style) if segment.style else None) for segment in segments]

    def test_spans_are_styled_in_order(self):
        line = MatchLine(line_number=2, content="banana", spans=[(1, 3), (3, 5)])
        segments = self.printer.format_line(line, show_number=False)
        self.assertEqual(
            self._styled(segments),
            [("b", None), ("an", "bold red"), ("an", "bold red"), ("a", None)],
        )

    def test_number_prefix_comes_before_content(self):
        line = MatchLine(line_number=12, content="a cat", spans=[(0, 1)])
        segments = self.printer.format_line(line, show_number=True)
        self.assertEqual(self._styled(segments), [("12:", "green"), ("a", "bold red"), (" cat", None)])

    def test_control_characters_stay_inside_their_segments(self):
        line = MatchLine(line_number=1, content="a\rbhit\x0c", spans=[(3, 6)])
        segments = self.printer.format_line(line, show_number=False)
        self.assertEqual(self._styled(segments), [("a\rb", None), ("hit", "bold red"), ("\x0c", None)])

    def test_context_lines_get_no_match_style(self):
        segments = self.printer.format_line(ContextLine(line_number=1, content="apple"), show_number=False)
        self.assertEqual(self._styled(segments), [("apple", None)])


class TestCreateConsole(unittest.TestCase):
    def test_always_emits_ansi_codes(self):
        buffer = io.StringIO()
        with patch.dict(os.environ, {"TERM": "xterm-256color"}):
            console = printer.create_console(ColorMode.ALWAYS, file=buffer)
        printer.ConsolePrinter(console).print_line(
            MatchLine(line_number=1, content="banana", spans=[(1, 3)]), show_number=False)
        output = buffer.getvalue()
        self.assertIn("\x1b[", output)
        self.assertIn("an", output)

    def test_highlight_lands_on_matched_characters_after_control_characters(self):
        buffer = io.StringIO()
        with patch.dict(os.environ, {"TERM": "xterm-256color"}):
            console = printer.create_console(ColorMode.ALWAYS, file=buffer)
        printer.ConsolePrinter(console, match_style="bold red").print_line(
            MatchLine(line_number=1, content="a\rb\thit\x0c", spans=[(4, 7)]), show_number=False)
        self.assertEqual(buffer.getvalue(), "a\rb\t\x1b[1;31mhit\x1b[0m\x0c\n")

    def test_never_emits_plain_text(self):
        buffer = io.StringIO()
        console = printer.create_console(ColorMode.NEVER, file=buffer)
        printer.ConsolePrinter(console).print_line(
            MatchLine(line_number=1, content="banana", spans=[(1, 3)]), show_number=True)
        self.assertEqual(buffer.getvalue(), "1:banana\n")


if __name__ == '__main__':
    unittest.main()
