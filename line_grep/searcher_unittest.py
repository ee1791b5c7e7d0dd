import io
import os
import tempfile
import unittest
from unittest.mock import MagicMock

from rich.console import Console

from line_grep import searcher
from line_grep.errors import FileAccessError, InvalidPatternError, LineDecodeError
from line_grep.printer import ConsolePrinter
from line_grep.search_config import SearchConfig


def _plain_printer():
    buffer = io.StringIO()
    console = Console(file=buffer, color_system=None, no_color=True, highlight=False, emoji=False, width=80)
    return ConsolePrinter(console), buffer


class TestRunSearch(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.fruit_path = self._write("fruit.txt", "apple\nbanana\ncherry\ndate\n")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name, content, mode="w"):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, mode) as f:
            f.write(content)
        return path

    def test_match_with_context(self):
        printer, buffer = _plain_printer()
        config = SearchConfig(pattern="an", file_path=self.fruit_path, before_context=1, after_context=1)
        summary = searcher.run_search(config, printer)
        self.assertEqual(
            buffer.getvalue(),
            f"Searching for 'an' in file '{self.fruit_path}'...\n"
            "(Context before: 1 lines)\n"
            "(Context after: 1 lines)\n"
            "apple\n"
            "banana\n"
            "cherry\n",
        )
        self.assertEqual(summary.matched_lines, 1)
        self.assertEqual(summary.lines_searched, 4)

    def test_line_numbers(self):
        printer, buffer = _plain_printer()
        config = SearchConfig(pattern="an", file_path=self.fruit_path, line_number=True, after_context=1)
        searcher.run_search(config, printer)
        lines = buffer.getvalue().splitlines()
        self.assertEqual(lines[-2:], ["2:banana", "3:cherry"])

    def test_no_match_prints_only_banner(self):
        printer, buffer = _plain_printer()
        config = SearchConfig(pattern="xyz", file_path=self.fruit_path)
        summary = searcher.run_search(config, printer)
        self.assertEqual(buffer.getvalue(), f"Searching for 'xyz' in file '{self.fruit_path}'...\n")
        self.assertEqual(summary.matched_lines, 0)

    def test_whole_word(self):
        path = self._write("words.txt", "a cat sat\nconcatenate\n")
        printer, buffer = _plain_printer()
        config = SearchConfig(pattern="cat", file_path=path, whole_word=True, line_number=True)
        summary = searcher.run_search(config, printer)
        self.assertEqual(buffer.getvalue().splitlines()[-1], "1:a cat sat")
        self.assertEqual(summary.matched_lines, 1)

    def test_output_is_identical_across_runs(self):
        path = self._write("repeat.txt", "".join(f"line {i} {'hit' if i % 7 == 0 else ''}\n" for i in range(100)))
        config = SearchConfig(pattern="hit", file_path=path, before_context=2, after_context=3, line_number=True)
        first_printer, first = _plain_printer()
        second_printer, second = _plain_printer()
        searcher.run_search(config, first_printer)
        searcher.run_search(config, second_printer)
        self.assertEqual(first.getvalue(), second.getvalue())

    def test_invalid_pattern_fails_before_banner(self):
        printer = MagicMock()
        config = SearchConfig(pattern="(", file_path=self.fruit_path, use_regex=True)
        with self.assertRaises(InvalidPatternError):
            searcher.run_search(config, printer)
        printer.print_search_info.assert_not_called()

    def test_missing_file_raises_after_banner(self):
        printer = MagicMock()
        config = SearchConfig(pattern="a", file_path=os.path.join(self.temp_dir.name, "missing.txt"))
        with self.assertRaises(FileAccessError):
            searcher.run_search(config, printer)
        printer.print_search_info.assert_called_once_with(config)
        printer.print_line.assert_not_called()

    def test_decode_error_keeps_earlier_output(self):
        path = self._write("bad.bin", b"banana\n\xff\xfe\nbandana\n", mode="wb")
        printer, buffer = _plain_printer()
        config = SearchConfig(pattern="an", file_path=path)
        with self.assertRaises(LineDecodeError) as ctx:
            searcher.run_search(config, printer)
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertIn("banana\n", buffer.getvalue())
        self.assertNotIn("bandana", buffer.getvalue())

    def test_debug_trace(self):
        printer, _ = _plain_printer()
        debug_buffer = io.StringIO()
        debug_console = Console(file=debug_buffer, color_system=None, no_color=True, width=200)
        config = SearchConfig(pattern="an", file_path=self.fruit_path, after_context=1)
        searcher.run_search(config, printer, debug_console=debug_console)
        trace = debug_buffer.getvalue().splitlines()
        self.assertEqual(trace[0], "Using SubstringMatcher")
        self.assertEqual(trace[1], "line 1: buffered (buffered=0, after_owed=0)")
        self.assertEqual(trace[2], "line 2: match (buffered=0, after_owed=1)")
        self.assertEqual(trace[3], "line 3: after_context (buffered=0, after_owed=0)")


if __name__ == '__main__':
    unittest.main()
