import dataclasses
import os
import unittest
from unittest.mock import patch

from line_grep import search_config
from line_grep.errors import InvalidPatternError


class TestSearchConfig(unittest.TestCase):
    def test_defaults(self):
        config = search_config.SearchConfig(pattern="test_query", file_path="test_file.txt")
        self.assertEqual(config.pattern, "test_query")
        self.assertEqual(config.file_path, "test_file.txt")
        self.assertFalse(config.ignore_case)
        self.assertFalse(config.line_number)
        self.assertFalse(config.whole_word)
        self.assertFalse(config.use_regex)
        self.assertEqual(config.before_context, 0)
        self.assertEqual(config.after_context, 0)
        self.assertEqual(config.active_options, [])

    def test_none_context_rejected(self):
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", before_context=None)
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", after_context=None)

    def test_is_immutable(self):
        config = search_config.SearchConfig(pattern="p", file_path="f")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.pattern = "other"

    def test_negative_context_rejected(self):
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", before_context=-1)
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", after_context=-3)

    def test_non_integer_context_rejected(self):
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", after_context=1.5)
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="p", file_path="f", before_context=True)

    def test_line_break_in_pattern_rejected(self):
        with self.assertRaises(InvalidPatternError):
            search_config.SearchConfig(pattern="two\nlines", file_path="f")

    def test_active_options_in_banner_order(self):
        config = search_config.SearchConfig(
            pattern="p", file_path="f", ignore_case=True, line_number=True, whole_word=True,
            use_regex=True, before_context=2, after_context=3)
        self.assertEqual(config.active_options, [
            "Case-insensitive search",
            "Line numbers enabled",
            "Whole-word search",
            "Regular-expression search",
            "Context before: 2 lines",
            "Context after: 3 lines",
        ])


class TestEnvironmentDefaults(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_match_style_default(self):
        self.assertEqual(search_config.match_style_from_env(), "bold red")

    @patch.dict(os.environ, {"LINE_GREP_MATCH_STYLE": "black on yellow"})
    def test_match_style_from_env(self):
        self.assertEqual(search_config.match_style_from_env(), "black on yellow")

    @patch.dict(os.environ, {"LINE_GREP_MATCH_STYLE": "not a real style"})
    def test_invalid_match_style_falls_back(self):
        self.assertEqual(search_config.match_style_from_env(), "bold red")

    @patch.dict(os.environ, {}, clear=True)
    def test_color_mode_default(self):
        self.assertEqual(search_config.color_mode_from_env(), search_config.ColorMode.AUTO)

    @patch.dict(os.environ, {"LINE_GREP_COLOR": "Never"})
    def test_color_mode_from_env(self):
        self.assertEqual(search_config.color_mode_from_env(), search_config.ColorMode.NEVER)

    @patch.dict(os.environ, {"LINE_GREP_COLOR": "sometimes"})
    def test_unknown_color_mode_falls_back(self):
        self.assertEqual(search_config.color_mode_from_env(), search_config.ColorMode.AUTO)


if __name__ == '__main__':
    unittest.main()
