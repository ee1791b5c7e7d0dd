import re
import unittest

from line_grep import matcher
from line_grep.errors import InvalidPatternError
from line_grep.search_config import SearchConfig


_SAMPLE_LINES = [
    "",
    "apple",
    "banana",
    "Banana bread",
    "an ant and an anteater",
    "nothing to see here",
    "ANANAS",
    "under_score words_with_an_inside",
    "tabs\tand  spaces",
    "unicode: café, naïve, Ärger",
    "long \u017f in old print",
    "\u0130stanbul",
    "\u039cicro and \u00b5icro",
]


class TestSubstringMatcher(unittest.TestCase):
    def test_no_match_returns_none(self):
        m = matcher.SubstringMatcher("xyz")
        self.assertIsNone(m.matches("apple"))

    def test_spans_are_non_overlapping_left_to_right(self):
        m = matcher.SubstringMatcher("ana")
        # "banana" contains "ana" at 1 and (overlapping) 3; only the first counts
        self.assertEqual(m.matches("banana"), [(1, 4)])
        self.assertEqual(m.matches("ana ana"), [(0, 3), (4, 7)])

    def test_case_sensitive_by_default(self):
        m = matcher.SubstringMatcher("banana")
        self.assertIsNone(m.matches("Banana"))

    def test_ignore_case_keeps_spans_on_original_text(self):
        m = matcher.SubstringMatcher("BaN", ignore_case=True)
        line = "A BANANA and a banjo"
        spans = m.matches(line)
        self.assertEqual(spans, [(2, 5), (15, 18)])
        self.assertEqual([line[s:e] for s, e in spans], ["BAN", "ban"])

    def test_ignore_case_with_length_changing_character(self):
        # 'İ'.lower() is two characters long; offsets must still line up
        m = matcher.SubstringMatcher("x", ignore_case=True)
        line = "İ X"
        self.assertEqual(m.matches(line), [(2, 3)])

    def test_ignore_case_uses_regex_case_rules(self):
        m = matcher.SubstringMatcher("s", ignore_case=True)
        self.assertEqual(m.matches("ſ"), [(0, 1)])
        m = matcher.SubstringMatcher("µ", ignore_case=True)
        self.assertEqual(m.matches("Μ"), [(0, 1)])

    def test_empty_pattern_matches_every_line_without_spans(self):
        m = matcher.SubstringMatcher("")
        self.assertEqual(m.matches("anything"), [])
        self.assertEqual(m.matches(""), [])


class TestRegexMatcher(unittest.TestCase):
    def test_whole_word_matches_standalone_word_only(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("a", whole_word=True))
        self.assertEqual(m.matches("a cat sat"), [(0, 1)])

    def test_whole_word_rejects_embedded_word(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("cat", whole_word=True))
        self.assertIsNone(m.matches("concatenate"))
        self.assertIsNone(m.matches("cat_food"))
        self.assertEqual(m.matches("the cat."), [(4, 7)])

    def test_whole_word_pattern_with_non_word_edges(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("-v", whole_word=True))
        self.assertEqual(m.matches("grep -v foo"), [(5, 7)])
        self.assertIsNone(m.matches("grep -vx foo"))

    def test_literal_pattern_is_escaped(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("a.c"))
        self.assertIsNone(m.matches("abc"))
        self.assertEqual(m.matches("a.c"), [(0, 3)])

    def test_regex_mode(self):
        m = matcher.RegexMatcher(matcher.compile_pattern(r"b\w+a", use_regex=True))
        self.assertEqual(m.matches("a banana!"), [(2, 8)])

    def test_zero_width_match_has_no_spans(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("^", use_regex=True))
        self.assertEqual(m.matches("text"), [])

    def test_invalid_regex_raises(self):
        with self.assertRaises(InvalidPatternError) as ctx:
            matcher.compile_pattern("(unclosed", use_regex=True)
        self.assertEqual(ctx.exception.pattern, "(unclosed")

    def test_unbalanced_literal_is_fine(self):
        m = matcher.RegexMatcher(matcher.compile_pattern("(unclosed"))
        self.assertEqual(m.matches("x (unclosed y"), [(2, 11)])


class TestLiteralEquivalence(unittest.TestCase):
    """Substring search and escaped-regex search must agree on every line."""

    def _assert_equivalent(self, pattern, ignore_case):
        plain = matcher.SubstringMatcher(pattern, ignore_case=ignore_case)
        regex = matcher.RegexMatcher(matcher.compile_pattern(pattern, ignore_case=ignore_case))
        for line in _SAMPLE_LINES:
            with self.subTest(pattern=pattern, line=line, ignore_case=ignore_case):
                self.assertEqual(plain.matches(line), regex.matches(line))

    def test_equivalence(self):
        for pattern in ["an", "a", "ana", "Banana", "under", " ", "café", "ananas", "s", "i", "\u00b5"]:
            self._assert_equivalent(pattern, ignore_case=False)
            self._assert_equivalent(pattern, ignore_case=True)

    def test_patterns_have_no_metacharacters(self):
        for pattern in ["an", "a", "ana", "Banana", "under", "café"]:
            self.assertEqual(re.escape(pattern), pattern)


class TestBuildMatcher(unittest.TestCase):
    def test_plain_config_uses_substring_matcher(self):
        config = SearchConfig(pattern="an", file_path="f.txt")
        self.assertIsInstance(matcher.build_matcher(config), matcher.SubstringMatcher)

    def test_whole_word_uses_regex_matcher(self):
        config = SearchConfig(pattern="an", file_path="f.txt", whole_word=True)
        self.assertIsInstance(matcher.build_matcher(config), matcher.RegexMatcher)

    def test_regex_mode_uses_regex_matcher(self):
        config = SearchConfig(pattern="a+n", file_path="f.txt", use_regex=True, ignore_case=True)
        m = matcher.build_matcher(config)
        self.assertIsInstance(m, matcher.RegexMatcher)
        self.assertEqual(m.matches("AAN"), [(0, 3)])

    def test_whole_word_does_not_change_which_case_variants_match(self):
        line = "long ſ here"
        plain = matcher.build_matcher(SearchConfig(pattern="S", file_path="f.txt", ignore_case=True))
        word = matcher.build_matcher(SearchConfig(pattern="S", file_path="f.txt", ignore_case=True, whole_word=True))
        self.assertEqual(plain.matches(line), [(5, 6)])
        self.assertEqual(word.matches(line), [(5, 6)])

    def test_invalid_regex_config_raises(self):
        config = SearchConfig(pattern="[a-", file_path="f.txt", use_regex=True)
        with self.assertRaises(InvalidPatternError):
            matcher.build_matcher(config)


if __name__ == '__main__':
    unittest.main()
