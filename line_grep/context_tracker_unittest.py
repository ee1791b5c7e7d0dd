import unittest

from line_grep import context_tracker
from line_grep.matcher import SubstringMatcher
from line_grep.search_result import ContextLine, MatchLine


def _run(lines, pattern, before=0, after=0):
    """Feeds every line through a fresh tracker and returns (tracker, printed lines)."""
    tracker = context_tracker.ContextWindowTracker(SubstringMatcher(pattern), before, after)
    printed = []
    for line in lines:
        printed.extend(tracker.feed(line))
    return tracker, printed


def _numbers(printed):
    return [line.line_number for line in printed]


_FRUIT = ["apple", "banana", "cherry", "date"]


class TestScenarios(unittest.TestCase):
    def test_match_with_one_line_of_context_each_side(self):
        _, printed = _run(_FRUIT, "an", before=1, after=1)
        self.assertEqual(
            printed,
            [
                ContextLine(line_number=1, content="apple"),
                MatchLine(line_number=2, content="banana", spans=[(1, 3), (3, 5)]),
                ContextLine(line_number=3, content="cherry"),
            ],
        )

    def test_no_match_prints_nothing(self):
        tracker, printed = _run(_FRUIT, "xyz", before=2, after=2)
        self.assertEqual(printed, [])
        self.assertEqual(tracker.summary.lines_searched, 4)
        self.assertEqual(tracker.summary.matched_lines, 0)

    def test_adjacent_matches_with_overlapping_after_context(self):
        lines = ["one", "two", "hit three", "hit four", "five", "six", "seven"]
        tracker = context_tracker.ContextWindowTracker(SubstringMatcher("hit"), 0, 2)
        dispositions = []
        owed = []
        printed = []
        for line in lines:
            printed.extend(tracker.feed(line))
            dispositions.append(tracker.last_disposition)
            owed.append(tracker.state.lines_after_match)

        self.assertEqual(_numbers(printed), [3, 4, 5, 6])
        self.assertEqual([line.is_match for line in printed], [True, True, False, False])
        # Line 4 refreshes the counter to 2 instead of consuming line 3's window
        self.assertEqual(owed[3], 2)
        self.assertEqual(dispositions[3], context_tracker.Disposition.MATCH)
        self.assertEqual(dispositions[6], context_tracker.Disposition.BUFFERED)


class TestBeforeContext(unittest.TestCase):
    def test_isolated_match_gets_exactly_b_lines(self):
        lines = [f"line {i}" for i in range(1, 11)] + ["MATCH"]
        _, printed = _run(lines, "MATCH", before=3)
        self.assertEqual(_numbers(printed), [8, 9, 10, 11])

    def test_fewer_lines_available_than_b_at_start_of_file(self):
        _, printed = _run(["a", "b", "MATCH"], "MATCH", before=5)
        self.assertEqual(_numbers(printed), [1, 2, 3])

    def test_before_context_limited_to_lines_since_last_printed_line(self):
        lines = ["MATCH", "x", "y", "MATCH"]
        _, printed = _run(lines, "MATCH", before=5)
        self.assertEqual(_numbers(printed), [1, 2, 3, 4])

    def test_buffer_never_exceeds_b(self):
        tracker = context_tracker.ContextWindowTracker(SubstringMatcher("never"), 2, 0)
        for i in range(100):
            tracker.feed(f"line {i}")
            self.assertLessEqual(len(tracker.state.before_buffer), 2)
        self.assertEqual([n for n, _ in tracker.state.before_buffer], [99, 100])

    def test_zero_before_context_keeps_nothing(self):
        tracker, printed = _run(["a", "b", "MATCH"], "MATCH")
        self.assertEqual(_numbers(printed), [3])
        self.assertEqual(len(tracker.state.before_buffer), 0)

    def test_buffer_cleared_on_match(self):
        tracker, _ = _run(["a", "b", "MATCH"], "MATCH", before=2)
        self.assertEqual(len(tracker.state.before_buffer), 0)

    def test_after_context_line_not_reprinted_as_before_context(self):
        lines = ["MATCH", "after", "MATCH"]
        _, printed = _run(lines, "MATCH", before=2, after=1)
        self.assertEqual(_numbers(printed), [1, 2, 3])
        self.assertEqual(len(printed), len(set(_numbers(printed))))

    def test_no_duplicates_with_large_windows(self):
        lines = ["x", "MATCH", "x", "x", "MATCH", "x", "x", "x", "MATCH", "x"]
        _, printed = _run(lines, "MATCH", before=3, after=3)
        numbers = _numbers(printed)
        self.assertEqual(numbers, sorted(set(numbers)))
        self.assertEqual(numbers, list(range(1, 11)))


class TestAfterContext(unittest.TestCase):
    def test_up_to_a_lines_follow_a_match(self):
        lines = ["MATCH", "a", "b", "c", "d"]
        _, printed = _run(lines, "MATCH", after=2)
        self.assertEqual(_numbers(printed), [1, 2, 3])

    def test_after_context_truncated_at_end_of_file(self):
        _, printed = _run(["a", "MATCH", "b"], "MATCH", after=5)
        self.assertEqual(_numbers(printed), [2, 3])

    def test_new_match_refreshes_after_context(self):
        lines = ["MATCH", "a", "MATCH", "b", "c", "d"]
        _, printed = _run(lines, "MATCH", after=2)
        self.assertEqual(_numbers(printed), [1, 2, 3, 4, 5])

    def test_after_context_printed_without_spans(self):
        _, printed = _run(["MATCH", "after"], "MATCH", after=1)
        self.assertIsInstance(printed[1], ContextLine)
        self.assertFalse(printed[1].is_match)


class TestSummary(unittest.TestCase):
    def test_counters(self):
        lines = ["x", "an an", "y", "z", "q", "an"]
        tracker, _ = _run(lines, "an", before=1, after=1)
        summary = tracker.summary
        self.assertEqual(summary.lines_searched, 6)
        self.assertEqual(summary.matched_lines, 2)
        self.assertEqual(summary.match_count, 3)
        self.assertEqual(summary.context_lines, 3)  # lines 1, 3 and 5


class TestInitialState(unittest.TestCase):
    def test_fresh_state(self):
        state = context_tracker.RunState(before_context=3)
        self.assertEqual(state.line_count, 0)
        self.assertEqual(len(state.before_buffer), 0)
        self.assertEqual(state.before_buffer.maxlen, 3)
        self.assertEqual(state.lines_after_match, 0)
        self.assertFalse(state.printing_block_active)


if __name__ == '__main__':
    unittest.main()
