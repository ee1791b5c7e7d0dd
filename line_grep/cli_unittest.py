import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr
from unittest.mock import patch

from line_grep import cli


class TestArgumentParsing(unittest.TestCase):
    def _config(self, argv):
        return cli.config_from_args(cli.build_parser().parse_args(argv))

    def test_defaults(self):
        config = self._config(["test_query", "test_file.txt"])
        self.assertEqual(config.pattern, "test_query")
        self.assertEqual(config.file_path, "test_file.txt")
        self.assertFalse(config.ignore_case)
        self.assertFalse(config.line_number)
        self.assertEqual(config.before_context, 0)
        self.assertEqual(config.after_context, 0)

    def test_flags(self):
        config = self._config(["-i", "-n", "-B", "2", "-A", "3", "pattern", "file.log"])
        self.assertEqual(config.pattern, "pattern")
        self.assertEqual(config.file_path, "file.log")
        self.assertTrue(config.ignore_case)
        self.assertTrue(config.line_number)
        self.assertEqual(config.before_context, 2)
        self.assertEqual(config.after_context, 3)

    def test_word_regexp(self):
        config = self._config(["-w", "word", "file.txt"])
        self.assertTrue(config.whole_word)
        self.assertEqual(config.pattern, "word")

    def test_context_sets_both_sides(self):
        config = self._config(["-C", "4", "p", "f"])
        self.assertEqual((config.before_context, config.after_context), (4, 4))

    def test_explicit_sides_override_context(self):
        config = self._config(["-C", "4", "-A", "1", "p", "f"])
        self.assertEqual((config.before_context, config.after_context), (4, 1))

    def test_negative_context_is_a_usage_error(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.build_parser().parse_args(["-B", "-1", "p", "f"])
        self.assertEqual(ctx.exception.code, 2)

    def test_missing_file_argument_is_a_usage_error(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.build_parser().parse_args(["only_pattern"])


@patch.dict(os.environ, {"LINE_GREP_COLOR": "never"})
class TestMain(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "fruit.txt")
        with open(self.path, "w") as f:
            f.write("apple\nbanana\ncherry\ndate\n")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _run(self, argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout, \
                patch("sys.stderr", new_callable=io.StringIO) as stderr:
            code = cli.main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_success_exit_code_and_output(self):
        code, stdout, stderr = self._run(["-n", "-B", "1", "-A", "1", "an", self.path])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.splitlines()[-3:], ["1:apple", "2:banana", "3:cherry"])
        self.assertEqual(stderr, "")

    def test_lines_with_tabs_and_control_characters_are_unchanged(self):
        path = os.path.join(self.temp_dir.name, "raw.txt")
        with open(path, "wb") as f:
            f.write(b"a\tb hit\nskip\nx\rhit\x0cy\x08z\n")
        code, stdout, _ = self._run(["-n", "hit", path])
        self.assertEqual(code, 0)
        self.assertTrue(stdout.endswith("1:a\tb hit\n3:x\rhit\x0cy\x08z\n"), repr(stdout))

    def test_no_match_still_succeeds(self):
        code, stdout, _ = self._run(["xyz", self.path])
        self.assertEqual(code, 0)
        self.assertEqual(len(stdout.splitlines()), 1)

    def test_missing_file_reports_error(self):
        code, _, stderr = self._run(["an", os.path.join(self.temp_dir.name, "nope.txt")])
        self.assertEqual(code, 1)
        self.assertIn("Error: Could not read file", stderr)

    def test_invalid_regex_reports_error_without_output(self):
        code, stdout, stderr = self._run(["-E", "[unclosed", self.path])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("Error: Invalid pattern '[unclosed'", stderr)

    def test_stats(self):
        code, stdout, _ = self._run(["--stats", "an", self.path])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.splitlines()[-4:], ["2 matches", "1 matched lines", "0 context lines", "4 lines searched"])

    def test_debug_goes_to_stderr(self):
        code, stdout, stderr = self._run(["--debug", "an", self.path])
        self.assertEqual(code, 0)
        self.assertIn("line 2: match", stderr)
        self.assertNotIn("line 2: match", stdout)


if __name__ == '__main__':
    unittest.main()
