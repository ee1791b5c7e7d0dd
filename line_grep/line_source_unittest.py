import os
import tempfile
import unittest

from line_grep import line_source
from line_grep.errors import FileAccessError, LineDecodeError


class TestReadLines(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name: str, data: bytes) -> str:
        path = os.path.join(self.temp_dir.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_numbers_lines_from_one_and_strips_newlines(self):
        path = self._write("plain.txt", b"apple\nbanana\ncherry\n")
        self.assertEqual(
            list(line_source.read_lines(path)),
            [(1, "apple"), (2, "banana"), (3, "cherry")],
        )

    def test_last_line_without_newline(self):
        path = self._write("no_eol.txt", b"first\nlast")
        self.assertEqual(list(line_source.read_lines(path)), [(1, "first"), (2, "last")])

    def test_crlf_line_endings(self):
        path = self._write("crlf.txt", b"one\r\ntwo\r\n")
        self.assertEqual(list(line_source.read_lines(path)), [(1, "one"), (2, "two")])

    def test_blank_lines_are_kept(self):
        path = self._write("blank.txt", b"a\n\n\nb\n")
        self.assertEqual(list(line_source.read_lines(path)), [(1, "a"), (2, ""), (3, ""), (4, "b")])

    def test_empty_file(self):
        path = self._write("empty.txt", b"")
        self.assertEqual(list(line_source.read_lines(path)), [])

    def test_utf8_content(self):
        path = self._write("utf8.txt", "café\nnaïve\n".encode("utf-8"))
        self.assertEqual(list(line_source.read_lines(path)), [(1, "café"), (2, "naïve")])

    def test_missing_file_raises_file_access_error(self):
        path = os.path.join(self.temp_dir.name, "does_not_exist.txt")
        with self.assertRaises(FileAccessError) as ctx:
            list(line_source.read_lines(path))
        self.assertEqual(ctx.exception.file_path, path)
        self.assertIsInstance(ctx.exception.original_error, FileNotFoundError)

    def test_directory_raises_file_access_error(self):
        with self.assertRaises(FileAccessError):
            list(line_source.read_lines(self.temp_dir.name))

    def test_invalid_utf8_raises_after_good_lines(self):
        path = self._write("bad.txt", b"good\n\xff\xfe bad\nnever read\n")
        lines = line_source.read_lines(path)
        self.assertEqual(next(lines), (1, "good"))
        with self.assertRaises(LineDecodeError) as ctx:
            next(lines)
        self.assertEqual(ctx.exception.line_number, 2)

    def test_reading_is_lazy(self):
        path = self._write("lazy.txt", b"a\nb\n")
        lines = line_source.read_lines(path)
        # Nothing is opened until iteration starts
        os.remove(path)
        with self.assertRaises(FileAccessError):
            next(lines)


if __name__ == '__main__':
    unittest.main()
