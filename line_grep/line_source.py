from typing import Iterator, Tuple

from line_grep.errors import FileAccessError, LineDecodeError

ENCODING = "utf-8"


def _strip_line_ending(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def read_lines(file_path: str) -> Iterator[Tuple[int, str]]:
    """
    Lazily yields (line_number, text) for every line of a file, numbering from 1.

    Lines are read one at a time and decoded individually, so a decoding
    failure is reported against the exact line that caused it. The trailing
    "\\n" or "\\r\\n" is removed.

    Raises:
        FileAccessError: If the file cannot be opened or a read fails.
        LineDecodeError: If a line is not valid UTF-8. Lines before it have
            already been yielded.
    """
    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise FileAccessError(file_path, e) from e

    with f:
        line_number = 0
        while True:
            try:
                raw = f.readline()
            except OSError as e:
                raise FileAccessError(file_path, e) from e
            if not raw:
                return
            line_number += 1
            try:
                text = _strip_line_ending(raw).decode(ENCODING)
            except UnicodeDecodeError as e:
                raise LineDecodeError(file_path, line_number, e) from e
            yield line_number, text
