from typing import Optional


class GrepError(Exception):
    """Base class for every fatal error of a search run."""


class InvalidPatternError(GrepError):
    """The configuration cannot be turned into a working matcher.

    Raised before the first line of the file is read.
    """

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class FileAccessError(GrepError):
    """The file could not be opened, or a read failed mid-stream."""

    def __init__(self, file_path: str, original_error: OSError):
        super().__init__(f"Could not read file '{file_path}': {original_error.strerror or original_error}")
        self.file_path = file_path
        self.original_error = original_error


class LineDecodeError(GrepError):
    """A line's bytes are not valid text."""

    def __init__(self, file_path: str, line_number: int, original_error: Optional[UnicodeDecodeError] = None):
        super().__init__(f"Line {line_number} of '{file_path}' is not valid UTF-8 text")
        self.file_path = file_path
        self.line_number = line_number
        self.original_error = original_error
