"""
Error types raised while fetching and parsing REPY reports.

- ParseError: a required line did not match its grammar. The faculty loop
  recovers from these by skipping to the next course.
- FatalParseError: an internal invariant broke (bad numeric field, cursor
  spinning at end of input). Always aborts the whole parse.
- FetchError: the report could not be downloaded or extracted.
- EncodingError: an unknown codec name was given for the raw report.
"""

from __future__ import annotations

from typing import Optional


class RepyError(Exception):
    """
    Base class for all errors raised by this package.
    """


class EncodingError(RepyError):
    """
    The requested text encoding does not exist.
    """


class LineError(RepyError):
    """
    An error tied to a (1-based) line of the report.

    When raised with ``from err``, str() includes the wrapped error so the
    message reads like a chain of parse steps.
    """

    def __init__(self, line: int, message: str) -> None:
        super().__init__(message)
        self.line = line
        self.message = message

    def __str__(self) -> str:
        text = f"Line {self.line}: {self.message}"
        cause: Optional[BaseException] = self.__cause__
        if cause is not None:
            text += f": {cause}"
        return text


class ParseError(LineError):
    """
    Structural mismatch: a required line does not match its grammar.
    """


class FatalParseError(LineError):
    """
    Parse failure that must not be recovered from at course level.
    """


class FetchError(RepyError):
    """
    Raised when the published report archive cannot be used.
    """
