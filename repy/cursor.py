"""
The parse cursor: the single mutable read position shared by all parse steps.

The cursor starts *before* the first line (text() is "" and line is 0).
End of input is a normal signal, not an error: advance() returns False and
text() becomes "". Hitting it over and over means some loop is spinning on
a line it never consumes, so that is escalated to a FatalParseError.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Optional, Union

from repy.errors import FatalParseError, ParseError


MAX_EOF_HITS = 10

_UINT = re.compile(r"[0-9]+")

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class Cursor:
    def __init__(self, lines: Iterable[str], logger: Optional[LoggerLike] = None) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._text = ""
        self.line = 0
        self.eof = False
        self.eof_hits = 0
        self.log: LoggerLike = logger if logger is not None else logging.getLogger("repy.parse")

    def text(self) -> str:
        return self._text

    def advance(self) -> bool:
        """
        Move to the next line. Returns False at end of input.
        """
        try:
            self._text = next(self._lines)
        except StopIteration:
            self._text = ""
            self.eof = True
            self.eof_hits += 1
            self.debug("Hit end of input, %d time(s)", self.eof_hits)
            if self.eof_hits > MAX_EOF_HITS:
                raise FatalParseError(self.line, "Hit end of input too many times") from None
            return False
        except UnicodeDecodeError as err:
            raise FatalParseError(self.line + 1, "Couldn't decode line") from err

        self.line += 1
        return True

    def expect(self, expected: str) -> None:
        """
        Require the current line to be exactly ``expected``, then advance.
        """
        if self._text != expected:
            raise ParseError(self.line, f"Expected {expected!r}, got {self._text!r}")
        self.advance()

    # -----------------------------------------------------------------------
    # Strict numbers
    # -----------------------------------------------------------------------

    def parse_uint(self, s: str) -> int:
        if _UINT.fullmatch(s) is None:
            raise FatalParseError(self.line, f"Couldn't parse unsigned integer from {s!r} in {self._text!r}")
        return int(s)

    def parse_float(self, s: str) -> float:
        try:
            return float(s)
        except ValueError:
            raise FatalParseError(self.line, f"Couldn't parse float from {s!r} in {self._text!r}") from None

    # -----------------------------------------------------------------------
    # Diagnostics
    # -----------------------------------------------------------------------

    def debug(self, msg: str, *args: object) -> None:
        self.log.debug("Line %d: " + msg, self.line, *args)

    def info(self, msg: str, *args: object) -> None:
        self.log.info("Line %d: " + msg, self.line, *args)

    def warning(self, msg: str, *args: object) -> None:
        self.log.warning("Line %d: " + msg, self.line, *args)
