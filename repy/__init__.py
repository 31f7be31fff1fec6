"""
REPY: parser for the Technion course schedule report.

    from repy import read_file
    with open("REPY", "rb") as f:
        catalog = read_file(f)
"""

from repy.errors import FatalParseError, FetchError, ParseError, RepyError
from repy.parse import Parser, parse_lines, parse_text, read_file

__all__ = [
    "FatalParseError",
    "FetchError",
    "ParseError",
    "Parser",
    "RepyError",
    "parse_lines",
    "parse_text",
    "read_file",
]
