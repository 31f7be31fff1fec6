"""
Decoding of raw REPY bytes.

The published report is encoded in CP862 (DOS Hebrew). The parser only ever
sees decoded text lines; reversing the visual order of Hebrew is the
parser's job, not this module's.
"""

from __future__ import annotations

import codecs
import io
from typing import BinaryIO, Iterator, Union

from repy.errors import EncodingError


REPY_ENCODING = "cp862"
ISO_ENCODING = "iso8859_8"


def check_encoding(encoding: str) -> str:
    """
    Return the canonical codec name, or raise EncodingError.
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError as err:
        raise EncodingError(f"Unknown encoding {encoding!r}") from err


def iter_lines(repy: Union[BinaryIO, bytes], encoding: str = REPY_ENCODING) -> Iterator[str]:
    """
    Yield decoded lines lazily, without their line terminators.
    """
    stream = io.BytesIO(repy) if isinstance(repy, (bytes, bytearray)) else repy

    for raw in stream:
        yield raw.decode(encoding).rstrip("\r\n")


def recode(data: bytes, src: str = REPY_ENCODING, dst: str = ISO_ENCODING) -> bytes:
    """
    Convert raw report bytes between encodings.

    Characters with no equivalent in ``dst`` are replaced, never dropped, so
    line lengths stay the same.
    """
    return data.decode(src).encode(dst, errors="replace")
