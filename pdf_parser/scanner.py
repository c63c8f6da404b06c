"""Byte-level recognizers shared by the object, xref and document parsers.

Every helper works on an immutable ``bytes`` buffer and a ``pos``/``end``
window instead of slicing: ``pos`` is where the token starts, ``end`` bounds
the region being parsed (``None`` means the end of the buffer). Recognizers
return the position after what they consumed, or ``(value, position)`` when
they also produce a value. Failures raise a :class:`PDFParseError` subclass
carrying the offset of the failure; the caller's position is never advanced.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Tuple

from .exceptions import (
    GrammarMismatchError,
    InvalidFixedWidthFieldError,
    MalformedNumberError,
    MalformedUtf8Error,
    UnbalancedDelimiterError,
)

__all__ = [
    "WHITESPACE",
    "DELIMITERS",
    "UINT32_MAX",
    "INT32_MIN",
    "INT32_MAX",
    "MAX_DIGITS",
    "resolve_end",
    "is_whitespace",
    "is_delimiter",
    "skip_whitespace",
    "expect_whitespace",
    "expect_separator",
    "expect_tag",
    "expect_eol",
    "skip_eol",
    "skip_comments",
    "take_till_whitespace",
    "take_till_eol",
    "decode_text",
    "parse_unsigned",
    "parse_signed_integer",
    "parse_signed_real",
    "parse_boolean",
    "take_bracketed",
    "take_delimited",
]

WHITESPACE = b"\x00\t\n\x0c\r "
DELIMITERS = b"()<>[]{}/%"

UINT32_MAX = 0xFFFFFFFF
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Digit runs longer than this are rejected before conversion.
MAX_DIGITS = 20

_EOL = b"\r\n"
_NUMERIC_TAIL = b"0123456789.+-"

_DIGITS = re.compile(rb"[0-9]+")
_SIGNED_INTEGER = re.compile(rb"[+-]?[0-9]+")
_SIGNED_REAL = re.compile(rb"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)")


def resolve_end(data: bytes, end: Optional[int]) -> int:
    return len(data) if end is None else end


def is_whitespace(byte: int) -> bool:
    return byte in WHITESPACE


def is_delimiter(byte: int) -> bool:
    return byte in DELIMITERS


def _at_token_boundary(data: bytes, pos: int, end: int) -> bool:
    return pos >= end or data[pos] in WHITESPACE or data[pos] in DELIMITERS


def _preview(data: bytes, pos: int, end: int, width: int = 16) -> bytes:
    return data[pos:min(end, pos + width)]


# -- Whitespace, keywords and line handling ----------------------------------


def skip_whitespace(data: bytes, pos: int, end: Optional[int] = None) -> int:
    end = resolve_end(data, end)
    while pos < end and data[pos] in WHITESPACE:
        pos += 1
    return pos


def expect_whitespace(data: bytes, pos: int, end: Optional[int] = None) -> int:
    """Consume one or more whitespace bytes."""
    end = resolve_end(data, end)
    stop = skip_whitespace(data, pos, end)
    if stop == pos:
        raise GrammarMismatchError(
            f"Expected whitespace, found {_preview(data, pos, end)!r}", position=pos
        )
    return stop


def expect_separator(data: bytes, pos: int, end: Optional[int] = None) -> int:
    """Apply the token separator rule.

    A token must be followed by whitespace (consumed), the end of the region,
    or a delimiter byte (left in place for the next production).
    """
    end = resolve_end(data, end)
    if pos >= end:
        return pos
    byte = data[pos]
    if byte in WHITESPACE:
        return skip_whitespace(data, pos, end)
    if byte in DELIMITERS:
        return pos
    raise GrammarMismatchError(
        f"Expected a separator after token, found {_preview(data, pos, end)!r}",
        position=pos,
    )


def expect_tag(data: bytes, pos: int, end: Optional[int], tag: bytes) -> int:
    end = resolve_end(data, end)
    if data.startswith(tag, pos, end):
        return pos + len(tag)
    raise GrammarMismatchError(
        f"Expected {tag!r}, found {_preview(data, pos, end)!r}", position=pos
    )


def skip_eol(data: bytes, pos: int, end: Optional[int] = None) -> int:
    """Consume one CRLF, LF or CR if present."""
    end = resolve_end(data, end)
    if data.startswith(b"\r\n", pos, end):
        return pos + 2
    if pos < end and data[pos] in _EOL:
        return pos + 1
    return pos


def expect_eol(data: bytes, pos: int, end: Optional[int] = None) -> int:
    end = resolve_end(data, end)
    stop = skip_eol(data, pos, end)
    if stop == pos:
        raise GrammarMismatchError(
            f"Expected end of line, found {_preview(data, pos, end)!r}", position=pos
        )
    return stop


def take_till_whitespace(data: bytes, pos: int, end: Optional[int] = None) -> int:
    end = resolve_end(data, end)
    while pos < end and data[pos] not in WHITESPACE:
        pos += 1
    return pos


def take_till_eol(data: bytes, pos: int, end: Optional[int] = None) -> int:
    end = resolve_end(data, end)
    while pos < end and data[pos] not in _EOL:
        pos += 1
    return pos


def skip_comments(data: bytes, pos: int, end: Optional[int] = None) -> int:
    """Skip any run of ``%`` comment lines and the whitespace after them.

    Skipped comments are not decoded, so binary marker lines are accepted.
    """
    end = resolve_end(data, end)
    while pos < end and data[pos] == ord("%"):
        pos = take_till_eol(data, pos + 1, end)
        pos = skip_whitespace(data, pos, end)
    return pos


def decode_text(data: bytes, start: int, stop: int) -> str:
    """Decode ``data[start:stop]`` as UTF-8."""
    try:
        return data[start:stop].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedUtf8Error(
            f"Invalid UTF-8 in text span: {exc.reason}", position=start + exc.start
        ) from exc


# -- Numbers and booleans ----------------------------------------------------


def parse_unsigned(
    data: bytes,
    pos: int,
    end: Optional[int] = None,
    length: int = 0,
    limit: Optional[int] = UINT32_MAX,
) -> Tuple[int, int]:
    """Parse one or more decimal digits.

    When ``length`` is positive the digit count must match it exactly. Values
    above ``limit`` are rejected; with ``limit=None`` any value of up to
    :data:`MAX_DIGITS` significant digits is accepted.
    """
    end = resolve_end(data, end)
    match = _DIGITS.match(data, pos, end)
    if match is None:
        raise GrammarMismatchError(
            f"Expected digits, found {_preview(data, pos, end)!r}", position=pos
        )
    digits = match.group()
    if 0 < length and len(digits) != length:
        raise InvalidFixedWidthFieldError(
            f"Expected a {length}-digit field, found {len(digits)} digits", position=pos
        )
    max_digits = MAX_DIGITS if limit is None else len(str(limit))
    if len(digits.lstrip(b"0")) > max_digits:
        raise MalformedNumberError(
            f"Unsigned value with {len(digits)} digits is too large", position=pos
        )
    value = int(digits.decode("ascii"))
    if limit is not None and value > limit:
        raise MalformedNumberError(
            f"Unsigned value {value} exceeds {limit}", position=pos
        )
    return value, match.end()


def _check_numeric_tail(data: bytes, pos: int, end: int, start: int) -> None:
    if pos < end and data[pos] in _NUMERIC_TAIL:
        raise MalformedNumberError(
            f"Malformed number {_preview(data, start, end)!r}", position=start
        )
    if not _at_token_boundary(data, pos, end):
        raise MalformedNumberError(
            f"Unexpected characters after number {_preview(data, start, end)!r}",
            position=start,
        )


def parse_signed_integer(
    data: bytes, pos: int, end: Optional[int] = None
) -> Tuple[int, int]:
    """Parse an optionally signed integer in the 32-bit signed range."""
    end = resolve_end(data, end)
    match = _SIGNED_INTEGER.match(data, pos, end)
    if match is None:
        raise GrammarMismatchError(
            f"Expected an integer, found {_preview(data, pos, end)!r}", position=pos
        )
    _check_numeric_tail(data, match.end(), end, pos)
    digits = match.group().lstrip(b"+-").lstrip(b"0")
    if len(digits) > len(str(INT32_MAX)):
        raise MalformedNumberError(
            f"Integer with {len(digits)} digits does not fit in 32 bits", position=pos
        )
    value = int(match.group().decode("ascii"))
    if not INT32_MIN <= value <= INT32_MAX:
        raise MalformedNumberError(
            f"Integer {value} does not fit in 32 bits", position=pos
        )
    return value, match.end()


def parse_signed_real(
    data: bytes, pos: int, end: Optional[int] = None
) -> Tuple[float, int]:
    """Parse an optionally signed real such as ``3.14``, ``-.5`` or ``12.``."""
    end = resolve_end(data, end)
    match = _SIGNED_REAL.match(data, pos, end)
    if match is None:
        raise GrammarMismatchError(
            f"Expected a real number, found {_preview(data, pos, end)!r}", position=pos
        )
    _check_numeric_tail(data, match.end(), end, pos)
    value = float(match.group().decode("ascii"))
    if not math.isfinite(value):
        raise MalformedNumberError("Real number is out of range", position=pos)
    return value, match.end()


def parse_boolean(data: bytes, pos: int, end: Optional[int] = None) -> Tuple[bool, int]:
    """Parse ``true`` or ``false``; ``truee`` and the like are rejected."""
    end = resolve_end(data, end)
    for tag, value in ((b"true", True), (b"false", False)):
        if data.startswith(tag, pos, end) and _at_token_boundary(data, pos + len(tag), end):
            return value, pos + len(tag)
    raise GrammarMismatchError(
        f"Expected a boolean, found {_preview(data, pos, end)!r}", position=pos
    )


# -- Bracketed spans ---------------------------------------------------------


def take_bracketed(
    data: bytes,
    pos: int,
    end: Optional[int],
    opening: int,
    closing: int,
    escape: Optional[int] = None,
) -> int:
    """Find the end of a balanced span whose opening byte was already consumed.

    Returns the index of the closing byte that takes the nesting counter below
    zero; that byte is not consumed. If the region runs out with the counter
    at exactly zero, the whole region is the span and ``end`` is returned.
    A byte following ``escape`` is never counted.
    """
    end = resolve_end(data, end)
    depth = 0
    index = pos
    while index < end:
        byte = data[index]
        if byte == escape:
            index += 2
            continue
        if byte == opening:
            depth += 1
        elif byte == closing:
            depth -= 1
            if depth < 0:
                return index
        index += 1
    if depth == 0:
        return end
    raise UnbalancedDelimiterError(
        f"Unbalanced {bytes([opening])!r}...{bytes([closing])!r} span", position=pos
    )


def take_delimited(
    data: bytes,
    pos: int,
    end: Optional[int],
    opening: bytes,
    closing: bytes,
    escape: Optional[int] = None,
) -> Tuple[int, int, int]:
    """Consume ``opening``, a balanced span and ``closing``.

    Returns ``(inner_start, inner_stop, new_pos)``.
    """
    end = resolve_end(data, end)
    open_byte, close_byte = opening[0], closing[0]
    if pos >= end or data[pos] != open_byte:
        raise GrammarMismatchError(
            f"Expected {opening!r}, found {_preview(data, pos, end)!r}", position=pos
        )
    inner_start = pos + 1
    inner_stop = take_bracketed(data, inner_start, end, open_byte, close_byte, escape)
    if inner_stop >= end:
        raise UnbalancedDelimiterError(
            f"Missing closing {closing!r}", position=pos
        )
    return inner_start, inner_stop, inner_stop + 1
