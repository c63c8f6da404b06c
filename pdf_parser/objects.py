"""Recursive object grammar for PDF files.

Each ``parse_*`` function recognizes one production and returns
``(value, position)``, where ``position`` is the offset of the first
unconsumed byte. :func:`parse_object` tries the productions in a fixed order
so that longer forms such as ``12 0 obj`` and ``12 0 R`` are attempted before
the bare integer they start with.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .exceptions import GrammarMismatchError, InvalidObjectError, PDFParseError
from .scanner import (
    decode_text,
    expect_eol,
    expect_separator,
    expect_tag,
    parse_boolean as _scan_boolean,
    parse_signed_integer,
    parse_signed_real,
    parse_unsigned,
    resolve_end,
    skip_comments,
    skip_whitespace,
    take_delimited,
    take_till_eol,
    take_till_whitespace,
)
from .types import (
    Array,
    Boolean,
    Comment,
    Dictionary,
    HexadecimalString,
    IndirectObject,
    IndirectReference,
    Integer,
    LiteralString,
    Name,
    Null,
    PDFObject,
    Real,
)

__all__ = [
    "parse_object",
    "parse_body_object",
    "parse_indirect_object",
    "parse_indirect_reference",
    "parse_comment",
    "parse_dictionary",
    "parse_stream",
    "parse_array",
    "parse_name",
    "parse_literal_string",
    "parse_hexadecimal_string",
    "parse_numeric",
    "parse_integer",
    "parse_real",
    "parse_boolean",
    "parse_null",
]

ParseResult = Tuple[PDFObject, int]

_HEX_DIGITS = re.compile(rb"[0-9A-Fa-f]*")
_BACKSLASH = ord("\\")


# -- Scalars -----------------------------------------------------------------


def parse_null(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    end = resolve_end(data, end)
    stop = expect_tag(data, pos, end, b"null")
    return Null(), expect_separator(data, stop, end)


def parse_boolean(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    end = resolve_end(data, end)
    value, stop = _scan_boolean(data, pos, end)
    return Boolean(value), expect_separator(data, stop, end)


def parse_integer(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    end = resolve_end(data, end)
    value, stop = parse_signed_integer(data, pos, end)
    return Integer(value), expect_separator(data, stop, end)


def parse_real(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    end = resolve_end(data, end)
    value, stop = parse_signed_real(data, pos, end)
    return Real(value), expect_separator(data, stop, end)


def parse_numeric(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    """Parse an integer, falling back to a real when the integer form fails."""
    try:
        return parse_integer(data, pos, end)
    except PDFParseError:
        return parse_real(data, pos, end)


def parse_name(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    """Parse ``/Name``; the name runs up to the next whitespace byte."""
    end = resolve_end(data, end)
    start = expect_tag(data, pos, end, b"/")
    stop = take_till_whitespace(data, start, end)
    name = decode_text(data, start, stop)
    return Name(name), expect_separator(data, stop, end)


def parse_literal_string(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Parse ``(text)`` with nested parentheses.

    Backslash escapes are kept verbatim, but an escaped parenthesis does not
    count towards the nesting.
    """
    end = resolve_end(data, end)
    start, stop, after = take_delimited(data, pos, end, b"(", b")", escape=_BACKSLASH)
    text = decode_text(data, start, stop)
    return LiteralString(text), expect_separator(data, after, end)


def parse_hexadecimal_string(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Parse ``<48656C6C6F>``. Whitespace between the digits is rejected."""
    end = resolve_end(data, end)
    start = expect_tag(data, pos, end, b"<")
    stop = _HEX_DIGITS.match(data, start, end).end()
    if stop >= end or data[stop] != ord(">"):
        raise GrammarMismatchError(
            "Hexadecimal string must contain only hex digits up to '>'", position=stop
        )
    text = data[start:stop].decode("ascii")
    return HexadecimalString(text), expect_separator(data, stop + 1, end)


def parse_comment(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    """Parse ``%`` up to the end of the line; the line terminator is not part of it."""
    end = resolve_end(data, end)
    start = expect_tag(data, pos, end, b"%")
    stop = take_till_eol(data, start, end)
    text = decode_text(data, start, stop)
    return Comment(text), expect_separator(data, stop, end)


# -- References --------------------------------------------------------------


def _parse_object_number(
    data: bytes, pos: int, end: int, keyword: bytes
) -> Tuple[int, int, int]:
    object_id, cursor = parse_unsigned(data, pos, end)
    cursor = expect_tag(data, cursor, end, b" ")
    generation, cursor = parse_unsigned(data, cursor, end)
    cursor = expect_tag(data, cursor, end, b" " + keyword)
    return object_id, generation, cursor


def parse_indirect_reference(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Parse ``<id> <generation> R``."""
    end = resolve_end(data, end)
    object_id, generation, cursor = _parse_object_number(data, pos, end, b"R")
    return IndirectReference(object_id, generation), expect_separator(data, cursor, end)


def parse_indirect_object(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Parse ``<id> <generation> obj <value> endobj``.

    The value is normally a dictionary (with or without a stream); any other
    direct object is accepted as well.
    """
    end = resolve_end(data, end)
    object_id, generation, cursor = _parse_object_number(data, pos, end, b"obj")
    cursor = expect_separator(data, cursor, end)
    try:
        value, cursor = parse_dictionary(data, cursor, end)
    except PDFParseError:
        value, cursor = parse_object(data, cursor, end)
    cursor = expect_tag(data, cursor, end, b"endobj")
    cursor = expect_separator(data, cursor, end)
    return IndirectObject(object_id, generation, value), cursor


# -- Composites --------------------------------------------------------------


def parse_array(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    """Parse ``[...]``, one element at a time from the bracketed span."""
    end = resolve_end(data, end)
    inner_start, inner_stop, after = take_delimited(data, pos, end, b"[", b"]")

    items: List[PDFObject] = []
    cursor = skip_whitespace(data, inner_start, inner_stop)
    while cursor < inner_stop:
        item, cursor = parse_object(data, cursor, inner_stop)
        items.append(item)
        cursor = skip_whitespace(data, cursor, inner_stop)

    return Array(tuple(items)), skip_whitespace(data, after, end)


def parse_dictionary(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Parse ``<< /Key value ... >>`` and an optional trailing stream.

    ``<<`` and ``>>`` are matched as two nested ``<``/``>`` spans. When a key
    repeats, the last value wins.
    """
    end = resolve_end(data, end)
    outer_start, outer_stop, after = take_delimited(data, pos, end, b"<", b">")
    inner_start, inner_stop, inner_after = take_delimited(
        data, outer_start, outer_stop, b"<", b">"
    )
    if inner_after != outer_stop:
        raise GrammarMismatchError(
            "Dictionary is not enclosed in '<<' and '>>'", position=inner_after
        )

    entries: Dict[str, PDFObject] = {}
    cursor = skip_whitespace(data, inner_start, inner_stop)
    while cursor < inner_stop:
        key, cursor = parse_name(data, cursor, inner_stop)
        value, cursor = parse_object(data, cursor, inner_stop)
        entries[key.name] = value
        cursor = skip_whitespace(data, cursor, inner_stop)

    cursor = skip_whitespace(data, after, end)
    stream: Optional[bytes] = None
    if data.startswith(b"stream", cursor, end):
        stream, cursor = parse_stream(data, cursor, end)
    return Dictionary(entries, stream), cursor


def parse_stream(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[bytes, int]:
    """Parse ``stream`` EOL ... ``endstream`` and return the raw payload.

    The payload is every byte between the line terminator after ``stream``
    and the keyword ``endstream``; nothing is decoded.
    """
    end = resolve_end(data, end)
    start = expect_tag(data, pos, end, b"stream")
    start = expect_eol(data, start, end)
    stop = data.find(b"endstream", start, end)
    if stop < 0:
        raise GrammarMismatchError("Stream is missing 'endstream'", position=pos)
    cursor = expect_separator(data, stop + len(b"endstream"), end)
    return data[start:stop], cursor


# -- Dispatch ----------------------------------------------------------------


def parse_object(data: bytes, pos: int = 0, end: Optional[int] = None) -> ParseResult:
    """Parse the next object of any type."""
    end = resolve_end(data, end)
    last_error: Optional[PDFParseError] = None
    for production in _PRODUCTIONS:
        try:
            return production(data, pos, end)
        except PDFParseError as exc:
            last_error = exc
    raise InvalidObjectError(
        f"No object matches {data[pos:min(end, pos + 16)]!r}", position=pos
    ) from last_error


def parse_body_object(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> ParseResult:
    """Skip leading comments, then parse one indirect object."""
    end = resolve_end(data, end)
    cursor = skip_comments(data, pos, end)
    return parse_indirect_object(data, cursor, end)


_PRODUCTIONS = (
    parse_indirect_object,
    parse_comment,
    parse_dictionary,
    parse_array,
    parse_indirect_reference,
    parse_name,
    parse_literal_string,
    parse_hexadecimal_string,
    parse_numeric,
    parse_boolean,
    parse_null,
)
