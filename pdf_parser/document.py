"""Header, trailer and whole-document parsing.

:func:`parse_document` runs the phases of a classic PDF file in a fixed
order: header, body objects, cross-reference sections, trailer. There is no
backtracking between phases. The body phase ends quietly at the first bytes
that are not an indirect object; everything after that point must be
cross-reference sections followed by exactly one trailer.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from .exceptions import GrammarMismatchError, PDFParseError
from .objects import parse_body_object, parse_dictionary
from .scanner import (
    expect_separator,
    expect_tag,
    parse_unsigned,
    resolve_end,
    skip_comments,
)
from .types import CrossReferenceTable, Document, Header, PDFObject, Trailer
from .xref import parse_xref_section

__all__ = ["parse_header", "parse_trailer", "parse_document"]

LOGGER = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def parse_header(data: bytes, pos: int = 0, end: Optional[int] = None) -> Tuple[Header, int]:
    """Parse ``%PDF-<major>.<minor>``."""
    end = resolve_end(data, end)
    cursor = expect_tag(data, pos, end, b"%PDF-")
    major, cursor = parse_unsigned(data, cursor, end)
    cursor = expect_tag(data, cursor, end, b".")
    minor, cursor = parse_unsigned(data, cursor, end)
    return Header(major=major, minor=minor), expect_separator(data, cursor, end)


def parse_trailer(data: bytes, pos: int = 0, end: Optional[int] = None) -> Tuple[Trailer, int]:
    """Parse ``trailer << ... >> startxref <offset> %%EOF``.

    ``%%EOF`` must be the last thing in the region; only whitespace may
    follow it.
    """
    end = resolve_end(data, end)
    cursor = expect_tag(data, pos, end, b"trailer")
    cursor = expect_separator(data, cursor, end)
    dictionary, cursor = parse_dictionary(data, cursor, end)
    cursor = expect_tag(data, cursor, end, b"startxref")
    cursor = expect_separator(data, cursor, end)
    startxref, cursor = parse_unsigned(data, cursor, end, limit=None)
    cursor = expect_separator(data, cursor, end)
    cursor = expect_tag(data, cursor, end, b"%%EOF")
    cursor = expect_separator(data, cursor, end)
    if cursor != end:
        raise GrammarMismatchError(
            f"Unexpected data after %%EOF: {data[cursor:min(end, cursor + 16)]!r}",
            position=cursor,
        )
    return Trailer(dictionary=dictionary, startxref=startxref), cursor


def _parse_body(data: bytes, pos: int, end: int) -> Tuple[List[PDFObject], int]:
    body: List[PDFObject] = []
    while True:
        try:
            obj, pos = parse_body_object(data, pos, end)
        except PDFParseError as exc:
            LOGGER.debug("Body ends at byte %d: %s", pos, exc)
            return body, pos
        body.append(obj)


def _parse_xref_sections(
    data: bytes, pos: int, end: int
) -> Tuple[List[CrossReferenceTable], int]:
    tables: List[CrossReferenceTable] = []
    while True:
        cursor = skip_comments(data, pos, end)
        if not data.startswith(b"xref", cursor, end):
            return tables, pos
        section, pos = parse_xref_section(data, cursor, end)
        tables.extend(section)


def parse_document(data: BytesLike) -> Document:
    """Parse a complete PDF file held in memory."""
    if not isinstance(data, bytes):
        data = bytes(data)
    end = len(data)

    header, pos = parse_header(data, 0, end)
    LOGGER.debug("Parsed header, PDF version %s", header.version)

    body, pos = _parse_body(data, pos, end)
    LOGGER.debug("Parsed %d body objects", len(body))

    tables, pos = _parse_xref_sections(data, pos, end)
    LOGGER.debug("Parsed %d cross-reference subsections", len(tables))

    trailer, _ = parse_trailer(data, pos, end)
    LOGGER.debug("Parsed trailer, startxref %d", trailer.startxref)

    return Document(
        header=header,
        body=tuple(body),
        xref_tables=tuple(tables),
        trailer=trailer,
    )
