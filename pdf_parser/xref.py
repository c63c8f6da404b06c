"""Cross-reference table parsing.

A classic ``xref`` section holds one or more subsections, each introduced by
``<first id> <count>`` and followed by exactly ``count`` fixed-width entries::

    xref
    0 3
    0000000000 65535 f
    0000000015 00000 n
    0000000107 00000 n

Entry fields are validated by width (10-digit offset, 5-digit generation),
not merely by being digits. Offsets are recorded as written and never checked
against the file.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .exceptions import GrammarMismatchError, InvalidCrossReferenceTableError, PDFParseError
from .scanner import (
    expect_eol,
    expect_tag,
    expect_whitespace,
    parse_unsigned,
    resolve_end,
    skip_eol,
    take_till_eol,
)
from .types import CrossReferenceEntry, CrossReferenceTable

__all__ = [
    "OFFSET_WIDTH",
    "GENERATION_WIDTH",
    "parse_xref_entry",
    "parse_xref_entries",
    "parse_xref_subsection",
    "parse_xref_table",
    "parse_xref_section",
]

LOGGER = logging.getLogger(__name__)

OFFSET_WIDTH = 10
GENERATION_WIDTH = 5

_IN_USE = ord("n")
_FREE = ord("f")
_DIGITS = b"0123456789"


def parse_xref_entry(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[CrossReferenceEntry, int]:
    """Parse one ``oooooooooo ggggg n|f`` entry and the rest of its line."""
    end = resolve_end(data, end)
    offset, cursor = parse_unsigned(data, pos, end, length=OFFSET_WIDTH, limit=None)
    cursor = expect_whitespace(data, cursor, end)
    generation, cursor = parse_unsigned(data, cursor, end, length=GENERATION_WIDTH, limit=None)
    cursor = expect_whitespace(data, cursor, end)

    if cursor >= end or data[cursor] not in (_IN_USE, _FREE):
        raise GrammarMismatchError(
            "Cross-reference entry flag must be 'n' or 'f'", position=cursor
        )
    free = data[cursor] == _FREE

    cursor = take_till_eol(data, cursor + 1, end)
    cursor = skip_eol(data, cursor, end)
    return CrossReferenceEntry(offset=offset, generation=generation, free=free), cursor


def parse_xref_entries(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[Tuple[CrossReferenceEntry, ...], int]:
    """Consume well-formed entries until one fails to parse.

    Returns the entries and the position just after the last one parsed.
    """
    end = resolve_end(data, end)
    entries: List[CrossReferenceEntry] = []
    cursor = pos
    while cursor < end:
        try:
            entry, cursor = parse_xref_entry(data, cursor, end)
        except PDFParseError:
            break
        entries.append(entry)
    return tuple(entries), cursor


def parse_xref_subsection(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[CrossReferenceTable, int]:
    """Parse ``<start> <count>`` EOL followed by exactly ``count`` entries."""
    end = resolve_end(data, end)
    start_id, cursor = parse_unsigned(data, pos, end)
    cursor = expect_tag(data, cursor, end, b" ")
    count, cursor = parse_unsigned(data, cursor, end)
    while cursor < end and data[cursor] == ord(" "):
        cursor += 1
    cursor = expect_eol(data, cursor, end)

    entries, cursor = parse_xref_entries(data, cursor, end)
    if len(entries) != count:
        raise InvalidCrossReferenceTableError(
            f"Subsection starting at object {start_id} declares {count} entries "
            f"but {len(entries)} were parsed",
            position=pos,
        )

    LOGGER.debug("Parsed xref subsection %d-%d", start_id, start_id + count - 1)
    return CrossReferenceTable(start_id=start_id, count=count, entries=entries), cursor


def parse_xref_table(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[CrossReferenceTable, int]:
    """Parse ``xref`` EOL and a single subsection."""
    end = resolve_end(data, end)
    cursor = expect_tag(data, pos, end, b"xref")
    cursor = expect_eol(data, cursor, end)
    return parse_xref_subsection(data, cursor, end)


def parse_xref_section(
    data: bytes, pos: int = 0, end: Optional[int] = None
) -> Tuple[Tuple[CrossReferenceTable, ...], int]:
    """Parse ``xref`` EOL and every subsection that follows it.

    Each subsection becomes its own :class:`CrossReferenceTable`.
    """
    end = resolve_end(data, end)
    first, cursor = parse_xref_table(data, pos, end)
    tables = [first]
    while cursor < end and data[cursor] in _DIGITS:
        table, cursor = parse_xref_subsection(data, cursor, end)
        tables.append(table)
    return tuple(tables), cursor
