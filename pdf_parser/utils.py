"""Utility helpers for loading, summarising and rendering parsed PDFs."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Tuple, Union

from .document import parse_document
from .types import (
    Array,
    Boolean,
    Comment,
    Dictionary,
    Document,
    DocumentInfo,
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

PathLike = Union[str, os.PathLike]

LOGGER = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def to_path(path: PathLike) -> Path:
    """Normalize an input path to :class:`Path`."""
    return Path(path).expanduser().resolve()


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.info("%s completed in %.2fs", message, elapsed)


def load_document(pdf_path: PathLike) -> Tuple[Document, int]:
    """Read ``pdf_path`` and parse it.

    Returns the parsed document and the file size in bytes. I/O errors and
    :class:`~pdf_parser.exceptions.PDFParseError` propagate to the caller.
    """
    path = to_path(pdf_path)
    data = path.read_bytes()
    with time_block(LOGGER, f"Parsing {path.name}"):
        document = parse_document(data)
    return document, len(data)


def summarize(document: Document, file_size: int = 0) -> DocumentInfo:
    """Build a :class:`DocumentInfo` from a parsed document."""
    trailer = document.trailer
    stream_count = sum(
        1
        for obj in document.iter_indirect_objects()
        if isinstance(obj.dictionary, Dictionary) and obj.dictionary.has_stream
    )
    return DocumentInfo(
        version=document.header.version,
        object_count=document.object_count,
        xref_table_count=len(document.xref_tables),
        xref_entry_count=document.xref_entry_count,
        startxref=trailer.startxref,
        file_size=file_size,
        size=trailer.size,
        root=trailer.root,
        info=trailer.info,
        stream_count=stream_count,
    )


def get_document_info(pdf_path: PathLike) -> DocumentInfo:
    """Return summary information about the PDF at ``pdf_path``."""
    document, file_size = load_document(pdf_path)
    return summarize(document, file_size)


def _format_real(value: float) -> str:
    # PDF has no exponent notation; expand 1e-05 to 0.00001
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def format_object(obj: PDFObject) -> str:
    """Render a parsed object back in PDF-like syntax.

    Stream payloads are not printed; a ``stream(<n> bytes)`` marker follows
    the dictionary instead.
    """
    if isinstance(obj, Null):
        return "null"
    if isinstance(obj, Boolean):
        return "true" if obj.value else "false"
    if isinstance(obj, Integer):
        return repr(obj.value)
    if isinstance(obj, Real):
        return _format_real(obj.value)
    if isinstance(obj, LiteralString):
        return f"({obj.text})"
    if isinstance(obj, HexadecimalString):
        return f"<{obj.text}>"
    if isinstance(obj, Name):
        return str(obj)
    if isinstance(obj, Comment):
        return f"%{obj.text}"
    if isinstance(obj, IndirectReference):
        return str(obj)
    if isinstance(obj, Array):
        return "[" + " ".join(format_object(item) for item in obj) + "]"
    if isinstance(obj, Dictionary):
        parts = [f"/{key} {format_object(value)}" for key, value in obj.items()]
        rendered = "<< " + " ".join(parts) + " >>" if parts else "<< >>"
        if obj.has_stream:
            rendered += f" stream({len(obj.stream)} bytes)"
        return rendered
    if isinstance(obj, IndirectObject):
        return f"{obj.id} {obj.generation} obj {format_object(obj.dictionary)} endobj"
    raise TypeError(f"Not a PDF object: {obj!r}")


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
