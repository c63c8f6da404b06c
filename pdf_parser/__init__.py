"""
PDF Parser - Parse the object syntax of PDF files into an in-memory tree.

This library reads a complete PDF file held in memory and recovers its
structure as written: the version header, the indirect objects of the body,
the cross-reference tables and the trailer. References are left unresolved
and stream payloads are kept as raw bytes.

Quick Start:
    >>> from pdf_parser import parse_document
    >>> document = parse_document(open('input.pdf', 'rb').read())
    >>> document.header.version
    '1.7'

Main Functions:
    - parse_document: Parse a whole file
    - parse_object: Parse a single object from a byte buffer
    - parse_xref_table: Parse one cross-reference table
    - parse_trailer: Parse the trailer and startxref offset

Data Classes:
    - Document, Header, Trailer
    - CrossReferenceTable, CrossReferenceEntry
    - Null, Boolean, Integer, Real, LiteralString, HexadecimalString, Name,
      Array, Dictionary, Comment, IndirectReference, IndirectObject

Exceptions:
    - PDFParseError: Base exception, carries the failing byte offset
    - MalformedUtf8Error, MalformedNumberError, InvalidFixedWidthFieldError,
      UnbalancedDelimiterError, InvalidCrossReferenceTableError,
      InvalidObjectError, GrammarMismatchError

For CLI usage, use the 'pdf-parser' command after installation.
"""

__version__ = "0.1.0"
__author__ = "PDF Parser CLI Contributors"
__license__ = "MIT"

# Parsers
from pdf_parser.document import parse_document, parse_header, parse_trailer
from pdf_parser.objects import parse_object
from pdf_parser.xref import parse_xref_section, parse_xref_table

# Data types
from pdf_parser.types import (
    Array,
    Boolean,
    Comment,
    CrossReferenceEntry,
    CrossReferenceTable,
    Dictionary,
    Document,
    DocumentInfo,
    Header,
    HexadecimalString,
    IndirectObject,
    IndirectReference,
    Integer,
    LiteralString,
    Name,
    Null,
    PDFObject,
    Real,
    Trailer,
)

# Exceptions
from pdf_parser.exceptions import (
    PDFParseError,
    MalformedUtf8Error,
    MalformedNumberError,
    InvalidFixedWidthFieldError,
    UnbalancedDelimiterError,
    InvalidCrossReferenceTableError,
    InvalidObjectError,
    GrammarMismatchError,
)

# Utility functions
from pdf_parser.utils import format_object, get_document_info, load_document

__all__ = [
    # Parsers
    "parse_document",
    "parse_header",
    "parse_trailer",
    "parse_object",
    "parse_xref_table",
    "parse_xref_section",
    # Data types
    "Array",
    "Boolean",
    "Comment",
    "CrossReferenceEntry",
    "CrossReferenceTable",
    "Dictionary",
    "Document",
    "DocumentInfo",
    "Header",
    "HexadecimalString",
    "IndirectObject",
    "IndirectReference",
    "Integer",
    "LiteralString",
    "Name",
    "Null",
    "PDFObject",
    "Real",
    "Trailer",
    # Exceptions
    "PDFParseError",
    "MalformedUtf8Error",
    "MalformedNumberError",
    "InvalidFixedWidthFieldError",
    "UnbalancedDelimiterError",
    "InvalidCrossReferenceTableError",
    "InvalidObjectError",
    "GrammarMismatchError",
    # Utility functions
    "format_object",
    "get_document_info",
    "load_document",
    # Version info
    "__version__",
]
