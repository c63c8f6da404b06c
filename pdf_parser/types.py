"""
Type definitions and dataclasses for PDF Parser.

The object model is a closed set of frozen dataclasses joined in the
:data:`PDFObject` union. Parsers build these values once; nothing mutates
them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union


# -- Object variants ---------------------------------------------------------


@dataclass(frozen=True)
class Null:
    """The ``null`` object."""

    def __repr__(self) -> str:
        return "Null()"


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Integer:
    """32-bit signed integer."""

    value: int


@dataclass(frozen=True)
class Real:
    value: float


@dataclass(frozen=True)
class LiteralString:
    """Text between balanced parentheses. Escape sequences are kept verbatim."""

    text: str


@dataclass(frozen=True)
class HexadecimalString:
    """Hex digits between ``<`` and ``>``, undecoded."""

    text: str

    def to_bytes(self) -> bytes:
        """Decode the digits, padding an odd trailing digit with ``0``."""
        digits = self.text if len(self.text) % 2 == 0 else self.text + "0"
        return bytes.fromhex(digits)


@dataclass(frozen=True)
class Name:
    """A name object, stored without its leading ``/``."""

    name: str

    def __str__(self) -> str:
        return f"/{self.name}"


@dataclass(frozen=True)
class Comment:
    """A ``%`` comment, stored without the ``%`` and the line terminator."""

    text: str


@dataclass(frozen=True)
class IndirectReference:
    """An unresolved ``<id> <generation> R`` reference."""

    id: int
    generation: int

    def __str__(self) -> str:
        return f"{self.id} {self.generation} R"


@dataclass(frozen=True)
class Array:
    items: Tuple["PDFObject", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["PDFObject"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "PDFObject":
        return self.items[index]


@dataclass(frozen=True)
class Dictionary:
    """
    A dictionary object and its optional stream payload.

    Attributes:
        entries: Values keyed by name (without ``/``). When a key appears more
            than once in the source, the last occurrence wins.
        stream: Raw bytes between ``stream`` and ``endstream``; ``None`` when
            the dictionary carries no stream, ``b""`` for an empty one.

    Entries are held in a plain dict, so dictionaries are not hashable.
    """

    entries: Dict[str, "PDFObject"] = field(default_factory=dict)
    stream: Optional[bytes] = None

    __hash__ = None

    @property
    def has_stream(self) -> bool:
        return self.stream is not None

    def get(self, key: str, default: Optional["PDFObject"] = None) -> Optional["PDFObject"]:
        return self.entries.get(key, default)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def __getitem__(self, key: str) -> "PDFObject":
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


@dataclass(frozen=True)
class IndirectObject:
    """A numbered top-level definition: ``<id> <generation> obj ... endobj``."""

    id: int
    generation: int
    dictionary: "PDFObject"

    @property
    def reference(self) -> IndirectReference:
        return IndirectReference(self.id, self.generation)


PDFObject = Union[
    Null,
    Boolean,
    Integer,
    Real,
    LiteralString,
    HexadecimalString,
    Name,
    Array,
    Dictionary,
    Comment,
    IndirectReference,
    IndirectObject,
]


# -- Document structure ------------------------------------------------------


@dataclass(frozen=True)
class Header:
    """
    The ``%PDF-M.m`` header.

    Attributes:
        major: Major version, usually 1
        minor: Minor version; any digit sequence is accepted
    """

    major: int
    minor: int

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class CrossReferenceEntry:
    """
    One fixed-width cross-reference entry.

    Attributes:
        offset: Byte offset (10 digits in the source)
        generation: Generation number (5 digits in the source)
        free: True for ``f`` entries, False for ``n`` (in use)
    """

    offset: int
    generation: int
    free: bool


@dataclass(frozen=True)
class CrossReferenceTable:
    """
    One cross-reference subsection.

    Attributes:
        start_id: First object id covered by the subsection
        count: Declared number of entries
        entries: Parsed entries; always exactly ``count`` of them
    """

    start_id: int
    count: int
    entries: Tuple[CrossReferenceEntry, ...] = ()

    def object_ids(self) -> range:
        return range(self.start_id, self.start_id + self.count)

    def iter_entries(self) -> Iterator[Tuple[int, CrossReferenceEntry]]:
        """Yield ``(object_id, entry)`` pairs in table order."""
        return zip(self.object_ids(), self.entries)


@dataclass(frozen=True)
class Trailer:
    """
    The trailer dictionary and the ``startxref`` offset.

    The accessors read the standard trailer keys as written; references are
    returned unresolved.
    """

    dictionary: PDFObject
    startxref: int

    def _entry(self, key: str) -> Optional[PDFObject]:
        if isinstance(self.dictionary, Dictionary):
            return self.dictionary.get(key)
        return None

    def _reference(self, key: str) -> Optional[IndirectReference]:
        value = self._entry(key)
        return value if isinstance(value, IndirectReference) else None

    @property
    def size(self) -> Optional[int]:
        value = self._entry("Size")
        return value.value if isinstance(value, Integer) else None

    @property
    def prev(self) -> Optional[int]:
        value = self._entry("Prev")
        return value.value if isinstance(value, Integer) else None

    @property
    def root(self) -> Optional[IndirectReference]:
        return self._reference("Root")

    @property
    def info(self) -> Optional[IndirectReference]:
        return self._reference("Info")

    @property
    def encrypt(self) -> Optional[IndirectReference]:
        return self._reference("Encrypt")

    @property
    def id(self) -> Optional[Array]:
        value = self._entry("ID")
        return value if isinstance(value, Array) else None


@dataclass(frozen=True)
class Document:
    """
    A parsed PDF file.

    Attributes:
        header: Version header
        body: Indirect objects in file order
        xref_tables: Cross-reference subsections in file order
        trailer: Trailer dictionary and startxref offset
    """

    header: Header
    body: Tuple[PDFObject, ...]
    xref_tables: Tuple[CrossReferenceTable, ...]
    trailer: Trailer

    @property
    def object_count(self) -> int:
        return len(self.body)

    @property
    def xref_entry_count(self) -> int:
        return sum(len(table.entries) for table in self.xref_tables)

    def iter_indirect_objects(self) -> Iterator[IndirectObject]:
        for obj in self.body:
            if isinstance(obj, IndirectObject):
                yield obj

    def get_object(self, object_id: int, generation: int = 0) -> Optional[IndirectObject]:
        """Return the body object with the given id and generation, if present.

        When the body defines the same object twice, the later definition is
        returned.
        """
        found = None
        for obj in self.iter_indirect_objects():
            if obj.id == object_id and obj.generation == generation:
                found = obj
        return found


@dataclass
class DocumentInfo:
    """
    Summary of a parsed document, as reported by the CLI.

    Attributes:
        version: Header version string
        object_count: Number of body objects
        xref_table_count: Number of cross-reference subsections
        xref_entry_count: Total number of cross-reference entries
        startxref: Byte offset recorded after ``startxref``
        size: Trailer ``/Size`` value
        root: Trailer ``/Root`` reference
        info: Trailer ``/Info`` reference
        file_size: Size of the parsed buffer in bytes
        stream_count: Number of body objects carrying a stream
    """
    version: str
    object_count: int
    xref_table_count: int
    xref_entry_count: int
    startxref: int
    file_size: int
    size: Optional[int] = None
    root: Optional[IndirectReference] = None
    info: Optional[IndirectReference] = None
    stream_count: int = 0
