from __future__ import annotations

import pytest
from pypdf import PdfReader

from conftest import CATALOG, PAGES, build_pdf
from pdf_parser import parse_document
from pdf_parser.document import parse_header, parse_trailer
from pdf_parser.exceptions import (
    GrammarMismatchError,
    InvalidCrossReferenceTableError,
    PDFParseError,
)
from pdf_parser.types import Dictionary, IndirectObject, IndirectReference, Name


def test_header():
    header, pos = parse_header(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n")
    assert (header.major, header.minor) == (1, 7)
    assert header.version == "1.7"
    assert pos == 9

    with pytest.raises(GrammarMismatchError):
        parse_header(b"%PDF 1.7\n")
    with pytest.raises(PDFParseError):
        parse_header(b"%PDF-1\n")


def test_trailer():
    data = b"trailer\n<< /Size 6 /Root 1 0 R /Prev 408 >>\nstartxref\n1234\n%%EOF\n"
    trailer, pos = parse_trailer(data)
    assert pos == len(data)
    assert trailer.startxref == 1234
    assert trailer.size == 6
    assert trailer.prev == 408
    assert trailer.root == IndirectReference(1, 0)
    assert trailer.info is None
    assert trailer.encrypt is None
    assert trailer.id is None


def test_trailer_rejects_data_after_eof_marker():
    data = b"trailer\n<< /Size 1 >>\nstartxref\n9\n%%EOF\ngarbage"
    with pytest.raises(GrammarMismatchError) as excinfo:
        parse_trailer(data)
    assert excinfo.value.position == data.index(b"garbage")


def test_trailer_without_final_newline():
    trailer, _ = parse_trailer(b"trailer << /Size 1 >> startxref 9 %%EOF")
    assert trailer.startxref == 9


def test_minimal_document(minimal_pdf_bytes):
    document = parse_document(minimal_pdf_bytes)

    assert document.header.version == "1.7"
    assert len(document.body) == 1
    assert len(document.xref_tables) == 1
    assert document.xref_tables[0].count == 2
    assert document.trailer.startxref == minimal_pdf_bytes.index(b"xref")

    catalog = document.body[0]
    assert isinstance(catalog, IndirectObject)
    assert catalog.dictionary["Type"] == Name("Catalog")
    assert document.trailer.root == catalog.reference


def test_xref_offsets_point_at_objects():
    data = build_pdf([CATALOG, PAGES])
    document = parse_document(data)
    for object_id, entry in document.xref_tables[0].iter_entries():
        if entry.free:
            continue
        assert data[entry.offset:].startswith(b"%d 0 obj" % object_id)


def test_document_accessors():
    document = parse_document(build_pdf([CATALOG, PAGES]))
    assert document.object_count == 2
    assert document.xref_entry_count == 3
    assert document.get_object(2).dictionary["Type"] == Name("Pages")
    assert document.get_object(2, generation=1) is None
    assert document.get_object(9) is None
    assert [obj.id for obj in document.iter_indirect_objects()] == [1, 2]


def test_document_accepts_bytearray(minimal_pdf_bytes):
    document = parse_document(bytearray(minimal_pdf_bytes))
    assert document.header.version == "1.7"


def test_document_without_xref_table():
    data = (
        b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"
        b"trailer\n<< /Root 1 0 R >>\nstartxref\n0\n%%EOF\n"
    )
    document = parse_document(data)
    assert document.xref_tables == ()
    assert document.object_count == 1


def test_document_rejects_trailing_data(minimal_pdf_bytes):
    with pytest.raises(GrammarMismatchError):
        parse_document(minimal_pdf_bytes + b"extra")


def test_document_rejects_malformed_xref_table(minimal_pdf_bytes):
    broken = minimal_pdf_bytes.replace(b"0 2\n", b"0 3\n", 1)
    with pytest.raises(InvalidCrossReferenceTableError):
        parse_document(broken)


def test_document_without_header():
    with pytest.raises(GrammarMismatchError):
        parse_document(b"1 0 obj\n<< >>\nendobj\n")


def test_document_with_stream_object(stream_pdf):
    document = parse_document(stream_pdf.read_bytes())
    content = document.get_object(3).dictionary
    assert isinstance(content, Dictionary)
    assert content.stream == b"BT /F1 12 Tf (Hi) Tj ET\n"
    assert document.trailer.info == IndirectReference(3, 0)


def test_document_written_by_pypdf(sample_pdf):
    document = parse_document(sample_pdf.read_bytes())
    reader = PdfReader(str(sample_pdf))

    root = reader.trailer.raw_get("/Root")
    assert document.trailer.root == IndirectReference(root.idnum, root.generation)
    assert document.trailer.size == reader.trailer["/Size"]
    assert document.header.version == reader.pdf_header[len("%PDF-"):]

    ids = {obj.id for obj in document.iter_indirect_objects()}
    assert root.idnum in ids
    assert document.xref_entry_count == document.trailer.size

    catalog = document.get_object(root.idnum, root.generation)
    assert catalog.dictionary["Type"] == Name("Catalog")


def test_document_with_oversized_object_id():
    data = build_pdf([CATALOG]).replace(b"1 0 obj", b"1" * 5000 + b" 0 obj", 1)
    with pytest.raises(PDFParseError):
        parse_document(data)
