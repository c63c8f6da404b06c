from __future__ import annotations

import logging

import pytest

from pdf_parser import get_document_info, load_document
from pdf_parser.objects import parse_object
from pdf_parser.types import (
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
    Real,
)
from pdf_parser.utils import configure_logging, format_file_size, format_object, summarize


@pytest.mark.parametrize(
    "obj, expected",
    [
        (Null(), "null"),
        (Boolean(True), "true"),
        (Boolean(False), "false"),
        (Integer(-3), "-3"),
        (Real(0.5), "0.5"),
        (LiteralString("a(b)c"), "(a(b)c)"),
        (HexadecimalString("4F"), "<4F>"),
        (Name("Type"), "/Type"),
        (Comment(" note"), "% note"),
        (IndirectReference(3, 0), "3 0 R"),
        (Array((Integer(1), Name("A"))), "[1 /A]"),
        (Array(()), "[]"),
        (Dictionary({}), "<< >>"),
        (Dictionary({"Size": Integer(5), "Root": IndirectReference(3, 0)}), "<< /Size 5 /Root 3 0 R >>"),
        (Dictionary({"Length": Integer(3)}, b"abc"), "<< /Length 3 >> stream(3 bytes)"),
        (IndirectObject(8, 0, Dictionary({"Type": Name("Annot")})), "8 0 obj << /Type /Annot >> endobj"),
    ],
)
def test_format_object(obj, expected):
    assert format_object(obj) == expected


def test_format_object_output_parses_back():
    source = b"<< /Type /Annot /Rect [400 400 600 600] /Border [0 0 1] /NM (note) >>"
    value, _ = parse_object(source)
    assert parse_object(format_object(value).encode("utf-8"))[0] == value


def test_format_object_rejects_foreign_values():
    with pytest.raises(TypeError):
        format_object("not an object")


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0.0 B"), (512, "512.0 B"), (1536, "1.5 KB"), (5 * 1024 * 1024, "5.0 MB")],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_load_document_returns_file_size(minimal_pdf):
    document, file_size = load_document(minimal_pdf)
    assert file_size == minimal_pdf.stat().st_size
    assert document.object_count == 2


def test_load_document_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_document(tmp_path / "missing.pdf")


def test_summarize(stream_pdf):
    document, file_size = load_document(stream_pdf)
    info = summarize(document, file_size)
    assert info.version == "1.7"
    assert info.object_count == 3
    assert info.stream_count == 1
    assert info.xref_table_count == 1
    assert info.xref_entry_count == 4
    assert info.size == 4
    assert info.root == IndirectReference(1, 0)
    assert info.info == IndirectReference(3, 0)
    assert info.startxref == document.trailer.startxref
    assert info.file_size == file_size


def test_get_document_info(minimal_pdf):
    info = get_document_info(str(minimal_pdf))
    assert info.object_count == 2
    assert info.stream_count == 0
    assert info.info is None


def test_load_document_logs_timing(minimal_pdf, caplog):
    with caplog.at_level(logging.INFO, logger="pdf_parser.utils"):
        load_document(minimal_pdf)
    assert any("completed in" in record.getMessage() for record in caplog.records)


def test_configure_logging_verbose(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging(verbose=True)
    assert calls["level"] == logging.DEBUG
    configure_logging()
    assert calls["level"] == logging.WARNING


@pytest.mark.parametrize(
    "value, expected",
    [(1e-05, "0.00001"), (-1.5e-07, "-0.00000015"), (1e20, "100000000000000000000.0"), (612.0, "612.0")],
)
def test_format_real_without_exponent(value, expected):
    rendered = format_object(Real(value))
    assert rendered == expected
    assert parse_object(rendered.encode("ascii"))[0] == Real(value)


def test_summarize_counts_empty_streams(pdf_factory):
    path = pdf_factory(
        "empty-stream.pdf",
        bodies=(b"<< /Type /Catalog >>", b"<< /Length 0 >>\nstream\nendstream"),
    )
    document, file_size = load_document(path)
    assert summarize(document, file_size).stream_count == 1
    assert format_object(document.get_object(2).dictionary) == "<< /Length 0 >> stream(0 bytes)"
