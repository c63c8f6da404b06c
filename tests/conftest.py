from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


CATALOG = b"<< /Type /Catalog /Pages 2 0 R >>"
PAGES = b"<< /Type /Pages /Kids [] /Count 0 >>"


def build_pdf(
    bodies: Sequence[bytes],
    version: bytes = b"1.7",
    trailer_entries: bytes = b"",
) -> bytes:
    """Assemble a classic PDF file with correct xref offsets.

    ``bodies[i]`` becomes object ``i + 1`` generation 0; object 1 is used as
    ``/Root``.
    """
    out = bytearray(b"%PDF-" + version + b"\n")
    offsets = []
    for number, body in enumerate(bodies, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    startxref = len(out)
    out += b"xref\n0 %d\n" % (len(bodies) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset

    out += b"trailer\n<< /Size %d /Root 1 0 R" % (len(bodies) + 1)
    if trailer_entries:
        out += b" " + trailer_entries
    out += b" >>\nstartxref\n%d\n%%%%EOF\n" % startxref
    return bytes(out)


@pytest.fixture()
def minimal_pdf_bytes() -> bytes:
    return build_pdf([CATALOG])


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, bodies: Sequence[bytes] = (CATALOG, PAGES), **kwargs) -> Path:
        path = tmp_path / filename
        path.write_bytes(build_pdf(bodies, **kwargs))
        return path

    return _create


@pytest.fixture()
def minimal_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("minimal.pdf")


@pytest.fixture()
def stream_pdf(pdf_factory: Callable[..., Path]) -> Path:
    content = b"BT /F1 12 Tf (Hi) Tj ET\n"
    stream_object = (
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"endstream"
    )
    return pdf_factory(
        "stream.pdf",
        bodies=(CATALOG, PAGES, stream_object),
        trailer_entries=b"/Info 3 0 R",
    )


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdf-parser-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path
