"""
Command-line interface for PDF parser.
"""

import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdf_parser import __version__
from pdf_parser.exceptions import PDFParseError
from pdf_parser.types import Dictionary
from pdf_parser.utils import (
    configure_logging,
    format_file_size,
    format_object,
    load_document,
    summarize,
)

console = Console()


def _fail(error):
    """Print an error and exit with status 1."""
    console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(error))}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF Parser CLI - Inspect the object structure of PDF files.
    """
    configure_logging(verbose)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display a summary of a PDF file.

    Example:

        pdf-parser info input.pdf
    """
    try:
        document, file_size = load_document(input_pdf)
    except (PDFParseError, OSError) as e:
        _fail(e)

    info = summarize(document, file_size)

    table = Table(title=f"PDF Structure: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("File Path", os.path.abspath(input_pdf))
    table.add_row("File Size", format_file_size(info.file_size))
    table.add_row("PDF Version", info.version)
    table.add_row("Objects", str(info.object_count))
    table.add_row("Streams", str(info.stream_count))
    table.add_row("Xref Tables", str(info.xref_table_count))
    table.add_row("Xref Entries", str(info.xref_entry_count))
    if info.size is not None:
        table.add_row("Trailer Size", str(info.size))
    if info.root is not None:
        table.add_row("Root", str(info.root))
    if info.info is not None:
        table.add_row("Info", str(info.info))
    table.add_row("Startxref", str(info.startxref))

    console.print()
    console.print(table)
    console.print()


@cli.command(name="objects")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--limit', '-l',
    default=None,
    help='Show at most this many objects',
    type=click.IntRange(min=1)
)
def list_objects(input_pdf, limit):
    """
    List the indirect objects in the body of a PDF file.

    Examples:

        pdf-parser objects input.pdf

        pdf-parser objects input.pdf --limit 10
    """
    try:
        document, _ = load_document(input_pdf)
    except (PDFParseError, OSError) as e:
        _fail(e)

    objects = list(document.iter_indirect_objects())
    shown = objects[:limit] if limit else objects

    table = Table(title=f"Objects ({len(objects)})")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Gen", style="cyan", justify="right")
    table.add_column("Type", style="green")
    table.add_column("Keys", style="white")
    table.add_column("Stream", style="magenta", justify="right")

    for obj in shown:
        value = obj.dictionary
        if isinstance(value, Dictionary):
            type_name = value.get("Type")
            keys = escape(" ".join(f"/{key}" for key in value.keys()))
            stream = format_file_size(len(value.stream)) if value.has_stream else ""
            table.add_row(
                str(obj.id),
                str(obj.generation),
                escape(format_object(type_name)) if type_name is not None else "",
                keys,
                stream,
            )
        else:
            table.add_row(
                str(obj.id),
                str(obj.generation),
                type(value).__name__,
                escape(format_object(value)),
                "",
            )

    console.print()
    console.print(table)
    if len(objects) > len(shown):
        console.print(f"  ... and {len(objects) - len(shown)} more")
    console.print()


@cli.command(name="object")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('object_id', type=int)
@click.option(
    '--generation', '-g',
    default=0,
    help='Generation number of the object',
    type=int
)
def show_object(input_pdf, object_id, generation):
    """
    Print one indirect object in PDF syntax.

    Example:

        pdf-parser object input.pdf 3
    """
    try:
        document, _ = load_document(input_pdf)
    except (PDFParseError, OSError) as e:
        _fail(e)

    obj = document.get_object(object_id, generation)
    if obj is None:
        _fail(f"Object {object_id} {generation} not found in the document body")

    console.print(format_object(obj), markup=False, highlight=False, soft_wrap=True)


@cli.command(name="xref")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--free/--in-use',
    'free',
    default=None,
    help='Show only free or only in-use entries'
)
def show_xref(input_pdf, free):
    """
    Display the cross-reference tables of a PDF file.

    Examples:

        pdf-parser xref input.pdf

        pdf-parser xref input.pdf --in-use
    """
    try:
        document, _ = load_document(input_pdf)
    except (PDFParseError, OSError) as e:
        _fail(e)

    for table_index, xref_table in enumerate(document.xref_tables, 1):
        table = Table(
            title=f"Xref Table {table_index}: objects {xref_table.start_id}-"
                  f"{xref_table.start_id + xref_table.count - 1}"
        )
        table.add_column("Object", style="cyan", justify="right")
        table.add_column("Offset", style="green", justify="right")
        table.add_column("Gen", style="green", justify="right")
        table.add_column("Status", style="white")

        for object_id, entry in xref_table.iter_entries():
            if free is not None and entry.free != free:
                continue
            table.add_row(
                str(object_id),
                str(entry.offset),
                str(entry.generation),
                "free" if entry.free else "in use",
            )

        console.print()
        console.print(table)

    if not document.xref_tables:
        console.print("\n[bold yellow]⚠ No cross-reference tables found[/bold yellow]")
    console.print()


@cli.command(name="trailer")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_trailer(input_pdf):
    """
    Print the trailer dictionary and startxref offset.

    Example:

        pdf-parser trailer input.pdf
    """
    try:
        document, _ = load_document(input_pdf)
    except (PDFParseError, OSError) as e:
        _fail(e)

    console.print(format_object(document.trailer.dictionary), markup=False, highlight=False, soft_wrap=True)
    console.print(f"startxref {document.trailer.startxref}", markup=False, highlight=False, soft_wrap=True)


if __name__ == '__main__':
    cli()
