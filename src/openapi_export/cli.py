"""CLI entry point for openapi-export."""

import logging
from pathlib import Path

import click

from openapi_export.capture.base import CapturedDocument
from openapi_export.capture.detect import detect_format
from openapi_export.capture.native import parse_native
from openapi_export.capture.postman import parse_postman
from openapi_export.converter.document import DocumentAggregator
from openapi_export.converter.servers import DEFAULT_SERVER_LABEL, DEFAULT_SERVER_SEPARATOR
from openapi_export.errors import CaptureFormatError
from openapi_export.writer import write_document


def _load_capture(file_path: Path, fmt: str) -> CapturedDocument:
    """Load a capture file based on format."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    if fmt == "postman":
        return parse_postman(file_path)
    return parse_native(file_path)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log conversion details.")
def main(verbose: bool):
    """OpenAPI Export: turn captured API requests into an OpenAPI 3.0 document."""
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


@main.command()
@click.argument("capture_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the OpenAPI document.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "postman", "native"]), help="Capture file format.")
@click.option("--output-format", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format (auto: by file extension).")
@click.option("--title", default=None, help="Document title (defaults to the collection name).")
@click.option("--api-version", default=None, help="info.version (defaults to the conversion timestamp).")
@click.option("--server-label", default=DEFAULT_SERVER_LABEL, show_default=True, help="Prefix of each server description.")
@click.option("--server-separator", default=DEFAULT_SERVER_SEPARATOR, show_default=True, help="Separator between request names in server descriptions.")
def convert(
    capture_path: Path,
    output: Path,
    fmt: str,
    output_format: str,
    title: str | None,
    api_version: str | None,
    server_label: str,
    server_separator: str,
):
    """Convert a capture file into an OpenAPI document."""
    click.echo(f"Reading {capture_path} (format: {fmt})...")
    try:
        captured = _load_capture(capture_path, fmt)
    except CaptureFormatError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(captured.requests)} requests.")

    aggregator = DocumentAggregator(
        title=title,
        version=api_version,
        server_label=server_label,
        server_separator=server_separator,
    )
    aggregator.convert(captured, captured.requests)
    document = aggregator.generate_output()

    for request in aggregator.skipped:
        click.echo(f"  Skipped {request.name!r}: cannot parse URL {request.url!r}")

    used_format = write_document(document, output, output_format)
    click.echo(f"Wrote {len(document['paths'])} paths to {output} ({used_format})")
