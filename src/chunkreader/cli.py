"""CLI implementation for chunkreader."""

import codecs
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import scan
from .core.model import ScanResult, OpenError, DecompressionInitError
from .core.util import result_asdict

app = typer.Typer(add_completion=False, help="Count records, lines and bytes in plain or gzip sources.")


def configure_logging(verbose: bool = False):
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )
    # Silence chatty libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_delim(delim: str) -> bytes:
    """Turn a delimiter option such as ``\\n`` or ``,`` into one byte."""
    try:
        value = codecs.decode(delim, "unicode_escape")
    except UnicodeDecodeError:
        raise typer.BadParameter(f"invalid escape in delimiter {delim!r}") from None
    if len(value) != 1 or ord(value) > 0xFF:
        raise typer.BadParameter(f"delimiter must be a single byte, got {delim!r}")
    return bytes([ord(value)])


@app.command()
def main(
    sources: list[str] = typer.Argument(None, help="Files or URLs to scan, or '-' for stdin"),
    delim: str = typer.Option("\\n", "--delim", help="Record delimiter (one byte, escapes allowed)"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log debug detail to stderr"),
):
    """Scan one or many local paths, URLs or stdin and report their size in records, lines and bytes."""
    configure_logging(verbose)
    sel_fields = set(fields.split(",")) if fields else None
    delim_byte = parse_delim(delim)

    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)

    results: list[ScanResult] = []
    for src in sources:
        try:
            res = scan(src, delim=delim_byte)
        except (OpenError, DecompressionInitError) as e:
            res = ScanResult(source=src, success=False, compressed=False,
                             records=0, lines=0, offset=0, error=str(e))
        results.append(res)

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        # choose output style
        if len(sources) == 1 and not jsonl:
            obj = result_asdict(results[0], fields=sel_fields)
            json.dump(obj, sink, indent=2)
            sink.write("\n")
        else:
            for res in results:
                obj = result_asdict(res, fields=sel_fields)
                sink.write(json.dumps(obj))
                sink.write("\n")
    finally:
        if output:
            sink.close()

    # exit code
    if any(not r.success for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
