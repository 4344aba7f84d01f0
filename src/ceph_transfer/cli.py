"""
ceph-transfer CLI

Implements 3 CLI verbs over the Operations facade:
- upload: Upload a local file to the root bucket
- latest: Download the most recently modified object
- ls: List the root bucket, marking the latest object

Connection settings come from CEPH_* environment variables.
"""
from __future__ import annotations

import logging
import typer
from pathlib import Path
from typing import Optional

from .cli_context import CLIContext
from .operations import run_and_exit
from .operations.printers import print_download_summary, print_listing, print_upload_summary

app = typer.Typer(name="ceph-transfer", help="Upload to and fetch the latest object from a Ceph RGW bucket")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _context() -> CLIContext:
    return CLIContext.from_env()


@app.command()
def upload(
    file: Path = typer.Argument(..., help="Local file to upload; its name becomes the object key"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging")
) -> None:
    """Upload a local file to the root bucket."""
    _configure_logging(verbose)

    def _upload():
        ctx = _context()
        result = ctx.operations.write_file(file)
        if result:
            print_upload_summary(ctx.settings.root_bucket, result.value)
        return result

    run_and_exit(_upload)


@app.command()
def latest(
    dest: Optional[Path] = typer.Option(None, "--dest", help="Download into this directory instead of a new temp directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging")
) -> None:
    """Download the most recently modified object of the root bucket."""
    _configure_logging(verbose)

    def _latest():
        result = _context().operations.read_last_file(dest)
        if result:
            print_download_summary(result.value)
        return result

    run_and_exit(_latest)


@app.command("ls")
def list_objects(
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging")
) -> None:
    """List objects of the root bucket, marking the latest with '*'."""
    _configure_logging(verbose)

    def _list():
        ctx = _context()
        result = ctx.operations.list_objects()
        if result:
            summaries, newest = result.value
            print_listing(ctx.settings.root_bucket, summaries, newest)
        return result

    run_and_exit(_list)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
