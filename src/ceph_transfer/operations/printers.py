"""
Human-readable output formatting.

Centralizes CLI output so commands stay thin.
"""
from __future__ import annotations

import typer
from typing import List, Optional

from ..storage.base import ObjectSummary


def print_upload_summary(bucket: str, key: str) -> None:
    typer.echo(f"Uploaded {key} to bucket {bucket}")


def print_download_summary(uri: str) -> None:
    typer.echo(f"Downloaded latest object to {uri}")


def print_listing(bucket: str, summaries: List[ObjectSummary],
                  latest: Optional[ObjectSummary]) -> None:
    """
    Print one line per object, marking the latest with '*'.

    Args:
        bucket: Bucket name for the header
        summaries: Objects in listing order
        latest: Selected latest object, if any
    """
    typer.echo(f"Bucket: {bucket} ({len(summaries)} objects)")
    for summary in summaries:
        marker = "*" if summary is latest else " "
        typer.echo(f"{marker} {summary.last_modified.isoformat()}  "
                   f"{_format_bytes(summary.size):>10}  {summary.key}")


def _format_bytes(size: int) -> str:
    """Format byte size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != 'B' else f"{size} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
