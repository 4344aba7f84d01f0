"""
Pure lookups over store listings.

Both functions take explicit inputs and perform no I/O.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from .storage.base import BucketRef, ObjectSummary

__all__ = ["find_bucket_by_name", "select_latest", "EPOCH_SENTINEL"]

# Earlier than any timestamp a store can report.
EPOCH_SENTINEL = datetime.min.replace(tzinfo=timezone.utc)


def find_bucket_by_name(buckets: Iterable[BucketRef], name: str) -> Optional[BucketRef]:
    """Return the first bucket whose name equals ``name`` exactly, else None."""
    for bucket in buckets:
        if bucket.name == name:
            return bucket
    return None


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def select_latest(summaries: Iterable[ObjectSummary]) -> Optional[ObjectSummary]:
    """
    Pick the object with the greatest last-modified time.

    The listing is walked once. A summary replaces the current candidate only
    when it is strictly later, so among equal maxima the first one in listing
    order wins. Naive timestamps are read as UTC.

    Args:
        summaries: Object summaries in listing order

    Returns:
        The latest summary, or None for an empty listing

    Examples:
        >>> select_latest([]) is None
        True
    """
    latest = EPOCH_SENTINEL
    result = None
    for summary in summaries:
        current = _aware(summary.last_modified)
        if current > latest:
            latest = current
            result = summary
    return result
