"""
Storage interfaces for ceph-transfer.

These protocols define the boundary between the transfer flows and the S3 SDK,
enabling clean dependency injection and testing with fakes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class BucketRef:
    """Bucket handle returned by a bucket listing."""
    name: str
    creation_date: Optional[datetime] = None


@dataclass(frozen=True)
class ObjectSummary:
    """
    One entry of an object listing.

    Invariants:
    - key: object key exactly as stored, never normalized
    - size: byte length reported by the listing (>= 0)
    - last_modified: timezone-aware modification time
    """
    key: str
    size: int
    last_modified: datetime
    bucket_name: str


@dataclass(frozen=True)
class ObjectMetadata:
    """Metadata the store reported for a completed get."""
    key: str
    content_length: int


__all__ = ["BucketRef", "ObjectSummary", "ObjectMetadata", "StoreClient"]


@runtime_checkable
class StoreClient(Protocol):
    """Protocol for the object store operations the flows rely on."""

    def list_buckets(self) -> List[BucketRef]:
        """
        List every bucket visible to the credentials.

        Raises:
            Exception: SDK or transport errors propagate unchanged
        """
        ...

    def list_objects(self, bucket: str) -> List[ObjectSummary]:
        """
        List objects of a bucket with a single request (no pagination).

        Returns:
            Summaries in the order the store returned them; empty list for an
            empty bucket
        """
        ...

    def get_object(self, bucket: str, key: str, dest: Path) -> ObjectMetadata:
        """
        Download an object's content into a local file.

        Args:
            bucket: Bucket name
            key: Object key
            dest: Local file path; overwritten if present

        Returns:
            Metadata with the content length the store reported

        Raises:
            botocore.exceptions.IncompleteReadError: If the body ends before
                the reported length; bytes read so far stay in ``dest``
        """
        ...

    def put_object(self, bucket: str, key: str, source: Path) -> None:
        """
        Upload a local file's full content as a single object.

        Creates the object or overwrites an existing one with the same key.
        """
        ...
