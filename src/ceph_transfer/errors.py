"""
Ceph transfer error classes.

Provides a clear taxonomy of errors that can occur while talking to the store.
SDK exceptions are mapped onto these so callers can branch on the cause
without parsing log output.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure category carried by every CephError and by Err results."""
    CONNECTION = "connection"
    LISTING = "listing"
    NOT_FOUND = "not_found"
    TRANSFER = "transfer"
    INTEGRITY = "integrity"


class CephError(Exception):
    """Base class for all store errors."""
    kind: ErrorKind = ErrorKind.CONNECTION


class CephConnectionError(CephError):
    """
    Client construction or the initial bucket listing failed.

    Raised when:
    - credentials or endpoint are rejected while building the client
    - the endpoint cannot be reached
    """
    kind = ErrorKind.CONNECTION


class CephListingError(CephError):
    """Listing objects of the resolved bucket failed."""
    kind = ErrorKind.LISTING


class CephNotFound(CephError):
    """A required bucket or object does not exist."""
    kind = ErrorKind.NOT_FOUND


class BucketNotFoundError(CephNotFound):
    """The configured root bucket is not visible to the credentials."""

    def __init__(self, bucket: str):
        super().__init__(f"Bucket not found: {bucket}")
        self.bucket = bucket


class NoObjectsFoundError(CephNotFound):
    """The resolved bucket is empty, so there is no latest object."""

    def __init__(self, bucket: str):
        super().__init__(f"No objects in bucket: {bucket}")
        self.bucket = bucket


class CephTransferError(CephError):
    """
    Upload or download failed.

    Raised when:
    - put_object/get_object raise (network, permission, capacity)
    - the local source file is missing or the destination cannot be created
    """
    kind = ErrorKind.TRANSFER


class CephIntegrityError(CephError):
    """
    Downloaded byte length differs from the length the store reported.

    The partially written file is left in place.
    """
    kind = ErrorKind.INTEGRITY

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


__all__ = [
    "ErrorKind",
    "CephError",
    "CephConnectionError",
    "CephListingError",
    "CephNotFound",
    "BucketNotFoundError",
    "NoObjectsFoundError",
    "CephTransferError",
    "CephIntegrityError",
]
