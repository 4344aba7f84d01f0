"""
ceph-transfer core flows.

This module implements the connect-and-resolve sequence, the upload flow and
the latest-object download flow. Every function raises a ``CephError``
subclass on failure; the operations facade turns those into results.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError, IncompleteReadError

from .errors import (
    BucketNotFoundError, CephConnectionError, CephIntegrityError, CephListingError,
    CephTransferError, NoObjectsFoundError,
)
from .path_safety import build_local_path, create_temp_directory
from .selection import find_bucket_by_name, select_latest
from .settings import Settings
from .storage.base import BucketRef, ObjectSummary, StoreClient
from .storage.s3_client import connect

__all__ = [
    "ClientFactory",
    "connect_and_resolve",
    "list_objects",
    "upload",
    "download_latest",
    "log_listing",
    "log_file_content",
]

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], StoreClient]

# Errors a store call may raise, malformed SDK responses included.
_STORE_ERRORS = (BotoCoreError, ClientError, OSError, ValueError, KeyError, TypeError)


def connect_and_resolve(settings: Settings, *,
                        client_factory: ClientFactory = connect) -> Tuple[StoreClient, BucketRef]:
    """
    Connect to the store and resolve the configured root bucket.

    Args:
        settings: Connection settings
        client_factory: Builds the store client (injected by tests)

    Returns:
        Tuple of (client, bucket)

    Raises:
        CephConnectionError: If the client cannot be built or buckets cannot be listed
        BucketNotFoundError: If no bucket is named ``settings.root_bucket``
    """
    try:
        client = client_factory(settings)
    except _STORE_ERRORS as e:
        raise CephConnectionError(f"Cannot build client for {settings.endpoint}: {e}") from e

    try:
        buckets = client.list_buckets()
    except _STORE_ERRORS as e:
        raise CephConnectionError(f"Cannot list buckets at {settings.endpoint}: {e}") from e

    logger.info("Ceph connection initiated")

    bucket = find_bucket_by_name(buckets, settings.root_bucket)
    if bucket is None:
        raise BucketNotFoundError(settings.root_bucket)
    return client, bucket


def upload(settings: Settings, local_file: Path, *,
           client_factory: ClientFactory = connect) -> str:
    """
    Upload a local file into the root bucket under its base name.

    Args:
        settings: Connection settings
        local_file: File to upload
        client_factory: Builds the store client (injected by tests)

    Returns:
        The object key written

    Raises:
        CephConnectionError, BucketNotFoundError: From connect-and-resolve
        CephTransferError: If the file is missing or the put fails
    """
    local_file = Path(local_file)
    client, bucket = connect_and_resolve(settings, client_factory=client_factory)

    key = local_file.name
    if not local_file.is_file():
        raise CephTransferError(f"Local file not found: {local_file}")

    logger.info(f"Start uploading file '{key}' to bucket {bucket.name}")
    try:
        client.put_object(bucket.name, key, local_file)
    except _STORE_ERRORS as e:
        raise CephTransferError(f"Cannot upload file '{key}' to bucket {bucket.name}: {e}") from e
    logger.info(f"Uploading '{key}' finished")
    return key


def list_objects(client: StoreClient, bucket: BucketRef) -> List[ObjectSummary]:
    """
    List a bucket's objects with a single request.

    Raises:
        CephListingError: If the listing call fails
    """
    try:
        return client.list_objects(bucket.name)
    except _STORE_ERRORS as e:
        raise CephListingError(f"Cannot list objects of bucket {bucket.name}: {e}") from e


def log_listing(summaries: List[ObjectSummary]) -> None:
    logger.info(f"Found '{len(summaries)}' files")
    for summary in summaries:
        logger.info(f"{summary.key}, {summary.size} bytes, {summary.last_modified.isoformat()}")


def log_file_content(path: Path) -> None:
    """Echo a downloaded file line by line; read failures are logged only."""
    logger.info("Downloaded local file content:")
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                logger.info(line.rstrip("\r\n"))
    except OSError as e:
        logger.error(f"Cannot print downloaded file {path}: {e}")


def download_latest(settings: Settings, destination_directory: Optional[Path] = None, *,
                    client_factory: ClientFactory = connect) -> Path:
    """
    Download the most recently modified object of the root bucket.

    Args:
        settings: Connection settings
        destination_directory: Directory to download into; a fresh temporary
            directory (rwxr--r--) is created when None
        client_factory: Builds the store client (injected by tests)

    Returns:
        Path of the downloaded local file

    Raises:
        CephConnectionError, BucketNotFoundError: From connect-and-resolve
        CephListingError: If listing objects fails
        NoObjectsFoundError: If the bucket is empty
        CephTransferError: If the destination cannot be created or the get fails
        CephIntegrityError: If the local length differs from the reported length
    """
    client, bucket = connect_and_resolve(settings, client_factory=client_factory)

    summaries = list_objects(client, bucket)
    log_listing(summaries)

    latest = select_latest(summaries)
    if latest is None:
        raise NoObjectsFoundError(bucket.name)
    logger.info(f"Found last modified file: {latest.key}")

    if destination_directory is None:
        try:
            destination_directory = create_temp_directory()
        except OSError as e:
            raise CephTransferError(f"Cannot create temporary local directory: {e}") from e

    local_path = build_local_path(Path(destination_directory).absolute(), latest.key)
    logger.info(f"Local file: {local_path.as_uri()}")

    logger.info(f"Start downloading '{latest.key}' from bucket {latest.bucket_name}")
    try:
        local_path.parent.mkdir(parents=True, exist_ok=True)
        metadata = client.get_object(latest.bucket_name, latest.key, local_path)
    except IncompleteReadError as e:
        # the SDK checks the streamed length itself; the partial file stays
        raise CephIntegrityError(
            f"File length is different for '{latest.key}': expected {e.kwargs['expected_bytes']}, "
            f"got {e.kwargs['actual_bytes']}. File is corrupted",
            expected=e.kwargs["expected_bytes"],
            actual=e.kwargs["actual_bytes"],
        ) from e
    except _STORE_ERRORS as e:
        raise CephTransferError(f"Cannot download '{latest.key}': {e}") from e

    local_length = local_path.stat().st_size
    logger.info(f"Ceph file length: {metadata.content_length} bytes")
    logger.info(f"Downloaded local file length: {local_length} bytes")

    if metadata.content_length != local_length:
        raise CephIntegrityError(
            f"File length is different for '{latest.key}': expected {metadata.content_length}, "
            f"got {local_length}. File is corrupted",
            expected=metadata.content_length,
            actual=local_length,
        )

    log_file_content(local_path)
    return local_path
