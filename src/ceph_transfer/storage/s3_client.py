"""
boto3-backed store client for Ceph RGW and other S3-compatible endpoints.
"""
from __future__ import annotations

import logging
from datetime import timezone
from pathlib import Path
from typing import List
from urllib.parse import urlsplit, urlunsplit

import boto3
from botocore.config import Config

from ..settings import Settings, TransportConfig
from .base import BucketRef, ObjectMetadata, ObjectSummary, StoreClient

__all__ = ["S3StoreClient", "connect", "endpoint_url_for"]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB


def endpoint_url_for(endpoint: str, transport: TransportConfig) -> str:
    """
    Build the endpoint URL with the scheme the transport asks for.

    Args:
        endpoint: Configured endpoint, with or without a scheme
        transport: Transport options

    Returns:
        Endpoint URL whose scheme equals ``transport.protocol``

    Examples:
        >>> endpoint_url_for("https://rgw.local/", TransportConfig())
        'http://rgw.local/'

        >>> endpoint_url_for("rgw.local:7480", TransportConfig(protocol="https"))
        'https://rgw.local:7480'
    """
    if "://" not in endpoint:
        endpoint = f"{transport.protocol}://{endpoint}"
    parts = urlsplit(endpoint)
    return urlunsplit((transport.protocol,) + tuple(parts)[1:])


def _client_config(transport: TransportConfig) -> Config:
    s3_options = {
        "addressing_style": "path" if transport.path_style else "auto",
        "payload_signing_enabled": transport.payload_signing,
    }
    return Config(
        signature_version="s3v4",
        s3=s3_options,
        connect_timeout=transport.connect_timeout_s,
        read_timeout=transport.read_timeout_s,
        retries={"max_attempts": 1, "mode": "standard"},
    )


class S3StoreClient(StoreClient):
    """
    StoreClient adapter over a boto3 S3 client.

    Translates boto3 response dictionaries into the frozen data classes of
    ``storage.base``. SDK exceptions propagate unchanged; the transfer flows
    decide how to classify them.
    """

    def __init__(self, client) -> None:
        self._client = client

    def list_buckets(self) -> List[BucketRef]:
        response = self._client.list_buckets()
        return [
            BucketRef(name=b["Name"], creation_date=b.get("CreationDate"))
            for b in response.get("Buckets", [])
        ]

    def list_objects(self, bucket: str) -> List[ObjectSummary]:
        response = self._client.list_objects(Bucket=bucket)
        if response.get("IsTruncated"):
            logger.warning(f"Listing of bucket {bucket} is truncated, only the first page is used")
        summaries = []
        for obj in response.get("Contents", []):
            modified = obj["LastModified"]
            if modified.tzinfo is None:
                modified = modified.replace(tzinfo=timezone.utc)
            summaries.append(ObjectSummary(
                key=obj["Key"],
                size=int(obj.get("Size", 0)),
                last_modified=modified,
                bucket_name=bucket,
            ))
        return summaries

    def get_object(self, bucket: str, key: str, dest: Path) -> ObjectMetadata:
        response = self._client.get_object(Bucket=bucket, Key=key)
        body = response["Body"]
        try:
            with open(dest, "wb") as out:
                for chunk in body.iter_chunks(chunk_size=CHUNK_SIZE):
                    out.write(chunk)
        finally:
            body.close()
        return ObjectMetadata(key=key, content_length=int(response["ContentLength"]))

    def put_object(self, bucket: str, key: str, source: Path) -> None:
        with open(source, "rb") as body:
            self._client.put_object(Bucket=bucket, Key=key, Body=body)


def connect(settings: Settings) -> S3StoreClient:
    """
    Create an authenticated store client from settings.

    The transport policy (protocol, TLS verification) is applied to this
    client only; no process-wide flag is changed.

    Args:
        settings: Connection settings

    Returns:
        S3StoreClient wrapping a fresh boto3 client

    Raises:
        botocore.exceptions.BotoCoreError, ValueError: If the client cannot be built
    """
    transport = settings.transport
    endpoint_url = endpoint_url_for(settings.endpoint, transport)

    logger.debug(f"Connecting to {endpoint_url} (path_style={transport.path_style}, "
                 f"payload_signing={transport.payload_signing}, verify_tls={transport.verify_tls})")
    if transport.protocol == "https" and not transport.verify_tls:
        logger.info("TLS certificate checking is disabled for this client")

    client = boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        aws_access_key_id=settings.access_key,
        aws_secret_access_key=settings.secret_key,
        region_name=settings.region,
        use_ssl=transport.protocol == "https",
        verify=transport.verify_tls,
        config=_client_config(transport),
    )
    return S3StoreClient(client)
