"""
Settings and configuration for ceph-transfer.

Centralizes connection values and provides validation with fail-fast behavior.
Loads settings from environment variables at call time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

__all__ = ["Settings", "TransportConfig", "create_settings_from_env"]

_ENDPOINT_PATTERN = r"^(?:https?://)?[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"


@dataclass(frozen=True)
class TransportConfig:
    """
    Transport options for a single store client.

    These are passed into client construction and never touch process-wide
    state, so two clients in the same process may use different TLS policies.

    Attributes:
        protocol: "http" or "https"; the endpoint scheme is rewritten to match
        verify_tls: Validate the endpoint's TLS certificate
        path_style: Put the bucket name in the URL path instead of the host
        payload_signing: Sign request payloads (SigV4 body hash)
        connect_timeout_s: Socket connect timeout in seconds
        read_timeout_s: Socket read timeout in seconds
    """
    protocol: str = "http"
    verify_tls: bool = False
    path_style: bool = True
    payload_signing: bool = True
    connect_timeout_s: float = 60.0
    read_timeout_s: float = 60.0

    def __post_init__(self):
        if self.protocol not in ("http", "https"):
            raise ValueError(f"protocol must be 'http' or 'https', got {self.protocol!r}")
        if self.connect_timeout_s <= 0:
            raise ValueError(f"connect_timeout_s must be positive, got {self.connect_timeout_s}")
        if self.read_timeout_s <= 0:
            raise ValueError(f"read_timeout_s must be positive, got {self.read_timeout_s}")


@dataclass(frozen=True)
class Settings:
    """
    Connection settings for a Ceph RGW (S3-compatible) endpoint.

    Attributes:
        access_key: S3 access key id
        secret_key: S3 secret access key
        endpoint: Endpoint URL or host[:port]
        root_bucket: Name of the bucket all transfers go to
        region: Signing region; RGW accepts any value
        transport: Scoped transport options for the client
    """
    access_key: str
    secret_key: str
    endpoint: str
    root_bucket: str
    region: str = "us-east-1"
    transport: TransportConfig = field(default_factory=TransportConfig)

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.access_key:
            raise ValueError("access_key is required")
        if not self.secret_key:
            raise ValueError("secret_key is required")
        if not self.endpoint:
            raise ValueError("endpoint is required")
        if not re.match(_ENDPOINT_PATTERN, self.endpoint):
            raise ValueError(f"Invalid endpoint format: {self.endpoint}")
        if not self.root_bucket:
            raise ValueError("root_bucket is required")
        if not self.region:
            raise ValueError("region is required")

    def __repr__(self) -> str:
        # keep the secret out of logs and tracebacks
        return (
            f"Settings(access_key={self.access_key!r}, secret_key='***', "
            f"endpoint={self.endpoint!r}, root_bucket={self.root_bucket!r}, "
            f"region={self.region!r}, transport={self.transport!r})"
        )


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - CEPH_ACCESS_KEY (required)
        - CEPH_SECRET_KEY (required)
        - CEPH_ENDPOINT (required)
        - CEPH_ROOT_BUCKET (required)
        - CEPH_REGION (default: us-east-1)
        - CEPH_PROTOCOL (default: http)
        - CEPH_VERIFY_TLS (default: false)
        - CEPH_CONNECT_TIMEOUT (default: 60.0)
        - CEPH_READ_TIMEOUT (default: 60.0)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid or required values missing

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    required = {}
    for name in ("CEPH_ACCESS_KEY", "CEPH_SECRET_KEY", "CEPH_ENDPOINT", "CEPH_ROOT_BUCKET"):
        value = os.getenv(name)
        if not value:
            raise ValueError(f"{name} environment variable is required")
        required[name] = value

    transport = TransportConfig(
        protocol=os.getenv("CEPH_PROTOCOL", "http").lower(),
        verify_tls=str_to_bool(os.getenv("CEPH_VERIFY_TLS", "false")),
        connect_timeout_s=get_float("CEPH_CONNECT_TIMEOUT", 60.0),
        read_timeout_s=get_float("CEPH_READ_TIMEOUT", 60.0),
    )

    return Settings(
        access_key=required["CEPH_ACCESS_KEY"],
        secret_key=required["CEPH_SECRET_KEY"],
        endpoint=required["CEPH_ENDPOINT"],
        root_bucket=required["CEPH_ROOT_BUCKET"],
        region=os.getenv("CEPH_REGION") or "us-east-1",
        transport=transport,
    )
