# Store client boundary and its boto3 implementation

from .base import BucketRef, ObjectMetadata, ObjectSummary, StoreClient
from .s3_client import S3StoreClient, connect

__all__ = ["BucketRef", "ObjectMetadata", "ObjectSummary", "StoreClient", "S3StoreClient", "connect"]
