"""
Module: s3.py
Description: Read-only S3 client for a single bucket.

Fetches whole objects and lists bucket contents against an
endpoint-overridden S3 service. Path-style addressing is used since
local emulators do not resolve virtual-host bucket names.

Key Components:
- ObjectStorageClient: get_object() and list_objects()
- Error handling: botocore failures raised as TransportError

Dependencies: boto3, botocore, typing
"""

from typing import Any, List

from botocore.exceptions import BotoCoreError, ClientError

from cloudprobe.models import ObjectSummary, ServiceEndpoint
from cloudprobe.utils.aws import create_client
from cloudprobe.utils.errors import TransportError
from cloudprobe.utils.logger import get_logger

logger = get_logger(__name__)


class ObjectStorageClient:
    """
    S3 client bound to one bucket.

    Attributes:
        bucket: Name of the bucket
        s3: boto3 S3 client

    Example:
        >>> client = ObjectStorageClient(endpoint, bucket="examples")
        >>> client.get_object("go.mod")
        b'module example...'
    """

    def __init__(self, endpoint: ServiceEndpoint, bucket: str, s3_client: Any = None):
        """
        Initialize the storage client.

        Args:
            endpoint: Connection details
            bucket: Bucket to read from
            s3_client: Optional pre-built S3 client

        Raises:
            ValueError: If bucket is empty
        """
        if not bucket or not isinstance(bucket, str):
            raise ValueError("bucket must be a non-empty string")

        self.bucket = bucket
        self.s3 = s3_client if s3_client is not None else create_client(
            "s3", endpoint, s3={"addressing_style": "path"}
        )

        logger.info(
            "S3 client initialized",
            bucket=bucket,
            endpoint_url=endpoint.endpoint_url
        )

    def get_object(self, key: str) -> bytes:
        """
        Read an object's full body.

        Args:
            key: Object key

        Returns:
            Object contents

        Raises:
            ValueError: If key is empty
            TransportError: If the request or the body read fails
        """
        if not key or not isinstance(key, str):
            raise ValueError("key must be a non-empty string")

        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
        except (ClientError, BotoCoreError) as e:
            raise self._transport_error("get_object", e, key=key) from e

        logger.info(
            "Object retrieved from S3",
            bucket=self.bucket,
            key=key,
            size=len(data)
        )
        return data

    def list_objects(self, prefix: str = "") -> List[ObjectSummary]:
        """
        List every object in the bucket under prefix.

        Follows continuation tokens until the listing is complete.

        Raises:
            TransportError: If any page request fails
        """
        summaries: List[ObjectSummary] = []
        paginator = self.s3.get_paginator("list_objects_v2")

        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for item in page.get("Contents", []):
                    summaries.append(ObjectSummary(key=item["Key"], size=item.get("Size", 0)))
        except (ClientError, BotoCoreError) as e:
            raise self._transport_error("list_objects", e, prefix=prefix) from e

        logger.info(
            "Bucket listed",
            bucket=self.bucket,
            prefix=prefix,
            count=len(summaries)
        )
        return summaries

    def _transport_error(self, operation: str, cause: Exception, **context: Any) -> TransportError:
        error = TransportError(operation, cause)
        logger.error(
            "S3 operation failed",
            operation=operation,
            bucket=self.bucket,
            error_code=error.error_code,
            error=str(cause),
            **context
        )
        return error
