"""
Module: aws.py
Description: boto3 client factory for endpoint-overridden services.

Builds clients pointed at a ServiceEndpoint. SDK-level retries are
disabled so that every failure reaches the caller on the first attempt;
the read timeout stays above the SQS long-poll maximum.
"""

from typing import Any, Dict, Optional

import boto3
from botocore import UNSIGNED
from botocore.config import Config

from cloudprobe.models import ServiceEndpoint
from cloudprobe.utils.logger import get_logger

logger = get_logger(__name__)

READ_TIMEOUT_SECONDS = 70
CONNECT_TIMEOUT_SECONDS = 5


def build_client_config(endpoint: ServiceEndpoint, s3: Optional[Dict[str, Any]] = None) -> Config:
    """Build the botocore Config for a client."""
    options: Dict[str, Any] = {
        "retries": {"total_max_attempts": 1, "mode": "standard"},
        "read_timeout": READ_TIMEOUT_SECONDS,
        "connect_timeout": CONNECT_TIMEOUT_SECONDS,
    }
    if endpoint.anonymous:
        options["signature_version"] = UNSIGNED
    if s3:
        options["s3"] = s3
    return Config(**options)


def create_client(service_name: str, endpoint: ServiceEndpoint, s3: Optional[Dict[str, Any]] = None):
    """
    Create a boto3 client for the given service and endpoint.

    Args:
        service_name: boto3 service name ('sqs', 's3')
        endpoint: Connection details
        s3: Optional S3-specific botocore options (e.g. addressing_style)

    Returns:
        boto3 client
    """
    kwargs: Dict[str, Any] = {
        "region_name": endpoint.region,
        "config": build_client_config(endpoint, s3=s3),
    }
    if endpoint.endpoint_url:
        kwargs["endpoint_url"] = endpoint.endpoint_url
    if endpoint.access_key_id and endpoint.secret_access_key:
        kwargs["aws_access_key_id"] = endpoint.access_key_id
        kwargs["aws_secret_access_key"] = endpoint.secret_access_key.get_secret_value()

    logger.debug(
        "Creating AWS client",
        service=service_name,
        endpoint_url=endpoint.endpoint_url,
        region=endpoint.region,
        anonymous=endpoint.anonymous
    )

    return boto3.client(service_name, **kwargs)
