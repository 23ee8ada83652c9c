"""
Module: endpoint.py
Description: Connection and retry models for cloudprobe clients.

Key Components:
- ServiceEndpoint: endpoint override, region and credentials
- QueueEndpoint: ServiceEndpoint plus the target queue URL
- RetryPolicy: attempt budget for one receive-and-acknowledge call

Dependencies: pydantic
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

# SQS hard limits
SQS_MAX_WAIT_SECONDS = 20
SQS_MAX_VISIBILITY = 43_200


class ServiceEndpoint(BaseModel):
    """
    Connection details for an AWS-compatible service.

    Attributes:
        endpoint_url: Endpoint override (e.g. http://localhost:4566), None for AWS
        region: AWS region name
        anonymous: Send unsigned requests instead of resolving credentials
        access_key_id: Optional static access key
        secret_access_key: Optional static secret key
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    endpoint_url: Optional[str] = Field(
        default=None,
        description="Service endpoint override"
    )
    region: str = Field(
        ...,
        min_length=1,
        description="AWS region"
    )
    anonymous: bool = Field(
        default=False,
        description="Use unsigned (anonymous) requests"
    )
    access_key_id: Optional[str] = Field(default=None)
    secret_access_key: Optional[SecretStr] = Field(default=None)

    @field_validator('endpoint_url')
    @classmethod
    def validate_endpoint_url(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty as unset and require an HTTP(S) URL otherwise."""
        if not v:
            return None
        if not v.startswith(('http://', 'https://')):
            raise ValueError("endpoint_url must be a valid HTTP/HTTPS URL")
        return v


class QueueEndpoint(ServiceEndpoint):
    """Target queue plus the connection used to reach it."""

    queue_url: str = Field(
        ...,
        min_length=1,
        description="URL of the SQS queue"
    )


class RetryPolicy(BaseModel):
    """
    Attempt budget for receive_and_acknowledge.

    Attributes:
        max_attempts: Number of receive calls before giving up (>= 1)
        poll_wait_seconds: Long-poll wait per receive call
        inter_attempt_delay: Seconds to sleep between empty attempts
        visibility_timeout: Visibility timeout passed to receive, if set
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)
    poll_wait_seconds: int = Field(default=SQS_MAX_WAIT_SECONDS, ge=0, le=SQS_MAX_WAIT_SECONDS)
    inter_attempt_delay: float = Field(default=2.0, ge=0)
    visibility_timeout: Optional[int] = Field(default=None, ge=0, le=SQS_MAX_VISIBILITY)
