"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Reads the LocalStack example configuration from environment variables
(and an optional .env file) once at process start. Missing or empty
required values are reported as a ConfigError before any network call.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudprobe.models import QueueEndpoint, RetryPolicy, ServiceEndpoint
from cloudprobe.models.endpoint import SQS_MAX_VISIBILITY, SQS_MAX_WAIT_SECONDS
from cloudprobe.utils.errors import ConfigError

DEFAULT_MESSAGE_BODY = "Hello from cloudprobe, we are using SQS in LocalStack!"
DEFAULT_OBJECT_KEY = "go.mod"

# pydantic error types that mean "not provided"
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


class AWSSettings(BaseSettings):
    """Connection settings shared by the queue and storage programs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    aws_default_region: str = Field(..., min_length=1, description="AWS region")
    localstack_endpoint: Optional[str] = Field(
        default=None,
        description="Endpoint override for the local cloud emulator"
    )
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[SecretStr] = Field(default=None)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator('localstack_endpoint')
    @classmethod
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Validate the endpoint override is an HTTP(S) URL."""
        if v and not v.startswith(('http://', 'https://')):
            raise ValueError("LOCALSTACK_ENDPOINT must be a valid HTTP/HTTPS URL")
        return v

    def service_endpoint(self, anonymous: bool = False) -> ServiceEndpoint:
        """Build the connection model used by the storage client."""
        return ServiceEndpoint(
            endpoint_url=self.localstack_endpoint,
            region=self.aws_default_region,
            anonymous=anonymous,
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
        )


class QueueSettings(AWSSettings):
    """Settings for the queue round-trip program."""

    sqs_queue: str = Field(..., min_length=1, description="SQS queue name")
    sqs_queue_url: str = Field(..., min_length=1, description="SQS queue URL")
    localstack_endpoint: str = Field(
        ...,
        min_length=1,
        description="Endpoint override for the local cloud emulator"
    )
    sqs_anonymous: bool = Field(
        default=True,
        description="Send unsigned SQS requests"
    )
    sqs_message_body: str = Field(default=DEFAULT_MESSAGE_BODY, min_length=1)

    sqs_max_attempts: int = Field(default=3, ge=1)
    sqs_poll_wait_seconds: int = Field(default=SQS_MAX_WAIT_SECONDS, ge=0, le=SQS_MAX_WAIT_SECONDS)
    sqs_inter_attempt_delay: float = Field(default=2.0, ge=0)
    sqs_visibility_timeout: Optional[int] = Field(default=None, ge=0, le=SQS_MAX_VISIBILITY)

    def queue_endpoint(self) -> QueueEndpoint:
        """Build the QueueEndpoint for RetryingQueueClient."""
        return QueueEndpoint(
            queue_url=self.sqs_queue_url,
            endpoint_url=self.localstack_endpoint,
            region=self.aws_default_region,
            anonymous=self.sqs_anonymous,
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
        )

    def retry_policy(self) -> RetryPolicy:
        """Build the RetryPolicy for receive_and_acknowledge."""
        return RetryPolicy(
            max_attempts=self.sqs_max_attempts,
            poll_wait_seconds=self.sqs_poll_wait_seconds,
            inter_attempt_delay=self.sqs_inter_attempt_delay,
            visibility_timeout=self.sqs_visibility_timeout,
        )


class StorageSettings(AWSSettings):
    """Settings for the object storage program."""

    s3_bucket: str = Field(..., min_length=1, description="S3 bucket name")
    s3_key: str = Field(default=DEFAULT_OBJECT_KEY, min_length=1, description="Object key to fetch")


SettingsT = TypeVar("SettingsT", bound=AWSSettings)


def _load(settings_cls: Type[SettingsT], **overrides: Any) -> SettingsT:
    """
    Instantiate a settings class, converting validation failures to ConfigError.

    Args:
        settings_cls: Settings class to load
        **overrides: Passed to the constructor (e.g. _env_file=None in tests)

    Raises:
        ConfigError: If a required value is missing/empty or a value is invalid
    """
    try:
        return settings_cls(**overrides)
    except ValidationError as e:
        missing = []
        invalid = []
        for error in e.errors():
            name = str(error["loc"][0]).upper() if error.get("loc") else "?"
            if error["type"] in _MISSING_ERROR_TYPES:
                missing.append(name)
            else:
                invalid.append(f"{name}: {error['msg']}")

        if missing:
            message = f"Missing required environment variables: {', '.join(missing)}"
            if invalid:
                message += f"; invalid values: {'; '.join(invalid)}"
        else:
            message = f"Invalid configuration: {'; '.join(invalid)}"
        raise ConfigError(message, missing=missing) from e


def load_queue_settings(**overrides: Any) -> QueueSettings:
    """Load QueueSettings from the environment."""
    return _load(QueueSettings, **overrides)


def load_storage_settings(**overrides: Any) -> StorageSettings:
    """Load StorageSettings from the environment."""
    return _load(StorageSettings, **overrides)
