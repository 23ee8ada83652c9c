"""
Module: errors.py
Description: Exception hierarchy for cloudprobe.

ConfigError is raised before any network call when required settings
are missing. TransportError wraps botocore failures from a single
service call and records which operation failed.
"""

from typing import Iterable, List, Optional

from botocore.exceptions import ClientError


class CloudProbeError(Exception):
    """Base class for all cloudprobe errors."""


class ConfigError(CloudProbeError):
    """
    Required configuration value missing, empty, or invalid.

    Attributes:
        missing: Environment variable names that were missing or empty
    """

    def __init__(self, message: str, missing: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.missing: List[str] = list(missing or [])


class TransportError(CloudProbeError):
    """
    Network or service-level failure on a queue or storage call.

    Attributes:
        operation: Name of the failed operation (send, receive, delete, ...)
        cause: Underlying botocore exception
        error_code: AWS error code when the cause is a ClientError
    """

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        self.error_code: Optional[str] = None

        if isinstance(cause, ClientError):
            self.error_code = cause.response.get("Error", {}).get("Code")

        detail = f"{type(cause).__name__}: {cause}"
        super().__init__(f"{operation} failed: {detail}")
