"""
Package: config
Description: Environment-driven settings for the cloudprobe programs.
"""

from .settings import (
    QueueSettings,
    StorageSettings,
    load_queue_settings,
    load_storage_settings,
)

__all__ = [
    "QueueSettings",
    "StorageSettings",
    "load_queue_settings",
    "load_storage_settings",
]
