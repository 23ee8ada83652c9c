"""
Module: storage
Description: Package initialization for the object storage layer.

This package contains read-only storage clients:
- s3: S3 client for fetching and listing objects in one bucket
"""

from .s3 import ObjectStorageClient

__all__ = ["ObjectStorageClient"]
