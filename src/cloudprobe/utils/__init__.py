"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared helpers used throughout cloudprobe:
- logger: Structured logging configuration and helpers
- errors: Exception hierarchy
- aws: boto3 client factory
"""

__all__ = []
