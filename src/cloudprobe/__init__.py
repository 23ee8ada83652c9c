"""
Package: cloudprobe
Description: Example AWS SDK programs for a local cloud emulator.

Exercises SQS (send, long-poll receive, delete) and S3 (get, list)
against LocalStack or any endpoint-overridden AWS-compatible service.
"""

__version__ = "0.1.0"
