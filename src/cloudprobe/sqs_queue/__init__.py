"""
Package: sqs_queue
Description: SQS message queue operations.

Provides a blocking client that sends a message and then receives
and deletes one message within a bounded number of long-poll attempts.
"""

from .sqs import RetryingQueueClient

__all__ = ["RetryingQueueClient"]
