"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the data models shared by the cloudprobe clients:
- Message, ObjectSummary: values returned by queue and storage calls
- ServiceEndpoint, QueueEndpoint: where and how to connect
- RetryPolicy: attempt budget for queue receives

All models are exported here for convenient importing.
"""

from .endpoint import QueueEndpoint, RetryPolicy, ServiceEndpoint
from .message import Message, ObjectSummary

__all__ = [
    "Message",
    "ObjectSummary",
    "QueueEndpoint",
    "RetryPolicy",
    "ServiceEndpoint",
]
