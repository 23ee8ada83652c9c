"""
Module: message.py
Description: Data models for queue messages and stored objects.

Key Components:
- Message: one delivered SQS message
- ObjectSummary: one entry of a bucket listing

Dependencies: pydantic, typing
"""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """
    A message delivered by the queue service.

    Attributes:
        body: Text payload
        receipt_handle: Per-delivery token required to delete the message
        message_id: Identifier assigned by the queue service on send
    """

    model_config = ConfigDict(frozen=True)

    body: str = Field(..., description="Message payload")
    receipt_handle: str = Field(..., min_length=1, description="Receipt handle")
    message_id: str = Field(..., min_length=1, description="Service-assigned message ID")

    @classmethod
    def from_sqs(cls, raw: Dict[str, Any]) -> "Message":
        """
        Build a Message from one entry of a ReceiveMessage response.

        Raises:
            ValueError: If the entry has no ReceiptHandle
        """
        if not isinstance(raw, dict) or "ReceiptHandle" not in raw:
            raise ValueError("SQS message is missing ReceiptHandle")

        return cls(
            body=raw.get("Body", ""),
            receipt_handle=raw["ReceiptHandle"],
            message_id=raw.get("MessageId", ""),
        )


class ObjectSummary(BaseModel):
    """Key and size of one object in a bucket listing."""

    model_config = ConfigDict(frozen=True)

    key: str
    size: int = Field(..., ge=0)
