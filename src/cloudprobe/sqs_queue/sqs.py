"""
Module: sqs.py
Description: SQS round-trip client with bounded retry polling.

Sends a message to a queue, then long-polls for one message and
deletes it, giving up after a fixed number of empty receives. Only an
empty receive is retried; transport failures end the call at once.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError
from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from cloudprobe.models import Message, QueueEndpoint, RetryPolicy
from cloudprobe.utils.aws import create_client
from cloudprobe.utils.errors import TransportError
from cloudprobe.utils.logger import get_logger

logger = get_logger(__name__)


class RetryingQueueClient:
    """
    Fire-and-consume client for a single SQS queue.

    Attributes:
        endpoint: Queue and connection details (fixed per instance)
        sqs: boto3 SQS client

    Example:
        >>> client = RetryingQueueClient(endpoint)
        >>> client.send("hello")
        'm1'
        >>> client.receive_and_acknowledge(RetryPolicy(max_attempts=3))
        Message(body='hello', receipt_handle='r1', message_id='m1')
    """

    def __init__(
        self,
        endpoint: QueueEndpoint,
        sqs_client: Any = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the queue client.

        Args:
            endpoint: Target queue and connection details
            sqs_client: Optional pre-built SQS client (defaults to one built from endpoint)
            sleep: Sleep function used between empty attempts

        Raises:
            ValueError: If endpoint is not a QueueEndpoint
        """
        if not isinstance(endpoint, QueueEndpoint):
            raise ValueError("endpoint must be a QueueEndpoint instance")

        self.endpoint = endpoint
        self.sqs = sqs_client if sqs_client is not None else create_client("sqs", endpoint)
        self._sleep = sleep

        logger.info(
            "SQS client initialized",
            queue_url=endpoint.queue_url,
            endpoint_url=endpoint.endpoint_url,
            region=endpoint.region
        )

    @property
    def queue_url(self) -> str:
        return self.endpoint.queue_url

    def send(self, body: str) -> str:
        """
        Publish one message to the queue.

        Args:
            body: Message text

        Returns:
            Message ID assigned by SQS

        Raises:
            ValueError: If body is empty
            TransportError: If the connection or the service request fails
        """
        if not body or not isinstance(body, str):
            raise ValueError("body must be a non-empty string")

        try:
            response = self.sqs.send_message(
                QueueUrl=self.queue_url,
                MessageBody=body
            )
        except (ClientError, BotoCoreError) as e:
            raise self._transport_error("send", e) from e

        message_id = response["MessageId"]
        logger.info(
            "Message sent to SQS",
            message_id=message_id,
            queue_url=self.queue_url
        )
        return message_id

    def receive_and_acknowledge(self, policy: RetryPolicy) -> Optional[Message]:
        """
        Receive one message and delete it, within the policy's attempt budget.

        Each attempt is a single long-poll receive for at most one message.
        A received message is deleted straight away and returned; no further
        receives follow. Empty attempts are separated by
        policy.inter_attempt_delay.

        Args:
            policy: Attempt budget and long-poll settings

        Returns:
            The consumed Message, or None if every attempt came back empty

        Raises:
            TransportError: If a receive or delete call fails
        """
        if not isinstance(policy, RetryPolicy):
            raise ValueError("policy must be a RetryPolicy instance")

        retrying = Retrying(
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_fixed(policy.inter_attempt_delay),
            retry=retry_if_result(lambda message: message is None),
            before_sleep=self._log_empty_attempt,
            retry_error_callback=self._log_exhausted,
            sleep=self._sleep,
        )

        message: Optional[Message] = None
        for attempt in retrying:
            with attempt:
                message = self._poll_once(policy, attempt.retry_state.attempt_number)
            if not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(message)

        return message

    def round_trip(self, body: str, policy: RetryPolicy) -> Tuple[str, Optional[Message]]:
        """Send body, then receive and acknowledge one message."""
        message_id = self.send(body)
        return message_id, self.receive_and_acknowledge(policy)

    def _poll_once(self, policy: RetryPolicy, attempt_number: int) -> Optional[Message]:
        """Run one attempt: receive at most one message, delete it if present."""
        params: Dict[str, Any] = {
            "QueueUrl": self.queue_url,
            "MaxNumberOfMessages": 1,
            "WaitTimeSeconds": policy.poll_wait_seconds,
        }
        if policy.visibility_timeout is not None:
            params["VisibilityTimeout"] = policy.visibility_timeout

        logger.info(
            "Polling for message",
            attempt=attempt_number,
            max_attempts=policy.max_attempts,
            wait_seconds=policy.poll_wait_seconds
        )

        try:
            response = self.sqs.receive_message(**params)
        except (ClientError, BotoCoreError) as e:
            raise self._transport_error("receive", e, attempt=attempt_number) from e

        messages = response.get("Messages", [])
        if not messages:
            return None

        message = Message.from_sqs(messages[0])
        logger.info(
            "Message received",
            message_id=message.message_id,
            attempt=attempt_number
        )

        self._acknowledge(message)
        return message

    def _acknowledge(self, message: Message) -> None:
        try:
            self.sqs.delete_message(
                QueueUrl=self.queue_url,
                ReceiptHandle=message.receipt_handle
            )
        except (ClientError, BotoCoreError) as e:
            # Not deleted: the message reappears once its visibility timeout expires
            raise self._transport_error("delete", e, message_id=message.message_id) from e

        logger.info(
            "Message deleted from SQS",
            message_id=message.message_id,
            queue_url=self.queue_url
        )

    def _log_empty_attempt(self, retry_state: RetryCallState) -> None:
        logger.info(
            "No message received, retrying",
            attempt=retry_state.attempt_number,
            delay_seconds=retry_state.next_action.sleep if retry_state.next_action else None
        )

    def _log_exhausted(self, retry_state: RetryCallState) -> None:
        logger.info(
            "No message received after all attempts",
            attempts=retry_state.attempt_number,
            queue_url=self.queue_url
        )
        return None

    def _transport_error(self, operation: str, cause: Exception, **context: Any) -> TransportError:
        error = TransportError(operation, cause)
        logger.error(
            "SQS operation failed",
            operation=operation,
            queue_url=self.queue_url,
            error_code=error.error_code,
            error=str(cause),
            error_type=type(cause).__name__,
            **context
        )
        return error
