"""
Module: conftest.py
Description: Shared pytest fixtures for cloudprobe tests.

Provides endpoint and policy fixtures, a mocked SQS client for
exercising the retry loop, and moto-backed SQS/S3 resources for
end-to-end tests without a running emulator.
"""

import boto3
import pytest
from unittest.mock import MagicMock
from moto import mock_aws

from cloudprobe.models import QueueEndpoint, RetryPolicy, ServiceEndpoint
from cloudprobe.utils.logger import configure_logging

TEST_REGION = "us-east-1"
TEST_QUEUE_URL = "http://localhost:4566/000000000000/test-queue"

# Every variable the settings classes read
CONFIG_ENV_VARS = [
    "SQS_QUEUE",
    "SQS_QUEUE_URL",
    "S3_BUCKET",
    "S3_KEY",
    "LOCALSTACK_ENDPOINT",
    "AWS_DEFAULT_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "SQS_ANONYMOUS",
    "SQS_MESSAGE_BODY",
    "SQS_MAX_ATTEMPTS",
    "SQS_POLL_WAIT_SECONDS",
    "SQS_INTER_ATTEMPT_DELAY",
    "SQS_VISIBILITY_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind log output to the current stderr after each test."""
    yield
    configure_logging("DEBUG")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove configuration variables from the environment.

    Also switches to an empty directory so no .env file is picked up.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def aws_credentials(clean_env):
    """Fake credentials and region for moto."""
    clean_env.setenv("AWS_ACCESS_KEY_ID", "testing")
    clean_env.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    clean_env.setenv("AWS_SECURITY_TOKEN", "testing")
    clean_env.setenv("AWS_SESSION_TOKEN", "testing")
    clean_env.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    return clean_env


@pytest.fixture
def queue_endpoint():
    """QueueEndpoint pointing at a LocalStack-style URL."""
    return QueueEndpoint(
        queue_url=TEST_QUEUE_URL,
        endpoint_url="http://localhost:4566",
        region=TEST_REGION,
        anonymous=True
    )


@pytest.fixture
def retry_policy():
    """Policy from the reference scenario: 3 attempts, 5s poll, 2s delay."""
    return RetryPolicy(max_attempts=3, poll_wait_seconds=5, inter_attempt_delay=2.0)


@pytest.fixture
def sleeps():
    """Records the delays requested between attempts."""
    return []


@pytest.fixture
def mock_sqs_client():
    """
    Provide a mocked boto3 SQS client.

    send_message returns MessageId m1; receive_message returns an empty
    response unless a test overrides it.
    """
    client = MagicMock()
    client.send_message.return_value = {"MessageId": "m1"}
    client.receive_message.return_value = {}
    client.delete_message.return_value = {}
    return client


@pytest.fixture
def sqs_message():
    """Raw ReceiveMessage entry as returned by SQS."""
    return {
        "MessageId": "m1",
        "ReceiptHandle": "r1",
        "Body": "hello",
        "MD5OfBody": "5d41402abc4b2a76b9719d911017c592"
    }


@pytest.fixture
def moto_queue(aws_credentials):
    """
    Create a moto-backed SQS queue.

    Yields a (boto3 client, QueueEndpoint) pair; the endpoint has no
    override so requests are served by moto.
    """
    with mock_aws():
        sqs = boto3.client("sqs", region_name=TEST_REGION)
        queue_url = sqs.create_queue(QueueName="cloudprobe-test")["QueueUrl"]
        endpoint = QueueEndpoint(queue_url=queue_url, region=TEST_REGION)
        yield sqs, endpoint


@pytest.fixture
def moto_bucket(aws_credentials):
    """
    Create a moto-backed S3 bucket holding a go.mod object.

    Yields a (boto3 client, ServiceEndpoint, bucket name) tuple.
    """
    with mock_aws():
        s3 = boto3.client("s3", region_name=TEST_REGION)
        s3.create_bucket(Bucket="cloudprobe-test")
        s3.put_object(
            Bucket="cloudprobe-test",
            Key="go.mod",
            Body=b"module example.com/localstack\n\ngo 1.22\n"
        )
        yield s3, ServiceEndpoint(region=TEST_REGION), "cloudprobe-test"
