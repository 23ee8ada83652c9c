"""
Module: test_cli.py
Description: Tests for the cloudprobe command-line entry point.

Checks exit statuses and stdout for the sqs and s3 commands. The sqs
command runs against a patched client since its endpoint override
cannot be served by moto; the s3 commands run against moto.
"""

import pytest
from unittest.mock import patch
from botocore.exceptions import EndpointConnectionError

from cloudprobe.cli import main
from cloudprobe.models import Message
from cloudprobe.utils.errors import TransportError


@pytest.fixture
def queue_env(clean_env):
    """Environment of the reference LocalStack queue program."""
    clean_env.setenv("SQS_QUEUE", "orders")
    clean_env.setenv("SQS_QUEUE_URL", "http://localhost:4566/000000000000/orders")
    clean_env.setenv("LOCALSTACK_ENDPOINT", "http://localhost:4566")
    clean_env.setenv("AWS_DEFAULT_REGION", "us-east-1")
    return clean_env


class TestSQSCommand:
    """Test cases for `cloudprobe sqs`."""

    def test_prints_consumed_body(self, queue_env, capsys):
        """Test success prints the message body and exits 0."""
        with patch("cloudprobe.cli.RetryingQueueClient") as client_cls:
            client_cls.return_value.round_trip.return_value = (
                "m1", Message(body="hello", receipt_handle="r1", message_id="m1")
            )

            exit_code = main(["sqs", "--body", "hello"])

        assert exit_code == 0
        assert capsys.readouterr().out == "hello\n"

        endpoint = client_cls.call_args.args[0]
        assert endpoint.queue_url == "http://localhost:4566/000000000000/orders"
        body, policy = client_cls.return_value.round_trip.call_args.args
        assert body == "hello"
        assert policy.max_attempts == 3

    def test_default_body_from_settings(self, queue_env):
        """Test SQS_MESSAGE_BODY is sent when --body is not given."""
        queue_env.setenv("SQS_MESSAGE_BODY", "from the environment")

        with patch("cloudprobe.cli.RetryingQueueClient") as client_cls:
            client_cls.return_value.round_trip.return_value = ("m1", None)
            main(["sqs"])

        assert client_cls.return_value.round_trip.call_args.args[0] == "from the environment"

    def test_no_message_notice(self, queue_env, capsys):
        """Test an empty outcome prints a notice and still exits 0."""
        queue_env.setenv("SQS_MAX_ATTEMPTS", "2")

        with patch("cloudprobe.cli.RetryingQueueClient") as client_cls:
            client_cls.return_value.round_trip.return_value = ("m1", None)

            exit_code = main(["sqs"])

        assert exit_code == 0
        assert capsys.readouterr().out == "No message received after 2 attempts.\n"

    def test_missing_configuration(self, clean_env, capsys):
        """Test missing variables exit 1 before any client is built."""
        with patch("cloudprobe.cli.RetryingQueueClient") as client_cls:
            exit_code = main(["sqs"])

        assert exit_code == 1
        client_cls.assert_not_called()
        assert capsys.readouterr().out == ""

    def test_transport_error(self, queue_env, capsys):
        """Test a transport failure exits 1 without printing a result."""
        with patch("cloudprobe.cli.RetryingQueueClient") as client_cls:
            client_cls.return_value.round_trip.side_effect = TransportError(
                "send", EndpointConnectionError(endpoint_url="http://localhost:4566")
            )

            exit_code = main(["sqs"])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "send failed" in captured.err


class TestS3Command:
    """Test cases for `cloudprobe s3`."""

    def test_get_prints_object(self, moto_bucket, capsys):
        """Test `s3 get` prints the default go.mod object."""
        _, _, bucket = moto_bucket
        with pytest.MonkeyPatch.context() as mp:
            mp.setenv("S3_BUCKET", bucket)

            exit_code = main(["s3", "get"])

        assert exit_code == 0
        assert capsys.readouterr().out.startswith("module example.com/localstack")

    def test_get_missing_key(self, moto_bucket, capsys):
        """Test a missing object exits 1."""
        _, _, bucket = moto_bucket
        with pytest.MonkeyPatch.context() as mp:
            mp.setenv("S3_BUCKET", bucket)

            exit_code = main(["s3", "get", "--key", "missing.txt"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_list(self, moto_bucket, capsys):
        """Test `s3 list` prints one line per object."""
        s3, _, bucket = moto_bucket
        s3.put_object(Bucket=bucket, Key="docs/readme.md", Body=b"# readme")
        with pytest.MonkeyPatch.context() as mp:
            mp.setenv("S3_BUCKET", bucket)

            exit_code = main(["s3", "list", "--prefix", "docs/"])

        assert exit_code == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert lines[0].split() == ["8", "docs/readme.md"]

    def test_missing_bucket_variable(self, aws_credentials):
        """Test S3_BUCKET is required."""
        assert main(["s3", "list"]) == 1


def test_subcommand_required():
    """Test running without a subcommand is a usage error."""
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2
