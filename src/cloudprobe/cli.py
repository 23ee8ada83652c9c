"""
Module: cli.py
Description: Command-line entry point for the cloudprobe programs.

Usage:
    cloudprobe sqs                    # send, then receive and delete one message
    cloudprobe sqs --body "hello"
    cloudprobe s3 get                 # print S3_KEY (default go.mod) from S3_BUCKET
    cloudprobe s3 get --key README.md
    cloudprobe s3 list --prefix docs/

Configuration comes from the environment (see config/settings.py).
Any unrecovered error is logged and the process exits with status 1.
"""

import argparse
import sys
from typing import List, Optional

from cloudprobe import __version__
from cloudprobe.config.settings import load_queue_settings, load_storage_settings
from cloudprobe.sqs_queue.sqs import RetryingQueueClient
from cloudprobe.storage.s3 import ObjectStorageClient
from cloudprobe.utils.errors import CloudProbeError, ConfigError
from cloudprobe.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def run_sqs(args: argparse.Namespace) -> int:
    """Send one message, then receive and delete one message."""
    settings = load_queue_settings()
    configure_logging(settings.log_level)

    logger.info(
        "Configuration loaded",
        sqs_queue=settings.sqs_queue,
        sqs_queue_url=settings.sqs_queue_url,
        localstack_endpoint=settings.localstack_endpoint,
        aws_default_region=settings.aws_default_region
    )

    policy = settings.retry_policy()
    client = RetryingQueueClient(settings.queue_endpoint())
    _, message = client.round_trip(args.body or settings.sqs_message_body, policy)

    if message is None:
        print(f"No message received after {policy.max_attempts} attempts.")
    else:
        print(message.body)
    return 0


def run_s3_get(args: argparse.Namespace) -> int:
    """Print one object from the configured bucket."""
    settings = load_storage_settings()
    configure_logging(settings.log_level)

    client = ObjectStorageClient(settings.service_endpoint(), settings.s3_bucket)
    data = client.get_object(args.key or settings.s3_key)

    print(data.decode("utf-8", errors="replace"))
    return 0


def run_s3_list(args: argparse.Namespace) -> int:
    """Print key and size of every object in the configured bucket."""
    settings = load_storage_settings()
    configure_logging(settings.log_level)

    client = ObjectStorageClient(settings.service_endpoint(), settings.s3_bucket)
    for summary in client.list_objects(prefix=args.prefix):
        print(f"{summary.size:>12}  {summary.key}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudprobe",
        description="Exercise SQS and S3 against a local cloud emulator"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    sqs = commands.add_parser("sqs", help="Send a message, then receive and delete one")
    sqs.add_argument(
        "--body",
        type=str,
        default=None,
        help="Message body (default: SQS_MESSAGE_BODY)"
    )
    sqs.set_defaults(handler=run_sqs)

    s3 = commands.add_parser("s3", help="Read from the configured S3 bucket")
    s3_commands = s3.add_subparsers(dest="s3_command", required=True)

    get = s3_commands.add_parser("get", help="Print an object")
    get.add_argument("--key", type=str, default=None, help="Object key (default: S3_KEY)")
    get.set_defaults(handler=run_s3_get)

    listing = s3_commands.add_parser("list", help="List objects")
    listing.add_argument("--prefix", type=str, default="", help="Only keys under this prefix")
    listing.set_defaults(handler=run_s3_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        return args.handler(args)
    except ConfigError as e:
        logger.error("Invalid configuration", error=str(e), missing=e.missing)
        return 1
    except CloudProbeError as e:
        logger.error(
            "Command failed",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
