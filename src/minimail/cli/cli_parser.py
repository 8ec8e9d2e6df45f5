"""Argument parser configuration for the minimail CLI"""

import argparse
import math

from minimail import __version__

# Options that must be present before any network activity happens
REQUIRED_OPTIONS = ("host", "sender", "subject", "recipients", "body_file")


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"must be a finite number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    """Add server connection arguments to the parser."""

    group = parser.add_argument_group("connection", "Mail server to deliver to")

    group.add_argument(
        "--host",
        help="SMTP server host"
    )
    group.add_argument(
        "--port",
        type=int,
        help="SMTP server port (default: 25)"
    )
    group.add_argument(
        "--domain",
        help="Domain name sent with EHLO (default: localhost)"
    )
    group.add_argument(
        "--tls",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Connect using implicit TLS; --no-tls overrides the config file"
    )
    group.add_argument(
        "--timeout",
        type=_positive_float,
        help="Seconds to wait on the server before giving up (default: wait forever)"
    )


def add_message_arguments(parser: argparse.ArgumentParser) -> None:
    """Add message content arguments to the parser."""

    group = parser.add_argument_group("message", "Message to send")

    group.add_argument(
        "--sender",
        "--from",
        dest="sender",
        help="Envelope sender address"
    )
    group.add_argument(
        "--subject",
        help="Subject line"
    )
    group.add_argument(
        "--recipients",
        "--to",
        dest="recipients",
        help="Comma-separated recipient addresses"
    )
    group.add_argument(
        "--body-file",
        help="Path to a file holding the message body"
    )


def setup_argument_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""

    parser = argparse.ArgumentParser(
        prog="minimail",
        description="Send a single email through an SMTP server."
    )

    add_connection_arguments(parser)
    add_message_arguments(parser)

    parser.add_argument(
        "--config",
        help="Path to a JSON configuration file"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Console log level"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser
