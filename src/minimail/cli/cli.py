"""Main CLI entry point."""

import sys
from typing import List, Optional

from minimail.core import MailMessage, get_mailer
from minimail.utils.config import ConfigManager
from minimail.utils.console import get_console, print_error, print_status, print_success
from minimail.utils.errors import MailerError, format_error_message
from minimail.utils.logging import get_logger, init_logging

from .body import load_body, parse_recipients
from .cli_parser import REQUIRED_OPTIONS, setup_argument_parser

logger = get_logger(__name__)


def build_message(sender: str, subject: str, recipients: List[str], body: str) -> MailMessage:
    """Assemble a MailMessage from command line values."""
    message = MailMessage()
    message.set_sender(sender)
    message.set_subject(subject)
    message.set_body(body)
    for address in recipients:
        message.add_recipient(address)
    return message


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 = sent, 1 = failed, 2 = usage error)
    """
    console = get_console()
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    try:
        config_manager = ConfigManager(args.config)
        init_logging(args.log_level or config_manager.get_config("logging.log_level", "ERROR"))
        session_config = config_manager.session_config(
            host=args.host,
            port=args.port,
            domain=args.domain,
            use_tls=args.tls,
            timeout=args.timeout,
        )
    except MailerError as e:
        logger.warning(f"Configuration error: {e}")
        print_error(f"Configuration error: {format_error_message(e)}", console)
        return 1

    except ValueError as e:
        # unknown log level in the config file
        print_error(f"Configuration error: {e}", console)
        return 1

    recipients = parse_recipients(args.recipients or "")
    provided = {
        "host": session_config.host,
        "sender": args.sender,
        "subject": args.subject,
        "recipients": recipients,
        "body_file": args.body_file,
    }
    missing = [name for name in REQUIRED_OPTIONS if not provided[name]]
    if missing:
        parser.print_usage(sys.stderr)
        print_error(f"Missing required options: {', '.join(missing)}", console)
        return 2

    try:
        body = load_body(args.body_file)
    except MailerError as e:
        print_error(format_error_message(e), console)
        return 1

    message = build_message(args.sender, args.subject, recipients, body)

    try:
        print_status(
            f"Sending mail via {session_config.host}:{session_config.port}...", console
        )
        result = get_mailer(session_config).send(message)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code

    if result:
        print_success("Mail sent successfully!", console)
        return 0

    print_error(f"Error sending mail: {result.message}", console)
    return 1


if __name__ == "__main__":
    sys.exit(main())
