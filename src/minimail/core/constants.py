"""SMTP constants used by the session state machine."""


class SMTPResponse:
    """Reply codes the session waits for, compared as three-character prefixes."""

    OK = "250"  # Requested mail action okay, completed
    START_MAIL = "354"  # Start mail input; end with <CRLF>.<CRLF>


class SMTPCommands:
    """Literal command lines written to the server."""

    EHLO = "EHLO {domain}\r\n"
    MAIL_FROM = "mail from: {sender}\r\n"
    RCPT_TO = "rcpt to: {recipient}\r\n"
    DATA = "data\r\n"
    MESSAGE = "Subject: {subject}\r\n\r\n{body}\r\n.\r\n"
    QUIT = "quit\r\n"


class SMTPPorts:
    """Standard SMTP port numbers."""

    SMTP = 25  # Plain SMTP (server-to-server)


# Upper bound for the single read performed after each command
REPLY_READ_SIZE = 1024

# Length of the status code prefix inspected on each reply
REPLY_CODE_LENGTH = 3
