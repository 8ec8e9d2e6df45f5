"""SMTP session state machine.

An ``SmtpSession`` drives one delivery attempt over a ``Transport``:

    START -> GREETING -> MAIL_FROM -> RCPT_TO -> DATA -> TRANSMIT -> QUIT -> DONE

Each command is followed by a single bounded read, and the reply is judged
by its first three characters only. Any mismatch aborts the attempt; there
are no retries and no ``quit`` is sent after an abort. The transport is
closed on every exit path.

Known limitations, kept on purpose:

- Multi-line replies (``250-...`` continuation lines) are not assembled.
  Only the first bounded read after a command is inspected.
- Body lines starting with ``.`` are not dot-stuffed, so a line holding a
  lone ``.`` ends the message early from the server's point of view.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from minimail.utils.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorHandler,
    MailerError,
    ProtocolError,
    TransportError,
)
from minimail.utils.logging import get_logger, log_event

from .constants import REPLY_CODE_LENGTH, REPLY_READ_SIZE, SMTPCommands, SMTPResponse
from .message import MailMessage
from .transport import Transport

logger = get_logger(__name__)


class SessionState(Enum):
    """Steps of the SMTP dialogue, in the only order they can occur."""

    START = "start"
    GREETING = "greeting"
    MAIL_FROM = "mail_from"
    RCPT_TO = "rcpt_to"
    DATA = "data"
    TRANSMIT = "transmit"
    QUIT = "quit"
    DONE = "done"


@dataclass(frozen=True)
class SendResult:
    """Outcome of one send attempt.

    ``bool(result)`` is ``result.success``. On failure ``error_kind`` tells
    callers why, and ``state`` is the step the session stopped in.
    """

    success: bool
    state: SessionState
    message: str = ""
    error_kind: Optional[ErrorCategory] = None
    reply: Optional[str] = None
    error: Optional[MailerError] = field(default=None, repr=False, compare=False)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "state": self.state.value,
            "message": self.message,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "reply": self.reply,
        }


class SmtpSession:
    """One-shot SMTP conversation over an unopened transport."""

    def __init__(
        self,
        transport: Transport,
        domain: str = "localhost",
        read_size: int = REPLY_READ_SIZE,
    ):
        """Initialise the session.

        Args:
            transport: Transport to open, converse over and close
            domain: Name announced with EHLO
            read_size: Upper bound on bytes read for each reply
        """
        self._transport = transport
        self.domain = domain
        self.read_size = read_size
        self.state = SessionState.START
        self._last_reply: Optional[str] = None
        self._used = False

    @property
    def last_reply(self) -> Optional[str]:
        return self._last_reply

    def send(self, message: MailMessage) -> SendResult:
        """Deliver ``message``.

        The transport is not touched unless the message has a sender, a
        subject and at least one recipient.

        Returns:
            SendResult describing success or the cause of failure
        """
        if self._used:
            return self._fail(
                ConfigurationError(
                    "Session already used; create a new session for each send"
                )
            )
        self._used = True

        missing = message.missing_fields()
        if missing:
            return self._fail(
                ConfigurationError(
                    f"Message is missing required fields: {', '.join(missing)}",
                    details={"missing": missing},
                )
            )

        recipients = message.recipients
        start_time = time.time()

        logger.info(
            "Sending email",
            extra={"sender": message.sender, "recipients": list(recipients)},
        )

        try:
            with self._transport:
                self._converse(message, recipients)

        except MailerError as e:
            return self._fail(e)

        except Exception as e:
            return self._fail(
                TransportError(
                    f"Transport failure: {e}",
                    details={"exception": type(e).__name__},
                )
            )

        duration = round(time.time() - start_time, 2)
        log_event(
            "mail_sent",
            "Email sent successfully",
            recipients=list(recipients),
            duration_seconds=duration,
        )
        return SendResult(
            success=True,
            state=self.state,
            message="Mail sent",
            reply=self._last_reply,
        )

    def _converse(self, message: MailMessage, recipients: Sequence[str]) -> None:
        self._enter(SessionState.START)
        self._read_reply()  # banner

        self._enter(SessionState.GREETING)
        self._command(SMTPCommands.EHLO.format(domain=self.domain), SMTPResponse.OK)

        self._enter(SessionState.MAIL_FROM)
        self._command(
            SMTPCommands.MAIL_FROM.format(sender=message.sender), SMTPResponse.OK
        )

        self._enter(SessionState.RCPT_TO)
        for recipient in recipients:
            self._command(
                SMTPCommands.RCPT_TO.format(recipient=recipient), SMTPResponse.OK
            )

        self._enter(SessionState.DATA)
        self._command(SMTPCommands.DATA, SMTPResponse.START_MAIL)

        self._enter(SessionState.TRANSMIT)
        self._command(
            SMTPCommands.MESSAGE.format(subject=message.subject, body=message.body),
            SMTPResponse.OK,
            log_line=f"<message, {len(message.body)} chars of body>",
        )

        self._enter(SessionState.QUIT)
        try:
            self._transport.write(SMTPCommands.QUIT)
        except TransportError as e:
            # the server already accepted the message
            logger.warning(f"Failed to send quit after delivery: {e.message}")

        self._enter(SessionState.DONE)

    def _enter(self, state: SessionState) -> None:
        self.state = state
        logger.debug(f"SMTP session entering {state.value}")

    def _read_reply(self) -> str:
        reply = self._transport.read(self.read_size)
        if not reply:
            raise TransportError(
                "Server closed the connection",
                details={"state": self.state.value},
            )

        self._last_reply = reply.rstrip("\r\n")
        logger.debug(f"S: {self._last_reply}")
        return reply

    def _command(
        self, line: str, expected: str, log_line: Optional[str] = None
    ) -> None:
        """Write one command and require a reply starting with ``expected``."""
        logger.debug(f"C: {log_line or line.rstrip()}")
        self._transport.write(line)

        reply = self._read_reply()
        if reply[:REPLY_CODE_LENGTH] != expected:
            raise ProtocolError(
                f"Unexpected reply during {self.state.value}: "
                f"expected {expected}, got {self._last_reply!r}",
                details={
                    "state": self.state.value,
                    "expected": expected,
                    "reply": self._last_reply,
                },
            )

    def _fail(self, error: MailerError) -> SendResult:
        ErrorHandler.handle(
            error,
            context="Mail delivery failed",
            log_traceback=False,
            level=logging.WARNING,
        )
        log_event(
            "mail_failed",
            error.message,
            category=error.category.value,
            state=self.state.value,
        )
        return SendResult(
            success=False,
            state=self.state,
            message=error.message,
            error_kind=error.category,
            reply=self._last_reply,
            error=error,
        )
