"""SMTP delivery core.

- MailMessage: sender, subject, ordered unique recipients and body
- SmtpSession: the command/reply state machine for one send attempt
- Transport / SocketTransport: the stream the session talks through
- Mailer: builds a socket transport from a SessionConfig and runs a session

    >>> from minimail.core import Mailer, MailMessage
    >>> from minimail.utils.config import SessionConfig
    >>>
    >>> message = MailMessage(sender="a@x.com", subject="Hi", body="Hello")
    >>> message.add_recipient("b@x.com")
    >>> result = Mailer(SessionConfig(host="mail.x.com")).send(message)
    >>> if not result:
    ...     print(result.error_kind, result.message)
"""

from .mailer import Mailer, get_mailer
from .message import MailMessage, RecipientList
from .session import SendResult, SessionState, SmtpSession
from .transport import SocketTransport, Transport

__all__ = [
    "Mailer",
    "MailMessage",
    "RecipientList",
    "SendResult",
    "SessionState",
    "SmtpSession",
    "SocketTransport",
    "Transport",
    "get_mailer",
]
