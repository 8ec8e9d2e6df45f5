"""minimail - deliver a single email message over a plain SMTP dialogue."""

from .core import Mailer, MailMessage, SendResult, SessionState, SmtpSession

__version__ = "0.1.0"

__all__ = [
    "Mailer",
    "MailMessage",
    "SendResult",
    "SessionState",
    "SmtpSession",
]
