"""High-level sending facade: one socket transport and session per message."""

from typing import Optional

from minimail.utils.config import SessionConfig
from minimail.utils.logging import get_logger

from .message import MailMessage
from .session import SendResult, SmtpSession
from .transport import SocketTransport, Transport

logger = get_logger(__name__)


class Mailer:
    """Sends messages to the server described by a ``SessionConfig``."""

    def __init__(self, config: SessionConfig):
        self.config = config

    def create_transport(self) -> Transport:
        """Build a fresh, unopened transport for one send attempt."""
        return SocketTransport(
            host=self.config.host,
            port=self.config.port,
            use_tls=self.config.use_tls,
            timeout=self.config.timeout,
        )

    def send(self, message: MailMessage, transport: Optional[Transport] = None) -> SendResult:
        """Deliver ``message`` through a new ``SmtpSession``.

        Args:
            message: Message to deliver
            transport: Transport to use instead of a new socket connection

        Returns:
            SendResult of the attempt
        """
        session = SmtpSession(
            transport or self.create_transport(), domain=self.config.domain
        )
        result = session.send(message)

        logger.info(
            "Send attempt finished",
            extra={
                "server": self.config.host,
                "success": result.success,
                "state": result.state.value,
            },
        )
        return result


def get_mailer(config: SessionConfig) -> Mailer:
    """Factory function to get a Mailer instance."""
    return Mailer(config)
