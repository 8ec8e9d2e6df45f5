"""Stream transports the SMTP session talks through."""

import socket
import ssl
import time
from abc import ABC, abstractmethod
from typing import Optional

from minimail.utils.errors import TransportError, TransportTimeoutError
from minimail.utils.logging import get_logger

logger = get_logger(__name__)


class Transport(ABC):
    """Abstract text stream between the session and a mail server.

    Implementations raise ``TransportError`` for any I/O fault. ``open`` and
    ``close`` are driven by the session through the context manager
    protocol, so a transport is released exactly once per send attempt.
    """

    @abstractmethod
    def open(self) -> None:
        """Establish the connection."""
        pass

    @abstractmethod
    def read(self, size: int) -> str:
        """Perform one read of at most ``size`` bytes.

        Returns:
            str: Decoded data, or an empty string if the peer closed the stream.
        """
        pass

    @abstractmethod
    def write(self, data: str) -> None:
        """Send all of ``data``."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Calling it again is a no-op."""
        pass

    ## Context Manager Support

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class SocketTransport(Transport):
    """TCP transport with optional implicit TLS.

    With ``timeout=None`` every call blocks until the server answers.
    """

    encoding = "utf-8"

    def __init__(
        self,
        host: str,
        port: int,
        use_tls: bool = False,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ):
        self.host = host
        self.port = port
        self.use_tls = use_tls
        self.timeout = timeout
        self._ssl_context = ssl_context
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        if self._sock is not None:
            return

        start_time = time.time()
        logger.info(
            "Connecting to SMTP server",
            extra={"server": self.host, "port": self.port, "tls": self.use_tls},
        )

        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except socket.timeout as e:
            raise TransportTimeoutError(
                f"Timed out connecting to {self.host}:{self.port}",
                details={"server": self.host, "port": self.port},
            ) from e
        except OSError as e:
            raise TransportError(
                f"Failed to connect to {self.host}:{self.port}: {e}",
                details={"server": self.host, "port": self.port},
            ) from e
        except (ValueError, OverflowError) as e:
            raise TransportError(
                f"Invalid connection settings for {self.host}:{self.port}: {e}",
                details={"server": self.host, "port": self.port, "timeout": self.timeout},
            ) from e

        if self.use_tls:
            context = self._ssl_context or ssl.create_default_context()
            try:
                sock = context.wrap_socket(sock, server_hostname=self.host)
            except (OSError, ValueError) as e:
                sock.close()
                raise TransportError(
                    f"TLS handshake with {self.host} failed: {e}",
                    details={"server": self.host, "port": self.port},
                ) from e

        self._sock = sock
        logger.debug(
            "SMTP connection established",
            extra={
                "server": self.host,
                "duration_seconds": round(time.time() - start_time, 2),
            },
        )

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Transport is not connected")
        return self._sock

    def read(self, size: int) -> str:
        sock = self._require_socket()
        try:
            data = sock.recv(size)
        except socket.timeout as e:
            raise TransportTimeoutError(
                f"No reply from {self.host} within {self.timeout}s"
            ) from e
        except OSError as e:
            raise TransportError(f"Failed to read from {self.host}: {e}") from e
        except (ValueError, OverflowError) as e:
            raise TransportError(f"Invalid read from {self.host}: {e}") from e

        return data.decode(self.encoding, errors="replace")

    def write(self, data: str) -> None:
        sock = self._require_socket()
        try:
            payload = data.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise TransportError(
                f"Cannot encode outgoing data as {self.encoding}: {e.reason}",
                details={"position": e.start},
            ) from e

        try:
            sock.sendall(payload)
        except socket.timeout as e:
            raise TransportTimeoutError(
                f"Timed out writing to {self.host}"
            ) from e
        except OSError as e:
            raise TransportError(f"Failed to write to {self.host}: {e}") from e

    def close(self) -> None:
        if self._sock is None:
            return

        sock, self._sock = self._sock, None
        try:
            sock.close()
        except OSError as e:
            logger.debug(f"Error closing SMTP connection: {e}")
        else:
            logger.debug("SMTP connection closed")

    def __repr__(self) -> str:
        return (
            f"SocketTransport(host={self.host!r}, port={self.port}, "
            f"use_tls={self.use_tls}, timeout={self.timeout})"
        )
