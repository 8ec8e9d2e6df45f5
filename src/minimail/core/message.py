"""Mail message model: envelope addresses, subject and body."""

from typing import Iterable, Iterator, List, Optional, Tuple


class RecipientList:
    """Ordered set of recipient addresses.

    Addresses keep their first-insertion order and compare by exact string
    equality, so ``"Bob@x.com"`` and ``"bob@x.com"`` are distinct entries.
    """

    def __init__(self, addresses: Iterable[str] = ()):
        self._addresses: dict[str, None] = {}
        for address in addresses:
            self.add(address)

    def add(self, address: str) -> bool:
        """Append ``address`` unless present.

        Returns:
            True if the address was added, False if it was already listed
        """
        if address in self._addresses:
            return False
        self._addresses[address] = None
        return True

    def remove(self, address: str) -> bool:
        """Drop ``address`` if present.

        Returns:
            True if an entry was removed, False otherwise
        """
        if address not in self._addresses:
            return False
        del self._addresses[address]
        return True

    def as_tuple(self) -> Tuple[str, ...]:
        return tuple(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._addresses))

    def __len__(self) -> int:
        return len(self._addresses)

    def __repr__(self) -> str:
        return f"RecipientList({list(self._addresses)!r})"


class MailMessage:
    """A single email to deliver.

    The message starts empty and is filled in by the caller. Nothing is
    validated here; address syntax is left to the server. A message is
    sendable once it has a sender, a subject and at least one recipient.
    """

    def __init__(
        self,
        sender: Optional[str] = None,
        subject: Optional[str] = None,
        recipients: Iterable[str] = (),
        body: str = "",
    ):
        self._sender = sender
        self._subject = subject
        self._recipients = RecipientList(recipients)
        self._body = body

    @property
    def sender(self) -> Optional[str]:
        return self._sender

    @property
    def subject(self) -> Optional[str]:
        return self._subject

    @property
    def body(self) -> str:
        return self._body

    @property
    def recipients(self) -> Tuple[str, ...]:
        """Current recipients in insertion order."""
        return self._recipients.as_tuple()

    def set_sender(self, address: str) -> None:
        self._sender = address

    def set_subject(self, subject: str) -> None:
        self._subject = subject

    def set_body(self, body: str) -> None:
        self._body = body

    def add_recipient(self, address: str) -> None:
        """Add a recipient; repeated addresses are ignored."""
        self._recipients.add(address)

    def remove_recipient(self, address: str) -> None:
        """Remove a recipient; unknown addresses are ignored."""
        self._recipients.remove(address)

    def missing_fields(self) -> List[str]:
        """Names of the required fields that are still unset."""
        missing = []
        if self._sender is None:
            missing.append("sender")
        if self._subject is None:
            missing.append("subject")
        if not self._recipients:
            missing.append("recipients")
        return missing

    def is_sendable(self) -> bool:
        return not self.missing_fields()

    def __repr__(self) -> str:
        return (
            f"MailMessage(sender={self._sender!r}, subject={self._subject!r}, "
            f"recipients={list(self._recipients)!r})"
        )
