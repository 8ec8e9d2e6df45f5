"""Test doubles shared across the test suite"""
from minimail.core import Transport


class FakeTransport(Transport):
    """Scripted transport recording every call made by a session.

    ``replies`` are handed out one per read; an exception instance in the
    list is raised instead of returned. Once the script runs out, reads
    return an empty string, as a closed socket would.
    """

    def __init__(self, replies=(), open_error=None, write_error_on=None):
        self.replies = list(replies)
        self.open_error = open_error
        self.write_error_on = write_error_on
        self.calls = []
        self.written = []
        self.open_count = 0
        self.close_count = 0

    def open(self):
        self.calls.append("open")
        if self.open_error is not None:
            raise self.open_error
        self.open_count += 1

    def read(self, size):
        self.calls.append(("read", size))
        if not self.replies:
            return ""
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def write(self, data):
        self.calls.append(("write", data))
        if self.write_error_on is not None and data.startswith(self.write_error_on[0]):
            raise self.write_error_on[1]
        self.written.append(data)

    def close(self):
        self.calls.append("close")
        self.close_count += 1


HAPPY_REPLIES = [
    "220 mail.x.com ESMTP ready\r\n",
    "250 mail.x.com greets localhost\r\n",
    "250 2.1.0 Sender OK\r\n",
    "250 2.1.5 Recipient OK\r\n",
    "250 2.1.5 Recipient OK\r\n",
    "354 End data with <CR><LF>.<CR><LF>\r\n",
    "250 2.0.0 Queued as 1234\r\n",
]
