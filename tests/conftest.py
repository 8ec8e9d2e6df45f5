"""
Shared test fixtures and configuration for pytest
"""
import os
import tempfile

# Keep logs and config files out of the real home directory
os.environ["MINIMAIL_HOME"] = tempfile.mkdtemp(prefix="minimail-tests-")

import pytest

from minimail.core import MailMessage
from minimail.utils.config import ConfigManager
from minimail.utils.console import reset_console

from .helpers import HAPPY_REPLIES, FakeTransport


@pytest.fixture
def message():
    """Sendable message with two recipients"""
    msg = MailMessage()
    msg.set_sender("a@x.com")
    msg.set_subject("Hi")
    msg.set_body("Hello")
    msg.add_recipient("b@x.com")
    msg.add_recipient("c@x.com")
    return msg

@pytest.fixture
def happy_transport():
    """Transport answering every step of a two-recipient dialogue with success"""
    return FakeTransport(HAPPY_REPLIES)

@pytest.fixture
def config_path(tmp_path):
    """Location for a throwaway config file"""
    return tmp_path / "config.json"

@pytest.fixture(autouse=True)
def isolate_environment(tmp_path, monkeypatch):
    """Fresh config singleton, console and SMTP environment for each test"""
    for name in ("HOST", "PORT", "DOMAIN", "USE_TLS", "TIMEOUT"):
        monkeypatch.delenv(f"MINIMAIL_SMTP_{name}", raising=False)
    monkeypatch.chdir(tmp_path)

    ConfigManager.reset()
    reset_console()
    yield
    ConfigManager.reset()
    reset_console()
