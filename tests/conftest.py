"""Test fixtures for Mail Bridge."""

import os
from unittest.mock import AsyncMock

import pytest

# Set test environment before importing app modules
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST-token")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LANGFUSE_PUBLIC_KEY", "")

from src.core.notifier import Notifier
from src.core.schemas.mail import MailItem
from src.gateway.mock import MockGateway

DEFAULT_CHAT = "default_chat"
ORIGIN_CHAT = "chat_123"


@pytest.fixture
def mock_gateway():
    """Mock gateway for testing."""
    return MockGateway()


@pytest.fixture
def notifier(mock_gateway):
    """Real notifier over the mock gateway, with a default destination."""
    return Notifier(mock_gateway, default_chat_id=DEFAULT_CHAT)


@pytest.fixture
def sample_mail():
    return MailItem(
        subject="Toplantı <Q3>",
        sender_name="Ayşe & Co",
        sender_address="ayse@example.com",
        body_preview="Merhaba, yarın 15:00 uygun mu?",
        received_at="2026-10-16T08:30:00Z",
    )


@pytest.fixture
def mail_gateway(sample_mail):
    """Mail gateway stub: fetch returns sample_mail, reply succeeds."""
    mail = AsyncMock()
    mail.fetch_message = AsyncMock(return_value=sample_mail)
    mail.reply_to_message = AsyncMock(return_value=None)
    return mail


@pytest.fixture
def draft_generator():
    drafts = AsyncMock()
    drafts.generate = AsyncMock(return_value="Merhaba, 15:00 uygundur.")
    return drafts
