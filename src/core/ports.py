"""Collaborator interfaces the dispatcher and reducer are written against."""

from typing import Protocol

from src.core.schemas.mail import MailItem


class MailGateway(Protocol):
    async def fetch_message(self, message_id: str) -> MailItem: ...

    async def reply_to_message(self, message_id: str, text: str) -> None: ...


class DraftGenerator(Protocol):
    async def generate(self, system: str, user: str) -> str: ...


class Notifier(Protocol):
    async def notify(self, text: str, chat_id: str | None = None) -> None: ...
