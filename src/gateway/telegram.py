"""Telegram Gateway: aiogram v3 implementation."""

import logging
from typing import Any

from aiogram import Bot, types
from aiogram.types import LinkPreviewOptions
from pydantic import ValidationError

from src.core.exceptions import MalformedRequestError
from src.gateway.types import IncomingMessage, MessageType, OutgoingMessage

logger = logging.getLogger(__name__)

MAX_MESSAGE_LEN = 4000
MAX_ENTITY_LEN = len("&quot;")


class TelegramGateway:
    """Gateway implementation for Telegram via aiogram v3 (webhook mode)."""

    def __init__(self, token: str, webhook_url: str = "", secret_token: str = ""):
        self.bot = Bot(token=token)
        self.webhook_url = webhook_url
        self.secret_token = secret_token

    def parse_update(self, data: dict[str, Any]) -> IncomingMessage | None:
        """Validate a raw webhook update; return its text message, if any.

        Raises MalformedRequestError when ``data`` is not a Telegram Update.
        """
        try:
            update = types.Update.model_validate(data)
        except ValidationError as e:
            raise MalformedRequestError(f"Invalid Telegram update: {e}") from e

        msg = update.message or update.edited_message
        if msg is None:
            return None
        return _convert_message(msg, edited=update.message is None)

    async def send(self, message: OutgoingMessage) -> None:
        kwargs = {
            "chat_id": _chat_id(message.chat_id),
            "parse_mode": message.parse_mode,
            "link_preview_options": LinkPreviewOptions(
                is_disabled=message.disable_web_page_preview
            ),
        }
        for chunk in _split_message(message.text or "", max_len=MAX_MESSAGE_LEN):
            await self.bot.send_message(**kwargs, text=chunk)

    async def start(self) -> None:
        if self.webhook_url:
            await self.bot.set_webhook(self.webhook_url, secret_token=self.secret_token or None)
            logger.info("Webhook set to %s", self.webhook_url)
        else:
            logger.info("No webhook URL configured, expecting updates on /telegram/webhook")

    async def stop(self) -> None:
        await self.bot.session.close()


def _convert_message(msg: types.Message, edited: bool = False) -> IncomingMessage:
    """Convert aiogram Message to IncomingMessage."""
    return IncomingMessage(
        id=str(msg.message_id),
        user_id=str(msg.from_user.id) if msg.from_user else "",
        chat_id=str(msg.chat.id),
        type=MessageType.text if msg.text else MessageType.other,
        text=msg.text,
        edited=edited,
        raw=msg,
    )


def _chat_id(value: str) -> int | str:
    """Numeric chat ids go out as int, ``@channel`` usernames as str."""
    return int(value) if value.lstrip("-").isdigit() else value


def _split_message(text: str, max_len: int = MAX_MESSAGE_LEN) -> list[str]:
    """Split a long message into chunks that fit Telegram's 4096-char limit.

    Splits on paragraph boundaries first, then newlines, then hard-cuts.
    """
    if len(text) <= max_len:
        return [text]

    chunks: list[str] = []
    remaining = text

    while remaining:
        if len(remaining) <= max_len:
            chunks.append(remaining)
            break

        # Try to split at paragraph boundary
        cut = remaining.rfind("\n\n", 0, max_len)
        if cut > max_len // 3:
            chunks.append(remaining[:cut])
            remaining = remaining[cut + 2:]
            continue

        # Try to split at newline
        cut = remaining.rfind("\n", 0, max_len)
        if cut > max_len // 3:
            chunks.append(remaining[:cut])
            remaining = remaining[cut + 1:]
            continue

        # Hard cut at max_len, never inside an HTML entity
        cut = _entity_safe_cut(remaining, max_len)
        chunks.append(remaining[:cut])
        remaining = remaining[cut:]

    return chunks


def _entity_safe_cut(text: str, cut: int) -> int:
    """Move ``cut`` back before an ``&`` whose entity would be split."""
    amp = text.rfind("&", max(0, cut - MAX_ENTITY_LEN), cut)
    if amp > 0 and text.find(";", amp, cut) == -1:
        return amp
    return cut
