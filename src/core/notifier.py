"""Notifier: delivers pre-formatted Telegram HTML text to a chat."""

import logging

from src.core.exceptions import NotifierError
from src.gateway.base import MessageGateway
from src.gateway.types import OutgoingMessage

logger = logging.getLogger(__name__)


class Notifier:
    """Sends outcome messages through a chat gateway.

    ``default_chat_id`` is used when no destination override is given, e.g.
    for mailbox notifications which have no originating chat.
    """

    def __init__(self, gateway: MessageGateway | None, default_chat_id: str = ""):
        self._gateway = gateway
        self._default_chat_id = default_chat_id

    async def notify(self, text: str, chat_id: str | None = None) -> None:
        destination = chat_id or self._default_chat_id
        if self._gateway is None or not destination:
            logger.warning("Notifier has no gateway or destination, dropping message")
            return

        try:
            await self._gateway.send(OutgoingMessage(text=text, chat_id=destination))
        except Exception as e:
            logger.warning("Telegram send to %s failed: %s", destination, e)
            raise NotifierError(str(e) or type(e).__name__) from e
