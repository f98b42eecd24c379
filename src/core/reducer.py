"""Notification reducer: turns a Graph change batch into chat notifications."""

import logging
from collections.abc import Iterable

from src.core.formatting import format_new_mail, format_new_mail_failed
from src.core.observability import observe
from src.core.ports import MailGateway, Notifier
from src.core.schemas.notifications import ChangeEvent

logger = logging.getLogger(__name__)


class NotificationReducer:
    """One notification per resolvable event, to the default chat.

    Events are isolated: a failed fetch or send for one event never stops
    the rest of the batch. Nothing is retried or deduplicated.
    """

    def __init__(self, mail: MailGateway, notifier: Notifier):
        self._mail = mail
        self._notifier = notifier

    @observe(name="reduce_notifications")
    async def reduce(self, events: Iterable[ChangeEvent]) -> None:
        for event in events:
            message_id = event.resource_message_id
            if not message_id:
                continue
            await self._reduce_one(message_id)

    async def _reduce_one(self, message_id: str) -> None:
        try:
            mail = await self._mail.fetch_message(message_id)
        except Exception as e:
            logger.warning("New mail %s could not be fetched: %s", message_id, e)
            text = format_new_mail_failed(message_id, str(e) or type(e).__name__)
        else:
            text = format_new_mail(mail, message_id)

        try:
            await self._notifier.notify(text)
        except Exception as e:
            logger.warning("Notification for %s not delivered: %s", message_id, e)
