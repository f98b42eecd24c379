"""Command dispatcher: runs one parsed chat command to a single outcome message.

Every call to :meth:`CommandDispatcher.dispatch` delivers exactly one message
to the invoking chat. Adapter failures are caught at the command boundary and
turned into that message; nothing raised by Graph, the LLM or Telegram
escapes ``dispatch``.
"""

import logging

from src.core.drafting import build_draft_prompts
from src.core.exceptions import AdapterError, UsageError
from src.core.formatting import (
    HELP_TEXT,
    REPLY_SENT_TEXT,
    UNKNOWN_COMMAND_TEXT,
    USAGE_TEXTS,
    format_action_failed,
    format_draft,
    format_mail_summary,
    format_read_failed,
)
from src.core.observability import observe
from src.core.ports import DraftGenerator, MailGateway, Notifier
from src.core.schemas.intent import Command, Intent

logger = logging.getLogger(__name__)


class CommandDispatcher:
    def __init__(self, mail: MailGateway, drafts: DraftGenerator, notifier: Notifier):
        self._mail = mail
        self._drafts = drafts
        self._notifier = notifier

    @observe(name="dispatch_command")
    async def dispatch(self, intent: Intent, origin: str) -> None:
        text = await self._outcome(intent)
        try:
            await self._notifier.notify(text, chat_id=origin)
        except Exception as e:
            logger.warning("Outcome of %s not delivered to %s: %s", intent.command, origin, e)

    async def _outcome(self, intent: Intent) -> str:
        match intent.command:
            case Command.start:
                return HELP_TEXT
            case Command.unknown:
                return UNKNOWN_COMMAND_TEXT

        try:
            message_id = _require_target(intent)
        except UsageError:
            logger.debug("Usage error: %s without message id", intent.command)
            return USAGE_TEXTS[intent.command.value]

        if intent.command == Command.read:
            return await self._read(message_id)
        return await self._draft(message_id, intent.argument, send=intent.command == Command.reply)

    async def _read(self, message_id: str) -> str:
        try:
            mail = await self._mail.fetch_message(message_id)
            return format_mail_summary(mail)
        except Exception as e:
            _log_failure("read", message_id, e)
            return format_read_failed(_detail(e))

    async def _draft(self, message_id: str, argument: str, send: bool) -> str:
        """Fetch → generate, then either show the draft or send it as the reply."""
        step = "fetch"
        try:
            mail = await self._mail.fetch_message(message_id)
            step = "generate"
            system, user = build_draft_prompts(mail, argument)
            draft = await self._drafts.generate(system, user)
            if not send:
                return format_draft(draft)
            step = "send"
            await self._mail.reply_to_message(message_id, draft)
        except Exception as e:
            # On send failure the generated draft is dropped, not shown.
            _log_failure(step, message_id, e)
            return format_action_failed(_detail(e))

        logger.info("Reply sent for message %s", message_id)
        return REPLY_SENT_TEXT


def _require_target(intent: Intent) -> str:
    if not intent.target_id:
        raise UsageError(f"{intent.command} requires a message id")
    return intent.target_id


def _detail(e: Exception) -> str:
    return str(e) or type(e).__name__


def _log_failure(step: str, message_id: str, e: Exception) -> None:
    if isinstance(e, AdapterError):
        logger.warning("%s failed for message %s: %s", step, message_id, e)
    else:
        logger.exception("Unexpected error during %s for message %s", step, message_id)
