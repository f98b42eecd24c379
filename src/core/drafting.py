"""Draft generator: turns a mail plus an operator instruction into reply text."""

import logging

from src.core.exceptions import DraftGenerationError
from src.core.llm.clients import generate_text
from src.core.llm.prompts import (
    DEFAULT_DRAFT_INSTRUCTION,
    DRAFT_SYSTEM_PROMPT,
    DRAFT_USER_PROMPT_TEMPLATE,
)
from src.core.observability import observe
from src.core.schemas.mail import MailItem

logger = logging.getLogger(__name__)

UNCONFIGURED_DRAFT = (
    "(LLM API key missing) – örnek taslak: Merhaba, e-postanız için teşekkürler. "
    "En kısa sürede dönüş yapacağım."
)
EMPTY_DRAFT = "Taslak üretilemedi."


def build_draft_prompts(mail: MailItem, argument: str) -> tuple[str, str]:
    """Return the (system, user) instruction pair for a reply draft."""
    user = DRAFT_USER_PROMPT_TEMPLATE.format(
        instruction=argument or DEFAULT_DRAFT_INSTRUCTION,
        subject=mail.subject,
        sender_name=mail.sender_name,
        sender_address=mail.sender_address,
        body_preview=mail.body_preview,
    )
    return DRAFT_SYSTEM_PROMPT, user


class DraftGenerator:
    """LLM-backed draft generator. Returns a fixed sample when no API key is set."""

    def __init__(self, api_key: str = "", model: str = "gpt-4o-mini", max_tokens: int = 1024):
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @observe(name="generate_draft")
    async def generate(self, system: str, user: str) -> str:
        if not self.is_configured:
            return UNCONFIGURED_DRAFT

        try:
            text = await generate_text(
                self._model,
                system,
                [{"role": "user", "content": user}],
                max_tokens=self._max_tokens,
                api_key=self._api_key,
            )
        except Exception as e:
            logger.warning("Draft LLM call failed (%s): %s", self._model, e)
            raise DraftGenerationError(str(e) or type(e).__name__) from e

        return text.strip() or EMPTY_DRAFT
