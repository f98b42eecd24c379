from typing import Any

DRAFT_SYSTEM_PROMPT = """\
You are an email assistant. Write concise, polite, and professional Turkish \
replies unless otherwise requested. Keep thread context, avoid greeting \
duplication, and preserve a neutral tone."""

DEFAULT_DRAFT_INSTRUCTION = "kısa ve nazik yanıt"

DRAFT_USER_PROMPT_TEMPLATE = """\
Girdi yönergesi: {instruction}

Önceki mail özeti:
Konu: {subject}
Kimden: {sender_name} <{sender_address}>
Özet: {body_preview}"""


class PromptAdapter:
    """Adapts prompts for different LLM providers."""

    @staticmethod
    def for_claude(
        system: str,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Format for Anthropic Claude API."""
        return {
            "system": system,
            "messages": messages,
        }

    @staticmethod
    def for_openai(
        system: str,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Format for OpenAI API."""
        return {
            "messages": [
                {"role": "system", "content": system},
                *messages,
            ],
        }
