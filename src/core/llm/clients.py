from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from src.core.llm.prompts import PromptAdapter


def get_anthropic_client(api_key: str) -> AsyncAnthropic:
    return AsyncAnthropic(api_key=api_key)


def get_openai_client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key)


async def generate_text(
    model: str,
    system: str,
    messages: list[dict[str, str]],
    max_tokens: int = 1024,
    *,
    api_key: str,
    temperature: float = 0.3,
) -> str:
    """Unified LLM call, routed to the SDK matching the model ID prefix.

    Supports OpenAI (gpt-*) and Anthropic (claude-*) models.
    Returns the generated text content.
    """
    if model.startswith("gpt-"):
        client = get_openai_client(api_key)
        resp = await client.chat.completions.create(
            model=model,
            max_completion_tokens=max_tokens,
            temperature=temperature,
            **PromptAdapter.for_openai(system, messages),
        )
        return resp.choices[0].message.content or ""
    elif model.startswith("claude-"):
        client = get_anthropic_client(api_key)
        resp = await client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            **PromptAdapter.for_claude(system, messages),
        )
        return resp.content[0].text
    else:
        raise ValueError(f"Unknown model prefix: {model}")
