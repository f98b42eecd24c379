"""Chat command parser.

Supported forms::

    /start
    /oku <messageId>
    /taslak <messageId> <instruction>
    /cevapla <messageId> <instruction>
"""

import re

from src.core.schemas.intent import Command, Intent

# Space separators only; ASCII control characters stay part of a token.
_WHITESPACE = re.compile(
    r"[ \t\n\r\f\v\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)


def parse_command(line: str) -> Intent | None:
    """Parse one line of chat text into an Intent.

    Returns None for empty or whitespace-only input. Never raises.
    """
    tokens = [t for t in _WHITESPACE.split(line) if t]
    if not tokens:
        return None

    command = Command.from_token(tokens[0])
    if len(tokens) == 1:
        return Intent(command=command)

    return Intent(command=command, target_id=tokens[1], argument=" ".join(tokens[2:]))
