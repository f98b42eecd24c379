from dataclasses import dataclass
from enum import StrEnum


class Command(StrEnum):
    start = "/start"
    read = "/oku"
    draft = "/taslak"
    reply = "/cevapla"
    unknown = "unknown"

    @classmethod
    def from_token(cls, token: str) -> "Command":
        """Map a raw command token to a variant, case-sensitive."""
        try:
            return cls(token)
        except ValueError:
            return cls.unknown


@dataclass(frozen=True)
class Intent:
    """One parsed chat command line."""

    command: Command
    target_id: str | None = None  # Graph message id the command acts on
    argument: str = ""
