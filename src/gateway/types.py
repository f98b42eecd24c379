from dataclasses import dataclass
from enum import StrEnum


class MessageType(StrEnum):
    text = "text"
    other = "other"


@dataclass
class IncomingMessage:
    """Universal incoming message, transport-agnostic."""

    id: str
    user_id: str
    chat_id: str
    type: MessageType
    text: str | None = None
    edited: bool = False
    raw: object = None


@dataclass
class OutgoingMessage:
    """Universal outgoing message."""

    text: str
    chat_id: str
    parse_mode: str = "HTML"
    disable_web_page_preview: bool = True
