from typing import Any

from src.gateway.types import IncomingMessage, MessageType, OutgoingMessage


class MockGateway:
    """Mock gateway for testing: records all sent messages."""

    def __init__(self, fail_with: Exception | None = None):
        self.sent_messages: list[OutgoingMessage] = []
        self.fail_with = fail_with

    def parse_update(self, data: dict[str, Any]) -> IncomingMessage | None:
        msg = data.get("message") or data.get("edited_message")
        if not msg or not msg.get("text"):
            return None
        return IncomingMessage(
            id=str(msg.get("message_id", "")),
            user_id=str((msg.get("from") or {}).get("id", "")),
            chat_id=str(msg["chat"]["id"]),
            type=MessageType.text,
            text=msg["text"],
            edited="message" not in data,
            raw=data,
        )

    async def send(self, message: OutgoingMessage) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent_messages.append(message)

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    @property
    def last_message(self) -> OutgoingMessage | None:
        return self.sent_messages[-1] if self.sent_messages else None

    def clear(self) -> None:
        self.sent_messages.clear()
