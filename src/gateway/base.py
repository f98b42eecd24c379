from typing import Any, Protocol

from src.gateway.types import IncomingMessage, OutgoingMessage


class MessageGateway(Protocol):
    """Abstract chat transport interface. Implementations: Telegram, mock."""

    def parse_update(self, data: dict[str, Any]) -> IncomingMessage | None: ...

    async def send(self, message: OutgoingMessage) -> None: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
