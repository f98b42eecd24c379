from typing import Any

from pydantic import BaseModel, ConfigDict


class MailItem(BaseModel):
    """Read-only projection of a Graph mail message."""

    model_config = ConfigDict(frozen=True)

    subject: str = ""
    sender_name: str = ""
    sender_address: str = ""
    body_preview: str = ""
    received_at: str = ""

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> "MailItem":
        """Build from a Graph ``message`` resource (``$select`` subset)."""
        sender = (data.get("from") or {}).get("emailAddress") or {}
        return cls(
            subject=data.get("subject") or "",
            sender_name=sender.get("name") or "",
            sender_address=sender.get("address") or "",
            body_preview=data.get("bodyPreview") or "",
            received_at=data.get("receivedDateTime") or "",
        )
