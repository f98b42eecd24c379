from src.core.schemas.intent import Command, Intent
from src.core.schemas.mail import MailItem
from src.core.schemas.notifications import ChangeEvent, ChangeNotificationBatch, ResourceData

__all__ = [
    "ChangeEvent",
    "ChangeNotificationBatch",
    "Command",
    "Intent",
    "MailItem",
    "ResourceData",
]
