"""Telegram HTML message texts for the bridge.

Telegram interprets a subset of HTML in ``parse_mode=HTML`` messages, so
every dynamic value is passed through :func:`escape_html` before it is
placed inside a template. Static texts below are written pre-escaped.
"""

from src.core.schemas.mail import MailItem

READ_PREVIEW_LIMIT = 1500
NOTIFY_PREVIEW_LIMIT = 500

HELP_TEXT = (
    "Merhaba! Komutlar:\n"
    "/oku &lt;messageId&gt; - maili göster\n"
    "/taslak &lt;messageId&gt; &lt;yönerge&gt; - yanıt taslağı üret\n"
    "/cevapla &lt;messageId&gt; &lt;yönerge&gt; - taslak üret ve yanıtla"
)

UNKNOWN_COMMAND_TEXT = "Komut anlaşılmadı. Yardım için /start yazın."

REPLY_SENT_TEXT = "Yanıt gönderildi ✅"

USAGE_TEXTS = {
    "/oku": "Kullanım: /oku &lt;messageId&gt;",
    "/taslak": "Kullanım: /taslak &lt;messageId&gt; &lt;yönerge&gt;",
    "/cevapla": "Kullanım: /cevapla &lt;messageId&gt; &lt;yönerge&gt;",
}


def escape_html(text: object) -> str:
    """Escape ``&``, ``<`` and ``>`` for Telegram HTML.

    No special-casing of existing entities: escaping twice double-escapes.
    """
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def truncate(text: str, limit: int) -> str:
    return (text or "")[:limit]


def _sender_line(mail: MailItem) -> str:
    return (
        f"<b>Kimden:</b> {escape_html(mail.sender_name)} "
        f"&lt;{escape_html(mail.sender_address)}&gt;"
    )


def format_mail_summary(mail: MailItem) -> str:
    """Outcome text for ``/oku``."""
    return (
        f"<b>Konu:</b> {escape_html(mail.subject)}\n"
        f"{_sender_line(mail)}\n"
        f"<b>Alındı:</b> {escape_html(mail.received_at)}\n\n"
        f"{escape_html(truncate(mail.body_preview, READ_PREVIEW_LIMIT))}"
    )


def format_new_mail(mail: MailItem, message_id: str) -> str:
    """Notification text for a mailbox change event."""
    return (
        "<b>Yeni e-posta</b>\n"
        f"<b>Konu:</b> {escape_html(mail.subject)}\n"
        f"{_sender_line(mail)}\n"
        f"<b>Mesaj ID:</b> <code>{escape_html(message_id)}</code>\n\n"
        f"{escape_html(truncate(mail.body_preview, NOTIFY_PREVIEW_LIMIT))}"
    )


def format_new_mail_failed(message_id: str, detail: str) -> str:
    return (
        "Yeni e-posta alındı fakat getirilemedi "
        f"(<code>{escape_html(message_id)}</code>): {escape_html(detail)}"
    )


def format_draft(draft: str) -> str:
    return f"<b>Taslak:</b>\n\n{escape_html(draft)}"


def format_read_failed(detail: str) -> str:
    return f"Mail getirilemedi: {escape_html(detail)}"


def format_action_failed(detail: str) -> str:
    return f"İşlem başarısız: {escape_html(detail)}"
