"""Microsoft Graph mail client: fetch a message and reply in its thread.

Authenticates with the client-credentials flow against the fixed
login.microsoftonline.com endpoint. A fresh app token is requested for every
Graph call; tokens are not cached.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.core.exceptions import MailGatewayError
from src.core.schemas.mail import MailItem

logger = logging.getLogger(__name__)

MESSAGE_SELECT = (
    "subject,from,bodyPreview,conversationId,internetMessageId,replyTo,receivedDateTime"
)


class GraphMailClient:
    """Mail Gateway over Microsoft Graph v1.0 (no msgraph-sdk dependency)."""

    API_BASE = "https://graph.microsoft.com/v1.0"
    LOGIN_BASE = "https://login.microsoftonline.com"
    SCOPE = "https://graph.microsoft.com/.default"

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        user_id: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._user_id = user_id
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._tenant_id and self._client_id and self._client_secret and self._user_id)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=15.0)
        return self._client

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------
    async def acquire_token(self) -> str:
        """Request an app-only access token (client credentials grant)."""
        client = await self._get_client()
        url = f"{self.LOGIN_BASE}/{self._tenant_id}/oauth2/v2.0/token"
        data = await self._request(
            client,
            "POST",
            url,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "scope": self.SCOPE,
                "grant_type": "client_credentials",
            },
        )
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise MailGatewayError("Graph token response has no access_token")
        return token

    # ------------------------------------------------------------------
    # Mail
    # ------------------------------------------------------------------
    def _message_url(self, message_id: str) -> str:
        return (
            f"{self.API_BASE}/users/{quote(self._user_id, safe='')}"
            f"/messages/{quote(message_id, safe='')}"
        )

    async def fetch_message(self, message_id: str) -> MailItem:
        """Fetch one message by id, projected to a MailItem."""
        self._require_config()
        token = await self.acquire_token()
        client = await self._get_client()
        data = await self._request(
            client,
            "GET",
            self._message_url(message_id),
            params={"$select": MESSAGE_SELECT},
            headers={"Authorization": f"Bearer {token}"},
        )
        if not isinstance(data, dict):
            raise MailGatewayError("Graph returned an unexpected message payload")
        return MailItem.from_graph(data)

    async def reply_to_message(self, message_id: str, text: str) -> None:
        """Reply to a message; Graph keeps the reply in the original thread."""
        self._require_config()
        token = await self.acquire_token()
        client = await self._get_client()
        await self._request(
            client,
            "POST",
            f"{self._message_url(message_id)}/reply",
            json={"comment": text},
            headers={"Authorization": f"Bearer {token}"},
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _require_config(self) -> None:
        if not self.is_configured:
            raise MailGatewayError("Microsoft Graph is not configured")

    async def _request(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> Any:
        try:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning("Graph %s %s failed: %s", method, url, detail)
            raise MailGatewayError(detail) from e
        except httpx.HTTPError as e:
            logger.warning("Graph %s %s failed: %s", method, url, e)
            raise MailGatewayError(str(e) or type(e).__name__) from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise MailGatewayError("Graph returned invalid JSON") from e


def _error_detail(resp: httpx.Response) -> str:
    """Best-effort readable error text from a Graph/AAD error response."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"

    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return f"HTTP {resp.status_code}: {err['message']}"
        if body.get("error_description"):
            return f"HTTP {resp.status_code}: {body['error_description']}"
    return f"HTTP {resp.status_code}"
