"""Tests for the Microsoft Graph mail client."""

import json

import httpx
import pytest

from src.core.exceptions import MailGatewayError
from src.tools.graph_mail import MESSAGE_SELECT, GraphMailClient

GRAPH_MESSAGE = {
    "subject": "Teklif",
    "from": {"emailAddress": {"name": "Ali", "address": "ali@example.com"}},
    "bodyPreview": "Fiyat teklifi ektedir.",
    "receivedDateTime": "2026-10-15T10:00:00Z",
}


class GraphStub:
    """Records requests and answers token, message and reply calls."""

    def __init__(self, message_status: int = 200, reply_status: int = 202, token_status: int = 200):
        self.requests: list[httpx.Request] = []
        self.message_status = message_status
        self.reply_status = reply_status
        self.token_status = token_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "login.microsoftonline.com":
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"error": "invalid_client", "error_description": "bad secret"},
                )
            return httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3599})
        if request.url.path.endswith("/reply"):
            return httpx.Response(self.reply_status)
        if self.message_status != 200:
            return httpx.Response(
                self.message_status,
                json={"error": {"code": "ErrorItemNotFound", "message": "not found"}},
            )
        return httpx.Response(200, json=GRAPH_MESSAGE)


def _client(stub: GraphStub, **overrides) -> GraphMailClient:
    params = {
        "tenant_id": "tenant-1",
        "client_id": "client-1",
        "client_secret": "secret-1",
        "user_id": "ops@example.com",
    }
    params.update(overrides)
    return GraphMailClient(**params, client=httpx.AsyncClient(transport=httpx.MockTransport(stub)))


@pytest.mark.asyncio
async def test_fetch_message():
    stub = GraphStub()
    mail = await _client(stub).fetch_message("AAMk/1=")

    assert mail.subject == "Teklif"
    assert mail.sender_address == "ali@example.com"

    token_req, get_req = stub.requests
    assert token_req.url.path == "/tenant-1/oauth2/v2.0/token"
    form = dict(httpx.QueryParams(token_req.content.decode()))
    assert form["grant_type"] == "client_credentials"
    assert form["scope"] == "https://graph.microsoft.com/.default"

    assert get_req.method == "GET"
    assert get_req.headers["Authorization"] == "Bearer tok-1"
    assert get_req.url.params["$select"] == MESSAGE_SELECT
    assert b"/users/ops%40example.com/messages/AAMk%2F1" in get_req.url.raw_path


@pytest.mark.asyncio
async def test_reply_to_message():
    stub = GraphStub()
    await _client(stub).reply_to_message("m1", "Teşekkürler")

    reply_req = stub.requests[-1]
    assert reply_req.method == "POST"
    assert reply_req.url.path == "/v1.0/users/ops@example.com/messages/m1/reply"
    assert json.loads(reply_req.content) == {"comment": "Teşekkürler"}


@pytest.mark.asyncio
async def test_fetch_not_found_raises_gateway_error():
    with pytest.raises(MailGatewayError, match="HTTP 404: not found"):
        await _client(GraphStub(message_status=404)).fetch_message("m1")


@pytest.mark.asyncio
async def test_reply_failure_raises_gateway_error():
    with pytest.raises(MailGatewayError, match="HTTP 403"):
        await _client(GraphStub(reply_status=403)).reply_to_message("m1", "x")


@pytest.mark.asyncio
async def test_token_failure_raises_gateway_error():
    stub = GraphStub(token_status=401)
    with pytest.raises(MailGatewayError, match="bad secret"):
        await _client(stub).fetch_message("m1")
    assert len(stub.requests) == 1


@pytest.mark.asyncio
async def test_network_error_raises_gateway_error():
    def boom(request):
        raise httpx.ConnectError("connection refused")

    client = GraphMailClient(
        "t", "c", "s", "u", client=httpx.AsyncClient(transport=httpx.MockTransport(boom))
    )
    with pytest.raises(MailGatewayError, match="connection refused"):
        await client.fetch_message("m1")


@pytest.mark.asyncio
async def test_unconfigured_client_fails_without_requests():
    stub = GraphStub()
    client = _client(stub, client_secret="")
    assert not client.is_configured
    with pytest.raises(MailGatewayError, match="not configured"):
        await client.fetch_message("m1")
    assert stub.requests == []


@pytest.mark.asyncio
async def test_token_requested_per_call():
    stub = GraphStub()
    client = _client(stub)
    await client.fetch_message("m1")
    await client.fetch_message("m2")
    token_calls = [r for r in stub.requests if r.url.host == "login.microsoftonline.com"]
    assert len(token_calls) == 2
    await client.close()
