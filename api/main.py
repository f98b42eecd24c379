"""Mail Bridge: FastAPI entrypoint (Graph notifications + Telegram webhook)."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from pydantic import ValidationError

from src.core.commands import parse_command
from src.core.config import settings
from src.core.dispatcher import CommandDispatcher
from src.core.drafting import DraftGenerator
from src.core.exceptions import MalformedRequestError
from src.core.notifier import Notifier
from src.core.reducer import NotificationReducer
from src.core.schemas.notifications import ChangeNotificationBatch
from src.gateway.telegram import TelegramGateway
from src.tools.graph_mail import GraphMailClient

logging.basicConfig(level=getattr(logging, settings.log_level))
logger = logging.getLogger(__name__)

TELEGRAM_SECRET_HEADER = "x-telegram-bot-api-secret-token"

gateway: TelegramGateway | None = None
mail_client: GraphMailClient | None = None
dispatcher: CommandDispatcher | None = None
reducer: NotificationReducer | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global gateway, mail_client, dispatcher, reducer
    logger.info("Starting Mail Bridge (%s)...", settings.app_env)

    gateway = TelegramGateway(
        token=settings.telegram_bot_token,
        webhook_url=settings.telegram_webhook_url,
        secret_token=settings.telegram_secret_token,
    )
    await gateway.start()

    mail_client = GraphMailClient(
        tenant_id=settings.graph_tenant_id,
        client_id=settings.graph_client_id,
        client_secret=settings.graph_client_secret,
        user_id=settings.graph_user_id,
    )
    if not mail_client.is_configured:
        logger.warning("Microsoft Graph credentials missing, mail commands will fail")

    drafts = DraftGenerator(api_key=settings.draft_api_key, model=settings.draft_model)
    if not drafts.is_configured:
        logger.warning("No API key for %s, drafts will use a fixed sample", settings.draft_model)

    notifier = Notifier(gateway, default_chat_id=settings.telegram_chat_id)
    dispatcher = CommandDispatcher(mail_client, drafts, notifier)
    reducer = NotificationReducer(mail_client, notifier)

    yield

    if gateway:
        await gateway.stop()
    if mail_client:
        await mail_client.close()
    logger.info("Shutting down Mail Bridge...")


app = FastAPI(title="Mail Bridge", lifespan=lifespan)


@app.get("/health")
async def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Microsoft Graph change notifications
# ------------------------------------------------------------------
@app.get("/graph/notifications")
async def graph_validation(request: Request):
    """Subscription validation handshake: echo validationToken as plain text."""
    token = request.query_params.get("validationToken")
    if token:
        return Response(content=token, media_type="text/plain")
    return Response(content="graph notifications", media_type="text/plain")


@app.post("/graph/notifications")
async def graph_notifications(request: Request):
    """Receive change notifications for new messages."""
    token = request.query_params.get("validationToken")
    if token:
        return Response(content=token, media_type="text/plain")

    try:
        batch = _parse_batch(await request.body())
        if reducer:
            await reducer.reduce(batch.value)
    except Exception:
        logger.exception("Graph notify error")
        return Response(status_code=500)
    return Response(status_code=202)


def _parse_batch(body: bytes) -> ChangeNotificationBatch:
    try:
        return ChangeNotificationBatch.model_validate_json(body)
    except ValidationError as e:
        raise MalformedRequestError(f"Invalid change notification batch: {e}") from e


# ------------------------------------------------------------------
# Telegram webhook
# ------------------------------------------------------------------
@app.post("/telegram/webhook")
async def telegram_webhook(request: Request):
    if settings.telegram_secret_token:
        got = request.headers.get(TELEGRAM_SECRET_HEADER)
        if got != settings.telegram_secret_token:
            return Response(status_code=401)

    try:
        if gateway is None:
            raise RuntimeError("Telegram gateway is not started")
        data = await request.json()
        if not isinstance(data, dict):
            raise MalformedRequestError("Telegram update must be a JSON object")

        incoming = gateway.parse_update(data)
        if incoming is None or not incoming.text:
            return Response(status_code=200)

        intent = parse_command(incoming.text)
        if intent is not None and dispatcher:
            await dispatcher.dispatch(intent, origin=incoming.chat_id)
    except Exception:
        logger.exception("Telegram webhook error")
        return Response(status_code=500)
    return Response(status_code=200)
