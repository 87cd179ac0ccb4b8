"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from sales_bot.api.admin import router as admin_router
from sales_bot.api.telegram_models import TelegramUpdate
from sales_bot.app_logging import configure_logging
from sales_bot.config import parse_allowed_user_ids
from sales_bot.containers import AppContainer
from sales_bot.services.flow import START_COMMAND
from sales_bot.telegram_commands import (
    CHAT_MENU_BUTTON,
    BotCommand,
    telegram_commands,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_allowed_user_ids(
        container.settings.telegram_allowed_user_ids
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        message = update.message
        if message is None or message.text is None:
            return {"status": "ok"}

        chat_id = message.chat.id
        if not _is_user_allowed(message.from_user.id, allowed_user_ids):
            await state_container.telegram_client.send_message(
                chat_id=chat_id, text="This bot is private."
            )
            return {"status": "ok"}

        identity = str(message.from_user.id)
        command = _parse_command(message.text)
        if command is BotCommand.START:
            await state_container.start_command_handler.handle(
                identity=identity, chat_id=chat_id
            )
            return {"status": "ok"}
        if command is BotCommand.CANCEL:
            await state_container.telegram_client.send_message(
                chat_id=chat_id,
                text=state_container.conversation_service.cancel(identity),
            )
            return {"status": "ok"}

        text = START_COMMAND if command is BotCommand.SALE else message.text
        replies = await state_container.conversation_service.handle_message(
            identity, text
        )
        for reply in replies:
            await state_container.telegram_client.send_message(
                chat_id=chat_id, text=reply
            )
        return {"status": "ok"}

    return app


def _parse_command(text: str) -> BotCommand | None:
    """Return the bot command a message invokes, ignoring any @botname suffix."""
    if not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0]
    name = head.split("@", maxsplit=1)[0]
    for entry in BotCommand:
        if entry.slash == name:
            return entry
    return None


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    """Return true when the user is allowed to interact with the bot."""
    return allowed is None or user_id in allowed
