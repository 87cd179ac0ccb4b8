"""Command handlers for Telegram updates."""

import asyncio
from dataclasses import dataclass

from sales_bot.adapters.telegram_client import TelegramClient
from sales_bot.services.accounts import AccountService
from sales_bot.services.flow import WELCOME_TEXT
from sales_bot.services.registration import UNREGISTERED_TEXT


@dataclass
class StartCommandHandler:
    """Handle the /start Telegram command."""

    account_service: AccountService
    telegram_client: TelegramClient

    async def handle(self, identity: str, chat_id: int) -> None:
        """Send a welcome that matches the identity's registration status."""
        authorized = await asyncio.to_thread(
            self.account_service.is_authorized, identity
        )
        if authorized:
            await self.telegram_client.send_message(chat_id=chat_id, text=WELCOME_TEXT)
            return
        await self.telegram_client.send_message(
            chat_id=chat_id, text=UNREGISTERED_TEXT
        )
