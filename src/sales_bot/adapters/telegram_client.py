"""Telegram API client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class TelegramClient(Protocol):
    """Interface for Telegram API interactions."""

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a Telegram chat."""

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        """Set the bot command list."""

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        """Set the chat menu button."""


@dataclass
class HttpxTelegramClient:
    """Telegram client implemented with httpx."""

    bot_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, bot_token: str) -> "HttpxTelegramClient":
        """Create a Telegram client with a managed httpx session."""
        return cls(bot_token=bot_token, http_client=httpx.AsyncClient())

    def _url(self, method: str) -> str:
        return f"https://api.telegram.org/bot{self.bot_token}/{method}"

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a message using Telegram's sendMessage API."""
        payload: dict[str, object] = {"chat_id": chat_id, "text": text}
        response = await self.http_client.post(
            self._url("sendMessage"), json=payload, timeout=10
        )
        response.raise_for_status()

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        """Set the bot command list."""
        payload: dict[str, object] = {"commands": commands}
        response = await self.http_client.post(
            self._url("setMyCommands"), json=payload, timeout=10
        )
        response.raise_for_status()

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        """Set the chat menu button."""
        payload: dict[str, object] = {
            "menu_button": menu_button or {"type": "commands"}
        }
        response = await self.http_client.post(
            self._url("setChatMenuButton"), json=payload, timeout=10
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
