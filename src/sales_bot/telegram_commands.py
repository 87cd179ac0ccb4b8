"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Welcome and registration help")
    SALE = TelegramCommand("sale", "Start a new sale")
    CANCEL = TelegramCommand("cancel", "Cancel the sale in progress")

    @property
    def slash(self) -> str:
        return f"/{self.value.command}"


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
