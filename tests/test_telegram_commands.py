"""Tests for Telegram command definitions."""

from sales_bot.telegram_commands import BotCommand, telegram_commands


def test_telegram_commands_include_sale() -> None:
    commands = telegram_commands()

    assert {"command": "sale", "description": "Start a new sale"} in commands
    assert len(commands) == len(list(BotCommand))
    assert BotCommand.CANCEL.slash == "/cancel"
