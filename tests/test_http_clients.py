"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx

from sales_bot.adapters.telegram_client import HttpxTelegramClient


def test_telegram_client_send_message() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/bottoken/sendMessage"
        seen.append(json.loads(request.content.decode()))
        return httpx.Response(200, json={"ok": True, "result": {}})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    asyncio.run(client.send_message(chat_id=1, text="Hi"))

    assert seen == [{"chat_id": 1, "text": "Hi"}]


def test_telegram_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"ok": False})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    try:
        asyncio.run(client.send_message(chat_id=1, text="Hi"))
    except httpx.HTTPStatusError as exc:
        assert exc.response.status_code == 400
    else:
        raise AssertionError("expected HTTPStatusError")


def test_telegram_client_commands_and_menu_button() -> None:
    seen_paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        payload = json.loads(request.content.decode())
        if request.url.path.endswith("/setMyCommands"):
            assert payload["commands"][0]["command"] == "sale"
        if request.url.path.endswith("/setChatMenuButton"):
            assert payload["menu_button"]["type"] == "commands"
        return httpx.Response(200, json={"ok": True, "result": True})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxTelegramClient(bot_token="token", http_client=async_client)

    asyncio.run(
        client.set_my_commands([{"command": "sale", "description": "Start a new sale"}])
    )
    asyncio.run(client.set_chat_menu_button())

    assert any(path.endswith("/setMyCommands") for path in seen_paths)
    assert any(path.endswith("/setChatMenuButton") for path in seen_paths)
