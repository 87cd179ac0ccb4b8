"""ASGI entrypoint for the sales bot API."""

from sales_bot.api.app import create_app
from sales_bot.containers import build_container

app = create_app(build_container())
