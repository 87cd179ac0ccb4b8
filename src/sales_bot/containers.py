"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from sales_bot.adapters.supabase_account_repository import SupabaseAccountRepository
from sales_bot.adapters.supabase_sale_repository import SupabaseSaleRepository
from sales_bot.adapters.telegram_client import HttpxTelegramClient, TelegramClient
from sales_bot.config import Settings
from sales_bot.services.accounts import AccountService
from sales_bot.services.admin import AdminService
from sales_bot.services.commands import StartCommandHandler
from sales_bot.services.flow import FlowEngine
from sales_bot.services.sales import SalesConversationService
from sales_bot.services.session_store import InMemorySessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    account_service: AccountService
    start_command_handler: StartCommandHandler
    conversation_service: SalesConversationService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    account_service = AccountService(SupabaseAccountRepository(supabase_client))
    sale_repository = SupabaseSaleRepository(supabase_client)
    session_store = InMemorySessionStore(
        idle_timeout_seconds=resolved_settings.session_idle_timeout_seconds
    )
    conversation_service = SalesConversationService(
        session_store=session_store,
        account_service=account_service,
        sale_repository=sale_repository,
        engine=FlowEngine(currency=resolved_settings.currency_symbol),
    )
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    start_handler = StartCommandHandler(account_service, telegram_client)
    admin_service = AdminService(
        session_store=session_store,
        sale_repository=sale_repository,
    )

    async def close_resources() -> None:
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        account_service=account_service,
        start_command_handler=start_handler,
        conversation_service=conversation_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
