"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from sales_bot.adapters.telegram_client import TelegramClient
from sales_bot.config import Settings
from sales_bot.containers import AppContainer
from sales_bot.domain.accounts import Account
from sales_bot.domain.sales import DraftTransaction, SaleRecord
from sales_bot.services.accounts import AccountRepository, AccountService
from sales_bot.services.admin import AdminService
from sales_bot.services.commands import StartCommandHandler
from sales_bot.services.sales import SaleRepository, SalesConversationService
from sales_bot.services.session_store import InMemorySessionStore


@dataclass
class InMemoryAccountRepository(AccountRepository):
    """In-memory account repository for tests."""

    accounts: dict[str, Account] = field(default_factory=dict)
    fail_on_create: bool = False

    def get_account(self, identity: str) -> Account | None:
        return self.accounts.get(identity)

    def create_account(self, identity: str, business_name: str, email: str) -> Account:
        if self.fail_on_create:
            raise RuntimeError("insert failed")
        account = Account(identity=identity, business_name=business_name, email=email)
        self.accounts[identity] = account
        return account


@dataclass
class InMemorySaleRepository(SaleRepository):
    """In-memory sale repository for tests."""

    sales: dict[str, tuple[str, DraftTransaction]] = field(default_factory=dict)
    fail_on_commit: bool = False

    def commit(self, identity: str, draft: DraftTransaction) -> str:
        if self.fail_on_commit:
            raise RuntimeError("database unavailable")
        sale_id = f"sale-{len(self.sales) + 1}"
        self.sales[sale_id] = (identity, draft)
        return sale_id

    def list_recent(self, limit: int) -> list[SaleRecord]:
        records = [
            SaleRecord(
                id=sale_id,
                identity=identity,
                client_name=draft.client_name,
                payment_method=draft.payment_method,
                total=draft.total,
                created_at=datetime(2024, 1, 1, tzinfo=UTC),
            )
            for sale_id, (identity, draft) in self.sales.items()
        ]
        return list(reversed(records))[:limit]


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(self, chat_id: int, text: str) -> None:
        self.messages.append((chat_id, text))

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


REGISTERED_IDENTITY = "123"


def registered_accounts() -> InMemoryAccountRepository:
    return InMemoryAccountRepository(
        accounts={
            REGISTERED_IDENTITY: Account(
                identity=REGISTERED_IDENTITY,
                business_name="Corner Shop",
                email="owner@example.com",
            )
        }
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        telegram_bot_token="test-token",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def account_repository() -> InMemoryAccountRepository:
    return registered_accounts()


@pytest.fixture
def sale_repository() -> InMemorySaleRepository:
    return InMemorySaleRepository()


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def conversation_service(
    account_repository: InMemoryAccountRepository,
    sale_repository: InMemorySaleRepository,
) -> SalesConversationService:
    return SalesConversationService(
        session_store=InMemorySessionStore(),
        account_service=AccountService(account_repository),
        sale_repository=sale_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    telegram_client: FakeTelegramClient,
    conversation_service: SalesConversationService,
) -> AppContainer:
    account_service = conversation_service.account_service
    admin_service = AdminService(
        session_store=conversation_service.session_store,
        sale_repository=conversation_service.sale_repository,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        account_service=account_service,
        start_command_handler=StartCommandHandler(account_service, telegram_client),
        conversation_service=conversation_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
