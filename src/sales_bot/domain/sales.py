"""Domain models for sales conversations."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class State(str, Enum):
    """Conversation states for a single user."""

    INITIAL = "INITIAL"
    AWAITING_CLIENT_NAME = "AWAITING_CLIENT_NAME"
    AWAITING_DESCRIPTION = "AWAITING_DESCRIPTION"
    AWAITING_UNIT_TYPE = "AWAITING_UNIT_TYPE"
    AWAITING_QUANTITY = "AWAITING_QUANTITY"
    AWAITING_PRICE = "AWAITING_PRICE"
    AWAITING_PRODUCT_ACTION = "AWAITING_PRODUCT_ACTION"
    EDITING_CART = "EDITING_CART"
    AWAITING_PAYMENT_METHOD = "AWAITING_PAYMENT_METHOD"
    CONFIRMING = "CONFIRMING"
    AWAITING_EMAIL = "AWAITING_EMAIL"


class ProductAction(Enum):
    """Menu choices offered after each cart change."""

    ADD = 1
    REMOVE = 2
    FINISH = 3


UNIT_TYPES: tuple[str, ...] = ("Units", "Kilograms", "Grams", "Liters")
PAYMENT_METHODS: tuple[str, ...] = ("Cash", "Card", "Transfer", "Yape", "Plin")


@dataclass(frozen=True)
class LineItem:
    """A completed product entry in the cart."""

    description: str
    unit_type: str
    quantity: Decimal
    price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.price


@dataclass(frozen=True)
class PendingItem:
    """A line item whose fields are still being collected."""

    description: str
    unit_type: str | None = None
    quantity: Decimal | None = None


@dataclass(frozen=True)
class DraftTransaction:
    """The cart and metadata assembled before a sale is committed."""

    client_name: str = ""
    line_items: tuple[LineItem, ...] = ()
    pending_item: PendingItem | None = None
    payment_method: str | None = None
    total: Decimal = Decimal("0")


@dataclass(frozen=True)
class Session:
    """Per-user pointer into the conversation plus its draft."""

    state: State = State.INITIAL
    draft: DraftTransaction | None = None
    business_name: str | None = None

    @property
    def is_idle(self) -> bool:
        return (
            self.state is State.INITIAL
            and self.draft is None
            and self.business_name is None
        )


@dataclass(frozen=True)
class SaleRecord:
    """A committed sale as stored by the persistence layer."""

    id: str
    identity: str
    client_name: str
    payment_method: str | None
    total: Decimal
    created_at: datetime | None
