"""Conversation state machine for building a sale."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from sales_bot.domain.sales import (
    PAYMENT_METHODS,
    UNIT_TYPES,
    DraftTransaction,
    LineItem,
    PendingItem,
    ProductAction,
    Session,
    State,
)
from sales_bot.services.cart import cart_total, format_cart, format_item_choices
from sales_bot.services.parsing import (
    is_affirmative,
    is_negative,
    normalize_token,
    parse_amount,
    parse_selector,
)

logger = logging.getLogger(__name__)

START_COMMAND = "start sale"

WELCOME_TEXT = f'Welcome to the sales assistant!\n\nType "{START_COMMAND}" to begin.'
RESTART_TEXT = (
    "Your sale in progress was lost. "
    f'Please type "{START_COMMAND}" to begin again.'
)
CANCELLED_TEXT = "Sale cancelled."
ACTION_MENU = (
    "What would you like to do?\n"
    "1. Add product\n"
    "2. Remove product\n"
    "3. Finish sale"
)
CONFIRM_CHOICES = 'Reply "yes" (or "si") to confirm or "no" to cancel.'


@dataclass(frozen=True)
class CommitSale:
    """Request to durably record a confirmed draft."""

    draft: DraftTransaction


@dataclass(frozen=True)
class FlowStep:
    """Outcome of feeding one message to the state machine."""

    session: Session
    messages: tuple[str, ...]
    effect: CommitSale | None = None


_Handler = Callable[[Session, DraftTransaction, str], FlowStep]


@dataclass(frozen=True)
class FlowEngine:
    """Pure transition function over sessions."""

    currency: str = "S/."

    def advance(self, session: Session, text: str) -> FlowStep:
        """Return the next session and replies for an inbound message."""
        if session.state is State.INITIAL:
            return self._start(session, text)

        handlers: dict[State, _Handler] = {
            State.AWAITING_CLIENT_NAME: self._client_name,
            State.AWAITING_DESCRIPTION: self._description,
            State.AWAITING_UNIT_TYPE: self._unit_type,
            State.AWAITING_QUANTITY: self._quantity,
            State.AWAITING_PRICE: self._price,
            State.AWAITING_PRODUCT_ACTION: self._product_action,
            State.EDITING_CART: self._remove_item,
            State.AWAITING_PAYMENT_METHOD: self._payment_method,
            State.CONFIRMING: self._confirm,
        }
        handler = handlers.get(session.state)
        if handler is None or session.draft is None:
            return _restart(session)
        return handler(session, session.draft, text)

    def _start(self, session: Session, text: str) -> FlowStep:
        if normalize_token(text) != START_COMMAND:
            return FlowStep(session, (WELCOME_TEXT,))
        return FlowStep(
            Session(state=State.AWAITING_CLIENT_NAME, draft=DraftTransaction()),
            ("Please enter the client's name:",),
        )

    def _client_name(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        name = text.strip()
        if not name:
            return FlowStep(session, ("The client's name cannot be empty.",))
        return FlowStep(
            replace(
                session,
                state=State.AWAITING_DESCRIPTION,
                draft=replace(draft, client_name=name),
            ),
            ("Enter the product description:",),
        )

    def _description(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        description = text.strip()
        if not description:
            return FlowStep(session, ("The product description cannot be empty.",))
        return FlowStep(
            replace(
                session,
                state=State.AWAITING_UNIT_TYPE,
                draft=replace(draft, pending_item=PendingItem(description)),
            ),
            (_unit_type_prompt(),),
        )

    def _unit_type(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        if draft.pending_item is None:
            return _restart(session)
        choice = parse_selector(text, len(UNIT_TYPES))
        if choice is None:
            return FlowStep(
                session,
                (f"Please select a valid unit type.\n\n{_unit_type_prompt()}",),
            )
        unit_type = UNIT_TYPES[choice - 1]
        pending = replace(draft.pending_item, unit_type=unit_type)
        return FlowStep(
            replace(
                session,
                state=State.AWAITING_QUANTITY,
                draft=replace(draft, pending_item=pending),
            ),
            (f"Enter the quantity in {unit_type}:",),
        )

    def _quantity(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        if draft.pending_item is None:
            return _restart(session)
        quantity = parse_amount(text)
        if quantity is None:
            return FlowStep(
                session, ("Please enter a valid number for the quantity.",)
            )
        pending = replace(draft.pending_item, quantity=quantity)
        return FlowStep(
            replace(
                session,
                state=State.AWAITING_PRICE,
                draft=replace(draft, pending_item=pending),
            ),
            ("Enter the price per unit:",),
        )

    def _price(self, session: Session, draft: DraftTransaction, text: str) -> FlowStep:
        pending = draft.pending_item
        if pending is None or pending.unit_type is None or pending.quantity is None:
            return _restart(session)
        price = parse_amount(text)
        if price is None:
            return FlowStep(session, ("Please enter a valid number for the price.",))
        item = LineItem(
            description=pending.description,
            unit_type=pending.unit_type,
            quantity=pending.quantity,
            price=price,
        )
        updated = replace(
            draft, line_items=(*draft.line_items, item), pending_item=None
        )
        return FlowStep(
            replace(session, state=State.AWAITING_PRODUCT_ACTION, draft=updated),
            (f"{format_cart(updated.line_items, self.currency)}\n\n{ACTION_MENU}",),
        )

    def _product_action(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        choice = parse_selector(text, len(ProductAction))
        if choice is None:
            return FlowStep(
                session, (f"Please select a valid option.\n\n{ACTION_MENU}",)
            )

        action = ProductAction(choice)
        if action is ProductAction.ADD:
            return FlowStep(
                replace(session, state=State.AWAITING_DESCRIPTION),
                ("Enter the description of the new product:",),
            )
        if action is ProductAction.REMOVE:
            if not draft.line_items:
                return FlowStep(
                    session, (f"There are no products to remove.\n\n{ACTION_MENU}",)
                )
            return FlowStep(
                replace(session, state=State.EDITING_CART),
                (
                    "Enter the number of the product to remove:\n\n"
                    f"{format_item_choices(draft.line_items)}",
                ),
            )
        return FlowStep(
            replace(session, state=State.AWAITING_PAYMENT_METHOD),
            (_payment_method_prompt(),),
        )

    def _remove_item(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        choice = parse_selector(text, len(draft.line_items))
        if choice is None:
            return FlowStep(
                session,
                ("Please enter a number that matches a product in the cart.",),
            )
        index = choice - 1
        removed = draft.line_items[index]
        remaining = draft.line_items[:index] + draft.line_items[index + 1 :]
        return FlowStep(
            replace(
                session,
                state=State.AWAITING_PRODUCT_ACTION,
                draft=replace(draft, line_items=remaining),
            ),
            (
                f"Product removed: {removed.description}\n\n"
                f"{format_cart(remaining, self.currency)}\n\n{ACTION_MENU}",
            ),
        )

    def _payment_method(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        choice = parse_selector(text, len(PAYMENT_METHODS))
        if choice is None:
            return FlowStep(
                session,
                (
                    "Please select a valid payment method.\n\n"
                    f"{_payment_method_prompt()}",
                ),
            )
        method = PAYMENT_METHODS[choice - 1]
        updated = replace(
            draft, payment_method=method, total=cart_total(draft.line_items)
        )
        return FlowStep(
            replace(session, state=State.CONFIRMING, draft=updated),
            (
                f"{format_cart(updated.line_items, self.currency)}\n\n"
                f"Payment method: {method}\n\n"
                f"Confirm the sale?\n{CONFIRM_CHOICES}",
            ),
        )

    def _confirm(
        self, session: Session, draft: DraftTransaction, text: str
    ) -> FlowStep:
        if is_affirmative(text):
            return FlowStep(Session(), (), CommitSale(draft))
        if is_negative(text):
            return FlowStep(Session(), (CANCELLED_TEXT,))
        return FlowStep(session, (f"Please answer the question. {CONFIRM_CHOICES}",))


def _restart(session: Session) -> FlowStep:
    logger.warning(
        "Resetting inconsistent session", extra={"state": session.state.value}
    )
    return FlowStep(Session(), (RESTART_TEXT,))


def _unit_type_prompt() -> str:
    options = "\n".join(
        f"{position}. {unit}" for position, unit in enumerate(UNIT_TYPES, start=1)
    )
    return (
        f"Which unit type will you use?\n{options}\n\n"
        "Reply with the number of the option."
    )


def _payment_method_prompt() -> str:
    options = "\n".join(
        f"{position}. {method}"
        for position, method in enumerate(PAYMENT_METHODS, start=1)
    )
    return f"Which payment method will the client use?\n{options}"
