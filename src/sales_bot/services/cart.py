"""Text rendering for carts."""

from collections.abc import Sequence
from decimal import Decimal

from sales_bot.domain.sales import LineItem

EMPTY_CART = "Cart is empty"


def cart_total(items: Sequence[LineItem]) -> Decimal:
    """Return the sum of quantity times price over the items."""
    return sum((item.subtotal for item in items), Decimal("0"))


def format_amount(value: Decimal) -> str:
    """Format a number without trailing zeros or exponent notation."""
    return format(value.normalize(), "f")


def format_cart(items: Sequence[LineItem], currency: str = "S/.") -> str:
    """Render the cart as a numbered list with subtotals and a grand total."""
    if not items:
        return EMPTY_CART

    lines = ["Current cart:", ""]
    for position, item in enumerate(items, start=1):
        lines.extend(
            [
                f"{position}. {item.description}",
                f"   Quantity: {format_amount(item.quantity)} {item.unit_type}",
                f"   Price: {currency}{format_amount(item.price)}",
                f"   Subtotal: {currency}{format_amount(item.subtotal)}",
                "",
            ]
        )
    lines.append(f"Total: {currency}{cart_total(items):.2f}")
    return "\n".join(lines)


def format_item_choices(items: Sequence[LineItem]) -> str:
    """Render the numbered list shown when picking an item to remove."""
    return "\n".join(
        f"{position}. {item.description} "
        f"({format_amount(item.quantity)} {item.unit_type})"
        for position, item in enumerate(items, start=1)
    )
