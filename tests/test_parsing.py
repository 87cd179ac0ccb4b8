"""Tests for free-text parsers."""

from decimal import Decimal

import pytest

from sales_bot.services.parsing import (
    is_affirmative,
    is_negative,
    is_valid_email,
    parse_amount,
    parse_selector,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3", Decimal("3")),
        (" 2.5 ", Decimal("2.5")),
        (".5", Decimal("0.5")),
        ("10.", Decimal("10")),
        ("0", Decimal("0")),
    ],
)
def test_parse_amount_accepts_plain_numbers(text: str, expected: Decimal) -> None:
    assert parse_amount(text) == expected


@pytest.mark.parametrize(
    "text", ["", "  ", "abc", "-1", "+1", "1e3", "nan", "inf", "1_000", "1,5", "."]
)
def test_parse_amount_rejects_malformed_numbers(text: str) -> None:
    assert parse_amount(text) is None


def test_parse_selector_bounds() -> None:
    assert parse_selector("1", 4) == 1
    assert parse_selector(" 4 ", 4) == 4
    assert parse_selector("0", 4) is None
    assert parse_selector("5", 4) is None
    assert parse_selector("2.0", 4) is None
    assert parse_selector("-1", 4) is None
    assert parse_selector("", 4) is None
    assert parse_selector("1", 0) is None


def test_yes_no_tokens() -> None:
    assert is_affirmative("Sí")
    assert is_affirmative("SI")
    assert is_affirmative("yes")
    assert not is_affirmative("no")
    assert is_negative(" NO ")
    assert not is_negative("nope")


def test_email_validation() -> None:
    assert is_valid_email("owner@shop.pe")
    assert not is_valid_email("owner@shop")
    assert not is_valid_email("owner shop@mail.com")
    assert not is_valid_email("")


def test_parse_amount_rejects_oversized_input() -> None:
    assert parse_amount("1" * 12) == Decimal("1" * 12)
    assert parse_amount("1" * 13) is None
    assert parse_amount("1" * 5000) is None


def test_parse_amount_rejects_non_ascii_digits() -> None:
    assert parse_amount("٣") is None
    assert parse_amount("３") is None
