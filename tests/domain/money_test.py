from __future__ import annotations

from decimal import Decimal

import pytest

from currencylayer_bank.domain.money import Money, UnknownRate, VariableExchangeBank


def test_money_normalizes_currency_and_amount() -> None:
    money = Money(10, " usd ")  # type: ignore[arg-type]

    assert money.currency == "USD"
    assert money.amount == Decimal("10")


def test_money_rejects_unknown_currency() -> None:
    with pytest.raises(ValueError):
        Money(Decimal("1"), "ZZZ")


def test_variable_bank_only_uses_direct_rates() -> None:
    bank = VariableExchangeBank()
    bank.add_rate("USD", "EUR", 0.5)

    assert bank.get_rate("USD", "EUR") == 0.5
    with pytest.raises(UnknownRate) as exc_info:
        bank.get_rate("EUR", "USD")
    assert exc_info.value.from_currency == "EUR"
    assert exc_info.value.to_currency == "USD"


def test_exchange_rounds_to_target_minor_units() -> None:
    bank = VariableExchangeBank()
    bank.add_rate("USD", "JPY", 120.063004)
    bank.add_rate("USD", "BHD", 0.376)

    assert bank.exchange_with(Money(Decimal("1.50"), "USD"), "JPY") == Money(Decimal("180"), "JPY")
    assert bank.exchange_with(Money(Decimal("2.005"), "USD"), "bhd").amount == Decimal("0.754")


def test_exchange_to_same_currency_returns_input() -> None:
    money = Money(Decimal("3.10"), "EUR")

    assert VariableExchangeBank().exchange_with(money, "eur") is money


def test_exchange_rejects_unknown_target() -> None:
    with pytest.raises(ValueError):
        VariableExchangeBank().exchange_with(Money(Decimal("1"), "EUR"), "ZZZ")
