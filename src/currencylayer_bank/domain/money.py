from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

from .currencies import find_currency
from .rates import RateTable


class UnknownRate(LookupError):
    def __init__(self, from_currency: str, to_currency: str) -> None:
        super().__init__(f"No conversion rate known for '{from_currency}' -> '{to_currency}'")
        self.from_currency = from_currency
        self.to_currency = to_currency


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        currency = find_currency(self.currency)
        if currency is None:
            msg = f"Unknown currency {self.currency!r}"
            raise ValueError(msg)
        object.__setattr__(self, "currency", currency.code)
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))


class VariableExchangeBank:
    """Bank backed by a mutable rate table; subclasses decide where rates come from."""

    def __init__(self) -> None:
        self._rates = RateTable()

    @property
    def rate_table(self) -> RateTable:
        return self._rates

    def add_rate(self, from_currency: str, to_currency: str, rate: float) -> None:
        self._rates.add(from_currency, to_currency, rate)

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        rate = self._rates.get(from_currency, to_currency)
        if rate is None:
            raise UnknownRate(from_currency, to_currency)
        return rate

    def exchange_with(self, money: Money, to_currency: str) -> Money:
        target = find_currency(to_currency)
        if target is None:
            msg = f"Unknown currency {to_currency!r}"
            raise ValueError(msg)
        if money.currency == target.code:
            return money

        rate = self.get_rate(money.currency, target.code)
        exponent = Decimal(1).scaleb(-target.minor_units)
        amount = (money.amount * Decimal(str(rate))).quantize(exponent, rounding=ROUND_HALF_EVEN)
        return Money(amount=amount, currency=target.code)


__all__ = ["Money", "UnknownRate", "VariableExchangeBank"]
