from __future__ import annotations

import pytest

from currencylayer_bank.domain.currencies import (
    find_currency,
    is_known_currency,
    normalize_currency_code,
    register_currency,
)


def test_find_currency_normalizes_input() -> None:
    currency = find_currency(" jpy ")

    assert currency is not None
    assert currency.code == "JPY"
    assert currency.minor_units == 0


@pytest.mark.parametrize("code", [None, "", "   ", "ZZZ", "BTC", "USDEUR"])
def test_unknown_codes(code: str | None) -> None:
    assert find_currency(code) is None
    assert normalize_currency_code(code) is None
    assert not is_known_currency(code)


def test_register_custom_currency() -> None:
    assert not is_known_currency("WTF")

    register_currency("wtf", minor_units=3)

    assert normalize_currency_code("WtF") == "WTF"
    assert find_currency("WTF").minor_units == 3  # type: ignore[union-attr]


@pytest.mark.parametrize("code", ["WT", "W1F", "WTFX"])
def test_register_rejects_malformed_codes(code: str) -> None:
    with pytest.raises(ValueError):
        register_currency(code)
