from __future__ import annotations


def _key(from_currency: str, to_currency: str) -> tuple[str, str]:
    return from_currency.strip().upper(), to_currency.strip().upper()


class RateTable:
    """Mapping of ``(FROM, TO)`` pairs to multipliers: ``amount_to = amount_from * rate``.

    A pair of identical currencies always resolves to 1.0 and is never stored.
    """

    def __init__(self) -> None:
        self._rates: dict[tuple[str, str], float] = {}

    def get(self, from_currency: str, to_currency: str) -> float | None:
        key = _key(from_currency, to_currency)
        if key[0] == key[1]:
            return 1.0
        return self._rates.get(key)

    def add(self, from_currency: str, to_currency: str, rate: float) -> None:
        key = _key(from_currency, to_currency)
        if key[0] == key[1]:
            return
        self._rates[key] = float(rate)

    def add_if_absent(self, from_currency: str, to_currency: str, rate: float) -> float:
        """Store a derived rate unless the pair already has one; return the stored value."""
        key = _key(from_currency, to_currency)
        if key[0] == key[1]:
            return 1.0
        return self._rates.setdefault(key, float(rate))

    def clear(self) -> None:
        self._rates.clear()

    def items(self) -> list[tuple[tuple[str, str], float]]:
        return list(self._rates.items())

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return _key(*pair) in self._rates

    def __len__(self) -> int:
        return len(self._rates)


__all__ = ["RateTable"]
