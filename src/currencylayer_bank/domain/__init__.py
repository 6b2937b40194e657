"""Value types shared by the bank.

This package holds the currency catalog, the pair-keyed rate table and the
small money layer the bank plugs into. None of it touches the network or the
cache, so the resolution logic can be tested against plain tables.
"""

__all__ = [
    "currencies",
    "money",
    "rates",
]
