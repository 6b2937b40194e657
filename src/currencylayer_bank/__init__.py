"""Exchange-rate bank backed by the currencylayer live feed.

Rates are fetched from ``apilayer.net``, cached as one raw JSON document and
resolved for any pair of known currencies, directly, by inverse, or as a
cross rate through the source currency.
"""

from .domain.money import Money, UnknownRate, VariableExchangeBank
from .services.cache_store import (
    CallbackCacheStore,
    CurrencylayerBankError,
    FileCacheStore,
    InMemoryCacheStore,
    InvalidCache,
    NullCacheStore,
    RateCacheStore,
)
from .services.currencylayer_bank import CurrencylayerBank
from .services.currencylayer_client import NoAccessKey
from .services.freshness import FreshnessState

__all__ = [
    "CallbackCacheStore",
    "CurrencylayerBank",
    "CurrencylayerBankError",
    "FileCacheStore",
    "FreshnessState",
    "InMemoryCacheStore",
    "InvalidCache",
    "Money",
    "NoAccessKey",
    "NullCacheStore",
    "RateCacheStore",
    "UnknownRate",
    "VariableExchangeBank",
]
