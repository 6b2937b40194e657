from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

import requests

from ..config import BankSettings, config
from ..domain.currencies import normalize_currency_code
from ..domain.money import UnknownRate, VariableExchangeBank
from .cache_store import CacheTarget, RateCacheStore, build_cache_store
from .currencylayer_client import CL_HOST, CL_SOURCE, CurrencylayerClient
from .freshness import FreshnessState, evaluate_freshness, expiration_instant
from .rate_document import EMPTY_DOCUMENT, RateDocument, parse_rate_document

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CurrencylayerBank(VariableExchangeBank):
    """Exchange bank fed by the currencylayer ``live`` endpoint.

    Rates are kept in memory and rebuilt from the feed or from the cache store
    whenever the freshness check asks for it. Several banks may share one cache
    store; a bank that sees a newer feed timestamp in the store adopts it
    instead of calling the network again.
    """

    def __init__(
        self,
        *,
        access_key: str | None = None,
        source: str = CL_SOURCE,
        ttl_in_seconds: int | None = None,
        secure_connection: bool = False,
        cache: CacheTarget = None,
        host: str = CL_HOST,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self._client = CurrencylayerClient(
            access_key=access_key,
            secure_connection=secure_connection,
            host=host,
            timeout=timeout,
            session=session,
        )
        self._clock = clock or _utcnow
        self._cache: RateCacheStore = build_cache_store(cache)
        self._ttl_in_seconds: int | None = None
        self._rates_timestamp: datetime | None = None
        self._quotes: dict[str, float] = {}
        self.last_refreshed_at: datetime | None = None

        self.source = source
        self.ttl_in_seconds = ttl_in_seconds

    @classmethod
    def from_settings(
        cls,
        settings: BankSettings | None = None,
        *,
        session: requests.Session | None = None,
        clock: Clock | None = None,
    ) -> CurrencylayerBank:
        resolved = settings or config()
        return cls(
            access_key=resolved.access_key,
            source=resolved.source,
            ttl_in_seconds=resolved.ttl_in_seconds,
            secure_connection=resolved.secure_connection,
            cache=resolved.cache_path,
            host=resolved.host,
            timeout=resolved.timeout_seconds,
            session=session,
            clock=clock,
        )

    # Configuration -------------------------------------------------------

    @property
    def access_key(self) -> str | None:
        return self._client.access_key

    @access_key.setter
    def access_key(self, value: str | None) -> None:
        self._client.access_key = value

    @property
    def secure_connection(self) -> bool:
        return self._client.secure_connection

    @secure_connection.setter
    def secure_connection(self, value: bool) -> None:
        self._client.secure_connection = bool(value)

    @property
    def source(self) -> str:
        return self._client.source

    @source.setter
    def source(self, value: str | None) -> None:
        self._client.source = normalize_currency_code(value) or CL_SOURCE

    @property
    def ttl_in_seconds(self) -> int | None:
        return self._ttl_in_seconds

    @ttl_in_seconds.setter
    def ttl_in_seconds(self, value: int | None) -> None:
        if value is not None and value < 0:
            msg = "ttl_in_seconds must be >= 0"
            raise ValueError(msg)
        self._ttl_in_seconds = value

    @property
    def cache(self) -> RateCacheStore:
        return self._cache

    @cache.setter
    def cache(self, target: CacheTarget) -> None:
        self._cache = build_cache_store(target)

    @property
    def source_url(self) -> str:
        return self._client.source_url

    # State ---------------------------------------------------------------

    @property
    def rates(self) -> dict[str, float]:
        return dict(self._quotes)

    @property
    def rates_timestamp(self) -> datetime:
        """Feed timestamp of the rates held in memory, loading them carefully on first use."""
        if self._rates_timestamp is None:
            return self.update_rates().timestamp
        return self._rates_timestamp

    @property
    def rates_expiration(self) -> datetime | None:
        if self._rates_timestamp is None:
            return None
        return expiration_instant(self._rates_timestamp, self._ttl_in_seconds)

    def freshness(self) -> FreshnessState:
        if self._rates_timestamp is None:
            return FreshnessState.STALE
        cached = parse_rate_document(self._cache.read())
        return evaluate_freshness(
            now=self._clock(),
            feed_timestamp=self._rates_timestamp,
            ttl_in_seconds=self._ttl_in_seconds,
            cached_timestamp=cached.timestamp if cached.is_cacheable else None,
        )

    def expired(self) -> bool:
        expires_at = self.rates_expiration
        return expires_at is not None and self._clock() > expires_at

    def expire_rates(self) -> bool:
        """Refresh when the rates expired or a sibling refreshed the shared cache; return True if refreshed."""
        state = self.freshness()
        if state is FreshnessState.FRESH:
            return False
        self.update_rates(straight=state is FreshnessState.EXPIRED)
        return True

    # Refresh -------------------------------------------------------------

    def update_rates(self, straight: bool = False) -> RateDocument:
        document = self._read_straight() if straight else self._read_careful()

        self._rates.clear()
        self._quotes = dict(document.quotes)
        # A document without quotes does not count as loaded, so the next query retries.
        self._rates_timestamp = None if document.is_empty else document.timestamp
        source = self.source
        for key, rate in document.quotes.items():
            currency = normalize_currency_code(key[3:])
            if currency is None:
                logger.debug("Skipping quote %s for unknown currency", key)
                continue
            self.add_rate(source, currency, rate)
            if rate:
                self.add_rate(currency, source, 1.0 / rate)

        self.last_refreshed_at = self._clock()
        logger.info(
            "Loaded %d currencylayer quotes (%s refresh, feed timestamp %s)",
            len(document.quotes),
            "straight" if straight else "careful",
            document.timestamp.isoformat(),
        )
        return document

    def _read_careful(self) -> RateDocument:
        cached = parse_rate_document(self._cache.read())
        if not cached.is_empty:
            return cached
        return self._read_from_feed()

    def _read_straight(self) -> RateDocument:
        fetched = self._read_from_feed()
        if fetched.is_cacheable and not fetched.is_empty:
            return fetched

        cached = parse_rate_document(self._cache.read())
        if not cached.is_empty:
            logger.warning("currencylayer feed returned no usable quotes, serving cached rates")
            return cached
        return fetched if fetched.is_cacheable else EMPTY_DOCUMENT

    def _read_from_feed(self) -> RateDocument:
        document = parse_rate_document(self._client.read_live())
        if document.is_cacheable:
            self._cache.write(document.raw)
        return document

    # Resolution ----------------------------------------------------------

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        from_code = from_currency.strip().upper()
        to_code = to_currency.strip().upper()
        if from_code == to_code:
            return 1.0

        self.expire_rates()

        direct = self._rates.get(from_code, to_code)
        if direct is not None:
            return direct

        rate = self._inverse_rate(from_code, to_code)
        if rate is None:
            rate = self._cross_rate(from_code, to_code)
        if rate is None:
            raise UnknownRate(from_code, to_code)

        logger.debug("Derived %s/%s rate %s", from_code, to_code, rate)
        return self._rates.add_if_absent(from_code, to_code, rate)

    def _inverse_rate(self, from_code: str, to_code: str) -> float | None:
        inverse = self._rates.get(to_code, from_code)
        if not inverse:
            return None
        return 1.0 / inverse

    def _leg_rate(self, from_code: str, to_code: str) -> float | None:
        direct = self._rates.get(from_code, to_code)
        if direct is not None:
            return direct
        return self._inverse_rate(from_code, to_code)

    def _cross_rate(self, from_code: str, to_code: str) -> float | None:
        source = self.source
        from_base = self._leg_rate(source, from_code)
        to_base = self._leg_rate(source, to_code)
        if not from_base or to_base is None:
            return None
        return to_base / from_base


__all__ = ["CurrencylayerBank"]
