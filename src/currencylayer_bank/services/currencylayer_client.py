from __future__ import annotations

import logging
from typing import Any

import requests

from .cache_store import CurrencylayerBankError

logger = logging.getLogger(__name__)

# API docs: https://currencylayer.com/documentation
# Free plan keys only allow plain http and USD as source currency.
CL_HOST = "apilayer.net"
CL_LIVE_PATH = "/api/live"
CL_SOURCE = "USD"


class NoAccessKey(CurrencylayerBankError):
    def __init__(self, message: str = "currencylayer access_key must be provided") -> None:
        super().__init__(message)


class CurrencylayerFetchError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class CurrencylayerClient:
    """Fetches raw ``live`` documents; parsing and caching happen elsewhere."""

    def __init__(
        self,
        *,
        access_key: str | None = None,
        source: str = CL_SOURCE,
        secure_connection: bool = False,
        host: str = CL_HOST,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.access_key = access_key
        self.source = source
        self.secure_connection = secure_connection
        self.host = host.strip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        scheme = "https" if self.secure_connection else "http"
        return f"{scheme}://{self.host}{CL_LIVE_PATH}"

    @property
    def source_url(self) -> str:
        if not self.access_key:
            raise NoAccessKey()
        return f"{self.base_url}?source={self.source}&access_key={self.access_key}"

    def read_live(self) -> str:
        """Return the raw live document, or an empty string when the fetch fails.

        NoAccessKey is raised before any request is attempted.
        """
        url = self.source_url
        try:
            return self.fetch(url)
        except CurrencylayerFetchError as exc:
            logger.warning("currencylayer fetch failed (status=%s): %s", exc.status_code, exc)
            return ""

    def fetch(self, url: str) -> str:
        try:
            response = self._session.request("GET", url, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            resp = exc.response
            status_code = getattr(resp, "status_code", None)
            payload: Any | None = getattr(resp, "text", None) if resp is not None else None
            raise CurrencylayerFetchError(
                "currencylayer request failed", status_code=status_code, payload=payload
            ) from exc
        except requests.RequestException as exc:
            status_code = getattr(getattr(exc, "response", None), "status_code", None)
            raise CurrencylayerFetchError("currencylayer request failed", status_code=status_code) from exc

        return response.text


__all__ = ["CL_HOST", "CL_SOURCE", "CurrencylayerClient", "CurrencylayerFetchError", "NoAccessKey"]
