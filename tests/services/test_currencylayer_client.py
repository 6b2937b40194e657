from __future__ import annotations

from typing import cast
from unittest.mock import Mock

import pytest
import requests

from currencylayer_bank.services.currencylayer_client import (
    CurrencylayerClient,
    CurrencylayerFetchError,
    NoAccessKey,
)
from tests.constants import TEST_ACCESS_KEY
from tests.helpers.feed import StubFeedSession, StubResponse


def test_source_url_uses_http_by_default() -> None:
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, session=Mock())

    assert client.source_url == f"http://apilayer.net/api/live?source=USD&access_key={TEST_ACCESS_KEY}"


def test_source_url_uses_https_when_secure() -> None:
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, source="EUR", secure_connection=True, session=Mock())

    assert client.source_url == f"https://apilayer.net/api/live?source=EUR&access_key={TEST_ACCESS_KEY}"


@pytest.mark.parametrize("access_key", [None, ""])
def test_missing_access_key_fails_before_any_request(access_key: str | None) -> None:
    session = Mock()
    client = CurrencylayerClient(access_key=access_key, session=session)

    with pytest.raises(NoAccessKey):
        client.read_live()
    session.request.assert_not_called()


def test_read_live_returns_body(live_json: str) -> None:
    stub = StubFeedSession(live_json)
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, timeout=3.0, session=cast(requests.Session, stub))

    assert client.read_live() == live_json
    assert stub.calls == [
        {
            "method": "GET",
            "url": f"http://apilayer.net/api/live?source=USD&access_key={TEST_ACCESS_KEY}",
            "timeout": 3.0,
        }
    ]


def test_fetch_wraps_http_errors() -> None:
    stub = StubFeedSession(StubResponse('{"error": "rate limited"}', status_code=429))
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, session=cast(requests.Session, stub))

    with pytest.raises(CurrencylayerFetchError) as exc_info:
        client.fetch(client.source_url)

    assert exc_info.value.status_code == 429
    assert exc_info.value.payload == '{"error": "rate limited"}'


def test_read_live_absorbs_transport_failures() -> None:
    stub = StubFeedSession(requests.ConnectionError("unreachable"))
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, session=cast(requests.Session, stub))

    assert client.read_live() == ""
    assert stub.call_count == 1


def test_read_live_absorbs_timeouts() -> None:
    session = Mock()
    session.request.side_effect = requests.Timeout("slow")
    client = CurrencylayerClient(access_key=TEST_ACCESS_KEY, session=session)

    assert client.read_live() == ""
    session.request.assert_called_once()
