from pathlib import Path
from typing import Generator

import pytest

from currencylayer_bank.domain.currencies import unregister_currency
from currencylayer_bank.services.currencylayer_bank import CurrencylayerBank
from tests.constants import TEST_ACCESS_KEY
from tests.helpers.feed import FrozenClock, StubFeedSession

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="session")
def live_json() -> str:
    return (DATA_DIR / "live.json").read_text(encoding="utf-8")


@pytest.fixture(scope="function")
def feed_session(live_json: str) -> StubFeedSession:
    return StubFeedSession(live_json)


@pytest.fixture(scope="function")
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture(scope="function")
def temp_cache_path(tmp_path: Path) -> Path:
    return tmp_path / "temp.json"


@pytest.fixture(scope="function")
def bank(feed_session: StubFeedSession, clock: FrozenClock, temp_cache_path: Path) -> CurrencylayerBank:
    return CurrencylayerBank(
        access_key=TEST_ACCESS_KEY,
        cache=temp_cache_path,
        session=feed_session,  # type: ignore[arg-type]
        clock=clock,
    )


@pytest.fixture(autouse=True)
def _reset_custom_currencies() -> Generator[None, None, None]:
    yield
    unregister_currency("WTF")
