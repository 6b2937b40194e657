from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ParseOutcome(str, Enum):
    VALID = "valid"
    MISSING_QUOTES = "missing_quotes"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class RateDocument:
    """Parsed ``live`` payload: quotes keyed by ``<SRC><ISO3>`` plus the feed timestamp."""

    outcome: ParseOutcome
    quotes: dict[str, float] = field(default_factory=dict)
    timestamp: datetime = EPOCH
    raw: str = ""

    @property
    def is_cacheable(self) -> bool:
        return self.outcome is ParseOutcome.VALID

    @property
    def is_empty(self) -> bool:
        return not self.quotes


EMPTY_DOCUMENT = RateDocument(outcome=ParseOutcome.MALFORMED)


def parse_rate_document(raw: str | bytes | None) -> RateDocument:
    """Parse a feed or cache payload without raising.

    Anything that is not a JSON object comes back as a MALFORMED document with
    no quotes and an epoch timestamp. An object without ``quotes`` is kept as
    MISSING_QUOTES so its timestamp is still available, but it is never cached.
    """
    if raw is None:
        return EMPTY_DOCUMENT
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if not text.strip():
        return EMPTY_DOCUMENT

    try:
        payload = json.loads(text)
    except ValueError:
        logger.warning("Ignoring malformed rates document (%d chars)", len(text))
        return EMPTY_DOCUMENT

    if not isinstance(payload, dict):
        logger.warning("Ignoring rates document with unexpected payload type %s", type(payload).__name__)
        return EMPTY_DOCUMENT

    timestamp = _parse_timestamp(payload.get("timestamp"))
    if "quotes" not in payload:
        error = payload.get("error")
        if error:
            logger.warning("Rates document carries no quotes: %s", error)
        return RateDocument(outcome=ParseOutcome.MISSING_QUOTES, timestamp=timestamp, raw=text)

    return RateDocument(
        outcome=ParseOutcome.VALID,
        quotes=_parse_quotes(payload["quotes"]),
        timestamp=timestamp,
        raw=text,
    )


def _parse_timestamp(value: Any) -> datetime:
    if value is None or isinstance(value, bool):
        return EPOCH
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return EPOCH


def _parse_quotes(value: Any) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    quotes: dict[str, float] = {}
    for key, rate in value.items():
        if isinstance(rate, bool):
            continue
        try:
            quotes[str(key).upper()] = float(rate)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Skipping non-numeric quote %s=%r", key, rate)
    return quotes


__all__ = ["EMPTY_DOCUMENT", "EPOCH", "ParseOutcome", "RateDocument", "parse_rate_document"]
