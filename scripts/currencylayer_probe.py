# flake8: noqa E402
# Run via uv to load project deps, e.g.:
# CURRENCYLAYER_ACCESS_KEY=... uv run scripts/currencylayer_probe.py --from EUR --to GBP --cache data/live.json
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Ensure the src directory is importable when the script is invoked via uv/python directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from currencylayer_bank.config import BankSettings, config
from currencylayer_bank.services.currencylayer_bank import CurrencylayerBank


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a live FX rate through the currencylayer bank.")
    parser.add_argument("--from", dest="from_currency", default="EUR", help="Currency to convert from (default: EUR).")
    parser.add_argument("--to", dest="to_currency", default="USD", help="Currency to convert to (default: USD).")
    parser.add_argument("--cache", type=Path, default=None, help="Cache file path; overrides CURRENCYLAYER_CACHE_PATH.")
    parser.add_argument("--straight", action="store_true", help="Bypass the cache and fetch from the feed first.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings: BankSettings = config()
    if args.cache is not None:
        settings = settings.model_copy(update={"cache_path": args.cache})

    bank = CurrencylayerBank.from_settings(settings)
    document = bank.update_rates(straight=args.straight)
    rate = bank.get_rate(args.from_currency, args.to_currency)

    payload: dict[str, Any] = {
        "requested_pair": f"{args.from_currency.upper()}-{args.to_currency.upper()}",
        "source": bank.source,
        "rate": rate,
        "rates_timestamp": bank.rates_timestamp.isoformat(),
        "rates_expiration": bank.rates_expiration.isoformat() if bank.rates_expiration else None,
        "document_outcome": document.outcome.value,
        "quotes_loaded": len(document.quotes),
    }
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
