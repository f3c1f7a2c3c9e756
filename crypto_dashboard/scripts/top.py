# crypto_dashboard/scripts/top.py
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from crypto_dashboard.config.settings import get_settings, parse_csv
from crypto_dashboard.models.crypto import CryptoPrice
from crypto_dashboard.services.coingecko import CoinGeckoClient, CoinGeckoError


logger = logging.getLogger("crypto_dashboard.cli")


def format_ranked(prices: List[CryptoPrice]) -> List[str]:
    return [
        f"{rank:2d}. {p.name:<20s} ({p.symbol}) ${p.current_price:.2f}"
        for rank, p in enumerate(prices, start=1)
    ]


def format_prices(prices: List[CryptoPrice]) -> List[str]:
    return [f"{p.id} ${p.current_price:.2f}" for p in prices]


async def run(limit: int, ids: Optional[List[str]] = None) -> List[str]:
    async with CoinGeckoClient.from_settings(get_settings()) as client:
        if ids:
            return format_prices(await client.fetch_crypto_prices(ids))
        return format_ranked(await client.get_top_n_cryptos(limit))


def main(argv: Optional[List[str]] = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Print CoinGecko market prices")
    parser.add_argument("--limit", type=int, default=settings.TOP_N_DEFAULT)
    parser.add_argument("--ids", default=None, help="comma-separated asset ids, e.g. bitcoin,ethereum")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        lines = asyncio.run(run(args.limit, parse_csv(args.ids, [])))
    except CoinGeckoError as exc:
        logger.error("Error fetching cryptos: %s", exc)
        raise SystemExit(1)
    except SystemExit:
        raise
    except Exception as exc:
        logger.exception("Error fetching cryptos: %s", exc)
        raise SystemExit(1)

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
