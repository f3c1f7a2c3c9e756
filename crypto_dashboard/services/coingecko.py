"""Client for the public CoinGecko API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from crypto_dashboard.config.settings import DEFAULT_BASE_URL, Settings
from crypto_dashboard.models.crypto import CryptoPrice
from crypto_dashboard.schemas.market import MarketDataList, SimplePriceResponse
from crypto_dashboard.utils.time import rfc3339_now


logger = logging.getLogger("crypto_dashboard.coingecko")

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_CONCURRENCY = 8


class CoinGeckoError(Exception):
    """Any failure talking to CoinGecko."""


class CoinGeckoTransportError(CoinGeckoError):
    pass


class CoinGeckoStatusError(CoinGeckoError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"API returned status code: {status_code}")
        self.status_code = status_code


class CoinGeckoDecodeError(CoinGeckoError):
    pass


class CoinGeckoClient:
    """
    Thin async wrapper around two CoinGecko endpoints.

    The underlying httpx.AsyncClient is shared by every request, including the
    concurrent ones issued by fetch_crypto_prices().
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoinGeckoClient":
        return cls(
            base_url=settings.COINGECKO_BASE_URL,
            timeout=settings.COINGECKO_TIMEOUT_SECONDS,
            max_concurrency=settings.COINGECKO_MAX_CONCURRENCY,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "CoinGeckoClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.get(url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise CoinGeckoTransportError(f"request to {path} failed: {exc}") from exc

        if not response.is_success:
            raise CoinGeckoStatusError(response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise CoinGeckoDecodeError(f"failed to decode response: {exc}") from exc

    async def _fetch_price(self, crypto_id: str, semaphore: asyncio.Semaphore) -> CryptoPrice:
        async with semaphore:
            data = await self._get_json(
                "/simple/price",
                {"ids": crypto_id, "vs_currencies": "usd"},
            )
        try:
            payload = SimplePriceResponse.model_validate(data)
        except ValidationError as exc:
            raise CoinGeckoDecodeError(f"failed to decode response: {exc}") from exc

        return CryptoPrice(
            id=crypto_id,
            current_price=payload.price_for(crypto_id),
            last_updated=rfc3339_now(),
        )

    async def fetch_crypto_prices(self, crypto_ids: Iterable[str]) -> List[CryptoPrice]:
        """
        Fetch the USD price of each id with one request per id.

        Results come back in completion order. The first failure is raised and
        every request still in flight is cancelled before returning; prices
        already fetched are dropped.
        """
        if isinstance(crypto_ids, str):
            raise TypeError("crypto_ids must be a collection of ids, not a single string")
        ids = list(crypto_ids)
        if not ids:
            return []

        t0 = time.time()
        semaphore = asyncio.Semaphore(self.max_concurrency)
        tasks = [
            asyncio.create_task(self._fetch_price(cid, semaphore), name=f"coingecko-price:{cid}")
            for cid in ids
        ]

        prices: List[CryptoPrice] = []
        try:
            for next_done in asyncio.as_completed(tasks):
                prices.append(await next_done)
        except Exception as exc:
            pending = sum(1 for t in tasks if not t.done())
            logger.warning("price fetch failed | count=%d | cancelling=%d | err=%s", len(ids), pending, exc)
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        dt_ms = int((time.time() - t0) * 1000)
        logger.info("prices fetched | count=%d | %dms", len(ids), dt_ms)
        return prices

    async def get_top_n_cryptos(self, n: int) -> List[CryptoPrice]:
        """Top `n` assets by market cap, first page only. `n` is passed through as is."""

        params = {
            "vs_currency": "usd",
            "order": "market_cap_desc",
            "per_page": n,
            "page": 1,
        }
        data = await self._get_json("/coins/markets", params)
        try:
            records = MarketDataList.model_validate(data).root
        except ValidationError as exc:
            raise CoinGeckoDecodeError(f"failed to decode response: {exc}") from exc

        fetched_at = rfc3339_now()
        logger.debug("top cryptos fetched | n=%s | records=%d", n, len(records))
        return [
            CryptoPrice(
                id=record.id,
                symbol=record.symbol,
                name=record.name,
                current_price=record.current_price or 0.0,
                last_updated=fetched_at,
            )
            for record in records
        ]
