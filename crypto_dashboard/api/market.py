from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from crypto_dashboard.config.settings import get_settings, parse_csv
from crypto_dashboard.schemas.market import CryptoPriceOut
from crypto_dashboard.services.coingecko import CoinGeckoClient, CoinGeckoError


router = APIRouter(prefix="/market", tags=["market"])


def get_client(request: Request) -> CoinGeckoClient:
    return request.app.state.coingecko


@router.get("/top", response_model=list[CryptoPriceOut])
async def get_top_cryptos(
    n: Optional[int] = None,
    client: CoinGeckoClient = Depends(get_client),
):
    """
    Top assets by market cap.
    Example: /market/top?n=20
    """
    limit = n if n is not None else get_settings().TOP_N_DEFAULT
    try:
        prices = await client.get_top_n_cryptos(limit)
    except CoinGeckoError as exc:
        raise HTTPException(status_code=502, detail="Unable to reach CoinGecko") from exc

    return [CryptoPriceOut.from_entity(p) for p in prices]


@router.get("/prices", response_model=list[CryptoPriceOut])
async def get_prices(
    ids: Optional[str] = Query(None, description="comma-separated asset ids"),
    client: CoinGeckoClient = Depends(get_client),
):
    """
    USD price per asset id, in completion order.
    Example: /market/prices?ids=bitcoin,ethereum
    """
    coin_ids = parse_csv(ids, get_settings().WATCHLIST_COINS)
    try:
        prices = await client.fetch_crypto_prices(coin_ids)
    except CoinGeckoError as exc:
        raise HTTPException(status_code=502, detail="Unable to reach CoinGecko") from exc

    return [CryptoPriceOut.from_entity(p) for p in prices]
