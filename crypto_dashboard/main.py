# crypto_dashboard/main.py
from __future__ import annotations

from fastapi import FastAPI

from crypto_dashboard.api.health import router as health_router
from crypto_dashboard.api.market import router as market_router

from crypto_dashboard.config.settings import get_settings
from crypto_dashboard.services.coingecko import CoinGeckoClient


app = FastAPI(title="Crypto Dashboard API")

# Routers
app.include_router(health_router)
app.include_router(market_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Crypto Dashboard"}


@app.on_event("startup")
async def on_startup() -> None:
    # one pooled client for every request
    app.state.coingecko = CoinGeckoClient.from_settings(get_settings())


@app.on_event("shutdown")
async def on_shutdown() -> None:
    client = getattr(app.state, "coingecko", None)
    if client is not None:
        await client.aclose()
    app.state.coingecko = None
