"""Pydantic models for CoinGecko payloads and market responses."""

from typing import Dict, List, Optional

from pydantic import BaseModel, RootModel

from crypto_dashboard.models.crypto import CryptoPrice


class MarketData(BaseModel):
    """Subset of a /coins/markets record that the dashboard uses."""

    id: str
    symbol: str
    name: str
    # delisted assets come back with a null price
    current_price: Optional[float] = None


class MarketDataList(RootModel[List[MarketData]]):
    pass


class SimplePriceResponse(RootModel[Dict[str, Dict[str, Optional[float]]]]):
    """/simple/price payload, e.g. {"bitcoin": {"usd": 50000}}."""

    def price_for(self, coin_id: str, vs_currency: str = "usd") -> float:
        # missing ids and null prices both read as 0
        return self.root.get(coin_id, {}).get(vs_currency) or 0.0


class CryptoPriceOut(BaseModel):
    id: str
    symbol: str
    name: str
    current_price: float
    last_updated: str

    @classmethod
    def from_entity(cls, price: CryptoPrice) -> "CryptoPriceOut":
        return cls(**price.to_dict())
