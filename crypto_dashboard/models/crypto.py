"""Domain entities for cryptocurrency price data."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, List

from crypto_dashboard.utils.time import rfc3339_now


class CryptoValidationError(ValueError):
    """Base class for field-level validation failures on a CryptoPrice."""


class EmptyIDError(CryptoValidationError):
    def __init__(self) -> None:
        super().__init__("crypto ID cannot be empty")


class EmptySymbolError(CryptoValidationError):
    def __init__(self) -> None:
        super().__init__("crypto symbol cannot be empty")


class EmptyNameError(CryptoValidationError):
    def __init__(self) -> None:
        super().__init__("crypto name cannot be empty")


class NegativePriceError(CryptoValidationError):
    def __init__(self, price: float) -> None:
        super().__init__(f"price cannot be negative: {price:f}")
        self.price = price


class PriceInvariantError(RuntimeError):
    """Raised by the must_* helpers when the caller broke a precondition."""


@dataclass
class CryptoPrice:
    """
    Price snapshot for a single asset.

    Construction does not validate; call validate() when the data came from
    somewhere you do not trust.
    """

    id: str = ""
    symbol: str = ""
    name: str = ""
    current_price: float = 0.0
    last_updated: str = ""

    def validate(self) -> None:
        if not self.id:
            raise EmptyIDError()
        if not self.symbol:
            raise EmptySymbolError()
        if not self.name:
            raise EmptyNameError()
        if self.current_price < 0:
            raise NegativePriceError(self.current_price)

    def update_price(self, new_price: float) -> None:
        if new_price < 0:
            raise NegativePriceError(new_price)
        self.current_price = new_price
        self.last_updated = rfc3339_now()

    def must_update_price(self, new_price: float) -> None:
        if new_price < 0:
            raise PriceInvariantError(f"price cannot be negative: {new_price:f}")
        self.update_price(new_price)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CryptoBatch:
    """Ordered collection of prices. Symbols and IDs may repeat."""

    prices: List[CryptoPrice] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.prices)

    def __iter__(self) -> Iterator[CryptoPrice]:
        return iter(self.prices)

    def add_crypto(self, price: CryptoPrice) -> None:
        self.prices.append(price)

    def get_by_symbol(self, symbol: str) -> tuple[CryptoPrice, bool]:
        # first match wins, case-sensitive
        for price in self.prices:
            if price.symbol == symbol:
                return price, True
        return CryptoPrice(), False

    def total_value(self) -> float:
        return sum((p.current_price for p in self.prices), 0.0)

    def get_price_at(self, index: int) -> CryptoPrice:
        if index < 0 or index >= len(self.prices):
            raise IndexError(f"index {index} out of range for batch of {len(self.prices)}")
        return self.prices[index]
