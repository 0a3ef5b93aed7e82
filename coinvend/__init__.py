"""coinvend public API."""

from .app import VendingApp
from .config import CoinVendConfig
from .domain.coins import CoinStore, Denomination
from .domain.machine import VendingMachine, VendOutcome, VendStatus
from .loaders import InMemoryStockLoader, JsonStockLoader

__all__ = [
    "VendingApp",
    "CoinVendConfig",
    "CoinStore",
    "Denomination",
    "VendingMachine",
    "VendOutcome",
    "VendStatus",
    "InMemoryStockLoader",
    "JsonStockLoader",
]
