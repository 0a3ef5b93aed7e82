"""Domain models and services."""

from .coins import CATALOG, CoinStore, Denomination, format_pence, is_valid_price
from .stock import LOCATIONS, StockDefinition, StockSlot
from .machine import (
    CoinStatus,
    InsertOutcome,
    MachineSnapshot,
    MachineState,
    VendingMachine,
    VendOutcome,
    VendStatus,
)
from .exceptions import (
    CoinStoreError,
    CoinVendError,
    ConfigurationError,
    DuplicateLocation,
    EmptyMachine,
    InsufficientBalance,
    InvalidLocation,
    InvalidPrice,
    InvalidQuantity,
    NegativeAmount,
    UnrecognizedDenomination,
)

__all__ = [
    "CATALOG",
    "CoinStore",
    "Denomination",
    "format_pence",
    "is_valid_price",
    "LOCATIONS",
    "StockDefinition",
    "StockSlot",
    "CoinStatus",
    "InsertOutcome",
    "MachineSnapshot",
    "MachineState",
    "VendingMachine",
    "VendOutcome",
    "VendStatus",
    "CoinStoreError",
    "CoinVendError",
    "ConfigurationError",
    "DuplicateLocation",
    "EmptyMachine",
    "InsufficientBalance",
    "InvalidLocation",
    "InvalidPrice",
    "InvalidQuantity",
    "NegativeAmount",
    "UnrecognizedDenomination",
]
