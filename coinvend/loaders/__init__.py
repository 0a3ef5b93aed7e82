"""Stock loaders (in-memory queues and JSON stock files)."""

from .base import InMemoryStockLoader, StockLoader
from .json_loader import (
    JsonStockLoader,
    StockFile,
    load_stock_from_json,
    parse_stock_dict,
    validate_bank_dict,
    validate_stock_dict,
    validate_stock_file,
)

__all__ = [
    "InMemoryStockLoader",
    "StockLoader",
    "JsonStockLoader",
    "StockFile",
    "load_stock_from_json",
    "parse_stock_dict",
    "validate_bank_dict",
    "validate_stock_dict",
    "validate_stock_file",
]
