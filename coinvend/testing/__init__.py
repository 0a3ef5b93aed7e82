"""Testing utilities for coinvend."""

from .factory import CoinStoreFactory, StockFactory
from .fixtures import machine_fixture, memory_machine, sample_loader
from .recorder import RecordingDisplay

__all__ = [
    "CoinStoreFactory",
    "StockFactory",
    "machine_fixture",
    "memory_machine",
    "sample_loader",
    "RecordingDisplay",
]
