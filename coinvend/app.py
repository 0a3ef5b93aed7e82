"""Top level application object wiring a vending machine together."""

from __future__ import annotations

import threading
from typing import Any, Iterable

from .config import CoinVendConfig
from .display import ConsoleDisplay, LoggingDisplay, OperatorDisplay
from .domain.coins import CoinStore
from .domain.machine import VendingMachine
from .domain.stock import StockDefinition
from .loaders.json_loader import load_stock_from_json


class VendingApp:
    """Central dependency container used by the CLI and embedding code."""

    def __init__(
        self,
        config: CoinVendConfig,
        *,
        loader: Iterable[StockDefinition] | None = None,
        bank: CoinStore | None = None,
        display: OperatorDisplay | None = None,
    ) -> None:
        self.config = config
        self.display = display or self._wire_display()

        loader, file_bank = self._wire_stock(loader)
        self.machine = VendingMachine(
            loader,
            bank if bank is not None else self._wire_bank(file_bank),
            display=self.display,
            lock=threading.Lock() if config.machine.serialize_access else None,
        )
        if config.machine.auto_start:
            self.machine.turn_on()

    def _wire_display(self) -> OperatorDisplay:
        backend = self.config.display.backend
        if backend == "logging":
            return LoggingDisplay()
        if backend == "console":
            return ConsoleDisplay()
        raise ValueError(f"Unsupported display backend {backend}")

    def _wire_stock(
        self, loader: Iterable[StockDefinition] | None
    ) -> tuple[Iterable[StockDefinition], CoinStore | None]:
        if loader is not None:
            return loader, None
        path = self.config.machine.stock_path
        if path is None:
            raise ValueError("No stock loader given and no stock path configured")
        stock_file = load_stock_from_json(path)
        return stock_file.slots, stock_file.bank_store()

    def _wire_bank(self, file_bank: CoinStore | None) -> CoinStore:
        if self.config.machine.bank is not None:
            return CoinStore(self.config.machine.bank)
        return file_bank or CoinStore()

    def snapshot(self) -> dict[str, Any]:
        """Export current machine state for debugging."""
        state = self.machine.snapshot()
        return {
            "state": state.state.value,
            "bank": {coin.value: count for coin, count in state.bank.items()},
            "bank_value": state.bank_value,
            "user_balance": state.user_balance_value,
            "stock": dict(state.stock),
            "display": self.config.display.backend,
        }
