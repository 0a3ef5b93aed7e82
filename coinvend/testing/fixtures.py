"""Pytest fixtures for coinvend."""

from __future__ import annotations

import pytest

from ..domain.coins import CoinStore
from ..domain.machine import VendingMachine
from ..loaders.base import InMemoryStockLoader
from .recorder import RecordingDisplay


def sample_loader() -> InMemoryStockLoader:
    return (
        InMemoryStockLoader()
        .add_item("A", 60, 2)
        .add_item("B", 100, 2)
        .add_item("C", 170, 2)
    )


def machine_fixture(
    bank: CoinStore | None = None,
    *,
    loader: InMemoryStockLoader | None = None,
    running: bool = True,
) -> tuple[VendingMachine, RecordingDisplay]:
    """Helper for ad-hoc tests where pytest is not available."""
    display = RecordingDisplay()
    machine = VendingMachine(loader or sample_loader(), bank, display=display)
    if running:
        machine.turn_on()
    return machine, display


@pytest.fixture()
def memory_machine() -> VendingMachine:
    machine, _ = machine_fixture(CoinStore.of(5, 5, 1, 5))
    return machine
