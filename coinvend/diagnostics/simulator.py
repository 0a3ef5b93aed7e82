"""Randomised customer sessions used to sanity-check a stocking plan."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from random import Random
from typing import Dict, Sequence

from ..display import Notice
from ..domain.coins import CATALOG, CoinStore
from ..domain.machine import VendingMachine
from ..domain.stock import StockDefinition

FOREIGN_COINS = (1, 2, 5, 200)


@dataclass(slots=True)
class SimulationResult:
    sessions: int = 0
    sales: int = 0
    failures: Dict[str, int] = field(default_factory=dict)
    notices: Dict[str, int] = field(default_factory=dict)
    deposited: int = 0
    change_issued: int = 0
    returned: int = 0
    final_bank: int = 0
    final_user_balance: int = 0
    initial_bank: int = 0
    sold_out: bool = False

    @property
    def conserved(self) -> bool:
        """Every accepted penny is in the bank, the balance, or a customer's hand."""
        held = self.final_bank + self.final_user_balance + self.change_issued + self.returned
        return held == self.initial_bank + self.deposited


class _CountingDisplay:
    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def publish(self, notice: Notice) -> None:
        self.counts[notice.kind.value] += 1


class SessionSimulator:
    """Monte-Carlo customer sessions against a freshly stocked machine."""

    def __init__(
        self,
        definitions: Sequence[StockDefinition],
        bank: CoinStore,
        *,
        rng: Random | None = None,
        foreign_coin_rate: float = 0.05,
    ) -> None:
        self._definitions = tuple(definitions)
        self._bank = bank.copy()
        self._rng = rng or Random()
        self._foreign_coin_rate = foreign_coin_rate

    def simulate(self, *, sessions: int = 1000, max_coins: int = 4) -> SimulationResult:
        display = _CountingDisplay()
        machine = VendingMachine(self._definitions, self._bank.copy(), display=display)
        machine.turn_on()
        result = SimulationResult(initial_bank=machine.bank_value())
        failures: Counter[str] = Counter()
        locations = [definition.location for definition in self._definitions]

        for _ in range(sessions):
            if not machine.is_running():
                break
            result.sessions += 1
            for _ in range(self._rng.randint(1, max_coins)):
                value = self._pick_coin()
                if machine.insert_coin(value):
                    result.deposited += value

            outcome = machine.vend(self._rng.choice(locations))
            if outcome.sold:
                result.sales += 1
                result.change_issued += outcome.change.total_value()
            else:
                failures[outcome.status.value] += 1
                result.returned += machine.coin_return().total_value()

        snapshot = machine.snapshot()
        result.final_bank = snapshot.bank_value
        result.final_user_balance = snapshot.user_balance_value
        result.sold_out = machine.is_empty()
        result.failures = dict(failures)
        result.notices = dict(display.counts)
        return result

    def _pick_coin(self) -> int:
        if self._rng.random() < self._foreign_coin_rate:
            return self._rng.choice(FOREIGN_COINS)
        return self._rng.choice(CATALOG).value
