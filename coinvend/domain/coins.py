"""Coin catalog and the coin store used for balances, change and the bank."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, Mapping

from .exceptions import CoinStoreError, InsufficientBalance, NegativeAmount, UnrecognizedDenomination


class Denomination(IntEnum):
    """Accepted coins, face value in pence, highest value first."""

    # Declaration order is the catalog order used by the change algorithm.
    POUND = 100
    FIFTY = 50
    TWENTY = 20
    TEN = 10

    @classmethod
    def find(cls, value: int) -> "Denomination":
        try:
            return cls(value)
        except ValueError as exc:
            raise UnrecognizedDenomination(value) from exc


CATALOG: tuple[Denomination, ...] = tuple(Denomination)


def minimum_denomination() -> Denomination:
    return CATALOG[-1]


def is_whole_number(value: object) -> bool:
    # bool is an int subclass but never a count or a price.
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_price(amount: int) -> bool:
    """A price is payable only in whole multiples of the smallest coin."""
    return amount % minimum_denomination().value == 0


def format_pence(amount: int) -> str:
    return f"£{amount / 100:.2f}"


class CoinStore:
    """A mutable multiset of coins: a purse, a balance, change to give, or a bank.

    Coins move between stores with :meth:`merge_from`, which empties the
    source, so a coin is never held by two stores at once.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[int, int] | None = None) -> None:
        self._counts: Dict[Denomination, int] = {coin: 0 for coin in CATALOG}
        for value, count in (counts or {}).items():
            coin = Denomination.find(int(value))
            if not is_whole_number(count):
                raise CoinStoreError(f"Coin count for {coin.name} must be a whole number, got {count!r}")
            if count < 0:
                raise NegativeAmount(f"Cannot hold a negative number of {coin.name} coins")
            self._counts[coin] += count

    @classmethod
    def of(cls, pounds: int = 0, fifties: int = 0, twenties: int = 0, tens: int = 0) -> "CoinStore":
        """Build a store from per-coin counts, e.g. a shop float."""
        return cls(
            {
                Denomination.POUND: pounds,
                Denomination.FIFTY: fifties,
                Denomination.TWENTY: twenties,
                Denomination.TEN: tens,
            }
        )

    @classmethod
    def from_coins(cls, values: Iterable[int]) -> "CoinStore":
        store = cls()
        for value in values:
            store.add(value)
        return store

    def copy(self) -> "CoinStore":
        return CoinStore(self._counts)

    def total_value(self) -> int:
        return sum(coin.value * count for coin, count in self._counts.items())

    def coin_count(self) -> int:
        return sum(self._counts.values())

    def count_of(self, denomination: int) -> int:
        return self._counts[Denomination.find(denomination)]

    def is_empty(self) -> bool:
        return self.coin_count() == 0

    def add(self, denomination: int) -> None:
        """Add a single coin, rejecting values outside the catalog."""
        coin = Denomination.find(denomination)
        self._counts[coin] += 1

    def merge_from(self, other: "CoinStore") -> None:
        """Move every coin of ``other`` into this store, leaving ``other`` empty."""
        if other is self:
            return
        for coin in CATALOG:
            self._counts[coin] += other._counts[coin]
            other._counts[coin] = 0

    def can_make_exact(self, amount: int) -> bool:
        """Return True if exact change for ``amount`` can be found, without touching the store."""
        if amount > self.total_value():
            return False
        return self._decompose(amount, update=False).total_value() == amount

    def make_change(self, amount: int) -> "CoinStore":
        """Remove and return the fewest coins adding up to ``amount``.

        If the store lacks suitable coins the best partial decomposition is
        returned instead of raising; check :meth:`can_make_exact` first when
        the exact amount matters.
        """
        return self._decompose(amount, update=True)

    def as_dict(self) -> Dict[Denomination, int]:
        return dict(self._counts)

    def _decompose(self, amount: int, *, update: bool) -> "CoinStore":
        if amount < 0:
            raise NegativeAmount("Cannot ask for negative change")
        if self.total_value() < amount:
            raise InsufficientBalance("Cannot ask for more change than is in the current balance")

        change = CoinStore()
        remaining = amount
        for coin in CATALOG:
            use = min(remaining // coin.value, self._counts[coin])
            change._counts[coin] = use
            remaining -= use * coin.value
            if update:
                self._counts[coin] -= use
        return change

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoinStore):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        coins = "".join(f"{coin.name}[{self._counts[coin]}];" for coin in CATALOG)
        return f"{coins}total={format_pence(self.total_value())}"

    def __repr__(self) -> str:
        counts = ", ".join(f"{coin.value}: {self._counts[coin]}" for coin in CATALOG)
        return f"CoinStore({{{counts}}})"
