"""Vending machine state and the single-item sale protocol."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping

from .coins import CoinStore, Denomination, format_pence
from .exceptions import DuplicateLocation, EmptyMachine, InvalidLocation, UnrecognizedDenomination
from .stock import LOCATIONS, StockDefinition, StockSlot, location_index
from ..display import LoggingDisplay, Notice, NoticeKind, OperatorDisplay

logger = logging.getLogger(__name__)


class MachineState(str, Enum):
    OFF = "off"
    ON = "on"


class VendStatus(str, Enum):
    SOLD = "sold"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_CHANGE = "insufficient_change"
    MACHINE_NOT_RUNNING = "machine_not_running"


class CoinStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    MACHINE_NOT_RUNNING = "machine_not_running"


@dataclass(slots=True)
class VendOutcome:
    """Result of a sale attempt; ``change`` is only set when the item was sold."""

    status: VendStatus
    location: str
    change: CoinStore | None = None
    price: int | None = None
    quantity_remaining: int | None = None
    shortfall: int = 0

    @property
    def sold(self) -> bool:
        return self.status is VendStatus.SOLD

    def __bool__(self) -> bool:
        return self.sold


@dataclass(frozen=True, slots=True)
class InsertOutcome:
    status: CoinStatus
    value: int
    balance: int

    @property
    def accepted(self) -> bool:
        return self.status is CoinStatus.ACCEPTED

    def __bool__(self) -> bool:
        return self.accepted


@dataclass(frozen=True, slots=True)
class MachineSnapshot:
    """Read-only copy of everything a sale can change."""

    state: MachineState
    bank: Mapping[Denomination, int]
    user_balance: Mapping[Denomination, int]
    stock: Mapping[str, int] = field(default_factory=dict)

    @property
    def bank_value(self) -> int:
        return sum(coin.value * count for coin, count in self.bank.items())

    @property
    def user_balance_value(self) -> int:
        return sum(coin.value * count for coin, count in self.user_balance.items())


class VendingMachine:
    """Holds stock, a coin bank and the current customer's inserted coins.

    Soft failures (no stock, not enough money, no change, bad coin, machine
    off) come back as outcomes and leave every balance and quantity as it
    was. Only construction raises.
    """

    def __init__(
        self,
        loader: Iterable[StockDefinition],
        bank: CoinStore | None = None,
        *,
        display: OperatorDisplay | None = None,
        lock: AbstractContextManager | None = None,
    ) -> None:
        self._stock: list[StockSlot | None] = [None] * len(LOCATIONS)
        item_count = 0
        for definition in loader:
            slot = StockSlot.from_definition(definition)
            idx = location_index(slot.location)
            if self._stock[idx] is not None:
                raise DuplicateLocation(slot.location)
            self._stock[idx] = slot
            item_count += slot.quantity_remaining
        if item_count == 0:
            raise EmptyMachine("Machine is empty!")

        self._bank = CoinStore()
        if bank is not None:
            self._bank.merge_from(bank)
        self._user_balance = CoinStore()
        self._state = MachineState.OFF
        self._display = display or LoggingDisplay()
        self._lock = lock or nullcontext()
        logger.debug(
            "Machine loaded with %s items across %s slots, float %s",
            item_count,
            sum(1 for slot in self._stock if slot is not None),
            self._bank,
        )

    # state

    @property
    def state(self) -> MachineState:
        return self._state

    def is_running(self) -> bool:
        return self._state is MachineState.ON

    def turn_on(self) -> None:
        with self._lock:
            self._state = MachineState.ON

    def turn_off(self) -> None:
        with self._lock:
            self._state = MachineState.OFF

    # queries

    def user_balance_value(self) -> int:
        return self._user_balance.total_value()

    def bank_value(self) -> int:
        return self._bank.total_value()

    def slot(self, location: str) -> StockSlot | None:
        slot = self._find_slot(location)
        return slot.copy() if slot else None

    def slots(self) -> list[StockSlot]:
        return [slot.copy() for slot in self._stock if slot is not None]

    def remaining_stock(self) -> int:
        return sum(slot.quantity_remaining for slot in self._stock if slot is not None)

    def is_empty(self) -> bool:
        return self.remaining_stock() == 0

    def snapshot(self) -> MachineSnapshot:
        return MachineSnapshot(
            state=self._state,
            bank=self._bank.as_dict(),
            user_balance=self._user_balance.as_dict(),
            stock={slot.location: slot.quantity_remaining for slot in self._stock if slot is not None},
        )

    # customer operations

    def insert_coin(self, value: int) -> InsertOutcome:
        """Accept a coin into the user balance; a rejected coin should be ejected."""
        with self._lock:
            if not self.is_running():
                self._warn(NoticeKind.NOT_RUNNING, "Machine is switched off, returning coin")
                return InsertOutcome(CoinStatus.MACHINE_NOT_RUNNING, value, self.user_balance_value())
            try:
                self._user_balance.add(value)
            except UnrecognizedDenomination:
                self._warn(
                    NoticeKind.INVALID_COIN,
                    f"Invalid coin inserted, returning coin, current balance is "
                    f"{format_pence(self.user_balance_value())}",
                )
                return InsertOutcome(CoinStatus.REJECTED, value, self.user_balance_value())
            logger.debug("Accepted %sp, balance now %sp", value, self.user_balance_value())
            return InsertOutcome(CoinStatus.ACCEPTED, value, self.user_balance_value())

    def vend(self, location: str) -> VendOutcome:
        """Sell one item from ``location`` and return the customer's change."""
        with self._lock:
            if not self.is_running():
                self._warn(NoticeKind.NOT_RUNNING, "Machine is switched off")
                return VendOutcome(VendStatus.MACHINE_NOT_RUNNING, location)

            slot = self._find_slot(location)
            if slot is None or not slot.in_stock:
                self._warn(NoticeKind.OUT_OF_STOCK, "That item is out of stock, please try another item.")
                return VendOutcome(VendStatus.OUT_OF_STOCK, location)

            balance = self._user_balance.total_value()
            if balance < slot.price:
                shortfall = slot.price - balance
                self._warn(
                    NoticeKind.INSUFFICIENT_FUNDS,
                    f"Those cost {slot.price}p, you are {shortfall}p short",
                )
                return VendOutcome(
                    VendStatus.INSUFFICIENT_FUNDS, location, price=slot.price, shortfall=shortfall
                )

            change_due = balance - slot.price
            if not self._can_find_correct_change(change_due):
                self._warn(
                    NoticeKind.INSUFFICIENT_CHANGE,
                    "Sorry, we don't have the right change to make that sale. "
                    "Please add smaller coins, or choose another item.",
                )
                return VendOutcome(VendStatus.INSUFFICIENT_CHANGE, location, price=slot.price)

            slot.take_one()
            self._bank.merge_from(self._user_balance)
            change = self._bank.make_change(change_due)
            logger.debug("Sold %s at %s, change %s, bank now %s", slot.label, location, change, self._bank)
            self._info(
                NoticeKind.SOLD,
                f"Sold a {slot.price:3d}p valued item, leaving {slot.quantity_remaining} of them, "
                f"returning change={change}",
            )

            if self.is_empty():
                self._warn(NoticeKind.SHUTDOWN, "Last sale just emptied the machine, transitioning to OFF state")
                self._state = MachineState.OFF

            return VendOutcome(
                VendStatus.SOLD,
                location,
                change=change,
                price=slot.price,
                quantity_remaining=slot.quantity_remaining,
            )

    def coin_return(self) -> CoinStore:
        """Hand back the customer's coins untouched; they never pass through the bank."""
        with self._lock:
            returned = self._user_balance
            self._user_balance = CoinStore()
            self._info(NoticeKind.CANCELLED, f"Cancelled vend, returning {returned}")
            return returned

    # internals

    def _find_slot(self, location: str) -> StockSlot | None:
        try:
            return self._stock[location_index(location)]
        except InvalidLocation:
            return None

    def _can_find_correct_change(self, change_due: int) -> bool:
        projection = self._bank.copy()
        projection.merge_from(self._user_balance.copy())
        return projection.can_make_exact(change_due)

    def _info(self, kind: NoticeKind, message: str) -> None:
        self._display.publish(Notice.info(kind, message))

    def _warn(self, kind: NoticeKind, message: str) -> None:
        self._display.publish(Notice.warning(kind, message))
