"""Stock slot models."""

from __future__ import annotations

import string
from dataclasses import dataclass

from .coins import is_valid_price, is_whole_number
from .exceptions import InvalidLocation, InvalidPrice, InvalidQuantity

LOCATIONS: tuple[str, ...] = tuple(string.ascii_uppercase)


def location_index(location: object) -> int:
    """Map a location code ('A'..'Z') to its zero-based index."""
    if not isinstance(location, str) or location not in LOCATIONS:
        raise InvalidLocation(location)
    return LOCATIONS.index(location)


@dataclass(frozen=True, slots=True)
class StockDefinition:
    """One item definition handed over by a stock loader."""

    location: str
    price: int
    quantity: int
    name: str = ""


@dataclass(slots=True)
class StockSlot:
    """A priced, quantity-limited item at a fixed location."""

    location: str
    price: int
    quantity_remaining: int
    name: str = ""

    def __post_init__(self) -> None:
        location_index(self.location)
        if not is_whole_number(self.price) or self.price < 0 or not is_valid_price(self.price):
            raise InvalidPrice(self.location, self.price)
        if not is_whole_number(self.quantity_remaining):
            raise InvalidQuantity(
                f"Item at location {self.location} has a non-integer quantity of {self.quantity_remaining!r}"
            )
        if self.quantity_remaining < 0:
            raise InvalidQuantity(
                f"Item at location {self.location} has a negative quantity of {self.quantity_remaining}"
            )

    @classmethod
    def from_definition(cls, definition: StockDefinition) -> "StockSlot":
        return cls(
            location=definition.location,
            price=definition.price,
            quantity_remaining=definition.quantity,
            name=definition.name,
        )

    @property
    def in_stock(self) -> bool:
        return self.quantity_remaining > 0

    @property
    def label(self) -> str:
        return self.name or f"{self.price}p item"

    def take_one(self) -> None:
        if self.quantity_remaining <= 0:
            raise InvalidQuantity(f"Location {self.location} is already empty")
        self.quantity_remaining -= 1

    def copy(self) -> "StockSlot":
        return StockSlot(
            location=self.location,
            price=self.price,
            quantity_remaining=self.quantity_remaining,
            name=self.name,
        )
