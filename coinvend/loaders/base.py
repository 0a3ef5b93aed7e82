"""Stock loader abstractions."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Protocol

from ..domain.stock import StockDefinition


class StockLoader(Protocol):
    """Finite source of item definitions, read once when a machine is built."""

    def __iter__(self) -> Iterator[StockDefinition]:
        ...


class InMemoryStockLoader(StockLoader):
    """Queue of definitions; iterating drains it like a file pointer."""

    def __init__(self) -> None:
        self._items: Deque[StockDefinition] = deque()

    def add_item(self, location: str, price: int, quantity: int, name: str = "") -> "InMemoryStockLoader":
        self._items.append(StockDefinition(location=location, price=price, quantity=quantity, name=name))
        return self

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[StockDefinition]:
        while self._items:
            yield self._items.popleft()
