"""Load slot definitions and the starting float from JSON stock files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

from ..domain.coins import CATALOG, CoinStore, is_valid_price
from ..domain.stock import LOCATIONS, StockDefinition


@dataclass(slots=True)
class StockFile:
    slots: Sequence[StockDefinition]
    bank: Mapping[int, int] = field(default_factory=dict)

    def bank_store(self) -> CoinStore:
        return CoinStore(self.bank)

    def __iter__(self) -> Iterator[StockDefinition]:
        return iter(self.slots)


class JsonStockLoader:
    """Stock loader backed by a JSON file; the file is read on first iteration."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def __iter__(self) -> Iterator[StockDefinition]:
        yield from load_stock_from_json(self._path).slots


def load_stock_from_json(path: str | Path) -> StockFile:
    """Read, validate and parse a stock file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_stock_dict(data)


def parse_stock_dict(data: dict[str, Any]) -> StockFile:
    """Parse a JSON dict (already decoded) into slot definitions and a float."""
    errors = validate_stock_dict(data)
    if errors:
        raise ValueError(_format_errors("Stock validation failed", errors))
    slots = tuple(parse_slot(entry) for entry in data.get("slots", []))
    bank = parse_bank(data.get("bank", {}))
    return StockFile(slots=slots, bank=bank)


def parse_slot(entry: dict[str, Any]) -> StockDefinition:
    return StockDefinition(
        location=entry["location"],
        price=int(entry["price"]),
        quantity=int(entry.get("quantity", 0)),
        name=entry.get("name", ""),
    )


def parse_bank(raw: Mapping[str, Any]) -> dict[int, int]:
    return {int(value): int(count) for value, count in raw.items()}


def validate_stock_file(path: str | Path) -> list[str]:
    """Validate stock JSON file and return a list of errors."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        return [f"Stock file is not valid JSON: {exc}"]
    except UnicodeDecodeError as exc:
        return [f"Stock file is not valid UTF-8: {exc}"]
    except OSError as exc:
        return [f"Cannot read stock file: {exc}"]
    return validate_stock_dict(data)


def validate_stock_dict(data: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Stock file must contain a JSON object."]

    slots_raw = data.get("slots")
    if not isinstance(slots_raw, list):
        errors.append("Stock file must contain a 'slots' array.")
    else:
        seen: set[str] = set()
        for idx, entry in enumerate(slots_raw, start=1):
            if not isinstance(entry, dict):
                errors.append(f"Slot #{idx} must be an object.")
                continue
            location = entry.get("location")
            if not isinstance(location, str) or location not in LOCATIONS:
                errors.append(f"Slot #{idx} has invalid location '{location}'.")
                continue
            if location in seen:
                errors.append(f"Location '{location}' defined multiple times.")
            seen.add(location)

            price = entry.get("price")
            if not isinstance(price, int) or isinstance(price, bool) or price < 0:
                errors.append(f"Slot '{location}' must define non-negative integer 'price'.")
            elif not is_valid_price(price):
                errors.append(
                    f"Slot '{location}' price {price}p is not a multiple of {CATALOG[-1].value}p."
                )

            quantity = entry.get("quantity", 0)
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
                errors.append(f"Slot '{location}' has invalid 'quantity' value '{quantity}'.")

            name = entry.get("name")
            if name is not None and not isinstance(name, str):
                errors.append(f"Slot '{location}' name must be a string.")

    errors.extend(validate_bank_dict(data.get("bank", {})))
    return errors


def validate_bank_dict(bank: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(bank, dict):
        return ["'bank' must be an object mapping coin values to counts."]
    accepted = {str(coin.value) for coin in CATALOG}
    for value, count in bank.items():
        if str(value) not in accepted:
            errors.append(f"Bank references unknown coin '{value}'.")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            errors.append(f"Bank count for coin '{value}' must be a non-negative integer.")
    return errors


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
