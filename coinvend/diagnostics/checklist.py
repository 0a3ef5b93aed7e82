"""Automated checks to highlight stocking and float issues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..domain.coins import CATALOG, CoinStore, format_pence
from ..domain.stock import StockDefinition
from .greedy import find_greedy_counterexample


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(
    definitions: Iterable[StockDefinition],
    bank: CoinStore,
    *,
    denominations: Iterable[int] | None = None,
) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    coins = [int(coin) for coin in (denominations if denominations is not None else CATALOG)]

    counterexample = find_greedy_counterexample(coins)
    if counterexample is not None:
        issues.append(
            ChecklistIssue(
                "error",
                f"Coin set {coins} is not canonical: greedy change for {counterexample}p "
                "does not use the fewest coins.",
            )
        )

    definitions = list(definitions)
    if sum(definition.quantity for definition in definitions) == 0:
        issues.append(ChecklistIssue("error", "No stock loaded."))

    if bank.is_empty():
        issues.append(
            ChecklistIssue("warning", "Float is empty; only exact payments can be accepted.")
        )

    for definition in definitions:
        if definition.quantity == 0:
            issues.append(
                ChecklistIssue("warning", f"Slot {definition.location} is loaded empty.")
            )
            continue
        for coin in CATALOG:
            # Single coin payment: the float plus that coin must cover the change.
            if coin.value <= definition.price:
                continue
            projection = bank.copy()
            projection.add(coin)
            if not projection.can_make_exact(coin.value - definition.price):
                issues.append(
                    ChecklistIssue(
                        "warning",
                        f"Slot {definition.location} ({format_pence(definition.price)}) cannot "
                        f"give change from a single {format_pence(coin.value)} coin.",
                    )
                )
    return issues
