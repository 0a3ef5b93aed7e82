"""Check whether greedy change-making is optimal for a coin system.

The machine pays change greedily, which gives the fewest coins only for
"canonical" coin systems such as 100/50/20/10. These helpers compare the
greedy coin count against a dynamic-programming optimum so a catalog can be
checked before it is trusted.
"""

from __future__ import annotations

from functools import reduce
from math import gcd
from typing import Iterable, Sequence


def greedy_coin_count(amount: int, denominations: Iterable[int]) -> int | None:
    """Coins used by greedy change with unlimited supply, or None if it gets stuck."""
    remaining = amount
    count = 0
    for coin in sorted(denominations, reverse=True):
        take = remaining // coin
        count += take
        remaining -= take * coin
    return count if remaining == 0 else None


def optimal_coin_count(amount: int, denominations: Iterable[int]) -> int | None:
    """Fewest coins adding up to ``amount`` with unlimited supply, or None if unreachable."""
    coins = sorted(set(denominations))
    inf = amount + 1
    best = [0] + [inf] * amount
    for value in range(1, amount + 1):
        for coin in coins:
            if coin > value:
                break
            if best[value - coin] + 1 < best[value]:
                best[value] = best[value - coin] + 1
    return None if best[amount] >= inf else best[amount]


def find_greedy_counterexample(denominations: Sequence[int]) -> int | None:
    """Smallest amount where greedy change is worse than optimal, if any.

    Amounts up to the sum of the two largest coins are checked, stepping by
    the coins' common divisor.
    """
    coins = sorted(set(denominations), reverse=True)
    if any(coin <= 0 for coin in coins):
        raise ValueError("Coin denominations must be positive")
    if len(coins) < 2:
        return None
    step = reduce(gcd, coins)
    limit = coins[0] + coins[1]
    for amount in range(step, limit + 1, step):
        optimal = optimal_coin_count(amount, coins)
        if optimal is None:
            continue
        if greedy_coin_count(amount, coins) != optimal:
            return amount
    return None


def is_canonical(denominations: Sequence[int]) -> bool:
    return find_greedy_counterexample(denominations) is None
