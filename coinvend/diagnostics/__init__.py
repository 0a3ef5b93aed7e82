"""Diagnostics for coin systems and stocking plans."""

from .checklist import ChecklistIssue, run_checklist
from .greedy import find_greedy_counterexample, greedy_coin_count, is_canonical, optimal_coin_count
from .simulator import SessionSimulator, SimulationResult

__all__ = [
    "ChecklistIssue",
    "run_checklist",
    "find_greedy_counterexample",
    "greedy_coin_count",
    "is_canonical",
    "optimal_coin_count",
    "SessionSimulator",
    "SimulationResult",
]
