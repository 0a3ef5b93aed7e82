"""Command line helpers for coinvend."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from random import Random

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .app import VendingApp
from .config import CoinVendConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .diagnostics.simulator import SessionSimulator
from .domain.coins import CATALOG, format_pence
from .domain.machine import VendingMachine
from .loaders import load_stock_from_json, validate_stock_file

console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def run_validate() -> None:
    parser = argparse.ArgumentParser(description="coinvend stock file validator")
    parser.add_argument("--stock", required=True, help="Path to stock JSON file for validation")
    args = parser.parse_args()

    errors = validate_stock_file(Path(args.stock))
    if errors:
        console.print("[red]Stock file errors:[/red]")
        for err in errors:
            console.print(f"- {escape(err)}", highlight=False)
        sys.exit(1)
    console.print("Stock file is valid ✅")


def run_checklist() -> None:
    parser = argparse.ArgumentParser(description="coinvend sanity checks")
    parser.add_argument("stock", help="Path to stock JSON file")
    args = parser.parse_args()

    stock_file = load_stock_from_json(args.stock)
    issues = checklist_run(stock_file.slots, stock_file.bank_store())
    if not issues:
        console.print("No problems found ✅")
        return
    for issue in issues:
        console.print(f"[{issue.severity.upper()}] {issue.message}", markup=False)
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def run_simulator() -> None:
    parser = argparse.ArgumentParser(description="coinvend session simulator")
    parser.add_argument("stock", help="Path to stock JSON file")
    parser.add_argument("--sessions", type=int, default=1000, help="Number of customer sessions")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    config = CoinVendConfig.from_env()
    seed = args.seed if args.seed is not None else config.rng_seed
    stock_file = load_stock_from_json(args.stock)
    simulator = SessionSimulator(
        stock_file.slots,
        stock_file.bank_store(),
        rng=Random(seed) if seed is not None else None,
    )
    result = simulator.simulate(sessions=args.sessions)

    console.print(f"Simulated {result.sessions} sessions, {result.sales} sales.")
    for status, count in sorted(result.failures.items()):
        console.print(f"  {status}: {count}")
    console.print(f"Deposited {format_pence(result.deposited)}, change issued {format_pence(result.change_issued)}")
    console.print(f"Bank {format_pence(result.initial_bank)} -> {format_pence(result.final_bank)}")
    if result.sold_out:
        console.print("Machine sold out.")
    if not result.conserved:
        console.print("[bold red]Currency was not conserved![/bold red]")
        sys.exit(1)


def run_session() -> None:
    parser = argparse.ArgumentParser(description="Interactive coinvend operator session")
    parser.add_argument("stock", nargs="?", help="Path to stock JSON file (defaults to COINVEND_STOCK_PATH)")
    args = parser.parse_args()

    config = CoinVendConfig.from_env()
    if args.stock:
        config.machine.stock_path = Path(args.stock)
    config.display.backend = "console"
    configure_logging(config.display.log_level)

    app = VendingApp(config)
    app.machine.turn_on()
    console.print("Commands: insert <pence>, vend <location>, return, on, off, status, quit")
    while True:
        command = Prompt.ask("[bold]coinvend[/bold]").strip()
        if not command:
            continue
        if command in {"quit", "exit"}:
            break
        _dispatch(app.machine, command)


def _dispatch(machine: VendingMachine, command: str) -> None:
    verb, _, arg = command.partition(" ")
    arg = arg.strip()
    if verb == "insert" and arg.isdigit():
        outcome = machine.insert_coin(int(arg))
        if outcome:
            console.print(f"Balance {format_pence(outcome.balance)}")
    elif verb == "vend" and arg:
        outcome = machine.vend(arg.upper())
        if outcome.sold and outcome.change is not None:
            _print_change(outcome.change.as_dict())
    elif verb == "return":
        machine.coin_return()
    elif verb == "on":
        machine.turn_on()
    elif verb == "off":
        machine.turn_off()
    elif verb == "status":
        _print_status(machine)
    else:
        console.print(f"Unknown command '{command}'", markup=False)


def _print_change(change: dict) -> None:
    coins = ", ".join(f"{count}×{coin.value}p" for coin, count in change.items() if count)
    console.print(f"Change: {coins or 'none'}")


def _print_status(machine: VendingMachine) -> None:
    table = Table(title=f"Machine {machine.state.value.upper()}")
    table.add_column("Location")
    table.add_column("Item")
    table.add_column("Price", justify="right")
    table.add_column("Left", justify="right")
    for slot in machine.slots():
        table.add_row(slot.location, slot.label, format_pence(slot.price), str(slot.quantity_remaining))
    console.print(table)
    console.print(f"Balance {format_pence(machine.user_balance_value())}")
    console.print("Accepted coins: " + ", ".join(f"{coin.value}p" for coin in CATALOG))
