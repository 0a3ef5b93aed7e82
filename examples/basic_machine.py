"""Example: stock a machine from JSON and serve one customer."""

from __future__ import annotations

import logging
from pathlib import Path

from coinvend import CoinVendConfig, VendingApp
from coinvend.config import MachineConfig
from coinvend.diagnostics import run_checklist
from coinvend.loaders import load_stock_from_json


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    stock_path = Path(__file__).with_name("stock") / "stock.json"

    stock_file = load_stock_from_json(stock_path)
    for issue in run_checklist(stock_file.slots, stock_file.bank_store()):
        print(f"[{issue.severity.upper()}] {issue.message}")

    app = VendingApp(CoinVendConfig(machine=MachineConfig(stock_path=stock_path, auto_start=True)))
    machine = app.machine

    machine.insert_coin(100)
    outcome = machine.vend("A")
    if outcome:
        print(f"Change: {outcome.change}")

    machine.insert_coin(50)
    machine.vend("C")  # not enough money
    machine.coin_return()
    print(app.snapshot())


if __name__ == "__main__":
    main()
