#!/usr/bin/env python3
"""
Basic Usage Example - Banca Trading Journal

This script demonstrates the basic usage of the trading journal with a
temporary storage file. It shows how to:
- Build a journal from configuration
- Record WIN/LOSS operations from form-like input
- Handle rejected input
- Render the dashboard cards
- Track the same operations in balance-only mode

Run: python examples/basic_usage.py
"""

import tempfile
from datetime import timedelta
from pathlib import Path

from banca_app.config.loader import ConfigLoader
from banca_app.errors import InputValidationError
from banca_app.journal import TradingJournal
from banca_app.logging.config import configure_logging
from banca_app.persistence.balance_store import RunningBalanceStore
from banca_app.render.stdout_renderer import StdoutCardRenderer
from banca_app.utils.time import local_now


SAMPLE_OPERATIONS = [
    {"amount": "100", "result": "WIN", "payout_percent": "80", "strategy": "M5 retração"},
    {"amount": "50", "result": "LOSS", "strategy": "M5 retração"},
    {"amount": "75,5", "result": "WIN", "description": "entrada no rompimento"},
    {"amount": "120", "result": "WIN", "payout_percent": "87"},
]


def main() -> None:
    configure_logging(level="INFO")

    with tempfile.TemporaryDirectory() as tmp_dir:
        db_path = str(Path(tmp_dir) / "banca.db")
        journal = TradingJournal.from_config(overrides={"storage": {"db_path": db_path}})
        journal.load()

        start = local_now()
        for offset, raw in enumerate(SAMPLE_OPERATIONS):
            kpis = journal.add_operation(raw, now=start + timedelta(minutes=offset))
            print(f"➡️  {raw['result']:<4} saldo: {kpis.current_balance:.2f}")

        print("\n🚫 Submitting invalid input...")
        try:
            journal.add_operation({"amount": "0", "result": "WIN"})
        except InputValidationError as e:
            print(f"   rejected ({e.field}): {e.user_message}")

        print("\n📊 Dashboard")
        cards = journal.cards(now=start + timedelta(minutes=len(SAMPLE_OPERATIONS)))
        StdoutCardRenderer(format="pretty").render(cards)

        print("\n💰 Balance-only mode")
        config = ConfigLoader.create().build_config({"storage": {"db_path": db_path}})
        running = RunningBalanceStore.from_config(config)
        balance = running.load()
        for op in journal.state.operations:
            balance = running.apply(op)
        print(f"   banca atual: {balance:.2f}")


if __name__ == "__main__":
    main()
