"""
Banca App - Trading Journal Ledger

Keeps the cash balance ("banca") of a manual trading journal, records
WIN/LOSS operations and derives the KPIs shown on the dashboard cards
(hit rate, streaks, monthly P&L).
"""

__version__ = "0.1.0"
__author__ = "Banca Team"
