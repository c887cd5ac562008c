"""
Data models and contracts module.

Immutable data structures for operations, ledger state and KPI snapshots.
Follows functional programming principles with frozen dataclasses.
"""
