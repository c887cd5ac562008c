"""Pytest configuration and shared fixtures."""

from datetime import datetime
from itertools import count
from typing import Callable, Optional

import pytest

from banca_app.models.ledger import Operation, OperationResult
from banca_app.persistence.key_value_store import KeyValueStore


@pytest.fixture
def now() -> datetime:
    """Reference instant in the middle of May 2024 (naive local time)."""
    return datetime(2024, 5, 15, 12, 0, 0)


@pytest.fixture
def make_operation(now) -> Callable[..., Operation]:
    """Factory for operations with sequential ids, created at ``now`` by default."""
    ids = count(1)

    def _make(
        amount: float = 100.0,
        result: str = "WIN",
        payout_percent: Optional[float] = None,
        created_at: Optional[datetime] = None,
        strategy: str = "",
        description: str = "",
    ) -> Operation:
        return Operation(
            id=f"op-{next(ids)}",
            created_at=created_at or now,
            amount=amount,
            result=OperationResult(result),
            payout_percent=payout_percent,
            strategy=strategy,
            description=description,
        )

    return _make


@pytest.fixture
def kv_store(tmp_path) -> KeyValueStore:
    """SQLite key/value store in a temporary directory."""
    return KeyValueStore(str(tmp_path / "test_banca.db"))
