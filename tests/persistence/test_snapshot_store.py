"""Tests for ledger snapshot persistence."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from banca_app.errors import PersistenceError
from banca_app.models.ledger import LedgerState, OperationResult
from banca_app.persistence.snapshot_store import LedgerSnapshotStore


UTC_NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def snapshot_store(kv_store) -> LedgerSnapshotStore:
    return LedgerSnapshotStore(kv_store)


def _store_raw(kv_store, payload) -> None:
    raw = payload if isinstance(payload, str) else json.dumps(payload)
    kv_store.set_item("daytrade_state", raw)


class TestSave:
    """Test snapshot serialization."""

    def test_serialized_layout(self, kv_store, snapshot_store, make_operation):
        op = make_operation(amount=100.0, result="WIN", payout_percent=80,
                            created_at=datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc),
                            strategy="M5", description="rompimento")
        snapshot_store.save(LedgerState(initial_balance=5000.0).append(op))

        stored = json.loads(kv_store.get_item("daytrade_state"))

        assert stored["bancaInicial"] == 5000.0
        assert stored["operacoes"] == [{
            "id": op.id,
            "createdAt": "2024-05-02T10:00:00+00:00",
            "amount": 100.0,
            "result": "WIN",
            "payoutPercent": 80,
            "strategy": "M5",
            "description": "rompimento",
        }]

    def test_payout_omitted_when_absent(self, kv_store, snapshot_store, make_operation):
        snapshot_store.save(LedgerState(initial_balance=0.0).append(make_operation(result="LOSS")))

        record = json.loads(kv_store.get_item("daytrade_state"))["operacoes"][0]

        assert "payoutPercent" not in record

    def test_saved_state_loads_back(self, snapshot_store, make_operation):
        state = LedgerState(initial_balance=1234.5)
        state = state.append(make_operation(amount=10.0, result="WIN", payout_percent=92.5,
                                            created_at=datetime(2024, 4, 30, 23, 59, tzinfo=timezone.utc)))
        state = state.append(make_operation(amount=20.0, result="LOSS", created_at=UTC_NOW))
        snapshot_store.save(state)

        assert snapshot_store.load(now=UTC_NOW) == state

    def test_write_failure_propagates(self, kv_store, snapshot_store):
        with patch.object(kv_store, "set_item", side_effect=PersistenceError("disk full")):
            with pytest.raises(PersistenceError):
                snapshot_store.save(LedgerState(initial_balance=1.0))


class TestLoadFallback:
    """Test fallback to the default state."""

    def test_absent_snapshot(self, snapshot_store):
        state = snapshot_store.load(now=UTC_NOW)

        assert state.initial_balance == 5000.0
        assert state.operations == ()

    def test_custom_default_balance(self, kv_store):
        store = LedgerSnapshotStore(kv_store, default_initial_balance=750.0)
        assert store.load(now=UTC_NOW).initial_balance == 750.0

    def test_invalid_json(self, kv_store, snapshot_store):
        _store_raw(kv_store, "{not json")
        assert snapshot_store.load(now=UTC_NOW) == snapshot_store.default_state()

    def test_non_object_snapshot(self, kv_store, snapshot_store):
        _store_raw(kv_store, [1, 2, 3])
        assert snapshot_store.load(now=UTC_NOW) == snapshot_store.default_state()

    def test_read_failure(self, kv_store, snapshot_store):
        with patch.object(kv_store, "get_item", side_effect=PersistenceError("locked")):
            state = snapshot_store.load(now=UTC_NOW)

        assert state == snapshot_store.default_state()


class TestLoadCoercion:
    """Test field normalization of stored records."""

    def test_non_numeric_balance_becomes_zero(self, kv_store, snapshot_store):
        _store_raw(kv_store, {"bancaInicial": "abc", "operacoes": []})
        assert snapshot_store.load(now=UTC_NOW).initial_balance == 0.0

    def test_numeric_string_balance(self, kv_store, snapshot_store):
        _store_raw(kv_store, {"bancaInicial": "3200.5", "operacoes": []})
        assert snapshot_store.load(now=UTC_NOW).initial_balance == 3200.5

    def test_non_list_operations_become_empty(self, kv_store, snapshot_store):
        _store_raw(kv_store, {"bancaInicial": 100, "operacoes": {"a": 1}})

        state = snapshot_store.load(now=UTC_NOW)

        assert state.initial_balance == 100.0
        assert state.operations == ()

    def test_record_normalization(self, kv_store, snapshot_store):
        _store_raw(kv_store, {
            "bancaInicial": 5000,
            "operacoes": [
                {"id": "a", "createdAt": "2024-05-02T10:00:00.000Z", "amount": "100", "result": "WIN"},
                {"id": "b", "amount": 40, "result": "draw"},
                {"amount": 10, "result": "LOSS", "createdAt": "2024-05-03T08:00:00Z"},
            ],
        })

        state = snapshot_store.load(now=UTC_NOW)
        first, second, third = state.operations

        assert first.created_at == datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)
        assert first.amount == 100.0
        assert first.result is OperationResult.WIN
        assert first.payout_percent is None
        assert first.strategy == ""
        assert first.description == ""

        assert second.created_at == UTC_NOW
        assert second.result is OperationResult.LOSS

        assert third.id
        assert third.id not in ("a", "b")

    def test_unusable_records_dropped(self, kv_store, snapshot_store):
        _store_raw(kv_store, {
            "bancaInicial": 5000,
            "operacoes": [
                {"id": "neg", "amount": -5, "result": "LOSS"},
                {"id": "nan", "amount": "abc", "result": "WIN"},
                {"id": "payout", "amount": 10, "result": "WIN", "payoutPercent": 150},
                {"id": "date", "amount": 10, "result": "WIN", "createdAt": "ontem"},
                "not-a-record",
                {"id": "ok", "amount": 10, "result": "WIN", "payoutPercent": 75},
            ],
        })

        state = snapshot_store.load(now=UTC_NOW)

        assert [op.id for op in state.operations] == ["ok"]
        assert state.operations[0].payout_percent == 75.0

    def test_insertion_order_preserved(self, kv_store, snapshot_store):
        """Stored order is kept even when timestamps are not sorted"""
        _store_raw(kv_store, {
            "bancaInicial": 0,
            "operacoes": [
                {"id": "late", "amount": 1, "result": "WIN", "createdAt": "2024-05-10T00:00:00Z"},
                {"id": "early", "amount": 1, "result": "WIN", "createdAt": "2024-05-01T00:00:00Z"},
            ],
        })

        state = snapshot_store.load(now=UTC_NOW)

        assert [op.id for op in state.operations] == ["late", "early"]

    def test_clear_removes_snapshot(self, kv_store, snapshot_store):
        snapshot_store.save(LedgerState(initial_balance=10.0))
        snapshot_store.clear()

        assert kv_store.get_item("daytrade_state") is None
