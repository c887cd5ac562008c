"""Ledger snapshot persistence with fallback to a default state."""

import json
import math
from datetime import datetime
from typing import Any, Optional

from ..data.parsers import new_operation_id
from ..errors import PersistenceError, SnapshotFormatError
from ..logging.config import get_logger
from ..models.ledger import LedgerState, Operation, OperationResult
from ..utils.time import format_iso, local_now, parse_iso
from .key_value_store import KeyValueStore

SNAPSHOT_FORMAT = '{"bancaInicial": number, "operacoes": [operation, ...]}'


def _coerce_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class LedgerSnapshotStore:
    """
    Reads and writes the canonical LedgerState under one storage key.

    Serialized form::

        {"bancaInicial": 5000,
         "operacoes": [{"id": "...", "createdAt": "2024-05-02T10:00:00+00:00",
                        "amount": 100, "result": "WIN", "payoutPercent": 80,
                        "strategy": "", "description": ""}]}

    Loading never raises: an absent or unreadable snapshot yields the default
    state, and individual records that would break the calculator are dropped.
    """

    def __init__(self, store: KeyValueStore, storage_key: str = "daytrade_state",
                 default_initial_balance: float = 5000.0):
        self.store = store
        self.storage_key = storage_key
        self.default_initial_balance = float(default_initial_balance)
        self.logger = get_logger("banca.snapshot")

    def default_state(self) -> LedgerState:
        return LedgerState(initial_balance=self.default_initial_balance, operations=())

    def save(self, state: LedgerState) -> None:
        """
        Persist the full ledger state.

        Raises:
            PersistenceError: If the underlying store cannot be written
        """
        payload = {
            "bancaInicial": state.initial_balance,
            "operacoes": [self._serialize_operation(op) for op in state.operations],
        }
        self.store.set_item(self.storage_key, json.dumps(payload, ensure_ascii=False))
        self.logger.debug(
            "Ledger snapshot saved",
            storage_key=self.storage_key,
            operation_count=len(state.operations)
        )

    def load(self, now: Optional[datetime] = None) -> LedgerState:
        """
        Load the ledger state, falling back to the default state.

        Args:
            now: Timestamp given to records stored without createdAt; also
                the timezone reference for parsed timestamps

        Returns:
            Stored LedgerState, or the default state when nothing usable is stored
        """
        now = now or local_now()

        try:
            raw = self.store.get_item(self.storage_key)
        except PersistenceError as e:
            self.logger.warning(
                "Ledger snapshot unreadable, using default state",
                storage_key=self.storage_key,
                error=str(e)
            )
            return self.default_state()

        if raw is None:
            self.logger.info("No ledger snapshot stored, using default state",
                             storage_key=self.storage_key)
            return self.default_state()

        try:
            return self._parse_snapshot(raw, now)
        except SnapshotFormatError as e:
            self.logger.warning(
                "Ledger snapshot malformed, using default state",
                storage_key=self.storage_key,
                error=str(e),
                fallback_strategy=e.fallback_strategy
            )
            return self.default_state()

    def clear(self) -> None:
        self.store.remove_item(self.storage_key)

    def _parse_snapshot(self, raw: str, now: datetime) -> LedgerState:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(
                f"Invalid JSON: {e.msg}",
                raw_data=raw[:100],
                expected_format=SNAPSHOT_FORMAT
            ) from e

        if not isinstance(parsed, dict):
            raise SnapshotFormatError(
                f"Snapshot must be an object, got {type(parsed).__name__}",
                raw_data=raw[:100],
                expected_format=SNAPSHOT_FORMAT
            )

        # Missing or zero balance both read back as 0
        initial_balance = _coerce_number(parsed.get("bancaInicial")) or 0.0

        records = parsed.get("operacoes")
        if not isinstance(records, list):
            records = []

        operations = []
        for index, record in enumerate(records):
            operation = self._deserialize_operation(record, now, index)
            if operation is not None:
                operations.append(operation)

        return LedgerState(initial_balance=initial_balance, operations=tuple(operations))

    def _serialize_operation(self, op: Operation) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": op.id,
            "createdAt": format_iso(op.created_at),
            "amount": op.amount,
            "result": op.result.value,
            "strategy": op.strategy,
            "description": op.description,
        }
        if op.payout_percent is not None:
            record["payoutPercent"] = op.payout_percent
        return record

    def _deserialize_operation(self, record: Any, now: datetime, index: int) -> Optional[Operation]:
        """Rebuild one operation; None (with a warning) if it cannot be used."""
        if not isinstance(record, dict):
            self._drop_record(index, "record is not an object")
            return None

        amount = _coerce_number(record.get("amount"))
        if amount is None or amount <= 0:
            self._drop_record(index, "amount is not a positive number", record.get("amount"))
            return None

        payout_percent = None
        if record.get("payoutPercent") is not None:
            payout_percent = _coerce_number(record.get("payoutPercent"))
            if payout_percent is None or not 0 <= payout_percent <= 100:
                self._drop_record(index, "payoutPercent outside 0-100", record.get("payoutPercent"))
                return None

        created_raw = record.get("createdAt")
        if created_raw:
            try:
                created_at = parse_iso(str(created_raw), tz_reference=now)
            except ValueError:
                self._drop_record(index, "createdAt is not an ISO-8601 timestamp", created_raw)
                return None
        else:
            created_at = now

        # Anything but an explicit WIN counts as a loss
        result = OperationResult.WIN if record.get("result") == "WIN" else OperationResult.LOSS

        operation_id = record.get("id")

        return Operation(
            id=str(operation_id) if operation_id else new_operation_id(),
            created_at=created_at,
            amount=amount,
            result=result,
            payout_percent=payout_percent,
            strategy=str(record.get("strategy") or ""),
            description=str(record.get("description") or ""),
        )

    def _drop_record(self, index: int, reason: str, value: Any = None) -> None:
        self.logger.warning(
            "Dropping unusable operation record",
            storage_key=self.storage_key,
            index=index,
            reason=reason,
            value=repr(value)
        )
