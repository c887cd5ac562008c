"""
Trading journal coordinator.

Wires the ledger pipeline together:
Form input → Validation → Operation → Ledger state → Snapshot store → KPIs → Cards
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog

from .config.defaults import DefaultConfig, DisplayParams, get_default_config
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.parsers import build_operation
from .data.validators import OperationInputValidator
from .errors import InputValidationError
from .logging.config import get_ledger_logger, log_input_rejected, log_operation_recorded
from .metrics.calculator import compute_kpis
from .metrics.profit import operation_profit
from .models.ledger import KPISnapshot, LedgerState, Operation
from .persistence.key_value_store import KeyValueStore
from .persistence.snapshot_store import LedgerSnapshotStore
from .render.cards import CardView, render_cards
from .utils.time import local_now

logger = structlog.get_logger(__name__)
ledger_logger = get_ledger_logger(__name__)


def _normalize_now(now: Optional[datetime]) -> datetime:
    """Aware local time; naive values are read as local wall-clock time."""
    if now is None:
        return local_now()
    if now.tzinfo is None:
        return now.astimezone()
    return now


class TradingJournal:
    """
    Owns the in-memory ledger state of one journal session.

    The snapshot store holds the canonical copy; every accepted operation is
    appended to a new LedgerState, persisted, and the KPIs recomputed.
    """

    def __init__(
        self,
        snapshot_store: LedgerSnapshotStore,
        validator: Optional[OperationInputValidator] = None,
        display: Optional[DisplayParams] = None,
    ) -> None:
        self.logger = logger
        self.ledger_logger = ledger_logger

        self.snapshot_store = snapshot_store
        self.validator = validator or OperationInputValidator()
        self.display = display or DisplayParams()

        self._state: Optional[LedgerState] = None

    @classmethod
    def from_config(
        cls,
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "TradingJournal":
        """Build a journal with storage and validation taken from configuration."""
        loader = ConfigLoader.create(config_dir)
        merged = loader.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            for error in errors:
                logger.error(
                    "Invalid configuration value",
                    field=error.field,
                    message=error.message,
                    value=error.value
                )
            raise ValueError(f"Invalid configuration: {', '.join(e.field for e in errors)}")

        config = loader.config_from_dict(merged)
        return cls.from_default_config(config)

    @classmethod
    def from_default_config(cls, config: Optional[DefaultConfig] = None) -> "TradingJournal":
        config = config or get_default_config()
        store = KeyValueStore(config.storage.db_path)
        snapshot_store = LedgerSnapshotStore(
            store,
            storage_key=config.storage.snapshot_key,
            default_initial_balance=config.ledger.initial_balance,
        )
        return cls(
            snapshot_store,
            validator=OperationInputValidator(config.input),
            display=config.display,
        )

    @property
    def state(self) -> LedgerState:
        """Current ledger state, loaded from storage on first access."""
        if self._state is None:
            self.load()
        return self._state  # type: ignore[return-value]

    def load(self, now: Optional[datetime] = None) -> LedgerState:
        """(Re)load the canonical state from the snapshot store."""
        self._state = self.snapshot_store.load(_normalize_now(now))
        self.logger.info(
            "Journal loaded",
            initial_balance=self._state.initial_balance,
            operation_count=len(self._state.operations)
        )
        return self._state

    def add_operation(self, raw: Mapping[str, Any], now: Optional[datetime] = None) -> KPISnapshot:
        """
        Record a form submission and return the refreshed KPIs.

        Args:
            raw: Raw form fields (amount, result, payout_percent, strategy, description)
            now: Creation time of the operation; local wall clock when omitted,
                naive values are taken as local time

        Raises:
            InputValidationError: If the input is rejected; the ledger is unchanged
            PersistenceError: If the new state cannot be stored; the ledger is unchanged
        """
        now = _normalize_now(now)
        state = self._current_state(now)

        try:
            operation = build_operation(raw, now, self.validator)
        except InputValidationError as e:
            log_input_rejected(self.ledger_logger, e.field, str(e), e.value)
            raise

        new_state = state.append(operation)
        self.snapshot_store.save(new_state)
        self._state = new_state

        kpis = compute_kpis(new_state, now)
        self._log_recorded(operation, kpis)
        return kpis

    def kpis(self, now: Optional[datetime] = None) -> KPISnapshot:
        """KPIs of the current state at ``now``."""
        now = _normalize_now(now)
        return compute_kpis(self._current_state(now), now)

    def cards(self, now: Optional[datetime] = None) -> dict[str, CardView]:
        """Card views of the current KPIs."""
        return render_cards(self.kpis(now), self.display)

    def set_initial_balance(self, initial_balance: float) -> LedgerState:
        """Replace the starting balance, keeping the operation log."""
        new_state = LedgerState(initial_balance=float(initial_balance),
                                operations=self.state.operations)
        self.snapshot_store.save(new_state)
        self._state = new_state
        self.logger.info("Initial balance updated", initial_balance=new_state.initial_balance)
        return new_state

    def _log_recorded(self, operation: Operation, kpis: KPISnapshot) -> None:
        log_operation_recorded(
            self.ledger_logger,
            operation_id=operation.id,
            result=operation.result.value,
            amount=operation.amount,
            profit=operation_profit(operation),
            balance=kpis.current_balance,
            context={"strategy": operation.strategy} if operation.strategy else None,
        )

    def _current_state(self, now: datetime) -> LedgerState:
        # First load uses the caller's clock so stored timestamps match it
        if self._state is None:
            return self.load(now)
        return self._state
