"""Running-balance persistence for the balance-only journal mode."""

import math
from typing import Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..logging.config import get_logger
from ..metrics.profit import operation_profit
from ..models.ledger import Operation
from .key_value_store import KeyValueStore


class RunningBalanceStore:
    """
    Keeps only the current balance, with no operation history.

    Each applied operation moves the stored balance by its signed profit,
    using the same payout rule as the full ledger.
    """

    def __init__(self, store: KeyValueStore, storage_key: str = "bancaAtual",
                 default_balance: float = 100.0):
        self.store = store
        self.storage_key = storage_key
        self.default_balance = float(default_balance)
        self.logger = get_logger("banca.balance")

    @classmethod
    def from_config(cls, config: Optional[DefaultConfig] = None,
                    store: Optional[KeyValueStore] = None) -> "RunningBalanceStore":
        """Build the store from the storage section, sharing the ledger database."""
        config = config or get_default_config()
        return cls(
            store or KeyValueStore(config.storage.db_path),
            storage_key=config.storage.balance_key,
            default_balance=config.storage.default_running_balance,
        )

    def load(self) -> float:
        """Stored balance, or the default when absent or not a finite number."""
        raw = self.store.get_item(self.storage_key)
        if raw is None:
            return self.default_balance

        try:
            balance = float(raw)
        except ValueError:
            self.logger.warning("Stored balance unreadable, using default",
                                storage_key=self.storage_key, raw=raw[:50])
            return self.default_balance

        if not math.isfinite(balance):
            return self.default_balance
        return balance

    def save(self, balance: float) -> None:
        self.store.set_item(self.storage_key, repr(float(balance)))

    def apply(self, operation: Operation) -> float:
        """
        Add the operation's profit to the stored balance.

        Returns:
            The new balance
        """
        delta = operation_profit(operation)
        balance = self.load() + delta
        self.save(balance)

        self.logger.info(
            "Running balance updated",
            operation_id=operation.id,
            result=operation.result.value,
            delta=delta,
            balance=balance
        )
        return balance
