"""Data models for the operation ledger"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class OperationResult(str, Enum):
    """Outcome of a single operation."""
    WIN = "WIN"
    LOSS = "LOSS"


@dataclass(frozen=True)
class Operation:
    """One journal entry; immutable once created."""
    id: str
    created_at: datetime
    amount: float                            # Stake magnitude, always > 0
    result: OperationResult
    payout_percent: Optional[float] = None   # 0-100, WIN only; None means 1:1
    strategy: str = ""
    description: str = ""

    @property
    def is_win(self) -> bool:
        return self.result is OperationResult.WIN


@dataclass(frozen=True)
class LedgerState:
    """Initial balance plus the append-only, chronologically ordered log."""
    initial_balance: float
    operations: tuple[Operation, ...] = field(default_factory=tuple)

    def append(self, operation: Operation) -> "LedgerState":
        """Return a new state with the operation at the end of the log."""
        return replace(self, operations=self.operations + (operation,))

    @property
    def last_operation(self) -> Optional[Operation]:
        return self.operations[-1] if self.operations else None

    def __len__(self) -> int:
        return len(self.operations)


@dataclass(frozen=True)
class KPISnapshot:
    """Every KPI the dashboard cards display, computed at a given instant"""
    computed_at: datetime
    current_balance: float
    month_start: datetime
    month_baseline: float
    month_wins: int
    month_losses: int
    hit_rate: float
    month_profit: float
    month_variation_pct: float
    average_month_amount: float
    current_streak: int
    current_streak_result: Optional[OperationResult]
    max_win_streak: int
    last_operation: Optional[Operation]
    last_operation_profit: Optional[float]

    @property
    def month_variation_value(self) -> float:
        """Absolute month variation; same figure as month_profit"""
        return self.month_profit

    @property
    def month_operation_count(self) -> int:
        return self.month_wins + self.month_losses
