"""Per-operation profit calculations"""

from typing import Iterable

from ..models.ledger import Operation

DEFAULT_PAYOUT_PERCENT = 100.0


def payout_ratio(operation: Operation) -> float:
    """
    Payout ratio applied to a winning stake.

    An operation without payout_percent pays 1:1.
    """
    percent = operation.payout_percent
    if percent is None:
        percent = DEFAULT_PAYOUT_PERCENT
    return percent / 100


def operation_profit(operation: Operation) -> float:
    """
    Signed profit of a single operation.

    WIN gains amount * payout ratio; LOSS loses the full stake, whatever the
    payout was.
    """
    if operation.is_win:
        return operation.amount * payout_ratio(operation)
    return -operation.amount


def total_profit(operations: Iterable[Operation]) -> float:
    """Sum of signed profit over the given operations."""
    return sum((operation_profit(op) for op in operations), 0.0)
