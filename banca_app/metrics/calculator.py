"""Ledger calculator deriving the dashboard KPIs from a ledger state"""

from datetime import datetime

from ..models.ledger import KPISnapshot, LedgerState, OperationResult
from ..utils.time import month_start as first_instant_of_month
from .profit import operation_profit, total_profit
from .streaks import current_streak, max_win_streak


def compute_kpis(state: LedgerState, now: datetime) -> KPISnapshot:
    """
    Compute every dashboard KPI for a ledger state.

    Pure and deterministic: the wall clock is never read, so identical
    (state, now) pairs always produce identical snapshots. Operations are
    assumed valid (amount > 0, payout within 0-100); validation belongs to
    the input layer.

    Args:
        state: Initial balance plus the chronological operation log
        now: Reference instant; defines the current month and its upper bound

    Returns:
        KPISnapshot for the given instant
    """
    operations = state.operations
    start = first_instant_of_month(now)

    current_balance = state.initial_balance + total_profit(operations)

    # Balance at the start of the month is the base for the month variation
    profit_before_month = total_profit(op for op in operations if op.created_at < start)
    month_baseline = state.initial_balance + profit_before_month

    month_ops = [op for op in operations if start <= op.created_at <= now]
    month_wins = sum(1 for op in month_ops if op.result is OperationResult.WIN)
    month_losses = sum(1 for op in month_ops if op.result is OperationResult.LOSS)

    decided = month_wins + month_losses
    hit_rate = month_wins / decided * 100 if decided > 0 else 0.0

    month_profit = total_profit(month_ops)
    # Non-positive baseline would flip or blow up the percentage
    month_variation_pct = month_profit / month_baseline * 100 if month_baseline > 0 else 0.0

    if month_ops:
        average_month_amount = sum(op.amount for op in month_ops) / len(month_ops)
    else:
        average_month_amount = 0.0

    streak, streak_result = current_streak(operations)
    last = state.last_operation

    return KPISnapshot(
        computed_at=now,
        current_balance=current_balance,
        month_start=start,
        month_baseline=month_baseline,
        month_wins=month_wins,
        month_losses=month_losses,
        hit_rate=hit_rate,
        month_profit=month_profit,
        month_variation_pct=month_variation_pct,
        average_month_amount=average_month_amount,
        current_streak=streak,
        current_streak_result=streak_result,
        max_win_streak=max_win_streak(operations),
        last_operation=last,
        last_operation_profit=operation_profit(last) if last is not None else None,
    )
