"""KPI calculation engine for the operation ledger"""

from .calculator import compute_kpis
from .profit import operation_profit, payout_ratio, total_profit
from .streaks import current_streak, max_win_streak

__all__ = [
    "compute_kpis",
    "operation_profit",
    "payout_ratio",
    "total_profit",
    "current_streak",
    "max_win_streak",
]
