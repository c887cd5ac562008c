"""Win/loss streak calculations"""

from typing import Optional, Sequence

from ..models.ledger import Operation, OperationResult


def current_streak(operations: Sequence[Operation]) -> tuple[int, Optional[OperationResult]]:
    """
    Length and result of the trailing run of same-result operations.

    Scans from the most recent operation backward.

    Returns:
        (0, None) for an empty log
    """
    if not operations:
        return 0, None

    streak_result = operations[-1].result
    count = 0
    for op in reversed(operations):
        if op.result is not streak_result:
            break
        count += 1
    return count, streak_result


def max_win_streak(operations: Sequence[Operation]) -> int:
    """Longest run of consecutive WINs anywhere in the log."""
    longest = 0
    running = 0
    for op in operations:
        if op.is_win:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest
