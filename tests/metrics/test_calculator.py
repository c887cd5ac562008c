"""Tests for the ledger KPI calculator"""

from datetime import datetime, timedelta, timezone

import pytest

from banca_app.metrics.calculator import compute_kpis
from banca_app.metrics.profit import operation_profit
from banca_app.models.ledger import LedgerState, OperationResult


APRIL = datetime(2024, 4, 20, 9, 30)


class TestEmptyLedger:
    """Test KPIs of a ledger without operations"""

    def test_empty_ledger_defaults(self, now):
        kpis = compute_kpis(LedgerState(initial_balance=5000.0), now)

        assert kpis.current_balance == 5000.0
        assert kpis.month_baseline == 5000.0
        assert kpis.hit_rate == 0
        assert kpis.month_wins == 0
        assert kpis.month_losses == 0
        assert kpis.month_profit == 0
        assert kpis.month_variation_pct == 0
        assert kpis.average_month_amount == 0
        assert kpis.current_streak == 0
        assert kpis.current_streak_result is None
        assert kpis.max_win_streak == 0
        assert kpis.last_operation is None
        assert kpis.last_operation_profit is None


class TestScenarios:
    """Reference scenarios for balance and streak KPIs"""

    def test_single_win_with_payout(self, now, make_operation):
        op = make_operation(amount=100.0, result="WIN", payout_percent=80)
        state = LedgerState(initial_balance=5000.0).append(op)

        kpis = compute_kpis(state, now)

        assert operation_profit(op) == 80.0
        assert kpis.current_balance == 5080.0
        assert kpis.month_profit == 80.0
        assert kpis.month_variation_pct == pytest.approx(1.6)
        assert kpis.hit_rate == 100.0
        assert kpis.last_operation == op
        assert kpis.last_operation_profit == 80.0

    def test_two_losses(self, now, make_operation):
        state = LedgerState(initial_balance=5000.0)
        state = state.append(make_operation(amount=50.0, result="LOSS"))
        state = state.append(make_operation(amount=50.0, result="LOSS"))

        kpis = compute_kpis(state, now)

        assert kpis.current_balance == 4900.0
        assert kpis.max_win_streak == 0
        assert kpis.current_streak == 2
        assert kpis.current_streak_result is OperationResult.LOSS
        assert kpis.hit_rate == 0.0
        assert kpis.month_losses == 2

    def test_non_positive_baseline_zeroes_variation(self, now, make_operation):
        """Baseline of -50 at month start: variation percent is 0"""
        state = LedgerState(initial_balance=100.0)
        state = state.append(make_operation(amount=150.0, result="LOSS", created_at=APRIL))
        state = state.append(make_operation(amount=500.0, result="WIN"))

        kpis = compute_kpis(state, now)

        assert kpis.month_baseline == -50.0
        assert kpis.month_profit == 500.0
        assert kpis.month_variation_pct == 0

    def test_zero_baseline_zeroes_variation(self, now, make_operation):
        state = LedgerState(initial_balance=0.0).append(make_operation(amount=10.0, result="WIN"))

        kpis = compute_kpis(state, now)

        assert kpis.month_baseline == 0.0
        assert kpis.month_variation_pct == 0


class TestMonthWindow:
    """Test the current-month filtering"""

    def test_previous_month_feeds_baseline_only(self, now, make_operation):
        state = LedgerState(initial_balance=1000.0)
        state = state.append(make_operation(amount=200.0, result="WIN", created_at=APRIL))
        state = state.append(make_operation(amount=100.0, result="LOSS", created_at=APRIL))
        state = state.append(make_operation(amount=60.0, result="WIN", payout_percent=50))

        kpis = compute_kpis(state, now)

        assert kpis.month_baseline == 1100.0
        assert kpis.month_wins == 1
        assert kpis.month_losses == 0
        assert kpis.month_profit == 30.0
        assert kpis.current_balance == 1130.0
        assert kpis.month_variation_pct == pytest.approx(30.0 / 1100.0 * 100)
        assert kpis.average_month_amount == 60.0

    def test_future_operations_excluded_from_month(self, now, make_operation):
        """Operations after ``now`` still move the balance"""
        state = LedgerState(initial_balance=1000.0)
        state = state.append(make_operation(amount=100.0, result="WIN"))
        state = state.append(make_operation(amount=40.0, result="LOSS",
                                            created_at=now + timedelta(hours=1)))

        kpis = compute_kpis(state, now)

        assert kpis.month_wins == 1
        assert kpis.month_losses == 0
        assert kpis.month_profit == 100.0
        assert kpis.current_balance == 1060.0

    def test_boundaries_are_inclusive(self, now, make_operation):
        month_start = datetime(2024, 5, 1)
        state = LedgerState(initial_balance=1000.0)
        state = state.append(make_operation(amount=10.0, result="WIN", created_at=month_start))
        state = state.append(make_operation(amount=20.0, result="LOSS", created_at=now))
        state = state.append(make_operation(amount=5.0, result="LOSS",
                                            created_at=month_start - timedelta(microseconds=1)))

        kpis = compute_kpis(state, now)

        assert kpis.month_start == month_start
        assert kpis.month_wins == 1
        assert kpis.month_losses == 1
        assert kpis.month_baseline == 995.0
        assert kpis.average_month_amount == 15.0

    def test_hit_rate_percentage(self, now, make_operation):
        state = LedgerState(initial_balance=1000.0)
        for result in ["WIN", "LOSS", "WIN", "WIN"]:
            state = state.append(make_operation(amount=10.0, result=result))

        kpis = compute_kpis(state, now)

        assert kpis.hit_rate == 75.0

    def test_hit_rate_zero_when_month_empty(self, now, make_operation):
        state = LedgerState(initial_balance=1000.0).append(
            make_operation(amount=10.0, result="WIN", created_at=APRIL)
        )

        kpis = compute_kpis(state, now)

        assert kpis.hit_rate == 0
        assert kpis.average_month_amount == 0
        assert kpis.last_operation is not None

    def test_timezone_aware_timestamps(self, make_operation):
        now = datetime(2024, 6, 1, 2, 0, tzinfo=timezone.utc)
        state = LedgerState(initial_balance=1000.0)
        state = state.append(make_operation(
            amount=50.0, result="LOSS", created_at=datetime(2024, 5, 31, 23, 0, tzinfo=timezone.utc)
        ))
        state = state.append(make_operation(
            amount=80.0, result="WIN", created_at=datetime(2024, 6, 1, 1, 0, tzinfo=timezone.utc)
        ))

        kpis = compute_kpis(state, now)

        assert kpis.month_start == datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert kpis.month_baseline == 950.0
        assert kpis.month_wins == 1
        assert kpis.month_losses == 0


class TestProperties:
    """Invariants that hold for any operation log"""

    SEQUENCES = [
        ["WIN"],
        ["LOSS"],
        ["WIN", "LOSS", "LOSS", "WIN", "WIN"],
        ["LOSS", "LOSS", "WIN", "WIN", "WIN", "LOSS", "WIN"],
    ]

    def _state(self, make_operation, results):
        state = LedgerState(initial_balance=2500.0)
        for i, result in enumerate(results):
            state = state.append(make_operation(amount=10.0 * (i + 1), result=result,
                                                payout_percent=85 if i % 2 else None))
        return state

    def test_balance_is_initial_plus_profits(self, now, make_operation):
        for results in self.SEQUENCES:
            state = self._state(make_operation, results)
            kpis = compute_kpis(state, now)
            expected = state.initial_balance + sum(operation_profit(op) for op in state.operations)
            assert kpis.current_balance == pytest.approx(expected)

    def test_hit_rate_in_range(self, now, make_operation):
        for results in self.SEQUENCES:
            kpis = compute_kpis(self._state(make_operation, results), now)
            assert 0 <= kpis.hit_rate <= 100

    def test_max_win_streak_covers_current_win_streak(self, now, make_operation):
        for results in self.SEQUENCES:
            kpis = compute_kpis(self._state(make_operation, results), now)
            if kpis.current_streak_result is OperationResult.WIN:
                assert kpis.max_win_streak >= kpis.current_streak

    def test_idempotent(self, now, make_operation):
        state = self._state(make_operation, self.SEQUENCES[-1])

        first = compute_kpis(state, now)
        second = compute_kpis(state, now)

        assert first == second

    def test_input_state_not_mutated(self, now, make_operation):
        state = self._state(make_operation, self.SEQUENCES[2])
        operations_before = state.operations

        compute_kpis(state, now)

        assert state.operations is operations_before
        assert len(state) == 5
