"""Mapping of KPI snapshots onto the dashboard cards."""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DisplayParams
from ..models.ledger import KPISnapshot, OperationResult
from .formatting import format_brl, format_datetime, format_pct, format_signed_brl

POSITIVE_CLASS = "text-success"
NEGATIVE_CLASS = "text-danger"
WIN_BADGE_CLASS = "bg-success"
LOSS_BADGE_CLASS = "bg-danger"


@dataclass(frozen=True)
class CardView:
    """Text and style classes for one display element."""
    element_id: str
    text: str
    classes: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"id": self.element_id, "text": self.text, "classes": list(self.classes)}


def _tone(value: float) -> tuple[str, ...]:
    return (POSITIVE_CLASS,) if value >= 0 else (NEGATIVE_CLASS,)


def render_cards(kpis: KPISnapshot, display: Optional[DisplayParams] = None) -> dict[str, CardView]:
    """
    Build the card views for a KPI snapshot, keyed by element id.

    The last-operation cards are left out when the log is empty.
    """
    display = display or DisplayParams()
    symbol = display.currency_symbol
    views = []

    views.append(CardView("card-banca-valor", format_brl(kpis.current_balance, symbol)))
    views.append(CardView(
        "card-banca-var",
        f"{format_signed_brl(kpis.month_variation_value, symbol)} ({format_pct(kpis.month_variation_pct)})",
        _tone(kpis.month_variation_value),
    ))

    views.append(CardView("card-wins", f"{kpis.month_wins} WIN"))
    views.append(CardView("card-losses", f"{kpis.month_losses} LOSS"))
    views.append(CardView("card-hit-rate", format_pct(kpis.hit_rate)))

    views.append(CardView(
        "card-lucro-valor",
        format_signed_brl(kpis.month_profit, symbol),
        _tone(kpis.month_profit),
    ))

    streak_label = kpis.current_streak_result.value if kpis.current_streak_result else ""
    views.append(CardView("card-streak-current", f"{kpis.current_streak} {streak_label}".strip()))
    views.append(CardView("card-streak-max", f"{kpis.max_win_streak} WIN"))

    views.append(CardView("card-avg-amount", format_brl(kpis.average_month_amount, symbol)))

    last = kpis.last_operation
    if last is not None and kpis.last_operation_profit is not None:
        badge = WIN_BADGE_CLASS if last.result is OperationResult.WIN else LOSS_BADGE_CLASS
        views.append(CardView("card-last-result", last.result.value, (badge,)))
        views.append(CardView(
            "card-last-profit",
            format_signed_brl(kpis.last_operation_profit, symbol),
            _tone(kpis.last_operation_profit),
        ))
        views.append(CardView(
            "card-last-when",
            format_datetime(last.created_at, display.datetime_format),
        ))

    return {view.element_id: view for view in views}
