"""Rendering of KPI snapshots into dashboard card views"""

from .cards import CardView, render_cards
from .formatting import format_brl, format_datetime, format_pct, format_signed_brl
from .stdout_renderer import StdoutCardRenderer

__all__ = [
    "CardView",
    "render_cards",
    "StdoutCardRenderer",
    "format_brl",
    "format_signed_brl",
    "format_pct",
    "format_datetime",
]
