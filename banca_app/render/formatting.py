"""pt-BR display formatting for currency, percentages and timestamps."""

from datetime import datetime


def format_brl(value: float, symbol: str = "R$") -> str:
    """
    Format a monetary value the pt-BR way.

    >>> format_brl(1234.5)
    'R$ 1.234,50'
    >>> format_brl(-80)
    '-R$ 80,00'
    """
    rounded = round(value, 2)
    sign = "-" if rounded < 0 else ""
    # "1,234.50" -> "1.234,50"
    digits = f"{abs(rounded):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {digits}"


def format_signed_brl(value: float, symbol: str = "R$") -> str:
    """Currency with an explicit '+' for values that round to non-negative."""
    prefix = "+" if round(value, 2) >= 0 else ""
    return f"{prefix}{format_brl(value, symbol)}"


def format_pct(value: float) -> str:
    """Percentage (0-100 scale) with two decimals."""
    return f"{value:.2f}%"


def format_datetime(ts: datetime, fmt: str = "%d/%m/%Y %H:%M:%S") -> str:
    return ts.strftime(fmt)
