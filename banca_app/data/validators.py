"""
Validation of raw operation form input.

Form fields arrive as strings (or loosely typed values); the validator checks
them in a fixed order and stops at the first problem, raising an
InputValidationError whose message is shown to the user as is.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config.defaults import InputParams
from ..errors import InputValidationError
from ..models.ledger import OperationResult

AMOUNT_MESSAGE = "Informe um valor válido (> 0)."
PAYOUT_MESSAGE = "Payout deve ser entre 0 e 100."
RESULT_MESSAGE = "Selecione WIN ou LOSS."
STRATEGY_MESSAGE = "Selecione o operacional."


@dataclass(frozen=True)
class ValidatedInput:
    """Typed form values that passed validation."""
    amount: float
    result: OperationResult
    payout_percent: Optional[float]
    strategy: str
    description: str


def _to_number(value: Any) -> Optional[float]:
    """Best-effort numeric conversion; None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class OperationInputValidator:
    """Validates operation form input against the configured rules."""

    def __init__(self, params: Optional[InputParams] = None):
        self.params = params or InputParams()

    def validate(self, raw: Mapping[str, Any]) -> ValidatedInput:
        """
        Validate a raw form submission.

        Args:
            raw: Mapping with amount, result and optional payout_percent,
                strategy and description

        Returns:
            ValidatedInput with typed values

        Raises:
            InputValidationError: On the first field that fails
        """
        amount = self._validate_amount(raw.get("amount"))
        payout_percent = self._validate_payout(raw.get("payout_percent"))
        result = self._validate_result(raw.get("result"))
        strategy = self._validate_strategy(raw.get("strategy"))

        return ValidatedInput(
            amount=amount,
            result=result,
            payout_percent=payout_percent,
            strategy=strategy,
            description=_text(raw.get("description")),
        )

    def _validate_amount(self, value: Any) -> float:
        amount = _to_number(value)
        if amount is None or amount <= 0:
            raise InputValidationError(AMOUNT_MESSAGE, field="amount", value=value)
        return amount

    def _validate_payout(self, value: Any) -> Optional[float]:
        if _is_blank(value):
            return None
        payout = _to_number(value)
        if (payout is None
                or payout < self.params.min_payout_percent
                or payout > self.params.max_payout_percent):
            raise InputValidationError(PAYOUT_MESSAGE, field="payout_percent", value=value)
        return payout

    def _validate_result(self, value: Any) -> OperationResult:
        if isinstance(value, OperationResult):
            return value
        if value == OperationResult.WIN.value:
            return OperationResult.WIN
        if value == OperationResult.LOSS.value:
            return OperationResult.LOSS
        raise InputValidationError(RESULT_MESSAGE, field="result", value=value)

    def _validate_strategy(self, value: Any) -> str:
        strategy = _text(value)
        if self.params.require_strategy and not strategy:
            raise InputValidationError(STRATEGY_MESSAGE, field="strategy", value=value)
        return strategy
