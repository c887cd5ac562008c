"""Construction of Operation records from form input."""

import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..models.ledger import Operation
from .validators import OperationInputValidator


def new_operation_id() -> str:
    """Fresh opaque operation identifier."""
    return uuid.uuid4().hex


def build_operation(
    raw: Mapping[str, Any],
    now: datetime,
    validator: Optional[OperationInputValidator] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> Operation:
    """
    Validate a form submission and build the Operation it describes.

    Args:
        raw: Raw form fields
        now: Creation timestamp for the operation
        validator: Validator to apply (default rules when omitted)
        id_factory: Identifier generator (uuid4 hex when omitted)

    Raises:
        InputValidationError: If the input is rejected
    """
    validator = validator or OperationInputValidator()
    validated = validator.validate(raw)

    return Operation(
        id=(id_factory or new_operation_id)(),
        created_at=now,
        amount=validated.amount,
        result=validated.result,
        payout_percent=validated.payout_percent,
        strategy=validated.strategy,
        description=validated.description,
    )
