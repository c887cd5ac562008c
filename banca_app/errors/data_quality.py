"""
Data quality error classifications for ledger input.

These exceptions categorize the problems found in data entering the ledger,
either typed by the user in the operation form or read back from a stored
snapshot.
"""

from typing import Any, Optional, Dict

from .recovery import GracefulDegradationError


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InputValidationError(DataQualityError):
    """Raw operation input was rejected; the message is shown to the user."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    @property
    def user_message(self) -> str:
        return str(self)


class SnapshotFormatError(DataQualityError, GracefulDegradationError):
    """Stored ledger snapshot is absent, unparseable or has the wrong shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        DataQualityError.__init__(self, message, **kwargs)
        self.degraded_functionality = "ledger_history"
        self.fallback_strategy = "default_state"
        self.allows_degradation = True
        self.raw_data = raw_data
        self.expected_format = expected_format
