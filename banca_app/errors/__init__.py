"""
Error classification for the banca ledger.

This module provides the exception hierarchy used at the boundaries of the
ledger: rejected user input, unreadable snapshots and storage failures.
"""

from .data_quality import (
    DataQualityError,
    InputValidationError,
    SnapshotFormatError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
)
from .recovery import (
    GracefulDegradationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InputValidationError",
    "SnapshotFormatError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    # Recovery Categories
    "GracefulDegradationError",
]
