"""
Logging configuration and utilities for the banca ledger.
"""
from .config import configure_logging, get_ledger_logger, get_logger

__all__ = ["configure_logging", "get_logger", "get_ledger_logger"]
