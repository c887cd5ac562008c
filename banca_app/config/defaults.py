"""Default configuration parameters for the banca ledger."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerParams:
    """Ledger bootstrap parameters."""
    initial_balance: float = 5000.0                  # Banca used when no snapshot exists


@dataclass(frozen=True)
class StorageParams:
    """Key/value storage parameters."""
    db_path: str = "banca.db"
    snapshot_key: str = "daytrade_state"             # Full ledger snapshot
    balance_key: str = "bancaAtual"                  # Running-balance variant
    default_running_balance: float = 100.0


@dataclass(frozen=True)
class InputParams:
    """Operation form validation parameters."""
    min_payout_percent: float = 0.0
    max_payout_percent: float = 100.0
    require_strategy: bool = False                   # Reject blank "operacional"


@dataclass(frozen=True)
class DisplayParams:
    """Card rendering parameters."""
    currency_symbol: str = "R$"
    datetime_format: str = "%d/%m/%Y %H:%M:%S"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    ledger: LedgerParams
    storage: StorageParams
    input: InputParams
    display: DisplayParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        ledger=LedgerParams(),
        storage=StorageParams(),
        input=InputParams(),
        display=DisplayParams(),
    )
