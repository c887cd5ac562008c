"""Configuration validation utilities."""

import math
from dataclasses import dataclass, fields
from typing import Any

from .defaults import DisplayParams, InputParams, LedgerParams, StorageParams

SECTION_PARAMS = {
    "ledger": LedgerParams,
    "storage": StorageParams,
    "input": InputParams,
    "display": DisplayParams,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_ledger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate ledger parameters."""
        errors = []

        if "initial_balance" in params:
            value = params["initial_balance"]
            if not _is_number(value) or not math.isfinite(value):
                errors.append(ValidationError(
                    field="initial_balance",
                    message="Must be a finite number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        for key_field in ("db_path", "snapshot_key", "balance_key"):
            if key_field in params:
                value = params[key_field]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=key_field,
                        message="Must be a non-empty string",
                        value=value
                    ))

        if "default_running_balance" in params:
            value = params["default_running_balance"]
            if not _is_number(value) or not math.isfinite(value):
                errors.append(ValidationError(
                    field="default_running_balance",
                    message="Must be a finite number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_input_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate operation form parameters."""
        errors = []

        bounds_valid = True
        for bound_field in ("min_payout_percent", "max_payout_percent"):
            if bound_field in params:
                value = params[bound_field]
                if not _is_number(value) or value < 0 or value > 100:
                    bounds_valid = False
                    errors.append(ValidationError(
                        field=bound_field,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        if bounds_valid and "min_payout_percent" in params and "max_payout_percent" in params:
            if params["min_payout_percent"] > params["max_payout_percent"]:
                errors.append(ValidationError(
                    field="min_payout_percent",
                    message="Must not exceed max_payout_percent",
                    value=params["min_payout_percent"]
                ))

        if "require_strategy" in params:
            value = params["require_strategy"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="require_strategy",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_display_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate display parameters."""
        errors = []

        for text_field in ("currency_symbol", "datetime_format"):
            if text_field in params:
                value = params[text_field]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=text_field,
                        message="Must be a non-empty string",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_known_keys(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Reject keys that are not fields of the section's parameter class."""
        known = {f.name for f in fields(SECTION_PARAMS[section])}
        return [
            ValidationError(
                field=f"{section}.{key}",
                message="Unknown configuration key",
                value=params[key]
            )
            for key in params
            if key not in known
        ]

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        section_validators = {
            "ledger": ConfigValidator.validate_ledger_params,
            "storage": ConfigValidator.validate_storage_params,
            "input": ConfigValidator.validate_input_params,
            "display": ConfigValidator.validate_display_params,
        }

        for section, params in config.items():
            if section not in section_validators:
                errors.append(ValidationError(
                    field=str(section),
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            errors.extend(ConfigValidator.validate_known_keys(section, params))
            errors.extend(section_validators[section](params))

        return errors
