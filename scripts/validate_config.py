#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from banca_app.config.loader import ConfigLoader
from banca_app.config.validation import ConfigValidator, ValidationError


def validate_file_config(config_dir: Path) -> List[ValidationError]:
    """Validate defaults merged with config/ledger.yaml."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = project_root / "config"
    print(f"🔍 Validating banca configuration in {config_dir}...")

    all_valid = True

    try:
        errors = validate_file_config(config_dir)

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print("✅ ledger.yaml configuration is valid")

    except Exception as e:
        print(f"❌ Error validating configuration: {e}")
        all_valid = False

    # Test runtime overrides
    print("\n📋 Testing runtime overrides...")
    test_overrides = {
        "ledger": {"initial_balance": 1000.0},
        "input": {"max_payout_percent": 95.0, "require_strategy": True},
    }

    try:
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config(test_overrides)
        errors = ConfigValidator.validate_config(config)

        if errors:
            print("❌ Override validation failed:")
            for error in errors:
                print(f"  • {error.field}: {error.message}")
            all_valid = False
        else:
            print("✅ Override validation passed")

    except Exception as e:
        print(f"❌ Error testing overrides: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
