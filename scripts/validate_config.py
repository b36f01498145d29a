#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import yaml

from crossalert.config.loader import ConfigLoader
from crossalert.config.validation import ConfigValidator, ValidationError


def configured_symbols(loader: ConfigLoader) -> List[str]:
    """Symbols with overrides in symbols.yaml."""
    symbols_file = loader.config_dir / "symbols.yaml"
    if not symbols_file.exists():
        return []

    with open(symbols_file) as f:
        data = yaml.safe_load(f) or {}

    return sorted(data.get("symbols", {}) or {})


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating crossalert configuration...")

    loader = ConfigLoader.create()
    symbols = configured_symbols(loader) + ["UNKNOWN-SYMBOL"]  # Should use defaults

    all_valid = True

    for symbol in symbols:
        print(f"\n📊 Validating {symbol}...")

        try:
            errors = validate_symbol_config(loader, symbol)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {symbol} configuration is valid")

        except (OSError, yaml.YAMLError) as e:
            print(f"❌ Error validating {symbol}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
