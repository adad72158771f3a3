"""
Gateway Configuration Doctor - Validates gateway configuration and API key availability.

Usage:
    python -m superstudy.gateway.doctor --config config/gateway.yaml
    python -m superstudy.gateway.doctor --list-models openrouter
"""

import argparse
import os
import sys
from typing import Dict

from dotenv import load_dotenv

from .config import ProviderSettings, default_config, load_config


def check_provider(settings: ProviderSettings) -> Dict:
    """Check one provider's configuration.

    Returns:
        Dict with:
        - key_set: bool
        - endpoint: str
        - default_model: str
        - warnings: list of str
    """
    result = {
        "key_set": bool(os.getenv(settings.api_key_env)),
        "endpoint": settings.endpoint,
        "default_model": settings.default_model,
        "warnings": [],
    }

    if not result["key_set"]:
        result["warnings"].append(f"Environment variable {settings.api_key_env} is not set")
    if not settings.default_model:
        result["warnings"].append("No default model specified")

    return result


def check_config(config_path: str | None = None) -> Dict:
    """Validate gateway configuration.

    Args:
        config_path: Path to YAML configuration; built-in defaults when None

    Returns:
        Dict with:
        - valid: bool
        - providers: {provider_id: status}
        - errors: [str]
        - warnings: [str]
    """
    result = {
        "valid": False,
        "providers": {},
        "errors": [],
        "warnings": [],
    }

    try:
        config = load_config(config_path) if config_path else default_config()
    except FileNotFoundError:
        result["errors"].append(f"Configuration file not found: {config_path}")
        return result
    except Exception as e:
        result["errors"].append(f"Failed to load configuration: {e}")
        return result

    for provider, settings in config.providers.items():
        provider_result = check_provider(settings)
        result["providers"][provider.value] = provider_result
        result["warnings"].extend(
            f"{provider.value}: {warning}" for warning in provider_result["warnings"]
        )

    if config.temperature < 0 or config.temperature > 1:
        result["warnings"].append(f"Temperature {config.temperature} outside normal range [0, 1]")

    result["valid"] = len(result["errors"]) == 0
    return result


def format_status(available: bool) -> str:
    """Format availability status with emoji."""
    return "✓" if available else "✗"


def print_report(config_path: str | None, check_result: Dict) -> None:
    """Print configuration validation report."""
    print("Gateway Configuration Doctor")
    print("=" * 40)
    print()
    print(f"Config: {config_path or '(built-in defaults)'}")
    print()

    print("Providers:")
    for provider_id, provider_result in check_result["providers"].items():
        status = format_status(provider_result["key_set"])
        print(f"  {status} {provider_id} -> {provider_result['default_model']}")
        print(f"      {provider_result['endpoint']}")
    print()

    if check_result["errors"]:
        print("Errors:")
        for error in check_result["errors"]:
            print(f"  - {error}")
        print()

    if check_result["warnings"]:
        print("Warnings:")
        for warning in check_result["warnings"]:
            print(f"  - {warning}")
        print()

    if check_result["valid"]:
        print("Status: ✓ VALID")
    else:
        print(f"Status: ✗ INVALID ({len(check_result['errors'])} error(s))")


def print_models(config_path: str | None, provider_id: str) -> bool:
    """List models for one provider. Returns True on success."""
    from .client import Gateway

    gateway = Gateway.from_config(config_path) if config_path else Gateway()
    try:
        listing = gateway.list_models(provider_id)
    except ValueError as e:
        print(f"✗ {e}")
        return False

    if not listing.success:
        print(f"✗ {provider_id}: {listing.error}")
        return False

    print(f"Models for {provider_id} ({len(listing.models)}):")
    for model in listing.models:
        print(f"  - {model}")
    return True


def main():
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Validate gateway configuration and API key availability"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to gateway configuration file (default: built-in settings)"
    )
    parser.add_argument(
        "--list-models",
        metavar="PROVIDER",
        default=None,
        help="List the models available to the configured API key for PROVIDER"
    )

    args = parser.parse_args()

    result = check_config(args.config)
    print_report(args.config, result)

    ok = result["valid"]
    if ok and args.list_models:
        print()
        ok = print_models(args.config, args.list_models)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
