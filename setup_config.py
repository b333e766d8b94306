#!/usr/bin/env python3
"""
Dilemma Client - Configuration Setup Script
============================================

Interactive script to generate config.json and .env files.

Usage:
    python setup_config.py
"""

import json
from pathlib import Path


def prompt(question: str, default: str = "", required: bool = True) -> str:
    """Prompt user for input with optional default value."""
    if default:
        display = f"{question} [{default}]: "
    else:
        display = f"{question}: "

    while True:
        value = input(display).strip()
        if not value and default:
            return default
        if value:
            return value
        if not required:
            return ""
        print("  This field is required. Please enter a value.")


def prompt_number(question: str, default: str, convert, minimum: float) -> float:
    """Prompt until the answer converts and is at least ``minimum``."""
    while True:
        raw = prompt(question, default=default)
        try:
            value = convert(raw)
        except ValueError:
            print(f"  '{raw}' is not a valid number.")
            continue
        if value < minimum:
            print(f"  Value must be at least {minimum}.")
            continue
        return value


def print_header():
    """Print welcome header."""
    print()
    print("=" * 60)
    print("  Dilemma Client - Configuration Setup")
    print("=" * 60)
    print()
    print("This script will help you create config.json and .env files.")
    print("Press Enter to accept default values shown in [brackets].")
    print()


def print_section(title: str):
    """Print section header."""
    print()
    print(f"--- {title} ---")
    print()


def get_config_values() -> dict:
    """Interactively collect configuration values."""
    config = {}

    print_section("Match Service")
    print("Base URL of the match service, including the /api base path.")
    print("  Example: http://localhost:8080/api")
    print()
    config["base_url"] = prompt("Service base URL", default="http://localhost:8080/api")
    config["timeout_seconds"] = prompt_number(
        "Per-call timeout in seconds", "10", float, 0.1
    )

    print_section("Match Settings")
    config["total_rounds"] = prompt_number("Rounds per match", "10", int, 1)
    config["summary_delay_seconds"] = prompt_number(
        "Pause before the results screen (seconds)", "1.4", float, 0
    )

    print_section("Optional Settings")
    log_file = prompt("Log file", default="dilemma_client.log", required=False)
    if log_file:
        config["log_file"] = log_file

    return config


def write_config_json(config: dict, path: Path) -> None:
    """Write config.json file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
    print(f"  Created: {path}")


def write_env_file(config: dict, path: Path) -> None:
    """Write .env file."""
    env_mapping = {
        "base_url": "DILEMMA_BASE_URL",
        "timeout_seconds": "DILEMMA_TIMEOUT_SECONDS",
        "total_rounds": "DILEMMA_TOTAL_ROUNDS",
        "summary_delay_seconds": "DILEMMA_SUMMARY_DELAY_SECONDS",
        "log_file": "DILEMMA_LOG_FILE",
    }

    lines = []
    for config_key, env_key in env_mapping.items():
        if config_key in config and config[config_key] != "":
            lines.append(f"{env_key}={config[config_key]}")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"  Created: {path}")


def main():
    """Main entry point."""
    print_header()

    try:
        config = get_config_values()
    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        return 1

    print_section("Generating Files")

    base_path = Path.cwd()
    write_config_json(config, base_path / "config.json")
    write_env_file(config, base_path / ".env")

    print()
    print("=" * 60)
    print("  Setup Complete!")
    print("=" * 60)
    print()
    print("Next steps:")
    print()
    print("  1. Start the match service (default port 8080)")
    print()
    print("  2. Play in the terminal:")
    print("     python -m dilemma_client --config config.json")
    print()
    print("  3. To build your own screens, subclass dilemma_client.Presenter")
    print("     (see examples/my_presenter.py)")
    print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
