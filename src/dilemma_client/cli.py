# Area: Shared
"""
dilemma_client.cli — Command-line interface
============================================

Provides CLI entry point for playing a match in the terminal.

Usage:
    python -m dilemma_client                              # Local service, defaults
    python -m dilemma_client --config config.json         # Run with config file
    python -m dilemma_client --base-url http://host/api --rounds 20

Settings are layered, later sources winning:
    1. Built-in defaults
    2. JSON config file (--config)
    3. Environment variables (a .env file is loaded first)
    4. CLI flags
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ._runner_config import ENV_MAPPINGS, validate_config, with_defaults


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dilemma_client",
        description="Play the Iterated Prisoner's Dilemma against the match service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m dilemma_client
  python -m dilemma_client --config config.json
  python -m dilemma_client --base-url http://localhost:8080/api --rounds 50
  DILEMMA_BASE_URL=http://game.local/api python -m dilemma_client
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--base-url",
        type=str,
        help="Match service base URL including /api",
    )

    parser.add_argument(
        "--rounds",
        type=int,
        help="Rounds per match (default: 10)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Path to the JSON log file (default: dilemma_client.log)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )

    return parser.parse_args(argv)


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Load config from defaults, file, environment and overrides."""
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)

    # Override with environment variables
    load_dotenv()
    for env_key, (config_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            value = os.environ[env_key]
            try:
                config[config_key] = convert(value)
            except ValueError:
                raise ValueError(f"Invalid value for {env_key}: {value!r}") from None

    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value

    return with_defaults(config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    overrides = {
        "base_url": args.base_url,
        "total_rounds": args.rounds,
        "log_file": args.log_file,
    }
    if args.verbose:
        overrides["log_level"] = logging.DEBUG

    try:
        config = load_config(args.config, overrides)
        validate_config(config)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Import runner here to keep --help fast
    from .runner import MatchRunner
    from .terminal_presenter import TerminalPresenter

    runner = MatchRunner(config=config, presenter=TerminalPresenter())
    runner.run()
    return 0
