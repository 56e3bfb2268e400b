"""Command-line entry point: one notification run per invocation."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from earningsalert.config import load_config_from_env
from earningsalert.errors import ConfigurationError, EarningsAlertError
from earningsalert.logging_setup import setup_logging
from earningsalert.runner import EarningsAlertRunner

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="earningsalert",
        description="Notify a Discord webhook about newly reported earnings",
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        help="JSON file of already-notified events (env: EARNINGS_STATE_FILE)",
    )
    parser.add_argument(
        "--lookback-days",
        type=int,
        help="Trailing calendar window in days (env: EARNINGS_LOOKBACK_DAYS)",
    )
    parser.add_argument(
        "--send-interval",
        type=float,
        help="Seconds to wait between two notifications (env: EARNINGS_SEND_INTERVAL)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (env: LOG_LEVEL, default: INFO)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> int:
    """Run once and return the process exit code."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    load_dotenv()
    if args.log_level:
        setup_logging(level=args.log_level)
    else:
        setup_logging()

    try:
        config = load_config_from_env()
        overrides = {
            name: value
            for name, value in (
                ("state_path", args.state_file),
                ("lookback_days", args.lookback_days),
                ("send_interval_seconds", args.send_interval),
            )
            if value is not None
        }
        if overrides:
            config = dataclasses.replace(config, **overrides)
        runner = EarningsAlertRunner.from_config(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        runner.run()
    except KeyboardInterrupt:
        outcome = "state saved" if runner.state_saved else "state NOT saved"
        print(f"\nInterrupted, {outcome}", file=sys.stderr)
        return EXIT_INTERRUPTED
    except EarningsAlertError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_RUN_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
