"""Command-line runner.

Usage:
    voltiq-sim [key=value ...] [--json] [--verbose]

Keys are ``SimulationConfig`` field names, e.g.:
    voltiq-sim num_chargers=10 charger_power_kw=22 seed=demo

Exit codes: 0 on success, 1 on invalid configuration, 2 on malformed
arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from voltiq_simulator.api.report import generate_report
from voltiq_simulator.config.validation import validate_config
from voltiq_simulator.engine.simulator import ChargingSimulator
from voltiq_simulator.settings import configure_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voltiq-sim",
        description="Simulate one year of EV charging at a single station.",
    )
    parser.add_argument(
        "assignments", nargs="*", metavar="key=value",
        help="Configuration overrides, e.g. num_chargers=10 seed=demo",
    )
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def parse_assignments(assignments: Sequence[str]) -> dict[str, str]:
    """Split ``key=value`` tokens.  Values stay strings; the model parses them."""
    overrides: dict[str, str] = {}
    for token in assignments:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {token!r}")
        overrides[key.strip()] = value.strip()
    return overrides


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        overrides = parse_assignments(args.assignments)
    except ValueError as exc:
        parser.error(str(exc))

    issues = validate_config(overrides)
    if issues:
        print("Invalid configuration:", file=sys.stderr)
        for issue in issues:
            print(f"  - {issue.field}: {issue.message} (value: {issue.value!r})", file=sys.stderr)
        return 1

    simulator = ChargingSimulator(overrides)
    logger.info("running simulation config=%s", simulator.config.model_dump())
    result = simulator.run()

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(generate_report(simulator.config, result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
