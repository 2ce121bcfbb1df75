#!/usr/bin/env python3
"""Populate a demo ledger and print or export it.

Runs the demo scenario, prints the account overview and the spending
breakdown, and optionally writes accounts.json and transactions.json.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bank_ledger.config import BankLedgerConfig
from bank_ledger.logging import get_logger, setup_logging
from bank_ledger.reports import account_overview
from bank_ledger.scenarios import DemoScenario
from bank_ledger.sinks import JsonFileSink, serialize_value

logger = get_logger("bank_ledger.scripts.run_demo")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate demo banking data")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides SEED)")
    parser.add_argument(
        "--payments",
        type=int,
        default=None,
        help="Payments per account (overrides PAYMENTS_PER_ACCOUNT)",
    )
    parser.add_argument(
        "--paired-transfers",
        action="store_true",
        help="Record a credit leg on the destination account for transfers",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write JSON files to OUTPUT_DIR instead of printing the overview",
    )
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard")
    return parser.parse_args()


def main() -> None:
    """Run the demo scenario."""
    args = parse_args()
    config = BankLedgerConfig.from_env()
    if args.seed is not None:
        config.seed.seed = args.seed
    if args.payments is not None:
        config.seed = replace(config.seed, payments_per_account=args.payments)
    if args.paired_transfers:
        config.ledger.paired_transfers = True

    setup_logging(config.log_level, args.log_format)

    scenario = DemoScenario(seed_config=config.seed, ledger_config=config.ledger)
    ledger = scenario.generate()

    if args.export:
        sink = JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
        scenario.export([sink])
        sink.close()
        return

    overview = account_overview(ledger.accounts, ledger, scenario.user_id)
    print(json.dumps(serialize_value(overview), indent=2, ensure_ascii=False))
    logger.info("Summary: %s", scenario.get_summary())


if __name__ == "__main__":
    main()
