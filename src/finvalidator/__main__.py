"""Validate a transaction from the command line.

Usage:
    python -m finvalidator --transaction tx.json --rules rules.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from finvalidator.config import load_config
from finvalidator.engine import ValidationEngine
from finvalidator.logging import configure_logging
from finvalidator.rules import RuleConfigurationError
from finvalidator.ruleset import RuleSet
from finvalidator.transaction import TransactionData

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FRAUD = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finvalidator",
        description="Score a transaction for fraud risk against a rule set",
    )
    parser.add_argument(
        "--transaction",
        "-t",
        required=True,
        help="Path to a JSON file describing the transaction",
    )
    parser.add_argument(
        "--rules",
        "-r",
        help="Path to a JSON rule set (or set FINVALIDATOR_RULES_PATH)",
    )
    parser.add_argument(
        "--fail-on-fraud",
        action="store_true",
        help="Exit with status 1 when the transaction is flagged",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()

    configure_logging(logging.DEBUG if args.verbose else config.log_level_value)

    rules_path = args.rules or config.rules_path
    if not rules_path:
        print(
            "error: no rule set given (--rules or FINVALIDATOR_RULES_PATH)",
            file=sys.stderr,
        )
        return EXIT_CONFIG_ERROR

    try:
        ruleset = RuleSet.load_from_file(rules_path)
        transaction = TransactionData.model_validate_json(
            Path(args.transaction).read_text()
        )
    except (
        OSError,
        UnicodeDecodeError,
        RuleConfigurationError,
        ValidationError,
    ) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.debug("Evaluating %d rules from %s", len(ruleset), rules_path)
    result = ValidationEngine.from_ruleset(ruleset).validate(transaction)

    print(json.dumps(result.to_dict(), indent=2))
    if result.is_fraud:
        print(f"Suspicious transaction (risk score {result.risk_score})")
        for reason in result.triggers:
            print(f"- {reason}")
    else:
        print("Transaction looks safe")

    if result.is_fraud and (args.fail_on_fraud or config.fail_on_fraud):
        return EXIT_FRAUD
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
