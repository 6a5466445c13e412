#!/usr/bin/env python3
"""Print a sample pain.001 document built from generated data.

Useful for eyeballing output or feeding a bank's validation portal.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sepa_transfer.config import SepaConfig
from sepa_transfer.generators import CreditTransferGenerator
from sepa_transfer.logging import get_logger, setup_logging
from sepa_transfer.schemas import SCHEMAS

logger = get_logger(__name__)


def main() -> None:
    """Generate one credit transfer and write its XML to stdout."""
    config = SepaConfig.from_env()

    parser = argparse.ArgumentParser(description="Print a sample pain.001 document")
    parser.add_argument(
        "--transactions",
        type=int,
        default=5,
        help="Number of credit transfer legs (default: 5)",
    )
    parser.add_argument(
        "--schema",
        choices=sorted(SCHEMAS),
        default=config.default_schema,
        help=f"Target schema (default: {config.default_schema})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--with-address",
        action="store_true",
        help="Attach a structured creditor address to every leg",
    )
    args = parser.parse_args()

    # stdout carries the document
    setup_logging(config.log_level, stream=sys.stderr)

    generator = CreditTransferGenerator(seed=args.seed)
    credit_transfer = generator.generate_credit_transfer(
        args.transactions, config=config, with_address=args.with_address
    )
    logger.info(
        "Generated %d transactions, total %s",
        len(credit_transfer.transactions),
        credit_transfer.amount_total(),
    )
    sys.stdout.write(credit_transfer.to_xml(args.schema))


if __name__ == "__main__":
    main()
