"""
Command-line entry point: mine a transaction file and print each level.

    python -m apriori_miner data/groceries.csv --min-support 0.05
"""

import argparse
import logging
import sys
import time

from apriori_miner.config import COUNTING_STRATEGIES, load_settings
from apriori_miner.errors import AprioriError
from apriori_miner.models.apriori import AprioriEngine
from apriori_miner.utils.data_loader import TransactionLoader
from apriori_miner.utils.report import render_levels

logger = logging.getLogger("apriori_miner")


def build_parser(settings):
    parser = argparse.ArgumentParser(prog='apriori_miner', description='Find frequent itemsets with Apriori.')
    parser.add_argument('path', nargs='?', default=settings['data_path'],
                        help=f"Transaction file, one comma-separated basket per line (default: {settings['data_path']})")
    parser.add_argument('--min-support', default=settings['min_support'],
                        help=f"Minimum support fraction in (0, 1] (default: {settings['min_support']})")
    parser.add_argument('--max-length', type=int, default=None, help='Largest itemset size to mine')
    parser.add_argument('--counting', choices=COUNTING_STRATEGIES, default=settings['counting'],
                        help='Support counting strategy')
    parser.add_argument('--no-prune', action='store_true', help='Skip subset pruning of candidates')
    parser.add_argument('--log-level', default='WARNING', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def main(argv=None, stream=None):
    try:
        settings = load_settings()
    except AprioriError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    args = build_parser(settings).parse_args(argv)
    logging.getLogger().setLevel(args.log_level)
    stream = sys.stdout if stream is None else stream
    start_time = time.time()
    try:
        engine = AprioriEngine(min_support=args.min_support, max_length=args.max_length,
                               counting=args.counting, prune=not args.no_prune)
        catalog, transactions = TransactionLoader(delimiter=settings['delimiter']).read_transactions(args.path)
        engine.fit(transactions, catalog)
    except AprioriError as e:
        logger.error(f"Mining failed: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        return 2
    render_levels(engine.levels_, catalog, stream)
    logger.info(f"Finished in {time.time() - start_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
