"""
Transaction loader and synthetic basket generator for the itemset miner.
This module reads comma-separated transaction files into the encoded form
used by the mining engine and can generate synthetic grocery baskets.
"""

import io
import os
import random
import logging

import pandas as pd

from apriori_miner.config import DEFAULT_DELIMITER
from apriori_miner.errors import InputAccessError
from apriori_miner.models.itemsets import TransactionSet

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Items used for synthetic data generation
GROCERY_ITEMS = [
    "whole milk", "other vegetables", "rolls/buns", "soda", "yogurt", "bottled water",
    "root vegetables", "tropical fruit", "shopping bags", "sausage", "pastry", "citrus fruit",
    "bottled beer", "newspapers", "canned beer", "pip fruit", "fruit/vegetable juice",
    "whipped/sour cream", "brown bread", "domestic eggs", "frankfurter", "margarine",
    "coffee", "pork", "butter", "curd", "beef", "napkins", "chocolate", "frozen vegetables"
]

# Groups of items that tend to be bought together
AFFINITY_GROUPS = [
    ["whole milk", "yogurt", "whipped/sour cream", "butter", "curd"],
    ["other vegetables", "root vegetables", "tropical fruit", "citrus fruit", "pip fruit"],
    ["rolls/buns", "sausage", "frankfurter", "soda"],
    ["bottled beer", "canned beer", "shopping bags", "napkins"],
]


def parse_lines(lines, delimiter=DEFAULT_DELIMITER):
    """
    Split raw lines into lists of item names.

    Blank lines are skipped. Tokens are trimmed and empty tokens dropped,
    so a line made only of delimiters yields an empty list.

    Args:
        lines: Iterable of text lines
        delimiter (str): Item separator

    Yields:
        list: Item names of one transaction
    """
    for line in lines:
        if not line.strip():
            continue
        yield [token.strip() for token in line.split(delimiter) if token.strip()]


class TransactionLoader:
    def __init__(self, data_dir='data', delimiter=DEFAULT_DELIMITER):
        self.data_dir = data_dir
        self.delimiter = delimiter

    def _resolve_path(self, path):
        if os.path.isabs(path) or os.path.exists(path):
            return path
        return os.path.join(self.data_dir, path)

    def read_transactions(self, path):
        """
        Read a transaction file, one comma-separated transaction per line.

        Args:
            path (str): File path, absolute or relative to the working dir or data_dir

        Returns:
            tuple: (ItemCatalog, TransactionSet)

        Raises:
            InputAccessError: If the file cannot be opened or decoded
        """
        requested = path
        path = self._resolve_path(path)
        logger.info(f"Reading transactions from {path}")
        try:
            with open(path, 'r', encoding='utf-8') as file:
                catalog, transactions = TransactionSet.build(parse_lines(file, self.delimiter))
        except (OSError, UnicodeDecodeError) as e:
            tried = requested if path == requested else f"{requested} (also tried {path})"
            raise InputAccessError(f"Could not read transactions from {tried}: {e}") from e
        logger.info(f"Loaded {len(transactions)} transactions over {len(catalog)} unique items")
        return catalog, transactions

    def load_from_buffer(self, data):
        """
        Load transactions from in-memory text, e.g. an uploaded file.

        Args:
            data (str or bytes): File contents

        Returns:
            tuple: (ItemCatalog, TransactionSet)
        """
        if isinstance(data, bytes):
            try:
                data = data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise InputAccessError(f"Uploaded data is not valid UTF-8: {e}") from e
        catalog, transactions = TransactionSet.build(parse_lines(io.StringIO(data), self.delimiter))
        logger.info(f"Loaded {len(transactions)} transactions from buffer")
        return catalog, transactions

    def generate_synthetic_baskets(self, n_transactions=1000, seed=42):
        """
        Generate synthetic grocery baskets.

        Roughly half of the baskets are drawn around an affinity group so the
        data contains frequent itemsets larger than pairs.

        Args:
            n_transactions (int): Number of baskets to generate
            seed (int): Random seed

        Returns:
            list: Baskets as lists of item names
        """
        logger.info(f"Generating {n_transactions} synthetic baskets...")
        rng = random.Random(seed)
        baskets = []
        for _ in range(n_transactions):
            num_items = rng.choices([1, 2, 3, 4, 5, 6], weights=[15, 25, 25, 15, 12, 8])[0]
            if rng.random() < 0.5:
                group = rng.choice(AFFINITY_GROUPS)
                basket = rng.sample(group, min(num_items, len(group)))
            else:
                basket = []
            while len(basket) < num_items:
                item = rng.choice(GROCERY_ITEMS)
                if item not in basket:
                    basket.append(item)
            baskets.append(basket)
        return baskets

    def write_baskets(self, path, baskets):
        """Write baskets as comma-separated lines, creating the directory if needed"""
        path = self._resolve_path(path)
        directory = os.path.dirname(path)
        try:
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            with open(path, 'w', encoding='utf-8') as file:
                for basket in baskets:
                    file.write(self.delimiter.join(basket) + '\n')
        except OSError as e:
            raise InputAccessError(f"Could not write baskets to {path}: {e}") from e
        logger.info(f"Wrote {len(baskets)} baskets to {path}")
        return path


def basket_summary(catalog, transactions):
    """
    Per-item frequency table.

    Args:
        catalog (ItemCatalog): Item names
        transactions (TransactionSet): Encoded transactions

    Returns:
        pandas.DataFrame: Columns item, count, support sorted by count descending
    """
    counts = transactions.item_counts()
    n_transactions = len(transactions)
    rows = [
        {
            'item': catalog.name_of(item_id),
            'count': count,
            'support': count / n_transactions if n_transactions else 0.0
        }
        for item_id, count in counts.items()
    ]
    df = pd.DataFrame(rows, columns=['item', 'count', 'support'])
    return df.sort_values(['count', 'item'], ascending=[False, True]).reset_index(drop=True)
