import pandas as pd
import logging
import time
from collections import namedtuple

from apriori_miner.config import (
    COUNTING_STRATEGIES, DEFAULT_COUNTING, DEFAULT_MIN_SUPPORT, validate_max_length, validate_min_support
)
from apriori_miner.errors import EmptyDatasetError
from apriori_miner.models.candidates import CandidateGenerator
from apriori_miner.models.itemsets import SupportTable, TransactionSet, count_support, seed_support_table
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger=logging.getLogger(__name__)

FrequentItemset=namedtuple('FrequentItemset', ['items', 'count', 'support'])
FrequentLevel=namedtuple('FrequentLevel', ['k', 'itemsets'])


class AprioriEngine:
    def __init__(self, min_support=DEFAULT_MIN_SUPPORT, max_length=None, counting=DEFAULT_COUNTING, prune=True):
        self.min_support=validate_min_support(min_support)
        self.max_length=validate_max_length(max_length)
        if counting not in COUNTING_STRATEGIES:
            raise ValueError(f"counting must be one of {COUNTING_STRATEGIES}, got {counting!r}")
        self.counting=counting
        self.candidate_generator=CandidateGenerator(prune=prune)
        self.levels_=None
        self.catalog=None
        self.n_transactions=None

    def _frequent_level(self, k, table, n_transactions):
        itemsets=[
            FrequentItemset(itemset, count, count / n_transactions)
            for itemset, count in table.of_size(k).items()
            if count / n_transactions >= self.min_support
        ]
        itemsets.sort(key=lambda x: (x.support, x.items))
        return FrequentLevel(k, itemsets)

    def _next_table(self, level, seed_table, transactions):
        n_transactions=len(transactions)
        if level.k == 1:
            # pairs were already counted by the seeding pass
            return seed_table.of_size(2).filter(self.min_support, n_transactions)
        candidates=self.candidate_generator.generate(itemset.items for itemset in level.itemsets)
        logger.info(f"Generated {len(candidates)} candidate {level.k + 1}-itemsets")
        if not candidates:
            return SupportTable()
        counted=count_support(candidates, transactions, counting=self.counting)
        return counted.filter(self.min_support, n_transactions)

    def iter_levels(self, transactions):
        """
        Walk the levels of the search, yielding one FrequentLevel per visited level.

        Level 1 is always visited and may come back empty; any later level is
        entered only when at least one of its itemsets met the threshold.
        """
        n_transactions=len(transactions)
        if n_transactions == 0:
            raise EmptyDatasetError("Cannot compute support: the dataset has no transactions")
        start_time=time.time()
        seed_table=seed_support_table(transactions)
        logger.info(f"Seeded {len(seed_table)} 1- and 2-itemset counts in {time.time() - start_time:.2f} seconds")
        table=seed_table
        k=1
        max_len=self.max_length if self.max_length is not None else float('inf')
        while True:
            start_time=time.time()
            level=self._frequent_level(k, table, n_transactions)
            logger.info(f"Found {len(level.itemsets)} frequent {k}-itemsets")
            yield level
            if not level.itemsets or k >= max_len:
                break
            table=self._next_table(level, seed_table, transactions)
            logger.info(f"Level {k + 1} kept {len(table)} itemsets in {time.time() - start_time:.2f} seconds")
            if not len(table):
                break
            k += 1

    def fit(self, transactions, catalog=None):
        start_time=time.time()
        if not isinstance(transactions, TransactionSet):
            transactions=TransactionSet(transactions)
        logger.info(
            f"Starting Apriori with min_support={self.min_support}, max_length={self.max_length}, counting={self.counting}")
        self.catalog=catalog
        self.n_transactions=len(transactions)
        self.levels_=list(self.iter_levels(transactions))
        logger.info(f"Apriori completed with {len(self.levels_)} levels in {time.time() - start_time:.2f} seconds")
        return self

    def fit_baskets(self, baskets):
        catalog, transactions=TransactionSet.build(baskets)
        logger.info(f"Encoded {len(transactions)} baskets over {len(catalog)} unique items")
        return self.fit(transactions, catalog)

    def _check_fitted(self):
        if self.levels_ is None:
            raise ValueError("Model not fitted yet. Call fit() first.")

    def _names(self, itemset):
        if self.catalog is None:
            return list(itemset)
        return self.catalog.names_of(itemset)

    def get_frequent_itemsets(self, with_item_names=True):
        self._check_fitted()
        result=[]
        for level in self.levels_:
            for itemset in level.itemsets:
                result.append({
                    'itemset': self._names(itemset.items) if with_item_names else itemset.items,
                    'length': level.k,
                    'support_count': itemset.count,
                    'support': itemset.support
                })
        return result

    def to_dataframe(self):
        self._check_fitted()
        rows=[
            {
                'level': level.k,
                'items': ', '.join(str(name) for name in self._names(itemset.items)),
                'support_count': itemset.count,
                'support': itemset.support
            }
            for level in self.levels_
            for itemset in level.itemsets
        ]
        return pd.DataFrame(rows, columns=['level', 'items', 'support_count', 'support'])
