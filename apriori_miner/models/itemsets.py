"""
Item encoding, the encoded transaction database and support tables.

Itemsets are represented canonically as sorted tuples of integer item ids,
so equality and hashing are structural.
"""

import logging
from collections import defaultdict
from itertools import combinations

import numpy as np

logger = logging.getLogger(__name__)


def canonical_itemset(items):
    """Return the sorted-tuple form of an iterable of item ids."""
    return tuple(sorted(set(items)))


class ItemCatalog:
    """
    Bidirectional mapping between item names and dense integer ids.
    Ids are handed out in first-seen order and never reassigned.
    """

    def __init__(self):
        self._ids = {}
        self._names = []

    def resolve(self, name):
        item_id = self._ids.get(name)
        if item_id is None:
            item_id = len(self._names)
            self._ids[name] = item_id
            self._names.append(name)
        return item_id

    def name_of(self, item_id):
        if item_id < 0:
            raise KeyError(item_id)
        try:
            return self._names[item_id]
        except IndexError:
            raise KeyError(item_id) from None

    def names_of(self, itemset):
        return [self.name_of(item_id) for item_id in itemset]

    def id_of(self, name):
        return self._ids[name]

    def __contains__(self, name):
        return name in self._ids

    def __len__(self):
        return len(self._names)

    def __iter__(self):
        return iter(self._names)

    def __repr__(self):
        return f"ItemCatalog({len(self)} items)"


class TransactionSet:
    """
    The encoded transaction database: one frozenset of item ids per transaction.
    Built once during ingestion and read-only afterwards.
    """

    def __init__(self, transactions, n_items=None):
        self._transactions = tuple(frozenset(t) for t in transactions)
        if n_items is None:
            n_items = max((max(t) for t in self._transactions if t), default=-1) + 1
        self.n_items = n_items
        self._index = None

    @classmethod
    def build(cls, token_lists, catalog=None):
        """
        Encode token lists into a transaction set.

        Every token list is one transaction, even when it holds no items;
        skipping blank input lines is left to the caller.

        Args:
            token_lists: Iterable of iterables of item names
            catalog (ItemCatalog): Catalog to resolve names through (a new one if omitted)

        Returns:
            tuple: (ItemCatalog, TransactionSet)
        """
        catalog = ItemCatalog() if catalog is None else catalog
        encoded = []
        for tokens in token_lists:
            encoded.append(frozenset(catalog.resolve(name) for name in tokens))
        return catalog, cls(encoded, n_items=len(catalog))

    def __len__(self):
        return len(self._transactions)

    def __iter__(self):
        return iter(self._transactions)

    def __getitem__(self, index):
        return self._transactions[index]

    def item_counts(self):
        counts = defaultdict(int)
        for transaction in self._transactions:
            for item in transaction:
                counts[item] += 1
        return dict(counts)

    def bitset_index(self):
        """
        Columnar boolean membership matrix of shape (n_items, n_transactions),
        one byte per cell: row i marks the transactions containing item i.
        Built lazily on first use.
        """
        if self._index is None:
            index = np.zeros((self.n_items, len(self._transactions)), dtype=bool)
            for tid, transaction in enumerate(self._transactions):
                if transaction:
                    index[list(transaction), tid] = True
            self._index = index
            logger.debug(f"Built membership matrix of shape {index.shape}")
        return self._index

    def count_with_index(self, itemset):
        if not itemset:
            return len(self._transactions)
        index = self.bitset_index()
        if max(itemset) >= self.n_items:
            return 0
        return int(np.logical_and.reduce(index[list(itemset)], axis=0).sum())

    def __repr__(self):
        return f"TransactionSet({len(self)} transactions, {self.n_items} items)"


class SupportTable:
    """
    Read-only mapping from canonical itemset to occurrence count.
    Every operation returns a new table.
    """

    def __init__(self, counts=None):
        self._counts = {}
        for itemset, count in (counts or {}).items():
            self._counts[canonical_itemset(itemset)] = int(count)

    def __getitem__(self, itemset):
        return self._counts[canonical_itemset(itemset)]

    def get(self, itemset, default=None):
        return self._counts.get(canonical_itemset(itemset), default)

    def __contains__(self, itemset):
        return canonical_itemset(itemset) in self._counts

    def __len__(self):
        return len(self._counts)

    def __iter__(self):
        return iter(self._counts)

    def __eq__(self, other):
        if isinstance(other, SupportTable):
            return self._counts == other._counts
        return NotImplemented

    def items(self):
        return self._counts.items()

    def keys(self):
        return self._counts.keys()

    def of_size(self, k):
        return SupportTable({itemset: count for itemset, count in self._counts.items() if len(itemset) == k})

    def support(self, itemset, n_transactions):
        return self.get(itemset, 0) / n_transactions

    def filter(self, min_support, n_transactions):
        return SupportTable({
            itemset: count for itemset, count in self._counts.items()
            if count / n_transactions >= min_support
        })

    def __repr__(self):
        return f"SupportTable({len(self)} itemsets)"


def seed_support_table(transactions):
    """
    Count every single item and every co-occurring pair in one pass.

    Args:
        transactions: Iterable of item-id collections

    Returns:
        SupportTable: Counts for all 1-itemsets and 2-itemsets that occur
    """
    counts = defaultdict(int)
    for transaction in transactions:
        items = sorted(transaction)
        for item in items:
            counts[(item,)] += 1
        for pair in combinations(items, 2):
            counts[pair] += 1
    return SupportTable(counts)


def count_support(candidates, transactions, counting='scan'):
    """
    Count how many raw transactions contain each candidate.

    Args:
        candidates: Iterable of canonical itemsets
        transactions (TransactionSet): The encoded database
        counting (str): 'scan' tests every transaction for containment,
            'bitset' ANDs item rows of the membership matrix

    Returns:
        SupportTable: Counts for every candidate, zero counts included
    """
    candidates = [canonical_itemset(c) for c in candidates]
    if counting == 'bitset':
        return SupportTable({candidate: transactions.count_with_index(candidate) for candidate in candidates})
    if counting != 'scan':
        raise ValueError(f"Unknown counting strategy: {counting!r}")
    counts = dict.fromkeys(candidates, 0)
    if not candidates:
        return SupportTable()
    size = min(len(candidate) for candidate in candidates)
    for transaction in transactions:
        if len(transaction) < size:
            continue
        for candidate in candidates:
            if transaction.issuperset(candidate):
                counts[candidate] += 1
    return SupportTable(counts)
