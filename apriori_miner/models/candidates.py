import logging
from collections import defaultdict
from itertools import combinations

from apriori_miner.models.itemsets import canonical_itemset

logger = logging.getLogger(__name__)


class CandidateGenerator:
    """
    Builds (k+1)-itemset candidates from frequent k-itemsets by joining
    pairs that share their first k-1 ids in sorted order.
    """

    def __init__(self, prune=True):
        self.prune = prune

    def _group_by_prefix(self, frequent):
        groups = defaultdict(list)
        for itemset in frequent:
            groups[itemset[:-1]].append(itemset[-1])
        return groups

    def _has_infrequent_subset(self, candidate, frequent):
        k = len(candidate) - 1
        return any(subset not in frequent for subset in combinations(candidate, k))

    def generate(self, frequent_itemsets):
        """
        Args:
            frequent_itemsets: Iterable of frequent k-itemsets (any order, any iterable form)

        Returns:
            set: Distinct canonical (k+1)-itemsets
        """
        frequent = {canonical_itemset(itemset) for itemset in frequent_itemsets}
        frequent.discard(())
        if len(frequent) < 2:
            return set()
        sizes = {len(itemset) for itemset in frequent}
        if len(sizes) != 1:
            raise ValueError(f"Frequent itemsets must share one size, got sizes {sorted(sizes)}")
        candidates = set()
        joined = 0
        for prefix, tails in self._group_by_prefix(frequent).items():
            for first, second in combinations(sorted(tails), 2):
                candidate = prefix + (first, second)
                joined += 1
                if self.prune and self._has_infrequent_subset(candidate, frequent):
                    continue
                candidates.add(candidate)
        logger.debug(f"Joined {joined} prefix pairs into {len(candidates)} candidates (prune={self.prune})")
        return candidates
