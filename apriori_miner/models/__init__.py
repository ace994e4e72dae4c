from apriori_miner.errors import (
    AprioriError, EmptyDatasetError, InputAccessError, InvalidThresholdError
)
from apriori_miner.models.itemsets import ItemCatalog, TransactionSet, SupportTable
from apriori_miner.models.candidates import CandidateGenerator
from apriori_miner.models.apriori import AprioriEngine, FrequentItemset, FrequentLevel

__all__ = [
    'AprioriError', 'EmptyDatasetError', 'InputAccessError', 'InvalidThresholdError',
    'ItemCatalog', 'TransactionSet', 'SupportTable', 'CandidateGenerator',
    'AprioriEngine', 'FrequentItemset', 'FrequentLevel',
]
