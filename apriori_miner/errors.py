"""
Errors raised while loading transactions or mining frequent itemsets.
"""


class AprioriError(Exception):
    """Base class for every error raised by the miner."""


class InputAccessError(AprioriError, OSError):
    """The transaction source could not be read."""


class EmptyDatasetError(AprioriError, ValueError):
    """No transactions were ingested, so support is undefined."""


class InvalidThresholdError(AprioriError, ValueError):
    """The minimum support is not a number in (0, 1]."""
