"""Shared test configuration and fixtures."""

import matplotlib

matplotlib.use("Agg")

import pytest

from apriori_miner.models.itemsets import TransactionSet


# ============================================================================
# Basket Fixtures
# ============================================================================


@pytest.fixture
def scenario_baskets():
    """Four baskets where a, b and c are frequent at 0.5 but abc is not."""
    return [["a", "b"], ["a", "b", "c"], ["a"], ["b", "c"]]


@pytest.fixture
def scenario_data(scenario_baskets):
    """Return (catalog, transactions) for the four-basket scenario."""
    return TransactionSet.build(scenario_baskets)


@pytest.fixture
def grocery_baskets():
    """A small grocery dataset with a frequent triple."""
    return [
        ["milk", "bread", "butter"],
        ["milk", "bread"],
        ["milk", "bread", "butter", "eggs"],
        ["bread", "butter"],
        ["milk", "butter"],
        ["milk", "bread", "butter"],
        ["eggs"],
        ["milk", "eggs"],
    ]


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def transactions_file(tmp_path):
    """Write a transaction file with blank lines and stray delimiters."""
    path = tmp_path / "groceries.csv"
    path.write_text(
        "citrus fruit,semi-finished bread,margarine\n"
        "\n"
        "tropical fruit, yogurt ,coffee\n"
        "   \n"
        "whole milk,,whole milk\n"
        "yogurt,coffee\n",
        encoding="utf-8",
    )
    return path
