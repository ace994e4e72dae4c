import base64

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from apriori_miner.models.apriori import AprioriEngine
from apriori_miner.models.itemsets import TransactionSet
from apriori_miner.utils.data_loader import basket_summary
from apriori_miner.utils.visualizations import (
    get_img_as_base64, plot_item_frequencies, plot_level_sizes, plot_top_itemsets
)


def _engine(baskets):
    return AprioriEngine(min_support=0.25).fit_baskets(baskets)


def test_plot_level_sizes(grocery_baskets):
    fig = plot_level_sizes(_engine(grocery_baskets).levels_)
    assert isinstance(fig, Figure)
    assert len(fig.axes[0].patches) == 3
    plt.close(fig)


def test_plot_top_itemsets_limits_bars(grocery_baskets):
    engine = _engine(grocery_baskets)
    fig = plot_top_itemsets(engine.levels_, engine.catalog, top_n=4)
    assert len(fig.axes[0].patches) == 4
    plt.close(fig)


def test_plot_top_itemsets_filters_by_size(grocery_baskets):
    engine = _engine(grocery_baskets)
    assert plot_top_itemsets(engine.levels_, engine.catalog, min_length=5) is None


def test_plots_handle_missing_data():
    assert plot_level_sizes([]) is None
    assert plot_item_frequencies(None) is None


def test_item_frequencies_and_base64(grocery_baskets):
    catalog, transactions = TransactionSet.build(grocery_baskets)
    fig = plot_item_frequencies(basket_summary(catalog, transactions), top_n=3)
    assert isinstance(fig, Figure)
    encoded = get_img_as_base64(fig)
    assert base64.b64decode(encoded).startswith(b"\x89PNG")
