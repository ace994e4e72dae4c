import io

from apriori_miner.models.apriori import AprioriEngine, FrequentItemset, FrequentLevel
from apriori_miner.models.itemsets import ItemCatalog
from apriori_miner.utils.report import format_itemset, format_level, render_levels


def test_format_itemset_uses_names():
    catalog = ItemCatalog()
    for name in ["milk", "bread"]:
        catalog.resolve(name)
    assert format_itemset(FrequentItemset((0, 1), 2, 0.5), catalog) == "[milk, bread]\t0.5"


def test_format_level_ends_with_blank_line():
    level = FrequentLevel(1, [FrequentItemset((1,), 1, 0.25), FrequentItemset((0,), 3, 0.75)])
    assert format_level(level) == "[1]\t0.25\n[0]\t0.75\n\n"


def test_empty_level_renders_as_blank_line():
    assert format_level(FrequentLevel(1, [])) == "\n"


def test_render_levels(scenario_baskets):
    engine = AprioriEngine(min_support=0.5).fit_baskets(scenario_baskets)
    stream = io.StringIO()
    render_levels(engine.levels_, engine.catalog, stream)
    assert stream.getvalue() == (
        "[c]\t0.5\n[a]\t0.75\n[b]\t0.75\n\n"
        "[a, b]\t0.5\n[b, c]\t0.5\n\n"
    )
