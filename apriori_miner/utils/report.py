"""
Plain-text rendering of mined levels.
"""

import sys


def format_itemset(itemset, catalog=None):
    names = catalog.names_of(itemset.items) if catalog is not None else list(itemset.items)
    return f"[{', '.join(str(name) for name in names)}]\t{itemset.support}"


def format_level(level, catalog=None):
    """
    Render one level as text: one line per itemset in ascending support
    order, followed by a blank line.

    Args:
        level (FrequentLevel): Level produced by the engine
        catalog (ItemCatalog): Used to turn item ids back into names

    Returns:
        str: The rendered block
    """
    lines = [format_itemset(itemset, catalog) for itemset in level.itemsets]
    return '\n'.join(lines + ['']) + '\n'


def render_levels(levels, catalog=None, stream=None):
    stream = sys.stdout if stream is None else stream
    for level in levels:
        stream.write(format_level(level, catalog))

