"""
Visualization utilities for the itemset miner.
This module provides functions for charting frequent itemsets and item frequencies.
"""

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
import pandas as pd
import io
import base64


def get_img_as_base64(fig):
    """
    Convert a matplotlib figure to a base64-encoded image.

    Args:
        fig: Matplotlib figure object

    Returns:
        str: Base64-encoded image
    """
    buffer = io.BytesIO()
    fig.savefig(buffer, format='png', bbox_inches='tight')
    buffer.seek(0)
    img_str = base64.b64encode(buffer.read()).decode()
    plt.close(fig)
    return img_str


def plot_level_sizes(levels):
    """
    Create a bar chart of the number of frequent itemsets found per level.

    Args:
        levels (list): FrequentLevel tuples from the engine

    Returns:
        matplotlib.figure.Figure: The figure object
    """
    if not levels:
        return None

    ks = [level.k for level in levels]
    counts = [len(level.itemsets) for level in levels]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(range(len(ks)), counts, color=sns.color_palette("viridis", len(ks)))
    ax.set_xticks(range(len(ks)))
    ax.set_xticklabels([str(k) for k in ks])

    # Add count labels
    for i, v in enumerate(counts):
        ax.text(i, v, str(v), ha='center', va='bottom')

    ax.set_title('Frequent Itemsets per Level')
    ax.set_xlabel('Itemset size (k)')
    ax.set_ylabel('Number of frequent itemsets')
    ax.grid(axis='y', linestyle='--', alpha=0.7)

    plt.tight_layout()

    return fig


def plot_top_itemsets(levels, catalog=None, top_n=15, min_length=1):
    """
    Create a horizontal bar chart of the highest-support itemsets.

    Args:
        levels (list): FrequentLevel tuples from the engine
        catalog (ItemCatalog): Used to label itemsets with item names
        top_n (int): Number of itemsets to display
        min_length (int): Smallest itemset size to include

    Returns:
        matplotlib.figure.Figure: The figure object
    """
    itemsets = [
        itemset for level in levels if level.k >= min_length
        for itemset in level.itemsets
    ]
    if not itemsets:
        return None

    itemsets = sorted(itemsets, key=lambda x: (-x.support, x.items))[:top_n]

    labels = []
    for itemset in itemsets:
        names = catalog.names_of(itemset.items) if catalog is not None else itemset.items
        labels.append(', '.join(str(name) for name in names))
    supports = [itemset.support for itemset in itemsets]

    fig, ax = plt.subplots(figsize=(10, max(4, 0.4 * len(labels) + 1)))
    y_pos = np.arange(len(labels))
    ax.barh(y_pos, supports, color=sns.color_palette("viridis", len(supports)))
    ax.set_yticks(y_pos)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()  # Highest support at the top

    # Add support values
    for i, v in enumerate(supports):
        ax.text(v, i, f" {v:.3f}", va='center')

    ax.set_title(f'Top {len(labels)} Frequent Itemsets by Support')
    ax.set_xlabel('Support')

    plt.tight_layout()

    return fig


def plot_item_frequencies(summary_df, top_n=20):
    """
    Create a bar chart of the most frequent single items.

    Args:
        summary_df: DataFrame with 'item' and 'support' columns
        top_n (int): Number of items to display

    Returns:
        matplotlib.figure.Figure: The figure object
    """
    if not isinstance(summary_df, pd.DataFrame) or summary_df.empty:
        return None

    plot_data = summary_df.sort_values('support', ascending=False).head(top_n)

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(x='item', y='support', data=plot_data, ax=ax, color=sns.color_palette("viridis", 1)[0])
    ax.set_xticks(range(len(plot_data)))
    ax.set_xticklabels(plot_data['item'], rotation=45, ha='right')

    ax.set_title(f"Top {len(plot_data)} Items by Support")
    ax.set_xlabel("Item")
    ax.set_ylabel("Support")

    plt.tight_layout()

    return fig
