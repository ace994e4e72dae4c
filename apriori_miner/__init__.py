"""
Frequent itemset mining with the Apriori level-wise search.
"""

__version__ = "0.1.0"
