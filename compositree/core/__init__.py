"""Core abstractions for compositree.

This module contains the node contract, the two node kinds, the
aggregation strategies and the traversal engine.
"""

from .node import TreeComponent, Leaf, Composite, Path, Predicate
from .aggregator import (
    Aggregator,
    SumAggregator,
    MaxAggregator,
    MinAggregator,
    CountAggregator,
    CustomAggregator,
    get_aggregator,
)
from .traverser import walk, search_paths, fold_metric, contains_node
from . import predicates

__all__ = [
    "TreeComponent",
    "Leaf",
    "Composite",
    "Path",
    "Predicate",
    "Aggregator",
    "SumAggregator",
    "MaxAggregator",
    "MinAggregator",
    "CountAggregator",
    "CustomAggregator",
    "get_aggregator",
    "walk",
    "search_paths",
    "fold_metric",
    "contains_node",
    "predicates",
]
