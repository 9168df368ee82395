"""High-level API for compositree.

This module provides simple, functional interfaces for common tree
queries. These functions wrap the node methods and the traversal engine
for callers that prefer plain functions or want an EngineConfig applied.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import EngineConfig, TraversalLimits
from .core.aggregator import CountAggregator, get_aggregator
from .core.node import Path, TreeComponent
from .core.traverser import walk
from .errors import ConfigurationError


def _check_config(config: Optional[EngineConfig]) -> None:
    if config is None:
        return
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")


def _limits_from(config: Optional[EngineConfig],
                 limits: Optional[TraversalLimits]) -> Optional[TraversalLimits]:
    _check_config(config)
    if limits is not None:
        return limits
    if config is not None:
        return config.limits
    return None


def compute_metric(root: TreeComponent,
                   aggregator=None,
                   limits: Optional[TraversalLimits] = None,
                   config: Optional[EngineConfig] = None) -> Any:
    """Compute the aggregate metric of a subtree.

    Args:
        root: Node whose metric to compute
        aggregator: Aggregator name or instance; overrides config.aggregator
        limits: Depth and size ceilings; override config.limits
        config: Engine configuration supplying defaults

    Returns:
        The aggregated metric

    Example:
        >>> compute_metric(root)               # total of all leaf values
        >>> compute_metric(root, "max")        # largest leaf value
    """
    limits = _limits_from(config, limits)
    if aggregator is None and config is not None:
        aggregator = config.aggregator
    return root.metric(get_aggregator(aggregator), limits)


def find_paths(root: TreeComponent,
               predicate: Callable[[TreeComponent], bool],
               limits: Optional[TraversalLimits] = None,
               config: Optional[EngineConfig] = None) -> List[Path]:
    """Find the path of every node matching a predicate.

    Args:
        root: Node the search starts from
        predicate: Function that returns True for matching nodes
        limits: Depth and size ceilings
        config: Engine configuration supplying default limits

    Returns:
        Paths in left-to-right depth-first order
    """
    return root.find(predicate, _limits_from(config, limits))


def find_nodes(root: TreeComponent,
               predicate: Callable[[TreeComponent], bool],
               limits: Optional[TraversalLimits] = None) -> Iterator[Tuple[Path, TreeComponent]]:
    """Find nodes that match a predicate, together with their paths.

    Unlike ``find_paths`` this is lazy and yields the matching node
    itself, so callers never need to resolve an ambiguous path.

    Yields:
        Tuples of (path, node) in left-to-right depth-first order
    """
    for node, path in walk(root, limits):
        if predicate(node):
            yield path, node


def count_nodes(root: TreeComponent,
                predicate: Optional[Callable[[TreeComponent], bool]] = None,
                limits: Optional[TraversalLimits] = None) -> int:
    """Count nodes in a subtree, optionally only those matching a predicate.

    Example:
        >>> count_nodes(root)                        # every node
        >>> count_nodes(root, predicates.is_leaf)    # leaves only
    """
    count = 0
    for node, _ in walk(root, limits):
        if predicate is None or predicate(node):
            count += 1
    return count


def get_tree_paths(root: TreeComponent,
                   limits: Optional[TraversalLimits] = None) -> Iterator[Path]:
    """Get paths from root to each node, in pre-order.

    Yields:
        Lists of names from root down to each node
    """
    for _, path in walk(root, limits):
        yield path


def get_leaf_nodes(root: TreeComponent,
                   limits: Optional[TraversalLimits] = None) -> Iterator[TreeComponent]:
    """Get all leaf nodes in the subtree, left to right.

    Yields:
        Leaf nodes
    """
    for node, _ in walk(root, limits):
        if node.is_leaf():
            yield node


def get_tree_stats(root: TreeComponent,
                   aggregator=None,
                   limits: Optional[TraversalLimits] = None) -> Dict[str, Any]:
    """Get statistics about a tree.

    Args:
        root: Root of the tree
        aggregator: Aggregator used for ``total_metric`` (default: sum)
        limits: Depth and size ceilings

    Returns:
        Dictionary with:
        - total_nodes: Number of nodes including root
        - leaf_count: Number of leaves
        - composite_count: Number of composites
        - empty_composites: Composites with no children
        - max_depth: Deepest level below root (root = 0)
        - total_metric: Metric of the root
    """
    stats = {
        'total_nodes': 0,
        'leaf_count': 0,
        'composite_count': 0,
        'empty_composites': 0,
        'max_depth': 0,
    }

    for node, path in walk(root, limits):
        stats['total_nodes'] += 1
        stats['max_depth'] = max(stats['max_depth'], len(path) - 1)
        if node.is_leaf():
            stats['leaf_count'] += 1
        else:
            stats['composite_count'] += 1
            if len(node) == 0:
                stats['empty_composites'] += 1

    stats['total_metric'] = root.metric(get_aggregator(aggregator), limits)
    return stats


def count_leaves(root: TreeComponent, limits: Optional[TraversalLimits] = None) -> int:
    """Count leaves using the metric fold rather than a walk."""
    return root.metric(CountAggregator(), limits)


def format_path(path: Sequence[str],
                separator: Optional[str] = None,
                config: Optional[EngineConfig] = None) -> str:
    """Join a path's names for display.

    Args:
        path: Names from the root down
        separator: Join string; overrides config.path_separator
        config: Engine configuration supplying the default separator

    Example:
        >>> format_path(["root", "sub", "c"])
        'root/sub/c'
        >>> format_path(["root", "sub", "c"], config=EngineConfig(path_separator="."))
        'root.sub.c'
    """
    _check_config(config)
    if separator is None:
        separator = config.path_separator if config is not None else "/"
    return separator.join(path)
