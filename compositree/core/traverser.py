"""Traversal engine for compositree.

Both tree queries are implemented here as explicit-stack walks rather than
Python recursion, so a deep chain of composites raises TraversalDepthError
instead of RecursionError.

The engine only relies on two methods of a node: ``is_leaf()`` and
``iter_children()``. Children are always visited left to right, in the
order they were attached.
"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple

from ..config import TraversalLimits
from ..errors import TraversalDepthError, TraversalSizeError
from .aggregator import Aggregator, get_aggregator

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


def resolve_limits(limits: Optional[TraversalLimits]) -> TraversalLimits:
    """Return validated limits, falling back to the defaults."""
    if limits is None:
        return TraversalLimits()
    return limits.ensure_valid()


def _check_size(limits: TraversalLimits, visited: int) -> None:
    if not limits.check_node_count(visited):
        logger.debug("Traversal stopped after %d nodes (max_nodes=%s)",
                     visited, limits.max_nodes)
        raise TraversalSizeError(limits.max_nodes)


def _raise_depth_error(limits: TraversalLimits, path: List[str]) -> None:
    logger.debug("Traversal stopped at %r (max_depth=%s)",
                 "/".join(path), limits.max_depth)
    raise TraversalDepthError(limits.max_depth, path)


def _path_of(cell) -> List[str]:
    """Materialize a linked path cell ``(name, parent_cell)`` into a list."""
    names = []
    while cell is not None:
        names.append(cell[0])
        cell = cell[1]
    names.reverse()
    return names


def _iter_nodes(root, limits: TraversalLimits) -> Iterator[Tuple[Any, tuple]]:
    """Pre-order walk yielding (node, path cell).

    Paths are kept as linked ``(name, parent_cell)`` cells so that siblings
    share their prefix; callers materialize only the paths they need.
    """
    stack: List[Tuple[Any, tuple, int]] = [(root, (root.name, None), 0)]
    visited = 0

    while stack:
        node, cell, depth = stack.pop()

        visited += 1
        _check_size(limits, visited)

        yield node, cell

        if node.is_leaf():
            continue

        children = list(node.iter_children())
        if children and not limits.check_depth(depth + 1):
            _raise_depth_error(limits, _path_of((children[0].name, cell)))
        # Reversed so the first child is popped first
        for child in reversed(children):
            stack.append((child, (child.name, cell), depth + 1))


def walk(root, limits: Optional[TraversalLimits] = None) -> Iterator[Tuple[Any, List[str]]]:
    """Walk a subtree depth-first, pre-order.

    Each node is yielded before any of its children, and children are
    yielded in attachment order. The consumer runs between yields, so an
    exception raised while handling a node stops the walk immediately.

    Args:
        root: Node to start from (depth 0)
        limits: Depth and size ceilings (default: TraversalLimits())

    Yields:
        Tuples of (node, path) where path is the list of names from
        ``root`` down to and including ``node``

    Raises:
        TraversalDepthError: If a node lies deeper than ``limits.max_depth``
        TraversalSizeError: If more than ``limits.max_nodes`` nodes are visited
    """
    for node, cell in _iter_nodes(root, resolve_limits(limits)):
        yield node, _path_of(cell)


def search_paths(root,
                 predicate: Callable[[Any], bool],
                 limits: Optional[TraversalLimits] = None) -> List[List[str]]:
    """Collect the path of every node under ``root`` matching ``predicate``.

    The node itself is tested first, then each child's subtree in
    attachment order, so the result order is left-to-right depth-first.
    Errors raised by the predicate propagate to the caller and no
    partial result is returned.

    Args:
        root: Node the search starts from; every path begins with its name
        predicate: Pure function(node) -> bool
        limits: Depth and size ceilings

    Returns:
        List of paths (lists of names); empty if nothing matches
    """
    return [_path_of(cell)
            for node, cell in _iter_nodes(root, resolve_limits(limits))
            if predicate(node)]


def fold_metric(root,
                aggregator: Optional[Aggregator] = None,
                limits: Optional[TraversalLimits] = None) -> Any:
    """Fold leaf values bottom-up into the metric of ``root``.

    A composite's metric is the fold of its direct children's metrics,
    starting from the aggregator identity, so an empty composite yields
    the identity. Nothing is cached: every call reads the current children.

    Args:
        root: Node whose metric to compute
        aggregator: Aggregator instance or name (default: sum)
        limits: Depth and size ceilings

    Returns:
        The aggregated metric
    """
    aggregator = get_aggregator(aggregator)
    limits = resolve_limits(limits)

    if root.is_leaf():
        return aggregator.leaf_value(root)

    # Frame: [node, child iterator, accumulated value, depth]
    stack: List[list] = [[root, root.iter_children(), aggregator.identity, 0]]
    visited = 1
    result = aggregator.identity

    while stack:
        frame = stack[-1]
        child = next(frame[1], _EXHAUSTED)

        if child is _EXHAUSTED:
            stack.pop()
            if stack:
                stack[-1][2] = aggregator.combine(stack[-1][2], frame[2])
            else:
                result = frame[2]
            continue

        visited += 1
        _check_size(limits, visited)
        depth = frame[3] + 1
        if not limits.check_depth(depth):
            _raise_depth_error(limits, [f[0].name for f in stack] + [child.name])

        if child.is_leaf():
            frame[2] = aggregator.combine(frame[2], aggregator.leaf_value(child))
        else:
            stack.append([child, child.iter_children(), aggregator.identity, depth])

    return result


def contains_node(root, target) -> bool:
    """Check whether ``target`` (by identity) is ``root`` or lies beneath it.

    Unbounded: used by attach to reject cycles, which must be detected
    regardless of traversal limits.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node is target:
            return True
        if not node.is_leaf():
            stack.extend(node.iter_children())
    return False
