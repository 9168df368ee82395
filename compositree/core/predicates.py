"""Reusable predicates for ``find``.

Each factory returns a pure function of a node's visible attributes.
Value-based predicates are False for composites, which carry no value
of their own.
"""

from fnmatch import fnmatchcase
from typing import Any, Callable, Optional

Predicate = Callable[[Any], bool]


def always(node) -> bool:
    """Match every node."""
    return True


def never(node) -> bool:
    """Match no node."""
    return False


def is_leaf(node) -> bool:
    return node.is_leaf()


def is_composite(node) -> bool:
    return not node.is_leaf()


def name_equals(name: str) -> Predicate:
    """Match nodes whose name is exactly ``name``."""
    def predicate(node) -> bool:
        return node.name == name
    return predicate


def name_contains(keyword: str, case_sensitive: bool = True) -> Predicate:
    """Match nodes whose name contains ``keyword`` as a substring.

    Args:
        keyword: Substring to look for
        case_sensitive: Compare case-insensitively when False
    """
    if not case_sensitive:
        keyword = keyword.lower()

    def predicate(node) -> bool:
        name = node.name if case_sensitive else node.name.lower()
        return keyword in name
    return predicate


def name_matches(pattern: str) -> Predicate:
    """Match nodes whose name matches a glob pattern (``*.txt``)."""
    def predicate(node) -> bool:
        return fnmatchcase(node.name, pattern)
    return predicate


def _leaf_value(node) -> Optional[Any]:
    if not node.is_leaf():
        return None
    return node.value


def value_greater_than(threshold: Any) -> Predicate:
    """Match leaves whose value is strictly greater than ``threshold``."""
    def predicate(node) -> bool:
        value = _leaf_value(node)
        return value is not None and value > threshold
    return predicate


def value_at_least(threshold: Any) -> Predicate:
    """Match leaves whose value is greater than or equal to ``threshold``."""
    def predicate(node) -> bool:
        value = _leaf_value(node)
        return value is not None and value >= threshold
    return predicate


def value_equals(expected: Any) -> Predicate:
    """Match leaves whose value equals ``expected``."""
    def predicate(node) -> bool:
        return node.is_leaf() and node.value == expected
    return predicate


def metric_at_least(threshold: Any, aggregator=None) -> Predicate:
    """Match any node whose metric is at least ``threshold``.

    Computing the metric walks the node's subtree, so searching a whole
    tree with this predicate is quadratic in its depth.
    """
    def predicate(node) -> bool:
        return node.metric(aggregator) >= threshold
    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    """Match nodes satisfying every predicate (short-circuits)."""
    def predicate(node) -> bool:
        return all(p(node) for p in predicates)
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    """Match nodes satisfying at least one predicate (short-circuits)."""
    def predicate(node) -> bool:
        return any(p(node) for p in predicates)
    return predicate


def negate(inner: Predicate) -> Predicate:
    """Match nodes the inner predicate rejects."""
    def predicate(node) -> bool:
        return not inner(node)
    return predicate
