"""Tree construction and validation helpers.

These helpers build trees from nested mappings or slash-separated paths,
resolve paths returned by ``find`` back to nodes, and re-check the tree
invariants on an existing structure.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .config import TraversalLimits
from .core.aggregator import get_aggregator
from .core.node import Composite, Leaf, TreeComponent
from .core.traverser import walk
from .errors import PathNotFoundError, TreeStructureError

logger = logging.getLogger(__name__)


def build_tree(name: str, structure: Mapping[str, Any]) -> Composite:
    """Build a tree from a nested mapping.

    Mapping values become Composites, anything else becomes a Leaf with
    that value. Children are attached in mapping order.

    Args:
        name: Name of the root composite
        structure: Nested mapping of child names to values or mappings

    Returns:
        The root Composite

    Example:
        >>> root = build_tree("root", {"a": 5, "b": 3, "sub": {"c": 2}})
        >>> root.metric()
        10
    """
    root = Composite(name)
    # Explicit stack: (parent, mapping) pairs still to expand
    pending = [(root, structure)]
    while pending:
        parent, mapping = pending.pop()
        for child_name, value in mapping.items():
            if isinstance(value, Mapping):
                child = Composite(child_name)
                pending.append((child, value))
            else:
                child = Leaf(child_name, value)
            parent.attach(child)
    return root


def to_dict(root: TreeComponent,
            limits: Optional[TraversalLimits] = None) -> Union[Dict[str, Any], Any]:
    """Convert a tree back into the nested mapping ``build_tree`` accepts.

    Args:
        root: Node to convert
        limits: Depth and size ceilings

    Returns:
        The leaf value for a Leaf, else a mapping of child names to values

    Raises:
        TreeStructureError: If two siblings share a name, since a mapping
            can hold only one of them
    """
    if root.is_leaf():
        return root.value

    result: Dict[str, Any] = {}
    # Pre-order walk: a composite's mapping exists before it is visited
    mappings: Dict[int, Dict[str, Any]] = {id(root): result}
    for node, path in walk(root, limits):
        if node.is_leaf():
            continue
        target = mappings[id(node)]
        for child in node.iter_children():
            if child.name in target:
                raise TreeStructureError(
                    f"Cannot convert {'/'.join(path)!r}: duplicate child name {child.name!r}"
                )
            if child.is_leaf():
                target[child.name] = child.value
            else:
                target[child.name] = mappings[id(child)] = {}
    return result


def split_path(path: Union[str, Sequence[str]], separator: str = "/") -> List[str]:
    """Normalize a path string or name sequence into a list of names.

    Empty segments (leading, trailing or doubled separators) are dropped.
    """
    if isinstance(path, str):
        return [part for part in path.split(separator) if part]
    return list(path)


def resolve_path(root: TreeComponent,
                 path: Union[str, Sequence[str]],
                 separator: str = "/") -> TreeComponent:
    """Follow a path name by name from ``root``.

    The first element must be ``root``'s own name, matching the paths
    ``find`` returns. Where siblings share a name the first one wins.

    Args:
        root: Node the path is relative to
        path: List of names or separator-joined string
        separator: Separator used when ``path`` is a string

    Returns:
        The node the path points at

    Raises:
        PathNotFoundError: If any name along the path does not exist
    """
    names = split_path(path, separator)
    if not names or names[0] != root.name:
        raise PathNotFoundError(names, names[0] if names else "")

    current = root
    for name in names[1:]:
        found = None
        if not current.is_leaf():
            found = current.child(name)
        if found is None:
            raise PathNotFoundError(names, name)
        current = found
    return current


def ensure_path(root: Composite, names: Sequence[str]) -> Composite:
    """Return the composite at ``names`` under ``root``, creating it if needed.

    ``names`` is relative to ``root`` (it does not include root's name).
    Missing intermediate composites are created and attached.

    Raises:
        TreeStructureError: If a leaf occupies one of the names
    """
    current = root
    for name in names:
        existing = current.child(name)
        if existing is None:
            existing = Composite(name)
            current.attach(existing)
            logger.debug("Created intermediate composite %r under %r", name, current.name)
        elif existing.is_leaf():
            raise TreeStructureError(
                f"Cannot descend into {name!r} under {current.name!r}: it is a leaf"
            )
        current = existing
    return current


def add_leaf_at(root: Composite,
                path: Union[str, Sequence[str]],
                value: Any,
                separator: str = "/") -> Leaf:
    """Create a leaf at ``path``, creating intermediate composites.

    The first path segment names the root, so ``"root/docs/a.txt"``
    attaches leaf ``a.txt`` under composite ``docs`` of ``root``.

    Args:
        root: Root composite
        path: Full path including the root's name and the leaf's name
        value: Leaf value
        separator: Separator used when ``path`` is a string

    Returns:
        The new Leaf

    Raises:
        PathNotFoundError: If the path does not start with root's name
        TreeStructureError: If the path runs through an existing leaf
    """
    names = split_path(path, separator)
    if len(names) < 2 or names[0] != root.name:
        raise PathNotFoundError(names, names[0] if names else "")

    parent = ensure_path(root, names[1:-1])
    leaf = Leaf(names[-1], value)
    parent.attach(leaf)
    return leaf


def validate_tree(root: TreeComponent,
                  aggregator=None,
                  limits: Optional[TraversalLimits] = None) -> List[str]:
    """Re-check the structural invariants of an existing tree.

    Checks that no node is reachable twice, that every node below the
    root is marked as owned, and that each composite's metric equals the
    fold of its direct children's metrics.

    Args:
        root: Root of the tree to check
        aggregator: Aggregator used for the metric check (default: sum)
        limits: Depth and size ceilings

    Returns:
        List of problems found (empty if valid)
    """
    aggregator = get_aggregator(aggregator)
    problems: List[str] = []
    seen: Dict[int, List[str]] = {}

    for node, path in walk(root, limits):
        key = id(node)
        if key in seen:
            problems.append(
                f"{'/'.join(path)}: node already reachable at {'/'.join(seen[key])}"
            )
            continue
        seen[key] = path

        if node is not root and not node.is_attached:
            problems.append(f"{'/'.join(path)}: reachable but not marked as owned")

        if not node.is_leaf():
            expected = aggregator.fold(
                child.metric(aggregator, limits) for child in node.iter_children()
            )
            actual = node.metric(aggregator, limits)
            if actual != expected:
                problems.append(
                    f"{'/'.join(path)}: metric {actual!r} != fold of children {expected!r}"
                )

    if problems:
        logger.warning("Tree %r failed validation with %d problem(s)",
                       root.name, len(problems))
    return problems
