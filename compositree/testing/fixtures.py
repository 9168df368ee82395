"""Test fixtures for compositree consumers.

These helpers build well-known and randomized trees and check query
results against them, for use in the test suites of projects that
build on compositree.
"""

import random
from typing import Any, Callable, Iterator, List, Sequence, Tuple

from ..builder import resolve_path
from ..core.node import Composite, Leaf, TreeComponent
from ..errors import PathNotFoundError


def build_reference_tree() -> Composite:
    """Build the small reference tree.

    Structure:
    root/
    ├── a   (5)
    ├── b   (3)
    └── sub/
        └── c   (2)
    """
    return Composite("root", [
        Leaf("a", 5),
        Leaf("b", 3),
        Composite("sub", [Leaf("c", 2)]),
    ])


def build_deep_chain(depth: int, leaf_value: int = 1) -> Composite:
    """Build a chain of ``depth`` nested composites ending in one leaf.

    The root is at depth 0, so the leaf sits at ``depth``. Built
    bottom-up without recursion so very deep chains are cheap to create.

    Args:
        depth: Depth of the leaf below the root (at least 1)
        leaf_value: Value of the single leaf
    """
    if depth < 1:
        raise ValueError("depth must be at least 1")
    node: TreeComponent = Leaf("leaf", leaf_value)
    for level in range(depth - 1, -1, -1):
        node = Composite(f"level{level}", [node])
    return node


def random_tree(seed: int,
                max_depth: int = 4,
                max_children: int = 4,
                value_range: Tuple[int, int] = (0, 100)) -> Composite:
    """Build a reproducible random tree.

    Sibling names are unique (``n0``, ``n1``...) so every path resolves
    to exactly one node.

    Args:
        seed: Seed for the random generator
        max_depth: Deepest level a node can be created at
        max_children: Upper bound on children per composite
        value_range: Inclusive bounds for leaf values
    """
    rng = random.Random(seed)
    root = Composite("root")
    pending: List[Tuple[Composite, int]] = [(root, 0)]

    while pending:
        parent, depth = pending.pop()
        for index in range(rng.randint(0, max_children)):
            name = f"n{index}"
            if depth + 1 < max_depth and rng.random() < 0.4:
                child = Composite(name)
                pending.append((child, depth + 1))
            else:
                child = Leaf(name, rng.randint(*value_range))
            parent.attach(child)
    return root


def iter_subtrees(root: TreeComponent) -> Iterator[TreeComponent]:
    """Yield every node of the tree, pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.iter_children())))


def path_resolves_to_match(root: TreeComponent,
                           path: Sequence[str],
                           predicate: Callable[[TreeComponent], bool]) -> bool:
    """Check that ``path`` leads from ``root`` to a node satisfying ``predicate``.

    Returns False if the path does not resolve.
    """
    try:
        node = resolve_path(root, path)
    except PathNotFoundError:
        return False
    return bool(predicate(node))


def recompute_metric(node: TreeComponent, aggregator) -> Any:
    """Recompute a metric bottom-up from leaf values, independently of the engine.

    Recursive, so only suitable for trees of moderate depth.
    """
    if node.is_leaf():
        return aggregator.leaf_value(node)
    return aggregator.fold(recompute_metric(child, aggregator)
                           for child in node.iter_children())
