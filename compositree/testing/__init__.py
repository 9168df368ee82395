"""Testing utilities for compositree."""

from .fixtures import (
    build_reference_tree,
    build_deep_chain,
    random_tree,
    iter_subtrees,
    path_resolves_to_match,
    recompute_metric,
)

__all__ = [
    'build_reference_tree',
    'build_deep_chain',
    'random_tree',
    'iter_subtrees',
    'path_resolves_to_match',
    'recompute_metric',
]
