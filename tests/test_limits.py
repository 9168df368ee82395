"""Tests for traversal limits and configuration.

Deep and large trees must surface TraversalDepthError / TraversalSizeError
instead of exhausting the interpreter stack.
"""

import logging
import sys

import pytest

from compositree import (
    Composite,
    Leaf,
    TraversalLimits,
    EngineConfig,
    DEFAULT_MAX_DEPTH,
    CycleError,
    TraversalDepthError,
    TraversalSizeError,
    TreeResourceError,
    ConfigurationError,
)
from compositree.core.predicates import always, name_equals
from compositree.testing import build_deep_chain


class TestDepthLimit:
    """max_depth is counted from the node the query starts at."""

    def test_tree_at_limit_is_allowed(self):
        chain = build_deep_chain(5, leaf_value=7)
        limits = TraversalLimits(max_depth=5)
        assert chain.metric(limits=limits) == 7
        assert len(chain.find(always, limits)) == 6

    def test_metric_beyond_limit(self):
        chain = build_deep_chain(5)
        with pytest.raises(TraversalDepthError) as exc_info:
            chain.metric(limits=TraversalLimits(max_depth=3))
        assert exc_info.value.max_depth == 3
        assert exc_info.value.path == ["level0", "level1", "level2", "level3", "level4"]

    def test_find_beyond_limit(self):
        chain = build_deep_chain(5)
        with pytest.raises(TraversalDepthError) as exc_info:
            chain.find(name_equals("leaf"), TraversalLimits(max_depth=3))
        assert exc_info.value.path == ["level0", "level1", "level2", "level3", "level4"]

    def test_limit_is_relative_to_query_root(self):
        chain = build_deep_chain(5)
        inner = chain
        for _ in range(3):
            inner = inner.children[0]
        # inner is level3; its leaf sits two levels below it
        assert inner.metric(limits=TraversalLimits(max_depth=2)) == 1

    def test_zero_depth_allows_only_leaves_and_empty_composites(self):
        limits = TraversalLimits(max_depth=0)
        assert Leaf("x", 3).metric(limits=limits) == 3
        assert Composite("empty").metric(limits=limits) == 0
        assert Composite("empty").find(always, limits) == [["empty"]]
        with pytest.raises(TraversalDepthError):
            Composite("g", [Leaf("x", 1)]).metric(limits=limits)

    def test_default_limit(self):
        chain = build_deep_chain(DEFAULT_MAX_DEPTH + 1)
        with pytest.raises(TraversalDepthError) as exc_info:
            chain.metric()
        assert exc_info.value.max_depth == DEFAULT_MAX_DEPTH
        assert exc_info.value.path[-1] == "leaf"

    def test_depth_error_is_resource_error(self):
        assert issubclass(TraversalDepthError, TreeResourceError)
        assert issubclass(TraversalSizeError, TreeResourceError)

    def test_depth_error_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="compositree.core.traverser")
        with pytest.raises(TraversalDepthError):
            build_deep_chain(3).metric(limits=TraversalLimits(max_depth=1))
        assert "max_depth=1" in caplog.text


class TestSizeLimit:

    def test_within_limit(self, reference_tree):
        limits = TraversalLimits(max_nodes=5)
        assert reference_tree.metric(limits=limits) == 10
        assert len(reference_tree.find(always, limits)) == 5

    def test_metric_beyond_limit(self, reference_tree):
        with pytest.raises(TraversalSizeError) as exc_info:
            reference_tree.metric(limits=TraversalLimits(max_nodes=4))
        assert exc_info.value.max_nodes == 4

    def test_find_beyond_limit(self, reference_tree):
        with pytest.raises(TraversalSizeError):
            reference_tree.find(always, TraversalLimits(max_nodes=4))


def test_deep_chain_within_unlimited_limits():
    depth = sys.getrecursionlimit() * 3
    chain = build_deep_chain(depth, leaf_value=2)
    limits = TraversalLimits.unlimited()

    assert chain.metric(limits=limits) == 2
    paths = chain.find(name_equals("leaf"), limits)
    assert len(paths) == 1
    assert len(paths[0]) == depth + 1


def test_attach_cycle_check_on_deep_chain():
    depth = sys.getrecursionlimit() * 3
    chain = build_deep_chain(depth)
    bottom = chain
    while not bottom.children[0].is_leaf():
        bottom = bottom.children[0]

    with pytest.raises(CycleError):
        bottom.attach(chain)


@pytest.mark.slow
def test_very_deep_chain_metric_without_recursion():
    chain = build_deep_chain(50_000, leaf_value=3)
    assert chain.metric(limits=TraversalLimits.unlimited()) == 3
    assert chain.metric("count", TraversalLimits.unlimited()) == 1


class TestTraversalLimits:

    def test_defaults(self):
        limits = TraversalLimits()
        assert limits.max_depth == DEFAULT_MAX_DEPTH
        assert limits.max_nodes is None
        assert limits.validate() == []

    def test_unlimited(self):
        limits = TraversalLimits.unlimited()
        assert limits.check_depth(10 ** 9)
        assert limits.check_node_count(10 ** 9)

    def test_shallow(self):
        assert TraversalLimits.shallow().max_depth == 1
        assert TraversalLimits.shallow(3).max_depth == 3

    def test_validate(self):
        assert TraversalLimits(max_depth=-1).validate() == ["max_depth cannot be negative"]
        assert TraversalLimits(max_nodes=0).validate() == ["max_nodes must be positive"]

    def test_invalid_limits_rejected_at_use(self, reference_tree):
        with pytest.raises(ConfigurationError):
            reference_tree.metric(limits=TraversalLimits(max_depth=-1))
        with pytest.raises(ConfigurationError):
            reference_tree.find(always, TraversalLimits(max_nodes=0))

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            TraversalLimits(max_nodes=-5).ensure_valid()


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.aggregator == "sum"
        assert config.path_separator == "/"
        assert config.validate() == []

    def test_from_dict(self):
        config = EngineConfig.from_dict({
            "max_depth": 3,
            "max_nodes": 100,
            "aggregator": "count",
            "path_separator": ".",
        })
        assert config.limits.max_depth == 3
        assert config.limits.max_nodes == 100
        assert config.aggregator == "count"
        assert config.path_separator == "."

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            EngineConfig.from_dict({"max_width": 3})

    def test_from_dict_invalid_values(self):
        with pytest.raises(ConfigurationError, match="unknown aggregator"):
            EngineConfig.from_dict({"aggregator": "median"})
        with pytest.raises(ConfigurationError, match="max_depth"):
            EngineConfig.from_dict({"max_depth": -2})

    def test_validate_separator(self):
        assert EngineConfig(path_separator="").validate() == ["path_separator cannot be empty"]
