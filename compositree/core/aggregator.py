"""Aggregation strategies for compositree.

An Aggregator defines the associative fold a Composite applies to the
metrics of its children. This lets the same tree answer "total size",
"largest item" or "how many leaves" without changing the node classes.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional, Type, Union


class Aggregator(ABC):
    """Abstract base class for metric folds.

    Subclasses provide the fold identity and the combining operation.
    The operation must be associative so that the metric of a subtree
    is the same whether it is computed from the root or rebuilt bottom-up.
    """

    @property
    @abstractmethod
    def identity(self) -> Any:
        """Value of the fold over no children (metric of an empty Composite)."""
        pass

    @abstractmethod
    def combine(self, left: Any, right: Any) -> Any:
        """Combine two partial results.

        Args:
            left: Accumulated value so far
            right: Metric of the next child

        Returns:
            Combined value
        """
        pass

    def leaf_value(self, leaf) -> Any:
        """Return the contribution of a single leaf.

        Default is the leaf's stored value. Override for folds that
        count or weight leaves instead.
        """
        return leaf.value

    def fold(self, values: Iterable[Any]) -> Any:
        """Fold a sequence of child metrics into one value."""
        result = self.identity
        for value in values:
            result = self.combine(result, value)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class SumAggregator(Aggregator):
    """Sums leaf values. This is the default metric."""

    @property
    def identity(self) -> Any:
        return 0

    def combine(self, left: Any, right: Any) -> Any:
        return left + right


class MaxAggregator(Aggregator):
    """Largest leaf value in the subtree; ``-inf`` for an empty Composite."""

    @property
    def identity(self) -> Any:
        return -math.inf

    def combine(self, left: Any, right: Any) -> Any:
        return left if left >= right else right


class MinAggregator(Aggregator):
    """Smallest leaf value in the subtree; ``inf`` for an empty Composite."""

    @property
    def identity(self) -> Any:
        return math.inf

    def combine(self, left: Any, right: Any) -> Any:
        return left if left <= right else right


class CountAggregator(SumAggregator):
    """Counts leaves in the subtree."""

    def leaf_value(self, leaf) -> Any:
        return 1


class CustomAggregator(Aggregator):
    """Aggregator built from user-provided callables.

    Allows custom folds without subclassing.
    """

    def __init__(self,
                 combine: Callable[[Any, Any], Any],
                 identity: Any,
                 leaf_value: Optional[Callable[[Any], Any]] = None):
        """Initialize with custom fold functions.

        Args:
            combine: Associative function(left, right) -> combined
            identity: Fold identity for ``combine``
            leaf_value: Function(leaf) -> contribution (default: leaf.value)
        """
        self._combine = combine
        self._identity = identity
        self._leaf_value = leaf_value

    @property
    def identity(self) -> Any:
        return self._identity

    def combine(self, left: Any, right: Any) -> Any:
        return self._combine(left, right)

    def leaf_value(self, leaf) -> Any:
        if self._leaf_value is None:
            return leaf.value
        return self._leaf_value(leaf)


AGGREGATORS: Dict[str, Type[Aggregator]] = {
    'sum': SumAggregator,
    'max': MaxAggregator,
    'min': MinAggregator,
    'count': CountAggregator,
}


def get_aggregator(aggregator: Union[str, Aggregator, None] = None) -> Aggregator:
    """Resolve an aggregator name or instance.

    Args:
        aggregator: Name (sum, max, min, count), Aggregator instance,
            or None for the default sum

    Returns:
        Aggregator instance

    Raises:
        ValueError: If the name is not recognized
    """
    if aggregator is None:
        return SumAggregator()
    if isinstance(aggregator, Aggregator):
        return aggregator

    name = str(aggregator).lower()
    if name not in AGGREGATORS:
        raise ValueError(
            f"Unknown aggregator: {aggregator}. "
            f"Choose from: {', '.join(AGGREGATORS.keys())}"
        )
    return AGGREGATORS[name]()
