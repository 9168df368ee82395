"""Node types for compositree.

A tree is built from two node kinds sharing one contract:

- Leaf: a terminal node with a name and a scalar value
- Composite: a named, ordered group of owned child nodes

Callers use ``metric()`` and ``find()`` the same way on either kind. A
Composite owns its children exclusively; traversal is strictly top-down
and nodes keep no reference to their parent.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import TraversalLimits
from ..errors import AlreadyOwnedError, ChildNotFoundError, CycleError
from .aggregator import get_aggregator
from .traverser import contains_node, fold_metric, search_paths

logger = logging.getLogger(__name__)

Path = List[str]
Predicate = Callable[['TreeComponent'], bool]


class TreeComponent(ABC):
    """Abstract base class for every node in a composite tree.

    This class defines the capability set shared by leaves and
    composites: a name, an aggregate ``metric()`` and a path-producing
    ``find()``. Concrete nodes only differ in how they answer
    ``is_leaf()``, ``iter_children()`` and ``metadata()``.
    """

    def __init__(self, name: str):
        """Initialize a node.

        Args:
            name: Display name of the node, used to build paths

        Raises:
            TypeError: If name is not a string
        """
        if not isinstance(name, str):
            raise TypeError(f"Node name must be a string, got {type(name).__name__}")
        self._name = name
        # Set while a Composite owns this node
        self._owned = False

    @property
    def name(self) -> str:
        """Name of the node."""
        return self._name

    @property
    def is_attached(self) -> bool:
        """True while this node is owned by a Composite."""
        return self._owned

    @abstractmethod
    def is_leaf(self) -> bool:
        """Check if this node is a leaf (can never have children).

        Returns:
            bool: True for Leaf, False for Composite
        """
        pass

    @abstractmethod
    def iter_children(self) -> Iterator['TreeComponent']:
        """Iterate over direct children in attachment order."""
        pass

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """Return the visible attributes of this node.

        Common metadata fields:
        - name: Name of the node
        - kind: "leaf" or "composite"
        - value: Stored scalar (leaves only)
        - child_count: Number of direct children (composites only)

        Returns:
            Dict[str, Any]: Metadata dictionary
        """
        pass

    @abstractmethod
    def metric(self, aggregator=None, limits: Optional[TraversalLimits] = None) -> Any:
        """Return the aggregate value of this node and everything beneath it.

        Args:
            aggregator: Aggregator instance or name (default: sum)
            limits: Depth and size ceilings for the traversal

        Returns:
            The aggregated metric
        """
        pass

    @abstractmethod
    def find(self, predicate: Predicate,
             limits: Optional[TraversalLimits] = None) -> List[Path]:
        """Return the path of every node under this one matching ``predicate``.

        Args:
            predicate: Pure function(node) -> bool
            limits: Depth and size ceilings for the traversal

        Returns:
            List of paths, each starting with this node's name
        """
        pass

    def __bool__(self) -> bool:
        # Composites define __len__; a node is never falsy
        return True

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(name={self._name!r})"


class Leaf(TreeComponent):
    """Terminal node holding a name and a scalar value.

    Leaves are immutable after construction and compare by value.
    """

    def __init__(self, name: str, value: Any):
        """Initialize a leaf.

        Args:
            name: Name of the leaf
            value: Scalar contributing to the metric
        """
        super().__init__(name)
        self._value = value

    @property
    def value(self) -> Any:
        """Stored scalar value."""
        return self._value

    def is_leaf(self) -> bool:
        return True

    def iter_children(self) -> Iterator[TreeComponent]:
        return iter(())

    def metadata(self) -> Dict[str, Any]:
        return {
            'name': self._name,
            'kind': 'leaf',
            'value': self._value,
        }

    def metric(self, aggregator=None, limits: Optional[TraversalLimits] = None) -> Any:
        """Return this leaf's own contribution; never recurses."""
        return get_aggregator(aggregator).leaf_value(self)

    def find(self, predicate: Predicate,
             limits: Optional[TraversalLimits] = None) -> List[Path]:
        """Return ``[[name]]`` if the predicate holds, else ``[]``."""
        if predicate(self):
            return [[self._name]]
        return []

    def __eq__(self, other: object) -> bool:
        """Leaves are equal if they have the same name and value."""
        if not isinstance(other, Leaf):
            return NotImplemented
        return self._name == other._name and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._name, self._value))

    def __repr__(self) -> str:
        return f"Leaf(name={self._name!r}, value={self._value!r})"


class Composite(TreeComponent):
    """Internal node owning an ordered sequence of children.

    Children may be leaves or other composites. A child belongs to
    exactly one composite at a time: attaching a node that is already
    owned, or attaching a composite beneath itself, raises immediately.
    Composites compare by identity.
    """

    def __init__(self, name: str, children: Iterable[TreeComponent] = ()):
        """Initialize a composite.

        Args:
            name: Name of the composite
            children: Initial children, attached in order

        Raises:
            AlreadyOwnedError: If an initial child is already owned

        If any initial child is rejected, the children attached before it
        are released again and the error propagates.
        """
        super().__init__(name)
        self._children: List[TreeComponent] = []
        try:
            for child in children:
                self.attach(child)
        except Exception:
            for child in self._children:
                child._owned = False
            self._children.clear()
            raise

    @property
    def children(self) -> Tuple[TreeComponent, ...]:
        """Snapshot of the direct children in attachment order."""
        return tuple(self._children)

    def is_leaf(self) -> bool:
        return False

    def iter_children(self) -> Iterator[TreeComponent]:
        return iter(self._children)

    def metadata(self) -> Dict[str, Any]:
        return {
            'name': self._name,
            'kind': 'composite',
            'child_count': len(self._children),
        }

    def attach(self, child: TreeComponent) -> None:
        """Append ``child`` to the end of this composite's children.

        Ownership transfers to this composite. To move a node between
        composites, ``detach`` it from its current owner first.

        Args:
            child: Leaf or Composite to attach

        Raises:
            TypeError: If child is not a TreeComponent
            AlreadyOwnedError: If child is already owned by a composite
            CycleError: If child is this composite or contains it
        """
        if not isinstance(child, TreeComponent):
            raise TypeError(
                f"Can only attach TreeComponent instances, got {type(child).__name__}"
            )
        if child._owned:
            raise AlreadyOwnedError(child, self._name)
        # An unowned node is always the root of its tree, so self can only
        # sit inside child's subtree when self is owned
        if child is self or (self._owned and contains_node(child, self)):
            raise CycleError(child, self._name)

        self._children.append(child)
        child._owned = True
        logger.debug("Attached %r to %r (%d children)",
                     child.name, self._name, len(self._children))

    def detach(self, child: TreeComponent) -> TreeComponent:
        """Remove a direct child and release ownership of it.

        Args:
            child: The child to remove (matched by identity)

        Returns:
            The detached child, free to be attached elsewhere

        Raises:
            ChildNotFoundError: If child is not a direct child of this composite
        """
        for index, existing in enumerate(self._children):
            if existing is child:
                del self._children[index]
                child._owned = False
                logger.debug("Detached %r from %r", child.name, self._name)
                return child
        raise ChildNotFoundError(
            f"{child.name!r} is not a direct child of {self._name!r}"
        )

    def child(self, name: str) -> Optional[TreeComponent]:
        """Return the first direct child with the given name, or None."""
        for existing in self._children:
            if existing.name == name:
                return existing
        return None

    def metric(self, aggregator=None, limits: Optional[TraversalLimits] = None) -> Any:
        """Fold the metrics of all children, recomputed on every call."""
        return fold_metric(self, aggregator, limits)

    def find(self, predicate: Predicate,
             limits: Optional[TraversalLimits] = None) -> List[Path]:
        """Search this composite and its subtree, left to right, depth first."""
        return search_paths(self, predicate, limits)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[TreeComponent]:
        return iter(self._children)

    def __contains__(self, node: object) -> bool:
        return any(existing is node for existing in self._children)

    def __repr__(self) -> str:
        return f"Composite(name={self._name!r}, children={len(self._children)})"
