"""Exception hierarchy for compositree.

Structural errors are programming errors raised at the call that breaks the
tree invariants. Resource errors are raised by the traversal engine when a
tree exceeds the configured depth or size limits.
"""


class CompositeTreeError(Exception):
    """Base class for all compositree errors."""
    pass


class TreeStructureError(CompositeTreeError):
    """Raised when an operation would break the strict-tree invariant."""
    pass


class AlreadyOwnedError(TreeStructureError):
    """Raised when attaching a node that already belongs to a Composite."""

    def __init__(self, child, parent_name: str):
        self.child = child
        self.parent_name = parent_name
        super().__init__(
            f"Cannot attach {child.name!r} to {parent_name!r}: "
            f"node is already owned by another composite"
        )


class CycleError(TreeStructureError):
    """Raised when attaching a composite beneath itself."""

    def __init__(self, child, parent_name: str):
        self.child = child
        self.parent_name = parent_name
        super().__init__(
            f"Cannot attach {child.name!r} to {parent_name!r}: "
            f"{parent_name!r} is inside the subtree being attached"
        )


class ChildNotFoundError(TreeStructureError):
    """Raised when detaching a node that is not a direct child."""
    pass


class PathNotFoundError(TreeStructureError, LookupError):
    """Raised when a path does not resolve to a node."""

    def __init__(self, path, missing: str):
        self.path = list(path)
        self.missing = missing
        super().__init__(f"Path {self.path!r} not found: no node named {missing!r}")


class TreeResourceError(CompositeTreeError):
    """Raised when a traversal exceeds its configured limits."""
    pass


class TraversalDepthError(TreeResourceError):
    """Tree is deeper than ``TraversalLimits.max_depth``."""

    def __init__(self, max_depth: int, path=None):
        self.max_depth = max_depth
        self.path = list(path) if path is not None else None
        super().__init__(f"Traversal exceeded maximum depth of {max_depth}")


class TraversalSizeError(TreeResourceError):
    """Tree has more nodes than ``TraversalLimits.max_nodes``."""

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        super().__init__(f"Traversal exceeded maximum of {max_nodes} nodes")


class ConfigurationError(CompositeTreeError, ValueError):
    """Raised when a configuration object fails validation."""
    pass
