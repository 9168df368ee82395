"""compositree - Composite Tree Engine.

compositree lets a single set of operations work identically on a single
item or on an arbitrarily deep group of items:

━━━━━━━━━━━━━━━━━━━━━━━━━━
    from compositree import Leaf, Composite

    root = Composite("root", [Leaf("a", 5), Leaf("b", 3)])
    root.metric()                               # 8
    root.find(lambda node: node.name == "b")    # [["root", "b"]]
━━━━━━━━━━━━━━━━━━━━━━━━━━

Trees are built bottom-up by attaching children to composites, then
queried at any node with ``metric()`` or ``find()``.
"""

__version__ = "0.1.0"

from .core import (
    TreeComponent,
    Leaf,
    Composite,
    Aggregator,
    SumAggregator,
    MaxAggregator,
    MinAggregator,
    CountAggregator,
    CustomAggregator,
    get_aggregator,
    walk,
    predicates,
)
from .config import TraversalLimits, EngineConfig, DEFAULT_MAX_DEPTH
from .errors import (
    CompositeTreeError,
    TreeStructureError,
    AlreadyOwnedError,
    CycleError,
    ChildNotFoundError,
    PathNotFoundError,
    TreeResourceError,
    TraversalDepthError,
    TraversalSizeError,
    ConfigurationError,
)
from .builder import (
    build_tree,
    to_dict,
    resolve_path,
    ensure_path,
    add_leaf_at,
    validate_tree,
)
from .api import (
    compute_metric,
    find_paths,
    find_nodes,
    count_nodes,
    count_leaves,
    get_tree_paths,
    get_leaf_nodes,
    get_tree_stats,
    format_path,
)

__all__ = [
    "__version__",
    # Nodes
    "TreeComponent",
    "Leaf",
    "Composite",
    # Aggregation
    "Aggregator",
    "SumAggregator",
    "MaxAggregator",
    "MinAggregator",
    "CountAggregator",
    "CustomAggregator",
    "get_aggregator",
    # Traversal
    "walk",
    "predicates",
    # Config
    "TraversalLimits",
    "EngineConfig",
    "DEFAULT_MAX_DEPTH",
    # Errors
    "CompositeTreeError",
    "TreeStructureError",
    "AlreadyOwnedError",
    "CycleError",
    "ChildNotFoundError",
    "PathNotFoundError",
    "TreeResourceError",
    "TraversalDepthError",
    "TraversalSizeError",
    "ConfigurationError",
    # Builders
    "build_tree",
    "to_dict",
    "resolve_path",
    "ensure_path",
    "add_leaf_at",
    "validate_tree",
    # API
    "compute_metric",
    "find_paths",
    "find_nodes",
    "count_nodes",
    "count_leaves",
    "get_tree_paths",
    "get_leaf_nodes",
    "get_tree_stats",
    "format_path",
]
