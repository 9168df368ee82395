"""Configuration system for compositree.

This module defines how callers bound a traversal (depth and size ceilings)
and which aggregation the engine uses by default.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigurationError


# Depth ceiling used when the caller passes no limits
DEFAULT_MAX_DEPTH = 10_000


@dataclass
class TraversalLimits:
    """Resource ceilings applied to every metric/find traversal.

    Depth is counted from the node the traversal starts at (depth 0).
    ``None`` disables a limit.
    """

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH   # Deepest level allowed
    max_nodes: Optional[int] = None                # Nodes visited per call

    @classmethod
    def unlimited(cls) -> 'TraversalLimits':
        """Create limits that never trip.

        Returns:
            TraversalLimits with both ceilings disabled
        """
        return cls(max_depth=None, max_nodes=None)

    @classmethod
    def shallow(cls, max_depth: int = 1) -> 'TraversalLimits':
        """Create limits for trees expected to be shallow.

        Args:
            max_depth: Deepest level allowed (default 1 = root and children)

        Returns:
            TraversalLimits for shallow trees
        """
        return cls(max_depth=max_depth)

    def check_depth(self, depth: int) -> bool:
        """Check if a node at ``depth`` is within the depth ceiling."""
        if self.max_depth is None:
            return True
        return depth <= self.max_depth

    def check_node_count(self, node_count: int) -> bool:
        """Check if ``node_count`` visited nodes is within the size ceiling."""
        if self.max_nodes is None:
            return True
        return node_count <= self.max_nodes

    def validate(self) -> List[str]:
        """Validate limits for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if self.max_depth is not None and self.max_depth < 0:
            errors.append("max_depth cannot be negative")
        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")
        return errors

    def ensure_valid(self) -> 'TraversalLimits':
        """Raise ConfigurationError if the limits are invalid.

        Returns:
            self, so the call can be chained
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError(f"Invalid traversal limits: {'; '.join(errors)}")
        return self


@dataclass
class EngineConfig:
    """Complete configuration for tree queries.

    Bundles the limits, the default aggregation and the separator used
    when a path is formatted for display.
    """

    limits: TraversalLimits = field(default_factory=TraversalLimits)
    aggregator: Any = "sum"        # Aggregator name or instance
    path_separator: str = "/"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EngineConfig':
        """Build a config from a plain mapping.

        Recognised keys: ``max_depth``, ``max_nodes``, ``aggregator`` and
        ``path_separator``. Unknown keys are rejected.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {"max_depth", "max_nodes", "aggregator", "path_separator"}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        limit_kwargs: Dict[str, Any] = {}
        for key in ("max_depth", "max_nodes"):
            if key in data:
                limit_kwargs[key] = data[key]

        config = cls(
            limits=TraversalLimits(**limit_kwargs),
            aggregator=data.get("aggregator", "sum"),
            path_separator=data.get("path_separator", "/"),
        )
        errors = config.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
        return config

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = list(self.limits.validate())

        if not self.path_separator:
            errors.append("path_separator cannot be empty")

        if isinstance(self.aggregator, str):
            # Local import: aggregator lives in core, which imports config
            from .core.aggregator import AGGREGATORS
            if self.aggregator.lower() not in AGGREGATORS:
                errors.append(f"unknown aggregator: {self.aggregator}")

        return errors
