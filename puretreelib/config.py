"""Configuration system for PureTreeLib.

This module defines how users specify their traversal requirements over a
persistent tree, including what data they need from each node, how to
filter nodes, and how deep to go. It also resolves the runtime log level
used by :mod:`puretreelib.logging`.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Callable, Set, Any, List


LOG_LEVEL_ENV = "PURETREELIB_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING


class DataRequirement(Enum):
    """Specifies what data is collected from each visited node."""
    NODE = "node"                        # The TreeNode itself
    PAYLOAD = "payload"                  # Just the payload
    PATH = "path"                        # Index path from the traversal root
    CHILDREN_COUNT = "children_count"    # Number of immediate children
    SUBTREE_STATS = "subtree_stats"      # Memoized size and height
    CUSTOM = "custom"                    # User-defined collection


class TraversalStrategy(Enum):
    """How to traverse the tree.

    Different strategies are optimal for different use cases.
    """
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level
    CUSTOM = "custom"               # User-defined traverser


@dataclass
class FilterConfig:
    """Configuration for filtering nodes during traversal."""

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    # When set, excluded nodes also hide their whole subtree
    prune_on_exclude: bool = False

    def should_include(self, node) -> bool:
        """Check if a node should be included based on filters.

        Args:
            node: Node to check

        Returns:
            True if node passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True

    def should_explore_children(self, node) -> bool:
        """Check if children of a node should be explored.

        Only the exclude filter prunes: an include filter selects which
        nodes are reported, not which branches are walked.

        Args:
            node: Node to check

        Returns:
            True if children should be explored
        """
        if not self.prune_on_exclude:
            return True

        return not (self.exclude_filter and self.exclude_filter(node))


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering."""

    min_depth: int = 0                          # Minimum depth to yield
    max_depth: Optional[int] = None            # Maximum depth to traverse
    specific_depths: Optional[Set[int]] = None  # Only these specific depths

    def should_yield(self, depth: int) -> bool:
        """Check if nodes at this depth should be yielded.

        Args:
            depth: Current depth

        Returns:
            True if depth is within configured range
        """
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True


@dataclass
class TraversalConfig:
    """Complete configuration for tree traversal.

    This is the primary way users specify what they want from a traversal.
    The ExecutionPlan validates this configuration before walking anything.
    """

    # Traversal algorithm
    strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST
    custom_traverser: Optional[Any] = None  # Custom traverser instance

    # Depth control
    depth: DepthConfig = field(default_factory=DepthConfig)

    # Node filtering
    filter: FilterConfig = field(default_factory=FilterConfig)

    # Data collection
    data_requirements: DataRequirement = DataRequirement.NODE
    custom_collector: Optional[Any] = None  # Custom collector instance

    # Stop after this many nodes have been yielded
    max_nodes: Optional[int] = None

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Create config for shallow scanning.

        Args:
            max_depth: How deep to scan (default 1 = immediate children only)

        Returns:
            TraversalConfig for shallow scanning
        """
        return cls(
            strategy=TraversalStrategy.BREADTH_FIRST,
            depth=DepthConfig(max_depth=max_depth),
            data_requirements=DataRequirement.NODE,
        )

    @classmethod
    def deep_scan(cls, data_requirement: DataRequirement = DataRequirement.SUBTREE_STATS) -> 'TraversalConfig':
        """Create config for deep scanning.

        Args:
            data_requirement: What data to collect

        Returns:
            TraversalConfig for deep scanning
        """
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_POST,  # Good for aggregation
            data_requirements=data_requirement,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.strategy == TraversalStrategy.CUSTOM and self.custom_traverser is None:
            errors.append("custom_traverser required when strategy is CUSTOM")

        if self.data_requirements == DataRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when data_requirements is CUSTOM")

        return errors


def runtime_log_level() -> int:
    """Resolve the library log level from the environment.

    Accepts a level name ("DEBUG") or number ("10"). Anything unparsable
    falls back to WARNING.
    """
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL
