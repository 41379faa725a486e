"""Execution planning for PureTreeLib.

The ExecutionPlan validates a TraversalConfig and coordinates the actual
traversal: it picks the traverser and collector, applies the depth and
filter settings, and enforces the node limit.
"""

from typing import Any, Dict, Iterator, Tuple

from .config import DataRequirement, TraversalConfig, TraversalStrategy
from .core.collector import (
    ChildCountCollector,
    DataCollector,
    NodeCollector,
    PathCollector,
    PayloadCollector,
    SubtreeStatsCollector,
)
from .core.node import TreeNode
from .core.traverser import TreeTraverser, create_traverser
from .errors import InvalidConfigError
from .logging import get_logger


logger = get_logger("planning")


class ExecutionPlan:
    """Validated execution plan for tree traversal.

    The ExecutionPlan is the bridge between user intent (TraversalConfig)
    and execution. Configuration problems surface when the plan is built,
    before any node is visited.
    """

    def __init__(self, config: TraversalConfig):
        """Create and validate an execution plan.

        Args:
            config: User's traversal configuration

        Raises:
            InvalidConfigError: If the configuration is inconsistent
        """
        self.config = config

        config_errors = config.validate()
        if config_errors:
            raise InvalidConfigError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.traverser = self._select_traverser()
        self.collector = self._select_collector()

        self.nodes_processed = 0

        logger.debug(
            "Execution plan: traverser=%s collector=%s",
            self.traverser.__class__.__name__,
            self.collector.__class__.__name__,
        )

    def _select_traverser(self) -> TreeTraverser:
        if self.config.strategy == TraversalStrategy.CUSTOM:
            return self.config.custom_traverser

        explore = None
        if self.config.filter.prune_on_exclude:
            explore = self.config.filter.should_explore_children

        return create_traverser(self.config.strategy.value, explore)

    def _select_collector(self) -> DataCollector:
        if self.config.data_requirements == DataRequirement.CUSTOM:
            return self.config.custom_collector

        collector_map = {
            DataRequirement.NODE: NodeCollector,
            DataRequirement.PAYLOAD: PayloadCollector,
            DataRequirement.PATH: PathCollector,
            DataRequirement.CHILDREN_COUNT: ChildCountCollector,
            DataRequirement.SUBTREE_STATS: SubtreeStatsCollector,
        }

        return collector_map[self.config.data_requirements]()

    def _walk_max_depth(self):
        depth = self.config.depth
        if depth.specific_depths is not None:
            return max(depth.specific_depths, default=0)
        return depth.max_depth

    def execute(self, root: TreeNode) -> Iterator[Tuple[TreeNode, Any]]:
        """Execute the traversal plan.

        Args:
            root: Root node to start traversal from

        Yields:
            Tuples of (node, collected_data)
        """
        self.nodes_processed = 0
        max_nodes = self.config.max_nodes

        for node, depth, index_path in self.traverser.walk(
            root,
            max_depth=self._walk_max_depth(),
            min_depth=0,
        ):
            if not self.config.depth.should_yield(depth):
                continue

            if not self.config.filter.should_include(node):
                continue

            if max_nodes is not None and self.nodes_processed >= max_nodes:
                logger.debug("Node limit of %d reached, stopping", max_nodes)
                break

            data = self.collector.collect(node, depth, index_path)
            self.nodes_processed += 1

            yield (node, data)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Returns:
            Dictionary with plan details
        """
        return {
            'strategy': self.config.strategy.value,
            'data_requirements': self.config.data_requirements.value,
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'max_nodes': self.config.max_nodes,
            'traverser': self.traverser.__class__.__name__,
            'collector': self.collector.__class__.__name__,
        }
