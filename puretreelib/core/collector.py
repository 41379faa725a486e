"""Data collection strategies for PureTreeLib.

DataCollectors define what information to extract from nodes during
traversal, so the same walk can produce payloads, index paths, or subtree
statistics depending on what the caller asked for.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Tuple

from .node import TreeNode


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    @abstractmethod
    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Any:
        """Collect data from a node.

        Args:
            node: The node to collect data from
            depth: Current depth in traversal
            index_path: Child indices from the traversal root to node

        Returns:
            Collected data (type depends on collector)
        """
        pass


class NodeCollector(DataCollector):
    """Collects the node itself."""

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> TreeNode:
        return node


class PayloadCollector(DataCollector):
    """Collects only node payloads."""

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Any:
        return node.payload


class PathCollector(DataCollector):
    """Collects the index path from the traversal root to each node.

    Paths can be fed back into ``locate`` or ``transform`` on the root the
    traversal started from.
    """

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Tuple[int, ...]:
        return index_path


class ChildCountCollector(DataCollector):
    """Collects nodes with child count information."""

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Dict[str, Any]:
        return {
            'payload': node.payload,
            'depth': depth,
            'child_count': node.child_count(),
            'is_leaf': node.is_leaf(),
        }


class SubtreeStatsCollector(DataCollector):
    """Collects the memoized size and height of each visited subtree.

    Because those values are cached on the nodes, asking again on a new
    tree version only computes them for the nodes that version rebuilt.
    """

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Dict[str, Any]:
        return {
            'payload': node.payload,
            'depth': depth,
            'size': node.size,
            'height': node.height,
        }


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self, collect_func: Callable[[TreeNode, int, Tuple[int, ...]], Any]):
        """Initialize with custom collection function.

        Args:
            collect_func: Function(node, depth, index_path) -> Any
        """
        self.collect_func = collect_func

    def collect(self, node: TreeNode, depth: int, index_path: Tuple[int, ...]) -> Any:
        return self.collect_func(node, depth, index_path)
