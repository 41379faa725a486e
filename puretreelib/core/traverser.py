"""Tree traversal strategies for PureTreeLib.

Traversers implement different orders for walking a persistent tree. They
read children straight off the immutable nodes, so a traversal never
allocates tree nodes and can run against any version of a tree while other
versions are being derived.

A node instance shared at several positions is reported once per position.
Immutable nodes cannot form cycles, so no visited set is kept.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional, Tuple

from .node import TreeNode


# (node, depth, index path from the traversal root)
Position = Tuple[TreeNode, int, Tuple[int, ...]]


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies.

    Traversers implement the algorithms for walking through trees in
    different orders (breadth-first, depth-first, etc.).
    """

    def __init__(self, explore: Optional[Callable[[TreeNode], bool]] = None):
        """Initialize traverser.

        Args:
            explore: Optional predicate; children of nodes for which it
                returns False are not walked
        """
        self.explore = explore

    @abstractmethod
    def walk(self,
             root: TreeNode,
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Position]:
        """Traverse the tree starting from root, reporting positions.

        Args:
            root: Starting node for traversal
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (node, depth, index_path) relative to root
        """
        pass

    def traverse(self,
                 root: TreeNode,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[TreeNode, int]]:
        """Traverse the tree starting from root.

        Yields:
            Tuples of (node, depth) where depth is relative to root
        """
        for node, depth, _ in self.walk(root, max_depth, min_depth):
            yield (node, depth)

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, node: TreeNode, depth: int, max_depth: Optional[int]) -> bool:
        if node.is_leaf():
            return False
        if max_depth is not None and depth >= max_depth:
            return False
        if self.explore is not None and not self.explore(node):
            return False
        return True


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first (level-order) traversal strategy.

    Visits all nodes at depth N before visiting nodes at depth N+1.
    """

    def walk(self,
             root: TreeNode,
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Position]:
        queue: Deque[Position] = deque([(root, 0, ())])

        while queue:
            node, depth, index_path = queue.popleft()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth, index_path)

            if self._should_explore(node, depth, max_depth):
                for i, child in enumerate(node.children):
                    queue.append((child, depth + 1, index_path + (i,)))


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order traversal strategy.

    Visits parent before children. Same order as ``TreeNode.visit``.
    """

    def walk(self,
             root: TreeNode,
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Position]:
        stack: List[Position] = [(root, 0, ())]

        while stack:
            node, depth, index_path = stack.pop()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth, index_path)

            if self._should_explore(node, depth, max_depth):
                # Reversed so the first child is popped first
                for i in range(node.child_count() - 1, -1, -1):
                    stack.append((node.children[i], depth + 1, index_path + (i,)))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Depth-first post-order traversal strategy.

    Visits children before parent, which suits bottom-up aggregation.
    """

    def walk(self,
             root: TreeNode,
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Position]:
        # Entries are (position, children_done)
        stack: List[Tuple[Position, bool]] = [((root, 0, ()), False)]

        while stack:
            position, children_done = stack.pop()
            node, depth, index_path = position

            if children_done:
                if self._should_yield(depth, min_depth, max_depth):
                    yield position
                continue

            stack.append((position, True))
            if self._should_explore(node, depth, max_depth):
                for i in range(node.child_count() - 1, -1, -1):
                    stack.append(((node.children[i], depth + 1, index_path + (i,)), False))


class LevelOrderTraverser(TreeTraverser):
    """Level-order traversal with level grouping.

    Yields the same order as breadth-first, but builds each level in full
    before moving on. ``levels()`` exposes the grouping directly.
    """

    def levels(self,
               root: TreeNode,
               max_depth: Optional[int] = None) -> Iterator[List[Position]]:
        """Yield one list of positions per depth, starting at root's."""
        current_level: List[Position] = [(root, 0, ())]
        current_depth = 0

        while current_level and (max_depth is None or current_depth <= max_depth):
            yield current_level

            next_level: List[Position] = []
            for node, depth, index_path in current_level:
                if self._should_explore(node, depth, max_depth):
                    for i, child in enumerate(node.children):
                        next_level.append((child, depth + 1, index_path + (i,)))

            current_level = next_level
            current_depth += 1

    def walk(self,
             root: TreeNode,
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Position]:
        for level in self.levels(root, max_depth):
            for position in level:
                if self._should_yield(position[1], min_depth, max_depth):
                    yield position


def create_traverser(strategy: str,
                     explore: Optional[Callable[[TreeNode], bool]] = None) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (bfs, dfs_pre, dfs_post, level)
        explore: Optional pruning predicate passed to the traverser

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'bfs': BreadthFirstTraverser,
        'breadth_first': BreadthFirstTraverser,
        'dfs': DepthFirstPreOrderTraverser,
        'dfs_pre': DepthFirstPreOrderTraverser,
        'depth_first_pre': DepthFirstPreOrderTraverser,
        'dfs_post': DepthFirstPostOrderTraverser,
        'depth_first_post': DepthFirstPostOrderTraverser,
        'level': LevelOrderTraverser,
        'level_order': LevelOrderTraverser,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](explore)
