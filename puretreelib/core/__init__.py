"""Core abstractions for PureTreeLib.

This package contains the persistent node type and the traversal
machinery that walks it.
"""

from .context import TraversalContext
from .node import TreeNode, EditOperation
from .traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    NodeCollector,
    PayloadCollector,
    PathCollector,
    ChildCountCollector,
    SubtreeStatsCollector,
    CustomCollector,
)

__all__ = [
    "TraversalContext",
    "TreeNode",
    "EditOperation",
    "TreeTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    "DataCollector",
    "NodeCollector",
    "PayloadCollector",
    "PathCollector",
    "ChildCountCollector",
    "SubtreeStatsCollector",
    "CustomCollector",
]
