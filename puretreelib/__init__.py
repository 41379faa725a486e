"""PureTreeLib - Persistent n-ary trees with structural sharing.

Every edit returns a new tree; the original stays valid, and the parts an
edit did not touch are shared between both versions. An edit at depth d
allocates at most d + 1 new nodes, whatever the size of the tree.

    from puretreelib import TreeNode

    root = TreeNode(1, [TreeNode(1.1), TreeNode(1.2)])
    newer = root.transform([0], TreeNode.add_child, TreeNode("x"))
    assert newer.get_child_at(1) is root.get_child_at(1)
"""

__version__ = "0.1.0"

from .errors import (
    PureTreeError,
    IndexOutOfRange,
    TypeMismatch,
    MissingOperation,
    InvalidConfigError,
)
from .core import (
    TraversalContext,
    TreeNode,
    EditOperation,
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
    DataCollector,
    NodeCollector,
    PayloadCollector,
    PathCollector,
    ChildCountCollector,
    SubtreeStatsCollector,
    CustomCollector,
)
from .config import (
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    FilterConfig,
    DepthConfig,
)
from .planning import ExecutionPlan
from .api import (
    traverse_tree,
    collect_tree_data,
    count_nodes,
    get_tree_paths,
    get_leaf_nodes,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Errors
    "PureTreeError",
    "IndexOutOfRange",
    "TypeMismatch",
    "MissingOperation",
    "InvalidConfigError",
    # Core
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
    # Config
    "TraversalConfig",
    "TraversalStrategy",
    "DataRequirement",
    "FilterConfig",
    "DepthConfig",
    "ExecutionPlan",
    # API
    "traverse_tree",
    "collect_tree_data",
    "count_nodes",
    "get_tree_paths",
    "get_leaf_nodes",
    "get_tree_stats",
]
