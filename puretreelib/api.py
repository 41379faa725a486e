"""High-level API for PureTreeLib.

This module provides simple, functional interfaces for common read-only
operations over a persistent tree. These functions wrap ExecutionPlan and
TraversalConfig for ease of use in simple cases.
"""

from typing import Iterator, Optional, Callable, Any, Union, Tuple, Dict

from .core.node import TreeNode
from .config import (
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    DepthConfig,
    FilterConfig,
)
from .planning import ExecutionPlan


def traverse_tree(
    root: TreeNode,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.BREADTH_FIRST,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[TreeNode], bool]] = None,
    exclude_filter: Optional[Callable[[TreeNode], bool]] = None,
    **kwargs
) -> Iterator[TreeNode]:
    """Simple interface for tree traversal.

    Args:
        root: Starting node for traversal
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to traverse
        min_depth: Minimum depth before yielding nodes
        include_filter: Function to determine if node should be included
        exclude_filter: Function to determine if node should be excluded
        **kwargs: Additional config options (e.g. max_nodes, prune_on_exclude)

    Yields:
        TreeNode instances that match the criteria

    Example:
        >>> for node in traverse_tree(root, "dfs_pre", max_depth=1):
        ...     print(node.payload)
    """
    config = _build_config_from_kwargs(
        strategy=strategy,
        max_depth=max_depth,
        min_depth=min_depth,
        include_filter=include_filter,
        exclude_filter=exclude_filter,
        **kwargs
    )

    for node, _ in ExecutionPlan(config).execute(root):
        yield node


def collect_tree_data(
    root: TreeNode,
    data_requirement: DataRequirement = DataRequirement.PAYLOAD,
    **kwargs
) -> Iterator[Tuple[TreeNode, Any]]:
    """Traverse tree and collect specified data.

    Args:
        root: Starting node for traversal
        data_requirement: What data to collect
        **kwargs: Additional traversal options (see traverse_tree)

    Yields:
        Tuples of (node, collected_data)
    """
    config = _build_config_from_kwargs(data_requirement=data_requirement, **kwargs)
    yield from ExecutionPlan(config).execute(root)


def count_nodes(root: TreeNode, **kwargs) -> int:
    """Count nodes in a tree that match criteria.

    Without criteria this equals ``root.size``.
    """
    count = 0
    for _ in traverse_tree(root, **kwargs):
        count += 1
    return count


def get_tree_paths(root: TreeNode, **kwargs) -> Iterator[Tuple[int, ...]]:
    """Get the index path from root to each node.

    The root itself is reported as the empty path. Each path satisfies
    ``root.locate(path) is node`` for the node it was reported for.
    """
    kwargs['data_requirement'] = DataRequirement.PATH

    for _, path in collect_tree_data(root, **kwargs):
        yield path


def get_leaf_nodes(root: TreeNode, **kwargs) -> Iterator[TreeNode]:
    """Get all leaf nodes in a tree."""
    for node in traverse_tree(root, **kwargs):
        if node.is_leaf():
            yield node


def get_tree_stats(root: TreeNode, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Example:
        >>> stats = get_tree_stats(root)
        >>> print(f"Total nodes: {stats['total_nodes']}")
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    reported = set()

    kwargs['data_requirement'] = DataRequirement.PATH
    for node, index_path in collect_tree_data(root, **kwargs):
        depth = len(index_path)
        reported.add(index_path)
        stats['total_nodes'] += 1

        if node.is_leaf():
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    # Only edges with both ends reported count, so a depth cut or a filter
    # does not leave parents whose children were never seen
    parents = [path[:-1] for path in reported if path and path[:-1] in reported]
    distinct_parents = len(set(parents))
    stats['average_branching'] = (
        len(parents) / distinct_parents if distinct_parents > 0 else 0
    )

    return stats


# Helper functions

def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum."""
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_map = {
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
        'level': TraversalStrategy.LEVEL_ORDER,
        'level_order': TraversalStrategy.LEVEL_ORDER,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown traversal strategy: {strategy}")


def _build_config_from_kwargs(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments."""
    config = TraversalConfig(depth=DepthConfig(), filter=FilterConfig())

    if 'strategy' in kwargs:
        config.strategy = _parse_strategy(kwargs.pop('strategy'))

    if 'max_depth' in kwargs:
        config.depth.max_depth = kwargs.pop('max_depth')

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    if 'prune_on_exclude' in kwargs:
        config.filter.prune_on_exclude = kwargs.pop('prune_on_exclude')

    if 'data_requirement' in kwargs:
        config.data_requirements = kwargs.pop('data_requirement')

    # Apply any remaining kwargs directly
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise TypeError(f"Unknown traversal option: {key}")
        setattr(config, key, value)

    return config
