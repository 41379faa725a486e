"""Traversal context carried through ``TreeNode.fmap_cont``.

A TraversalContext is the bag of positional facts a callback receives for
the node it is looking at: how deep it is, which ancestors lead to it, and
which child indices were taken to get there. Contexts are frozen; moving
down the tree produces a new context.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode


_NO_EXTRA: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class TraversalContext:
    """Position of a node within one traversal.

    Attributes:
        depth: Distance from the node the traversal started at (0 there)
        path: Ancestor nodes, traversal root first, excluding the node
        parent: The node this one was reached from (None at the start)
        children: Optional override for the children to descend into.
            When None the node's own children are used.
        index_path: Child indices from the traversal root. Each index is
            a position in the sequence actually descended into, so the
            path can be passed to ``locate`` or ``transform`` on that root
            only when no ``children`` override was used along the way.
        extra: Caller-defined values, inherited by every descendant
    """

    depth: int = 0
    path: Tuple['TreeNode', ...] = ()
    parent: Optional['TreeNode'] = None
    children: Optional[Sequence['TreeNode']] = None
    index_path: Tuple[int, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=lambda: _NO_EXTRA)

    @classmethod
    def create(cls, **fields: Any) -> 'TraversalContext':
        """Build a starting context; unknown names go into ``extra``."""
        return cls().with_fields(**fields)

    def with_fields(self, **fields: Any) -> 'TraversalContext':
        """Return a copy with fields replaced and unknown names merged into ``extra``."""
        known = {k: v for k, v in fields.items() if k in _FIELDS}
        unknown = {k: v for k, v in fields.items() if k not in _FIELDS}
        result = replace(self, **known) if known else self
        if unknown:
            result = replace(
                result, extra=MappingProxyType({**result.extra, **unknown})
            )
        return result

    def descend(self, node: 'TreeNode', index: int, **overrides: Any) -> 'TraversalContext':
        """Build the context for child ``index`` of ``node``.

        Args:
            node: The node whose child is about to be visited
            index: Position of the child in the sequence being descended
            **overrides: Field replacements applied after the defaults.
                Unknown names are merged into ``extra``.

        Returns:
            A new context one level deeper
        """
        child = replace(
            self,
            depth=self.depth + 1,
            path=self.path + (node,),
            parent=node,
            children=None,
            index_path=self.index_path + (index,),
        )
        return child.with_fields(**overrides)


_FIELDS = frozenset(
    ("depth", "path", "parent", "children", "index_path", "extra")
)
