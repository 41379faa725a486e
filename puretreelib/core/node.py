"""Persistent n-ary tree node for PureTreeLib.

A TreeNode holds a payload and an ordered tuple of child nodes. Nodes are
never modified after construction: every editing method returns a new
node, and subtrees that an edit does not touch are shared by reference
between the old and the new tree. Many tree versions can therefore
coexist cheaply, which suits snapshot or versioned hierarchies.

There are no parent links. A single node instance may be reachable from
any number of parents, in one tree or across versions.

Example:
    >>> leaf = TreeNode("b")
    >>> root = TreeNode("a", [leaf])
    >>> new_root = root.transform([0], TreeNode.set_payload, "B")
    >>> root.get_child_at(0).payload, new_root.get_child_at(0).payload
    ('b', 'B')
"""

import logging
import operator
from enum import Enum
from functools import cached_property
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..errors import IndexOutOfRange, MissingOperation, TypeMismatch
from ..logging import get_logger
from .context import TraversalContext


logger = get_logger("core.node")

IndexPath = Sequence[int]


class TreeNode:
    """Immutable tree node with structural-sharing edits.

    Identity is object identity: two nodes built from equal payloads are
    still different nodes. Editing methods rely on this to detect no-op
    edits without comparing subtrees.

    ``size`` and ``height`` are computed on first access and memoized on
    the instance. The children tuple never changes, so the memo never
    needs invalidating. Recomputation is deterministic, so two threads
    racing on the first read store the same value.

    Subclasses that add constructor arguments should extend
    ``_derive_fields`` so ``derive`` carries them over.
    """

    def __init__(self, payload: Any = None, children: Iterable['TreeNode'] = ()):
        """Create a node.

        Args:
            payload: Arbitrary value carried by the node
            children: Child nodes in order. Captured as a tuple; the
                child nodes themselves are shared, not copied.

        Raises:
            TypeMismatch: If a child is not an instance of this node's class
        """
        children = tuple(children) if children is not None else ()
        for child in children:
            self._check_child(child)
        object.__setattr__(self, '_payload', payload)
        object.__setattr__(self, '_children', children)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(payload={self._payload!r}, "
            f"child_count={len(self._children)})"
        )

    # Read surface

    @property
    def payload(self) -> Any:
        """The value carried by this node."""
        return self._payload

    @property
    def children(self) -> Tuple['TreeNode', ...]:
        """The ordered children of this node."""
        return self._children

    def get_child_at(self, index: int) -> 'TreeNode':
        """Return the child at ``index`` (zero-based).

        Raises:
            IndexOutOfRange: If index is not within [0, child_count())
        """
        return self._child_at(index, "get_child_at")

    def child_count(self) -> int:
        """Number of direct children."""
        return len(self._children)

    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._children

    @cached_property
    def size(self) -> int:
        """Number of nodes in this subtree, this node included."""
        return self._memoize_bottom_up('size', _size_from_children)

    @cached_property
    def height(self) -> int:
        """Length of the longest downward path; 0 for a leaf."""
        return self._memoize_bottom_up('height', _height_from_children)

    def _memoize_bottom_up(self, name: str,
                           combine: Callable[[List[int]], int]) -> int:
        """Fill the ``name`` memo of every uncached node below self.

        Works from an explicit stack, so tree height is not bounded by the
        interpreter's recursion limit. Subtrees that already carry the memo,
        shared ones included, are not walked again.
        """
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            memo = node.__dict__
            if name in memo:
                continue
            if expanded:
                memo[name] = combine([child.__dict__[name] for child in node._children])
            else:
                stack.append((node, True))
                stack.extend(
                    (child, False) for child in node._children
                    if name not in child.__dict__
                )
        return self.__dict__[name]

    def has_size(self) -> bool:
        """Whether ``size`` has already been computed for this instance."""
        return 'size' in self.__dict__

    def has_height(self) -> bool:
        """Whether ``height`` has already been computed for this instance."""
        return 'height' in self.__dict__

    # Structural editing. Every method returns a node and leaves self alone.

    def _derive_fields(self) -> Dict[str, Any]:
        return {'payload': self._payload, 'children': self._children}

    def derive(self, **overrides: Any) -> 'TreeNode':
        """Return a new node copying self except for ``overrides``.

        This is the single primitive all edits go through. The new node
        starts with empty ``size``/``height`` memos.

        Args:
            **overrides: Replacement values, e.g. ``payload=`` or ``children=``

        Raises:
            TypeError: If an override names an unknown field
        """
        fields = self._derive_fields()
        unknown = set(overrides).difference(fields)
        if unknown:
            raise TypeError(
                f"{self.__class__.__name__}.derive() got unexpected "
                f"field(s): {', '.join(sorted(unknown))}"
            )
        fields.update(overrides)
        return type(self)(**fields)

    def set_payload(self, payload: Any) -> 'TreeNode':
        """Return a node with ``payload`` and the same children."""
        if payload is self._payload:
            return self
        return self.derive(payload=payload)

    def add_children(self, *children: 'TreeNode') -> 'TreeNode':
        """Return a node with ``children`` appended.

        All arguments are checked before anything is built, so a bad child
        means no new node at all.

        Raises:
            TypeMismatch: If any argument is not a node of this family
        """
        for child in children:
            self._check_child(child)
        if not children:
            return self
        return self.derive(children=self._children + children)

    def add_child(self, child: 'TreeNode') -> 'TreeNode':
        """Return a node with ``child`` appended."""
        return self.add_children(child)

    def set_child_at(self, index: int, child: 'TreeNode') -> 'TreeNode':
        """Return a node whose child at ``index`` is ``child``.

        Writing one past the end is an error, not an append. If ``child``
        is already at that position, self is returned.

        Raises:
            TypeMismatch: If child is not a node of this family
            IndexOutOfRange: If index is not within [0, child_count())
        """
        self._check_child(child)
        i = self._check_index(index, len(self._children), "set_child_at")
        if self._children[i] is child:
            return self
        children = list(self._children)
        children[i] = child
        return self.derive(children=tuple(children))

    def insert_child_at(self, index: int, child: 'TreeNode') -> 'TreeNode':
        """Return a node with ``child`` inserted before position ``index``.

        ``index == child_count()`` appends.

        Raises:
            TypeMismatch: If child is not a node of this family
            IndexOutOfRange: If index is not within [0, child_count()]
        """
        self._check_child(child)
        i = self._check_index(index, len(self._children) + 1, "insert_child_at")
        children = self._children[:i] + (child,) + self._children[i:]
        return self.derive(children=children)

    def remove_child_at(self, index: int) -> 'TreeNode':
        """Return a node without the child at ``index``.

        Raises:
            IndexOutOfRange: If index is not within [0, child_count())
        """
        i = self._check_index(index, len(self._children), "remove_child_at")
        children = self._children[:i] + self._children[i + 1:]
        return self.derive(children=children)

    def replace(self, replacement: Any) -> Any:
        """Return ``replacement``. Use with ``transform`` to swap a node wholesale."""
        return replacement

    # Navigation and traversal

    def locate(self, path: IndexPath) -> 'TreeNode':
        """Follow child indices from this node.

        An empty path returns self.

        Raises:
            IndexOutOfRange: If any index along the path is invalid
        """
        node = self
        for index in path:
            node = node._child_at(index, "locate")
        return node

    def fmap_cont(self,
                  callback: Callable[..., Any],
                  context: Optional[TraversalContext] = None,
                  **context_fields: Any) -> Any:
        """Call ``callback(node, cont, context)`` and return its result.

        ``cont`` decides whether and how to go deeper. Calling
        ``cont(children=None, callback=None, **overrides)`` runs the same
        protocol on each child (or on the ``children`` given, or on
        ``context.children`` when that override is set) and returns the
        list of their results in order. ``callback`` swaps the callback
        used below this point; other keyword arguments override fields of
        the child contexts. Not calling ``cont`` skips the subtree.

        Below a ``children`` override, ``context.index_path`` counts
        positions in the override, not in the node's own children.
        Each level of descent is a nested call, so for very tall trees
        prefer ``visit`` or a traverser.

        Args:
            callback: Function of (node, cont, context)
            context: Starting context (defaults to depth 0, empty path)
            **context_fields: Field overrides for the starting context;
                unknown names are stored in ``context.extra``

        Raises:
            MissingOperation: If callback is None or not callable

        Example:
            >>> root.fmap_cont(lambda node, cont, ctx: 1 + sum(cont()))
        """
        _require_callable(callback)
        if context is None:
            context = TraversalContext.create(**context_fields)
        elif context_fields:
            context = context.with_fields(**context_fields)
        return self._fmap_cont(callback, context)

    def _fmap_cont(self, callback: Callable[..., Any], context: TraversalContext) -> Any:
        def cont(children: Optional[Sequence['TreeNode']] = None,
                 callback: Optional[Callable[..., Any]] = None,
                 **overrides: Any) -> List[Any]:
            if callback is None:
                callback = outer_callback
            else:
                _require_callable(callback)
            if children is None:
                children = context.children if context.children is not None else self._children
            results = []
            for i, child in enumerate(children):
                results.append(child._fmap_cont(callback, context.descend(self, i, **overrides)))
            return results

        outer_callback = callback
        return callback(self, cont, context)

    def visit(self, f: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Call ``f(node, *args, **kwargs)`` on self and every descendant.

        Parents are visited before their children, children in order.

        Raises:
            MissingOperation: If f is None or not callable
        """
        _require_callable(f)
        for node in _pre_order((self,)):
            f(node, *args, **kwargs)

    def traverse(self, f: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Like ``visit`` but for descendants only; self is not passed to f."""
        _require_callable(f)
        for node in _pre_order(self._children):
            f(node, *args, **kwargs)

    def transform(self, path: IndexPath, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Apply ``method`` at ``path`` and rebuild only the nodes above it.

        ``method(located, *args, **kwargs)`` produces the replacement for
        the located node. Every ancestor on the path is then re-derived
        with the new child, while all other subtrees are shared. If the
        replacement is the located node itself, nothing is rebuilt and
        self is returned.

        ``method`` is any callable taking the node first: an unbound
        method such as ``TreeNode.insert_child_at``, an ``EditOperation``
        member, or a plain function.

        Example:
            >>> new = root.transform([1, 3], TreeNode.insert_child_at, 3, child)

        Raises:
            MissingOperation: If method is None or not callable
            IndexOutOfRange: If the path does not exist
            TypeMismatch: If the replacement is not a node and is not at the root
        """
        _require_callable(method)
        path = tuple(path)
        result = self._transform(path, method, args, kwargs)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "transform path=%s method=%s shared=%s",
                list(path), getattr(method, '__name__', method), result is self,
            )
        return result

    def _transform(self, path: Tuple[int, ...],
                   method: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        # lineage[k] is the node reached after k steps along path
        lineage = [self]
        for index in path:
            lineage.append(lineage[-1]._child_at(index, "transform"))

        result = method(lineage[-1], *args, **kwargs)
        for level in range(len(path) - 1, -1, -1):
            if result is lineage[level + 1]:
                return self
            result = lineage[level].set_child_at(path[level], result)
        return result

    # Helpers

    def _child_at(self, index: int, operation: str) -> 'TreeNode':
        return self._children[self._check_index(index, len(self._children), operation)]

    @staticmethod
    def _check_index(index: int, bound: int, operation: str) -> int:
        i = operator.index(index)
        if not 0 <= i < bound:
            raise IndexOutOfRange(index, bound, operation)
        return i

    def _check_child(self, child: Any) -> None:
        if not isinstance(child, type(self)):
            raise TypeMismatch(child, type(self))


class EditOperation(Enum):
    """Named structural edits usable as the ``method`` of ``transform``.

    A member dispatches to the method of the same name on the located node,
    so subclasses that override an edit get their own version.

    Example:
        >>> root.transform([0], EditOperation.REMOVE_CHILD_AT, 2)
    """
    SET_PAYLOAD = "set_payload"
    ADD_CHILDREN = "add_children"
    ADD_CHILD = "add_child"
    SET_CHILD_AT = "set_child_at"
    INSERT_CHILD_AT = "insert_child_at"
    REMOVE_CHILD_AT = "remove_child_at"
    REPLACE = "replace"

    def __call__(self, node: TreeNode, *args: Any, **kwargs: Any) -> Any:
        return getattr(node, self.value)(*args, **kwargs)


def _pre_order(nodes: Sequence[TreeNode]) -> Iterator[TreeNode]:
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node._children))


def _size_from_children(sizes: List[int]) -> int:
    return 1 + sum(sizes)


def _height_from_children(heights: List[int]) -> int:
    return 1 + max(heights) if heights else 0


def _require_callable(f: Any) -> None:
    if f is None or not callable(f):
        raise MissingOperation(f)
