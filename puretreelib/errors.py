"""Exception hierarchy for PureTreeLib.

Every error the library raises derives from PureTreeError. The concrete
classes also derive from the matching builtin (IndexError, TypeError,
ValueError) so callers that only know the builtins still catch them.

All of these are local precondition failures. Nothing inside the library
catches them; a failed call leaves every existing tree untouched because
trees are never modified in place.
"""

from typing import Any, Optional


class PureTreeError(Exception):
    """Base class for all PureTreeLib errors."""
    pass


class IndexOutOfRange(PureTreeError, IndexError):
    """Raised when a child index is outside the bound for an operation.

    Attributes:
        index: The index that was supplied
        bound: Exclusive upper bound that applied (child_count, or
            child_count + 1 for insertion)
        operation: Name of the operation that rejected the index
    """

    def __init__(self, index: Any, bound: int, operation: str = "get_child_at"):
        self.index = index
        self.bound = bound
        self.operation = operation
        super().__init__(
            f"{operation}: index {index!r} out of range [0, {bound})"
        )


class TypeMismatch(PureTreeError, TypeError):
    """Raised when a supplied child is not a node of the parent's family.

    Attributes:
        value: The rejected value
        expected: The class the value had to be an instance of
    """

    def __init__(self, value: Any, expected: type):
        self.value = value
        self.expected = expected
        super().__init__(
            f"Child parameter must be a {expected.__name__} "
            f"not ({value!r})"
        )


class MissingOperation(PureTreeError, ValueError):
    """Raised when a traversal or transform has no usable callback."""

    def __init__(self, operation: Any = None, message: Optional[str] = None):
        self.operation = operation
        if message is None:
            if operation is None:
                message = "Cannot traverse without traversal function"
            else:
                message = (
                    f"Traversal function must be callable, not: {operation!r}"
                )
        super().__init__(message)


class InvalidConfigError(PureTreeError, ValueError):
    """Raised when a TraversalConfig cannot be turned into a plan."""
    pass
