"""Error nodes: the links of an error chain.

Provides the ChainError exception type and its constructors:
- new: a root node carrying the base message and an optional code
- wrap: a node that forwards an existing exception (native or foreign)
- wrapping: context manager / decorator that wraps escaping exceptions
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

_E = TypeVar("_E", bound="ChainError")


class ClientMessageState(str, Enum):
    """Client message states."""

    UNSET = "unset"
    """Not mentioned at this node; inherit from the cause."""

    SET = "set"
    """This node's client message is the given text."""

    CLEARED = "cleared"
    """This node explicitly has no client message."""


@dataclass(frozen=True)
class ClientMessage:
    """End-user-safe message attached to a single node.

    Tagged by state so that an explicitly cleared message can be told apart
    from one that was never set.
    """

    state: ClientMessageState = ClientMessageState.UNSET
    """Which of the three states this value is in."""

    text: str = ""
    """Message text; only meaningful when state is SET."""

    @classmethod
    def unset(cls) -> ClientMessage:
        return _UNSET

    @classmethod
    def of(cls, text: str) -> ClientMessage:
        return cls(ClientMessageState.SET, text)

    @classmethod
    def cleared(cls) -> ClientMessage:
        return _CLEARED

    @property
    def is_definitive(self) -> bool:
        """Whether a lookup should stop at this value."""
        return self.state is not ClientMessageState.UNSET


_UNSET = ClientMessage()
_CLEARED = ClientMessage(ClientMessageState.CLEARED)


class ChainError(Exception):
    """One link in an error chain.

    A node names the operation that produced or forwarded the error and may
    carry a machine-readable code and a client message. Root nodes hold the
    base message; wrapping nodes take their text from their cause.

    Prefer the new() and wrap() constructors over calling the class directly.
    Mutators change the node in place and return it; call them before the
    node is shared with other threads.

    Attributes:
        operation: Call site or logical step label
        code: Machine-readable code at this level, or None
        message: Base description (root nodes only)
        annotation: Parenthetical context given to wrap(), or None
        client_message: Tri-state end-user-safe message
        cause: Wrapped exception, or None for a root node
    """

    def __init__(
        self,
        operation: str,
        message: str = "",
        *,
        code: str | None = None,
        annotation: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if cause is not None and not isinstance(cause, BaseException):
            raise TypeError(
                f"cause must be an exception, got {type(cause).__name__}"
            )
        super().__init__(operation, message)
        self.operation = operation
        self.message = message
        self.code = code or None
        self.annotation = annotation or None
        self.client_message = ClientMessage.unset()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def new(cls: type[_E], operation: str, code: str | None, message: str) -> _E:
        """Create a root node.

        Args:
            operation: Operation label
            code: Machine-readable code; empty or None for no code
            message: Base description

        Returns:
            Node with no cause
        """
        return cls(operation, message, code=code)

    @classmethod
    def wrap(
        cls: type[_E],
        operation: str,
        cause: BaseException,
        *annotation: str,
    ) -> _E:
        """Create a node forwarding an existing exception.

        Args:
            operation: Operation label
            cause: Exception to wrap, native or foreign
            *annotation: Optional context; only the first value is used

        Returns:
            Node whose text comes from its cause

        Raises:
            TypeError: If cause is None or not an exception
        """
        if cause is None:
            raise TypeError(f"wrap({operation!r}) requires a cause, got None")
        return cls(
            operation,
            code=None,
            annotation=annotation[0] if annotation else None,
            cause=cause,
        )

    def set_code(self: _E, code: str | None) -> _E:
        """Set the code at this node."""
        self.code = code or None
        return self

    def set_client_message(self: _E, text: str) -> _E:
        """Set the client message at this node."""
        self.client_message = ClientMessage.of(text)
        return self

    def clear_client_message(self: _E) -> _E:
        """Mask any client message further down the chain."""
        self.client_message = ClientMessage.cleared()
        return self

    def __str__(self) -> str:
        # Native links are rendered in a loop; the first foreign cause ends it.
        prefix: list[str] = []
        node: ChainError = self
        while True:
            if node.cause is None:
                tail = f"{node.operation}: {node.message}"
                if node.code:
                    tail = f"{tail} [{node.code}]"
                break
            prefix.append(f"{node.operation}: ")
            if node.annotation:
                prefix.append(f"({node.annotation}): ")
            if not isinstance(node.cause, ChainError):
                tail = str(node.cause)
                break
            node = node.cause
        return "".join(prefix) + tail

    def __repr__(self) -> str:
        parts = [f"operation={self.operation!r}"]
        if self.code:
            parts.append(f"code={self.code!r}")
        if self.message:
            parts.append(f"message={self.message!r}")
        if self.annotation:
            parts.append(f"annotation={self.annotation!r}")
        if self.cause is not None:
            parts.append(f"cause={self.cause!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


def new(operation: str, code: str | None, message: str) -> ChainError:
    """Create a root ChainError. See ChainError.new()."""
    return ChainError.new(operation, code, message)


def wrap(operation: str, cause: BaseException, *annotation: str) -> ChainError:
    """Wrap an exception in a ChainError. See ChainError.wrap()."""
    return ChainError.wrap(operation, cause, *annotation)


@contextmanager
def wrapping(
    operation: str,
    *annotation: str,
    code: str | None = None,
) -> Iterator[None]:
    """Wrap any exception escaping the block in a ChainError.

    Usable as a context manager or as a decorator on a regular function.

    Example:
        >>> with wrapping("UserRepo.get", code=CODE_DATABASE):
        ...     cursor.execute(query)

    Args:
        operation: Operation label for the wrapping node
        *annotation: Optional context; only the first value is used
        code: Optional code set on the wrapping node
    """
    try:
        yield
    except Exception as exc:
        err = wrap(operation, exc, *annotation)
        if code:
            err.set_code(code)
        raise err from exc
