"""Chain traversal: rendering and lookups over mixed error chains.

All functions accept any exception. Native ChainError links are followed
through their structural cause; any other exception is followed through
__cause__, the link set by ``raise ... from ...``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from errchain.node import ChainError, ClientMessageState

if TYPE_CHECKING:
    from collections.abc import Iterator

_T = TypeVar("_T", bound=BaseException)


def unwrap(err: BaseException) -> BaseException | None:
    """Return the immediate cause of an exception.

    Implicit context (__context__) is not followed.
    """
    if isinstance(err, ChainError):
        return err.cause
    return err.__cause__


def iter_chain(err: BaseException) -> Iterator[BaseException]:
    """Iterate over an exception and its causes, outermost first.

    The walk stops at the first exception seen twice, so a cycle built by
    assigning __cause__ by hand ends the iteration.
    """
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = unwrap(current)


def render_message(err: BaseException) -> str:
    """Render the full chain text of an exception.

    Identical to str(err): foreign exceptions render as their own text,
    ChainError nodes as "operation: ..." prefixes ending in the root message.
    """
    return str(err)


def error_code(err: BaseException) -> str:
    """Return the outermost non-empty code in the chain, or ""."""
    for link in iter_chain(err):
        if isinstance(link, ChainError) and link.code:
            return link.code
    return ""


def client_message(err: BaseException) -> str:
    """Return the outermost definitive client message in the chain.

    A set message is returned as is; a cleared one yields "" and hides any
    message deeper in the chain. Returns "" when no node decides.
    """
    for link in iter_chain(err):
        if not isinstance(link, ChainError):
            continue
        msg = link.client_message
        if msg.state is ClientMessageState.SET:
            return msg.text
        if msg.state is ClientMessageState.CLEARED:
            return ""
    return ""


def find_cause(err: BaseException, exc_type: type[_T]) -> _T | None:
    """Return the first exception in the chain that is an exc_type.

    Args:
        err: Outermost exception
        exc_type: Exception class to look for

    Returns:
        Matching exception, or None
    """
    for link in iter_chain(err):
        if isinstance(link, exc_type):
            return link
    return None


def operations(err: BaseException) -> list[str]:
    """Operation labels of the ChainError nodes in the chain, outermost first."""
    return [link.operation for link in iter_chain(err) if isinstance(link, ChainError)]
