"""Root pytest fixtures for errchain tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from errchain import CODE_INTERNAL, ChainError, new, wrap


def _foreign_wrap(err: BaseException) -> RuntimeError:
    """Wrap err the way unrelated code does: a plain exception raised from it."""
    try:
        raise RuntimeError(f"not encouraged but compatible: {err}") from err
    except RuntimeError as wrapped:
        return wrapped


@pytest.fixture
def foreign_wrap() -> Callable[[BaseException], RuntimeError]:
    """Factory wrapping an exception in a foreign RuntimeError."""
    return _foreign_wrap


@pytest.fixture
def inner_error() -> ChainError:
    """Root node used as the innermost link of most chains."""
    return new("Inner", CODE_INTERNAL, "cannot do something")


@pytest.fixture
def mixed_chain(inner_error: ChainError) -> ChainError:
    """Chain Outer2 -> foreign RuntimeError -> Outer -> Inner."""
    outer = wrap("Outer", inner_error)
    return wrap("Outer2", _foreign_wrap(outer))
