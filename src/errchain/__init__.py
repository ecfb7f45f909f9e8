"""errchain: structured, composable error chains.

Errors carry an operation label, an optional machine-readable code and an
optional end-user-safe client message, and wrap exceptions from any source.
"""
from __future__ import annotations

from errchain.codes import CODE_DATABASE, CODE_INTERNAL, CODE_UNEXPECTED
from errchain.node import (
    ChainError,
    ClientMessage,
    ClientMessageState,
    new,
    wrap,
    wrapping,
)
from errchain.traversal import (
    client_message,
    error_code,
    find_cause,
    iter_chain,
    operations,
    render_message,
    unwrap,
)

__version__ = "0.1.0"

__all__ = [
    # Codes
    "CODE_DATABASE",
    "CODE_INTERNAL",
    "CODE_UNEXPECTED",
    # Nodes
    "ChainError",
    "ClientMessage",
    "ClientMessageState",
    # Accessors
    "client_message",
    "error_code",
    "find_cause",
    "iter_chain",
    # Constructors
    "new",
    "operations",
    "render_message",
    "unwrap",
    "wrap",
    "wrapping",
    # Version
    "__version__",
]
