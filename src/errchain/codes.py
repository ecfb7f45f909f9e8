"""Sample error codes.

Codes are open strings: any value a caller chooses is valid. These are the
ones used throughout the package's own examples and tests.
"""

from __future__ import annotations

CODE_UNEXPECTED = "unexpected_error"
"""Failure with no more specific classification."""

CODE_DATABASE = "database_error"
"""Failure talking to a database."""

CODE_INTERNAL = "internal_error"
"""Broken internal invariant."""
