#!/usr/bin/env python3
"""
Basic error chain example.

Builds a chain through a repository and a service layer, then shows what a
request handler would log and what it would show an end user.

Usage:
    ERRCHAIN_LOG_FORMAT=json python examples/basic_chain.py
"""

import sqlite3

from errchain import (
    CODE_DATABASE,
    ChainError,
    client_message,
    error_code,
    wrap,
    wrapping,
)
from errchain.telemetry import ChainLogger, get_logger

logger = get_logger("examples.basic_chain")


@wrapping("UserRepo.get", code=CODE_DATABASE)
def fetch_user(conn: sqlite3.Connection, user_id: int) -> tuple:
    # Table does not exist: sqlite3 raises OperationalError
    return conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()


def load_profile(conn: sqlite3.Connection, user_id: int) -> tuple:
    try:
        return fetch_user(conn, user_id)
    except ChainError as e:
        raise wrap("ProfileService.load", e, f"user_id={user_id}").set_client_message(
            "Your profile is temporarily unavailable."
        ) from e


def main() -> None:
    """Run basic chain example."""
    ChainLogger.configure()
    conn = sqlite3.connect(":memory:")

    try:
        load_profile(conn, 7)
    except ChainError as e:
        logger.exception("Request failed")
        print(f"Error:          {e}")
        print(f"Code:           {error_code(e)}")
        print(f"Client message: {client_message(e)}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
