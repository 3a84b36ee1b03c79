# promptlib — prompt library templates and question forms for workspaces
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Query helpers over a SQLite connection.

All functions take the connection as their first argument and use ``?``
placeholders.  They never commit: single-statement writes are wrapped by
the caller, multi-statement writes go through :func:`transaction`.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any


def execute(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> sqlite3.Cursor:
    """Execute a single statement and return the cursor.

    Callers read ``cursor.lastrowid`` after an INSERT and
    ``cursor.rowcount`` after an UPDATE or DELETE.
    """
    return conn.execute(sql, params)


def executemany(conn: sqlite3.Connection, sql: str, params_seq: Sequence[Sequence]) -> int:
    """Execute *sql* once per parameter set and return the affected row count."""
    cur = conn.executemany(sql, params_seq)
    return cur.rowcount


def fetch_one(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> sqlite3.Row | None:
    """Execute and return the first row, or ``None``."""
    return conn.execute(sql, params).fetchone()


def fetch_all(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> list[sqlite3.Row]:
    """Execute and return all rows."""
    return conn.execute(sql, params).fetchall()


def fetch_scalar(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> Any:
    """Execute and return the first column of the first row, or ``None``."""
    row = fetch_one(conn, sql, params)
    if row is None:
        return None
    return row[0]


def table_exists(conn: sqlite3.Connection, name: str) -> bool:
    """Check whether a table exists."""
    row = fetch_one(
        conn,
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?",
        (name,),
    )
    return row is not None


def create_tables(conn: sqlite3.Connection, schema_sql: str) -> None:
    """Execute a multi-statement DDL script.

    ``executescript`` commits any pending transaction first, so this must
    not be called inside :func:`transaction`.
    """
    conn.executescript(schema_sql)
