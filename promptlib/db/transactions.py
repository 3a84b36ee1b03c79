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

"""Transaction context manager for multi-row writes."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

_SAVEPOINT = "promptlib_nested"


@contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    """Run the enclosed statements as one all-or-nothing write.

    Usage::

        with transaction(conn):
            execute(conn, "UPDATE prompt_library_templates SET is_default = 0")
            execute(conn, "UPDATE prompt_library_templates SET is_default = 1 WHERE id = ?", (7,))
        # committed here; rolled back if anything above raised

    ``BEGIN IMMEDIATE`` takes the write lock up front, so a concurrent
    reader never observes the intermediate state (e.g. no default template,
    or a library whose assignments are only half replaced).

    Inside an open transaction the block runs under a savepoint instead:
    a failure undoes only the block, and nothing is committed until the
    outermost transaction commits.
    """
    if conn.in_transaction:
        with _savepoint(conn):
            yield conn
        return

    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        logger.debug("Transaction rolled back")
        raise


@contextmanager
def _savepoint(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    # SQLite resolves a repeated savepoint name to the innermost one.
    conn.execute(f"SAVEPOINT {_SAVEPOINT}")
    try:
        yield conn
    except Exception:
        conn.execute(f"ROLLBACK TO {_SAVEPOINT}")
        conn.execute(f"RELEASE {_SAVEPOINT}")
        logger.debug("Nested transaction rolled back to savepoint")
        raise
    conn.execute(f"RELEASE {_SAVEPOINT}")
