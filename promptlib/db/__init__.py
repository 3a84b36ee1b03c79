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

"""Thin SQLite layer for the prompt library store.

Usage::

    from promptlib.db import connect_sqlite, execute, fetch_all, transaction

    conn = connect_sqlite("~/.local/share/promptlib/prompt_library.db")
    with transaction(conn):
        execute(conn, "UPDATE workspaces SET active_template_id = ? WHERE id = ?", (3, 1))
    rows = fetch_all(conn, "SELECT * FROM workspaces")
"""

from promptlib.db.connection import connect_sqlite
from promptlib.db.migrations import Migration, run_migrations
from promptlib.db.operations import (
    create_tables,
    execute,
    executemany,
    fetch_all,
    fetch_one,
    fetch_scalar,
    table_exists,
)
from promptlib.db.transactions import transaction

__all__ = [
    "connect_sqlite",
    "execute",
    "executemany",
    "fetch_one",
    "fetch_all",
    "fetch_scalar",
    "table_exists",
    "create_tables",
    "transaction",
    "Migration",
    "run_migrations",
]
