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

"""SQLite connection factory for the prompt library store.

The store keeps templates, libraries, questions and workspace assignments
in a single SQLite file.  File databases run in WAL mode so that readers
see either the state before or after a multi-row write, never a mix.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


def connect_sqlite(
    path: str | Path,
    *,
    wal_mode: bool = True,
    foreign_keys: bool = True,
    busy_timeout_ms: int = 5000,
) -> sqlite3.Connection:
    """Open (or create) a prompt library database.

    Args:
        path: File path, or ``":memory:"`` for a throwaway database.
        wal_mode: Enable WAL journal mode (ignored for in-memory databases).
        foreign_keys: Enforce ``ON DELETE CASCADE`` from libraries to their
            questions and workspace assignments.
        busy_timeout_ms: How long a writer waits for a competing write lock.
    """
    in_memory = str(path) == MEMORY
    target = MEMORY if in_memory else str(Path(path).expanduser())

    if not in_memory:
        Path(target).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(target, check_same_thread=False)
    conn.row_factory = sqlite3.Row

    if wal_mode and not in_memory:
        conn.execute("PRAGMA journal_mode=WAL")
    if foreign_keys:
        conn.execute("PRAGMA foreign_keys=ON")
    conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")

    logger.debug("Prompt library database opened: %s", target)
    return conn
