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

"""Storage for structured libraries, their questions and workspace assignments.

A library row owns its question rows and assignment rows.  Questions and
assignments are never edited in place: every change replaces the whole set
inside the same transaction as the library row update, so readers see
either the old set or the new one.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from promptlib.codec import encode_options, encode_show_if
from promptlib.db import execute, executemany, fetch_all, fetch_one, transaction
from promptlib.models import Library, Question
from promptlib.store._helpers import RowMissing, as_bool, now_iso

logger = logging.getLogger(__name__)

_UPDATABLE = ("name", "description", "template", "enabled")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _row_to_question(row: Any) -> Question:
    """Convert a question row; ``options``/``show_if`` JSON is decoded leniently."""
    return Question.from_dict(dict(row))


def _load_questions(conn: sqlite3.Connection, library_id: int) -> list[Question]:
    rows = fetch_all(
        conn,
        "SELECT * FROM prompt_library_questions WHERE library_id = ?"
        " ORDER BY order_index ASC, id ASC",
        (library_id,),
    )
    return [_row_to_question(r) for r in rows]


def _load_workspace_ids(conn: sqlite3.Connection, library_id: int) -> list[int]:
    rows = fetch_all(
        conn,
        "SELECT workspace_id FROM prompt_library_workspace_assignments"
        " WHERE library_id = ? ORDER BY workspace_id",
        (library_id,),
    )
    return [int(r["workspace_id"]) for r in rows]


def _row_to_library(conn: sqlite3.Connection, row: Any) -> Library:
    return Library(
        id=row["id"],
        uuid=row["uuid"],
        name=row["name"],
        description=row["description"],
        template=row["template"],
        enabled=as_bool(row["enabled"]),
        questions=_load_questions(conn, row["id"]),
        workspace_ids=_load_workspace_ids(conn, row["id"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _replace_questions(
    conn: sqlite3.Connection, library_id: int, questions: Sequence[Question], now: str,
) -> None:
    execute(conn, "DELETE FROM prompt_library_questions WHERE library_id = ?", (library_id,))
    executemany(
        conn,
        "INSERT INTO prompt_library_questions"
        " (library_id, variable, label, type, placeholder, required, options,"
        "  default_value, order_index, show_if, created_at)"
        " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [
            (
                library_id,
                q.variable,
                q.label,
                q.type.value,
                q.placeholder,
                int(q.required),
                encode_options(q.options),
                q.default_value,
                q.order_index,
                encode_show_if(q.show_if),
                now,
            )
            for q in questions
        ],
    )


def _replace_assignments(
    conn: sqlite3.Connection, library_id: int, workspace_ids: Iterable[int], now: str,
) -> None:
    execute(
        conn,
        "DELETE FROM prompt_library_workspace_assignments WHERE library_id = ?",
        (library_id,),
    )
    executemany(
        conn,
        "INSERT OR IGNORE INTO prompt_library_workspace_assignments"
        " (library_id, workspace_id, created_at) VALUES (?, ?, ?)",
        [(library_id, int(w), now) for w in workspace_ids],
    )


def _library_exists(conn: sqlite3.Connection, library_id: int) -> bool:
    return fetch_one(conn, "SELECT 1 FROM prompt_libraries WHERE id = ?", (library_id,)) is not None


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def list_libraries(conn: sqlite3.Connection, *, enabled: bool | None = None) -> list[Library]:
    """Return libraries with questions and assignments, oldest first."""
    sql = "SELECT * FROM prompt_libraries"
    params: tuple = ()
    if enabled is not None:
        sql += " WHERE enabled = ?"
        params = (int(enabled),)
    sql += " ORDER BY created_at ASC, id ASC"
    try:
        return [_row_to_library(conn, r) for r in fetch_all(conn, sql, params)]
    except sqlite3.Error:
        logger.exception("Failed to list prompt libraries")
        return []


def get_library(conn: sqlite3.Connection, library_id: int) -> Library | None:
    """Look up one library by id, with questions and assignments."""
    try:
        row = fetch_one(conn, "SELECT * FROM prompt_libraries WHERE id = ?", (int(library_id),))
        return _row_to_library(conn, row) if row is not None else None
    except sqlite3.Error:
        logger.exception("Failed to load prompt library %s", library_id)
        return None


def get_workspace_ids(conn: sqlite3.Connection, library_id: int) -> list[int]:
    """Return the workspaces a library is restricted to (empty = global)."""
    try:
        return _load_workspace_ids(conn, int(library_id))
    except sqlite3.Error:
        logger.exception("Failed to load workspace assignments of library %s", library_id)
        return []


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def insert_library(conn: sqlite3.Connection, library: Library) -> Library | None:
    """Insert a library together with its questions and assignments."""
    now = now_iso()
    try:
        with transaction(conn):
            cur = execute(
                conn,
                "INSERT INTO prompt_libraries"
                " (uuid, name, description, template, enabled, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    library.uuid,
                    library.name,
                    library.description,
                    library.template,
                    int(library.enabled),
                    now,
                    now,
                ),
            )
            library_id = cur.lastrowid
            _replace_questions(conn, library_id, library.questions, now)
            _replace_assignments(conn, library_id, library.workspace_ids, now)
    except sqlite3.Error:
        logger.exception("Failed to create prompt library %r", library.name)
        return None

    logger.info(
        "Created prompt library %d (%s) with %d question(s)",
        library_id, library.name, len(library.questions),
    )
    return get_library(conn, library_id)


def update_library(
    conn: sqlite3.Connection,
    library_id: int,
    fields: Mapping[str, Any],
    *,
    questions: Sequence[Question] | None = None,
    workspace_ids: Iterable[int] | None = None,
) -> Library | None:
    """Partially update a library.

    ``questions`` and ``workspace_ids``, when given, replace the existing
    sets; ``None`` leaves them untouched.  Returns the updated library, or
    ``None`` if it does not exist or the write failed.
    """
    library_id = int(library_id)
    changes = {k: fields[k] for k in _UPDATABLE if k in fields}
    if "enabled" in changes:
        changes["enabled"] = int(bool(changes["enabled"]))
    now = now_iso()
    changes["updated_at"] = now

    assignments = ", ".join(f"{column} = ?" for column in changes)
    try:
        with transaction(conn):
            cur = execute(
                conn,
                f"UPDATE prompt_libraries SET {assignments} WHERE id = ?",
                (*changes.values(), library_id),
            )
            if cur.rowcount == 0:
                raise RowMissing(library_id)
            if questions is not None:
                _replace_questions(conn, library_id, questions, now)
            if workspace_ids is not None:
                _replace_assignments(conn, library_id, workspace_ids, now)
    except RowMissing:
        logger.warning("Cannot update prompt library %d: not found", library_id)
        return None
    except sqlite3.Error:
        logger.exception("Failed to update prompt library %d", library_id)
        return None

    logger.info("Updated prompt library %d", library_id)
    return get_library(conn, library_id)


def set_workspace_assignments(
    conn: sqlite3.Connection, library_id: int, workspace_ids: Iterable[int],
) -> bool:
    """Replace a library's workspace assignments (an empty list makes it global)."""
    library_id = int(library_id)
    workspace_ids = list(workspace_ids)
    try:
        with transaction(conn):
            if not _library_exists(conn, library_id):
                raise RowMissing(library_id)
            _replace_assignments(conn, library_id, workspace_ids, now_iso())
    except RowMissing:
        logger.warning("Cannot assign workspaces: prompt library %d not found", library_id)
        return False
    except sqlite3.Error:
        logger.exception("Failed to replace workspace assignments of library %d", library_id)
        return False

    logger.info(
        "Prompt library %d assigned to %s",
        library_id, sorted(set(workspace_ids)) if workspace_ids else "all workspaces",
    )
    return True


def delete_library(conn: sqlite3.Connection, library_id: int) -> bool:
    """Delete a library with its questions and assignments in one transaction.

    Child rows are removed explicitly so the delete is complete even on a
    connection opened without foreign key enforcement.
    """
    library_id = int(library_id)
    try:
        with transaction(conn):
            execute(conn, "DELETE FROM prompt_library_questions WHERE library_id = ?", (library_id,))
            execute(
                conn,
                "DELETE FROM prompt_library_workspace_assignments WHERE library_id = ?",
                (library_id,),
            )
            cur = execute(conn, "DELETE FROM prompt_libraries WHERE id = ?", (library_id,))
            if cur.rowcount == 0:
                raise RowMissing(library_id)
    except RowMissing:
        return False
    except sqlite3.Error:
        logger.exception("Failed to delete prompt library %d", library_id)
        return False

    logger.info("Deleted prompt library %d", library_id)
    return True
