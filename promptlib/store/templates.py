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

"""Storage for legacy single-text templates.

Every function takes a SQLite connection.  Failures of the database are
logged and reported as ``None``/``False``/``[]``; a multi-statement write
either applies completely or not at all.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from promptlib.db import execute, fetch_all, fetch_one, transaction
from promptlib.models import Template
from promptlib.store._helpers import RowMissing, as_bool, now_iso

logger = logging.getLogger(__name__)

_UPDATABLE = ("name", "description", "content", "enabled", "is_default")


def _row_to_template(row: Any) -> Template:
    return Template(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        content=row["content"],
        enabled=as_bool(row["enabled"]),
        is_default=as_bool(row["is_default"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _clear_default(conn: sqlite3.Connection, keep_id: int | None = None) -> None:
    if keep_id is None:
        execute(conn, "UPDATE prompt_library_templates SET is_default = 0 WHERE is_default = 1")
    else:
        execute(
            conn,
            "UPDATE prompt_library_templates SET is_default = 0 WHERE is_default = 1 AND id != ?",
            (keep_id,),
        )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def list_templates(conn: sqlite3.Connection, *, enabled: bool | None = None) -> list[Template]:
    """Return templates, most recently updated first."""
    sql = "SELECT * FROM prompt_library_templates"
    params: tuple = ()
    if enabled is not None:
        sql += " WHERE enabled = ?"
        params = (int(enabled),)
    sql += " ORDER BY updated_at DESC, id DESC"
    try:
        return [_row_to_template(r) for r in fetch_all(conn, sql, params)]
    except sqlite3.Error:
        logger.exception("Failed to list prompt library templates")
        return []


def get_template(
    conn: sqlite3.Connection, template_id: int, *, enabled: bool | None = None,
) -> Template | None:
    """Look up a template by id, optionally requiring an enabled state."""
    sql = "SELECT * FROM prompt_library_templates WHERE id = ?"
    params: tuple = (int(template_id),)
    if enabled is not None:
        sql += " AND enabled = ?"
        params += (int(enabled),)
    try:
        row = fetch_one(conn, sql, params)
    except sqlite3.Error:
        logger.exception("Failed to load template %s", template_id)
        return None
    return _row_to_template(row) if row is not None else None


def get_default_template(conn: sqlite3.Connection) -> Template | None:
    """Return the enabled default template, or ``None``."""
    try:
        row = fetch_one(
            conn,
            "SELECT * FROM prompt_library_templates WHERE is_default = 1 AND enabled = 1",
        )
    except sqlite3.Error:
        logger.exception("Failed to load default template")
        return None
    return _row_to_template(row) if row is not None else None


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def insert_template(conn: sqlite3.Connection, template: Template) -> Template | None:
    """Insert *template*; if it is the new default, the old default is cleared."""
    now = now_iso()
    try:
        with transaction(conn):
            if template.is_default:
                _clear_default(conn)
            cur = execute(
                conn,
                "INSERT INTO prompt_library_templates"
                " (name, description, content, enabled, is_default, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    template.name,
                    template.description,
                    template.content,
                    int(template.enabled),
                    int(template.is_default),
                    now,
                    now,
                ),
            )
            template_id = cur.lastrowid
    except sqlite3.Error:
        logger.exception("Failed to create template %r", template.name)
        return None

    logger.info("Created prompt library template %d (%s)", template_id, template.name)
    return get_template(conn, template_id)


def update_template(
    conn: sqlite3.Connection, template_id: int, fields: Mapping[str, Any],
) -> Template | None:
    """Apply a partial update; ``is_default=True`` also clears the old default.

    Keys outside name/description/content/enabled/is_default are ignored.
    Returns the updated template, or ``None`` if it does not exist or the
    write failed.
    """
    template_id = int(template_id)
    changes = {k: fields[k] for k in _UPDATABLE if k in fields}
    for flag in ("enabled", "is_default"):
        if flag in changes:
            changes[flag] = int(bool(changes[flag]))
    changes["updated_at"] = now_iso()

    assignments = ", ".join(f"{column} = ?" for column in changes)
    try:
        with transaction(conn):
            if changes.get("is_default") == 1:
                _clear_default(conn, keep_id=template_id)
            cur = execute(
                conn,
                f"UPDATE prompt_library_templates SET {assignments} WHERE id = ?",
                (*changes.values(), template_id),
            )
            if cur.rowcount == 0:
                raise RowMissing(template_id)
    except RowMissing:
        logger.warning("Cannot update template %d: not found", template_id)
        return None
    except sqlite3.Error:
        logger.exception("Failed to update template %d", template_id)
        return None

    if changes.get("is_default") == 1:
        logger.info("Template %d is now the default", template_id)
    return get_template(conn, template_id)


def set_default_template(conn: sqlite3.Connection, template_id: int) -> bool:
    """Make *template_id* the only default template.

    Clearing the previous default and setting the new one happen in one
    transaction; if the template does not exist nothing changes.
    """
    return update_template(conn, template_id, {"is_default": True}) is not None


def delete_template(conn: sqlite3.Connection, template_id: int) -> bool:
    """Delete a template.  Deleting the default does not promote another one."""
    try:
        with transaction(conn):
            cur = execute(
                conn, "DELETE FROM prompt_library_templates WHERE id = ?", (int(template_id),),
            )
    except sqlite3.Error:
        logger.exception("Failed to delete template %s", template_id)
        return False
    if cur.rowcount == 0:
        return False
    logger.info("Deleted prompt library template %s", template_id)
    return True
