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

"""Workspace records and their legacy active-template selection."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from promptlib.db import execute, fetch_all, fetch_one, transaction
from promptlib.models import Workspace

logger = logging.getLogger(__name__)


def _row_to_workspace(row: Any) -> Workspace:
    return Workspace(
        id=row["id"],
        slug=row["slug"],
        name=row["name"],
        active_template_id=row["active_template_id"],
    )


def insert_workspace(conn: sqlite3.Connection, workspace: Workspace) -> Workspace | None:
    """Insert a workspace; returns ``None`` if the slug is taken or the write fails."""
    try:
        with transaction(conn):
            cur = execute(
                conn,
                "INSERT INTO workspaces (slug, name, active_template_id) VALUES (?, ?, ?)",
                (workspace.slug, workspace.name, workspace.active_template_id),
            )
    except sqlite3.Error:
        logger.exception("Failed to create workspace %r", workspace.slug)
        return None
    return get_workspace(conn, cur.lastrowid)


def get_workspace(conn: sqlite3.Connection, workspace_id: int) -> Workspace | None:
    try:
        row = fetch_one(conn, "SELECT * FROM workspaces WHERE id = ?", (int(workspace_id),))
    except sqlite3.Error:
        logger.exception("Failed to load workspace %s", workspace_id)
        return None
    return _row_to_workspace(row) if row is not None else None


def get_workspace_by_slug(conn: sqlite3.Connection, slug: str) -> Workspace | None:
    try:
        row = fetch_one(conn, "SELECT * FROM workspaces WHERE slug = ?", (slug,))
    except sqlite3.Error:
        logger.exception("Failed to load workspace %r", slug)
        return None
    return _row_to_workspace(row) if row is not None else None


def list_workspaces(conn: sqlite3.Connection) -> list[Workspace]:
    try:
        return [_row_to_workspace(r) for r in fetch_all(conn, "SELECT * FROM workspaces ORDER BY id")]
    except sqlite3.Error:
        logger.exception("Failed to list workspaces")
        return []


def set_active_template(
    conn: sqlite3.Connection, workspace_id: int, template_id: int | None,
) -> bool:
    """Point a workspace at a legacy template, or clear the pointer with ``None``.

    One UPDATE of one row: other workspaces are untouched and repeating the
    call is harmless.  The template id is stored as given; resolution falls
    back to the default if it is unusable.
    """
    value = int(template_id) if template_id is not None else None
    try:
        with transaction(conn):
            cur = execute(
                conn,
                "UPDATE workspaces SET active_template_id = ? WHERE id = ?",
                (value, int(workspace_id)),
            )
    except sqlite3.Error:
        logger.exception("Failed to set active template of workspace %s", workspace_id)
        return False
    return cur.rowcount > 0
