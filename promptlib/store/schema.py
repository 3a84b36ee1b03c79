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

"""Database schema for the prompt library.

Two migrations mirror the two template generations: legacy single-text
templates with per-workspace selection, then structured libraries with
questions and workspace assignments.
"""

from __future__ import annotations

import sqlite3

from promptlib.db import Migration, run_migrations

LEGACY_TEMPLATES = Migration(
    1,
    "legacy_templates",
    (
        """
        CREATE TABLE IF NOT EXISTS prompt_library_templates (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            name            TEXT NOT NULL,
            description     TEXT,
            content         TEXT NOT NULL,
            enabled         INTEGER NOT NULL DEFAULT 1,
            is_default      INTEGER NOT NULL DEFAULT 0,
            created_at      TEXT NOT NULL,
            updated_at      TEXT NOT NULL
        )
        """,
        # At most one default template, enforced by the database as well.
        """
        CREATE UNIQUE INDEX IF NOT EXISTS idx_prompt_library_templates_default
            ON prompt_library_templates (is_default) WHERE is_default = 1
        """,
        # No foreign key on active_template_id: a deleted template leaves a
        # stale pointer that resolution falls back from.
        """
        CREATE TABLE IF NOT EXISTS workspaces (
            id                  INTEGER PRIMARY KEY AUTOINCREMENT,
            slug                TEXT NOT NULL UNIQUE,
            name                TEXT NOT NULL DEFAULT '',
            active_template_id  INTEGER
        )
        """,
    ),
)

LIBRARIES = Migration(
    2,
    "structured_libraries",
    (
        """
        CREATE TABLE IF NOT EXISTS prompt_libraries (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            uuid            TEXT NOT NULL UNIQUE,
            name            TEXT NOT NULL,
            description     TEXT,
            template        TEXT NOT NULL,
            enabled         INTEGER NOT NULL DEFAULT 1,
            created_at      TEXT NOT NULL,
            updated_at      TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS prompt_library_questions (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            library_id      INTEGER NOT NULL
                            REFERENCES prompt_libraries(id) ON DELETE CASCADE,
            variable        TEXT NOT NULL,
            label           TEXT NOT NULL DEFAULT '',
            type            TEXT NOT NULL DEFAULT 'text',
            placeholder     TEXT,
            required        INTEGER NOT NULL DEFAULT 1,
            options         TEXT,
            default_value   TEXT,
            order_index     INTEGER NOT NULL DEFAULT 0,
            show_if         TEXT,
            created_at      TEXT NOT NULL,
            UNIQUE(library_id, variable)
        )
        """,
        """
        CREATE INDEX IF NOT EXISTS idx_prompt_library_questions_library
            ON prompt_library_questions (library_id, order_index)
        """,
        """
        CREATE TABLE IF NOT EXISTS prompt_library_workspace_assignments (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            library_id      INTEGER NOT NULL
                            REFERENCES prompt_libraries(id) ON DELETE CASCADE,
            workspace_id    INTEGER NOT NULL,
            created_at      TEXT NOT NULL,
            UNIQUE(library_id, workspace_id)
        )
        """,
    ),
)

MIGRATIONS = [LEGACY_TEMPLATES, LIBRARIES]


def ensure_schema(conn: sqlite3.Connection) -> int:
    """Create or upgrade all prompt library tables; returns migrations applied."""
    return run_migrations(conn, MIGRATIONS)
