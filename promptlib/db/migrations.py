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

"""Sequential schema migrations for the prompt library database.

Applied versions are recorded in a ``schema_version`` table.  Each
migration is a list of DDL statements run inside one transaction, so a
failing migration leaves neither half-created tables nor a version row.

Usage::

    from promptlib.db.migrations import Migration, run_migrations

    MIGRATIONS = [
        Migration(1, "templates", ("CREATE TABLE IF NOT EXISTS ...",)),
    ]
    run_migrations(conn, MIGRATIONS)
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

from promptlib.db.operations import create_tables, execute, fetch_all, table_exists
from promptlib.db.transactions import transaction

logger = logging.getLogger(__name__)

_VERSION_TABLE_DDL = """\
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


@dataclass(frozen=True)
class Migration:
    """A single schema migration.

    Attributes:
        version: Sequential integer (1, 2, 3, ...). Must be unique.
        name: Short descriptive name (e.g. ``"legacy_templates"``).
        statements: DDL statements, executed in order.
    """

    version: int
    name: str
    statements: Sequence[str]


def get_applied_versions(conn: sqlite3.Connection) -> set[int]:
    """Return the migration versions already applied (empty on a fresh DB)."""
    if not table_exists(conn, "schema_version"):
        return set()
    return {row["version"] for row in fetch_all(conn, "SELECT version FROM schema_version")}


def run_migrations(conn: sqlite3.Connection, migrations: Sequence[Migration]) -> int:
    """Apply all pending migrations in version order.

    Returns:
        Number of migrations applied.
    """
    versions = [m.version for m in migrations]
    if len(versions) != len(set(versions)):
        raise ValueError(f"Duplicate migration versions: {sorted(versions)}")

    create_tables(conn, _VERSION_TABLE_DDL)
    applied = get_applied_versions(conn)

    count = 0
    for migration in sorted(migrations, key=lambda m: m.version):
        if migration.version in applied:
            continue

        logger.info("Applying migration %d: %s", migration.version, migration.name)
        with transaction(conn):
            for statement in migration.statements:
                execute(conn, statement)
            execute(
                conn,
                "INSERT INTO schema_version (version, name) VALUES (?, ?)",
                (migration.version, migration.name),
            )
        count += 1

    if count:
        logger.info("Applied %d migration(s)", count)
    return count
