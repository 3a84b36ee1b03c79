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

"""Prompt library operations for a routing or UI layer.

:class:`PromptLibraryService` binds the pure resolution, validation and
rendering functions to the SQLite store.  Callers are assumed to be
authorised already: admin-only operations (template and library CRUD,
assignments, default flag) are not distinguished here.

Store failures surface as ``None``, ``False`` or an empty list.  Invalid
admin input raises :class:`~promptlib.exceptions.LibraryDefinitionError`.

Usage::

    service = PromptLibraryService.open()
    for lib in service.list_accessible_libraries(workspace_id=3):
        print(lib["name"])

    result = service.validate_and_render(lib_id, {"topic": "blog"})
    if not result.ok:
        ask_for(result.missing)
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from promptlib.access import accessible_libraries, active_template
from promptlib.config import default_database_path
from promptlib.db import connect_sqlite
from promptlib.definitions import (
    build_library,
    build_questions,
    build_template,
    normalize_workspace_ids,
)
from promptlib.exceptions import LibraryDefinitionError
from promptlib.form import FormSession
from promptlib.models import Library, RenderResult, Template, Workspace
from promptlib.store import ensure_schema
from promptlib.store import libraries as library_store
from promptlib.store import templates as template_store
from promptlib.store import workspaces as workspace_store

logger = logging.getLogger(__name__)


class PromptLibraryService:
    """Prompt library operations over one database connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    @classmethod
    def open(cls, path: str | Path | None = None) -> PromptLibraryService:
        """Connect to *path* (default: :func:`default_database_path`) and migrate."""
        conn = connect_sqlite(path if path is not None else default_database_path())
        ensure_schema(conn)
        return cls(conn)

    def close(self) -> None:
        self.conn.close()

    # -- Workspaces ---------------------------------------------------------

    def create_workspace(self, slug: str, name: str = "") -> Workspace | None:
        return workspace_store.insert_workspace(self.conn, Workspace(slug=slug, name=name))

    def get_workspace(self, workspace_id: int) -> Workspace | None:
        return workspace_store.get_workspace(self.conn, workspace_id)

    def get_workspace_by_slug(self, slug: str) -> Workspace | None:
        return workspace_store.get_workspace_by_slug(self.conn, slug)

    # -- Structured libraries: user-facing ---------------------------------

    def list_accessible_libraries(self, workspace_id: int) -> list[dict[str, Any]]:
        """Enabled libraries usable in *workspace_id*, without their assignments."""
        candidates = library_store.list_libraries(self.conn, enabled=True)
        return [lib.public_dict() for lib in accessible_libraries(workspace_id, candidates)]

    def validate_and_render(self, library_id: int, answers: Mapping[str, Any]) -> RenderResult:
        """Check *answers* against the library's visible required questions and render.

        An unknown or disabled library yields a failed result with no
        missing fields.
        """
        library = library_store.get_library(self.conn, library_id)
        if library is None or not library.enabled:
            logger.warning("Cannot render prompt library %s: not available", library_id)
            return RenderResult.incomplete([])
        session = FormSession(library=library)
        for variable, value in answers.items():
            session.set_answer(variable, value)
        return session.submit()

    # -- Structured libraries: admin ----------------------------------------

    def list_libraries(self, *, enabled: bool | None = None) -> list[Library]:
        return library_store.list_libraries(self.conn, enabled=enabled)

    def get_library(self, library_id: int) -> Library | None:
        """Admin view of one library, including its workspace assignments."""
        return library_store.get_library(self.conn, library_id)

    def create_library(
        self,
        name: str,
        template: str,
        *,
        description: str | None = None,
        enabled: bool = True,
        questions: Iterable[Mapping[str, Any]] = (),
        workspace_ids: Iterable[Any] = (),
    ) -> Library | None:
        library = build_library(
            name,
            template,
            description=description,
            enabled=enabled,
            questions=questions,
            workspace_ids=workspace_ids,
        )
        return library_store.insert_library(self.conn, library)

    def update_library(
        self,
        library_id: int,
        *,
        questions: Iterable[Mapping[str, Any]] | None = None,
        workspace_ids: Iterable[Any] | None = None,
        **fields: Any,
    ) -> Library | None:
        """Partially update a library (name, description, template, enabled).

        ``questions`` and ``workspace_ids`` replace the stored sets when given.
        """
        if "name" in fields and not str(fields["name"] or "").strip():
            raise LibraryDefinitionError("Library name is required", "name")
        if "template" in fields and not str(fields["template"] or "").strip():
            raise LibraryDefinitionError("Library template is required", "template")
        return library_store.update_library(
            self.conn,
            library_id,
            fields,
            questions=build_questions(questions) if questions is not None else None,
            workspace_ids=(
                normalize_workspace_ids(workspace_ids) if workspace_ids is not None else None
            ),
        )

    def delete_library(self, library_id: int) -> bool:
        return library_store.delete_library(self.conn, library_id)

    def set_workspace_assignments(self, library_id: int, workspace_ids: Iterable[Any]) -> bool:
        """Replace the library's workspace list; an empty list makes it global."""
        return library_store.set_workspace_assignments(
            self.conn, library_id, normalize_workspace_ids(workspace_ids),
        )

    # -- Legacy templates -----------------------------------------------------

    def list_templates(self) -> list[Template]:
        return template_store.list_templates(self.conn)

    def list_enabled_templates(self) -> list[Template]:
        return template_store.list_templates(self.conn, enabled=True)

    def get_template(self, template_id: int) -> Template | None:
        return template_store.get_template(self.conn, template_id)

    def create_template(
        self,
        name: str,
        content: str,
        *,
        description: str | None = None,
        enabled: bool = True,
        is_default: bool = False,
    ) -> Template | None:
        template = build_template(
            name, content, description=description, enabled=enabled, is_default=is_default,
        )
        return template_store.insert_template(self.conn, template)

    def update_template(self, template_id: int, **fields: Any) -> Template | None:
        if "name" in fields and not str(fields["name"] or "").strip():
            raise LibraryDefinitionError("Template name is required", "name")
        if "content" in fields and not str(fields["content"] or "").strip():
            raise LibraryDefinitionError("Template content is required", "content")
        return template_store.update_template(self.conn, template_id, fields)

    def delete_template(self, template_id: int) -> bool:
        return template_store.delete_template(self.conn, template_id)

    def set_default_template(self, template_id: int) -> bool:
        """Mark *template_id* as the single default template."""
        return template_store.set_default_template(self.conn, template_id)

    def resolve_active_template(self, workspace_id: int) -> Template | None:
        """The legacy template in effect for a workspace (selection, else default)."""
        workspace = workspace_store.get_workspace(self.conn, workspace_id)
        if workspace is None:
            logger.warning("Cannot resolve active template: workspace %s not found", workspace_id)
            return None
        return active_template(workspace, template_store.list_templates(self.conn))

    def set_active_template(self, workspace_id: int, template_id: int | None) -> bool:
        """Select a legacy template for a workspace; ``None`` clears the selection."""
        return workspace_store.set_active_template(self.conn, workspace_id, template_id)
