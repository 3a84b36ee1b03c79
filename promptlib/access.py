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

"""Which libraries and templates a workspace may use.

Library scoping inverts the usual reading of an empty relation: a library
with no workspace assignments is *global* and reaches every workspace.
Only once at least one workspace is assigned does the library become
restricted to the assigned set.

For legacy templates each workspace may point at one active template.  A
stale pointer (template deleted or disabled) silently falls back to the
system default template.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from promptlib.models import Library, Template, Workspace

logger = logging.getLogger(__name__)


def _as_id(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def is_accessible(library: Library, workspace_id: Any) -> bool:
    """True if *library* is enabled and global or assigned to *workspace_id*."""
    if not library.enabled:
        return False
    if library.is_global:
        return True
    return _as_id(workspace_id) in library.workspace_ids


def accessible_libraries(workspace_id: Any, libraries: Iterable[Library]) -> list[Library]:
    """Return the libraries *workspace_id* may use, oldest first.

    The returned objects still carry ``workspace_ids``; use
    :meth:`Library.public_dict` when answering a non-admin caller.
    """
    visible = [lib for lib in libraries if is_accessible(lib, workspace_id)]
    return sorted(visible, key=lambda lib: (lib.created_at, lib.id or 0))


def default_template(templates: Iterable[Template]) -> Template | None:
    """Return the enabled default template, if there is one."""
    for template in templates:
        if template.is_default and template.enabled:
            return template
    return None


def active_template(workspace: Workspace | None, templates: Iterable[Template]) -> Template | None:
    """Resolve the legacy template a workspace should use.

    The workspace's own selection wins if it names an enabled template;
    otherwise the enabled default applies; otherwise there is none.
    """
    templates = list(templates)
    active_id = workspace.active_template_id if workspace is not None else None

    if active_id is not None:
        for template in templates:
            if template.id == active_id and template.enabled:
                return template
        logger.debug(
            "Workspace %s points at unavailable template %s; using default",
            workspace.slug, active_id,
        )

    return default_template(templates)
