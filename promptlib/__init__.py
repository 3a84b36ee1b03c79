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

"""promptlib — reusable prompt templates with typed, conditional questions.

An operator defines libraries: template text with ``{{variable}}``
placeholders plus the questions that fill them.  End users answer the
visible questions and get the final prompt text.  Libraries are scoped to
workspaces; legacy single-text templates can be selected per workspace with
a system-wide default as fallback.

Usage::

    from promptlib import FormSession, PromptLibraryService

    service = PromptLibraryService.open(":memory:")
    lib = service.create_library(
        "Blog post",
        "Write about {{topic}} in a {{tone}} tone.",
        questions=[
            {"variable": "topic", "label": "Topic"},
            {"variable": "tone", "required": False,
             "show_if": {"variable": "topic", "equals": "blog"}},
        ],
    )
    result = service.validate_and_render(lib.id, {"topic": "blog", "tone": "fun"})
    assert result.prompt == "Write about blog in a fun tone."
"""

from promptlib.access import accessible_libraries, active_template, is_accessible
from promptlib.codec import ShowIf, normalize_variable, parse_options, parse_show_if
from promptlib.exceptions import LibraryDefinitionError, PromptLibraryError
from promptlib.form import FormSession
from promptlib.models import (
    Library,
    Question,
    QuestionType,
    RenderResult,
    Template,
    Workspace,
)
from promptlib.render import placeholders, render, unresolved_placeholders
from promptlib.service import PromptLibraryService
from promptlib.validation import default_answers, validate
from promptlib.visibility import is_visible, visible_questions

__all__ = [
    "PromptLibraryService",
    "FormSession",
    "Library",
    "Question",
    "QuestionType",
    "ShowIf",
    "Template",
    "Workspace",
    "RenderResult",
    "PromptLibraryError",
    "LibraryDefinitionError",
    "parse_options",
    "parse_show_if",
    "normalize_variable",
    "is_visible",
    "visible_questions",
    "validate",
    "default_answers",
    "render",
    "placeholders",
    "unresolved_placeholders",
    "accessible_libraries",
    "active_template",
    "is_accessible",
]
