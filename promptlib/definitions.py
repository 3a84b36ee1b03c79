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

"""Normalisation and checks for admin-supplied definitions.

Admin forms post loosely typed payloads: camelCase or snake_case keys,
variable names with spaces, ``required`` omitted, options attached to a
text field.  The builders here turn such payloads into model objects and
reject definitions that could never work (no name, duplicate variables, a
question whose visibility depends on itself).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from promptlib.codec import ShowIf, normalize_variable, parse_options, parse_show_if
from promptlib.exceptions import LibraryDefinitionError
from promptlib.models import Library, Question, QuestionType, Template

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _question_type(value: Any, field_name: str) -> QuestionType:
    if isinstance(value, QuestionType):
        return value
    raw = _text(value).lower() or QuestionType.TEXT.value
    try:
        return QuestionType(raw)
    except ValueError:
        allowed = ", ".join(t.value for t in QuestionType)
        raise LibraryDefinitionError(
            f"Unknown question type {value!r} (expected one of: {allowed})", field_name,
        ) from None


def build_question(data: Mapping[str, Any] | Question, index: int) -> Question:
    """Build one question from an admin payload.

    *index* is the question's position in the submitted list; it becomes
    ``order_index`` when the payload does not set one.
    """
    if isinstance(data, Question):
        data = data.to_dict()
    prefix = f"questions[{index}]"

    variable = normalize_variable(_text(data.get("variable")))
    if not variable:
        raise LibraryDefinitionError("Question variable is required", f"{prefix}.variable")

    qtype = _question_type(data.get("type"), f"{prefix}.type")
    options = parse_options(data.get("options")) if qtype.has_options else []

    show_if = parse_show_if(data.get("show_if", data.get("showIf")))
    if show_if is not None:
        show_if = ShowIf(normalize_variable(show_if.variable), show_if.equals)
    if show_if is not None and show_if.variable == variable:
        raise LibraryDefinitionError(
            f"Question {variable!r} cannot depend on its own answer", f"{prefix}.show_if",
        )

    order_index = data.get("order_index", data.get("orderIndex"))
    default_value = data.get("default_value", data.get("defaultValue"))

    return Question(
        variable=variable,
        label=_text(data.get("label")) or variable,
        type=qtype,
        placeholder=_optional_text(data.get("placeholder")),
        required=data.get("required") is not False,
        options=options,
        default_value=_optional_text(default_value),
        order_index=int(order_index) if order_index is not None else index,
        show_if=show_if,
    )


def build_questions(items: Iterable[Mapping[str, Any] | Question]) -> list[Question]:
    """Build and cross-check a library's question list."""
    questions = [build_question(item, i) for i, item in enumerate(items)]

    seen: set[str] = set()
    for i, question in enumerate(questions):
        if question.variable in seen:
            raise LibraryDefinitionError(
                f"Duplicate question variable {question.variable!r}", f"questions[{i}].variable",
            )
        seen.add(question.variable)

    for question in questions:
        if question.show_if is not None and question.show_if.variable not in seen:
            logger.warning(
                "Question %r depends on unknown variable %r and will stay hidden",
                question.variable, question.show_if.variable,
            )
    return questions


def build_library(
    name: Any,
    template: Any,
    *,
    description: Any = None,
    enabled: bool = True,
    questions: Iterable[Mapping[str, Any] | Question] = (),
    workspace_ids: Iterable[Any] = (),
) -> Library:
    """Build an unsaved :class:`Library` from admin input."""
    name_text = _text(name)
    if not name_text:
        raise LibraryDefinitionError("Library name is required", "name")
    template_text = "" if template is None else str(template)
    if not template_text.strip():
        raise LibraryDefinitionError("Library template is required", "template")

    return Library(
        name=name_text,
        template=template_text,
        description=_optional_text(description),
        enabled=bool(enabled),
        questions=build_questions(questions),
        workspace_ids=normalize_workspace_ids(workspace_ids),
    )


def build_template(
    name: Any,
    content: Any,
    *,
    description: Any = None,
    enabled: bool = True,
    is_default: bool = False,
) -> Template:
    """Build an unsaved legacy :class:`Template` from admin input."""
    name_text = _text(name)
    if not name_text:
        raise LibraryDefinitionError("Template name is required", "name")
    content_text = "" if content is None else str(content)
    if not content_text.strip():
        raise LibraryDefinitionError("Template content is required", "content")

    return Template(
        name=name_text,
        content=content_text,
        description=_optional_text(description),
        enabled=bool(enabled),
        is_default=bool(is_default),
    )


def normalize_workspace_ids(workspace_ids: Iterable[Any]) -> list[int]:
    """Coerce workspace ids to ints, dropping duplicates but keeping order."""
    ids: list[int] = []
    for raw in workspace_ids:
        try:
            workspace_id = int(raw)
        except (TypeError, ValueError):
            raise LibraryDefinitionError(
                f"Invalid workspace id {raw!r}", "workspace_ids",
            ) from None
        if workspace_id not in ids:
            ids.append(workspace_id)
    return ids
