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

"""Data models for prompt library templates, libraries and questions.

Two generations of prompt templates coexist:

* :class:`Template` — a plain block of system-instruction text.  Each
  workspace may pick one as its active template; one template system-wide
  may be the default.
* :class:`Library` — a template body with ``{{variable}}`` placeholders
  and an ordered list of :class:`Question` records whose answers fill them.
  Libraries are scoped to workspaces through ``workspace_ids``; an empty
  list means every workspace may use the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from promptlib.codec import ShowIf, parse_options, parse_show_if


def _now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(tz=UTC)


def _parse_datetime(value: str | datetime | None) -> datetime:
    """Parse an ISO datetime string, or return UTC now if None."""
    if value is None:
        return _now_utc()
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key; stored rows and API payloads differ in casing."""
    for key in keys:
        if key in data:
            return data[key]
    return default


# ---------------------------------------------------------------------------
# Question types
# ---------------------------------------------------------------------------


class QuestionType(Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"

    @property
    def has_options(self) -> bool:
        """True for the types that choose among ``Question.options``."""
        return self in (QuestionType.SELECT, QuestionType.MULTISELECT)

    @classmethod
    def from_stored(cls, value: str | QuestionType | None) -> QuestionType:
        """Decode a stored type string; unknown types render as plain text."""
        if isinstance(value, QuestionType):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.TEXT


# ---------------------------------------------------------------------------
# Question
# ---------------------------------------------------------------------------


@dataclass
class Question:
    """One form field of a library.

    ``variable`` is the placeholder key; it is unique within its library.
    ``show_if`` hides the question until another question's answer equals
    a given value.
    """

    variable: str
    label: str = ""
    type: QuestionType = QuestionType.TEXT
    placeholder: str | None = None
    required: bool = True
    options: list[str] = field(default_factory=list)
    default_value: str | None = None
    order_index: int = 0
    show_if: ShowIf | None = None
    library_id: int | None = None
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-safe dictionary."""
        return {
            "id": self.id,
            "library_id": self.library_id,
            "variable": self.variable,
            "label": self.label,
            "type": self.type.value,
            "placeholder": self.placeholder,
            "required": self.required,
            "options": list(self.options),
            "default_value": self.default_value,
            "order_index": self.order_index,
            "show_if": self.show_if.to_dict() if self.show_if else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        """Deserialise from :meth:`to_dict` output or a stored row.

        ``options`` and ``show_if`` may still be JSON text; camelCase keys
        (``defaultValue``, ``orderIndex``, ``showIf``) are accepted.
        """
        order_index = _pick(data, "order_index", "orderIndex", default=0)
        return cls(
            id=data.get("id"),
            library_id=_pick(data, "library_id", "libraryId"),
            variable=str(data.get("variable") or ""),
            label=str(data.get("label") or ""),
            type=QuestionType.from_stored(data.get("type")),
            placeholder=data.get("placeholder") or None,
            required=bool(data.get("required", True)),
            options=parse_options(data.get("options")),
            default_value=_pick(data, "default_value", "defaultValue"),
            order_index=int(order_index) if order_index is not None else 0,
            show_if=parse_show_if(_pick(data, "show_if", "showIf")),
        )


# ---------------------------------------------------------------------------
# Structured library
# ---------------------------------------------------------------------------


@dataclass
class Library:
    """A parameterised prompt template with its questions."""

    name: str
    template: str
    description: str | None = None
    enabled: bool = True
    questions: list[Question] = field(default_factory=list)
    workspace_ids: list[int] = field(default_factory=list)
    uuid: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_now_utc)
    updated_at: datetime = field(default_factory=_now_utc)
    id: int | None = None

    @property
    def is_global(self) -> bool:
        """A library without workspace assignments is visible everywhere."""
        return not self.workspace_ids

    def ordered_questions(self) -> list[Question]:
        """Questions in render order (stable on equal ``order_index``)."""
        return sorted(self.questions, key=lambda q: q.order_index)

    def public_dict(self) -> dict[str, Any]:
        """User-facing serialisation: everything except the workspace assignments."""
        data = self.to_dict()
        del data["workspace_ids"]
        return data

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-safe dictionary."""
        return {
            "id": self.id,
            "uuid": self.uuid,
            "name": self.name,
            "description": self.description,
            "template": self.template,
            "enabled": self.enabled,
            "questions": [q.to_dict() for q in self.ordered_questions()],
            "workspace_ids": list(self.workspace_ids),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Library:
        """Deserialise from a dictionary produced by :meth:`to_dict`."""
        return cls(
            id=data.get("id"),
            uuid=data.get("uuid") or str(uuid4()),
            name=data["name"],
            description=data.get("description"),
            template=data["template"],
            enabled=bool(data.get("enabled", True)),
            questions=[Question.from_dict(q) for q in data.get("questions", [])],
            workspace_ids=[int(w) for w in _pick(data, "workspace_ids", "workspaceIds", default=[])],
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


# ---------------------------------------------------------------------------
# Legacy single-text template
# ---------------------------------------------------------------------------


@dataclass
class Template:
    """A fixed system-instruction text, selectable per workspace."""

    name: str
    content: str
    description: str | None = None
    enabled: bool = True
    is_default: bool = False
    created_at: datetime = field(default_factory=_now_utc)
    updated_at: datetime = field(default_factory=_now_utc)
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-safe dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "content": self.content,
            "enabled": self.enabled,
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        """Deserialise from a dictionary produced by :meth:`to_dict`."""
        return cls(
            id=data.get("id"),
            name=data["name"],
            description=data.get("description"),
            content=data["content"],
            enabled=bool(data.get("enabled", True)),
            is_default=bool(_pick(data, "is_default", "isDefault", default=False)),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


@dataclass
class Workspace:
    """The slice of a workspace record the prompt library needs."""

    slug: str
    name: str = ""
    active_template_id: int | None = None
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "active_template_id": self.active_template_id,
        }


# ---------------------------------------------------------------------------
# Submission outcome
# ---------------------------------------------------------------------------


@dataclass
class RenderResult:
    """Outcome of validating and rendering a library.

    ``ok`` with ``prompt`` set on success; otherwise ``missing`` lists the
    visible required variables still unanswered, in render order.  A failed
    result with an empty ``missing`` list means the library was not found.
    """

    ok: bool
    prompt: str | None = None
    missing: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, prompt: str) -> RenderResult:
        return cls(ok=True, prompt=prompt)

    @classmethod
    def incomplete(cls, missing: list[str]) -> RenderResult:
        return cls(ok=False, missing=list(missing))

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "prompt": self.prompt}
        return {"ok": False, "missing": list(self.missing)}
