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

"""Typed answer values.

Answers travel as strings: a checkbox is ``"true"``/``"false"`` and a
multiselect is a comma-joined list of option labels.  :func:`decode_answer`
turns the wire string into one of four value kinds according to the
question type, and :func:`to_wire` turns Python values back into the wire
form.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from promptlib.models import QuestionType


@dataclass(frozen=True)
class TextValue:
    text: str


@dataclass(frozen=True)
class NumberValue:
    number: float | None
    raw: str = ""


@dataclass(frozen=True)
class BooleanValue:
    flag: bool


@dataclass(frozen=True)
class ListValue:
    items: tuple[str, ...]


AnswerValue = TextValue | NumberValue | BooleanValue | ListValue


def split_selection(raw: str) -> list[str]:
    """Split a stored multiselect answer into its trimmed labels."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _decode_text(raw: str) -> AnswerValue:
    return TextValue(raw)


def _decode_number(raw: str) -> AnswerValue:
    try:
        return NumberValue(float(raw.strip()), raw)
    except ValueError:
        return NumberValue(None, raw)


def _decode_checkbox(raw: str) -> AnswerValue:
    return BooleanValue(raw.strip().lower() == "true")


def _decode_multiselect(raw: str) -> AnswerValue:
    return ListValue(tuple(split_selection(raw)))


DECODERS: dict[QuestionType, Callable[[str], AnswerValue]] = {
    QuestionType.TEXT: _decode_text,
    QuestionType.TEXTAREA: _decode_text,
    QuestionType.NUMBER: _decode_number,
    QuestionType.SELECT: _decode_text,
    QuestionType.MULTISELECT: _decode_multiselect,
    QuestionType.CHECKBOX: _decode_checkbox,
}

_unhandled = set(QuestionType) - set(DECODERS)
if _unhandled:
    raise RuntimeError(
        f"No answer decoder for question types: {sorted(t.value for t in _unhandled)}"
    )


def decode_answer(question_type: QuestionType, raw: Any) -> AnswerValue:
    """Decode a wire answer for a question of *question_type*.

    ``None`` decodes like an empty string.
    """
    return DECODERS[question_type](to_wire(raw))


def _format_number(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return repr(number)


def to_wire(value: Any) -> str:
    """Encode a Python value (or an :data:`AnswerValue`) as a wire string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    if isinstance(value, TextValue):
        return value.text
    if isinstance(value, NumberValue):
        return value.raw if value.number is None else _format_number(value.number)
    if isinstance(value, BooleanValue):
        return to_wire(value.flag)
    if isinstance(value, ListValue):
        return to_wire(value.items)
    return str(value)


def toggle_selection(raw: str | None, option: str) -> str:
    """Add *option* to a multiselect answer, or remove it if already chosen."""
    selected = split_selection(raw or "")
    if option in selected:
        selected.remove(option)
    else:
        selected.append(option)
    return to_wire(selected)
