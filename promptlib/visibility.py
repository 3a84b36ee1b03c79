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

"""Conditional question visibility.

A question with a ``show_if`` condition is shown only while the answer to
the referenced variable equals the condition's value.  Both sides are
compared as strings, so ``True``, ``"true"`` and a checkbox answer of
``"true"`` all match a condition of ``"true"``.  A missing answer compares
as ``"undefined"``, which is distinct from ``""`` and ``"false"``; a
condition stored without ``equals`` compares the same way, so it matches
only while the referenced variable is unanswered.

Hiding a question never clears its answer; visibility is recomputed from
scratch on every call.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from promptlib.codec import ABSENT
from promptlib.models import Question

UNDEFINED = "undefined"


def stringify(value: Any) -> str:
    """String form used on both sides of a ``show_if`` comparison."""
    if value is ABSENT:
        return UNDEFINED
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def is_visible(question: Question, answers: Mapping[str, Any]) -> bool:
    """Return True if *question* is currently shown given *answers*."""
    condition = question.show_if
    if condition is None:
        return True
    actual = answers.get(condition.variable, ABSENT)
    return stringify(actual) == stringify(condition.equals)


def visible_questions(
    questions: Iterable[Question], answers: Mapping[str, Any],
) -> list[Question]:
    """Return the currently visible questions in render order."""
    ordered = sorted(questions, key=lambda q: q.order_index)
    return [q for q in ordered if is_visible(q, answers)]
