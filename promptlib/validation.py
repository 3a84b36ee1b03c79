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

"""Answer validation for a library's question form."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from promptlib.models import Question
from promptlib.values import AnswerValue, decode_answer, to_wire
from promptlib.visibility import is_visible


def is_blank(value: Any) -> bool:
    """True for a missing, ``None`` or whitespace-only answer.

    Non-string answers are judged by their wire form, so an empty selection
    is blank just as it would leave its placeholder unrendered.
    """
    return to_wire(value).strip() == ""


def validate(questions: Iterable[Question], answers: Mapping[str, Any]) -> list[str]:
    """Return the variables of visible required questions that lack an answer.

    The list follows ``order_index`` so that callers can point the user at
    the first missing field.  Hidden questions are never reported, even if
    required.  Re-run after every answer change: showing a question can add
    a violation and hiding one can resolve it.
    """
    missing: list[str] = []
    for question in sorted(questions, key=lambda q: q.order_index):
        if not question.required:
            continue
        if not is_visible(question, answers):
            continue
        if is_blank(answers.get(question.variable)):
            missing.append(question.variable)
    return missing


def is_complete(questions: Iterable[Question], answers: Mapping[str, Any]) -> bool:
    return not validate(questions, answers)


def default_answers(questions: Iterable[Question]) -> dict[str, str]:
    """Build the initial answer set for a freshly selected library.

    Each question contributes its ``default_value`` if it has one and is
    visible under the defaults themselves.  Dropping a default can hide
    further questions, so filtering repeats until nothing changes.
    """
    questions = list(questions)
    answers = {
        q.variable: q.default_value
        for q in questions
        if q.default_value is not None and q.default_value != ""
    }
    by_variable = {q.variable: q for q in questions}

    while True:
        kept = {
            variable: value
            for variable, value in answers.items()
            if is_visible(by_variable[variable], answers)
        }
        if len(kept) == len(answers):
            return kept
        answers = kept


def decode_answers(
    questions: Iterable[Question], answers: Mapping[str, Any],
) -> dict[str, AnswerValue]:
    """Decode the answers of the visible questions into typed values.

    Unanswered questions are omitted.
    """
    decoded: dict[str, AnswerValue] = {}
    for question in questions:
        if question.variable not in answers or not is_visible(question, answers):
            continue
        decoded[question.variable] = decode_answer(question.type, answers[question.variable])
    return decoded
