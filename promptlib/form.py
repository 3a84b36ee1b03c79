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

"""Request-scoped answer state for one selected library.

A :class:`FormSession` is owned by whoever drives the form (a request
handler, a CLI prompt loop) and is discarded after a successful submit or
when the user picks another library.  Nothing is kept at module level.

Usage::

    session = FormSession.start(library)
    session.set_answer("topic", "blog")
    session.missing()      # -> [] once every visible required field is filled
    result = session.submit()
    if result.ok:
        send(result.prompt)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from promptlib.models import Library, Question, RenderResult
from promptlib.render import render
from promptlib.validation import decode_answers, default_answers, validate
from promptlib.values import AnswerValue, to_wire, toggle_selection
from promptlib.visibility import visible_questions


@dataclass
class FormSession:
    """Answers being collected for *library*.

    Answers to questions that become hidden are kept, so toggling a
    controlling answer back restores what the user typed.
    """

    library: Library
    answers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def start(cls, library: Library) -> FormSession:
        """Open a form pre-filled with the library's default answers."""
        return cls(library=library, answers=default_answers(library.questions))

    def question(self, variable: str) -> Question | None:
        for q in self.library.questions:
            if q.variable == variable:
                return q
        return None

    def set_answer(self, variable: str, value: Any) -> None:
        """Record an answer; booleans, numbers and lists are stored in wire form."""
        self.answers[variable] = to_wire(value)

    def clear_answer(self, variable: str) -> None:
        self.answers.pop(variable, None)

    def toggle_option(self, variable: str, option: str) -> None:
        """Flip one option of a multiselect answer."""
        self.answers[variable] = toggle_selection(self.answers.get(variable), option)

    def visible_questions(self) -> list[Question]:
        return visible_questions(self.library.questions, self.answers)

    def missing(self) -> list[str]:
        return validate(self.library.questions, self.answers)

    def typed_answers(self) -> dict[str, AnswerValue]:
        return decode_answers(self.library.questions, self.answers)

    def submit(self) -> RenderResult:
        """Validate, then render the library template once."""
        missing = self.missing()
        if missing:
            return RenderResult.incomplete(missing)
        return RenderResult.success(render(self.library.template, self.answers))
