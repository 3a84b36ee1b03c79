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

"""Tests for promptlib.validation."""

from __future__ import annotations

from promptlib.codec import ShowIf
from promptlib.models import Question, QuestionType
from promptlib.validation import decode_answers, default_answers, is_complete, validate
from promptlib.values import BooleanValue, ListValue, NumberValue, TextValue


def _topic_tone():
    return [
        Question(variable="topic", required=True, order_index=0),
        Question(
            variable="tone", required=False, order_index=1,
            show_if=ShowIf("topic", "blog"),
        ),
    ]


class TestValidate:
    def test_reports_missing_required(self):
        assert validate(_topic_tone(), {}) == ["topic"]

    def test_passes_when_answered(self):
        assert validate(_topic_tone(), {"topic": "blog", "tone": "fun"}) == []

    def test_whitespace_only_counts_as_missing(self):
        assert validate(_topic_tone(), {"topic": "   \n"}) == ["topic"]

    def test_none_counts_as_missing(self):
        assert validate(_topic_tone(), {"topic": None}) == ["topic"]

    def test_empty_selection_counts_as_missing(self):
        assert validate(_topic_tone(), {"topic": []}) == ["topic"]
        assert validate(_topic_tone(), {"topic": ["", "  "]}) == ["topic"]
        assert validate(_topic_tone(), {"topic": ["blog"]}) == []

    def test_numbers_and_booleans_are_answers(self):
        assert validate(_topic_tone(), {"topic": 0}) == []
        assert validate(_topic_tone(), {"topic": False}) == []

    def test_optional_never_reported(self):
        questions = [Question(variable="note", required=False)]
        assert validate(questions, {}) == []

    def test_hidden_required_question_not_reported(self):
        questions = [
            Question(variable="kind", required=False, order_index=0),
            Question(variable="detail", required=True, order_index=1, show_if=ShowIf("kind", "other")),
        ]
        assert validate(questions, {"kind": "standard"}) == []
        assert validate(questions, {"kind": "other"}) == ["detail"]

    def test_showing_and_hiding_changes_result(self):
        questions = [
            Question(variable="kind", required=True, order_index=0),
            Question(variable="detail", required=True, order_index=1, show_if=ShowIf("kind", "other")),
        ]
        answers = {"kind": "other"}
        assert validate(questions, answers) == ["detail"]
        answers["kind"] = "plain"
        assert validate(questions, answers) == []

    def test_order_follows_order_index(self):
        questions = [
            Question(variable="third", order_index=2),
            Question(variable="first", order_index=0),
            Question(variable="second", order_index=1),
        ]
        assert validate(questions, {}) == ["first", "second", "third"]

    def test_checkbox_false_is_an_answer(self):
        questions = [Question(variable="agree", type=QuestionType.CHECKBOX)]
        assert validate(questions, {"agree": "false"}) == []

    def test_is_complete(self):
        assert not is_complete(_topic_tone(), {})
        assert is_complete(_topic_tone(), {"topic": "news"})


class TestDefaultAnswers:
    def test_collects_defaults(self):
        questions = [
            Question(variable="a", default_value="1"),
            Question(variable="b"),
            Question(variable="c", default_value=""),
        ]
        assert default_answers(questions) == {"a": "1"}

    def test_default_of_hidden_question_dropped(self):
        questions = [
            Question(variable="topic", default_value="news"),
            Question(variable="tone", default_value="fun", show_if=ShowIf("topic", "blog")),
        ]
        assert default_answers(questions) == {"topic": "news"}

    def test_default_of_shown_question_kept(self):
        questions = [
            Question(variable="topic", default_value="blog"),
            Question(variable="tone", default_value="fun", show_if=ShowIf("topic", "blog")),
        ]
        assert default_answers(questions) == {"topic": "blog", "tone": "fun"}

    def test_chain_of_hidden_defaults(self):
        questions = [
            Question(variable="a", default_value="x", show_if=ShowIf("missing", "y")),
            Question(variable="b", default_value="x", show_if=ShowIf("a", "x")),
            Question(variable="c", default_value="x", show_if=ShowIf("b", "x")),
        ]
        assert default_answers(questions) == {}


class TestDecodeAnswers:
    def test_decodes_by_type(self):
        questions = [
            Question(variable="name"),
            Question(variable="count", type=QuestionType.NUMBER),
            Question(variable="ok", type=QuestionType.CHECKBOX),
            Question(variable="tags", type=QuestionType.MULTISELECT, options=["a", "b"]),
        ]
        decoded = decode_answers(
            questions, {"name": "Ada", "count": "3", "ok": "true", "tags": "a, b"},
        )
        assert decoded == {
            "name": TextValue("Ada"),
            "count": NumberValue(3.0, "3"),
            "ok": BooleanValue(True),
            "tags": ListValue(("a", "b")),
        }

    def test_skips_hidden_and_unanswered(self):
        questions = [
            Question(variable="a"),
            Question(variable="b", show_if=ShowIf("a", "show")),
            Question(variable="c"),
        ]
        assert decode_answers(questions, {"a": "hide", "b": "kept"}) == {"a": TextValue("hide")}
