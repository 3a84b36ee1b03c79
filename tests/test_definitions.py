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

"""Tests for promptlib.definitions."""

from __future__ import annotations

import logging

import pytest

from promptlib.codec import ShowIf
from promptlib.definitions import (
    build_library,
    build_question,
    build_questions,
    build_template,
    normalize_workspace_ids,
)
from promptlib.exceptions import LibraryDefinitionError, PromptLibraryError
from promptlib.models import Question, QuestionType


class TestBuildQuestion:
    def test_normalises_variable_and_defaults(self):
        q = build_question({"variable": " Target Audience ", "label": "Audience"}, 3)
        assert q.variable == "target_audience"
        assert q.type is QuestionType.TEXT
        assert q.required is True
        assert q.order_index == 3

    def test_label_defaults_to_variable(self):
        assert build_question({"variable": "topic"}, 0).label == "topic"

    def test_required_only_false_when_explicit(self):
        assert build_question({"variable": "a", "required": False}, 0).required is False
        assert build_question({"variable": "a", "required": None}, 0).required is True

    def test_options_kept_for_choice_types_only(self):
        select = build_question({"variable": "a", "type": "select", "options": ["x", "y"]}, 0)
        text = build_question({"variable": "b", "type": "text", "options": ["x"]}, 0)
        assert select.options == ["x", "y"]
        assert text.options == []

    def test_camel_case_keys(self):
        q = build_question(
            {
                "variable": "tone",
                "defaultValue": "fun",
                "orderIndex": 9,
                "showIf": {"variable": "Topic", "equals": "blog"},
            },
            0,
        )
        assert q.default_value == "fun"
        assert q.order_index == 9
        assert q.show_if == ShowIf("topic", "blog")

    def test_accepts_question_instance(self):
        q = build_question(Question(variable="x", type=QuestionType.NUMBER), 0)
        assert q.type is QuestionType.NUMBER

    def test_missing_variable(self):
        with pytest.raises(LibraryDefinitionError) as exc:
            build_question({"label": "No var"}, 2)
        assert exc.value.field == "questions[2].variable"

    def test_unknown_type(self):
        with pytest.raises(LibraryDefinitionError):
            build_question({"variable": "a", "type": "date"}, 0)

    def test_self_reference_rejected(self):
        with pytest.raises(LibraryDefinitionError):
            build_question({"variable": "a", "show_if": {"variable": "a", "equals": "x"}}, 0)


class TestBuildQuestions:
    def test_duplicates_rejected(self):
        with pytest.raises(LibraryDefinitionError):
            build_questions([{"variable": "Topic"}, {"variable": "topic"}])

    def test_unknown_reference_only_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="promptlib.definitions"):
            questions = build_questions(
                [{"variable": "a", "show_if": {"variable": "ghost", "equals": "1"}}],
            )
        assert questions[0].show_if == ShowIf("ghost", "1")
        assert "ghost" in caplog.text


class TestBuildLibrary:
    def test_valid(self):
        lib = build_library(
            " Blog ",
            "Write about {{topic}}",
            questions=[{"variable": "topic"}],
            workspace_ids=["3", 3, 4],
        )
        assert lib.name == "Blog"
        assert lib.workspace_ids == [3, 4]
        assert lib.id is None

    @pytest.mark.parametrize("name, template", [("", "x"), ("n", ""), ("n", "   "), (None, "x")])
    def test_required_fields(self, name, template):
        with pytest.raises(PromptLibraryError):
            build_library(name, template)


class TestBuildTemplate:
    def test_valid(self):
        t = build_template("Support", "Be kind.", is_default=True)
        assert t.is_default is True

    def test_content_required(self):
        with pytest.raises(LibraryDefinitionError):
            build_template("Support", "")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_template("", "x")


class TestWorkspaceIds:
    def test_invalid_id(self):
        with pytest.raises(LibraryDefinitionError):
            normalize_workspace_ids(["abc"])
