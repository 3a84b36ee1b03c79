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

"""Tests for promptlib.values."""

from __future__ import annotations

import pytest

from promptlib.models import QuestionType
from promptlib.values import (
    DECODERS,
    BooleanValue,
    ListValue,
    NumberValue,
    TextValue,
    decode_answer,
    split_selection,
    to_wire,
    toggle_selection,
)


class TestDecoders:
    def test_every_question_type_has_a_decoder(self):
        assert set(DECODERS) == set(QuestionType)

    @pytest.mark.parametrize("qtype", [QuestionType.TEXT, QuestionType.TEXTAREA, QuestionType.SELECT])
    def test_text_like(self, qtype):
        assert decode_answer(qtype, "hello") == TextValue("hello")

    def test_number(self):
        assert decode_answer(QuestionType.NUMBER, " 12.5 ") == NumberValue(12.5, " 12.5 ")

    def test_unparseable_number(self):
        assert decode_answer(QuestionType.NUMBER, "twelve") == NumberValue(None, "twelve")

    @pytest.mark.parametrize("raw, expected", [("true", True), ("TRUE", True), ("false", False), ("", False), (True, True)])
    def test_checkbox(self, raw, expected):
        assert decode_answer(QuestionType.CHECKBOX, raw) == BooleanValue(expected)

    def test_multiselect(self):
        assert decode_answer(QuestionType.MULTISELECT, "a, b ,,c") == ListValue(("a", "b", "c"))

    def test_none_decodes_as_empty(self):
        assert decode_answer(QuestionType.TEXT, None) == TextValue("")
        assert decode_answer(QuestionType.MULTISELECT, None) == ListValue(())


class TestToWire:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            ("x", "x"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            (["a", " b ", ""], "a, b"),
            (TextValue("t"), "t"),
            (NumberValue(4.0, "4.0"), "4"),
            (NumberValue(None, "abc"), "abc"),
            (BooleanValue(False), "false"),
            (ListValue(("x", "y")), "x, y"),
        ],
    )
    def test_to_wire(self, value, expected):
        assert to_wire(value) == expected


class TestSelection:
    def test_split(self):
        assert split_selection("a, b") == ["a", "b"]
        assert split_selection("") == []

    def test_toggle_adds_and_removes(self):
        value = toggle_selection(None, "Email")
        assert value == "Email"
        value = toggle_selection(value, "Chat")
        assert value == "Email, Chat"
        value = toggle_selection(value, "Email")
        assert value == "Chat"
