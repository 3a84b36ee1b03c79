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

"""Tests for promptlib.service — the operations exposed to callers."""

from __future__ import annotations

import pytest

from promptlib import PromptLibraryService
from promptlib.exceptions import LibraryDefinitionError


def _service():
    return PromptLibraryService.open(":memory:")


BLOG_QUESTIONS = [
    {"variable": "topic", "label": "Topic", "required": True},
    {
        "variable": "tone",
        "label": "Tone",
        "required": False,
        "showIf": {"variable": "topic", "equals": "blog"},
    },
]


class TestLibraries:
    def test_end_to_end_scenario(self):
        service = _service()
        lib = service.create_library(
            "Blog", "Write about {{topic}} in a {{tone}} tone.", questions=BLOG_QUESTIONS,
        )

        ok = service.validate_and_render(lib.id, {"topic": "blog", "tone": "fun"})
        assert ok.ok
        assert ok.prompt == "Write about blog in a fun tone."

        incomplete = service.validate_and_render(lib.id, {})
        assert not incomplete.ok
        assert incomplete.missing == ["topic"]

    def test_unknown_or_disabled_library(self):
        service = _service()
        result = service.validate_and_render(999, {"topic": "x"})
        assert not result.ok
        assert result.missing == []

        lib = service.create_library("Off", "{{x}}", enabled=False)
        assert not service.validate_and_render(lib.id, {}).ok

    def test_list_accessible_libraries(self):
        service = _service()
        everywhere = service.create_library("Global", "g")
        only_seven = service.create_library("Seven", "s", workspace_ids=[7])
        service.create_library("Disabled", "d", enabled=False)

        assert [lib["id"] for lib in service.list_accessible_libraries(7)] == [
            everywhere.id, only_seven.id,
        ]
        assert [lib["id"] for lib in service.list_accessible_libraries(8)] == [everywhere.id]

    def test_user_facing_listing_hides_assignments(self):
        service = _service()
        service.create_library("Seven", "s", workspace_ids=[7])
        (listed,) = service.list_accessible_libraries(7)
        assert "workspace_ids" not in listed
        assert listed["name"] == "Seven"

    def test_admin_view_includes_assignments(self):
        service = _service()
        lib = service.create_library("Seven", "s", workspace_ids=["7"])
        assert service.get_library(lib.id).workspace_ids == [7]

    def test_set_workspace_assignments(self):
        service = _service()
        lib = service.create_library("Lib", "x")
        assert [lib["id"] for lib in service.list_accessible_libraries(8)] == [lib.id]

        assert service.set_workspace_assignments(lib.id, [7, 7])
        assert service.get_library(lib.id).workspace_ids == [7]
        assert service.list_accessible_libraries(8) == []

        assert service.set_workspace_assignments(lib.id, [])
        assert [lib["id"] for lib in service.list_accessible_libraries(8)] == [lib.id]

        assert not service.set_workspace_assignments(12345, [1])

    def test_update_library(self):
        service = _service()
        lib = service.create_library("Lib", "{{a}}", questions=[{"variable": "a"}])
        updated = service.update_library(
            lib.id,
            template="{{b}}!",
            questions=[{"variable": "B"}],
            workspace_ids=[2],
        )
        assert updated.template == "{{b}}!"
        assert [q.variable for q in updated.questions] == ["b"]
        assert updated.workspace_ids == [2]
        assert service.validate_and_render(lib.id, {"b": "yes"}).prompt == "yes!"

    def test_update_library_rejects_blank_name(self):
        service = _service()
        lib = service.create_library("Lib", "x")
        with pytest.raises(LibraryDefinitionError):
            service.update_library(lib.id, name="  ")

    def test_create_library_rejects_self_reference(self):
        service = _service()
        with pytest.raises(LibraryDefinitionError):
            service.create_library(
                "Lib", "x", questions=[{"variable": "a", "showIf": {"variable": "a", "equals": "1"}}],
            )
        assert service.list_libraries() == []

    def test_delete_library(self):
        service = _service()
        lib = service.create_library("Lib", "x", questions=[{"variable": "a"}], workspace_ids=[1])
        assert service.delete_library(lib.id)
        assert service.get_library(lib.id) is None
        assert service.list_accessible_libraries(1) == []


class TestTemplates:
    def test_set_default_template(self):
        service = _service()
        a = service.create_template("A", "a")
        b = service.create_template("B", "b", is_default=True)

        assert service.set_default_template(a.id)
        assert service.get_template(a.id).is_default
        assert not service.get_template(b.id).is_default
        assert not service.set_default_template(999)

    def test_resolve_active_template(self):
        service = _service()
        ws = service.create_workspace("team", "Team")
        default = service.create_template("Default", "d", is_default=True)
        chosen = service.create_template("Chosen", "c")

        assert service.resolve_active_template(ws.id).id == default.id
        assert service.set_active_template(ws.id, chosen.id)
        assert service.resolve_active_template(ws.id).id == chosen.id

    def test_disabled_active_template_falls_back(self):
        service = _service()
        ws = service.create_workspace("team")
        default = service.create_template("Default", "d", is_default=True)
        chosen = service.create_template("Chosen", "c")
        service.set_active_template(ws.id, chosen.id)

        service.update_template(chosen.id, enabled=False)
        assert service.resolve_active_template(ws.id).id == default.id

        service.update_template(default.id, enabled=False)
        assert service.resolve_active_template(ws.id) is None

    def test_deleted_active_template_falls_back(self):
        service = _service()
        ws = service.create_workspace("team")
        default = service.create_template("Default", "d", is_default=True)
        chosen = service.create_template("Chosen", "c")
        service.set_active_template(ws.id, chosen.id)
        assert service.delete_template(chosen.id)
        assert service.resolve_active_template(ws.id).id == default.id

    def test_clear_active_template(self):
        service = _service()
        ws = service.create_workspace("team")
        chosen = service.create_template("Chosen", "c")
        service.set_active_template(ws.id, chosen.id)
        assert service.set_active_template(ws.id, None)
        assert service.get_workspace(ws.id).active_template_id is None
        assert service.resolve_active_template(ws.id) is None

    def test_set_active_template_isolated_per_workspace(self):
        service = _service()
        a = service.create_workspace("a")
        b = service.create_workspace("b")
        t = service.create_template("T", "t")
        service.set_active_template(a.id, t.id)
        assert service.get_workspace_by_slug("b").active_template_id is None
        assert service.get_workspace(b.id).active_template_id is None

    def test_unknown_workspace(self):
        service = _service()
        service.create_template("Default", "d", is_default=True)
        assert service.resolve_active_template(404) is None
        assert not service.set_active_template(404, 1)

    def test_enabled_listing(self):
        service = _service()
        service.create_template("On", "x")
        service.create_template("Off", "x", enabled=False)
        assert [t.name for t in service.list_enabled_templates()] == ["On"]
        assert len(service.list_templates()) == 2

    def test_create_template_requires_content(self):
        with pytest.raises(LibraryDefinitionError):
            _service().create_template("Name", "   ")


def test_open_file_database(tmp_path):
    path = tmp_path / "prompts.db"
    service = PromptLibraryService.open(path)
    service.create_template("A", "a", is_default=True)
    service.close()

    reopened = PromptLibraryService.open(path)
    assert reopened.list_templates()[0].is_default
    reopened.close()
