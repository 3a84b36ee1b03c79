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

"""Tests for promptlib.config."""

from __future__ import annotations

from pathlib import Path

from promptlib import config


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(config.DB_ENV_VAR, str(tmp_path / "custom.db"))
    assert config.default_database_path() == tmp_path / "custom.db"


def test_linux_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv(config.DB_ENV_VAR, raising=False)
    monkeypatch.setattr(config.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert config.default_database_path() == tmp_path / "promptlib" / config.DB_FILENAME


def test_linux_without_xdg(monkeypatch):
    monkeypatch.delenv(config.DB_ENV_VAR, raising=False)
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setattr(config.platform, "system", lambda: "Linux")
    expected = Path.home() / ".local" / "share" / "promptlib" / config.DB_FILENAME
    assert config.default_database_path() == expected


def test_macos(monkeypatch):
    monkeypatch.delenv(config.DB_ENV_VAR, raising=False)
    monkeypatch.setattr(config.platform, "system", lambda: "Darwin")
    path = config.default_database_path()
    assert path.parts[-3:] == ("Application Support", "promptlib", config.DB_FILENAME)
    assert "Library" in path.parts
