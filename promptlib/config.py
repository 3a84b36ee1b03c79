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

"""Default locations for the prompt library database.

``PROMPTLIB_DB`` overrides everything.  Otherwise the database lives in a
platform-appropriate data directory:

* macOS: ``~/Library/Application Support/promptlib/prompt_library.db``
* Linux: ``$XDG_DATA_HOME/promptlib/prompt_library.db``
  (``~/.local/share`` when unset)
* Windows: ``%LOCALAPPDATA%/promptlib/prompt_library.db``
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

DB_ENV_VAR = "PROMPTLIB_DB"
DB_FILENAME = "prompt_library.db"


def _default_data_dir() -> Path:
    """Return a platform-appropriate data directory for promptlib."""
    system = platform.system()
    if system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "Windows":
        local = os.environ.get("LOCALAPPDATA")
        base = Path(local) if local else Path.home() / "AppData" / "Local"
    else:
        xdg = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "promptlib"


def default_database_path() -> Path:
    """Resolve the database file used when no path is given explicitly."""
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return _default_data_dir() / DB_FILENAME
