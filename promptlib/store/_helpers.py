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

"""Shared bits of the store modules."""

from __future__ import annotations

from datetime import UTC, datetime


class RowMissing(LookupError):
    """Raised inside a transaction to abandon a write whose target row is gone."""


def now_iso() -> str:
    """Return the current UTC datetime as an ISO string."""
    return datetime.now(tz=UTC).isoformat()


def as_bool(value: object) -> bool:
    return bool(int(value)) if value is not None else False
