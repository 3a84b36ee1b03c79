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

"""Decoding of the JSON-encoded auxiliary question fields.

Questions store their choice list (``options``) and their visibility
condition (``show_if``) as JSON text.  Rows written by older tools, or
edited by hand, can hold anything in those columns, so decoding is
tolerant: a value that does not decode to the expected shape is treated as
absent.  A question with a corrupt condition is then always shown and a
question with corrupt options offers no choices.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class _Absent:
    """Marker for a value that was never given, as opposed to ``None`` or ``""``."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class ShowIf:
    """Single equality clause: show the question when *variable* equals *equals*."""

    variable: str
    equals: Any = ABSENT

    def to_dict(self) -> dict[str, Any]:
        if self.equals is ABSENT:
            return {"variable": self.variable}
        return {"variable": self.variable, "equals": self.equals}


def _decode_json(raw: str | bytes, field_name: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed %s value: %r", field_name, raw)
        return None


def parse_options(raw: Any) -> list[str]:
    """Return the ordered option labels of a select/multiselect question.

    *raw* may be a list already, a JSON string, or ``None``.  Anything that
    is not a list after decoding yields ``[]``.
    """
    if raw is None or raw == "":
        return []
    value = _decode_json(raw, "options") if isinstance(raw, (str, bytes)) else raw
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def parse_show_if(raw: Any) -> ShowIf | None:
    """Return the visibility condition of a question, or ``None``.

    Accepts a :class:`ShowIf`, a mapping, a JSON string, or ``None``.  A
    condition without a usable ``variable`` is treated as absent.  A missing
    ``equals`` stays :data:`ABSENT`, which only matches an unanswered variable.
    """
    if isinstance(raw, ShowIf):
        return raw
    if raw is None or raw == "":
        return None
    value = _decode_json(raw, "show_if") if isinstance(raw, (str, bytes)) else raw
    if not isinstance(value, dict):
        return None
    variable = value.get("variable")
    if not isinstance(variable, str) or not variable.strip():
        return None
    return ShowIf(variable=variable, equals=value.get("equals", ABSENT))


def encode_options(options: list[str] | None) -> str | None:
    """JSON-encode an option list for storage (``None`` when empty)."""
    if not options:
        return None
    return json.dumps([str(o) for o in options])


def encode_show_if(show_if: ShowIf | None) -> str | None:
    """JSON-encode a visibility condition for storage."""
    if show_if is None:
        return None
    return json.dumps(show_if.to_dict())


def normalize_variable(name: str) -> str:
    """Turn a free-form variable name into a placeholder key.

    ``"Target Audience"`` becomes ``"target_audience"``.
    """
    return _WHITESPACE_RE.sub("_", name.strip()).lower()
