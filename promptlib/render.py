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

"""Placeholder substitution for library templates.

Only ``{{name}}`` tokens are recognised, where *name* is ASCII word
characters with no surrounding whitespace.  There are no expressions,
loops or escapes.  A placeholder without a non-empty answer is left in
the output verbatim so callers can detect an incomplete render with
:func:`unresolved_placeholders`.

Substitution is a single pass over the template: answer text that itself
looks like ``{{other}}`` is copied literally and never expanded.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from promptlib.values import to_wire

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}", re.ASCII)


def render(template_body: str, answers: Mapping[str, Any]) -> str:
    """Substitute *answers* into *template_body*.

    >>> render("Hello {{name}}!", {"name": "Ada"})
    'Hello Ada!'
    >>> render("Hello {{name}}!", {})
    'Hello {{name}}!'
    """

    def _substitute(match: re.Match[str]) -> str:
        value = answers.get(match.group(1))
        if value is None:
            return match.group(0)
        text = to_wire(value)
        return text if text != "" else match.group(0)

    return PLACEHOLDER_RE.sub(_substitute, template_body)


def placeholders(template_body: str) -> list[str]:
    """Distinct placeholder names in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER_RE.findall(template_body)))


def unresolved_placeholders(rendered: str) -> list[str]:
    """Placeholder names still present in a rendered prompt."""
    return placeholders(rendered)
