"""Handlebars-style prompt templates.

`{{name}}` substitutes the HTML-escaped value, `{{{name}}}` the raw value.
Only plain variable names are supported; the prompt templates use nothing else.
"""

import re
from typing import Any, Mapping, Set

PLACEHOLDER_RE = re.compile(r"\{\{\{\s*(\w+)\s*\}\}\}|\{\{\s*(\w+)\s*\}\}")

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "`": "&#x60;",
    "=": "&#x3D;",
}
_ESCAPE_RE = re.compile("[&<>\"'`=]")


def escape(value: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], value)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def template_variables(template: str) -> Set[str]:
    """Return the names of every placeholder used in `template`."""
    return {raw or escaped for raw, escaped in PLACEHOLDER_RE.findall(template)}


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """Substitute placeholders from `variables`. Missing names render as ''."""

    def _replace(match: re.Match) -> str:
        raw_name, escaped_name = match.group(1), match.group(2)
        if raw_name:
            return _to_text(variables.get(raw_name))
        return escape(_to_text(variables.get(escaped_name)))

    return PLACEHOLDER_RE.sub(_replace, template)
