"""Render request descriptions from route documentation fields.

A route's ``description``, ``expands`` and ``scopes`` are combined into a
Markdown description through a Jinja2 template. Routes may carry their own
template in ``doc_pattern``; the rest use :data:`DEFAULT_DOC_PATTERN`.

Templates see ``description``, ``expands``, ``scopes``, the pre-formatted
``expands_list`` / ``scopes_list`` strings, and the ``route`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment

if TYPE_CHECKING:
    from routedoc.models import RouteDescriptor


DEFAULT_DOC_PATTERN = """\
{{ description }}
{% if expands %}

**Available expands:** {{ expands_list }}
{% endif %}
{% if scopes %}

**Required scopes:** {{ scopes_list }}
{% endif %}
"""

_env = Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _code_list(values: list[str]) -> str:
    return ", ".join(f"`{value}`" for value in values)


def render_route_docs(route: RouteDescriptor) -> str:
    """Return the Markdown description for *route*, or ``""`` when it has none."""
    template = _env.from_string(route.doc_pattern or DEFAULT_DOC_PATTERN)
    rendered = template.render(
        description=route.description or "",
        expands=route.expands,
        scopes=route.scopes,
        expands_list=_code_list(route.expands),
        scopes_list=_code_list(route.scopes),
        route=route,
    )
    return rendered.strip()
