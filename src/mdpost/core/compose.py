"""Compose new document text from a layout scaffold and caller metadata"""

import logging
from datetime import date, datetime
from typing import Any

import yaml

from mdpost.core import front_matter
from mdpost.core.protocols import ScaffoldSource, TemplateRenderer
from mdpost.core.utils.dates import format_utc
from mdpost.errors import ConfigurationError


logger = logging.getLogger(__name__)

# Consumed by document creation itself; never copied into the front matter.
RESERVED_KEYS = frozenset({"title", "slug", "path", "layout", "date", "content"})

FALLBACK_LAYOUT = "normal"
YAML_SPECIAL_CHARS = (":", "{", "}", "[", "]", "'", '"')


def _is_plain_scalar(value: str) -> bool:
    """True if value reads back unchanged as an unquoted YAML scalar."""
    try:
        return yaml.safe_load(f"k: {value}") == {"k": value}
    except yaml.YAMLError:
        return False


def _needs_quotes(value: str, json_mode: bool) -> bool:
    return (
        json_mode
        or value.startswith("#")
        or value.startswith("!!")
        or any(c in value for c in YAML_SPECIAL_CHARS)
        or not _is_plain_scalar(value)
    )


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def prepare_front_matter(data: dict[str, Any], json_mode: bool) -> dict[str, Any]:
    """Return a copy of data safe to interpolate into scaffold front matter.

    Datetimes become ``YYYY-MM-DD HH:MM:SS`` in UTC. Strings are double-quoted
    whenever the target dialect would misread them: always in JSON mode, and in
    YAML when they contain a colon, brace, bracket or quote, start with
    ``#`` or ``!!``, or would not read back as the same plain scalar. None
    renders as an empty value (``null`` in JSON mode) so it reads back as null.
    Other values pass through.
    """
    prepared = dict(data)
    for key, value in prepared.items():
        if value is None:
            prepared[key] = "null" if json_mode else ""
        elif isinstance(value, datetime):
            prepared[key] = format_utc(value)
        elif isinstance(value, date):
            prepared[key] = value.isoformat()
        elif isinstance(value, str) and _needs_quotes(value, json_mode):
            prepared[key] = _quote(value)
    return prepared


class FrontMatterComposer:
    """Builds the full text of a new document for a layout."""

    def __init__(self, scaffolds: ScaffoldSource, template: TemplateRenderer) -> None:
        self.scaffolds = scaffolds
        self.template = template

    async def get_scaffold(self, layout: str) -> str:
        scaffold = await self.scaffolds.get(layout)
        if scaffold is not None:
            return scaffold
        logger.debug("No scaffold for layout %r, using %r", layout, FALLBACK_LAYOUT)
        scaffold = await self.scaffolds.get(FALLBACK_LAYOUT)
        if scaffold is None:
            raise ConfigurationError(f'No scaffold for layout "{layout}" and no "{FALLBACK_LAYOUT}" scaffold')
        return scaffold

    async def render(self, data: dict[str, Any]) -> str:
        """Render the scaffold for data["layout"], merge metadata, and serialize the document."""
        splitted = front_matter.split(await self.get_scaffold(data["layout"]))
        json_mode = splitted.json_mode

        rendered = await self.template.render(splitted.data or "", prepare_front_matter(data, json_mode))
        merged = front_matter.load(rendered, json_mode)

        for key, value in data.items():
            if key not in RESERVED_KEYS and merged.get(key) is None:
                merged[key] = value

        content = f"{splitted.separator}\n" if splitted.prefix_separator else ""
        content += front_matter.stringify(merged, json_mode=json_mode)
        content += splitted.content
        if data.get("content"):
            content += f"\n{data['content']}"
        return content
