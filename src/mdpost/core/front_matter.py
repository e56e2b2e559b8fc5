"""Front matter split/parse/stringify for YAML (``---``) and JSON (``;;;``) dialects"""

import json
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import yaml

from mdpost.core.utils.dates import format_timestamp
from mdpost.errors import FrontMatterError


# ---\ndata\n---\ncontent
PREFIXED_RE = re.compile(r"^(-{3,}|;{3,})\r?\n([\s\S]+?)\r?\n\1[^\S\r\n]*(?:\r?\n|$)([\s\S]*)")
# data\n---\ncontent
TRAILING_RE = re.compile(r"^([\s\S]+?)\r?\n(-{3,}|;{3,})[^\S\r\n]*(?:\r?\n|$)([\s\S]*)")

YAML_SEPARATOR = "---"
JSON_SEPARATOR = ";;;"


@dataclass
class Splitted:
    """A document cut at its front matter separator."""
    content:          str
    data:             str | None = None
    separator:        str = YAML_SEPARATOR
    prefix_separator: bool = False

    @property
    def json_mode(self) -> bool:
        return self.separator.startswith(";")


def split(text: str) -> Splitted:
    """Split text into front matter data and body; data is None when there is no header."""
    if m := PREFIXED_RE.match(text):
        return Splitted(data=m.group(2), content=m.group(3), separator=m.group(1), prefix_separator=True)
    if m := TRAILING_RE.match(text):
        return Splitted(data=m.group(1), content=m.group(3), separator=m.group(2), prefix_separator=False)
    return Splitted(content=text)


def load(data: str, json_mode: bool) -> dict[str, Any]:
    """Decode front matter text: JSON members (braces implied) or a YAML mapping."""
    if json_mode:
        try:
            fm = json.loads(f"{{{data}}}")
        except json.JSONDecodeError as e:
            raise FrontMatterError(f"Invalid JSON frontmatter: {e}") from e
    else:
        try:
            fm = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise FrontMatterError(f"Invalid YAML frontmatter: {e}") from e
    if fm is None:
        return {}
    if not isinstance(fm, dict):
        raise FrontMatterError(f"Invalid frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm


def parse(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body); a document with no header yields ({}, text).

    A header opened by a separator must decode to a mapping. Without the opening
    separator the leading text may just be a paragraph above a horizontal rule,
    so a failed decode there means the document has no header.
    """
    splitted = split(text)
    if splitted.data is None:
        return {}, text
    if not splitted.prefix_separator:
        try:
            return load(splitted.data, splitted.json_mode), splitted.content
        except FrontMatterError:
            return {}, text
    return load(splitted.data, splitted.json_mode), splitted.content


def _json_default(value):
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _format_json(data: dict[str, Any]) -> str:
    if not data:
        return ""
    body = json.dumps(data, indent=2, ensure_ascii=False, default=_json_default)
    return body[1:-1].strip("\n") + "\n"


def _format_yaml(data: dict[str, Any]) -> str:
    """Dump data as YAML; None values become bare ``key:`` lines and datetimes plain timestamps."""
    plain = {k: v for k, v in data.items() if v is not None and not isinstance(v, datetime)}
    result = yaml.dump(plain, default_flow_style=False, allow_unicode=True, sort_keys=False) if plain else ""
    for key, value in data.items():
        if isinstance(value, datetime):
            result += f"{key}: {format_timestamp(value)}\n"
        elif value is None:
            result += f"{key}:\n"
    return result


def stringify(data: dict[str, Any], json_mode: bool = False, content: str = "", prefix_separator: bool = False) -> str:
    """Serialize front matter followed by its closing separator and the body."""
    separator = JSON_SEPARATOR if json_mode else YAML_SEPARATOR
    result = f"{separator}\n" if prefix_separator else ""
    result += _format_json(data) if json_mode else _format_yaml(data)
    return f"{result}{separator}\n{content}"
