"""Built-in hooks: new post path resolution and fenced code block wrapping"""

import hashlib
import logging
import re
from html import escape
from pathlib import Path
from typing import Any

from mdpost.config import Settings
from mdpost.core.escape import CODE_BLOCK_CLOSE, CODE_BLOCK_OPEN
from mdpost.core.protocols import FileSystem
from mdpost.core.utils.dates import to_datetime
from mdpost.errors import InputError


logger = logging.getLogger(__name__)

PATTERN_KEY_RE = re.compile(r":(\w+)")
FILENAME_KEYS = {"year", "month", "i_month", "day", "i_day", "title", "hash"}
DEFAULT_EXT = ".md"

FENCE_RE = re.compile(
    r"^(?P<indent>[^\S\r\n]*)(?P<fence>`{3,}|~{3,})[^\S\r\n]*(?P<lang>[^\s`]*)[^\n]*\n"
    r"(?P<code>[\s\S]*?)"
    r"^(?P=indent)(?P=fence)[^\S\r\n]*$",
    re.MULTILINE,
)


class NewPostPath:
    """Resolve where a new document is written (the ``new_post_path`` hook).

    An explicit ``path`` is placed under the folder for its layout; otherwise
    pages become ``<slug>/index``, drafts ``_drafts/<slug>`` and everything else
    follows the ``new_post_name`` pattern under ``_posts``.
    """

    def __init__(self, config: Settings, fs: FileSystem) -> None:
        self.config = config
        self.fs = fs

    def _filename_data(self, data: dict[str, Any]) -> dict[str, str]:
        date = to_datetime(data["date"]) if data.get("date") else None
        if date is None:
            raise InputError("A post date is required to name the file")
        slug = data["slug"]
        values = {
            "year":    date.strftime("%Y"),
            "month":   date.strftime("%m"),
            "i_month": str(date.month),
            "day":     date.strftime("%d"),
            "i_day":   str(date.day),
            "title":   slug,
            "hash":    hashlib.sha1(f"{slug}{int(date.timestamp())}".encode()).hexdigest()[:12],
        }
        for key, value in data.items():
            if key not in FILENAME_KEYS and isinstance(value, (str, int, float)):
                values[key] = str(value)
        return values

    def _target(self, data: dict[str, Any]) -> Path:
        source = self.config.source_path
        layout, path, slug = data.get("layout"), data.get("path"), data.get("slug")
        if path:
            match layout:
                case "page":
                    return source / path
                case "draft":
                    return source / "_drafts" / path
                case _:
                    return source / "_posts" / path
        if slug:
            match layout:
                case "page":
                    return source / slug / "index"
                case "draft":
                    return source / "_drafts" / slug
                case _:
                    values = self._filename_data(data)
                    name = PATTERN_KEY_RE.sub(lambda m: values.get(m.group(1), ""), self.config.new_post_name)
                    return source / "_posts" / name
        raise InputError("Either path or slug is required")

    async def _free_path(self, target: Path) -> Path:
        """First of target, target-1, target-2, ... that does not exist yet."""
        candidate, i = target, 0
        while await self.fs.exists(candidate):
            i += 1
            candidate = target.with_name(f"{target.stem}-{i}{target.suffix}")
        if i:
            logger.debug("%s exists, using %s", target, candidate)
        return candidate

    async def __call__(self, data: dict[str, Any], replace: bool = False) -> Path:
        target = self._target(data)
        if not target.suffix:
            target = target.with_name(target.name + (Path(self.config.new_post_name).suffix or DEFAULT_EXT))
        if replace:
            return target
        return await self._free_path(target)


def wrap_code_block(code: str, lang: str) -> str:
    """Render a code block to HTML inside the code block sentinel."""
    lang = escape(lang or "plaintext")
    body = escape(code.rstrip("\n"), quote=False)
    return (
        f'{CODE_BLOCK_OPEN}<figure class="highlight {lang}"><pre><code class="{lang}">'
        f"{body}</code></pre></figure>{CODE_BLOCK_CLOSE}"
    )


class CodeBlockFilter:
    """``before_post_render`` hook turning fenced code into pre-rendered, escapable HTML."""

    def __init__(self, config: Settings) -> None:
        self.config = config

    def __call__(self, data) -> None:
        if not self.config.syntax_highlighter or not data.content:
            return None
        data.content = FENCE_RE.sub(
            lambda m: m.group("indent") + wrap_code_block(m.group("code"), m.group("lang")),
            data.content,
        )
        return None
