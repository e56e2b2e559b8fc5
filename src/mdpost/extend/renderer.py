"""Content renderer registry keyed by file extension, with a markdown-it renderer"""

import inspect
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from markdown_it import MarkdownIt

from mdpost.core.protocols import RenderEndCallback


@dataclass
class RenderRequest:
    """Text to render; the renderer is chosen by engine, else by the path extension."""
    text:          str
    path:          str | None = None
    engine:        str | None = None
    on_render_end: RenderEndCallback | None = None


@dataclass
class RendererEntry:
    fn:               Callable[[RenderRequest, dict[str, Any]], Any]
    output:           str
    disable_template: bool = False


def _ext(name: str | None) -> str:
    """Normalize 'md', '.md' or 'post.md' to 'md'."""
    if not name:
        return ""
    suffix = Path(name).suffix
    return (suffix or name).lstrip(".").lower()


class Renderer:
    """Extension → renderer mapping.

    ``render`` runs the renderer for the request, then ``on_render_end`` on its
    output; text with no matching renderer passes through untouched.
    """

    def __init__(self) -> None:
        self._store: dict[str, RendererEntry] = {}

    def register(self, name: str, output: str, fn: Callable, disable_template: bool = False) -> None:
        self._store[_ext(name)] = RendererEntry(fn=fn, output=_ext(output), disable_template=disable_template)

    def get(self, name: str) -> RendererEntry | None:
        return self._store.get(_ext(name))

    def is_renderable(self, path: str) -> bool:
        return self.get(path) is not None

    def get_output(self, path: str) -> str:
        """Output extension for path ('' when no renderer handles it)."""
        entry = self.get(path)
        return entry.output if entry else ""

    async def render(self, request: RenderRequest, options: dict[str, Any] | None = None) -> str:
        ext = _ext(request.engine) or _ext(request.path)
        entry = self._store.get(ext)
        if entry is None:
            result = request.text
        else:
            result = entry.fn(request, options or {})
            if inspect.isawaitable(result):
                result = await result
        result = "" if result is None else str(result)

        if request.on_render_end is not None:
            result = request.on_render_end(result)
            if inspect.isawaitable(result):
                result = await result
        return result


class MarkdownRenderer:
    """markdown-it renderer; per-call options may pass ``highlight`` (callable or None)."""

    def __init__(self, preset: str = "gfm-like") -> None:
        self.preset = preset

    def _make_parser(self, options: dict[str, Any]) -> MarkdownIt:
        update = {"linkify": False, "html": True}
        if "highlight" in options:
            update["highlight"] = options["highlight"]
        return MarkdownIt(self.preset, options_update=update)

    def __call__(self, request: RenderRequest, options: dict[str, Any]) -> str:
        return self._make_parser(options).render(request.text)


def passthrough(request: RenderRequest, options: dict[str, Any]) -> str:
    return request.text


def register_defaults(renderer: Renderer, markdown_preset: str = "gfm-like") -> None:
    """Install the built-in markdown and pass-through renderers."""
    markdown = MarkdownRenderer(markdown_preset)
    renderer.register("md", "html", markdown)
    renderer.register("markdown", "html", markdown)
    for ext in ("html", "htm"):
        renderer.register(ext, "html", passthrough)
    renderer.register("css", "css", passthrough)
    renderer.register("js", "js", passthrough)
