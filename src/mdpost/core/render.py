"""Post render pipeline: hooks, escaping, content renderer, template pass, restoration"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdpost.config import Settings
from mdpost.core.escape import PostRenderEscape
from mdpost.core.protocols import ContentRenderer, FileSystem, HookRunner, TemplateRenderer
from mdpost.errors import InputError
from mdpost.extend.renderer import RenderRequest


logger = logging.getLogger(__name__)

POST_OUTPUTS = ("html", "htm")


@dataclass
class RenderData:
    """Mutable record threaded through the render hooks.

    ``source`` is the site-relative source file of the page; when it is unset
    (e.g. a tag plugin rendering a snippet) the content is treated as a post.
    ``disable_template`` overrides the renderer's own setting when not None.
    """
    content:          str | None = None
    source:           str | None = None
    engine:           str | None = None
    disable_template: bool | None = None
    markdown:         dict[str, Any] = field(default_factory=dict)
    page:             dict[str, Any] = field(default_factory=dict)

    def variables(self) -> dict[str, Any]:
        """Template variables for the in-post template pass."""
        variables = {k: v for k, v in self.page.items() if isinstance(k, str)}
        variables.update(page=self.page, source=self.source, content=self.content)
        return variables


class RenderPipeline:
    def __init__(
        self,
        config: Settings,
        hooks: HookRunner,
        renderer: ContentRenderer,
        template: TemplateRenderer,
        fs: FileSystem,
    ) -> None:
        self.config = config
        self.hooks = hooks
        self.renderer = renderer
        self.template = template
        self.fs = fs

    def _is_post(self, data: RenderData) -> bool:
        return not data.source or self.renderer.get_output(data.source) in POST_OUTPUTS

    def _template_disabled(self, source: str | None, data: RenderData) -> bool:
        if isinstance(data.disable_template, bool):
            return data.disable_template
        ext = data.engine or (Path(source).suffix if source else "")
        entry = self.renderer.get(ext) if ext else None
        return bool(entry and entry.disable_template)

    async def _load(self, source: str | None, data: RenderData) -> str:
        if data.content is not None:
            return data.content
        if source:
            return await self.fs.read_file(Path(source))
        raise InputError("No input file or string!")

    async def render(self, source: str | None, data: RenderData | None = None) -> RenderData:
        """Render a post (or pass-through asset) and return the final RenderData."""
        data = data or RenderData()
        data.content = await self._load(source, data)

        if not self._is_post(data):
            logger.debug("Rendering file: %s", source)
            data.content = await self.renderer.render(
                RenderRequest(text=data.content, path=source, engine=data.engine)
            )
            return data

        disable_template = self._template_disabled(source, data)
        escaper = PostRenderEscape()

        data = await self.hooks.run("before_post_render", data)

        data.content = escaper.escape_code_blocks(data.content)
        if not disable_template:
            data.content = escaper.escape_all_tags(data.content)
        logger.debug("Escaped %d region(s) in %s", len(escaper.table), source)

        options = dict(data.markdown)
        if not self.config.syntax_highlighter:
            options["highlight"] = None

        async def on_render_end(content: str) -> str:
            data.content = escaper.restore_all_tags(content)
            if disable_template:
                return data.content
            return await self.template.render(data.content, data.variables())

        logger.debug("Rendering post: %s", source)
        content = await self.renderer.render(
            RenderRequest(text=data.content, path=source, engine=data.engine, on_render_end=on_render_end),
            options,
        )
        data.content = escaper.restore_code_blocks(content)

        return await self.hooks.run("after_post_render", data)
