"""Site context: configuration plus the collaborators the post core runs on"""

import logging
from collections import defaultdict
from typing import Any, Callable

from mdpost.config import Settings
from mdpost.core.compose import FrontMatterComposer
from mdpost.core.post import PostLifecycleManager
from mdpost.core.render import RenderPipeline
from mdpost.core.scaffold import ScaffoldStore
from mdpost.core.utils.slug import slugize
from mdpost.extend.filters import CodeBlockFilter, NewPostPath
from mdpost.extend.hooks import HookRegistry
from mdpost.extend.renderer import Renderer, register_defaults
from mdpost.extend.template import TemplateEngine
from mdpost.util.fs import LocalFileSystem


logger = logging.getLogger(__name__)


class Site:
    """Wires default collaborators; any of them may be replaced at construction."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        fs=None,
        hooks: HookRegistry | None = None,
        renderer: Renderer | None = None,
        template: TemplateEngine | None = None,
        scaffolds=None,
    ) -> None:
        self.config = config or Settings()
        self.fs = fs or LocalFileSystem()
        self.hooks = hooks or HookRegistry()
        self.renderer = renderer or Renderer()
        self.template = template or TemplateEngine()
        self.scaffolds = scaffolds or ScaffoldStore(self.config.scaffold_path, self.fs)
        self._listeners: dict[str, list[Callable]] = defaultdict(list)

        if hooks is None:
            self.hooks.register("new_post_path", NewPostPath(self.config, self.fs))
            self.hooks.register("before_post_render", CodeBlockFilter(self.config))
        if renderer is None:
            register_defaults(self.renderer, self.config.markdown_preset)
        if template is None:
            self.template.register_filter(
                "slugize", lambda value: slugize(str(value), transform=self.config.filename_case)
            )

        self.composer = FrontMatterComposer(self.scaffolds, self.template)
        self.post = PostLifecycleManager(self.config, self.hooks, self.fs, self.composer, self)
        self.pipeline = RenderPipeline(self.config, self.hooks, self.renderer, self.template, self.fs)

    def on(self, event: str, listener: Callable[[Any], None]) -> None:
        self._listeners[event].append(listener)

    def emit(self, event: str, payload: Any) -> None:
        logger.debug("Event %s", event)
        for listener in list(self._listeners.get(event, [])):
            listener(payload)
