"""Post lifecycle: create documents from metadata and publish drafts"""

import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from mdpost.config import Settings
from mdpost.core import front_matter
from mdpost.core.compose import FrontMatterComposer
from mdpost.core.protocols import EventSink, FileSystem, HookRunner
from mdpost.core.utils.dates import to_datetime
from mdpost.core.utils.slug import slugize
from mdpost.errors import DraftNotFoundError, InputError


logger = logging.getLogger(__name__)

DRAFTS_DIR = "_drafts"
NEW_POST_EVENT = "new"


@dataclass
class PostResult:
    path:    Path
    content: str


def _without_ext(path: Path) -> Path:
    return path.with_suffix("")


def _draft_pattern(slug: str) -> re.Pattern:
    """Match a drafts entry named slug plus at least one more non-separator character."""
    return re.compile(rf"{re.escape(slug)}[^/\\]+")


def _pick_draft(slug: str, names: list[str]) -> str | None:
    """Prefer the entry whose name up to its first dot is the slug, else the shortest match."""
    exact = [name for name in names if name.split(".", 1)[0] == slug]
    if exact:
        return exact[0]
    return min(names, key=len, default=None)


class PostLifecycleManager:
    """Creates posts and promotes drafts to posts.

    Both operations mutate the metadata dict they are given (slug, layout and
    date are normalized in place; publish also folds in the draft's front matter).
    """

    def __init__(
        self,
        config: Settings,
        hooks: HookRunner,
        fs: FileSystem,
        composer: FrontMatterComposer,
        events: EventSink,
    ) -> None:
        self.config = config
        self.hooks = hooks
        self.fs = fs
        self.composer = composer
        self.events = events

    @property
    def draft_dir(self) -> Path:
        return self.config.source_path / DRAFTS_DIR

    def _slug(self, value: Any) -> str:
        return slugize(str(value), transform=self.config.filename_case)

    def _layout(self, data: dict[str, Any]) -> str:
        return (data.get("layout") or self.config.default_layout).lower()

    async def _create_asset_folder(self, path: Path) -> None:
        if not self.config.post_asset_folder:
            return
        target = _without_ext(path)
        if target.name == "index":
            return
        if not await self.fs.exists(target):
            await self.fs.mkdirs(target)

    async def create(self, data: dict[str, Any], replace: bool = False) -> PostResult:
        """Write a new document for data and emit the ``new`` event.

        The target path comes from the ``new_post_path`` hook; with replace=False
        the hook picks a free filename instead of overwriting.
        """
        source = data.get("slug") or data.get("title")
        if not source:
            raise InputError("Either slug or title is required to create a post")
        data["slug"] = self._slug(source)
        data["layout"] = self._layout(data)
        try:
            data["date"] = to_datetime(data["date"]) if data.get("date") else datetime.now()
        except ValueError as e:
            raise InputError(str(e)) from e

        path, content = await asyncio.gather(
            self.hooks.run("new_post_path", data, replace),
            self.composer.render(data),
        )
        path = Path(path)

        await asyncio.gather(
            self.fs.write_file(path, content),
            self._create_asset_folder(path),
        )

        result = PostResult(path=path, content=content)
        logger.info("Created %s", path)
        self.events.emit(NEW_POST_EVENT, result)
        return result

    async def _find_draft(self, slug: str) -> Path:
        if not await self.fs.exists(self.draft_dir):
            raise DraftNotFoundError(slug)
        pattern = _draft_pattern(slug)
        matches = [name for name in await self.fs.list_dir(self.draft_dir) if pattern.fullmatch(name)]
        item = _pick_draft(slug, matches)
        if item is None:
            raise DraftNotFoundError(slug)
        return self.draft_dir / item

    async def _migrate_assets(self, draft: Path, post: Path) -> None:
        asset_src = _without_ext(draft)
        if not await self.fs.exists(asset_src):
            return
        await self.fs.copy_dir(asset_src, _without_ext(post))
        await self.fs.rmdir(asset_src)

    async def publish(self, data: dict[str, Any], replace: bool = False) -> PostResult:
        """Promote the draft matching data["slug"] to a post, then remove the draft.

        Caller fields win over the draft's front matter; the draft body becomes
        the post content. Once the post is written it is kept even if removing
        the draft or moving its asset folder fails.
        """
        if data.get("layout") == "draft":
            data["layout"] = "post"
        if not data.get("slug"):
            raise InputError("A slug is required to publish a draft")
        slug = self._slug(data["slug"])
        data["slug"] = slug
        data["layout"] = self._layout(data)

        draft = await self._find_draft(slug)
        draft_fm, body = front_matter.parse(await self.fs.read_file(draft))
        for key, value in draft_fm.items():
            if data.get(key) is None:
                data[key] = value
        if data.get("content") is None:
            data["content"] = body

        post = await self.create(data, replace)

        try:
            await self.fs.unlink(draft)
            if self.config.post_asset_folder:
                await self._migrate_assets(draft, post.path)
        except OSError:
            logger.error("Published %s but could not clean up draft %s", post.path, draft)
            raise
        logger.info("Published %s -> %s", draft, post.path)
        return post
