"""End-to-end flow over a Site: draft, publish, then render the published post"""

import pytest

from mdpost.config import Settings
from mdpost.core.front_matter import parse
from mdpost.core.protocols import ContentRenderer, EventSink, FileSystem, HookRunner, ScaffoldSource, TemplateRenderer
from mdpost.core.render import RenderData
from mdpost.site import Site


@pytest.mark.asyncio
async def test_draft_publish_render(tmp_path):
    """A drafted post keeps its body and metadata through publish and renders with its front matter."""
    site = Site(Settings(base_dir=str(tmp_path), post_asset_folder=True))
    created = []
    site.on("new", created.append)

    draft = await site.post.create({
        "title": "Trip Notes",
        "layout": "draft",
        "content": "# {{ page.title }}\n\n```\n{{ not evaluated }}\n```\n",
    })
    assert draft.path.parent.name == "_drafts"
    (draft.path.parent / "Trip-Notes" / "map.png").write_bytes(b"png")

    post = await site.post.publish({"slug": "Trip-Notes"})
    assert [r.path for r in created] == [draft.path, post.path]
    assert (post.path.parent / "Trip-Notes" / "map.png").exists()

    page, body = parse(post.path.read_text())
    result = await site.pipeline.render(str(post.path), RenderData(content=body, source=str(post.path), page=page))
    assert "<h1>Trip Notes</h1>" in result.content
    assert "{{ not evaluated }}" in result.content


@pytest.mark.asyncio
async def test_hooks_can_redirect_new_post_path(tmp_path):
    """A later new_post_path hook may replace the resolved path."""
    site = Site(Settings(base_dir=str(tmp_path)))
    site.hooks.register("new_post_path", lambda path, replace: path.with_name("renamed.md"), priority=20)
    result = await site.post.create({"title": "Original"})
    assert result.path.name == "renamed.md"
    assert result.path.exists()


def test_default_collaborators_satisfy_protocols(tmp_path):
    """The collaborators Site wires by default implement the core's capability interfaces."""
    site = Site(Settings(base_dir=str(tmp_path)))
    assert isinstance(site.fs, FileSystem)
    assert isinstance(site.hooks, HookRunner)
    assert isinstance(site.renderer, ContentRenderer)
    assert isinstance(site.template, TemplateRenderer)
    assert isinstance(site.scaffolds, ScaffoldSource)
    assert isinstance(site, EventSink)
