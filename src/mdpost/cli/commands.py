"""CLI command implementations"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from jinja2 import TemplateError

from mdpost.config import Settings, load_config
from mdpost.core import front_matter
from mdpost.core.render import RenderData
from mdpost.errors import MdpostError
from mdpost.log import setup_logging
from mdpost.site import Site


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _site(ctx: typer.Context) -> Site:
    settings = _settings()
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    setup_logging("DEBUG" if verbose else settings.log_level)
    return Site(settings)


def _run(coro):
    """Run a core coroutine, mapping expected failures to a CLI error."""
    try:
        return asyncio.run(coro)
    except MdpostError as e:
        _fail(e.message)
    except OSError as e:
        _fail("File operation failed", e)
    except TemplateError as e:
        _fail("Template rendering failed", e)


def main_callback(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Create, publish and render site posts."""
    ctx.obj = {"verbose": verbose}


def new_cmd(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title")],
    layout: Annotated[Optional[str], typer.Option("--layout", "-l", help="Scaffold layout (post, page, draft, ...)")] = None,
    slug: Annotated[Optional[str], typer.Option("--slug", "-s", help="Slug to use instead of one derived from the title")] = None,
    path: Annotated[Optional[str], typer.Option("--path", "-p", help="Explicit path relative to the layout folder")] = None,
    replace: Annotated[bool, typer.Option("--replace", "-r", help="Overwrite an existing file of the same name")] = False,
    ):
    """Create a new post, page or draft from its scaffold."""
    site = _site(ctx)
    data = {"title": title, "layout": layout, "slug": slug, "path": path}
    result = _run(site.post.create({k: v for k, v in data.items() if v is not None}, replace))
    typer.echo(f"Created: {result.path}")


def publish_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug (filename prefix) of the draft to publish")],
    layout: Annotated[Optional[str], typer.Option("--layout", "-l", help="Layout of the published document")] = None,
    replace: Annotated[bool, typer.Option("--replace", "-r", help="Overwrite an existing file of the same name")] = False,
    ):
    """Move a draft into _posts."""
    site = _site(ctx)
    data = {"slug": slug, "layout": layout}
    result = _run(site.post.publish({k: v for k, v in data.items() if v is not None}, replace))
    typer.echo(f"Published: {result.path}")


def render_cmd(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(exists=True, readable=True, help="Post or asset file to render")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write output here instead of stdout")] = None,
    no_template: Annotated[bool, typer.Option("--no-template", help="Leave {{ }} and {% %} tags unrendered")] = False,
    ):
    """Render a single file through the post pipeline."""
    site = _site(ctx)
    try:
        page, body = front_matter.parse(file.read_text(encoding="utf-8"))
    except (MdpostError, OSError) as e:
        _fail(f"Could not read {file}", e)
    data = RenderData(
        content=body,
        source=str(file),
        page=page,
        disable_template=True if no_template else None,
    )
    result = _run(site.pipeline.render(str(file), data))
    if out is None:
        typer.echo(result.content)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result.content, encoding="utf-8")
    typer.echo(f"Rendered: {file} -> {out}")
