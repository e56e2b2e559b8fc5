"""Capability interfaces the post manager and render pipeline are built from.

Site wires concrete implementations (HookRegistry, Renderer, TemplateEngine,
LocalFileSystem, ScaffoldStore); tests may pass any object with these methods.
"""

from pathlib import Path
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable


@runtime_checkable
class HookRunner(Protocol):
    async def run(self, name: str, payload: Any, *args: Any) -> Any:
        """Run hooks registered under name in order; each may replace the payload."""
        ...


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: str, payload: Any) -> None:
        ...


@runtime_checkable
class ScaffoldSource(Protocol):
    async def get(self, layout: str) -> str | None:
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    async def render(self, text: str, variables: dict[str, Any]) -> str:
        ...


class RendererEntry(Protocol):
    output: str
    disable_template: bool


@runtime_checkable
class ContentRenderer(Protocol):
    def get(self, ext: str) -> RendererEntry | None:
        ...

    def get_output(self, path: str) -> str:
        ...

    async def render(self, request: Any, options: dict[str, Any] | None = None) -> str:
        ...


@runtime_checkable
class FileSystem(Protocol):
    async def read_file(self, path: Path) -> str: ...
    async def write_file(self, path: Path, content: str) -> None: ...
    async def exists(self, path: Path) -> bool: ...
    async def mkdirs(self, path: Path) -> None: ...
    async def list_dir(self, path: Path) -> list[str]: ...
    async def copy_dir(self, src: Path, dest: Path) -> None: ...
    async def rmdir(self, path: Path) -> None: ...
    async def unlink(self, path: Path) -> None: ...


RenderEndCallback = Callable[[str], "str | Awaitable[str]"]
