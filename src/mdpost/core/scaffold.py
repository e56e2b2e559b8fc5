"""Scaffold templates keyed by layout name"""

import logging
from pathlib import Path

from mdpost.core.protocols import FileSystem


logger = logging.getLogger(__name__)

DEFAULT_SCAFFOLDS: dict[str, str] = {
    "normal": "---\nlayout: {{ layout }}\ntitle: {{ title }}\ndate: {{ date }}\ntags:\n---\n",
    "post":   "---\ntitle: {{ title }}\ndate: {{ date }}\ntags:\n---\n",
    "page":   "---\ntitle: {{ title }}\ndate: {{ date }}\n---\n",
    "draft":  "---\ntitle: {{ title }}\ntags:\n---\n",
}


class ScaffoldStore:
    """Scaffolds read from ``scaffold_dir/<layout>.<ext>``, falling back to built-in defaults."""

    def __init__(self, scaffold_dir: Path, fs: FileSystem) -> None:
        self.scaffold_dir = Path(scaffold_dir)
        self.fs = fs

    async def _find(self, layout: str) -> Path | None:
        if not await self.fs.exists(self.scaffold_dir):
            return None
        for name in await self.fs.list_dir(self.scaffold_dir):
            if Path(name).stem == layout and "/" not in name:
                return self.scaffold_dir / name
        return None

    async def get(self, layout: str) -> str | None:
        """Return scaffold text for layout, or None if neither a file nor a default exists."""
        path = await self._find(layout)
        if path is not None:
            logger.debug("Using scaffold %s", path)
            return await self.fs.read_file(path)
        return DEFAULT_SCAFFOLDS.get(layout)

    async def set(self, layout: str, text: str, ext: str = ".md") -> Path:
        """Write (or overwrite) the scaffold for layout."""
        path = await self._find(layout) or self.scaffold_dir / f"{layout}{ext}"
        await self.fs.write_file(path, text)
        return path
