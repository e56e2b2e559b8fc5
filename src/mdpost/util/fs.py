"""Async filesystem operations over pathlib/shutil, run in worker threads"""

import asyncio
import shutil
from pathlib import Path


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _list(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


class LocalFileSystem:
    """Local disk backend; OS errors propagate unchanged."""

    async def read_file(self, path: Path) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def write_file(self, path: Path, content: str) -> None:
        """Write text, creating parent directories as needed."""
        await asyncio.to_thread(_write, Path(path), content)

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def mkdirs(self, path: Path) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def list_dir(self, path: Path) -> list[str]:
        """Return files under path, recursively, as sorted POSIX paths relative to it."""
        if not await self.exists(path):
            raise FileNotFoundError(f"No such directory: {path}")
        return await asyncio.to_thread(_list, Path(path))

    async def copy_dir(self, src: Path, dest: Path) -> None:
        await asyncio.to_thread(shutil.copytree, src, dest, dirs_exist_ok=True)

    async def rmdir(self, path: Path) -> None:
        """Remove a directory and everything below it."""
        await asyncio.to_thread(shutil.rmtree, path)

    async def unlink(self, path: Path) -> None:
        await asyncio.to_thread(Path(path).unlink)
