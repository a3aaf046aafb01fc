"""
Filesystem adapter

Async wrapper over the local filesystem used by the request tree. Text I/O and
single-call operations go through aiofiles; recursive copy/remove run shutil
in a worker thread. Every ``OSError`` propagates to the caller unchanged.
"""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass
from typing import List

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirEntry:
    """One directory listing row"""
    name: str
    is_directory: bool


class FileSystemAdapter:
    """POSIX-like async filesystem operations plus path helpers"""

    encoding = "utf-8"

    # ------------------------------------------------------------------
    # filesystem
    # ------------------------------------------------------------------

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.exists(path)

    async def is_dir(self, path: str) -> bool:
        return await aiofiles.os.path.isdir(path)

    async def read_text_file(self, path: str) -> str:
        async with aiofiles.open(path, mode="r", encoding=self.encoding) as f:
            return await f.read()

    async def write_text_file(self, path: str, text: str) -> None:
        async with aiofiles.open(path, mode="w", encoding=self.encoding) as f:
            await f.write(text)

    async def mkdir(self, path: str, recursive: bool = False) -> None:
        if recursive:
            await aiofiles.os.makedirs(path, exist_ok=True)
        else:
            await aiofiles.os.mkdir(path)

    async def read_dir(self, path: str) -> List[DirEntry]:
        entries = []
        for name in await aiofiles.os.listdir(path):
            is_directory = await aiofiles.os.path.isdir(os.path.join(path, name))
            entries.append(DirEntry(name=name, is_directory=is_directory))
        return entries

    async def copy_file(self, src: str, dest: str) -> None:
        """Copy a file, or a whole directory tree when ``src`` is a directory."""
        if await self.is_dir(src):
            await asyncio.to_thread(shutil.copytree, src, dest)
        else:
            await asyncio.to_thread(shutil.copy2, src, dest)

    async def rename(self, src: str, dest: str) -> None:
        await aiofiles.os.rename(src, dest)

    async def remove(self, path: str, recursive: bool = False) -> None:
        if not await self.is_dir(path):
            await aiofiles.os.remove(path)
        elif recursive:
            await asyncio.to_thread(shutil.rmtree, path)
        else:
            await aiofiles.os.rmdir(path)

    # ------------------------------------------------------------------
    # path utilities
    # ------------------------------------------------------------------

    @staticmethod
    def join(*parts: str) -> str:
        return os.path.join(*parts)

    @staticmethod
    def basename(path: str) -> str:
        return os.path.basename(path.rstrip(os.sep) or path)

    @staticmethod
    def dirname(path: str) -> str:
        return os.path.dirname(path.rstrip(os.sep) or path)

    @staticmethod
    def extname(path: str) -> str:
        """Extension without the leading dot, ``""`` when there is none."""
        return os.path.splitext(FileSystemAdapter.basename(path))[1].lstrip(".")

    @staticmethod
    def sep() -> str:
        return os.sep
