"""
Request tree manager

Bound to one root directory. Reads always rescan the directory; mutations go
straight to the filesystem. Missing sources make mutations no-ops, corrupted
request files are rewritten as minimal valid records, and filesystem errors
propagate unchanged.

Layout::

    <root>/
        Login.POST            request "Login", method POST
        users/                folder
            List users.GET
"""

import locale
import logging
from typing import List, Optional, Union, overload

from pydantic import ValidationError

from restspace.core.constants import (
    COPY_SUFFIX,
    DEFAULT_METHOD,
    DEFAULT_REQUEST_NAME,
    HttpMethod,
    is_http_method,
    to_http_method,
)
from restspace.core.fs_adapter import FileSystemAdapter
from restspace.core.request_entity import RequestEntity
from restspace.db.schemas.request import FolderNode, RequestNode, TreeNode, TreeViewElement

logger = logging.getLogger(__name__)


def _sort_key(node: TreeNode):
    # Folders first, then case-insensitive name order; the locale breaks ties
    return (0 if node.method is None else 1, node.name.casefold(), locale.strxfrm(node.name))


class RestManager:
    """Request tree rooted at ``root``"""

    def __init__(self, root: str, fs: Optional[FileSystemAdapter] = None):
        self.root = root
        self.fs = fs or FileSystemAdapter()

    def get_path(self) -> str:
        return self.root

    async def ensure_self(self) -> None:
        """Create the root directory on first use."""
        if not await self.fs.exists(self.root):
            logger.info(f"Creating request tree root {self.root}")
            await self.fs.mkdir(self.root, recursive=True)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def open(self, path: str) -> Optional[RequestEntity]:
        """
        Materialize the request stored at ``path``.

        Returns ``None`` when the file does not exist. A file that cannot be
        parsed is replaced by a fresh record named after the file and returned.
        """
        await self.ensure_self()

        if not await self.fs.exists(path):
            return None

        try:
            text = await self.fs.read_text_file(path)
            return RequestEntity.from_text(self, text, path=path)
        except (ValidationError, UnicodeDecodeError) as e:
            filename = self.fs.basename(path)
            name = RequestEntity.get_name(filename) or DEFAULT_REQUEST_NAME
            method = RequestEntity.get_method(filename) or DEFAULT_METHOD
            logger.warning(f"Rebuilding unreadable request file {path}: {e.__class__.__name__}")

            entity = RequestEntity.blank(self, name, method, path)
            await entity.save()
            return entity

    async def get_requests(self) -> List[TreeNode]:
        """Scan the whole tree. Folders sort before requests at every level."""
        if not await self.fs.exists(self.root):
            await self.fs.mkdir(self.root, recursive=True)
            return []

        return await self._scan(self.root)

    async def get_as_tree(self) -> List[TreeViewElement]:
        """Tree projection keyed by path; only folders carry ``children``."""

        def project(node: TreeNode) -> TreeViewElement:
            if isinstance(node, FolderNode):
                return TreeViewElement(id=node.path, name=node.name, children=[project(c) for c in node.children])
            return TreeViewElement(id=node.path, name=node.name)

        return [project(node) for node in await self.get_requests()]

    async def _scan(self, path: str) -> List[TreeNode]:
        nodes: List[TreeNode] = []

        for entry in await self.fs.read_dir(path):
            entry_path = self.fs.join(path, entry.name)

            if entry.is_directory:
                children = await self._scan(entry_path)
                nodes.append(FolderNode(name=entry.name, path=entry_path, children=children))
                continue

            name, _, method = entry.name.rpartition(".")
            if not name or not is_http_method(method):
                logger.debug(f"Skipping non-request entry {entry_path}")
                continue

            nodes.append(RequestNode(name=entry.name, path=entry_path, method=HttpMethod(method)))

        nodes.sort(key=_sort_key)
        return nodes

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    @overload
    async def create(self, name: str, method: None = None, base_path: Optional[str] = None) -> None: ...

    @overload
    async def create(self, name: str, method: Union[HttpMethod, str], base_path: Optional[str] = None) -> RequestEntity: ...

    async def create(self, name, method=None, base_path=None):
        """
        Create a folder (``method`` is None) or a request file under ``base_path``.

        Folder creation is idempotent. Creating a request whose name and method
        already exist overwrites that file.
        """
        await self.ensure_self()
        base_path = base_path or self.root

        if method is None:
            await self.fs.mkdir(self.fs.join(base_path, name), recursive=True)
            return None

        resolved = to_http_method(method)
        if resolved is None:
            raise ValueError(f"Unknown HTTP method: {method!r}")

        path = self.fs.join(base_path, f"{name}.{resolved.value}")
        entity = RequestEntity.blank(self, name, resolved, path)
        await entity.save()
        return entity

    async def copy(self, current: str, target: str) -> None:
        """Copy a request or folder into the ``target`` directory."""
        destination = await self._transfer_destination(current, target)
        if destination is None:
            return
        await self.fs.copy_file(current, destination)

    async def move(self, current: str, target: str) -> None:
        """Move a request or folder into the ``target`` directory."""
        destination = await self._transfer_destination(current, target)
        if destination is None:
            return
        await self.fs.rename(current, destination)

    async def _transfer_destination(self, current: str, target: str) -> Optional[str]:
        await self.ensure_self()

        if not await self.fs.exists(current):
            return None

        current_name = self.fs.basename(current)
        destination = self.fs.join(target, current_name)

        if await self.fs.exists(destination):
            # The suffix is built from the target directory's own name
            destination = self.fs.join(target, f"{self.fs.basename(target)}{COPY_SUFFIX}")
            logger.info(f"{current_name!r} already exists in {target}, using {destination}")

        return destination

    async def delete(self, path: str) -> None:
        """Remove a request file or a folder with all its contents."""
        await self.ensure_self()

        if not await self.fs.exists(path):
            return

        await self.fs.remove(path, recursive=True)

    async def rename(self, path: str, new_name: str, is_dir: bool = False) -> None:
        """
        Rename a node in place. Request files keep their method extension.
        An existing node at the new path is not checked for.
        """
        await self.ensure_self()

        if not new_name:
            return

        if not await self.fs.exists(path):
            return

        # Folders are renamed within their own parent, never inside themselves
        parent = self.fs.dirname(path)
        if is_dir:
            ext = ""
        else:
            try:
                ext = self.fs.extname(path)
            except (TypeError, ValueError):
                ext = ""

        extension = f".{ext}" if ext else ""
        new_path = self.fs.join(parent, f"{new_name}{extension}")

        await self.fs.rename(path, new_path)
