"""
Workspace

A workspace is a directory holding a metadata file (id, name) and the request
tree directory. Opening a workspace records it in the recent-workspaces list
kept in a small JSON key/value store.
"""

import inspect
import json
import logging
import uuid
from typing import Any, Awaitable, Callable, List, Optional, Union

from restspace.config import get_settings
from restspace.core.fs_adapter import FileSystemAdapter
from restspace.core.rest_imports import RestImports
from restspace.core.rest_manager import RestManager
from restspace.db.schemas.workspace import WorkspaceHistoryItem, WorkspaceMetadataData

logger = logging.getLogger(__name__)

HISTORY_KEY = "workspaces"

MetadataListener = Callable[["WorkspaceMetadata"], Union[None, Awaitable[None]]]


class WorkspaceMetadata:
    """Workspace id and name; ``on_change`` runs after every setter"""

    def __init__(self, data: WorkspaceMetadataData, on_change: Optional[MetadataListener] = None):
        self._data = data
        self.on_change = on_change

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def name(self) -> str:
        return self._data.name

    async def set_name(self, name: str) -> None:
        self._data = self._data.model_copy(update={"name": name})
        await self._notify()

    async def _notify(self) -> None:
        if self.on_change is None:
            return
        result = self.on_change(self)
        if inspect.isawaitable(result):
            await result

    def to_dict(self) -> dict:
        return self._data.model_dump()


class WorkspaceStore:
    """JSON file holding arbitrary key/value pairs"""

    def __init__(self, path: str, fs: Optional[FileSystemAdapter] = None):
        self.path = path
        self.fs = fs or FileSystemAdapter()

    async def _load(self) -> dict:
        if not await self.fs.exists(self.path):
            return {}
        text = await self.fs.read_text_file(self.path)
        return json.loads(text) if text.strip() else {}

    async def get(self, key: str, default: Any = None) -> Any:
        return (await self._load()).get(key, default)

    async def set(self, key: str, value: Any) -> None:
        data = await self._load()
        data[key] = value
        parent = self.fs.dirname(self.path)
        if parent:
            await self.fs.mkdir(parent, recursive=True)
        await self.fs.write_text_file(self.path, json.dumps(data, ensure_ascii=False, indent=2))


class Workspace:
    """One opened workspace directory"""

    def __init__(
        self,
        path: str,
        store: WorkspaceStore,
        fs: Optional[FileSystemAdapter] = None,
        rest_dir: Optional[str] = None,
        metadata_file: Optional[str] = None,
        history_limit: Optional[int] = None,
    ):
        settings = get_settings()
        self.path = path
        self.store = store
        self.fs = fs or FileSystemAdapter()
        self.metadata_file = metadata_file or settings.metadata_file
        self.history_limit = history_limit or settings.history_limit
        self.metadata: Optional[WorkspaceMetadata] = None

        self.rest = RestManager(self.resolve_path(rest_dir or settings.rest_dir), self.fs)
        self.imports = RestImports(self.rest)

    def resolve_path(self, file: str) -> str:
        if self.path.rstrip(self.fs.sep()).endswith(self.fs.sep() + file):
            return self.path
        return self.fs.join(self.path, file)

    async def load_metadata(self) -> WorkspaceMetadata:
        """Read the metadata file, creating it on first open, then update history."""
        path = self.resolve_path(self.metadata_file)

        created = not await self.fs.exists(path)
        if not created:
            data = WorkspaceMetadataData.model_validate_json(await self.fs.read_text_file(path))
        else:
            data = WorkspaceMetadataData(
                id=str(uuid.uuid4()),
                name=self.fs.basename(self.path) or "New Workspace",
            )
            logger.info(f"Creating workspace metadata {path}")

        self.metadata = WorkspaceMetadata(data, on_change=lambda _: self.write_metadata())
        if created:
            await self.write_metadata()

        await self.save_history()
        return self.metadata

    async def write_metadata(self) -> None:
        await self.fs.mkdir(self.path, recursive=True)
        await self.fs.write_text_file(
            self.resolve_path(self.metadata_file),
            json.dumps(self.metadata.to_dict(), ensure_ascii=False),
        )

    async def save_history(self) -> None:
        """Put this workspace at the front of the recent list (best effort)."""
        try:
            history = await get_history(self.store)

            for item in history:
                if item.path == self.path:
                    item.name = self.metadata.name
                    break
            else:
                history.insert(0, WorkspaceHistoryItem(name=self.metadata.name, path=self.path))

            history = history[: self.history_limit]
            await self.store.set(HISTORY_KEY, [h.model_dump() for h in history])
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to update workspace history: {e}")


async def get_history(store: WorkspaceStore) -> List[WorkspaceHistoryItem]:
    raw = await store.get(HISTORY_KEY) or []
    return [WorkspaceHistoryItem.model_validate(item) for item in raw]


class WorkspaceManager:
    """Keeps track of the currently opened workspace"""

    def __init__(self, store: WorkspaceStore, fs: Optional[FileSystemAdapter] = None):
        self.store = store
        self.fs = fs or FileSystemAdapter()
        self.workspace: Optional[Workspace] = None

    async def open_workspace(self, path: str) -> Workspace:
        workspace = Workspace(path, self.store, self.fs)
        await workspace.load_metadata()
        self.workspace = workspace
        logger.info(f"Opened workspace {workspace.metadata.name!r} at {path}")
        return workspace

    def close_workspace(self) -> None:
        self.workspace = None

    async def get_history(self) -> List[WorkspaceHistoryItem]:
        return await get_history(self.store)

    async def clear_history(self) -> None:
        await self.store.set(HISTORY_KEY, [])
