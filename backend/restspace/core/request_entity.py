"""
Request record

In-memory form of one request file. Setters mark the record dirty and notify
change listeners; nothing is written until ``save()`` is awaited.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Union

from pydantic import TypeAdapter

from restspace.core.constants import HttpMethod, to_http_method
from restspace.db.schemas.request import KeyValue, RequestBody, RequestData

if TYPE_CHECKING:
    from restspace.core.rest_manager import RestManager

logger = logging.getLogger(__name__)

ChangeListener = Callable[["RequestEntity"], None]

_body_adapter = TypeAdapter(Optional[RequestBody])
_headers_adapter = TypeAdapter(List[KeyValue])


class RequestEntity:
    """One persisted API request, identified by its file path"""

    def __init__(self, manager: "RestManager", data: RequestData):
        self.manager = manager
        self._data = data
        self.dirty = False
        self._listeners: List[ChangeListener] = []

    def __repr__(self) -> str:
        return f"RequestEntity(name={self.name!r}, method={self.method.value}, path={self.path!r})"

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def blank(cls, manager: "RestManager", name: str, method: HttpMethod, path: str) -> "RequestEntity":
        """Fresh record with empty url/headers/body and no response"""
        return cls(manager, RequestData(name=name, method=method, path=path))

    @classmethod
    def from_text(cls, manager: "RestManager", text: str, path: Optional[str] = None) -> "RequestEntity":
        """
        Parse the persisted JSON form.

        Raises ``pydantic.ValidationError`` (a ``ValueError``) for invalid JSON
        or a document that is not a request record. ``path`` replaces the
        stored path, which goes stale once a file is moved or renamed.
        """
        data = RequestData.model_validate_json(text)
        if path is not None and data.path != path:
            data = data.model_copy(update={"path": path})
        return cls(manager, data)

    @staticmethod
    def get_name(filename: str) -> Optional[str]:
        """Display name: basename minus its last extension, ``None`` if empty."""
        stem, dot, _ = filename.rpartition(".")
        name = stem if dot else filename
        return name or None

    @staticmethod
    def get_method(filename: str) -> Optional[HttpMethod]:
        """Method encoded in the last extension, ``None`` when unrecognised."""
        _, dot, ext = filename.rpartition(".")
        return to_http_method(ext) if dot else None

    # ------------------------------------------------------------------
    # fields
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._data.name

    @property
    def method(self) -> HttpMethod:
        return self._data.method

    @property
    def url(self) -> str:
        return self._data.url

    @property
    def headers(self) -> List[KeyValue]:
        return list(self._data.headers)

    @property
    def body(self) -> Optional[RequestBody]:
        return self._data.body

    @property
    def response(self) -> Any:
        return self._data.response

    @property
    def path(self) -> str:
        return self._data.path

    def set_name(self, name: str) -> None:
        self._update(name=name)

    def set_method(self, method: Union[HttpMethod, str]) -> None:
        resolved = to_http_method(method)
        if resolved is None:
            raise ValueError(f"Unknown HTTP method: {method!r}")
        self._update(method=resolved)

    def set_url(self, url: str) -> None:
        self._update(url=url)

    def set_headers(self, headers: Iterable[Union[KeyValue, dict]]) -> None:
        self._update(headers=_headers_adapter.validate_python(list(headers)))

    def set_body(self, body: Union[RequestBody, dict, None]) -> None:
        self._update(body=_body_adapter.validate_python(body))

    def set_response(self, response: Any) -> None:
        self._update(response=response)

    def _update(self, **fields: Any) -> None:
        self._data = self._data.model_copy(update=fields)
        self.dirty = True
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # change notification
    # ------------------------------------------------------------------

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener called after every setter; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return self._data.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    async def save(self) -> None:
        """Write the full record to its path (overwrite)."""
        await self.manager.fs.write_text_file(self.path, self.to_json())
        self.dirty = False
        logger.debug(f"Saved request {self.name!r} -> {self.path}")
