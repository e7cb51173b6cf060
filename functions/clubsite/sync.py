"""
Remote-synced content store.

Reads are served from an in-memory cache filled by ``load()``. Mutations
update the cache immediately and are pushed to the data API on a single
background worker, so remote calls go out in the order they were made.
A failed push is logged and the cache is not rolled back: local and remote
state may diverge until the next ``load()``.
"""

from __future__ import annotations

import copy
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, Protocol

import requests

from clubsite.content import (
    COLLECTION_NAMES,
    IMMUTABLE_FIELDS,
    find_index,
    is_visible,
    merge_record,
    new_record,
    validate_collection,
)
from clubsite.defaults import default_items
from clubsite.errors import (
    AuthError,
    ClubDataError,
    NotFoundError,
    SerializationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds

_STATUS_ERRORS = {
    400: ValidationError,
    401: AuthError,
    404: NotFoundError,
}


class RemoteDataApi(Protocol):
    """The subset of the data API the synced store pushes to."""

    token: Optional[str]

    def fetch(self, collection: str) -> list[dict]:
        ...

    def create(self, collection: str, data: dict) -> dict:
        ...

    def update(self, collection: str, record_id: str, data: dict) -> dict:
        ...

    def delete(self, collection: str, record_id: str) -> None:
        ...

    def save(self, collection: str, items: list[dict]) -> None:
        ...


class ApiClient:
    """
    HTTP client for the ``/api/data`` and ``/api/auth`` endpoints.

    Args:
        base_url (str): API root, e.g. ``https://club.example/api``.
        token (str): Session token from a previous ``login``.
        session (requests.Session): Optional session to reuse connections.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise ClubDataError(f"Request to {path} failed: {exc}", 503) from exc

        try:
            body = response.json()
        except ValueError as exc:
            if response.ok:
                raise SerializationError(f"Invalid JSON from {path}") from exc
            body = {}

        if not response.ok:
            message = body.get("error") if isinstance(body, dict) else None
            error_cls = _STATUS_ERRORS.get(response.status_code, ClubDataError)
            raise error_cls(
                message or f"HTTP {response.status_code}", response.status_code
            )
        return body

    def login(self, password: str) -> str:
        body = self._request("POST", "/auth", json={"password": password})
        self.token = body["token"]
        return self.token

    def logout(self) -> None:
        self.token = None

    def fetch(self, collection: str) -> list[dict]:
        body = self._request("GET", "/data", params={"type": collection})
        if not isinstance(body, list):
            raise SerializationError(f"Expected a list for {collection}")
        return body

    def _mutate(self, payload: dict) -> dict:
        return self._request("POST", "/data", json=payload)

    def create(self, collection: str, data: dict) -> dict:
        body = self._mutate({"type": collection, "action": "create", "data": data})
        return body["item"]

    def update(self, collection: str, record_id: str, data: dict) -> dict:
        body = self._mutate(
            {"type": collection, "action": "update", "id": record_id, "data": data}
        )
        return body["item"]

    def delete(self, collection: str, record_id: str) -> None:
        self._mutate({"type": collection, "action": "delete", "id": record_id})

    def save(self, collection: str, items: list[dict]) -> None:
        self._mutate({"type": collection, "action": "save", "data": items})


class SyncedCollectionStore:
    """Optimistic cache in front of a ``RemoteDataApi``."""

    def __init__(
        self,
        api: RemoteDataApi,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.api = api
        self.on_unauthorized = on_unauthorized
        self._cache: dict[str, list[dict]] = {name: [] for name in COLLECTION_NAMES}
        # Temporary ids handed out by create() mapped to the server's ids.
        self._id_aliases: dict[str, str] = {}
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="content-sync"
        )
        self._pending: list[Future] = []
        self._failed_pushes = 0

    def load(self, strict: bool = False) -> None:
        """
        Fetch every collection. A collection that fails to load falls back to
        its defaults, unless ``strict`` is set, in which case the error is raised.
        """
        for collection in COLLECTION_NAMES:
            try:
                items = self.api.fetch(collection)
            except ClubDataError as exc:
                if strict:
                    raise
                logger.warning(
                    "Failed to load %s from API, using defaults: %s", collection, exc
                )
                items = default_items(collection)
            with self._lock:
                self._cache[collection] = items
        logger.info("Content cache loaded")

    def get_all(self, collection: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._cache[validate_collection(collection)])

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        with self._lock:
            items = self._cache[validate_collection(collection)]
            index = find_index(items, self._resolve(record_id))
            return copy.deepcopy(items[index]) if index != -1 else None

    def create(self, collection: str, data: dict) -> dict:
        with self._lock:
            record = new_record(validate_collection(collection), data)
            self._cache[collection].insert(0, record)
        self._submit(self._push_create, collection, record["id"], copy.deepcopy(data))
        return copy.deepcopy(record)

    def update(self, collection: str, record_id: str, data: dict) -> Optional[dict]:
        with self._lock:
            items = self._cache[validate_collection(collection)]
            index = find_index(items, self._resolve(record_id))
            if index == -1:
                return None
            items[index] = merge_record(items[index], data)
            record = copy.deepcopy(items[index])
        self._submit(self._push_update, collection, record_id, copy.deepcopy(data))
        return record

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock:
            items = self._cache[validate_collection(collection)]
            current_id = self._resolve(record_id)
            remaining = [item for item in items if item.get("id") != current_id]
            if len(remaining) == len(items):
                return False
            self._cache[collection] = remaining
        self._submit(self._push_delete, collection, record_id)
        return True

    def toggle_visibility(self, collection: str, record_id: str) -> Optional[dict]:
        record = self.get_by_id(collection, record_id)
        if record is None:
            return None
        return self.update(collection, record_id, {"visible": not is_visible(record)})

    def replace_all(self, collection: str, items: list[dict]) -> None:
        if not isinstance(items, list):
            raise ValidationError("Data must be an array")
        with self._lock:
            self._cache[validate_collection(collection)] = copy.deepcopy(items)
        self._submit(self.api.save, collection, copy.deepcopy(items))

    def flush(self, timeout: Optional[float] = None) -> int:
        """
        Block until every queued remote call has finished and return how many
        pushes failed since the previous flush.
        """
        with self._lock:
            pending, self._pending = self._pending, []
        wait(pending, timeout=timeout)
        with self._lock:
            failed, self._failed_pushes = self._failed_pushes, 0
        return failed

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _resolve(self, record_id: str) -> str:
        return self._id_aliases.get(record_id, record_id)

    def _submit(self, fn: Callable, *args) -> None:
        future = self._executor.submit(self._run, fn, *args)
        with self._lock:
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(future)

    def _run(self, fn: Callable, *args) -> None:
        name = getattr(fn, "__name__", repr(fn))
        try:
            fn(*args)
            return
        except AuthError:
            logger.warning("Sync rejected as unauthorized; clearing session token")
            self.api.token = None
            if self.on_unauthorized:
                self.on_unauthorized()
        except ClubDataError as exc:
            logger.error("Sync failed in %s: %s", name, exc)
        except Exception:
            logger.exception("Unexpected sync failure in %s", name)
        with self._lock:
            self._failed_pushes += 1

    def _push_create(self, collection: str, temp_id: str, data: dict) -> None:
        item = self.api.create(collection, data)
        with self._lock:
            self._id_aliases[temp_id] = item["id"]
            items = self._cache[collection]
            index = find_index(items, temp_id)
            if index != -1:
                # Keep local edits made while the create was in flight.
                local = {
                    k: v for k, v in items[index].items() if k not in IMMUTABLE_FIELDS
                }
                items[index] = {**item, **local}
        logger.debug("Replaced temporary id %s with %s", temp_id, item["id"])

    def _push_update(self, collection: str, record_id: str, data: dict) -> None:
        self.api.update(collection, self._resolve(record_id), data)

    def _push_delete(self, collection: str, record_id: str) -> None:
        self.api.delete(collection, self._resolve(record_id))
