"""
Session-scoped record stores.

A RecordStore holds the full, unfiltered collection for one screen. The records a
browser session mounted are cached in this process under the session's
``store_id``; the session cookie itself only carries ``removed.<kind>``, the ids
deleted so far. A worker without the cached copy re-mounts from the data source
and replays those deletions, so the cookie stays small whatever the data size.
"""
from __future__ import annotations

import threading
import uuid
from collections import OrderedDict
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from flask import current_app, flash, session

from app.dashboard.backend_client import BackendError
from app.dashboard.constants import MSG_BACKEND_UNAVAILABLE
from app.dashboard.models import Record
from app.dashboard.sources import source_from_config

T = TypeVar("T", bound=Record)


class RecordStore(Generic[T]):
    def __init__(self, records: Iterable[T] = ()) -> None:
        self._records: list[T] = list(records)

    def load(self, initial: Iterable[T]) -> None:
        """Replace all records."""
        self._records = list(initial)

    def remove(self, record_id: int) -> bool:
        """Drop the record with this id. Returns False (and changes nothing) if absent."""
        kept = [r for r in self._records if r.id != record_id]
        removed = len(kept) != len(self._records)
        self._records = kept
        return removed

    def get(self, record_id: int) -> T | None:
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._records)



class MountCache:
    """Mounted collections keyed by (store_id, kind), least recently used evicted first."""

    def __init__(self, capacity: int = 1000) -> None:
        self._lock = threading.Lock()
        self._entries: OrderedDict[tuple[str, str], tuple[Any, ...]] = OrderedDict()
        self._capacity = capacity

    def get(self, store_id: str, kind: str) -> tuple[Any, ...] | None:
        with self._lock:
            records = self._entries.get((store_id, kind))
            if records is not None:
                self._entries.move_to_end((store_id, kind))
            return records

    def put(self, store_id: str, kind: str, records: Iterable[Any]) -> None:
        with self._lock:
            self._entries[(store_id, kind)] = tuple(records)
            self._entries.move_to_end((store_id, kind))
            while len(self._entries) > self._capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


mount_cache = MountCache()


def _store_id() -> str:
    store_id = session.get("store_id")
    if not store_id:
        store_id = uuid.uuid4().hex
        session["store_id"] = store_id
    return store_id


def _removed_key(kind: str) -> str:
    return f"removed.{kind}"


def _mount(kind: str, on_mount: Callable[[list[Any]], None] | None) -> list[Any] | None:
    source = source_from_config(current_app.config, kind)
    try:
        records = source.load()
    except BackendError as e:
        # Not cached, so the next request retries the mount.
        current_app.logger.exception("Failed to load %s from data source: %s", kind, e)
        flash(MSG_BACKEND_UNAVAILABLE, "danger")
        return None
    current_app.logger.info("Mounted %s store with %d records", kind, len(records))
    if on_mount is not None:
        on_mount(records)
    return records


def session_store(kind: str, *, on_mount: Callable[[list[Any]], None] | None = None) -> RecordStore[Any]:
    """
    Return the store for ``kind`` in the current browser session, mounting it from
    the data source on first use. ``on_mount`` sees the freshly loaded records.
    """
    store_id = _store_id()
    records = mount_cache.get(store_id, kind)
    if records is None:
        loaded = _mount(kind, on_mount)
        if loaded is None:
            return RecordStore()
        mount_cache.put(store_id, kind, loaded)
        records = tuple(loaded)

    store: RecordStore[Any] = RecordStore(records)
    for record_id in session.get(_removed_key(kind)) or []:
        store.remove(record_id)
    return store


def remove_record(kind: str, store: RecordStore[Any], record_id: int) -> bool:
    """Remove from the store and remember the deletion for this session."""
    if not store.remove(record_id):
        return False
    removed = list(session.get(_removed_key(kind)) or [])
    removed.append(record_id)
    session[_removed_key(kind)] = removed
    return True
