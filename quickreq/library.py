"""quickreq library - the persisted collections.

Saved requests, request history and saved API keys share one contract:
``list`` / ``get`` / ``add`` / ``remove`` / ``load``. Each mutation writes
the whole collection back to its store slot and records a log entry.
Invalid input (empty name, index out of range) is not an error; the call
returns ``Outcome.SKIPPED`` and changes nothing.
"""

from __future__ import annotations

import datetime
import enum
from typing import Any, Callable

from quickreq.events import LogRecorder, now_iso
from quickreq.i18n import translate as _default_translate
from quickreq.models import RequestData, SavedApiKey, SavedRequest
from quickreq.store import REQUEST_HISTORY, SAVED_API_KEYS, SAVED_REQUESTS, Store

MAX_HISTORY = 50


class Outcome(enum.Enum):
    DONE = "done"
    SKIPPED = "skipped"


class CollectionManager:
    """Owner of one persisted collection. Subclasses set the class attributes."""

    slot: str = ""
    item_cls: Any = None
    limit: int | None = None
    newest_first = False

    added_key: str | None = None
    removed_key = ""
    loaded_key = ""

    def __init__(
        self,
        store: Store,
        log: LogRecorder,
        translate: Callable[..., str] = _default_translate,
    ):
        self.store = store
        self.log = log
        self.t = translate
        self._items = self._hydrate()

    # ── persistence ──────────────────────────────────────────────────

    def _hydrate(self):
        items = [self.item_cls.from_dict(d) for d in self.store.load_list(self.slot) if isinstance(d, dict)]
        return items[: self.limit] if self.limit else items

    def _persist(self) -> None:
        self.store.save_list(self.slot, [item.to_dict() for item in self._items])

    # ── reads ────────────────────────────────────────────────────────

    def list(self):
        """Snapshot copy of the collection, in display order."""
        return [item.copy() for item in self._items]

    def get(self, index: int):
        if not self._in_range(index):
            return None
        return self._items[index].copy()

    def index_of(self, name: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.name == name:
                return i
        return None

    def __len__(self) -> int:
        return len(self._items)

    def _in_range(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._items)

    # ── mutations ────────────────────────────────────────────────────

    def accepts(self, item) -> bool:
        return bool(item.name)

    def add(self, item) -> Outcome:
        if not self.accepts(item):
            return Outcome.SKIPPED
        item = item.copy()
        if self.newest_first:
            self._items.insert(0, item)
        else:
            self._items.append(item)
        if self.limit:
            del self._items[self.limit :]
        self._persist()
        if self.added_key:
            self.log.success(f'{self.t(self.added_key)} "{item.name}"')
        return Outcome.DONE

    def remove(self, index: int) -> Outcome:
        if not self._in_range(index):
            return Outcome.SKIPPED
        del self._items[index]
        self._persist()
        self.log.info(self.t(self.removed_key))
        return Outcome.DONE

    def load(self, index: int):
        """Return a copy of the entry at ``index`` and log that it was loaded."""
        item = self.get(index)
        if item is None:
            return None
        self.log.info(f"{self.t(self.loaded_key)}: {item.name}")
        return item

    def replace_all(self, items: list) -> None:
        """Swap in a whole new collection (used by import)."""
        self._items = [item.copy() for item in items]
        if self.limit:
            del self._items[self.limit :]
        self._persist()


class SavedRequests(CollectionManager):
    slot = SAVED_REQUESTS
    item_cls = SavedRequest
    added_key = "requestSaved"
    removed_key = "savedRequestDeleted"
    loaded_key = "loadedSavedRequest"

    def save(self, name: str, request: RequestData) -> Outcome:
        return self.add(SavedRequest(name=name, request=request.copy(), timestamp=now_iso()))


class RequestHistory(CollectionManager):
    """Snapshots of sent requests, newest first, capped at MAX_HISTORY.

    Appending is a side effect of a successful execution, which logs the
    response itself, so ``add`` records no entry of its own.
    """

    slot = REQUEST_HISTORY
    item_cls = SavedRequest
    limit = MAX_HISTORY
    newest_first = True
    removed_key = "historyEntryDeleted"
    loaded_key = "loadedHistoryRequest"

    def accepts(self, item) -> bool:
        return True

    def record(self, request: RequestData) -> Outcome:
        name = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return self.add(SavedRequest(name=name, request=request.copy(), timestamp=now_iso()))


class SavedApiKeys(CollectionManager):
    slot = SAVED_API_KEYS
    item_cls = SavedApiKey
    added_key = "apiKeySaved"
    removed_key = "apiKeyDeleted"
    loaded_key = "loadedApiKey"

    def accepts(self, item) -> bool:
        return bool(item.name) and bool(item.key)

    def save(self, name: str, key: str) -> Outcome:
        return self.add(SavedApiKey(name=name, key=key, timestamp=now_iso()))
