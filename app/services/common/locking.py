# app/services/common/locking.py
"""
In-process keyed locks.

Serializes work on the same logical resource (a room, a block's attendance
day) inside one process. An entry exists only while some caller holds or waits
on its key. Keys are always taken in sorted order, so two callers holding
overlapping key sets cannot deadlock.
Cross-process safety still comes from the guarded UPDATE statements and row
locks issued by the repositories.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from contextlib import ExitStack

logger = logging.getLogger(__name__)


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class KeyedLockRegistry:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, key: Hashable) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry
            entry.users += 1
            return entry

    def _checkin(self, key: Hashable, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    def _release(self, key: Hashable, entry: _Entry) -> None:
        entry.lock.release()
        self._checkin(key, entry)

    def acquire(self, *keys: Hashable) -> ExitStack:
        """
        Acquire the locks for keys and return an ExitStack that releases them.

        Duplicate keys are collapsed. Keys are ordered by their repr so mixed
        key types still sort deterministically.
        """
        stack = ExitStack()
        try:
            for key in sorted(set(keys), key=repr):
                entry = self._checkout(key)
                try:
                    entry.lock.acquire()
                except BaseException:
                    self._checkin(key, entry)
                    raise
                stack.callback(self._release, key, entry)
        except BaseException:
            stack.close()
            raise
        logger.debug("Acquired locks %s", keys)
        return stack


lock_registry = KeyedLockRegistry()


def room_key(room_id: str) -> tuple[str, str]:
    return ("room", room_id)


def attendance_key(block: str, day: object) -> tuple[str, str, str]:
    return ("attendance", str(getattr(block, "value", block)), str(day))
