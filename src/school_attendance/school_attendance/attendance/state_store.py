from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Optional, Protocol

from flask import session

from ..core.constants import STATE_OWNER_KEY
from .session import AttendanceSessionManager

logger = logging.getLogger(__name__)


class AttendanceStateStore(Protocol):
    def get(self, owner: str) -> Optional[AttendanceSessionManager]:
        raise NotImplementedError

    def get_or_create(self, owner: str) -> AttendanceSessionManager:
        raise NotImplementedError

    def discard(self, owner: str) -> None:
        raise NotImplementedError


class InMemoryAttendanceStateStore(AttendanceStateStore):
    """Keeps one open attendance sheet per logged-in browser.

    Sheets idle for longer than ``max_idle_seconds`` are dropped, and at most
    ``max_owners`` are held; the least recently used goes first.
    """

    def __init__(
        self,
        *,
        max_owners: int = 500,
        max_idle_seconds: float = 8 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lock = threading.Lock()
        self._max_owners = max_owners
        self._max_idle = max_idle_seconds
        self._clock = clock
        # Ordered oldest use first.
        self._managers: dict[str, tuple[float, AttendanceSessionManager]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._managers)

    def get(self, owner: str) -> Optional[AttendanceSessionManager]:
        with self._lock:
            self._sweep()
            entry = self._managers.pop(owner, None)
            if entry is None:
                return None
            self._managers[owner] = (self._clock(), entry[1])
            return entry[1]

    def get_or_create(self, owner: str) -> AttendanceSessionManager:
        with self._lock:
            self._sweep()
            entry = self._managers.pop(owner, None)
            manager = entry[1] if entry else AttendanceSessionManager()
            self._managers[owner] = (self._clock(), manager)
            while len(self._managers) > self._max_owners:
                evicted = next(iter(self._managers))
                del self._managers[evicted]
                logger.info("Dropped least recently used attendance sheet of %s", evicted)
            return manager

    def discard(self, owner: str) -> None:
        with self._lock:
            self._managers.pop(owner, None)

    def _sweep(self) -> None:
        cutoff = self._clock() - self._max_idle
        expired = [owner for owner, (touched, _) in self._managers.items() if touched < cutoff]
        for owner in expired:
            del self._managers[owner]
        if expired:
            logger.info("Dropped %s idle attendance sheets", len(expired))


def session_owner(*, create: bool = True) -> Optional[str]:
    """Opaque per-browser id stored in the Flask session."""

    owner = session.get(STATE_OWNER_KEY)
    if owner is None and create:
        owner = uuid.uuid4().hex
        session[STATE_OWNER_KEY] = owner
    return owner
