"""Process-wide shared state and its lock discipline.

``SharedState`` is the only mutable object shared between request threads.
Readers copy what they need out under the read lock and release it before
any Docker, A2S, or filesystem I/O. The only write is stamping the last
restart time. ``restart_sequence_lock`` serializes the "restart container,
then stamp time" sequence so two restart-triggering requests never
interleave; it is a separate mutex so the reader-writer lock is never held
across the restart call itself.
"""
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
import threading
from typing import Any, Optional


class ReadWriteLock:
    """Writer-preferring reader-writer lock built on ``threading.Condition``."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass(frozen=True)
class AppState:
    """Handles and settings copied out of ``SharedState`` for one request."""
    docker_client: Any
    game_query_client: Any
    template: str
    settings: Any
    last_restart_time: Optional[datetime] = None


class SharedState:
    """Single mutable cell holding client handles, settings, and restart bookkeeping."""

    def __init__(self, docker_client, game_query_client, template, settings):
        self._lock = ReadWriteLock()
        self._state = AppState(
            docker_client=docker_client,
            game_query_client=game_query_client,
            template=template,
            settings=settings,
        )
        self.restart_sequence_lock = threading.Lock()

    def snapshot(self):
        """Return an immutable copy of the current state."""
        with self._lock.read_locked():
            return self._state

    @property
    def last_restart_time(self):
        with self._lock.read_locked():
            return self._state.last_restart_time

    def stamp_restart(self, when=None):
        """Record a completed restart; returns the stored timestamp."""
        stamp = when or datetime.now()
        with self._lock.write_locked():
            self._state = replace(self._state, last_restart_time=stamp)
        return stamp


@dataclass
class RuntimeContext:
    """Request-independent services handed to routes and workflows."""
    shared_state: SharedState
    log_action: Any
    log_exception: Any
