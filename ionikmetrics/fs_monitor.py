"""Watching files and directories for changes, delivered through polling."""

from __future__ import annotations

import os
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

PathCallback = Callable[[Path], None]

_EVENT_CALLBACKS = {
    "created": "created",
    "deleted": "deleted",
    "modified": "modified",
    "moved": "moved",
    "opened": "opened",
    "closed": "closed",
    "closed_no_write": "closed",
}


@dataclass
class MonitorCallbacks:
    """Functions called with the path concerned; any of them may be left as None.

    Not every platform backend reports every kind of change; attribute changes
    may arrive as modifications.
    """

    accessed: PathCallback | None = None
    modified: PathCallback | None = None
    metadata_changed: PathCallback | None = None
    opened: PathCallback | None = None
    closed: PathCallback | None = None
    created: PathCallback | None = None
    deleted: PathCallback | None = None
    moved: PathCallback | None = None


class _QueueHandler(FileSystemEventHandler):
    def __init__(self, events: queue.Queue[FileSystemEvent]) -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._events.put(event)


def _to_path(raw: str | bytes) -> Path:
    return Path(os.fsdecode(raw))


class Monitor:
    """Watches directories (their entries) and single files for changes."""

    def __init__(self) -> None:
        self._events: queue.Queue[FileSystemEvent] = queue.Queue()
        self._handler = _QueueHandler(self._events)
        self._observer = Observer()
        self._lock = threading.Lock()
        # Watched directory -> names of watched entries, or None for all entries.
        self._watches: dict[Path, set[str] | None] = {}
        self._scheduled: set[Path] = set()
        self._closed = False
        self._observer.start()

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("monitor is closed")

    def _schedule(self, directory: Path) -> None:
        if directory not in self._scheduled:
            self._observer.schedule(self._handler, str(directory), recursive=False)
            self._scheduled.add(directory)

    def add(self, path: str | os.PathLike[str]) -> None:
        """Start watching ``path``: a directory's entries or a single file."""
        self._check_open()
        if not os.path.exists(path):
            raise FileNotFoundError(f"attempt to watch non-existence path: {os.fspath(path)}")

        canonical = Path(path).resolve(strict=True)

        with self._lock:
            if canonical.is_dir():
                self._watches[canonical] = None
                self._schedule(canonical)
            else:
                parent = canonical.parent
                names = self._watches.get(parent, set())
                if names is not None:
                    names.add(canonical.name)
                    self._watches[parent] = names
                self._schedule(parent)

    def _is_monitored(self, path: Path) -> bool:
        with self._lock:
            if path in self._watches and self._watches[path] is None:
                return True
            if path.parent not in self._watches:
                return False
            names = self._watches[path.parent]
            return names is None or path.name in names

    def _dispatch(self, event: FileSystemEvent, callbacks: MonitorCallbacks) -> None:
        name = _EVENT_CALLBACKS.get(event.event_type)
        if name is None:
            return
        callback = getattr(callbacks, name)
        if callback is None:
            return

        paths = [_to_path(event.src_path)]
        dest = getattr(event, "dest_path", "")
        if event.event_type == "moved" and dest:
            paths.append(_to_path(dest))

        for path in paths:
            if self._is_monitored(path):
                callback(path)

    def poll(self, timeout: float, callbacks: MonitorCallbacks) -> int:
        """Wait up to ``timeout`` seconds for changes and deliver them to ``callbacks``.

        Returns the number of raw events taken, 0 if none arrived in time.
        """
        self._check_open()
        try:
            if timeout > 0:
                first = self._events.get(timeout=timeout)
            else:
                first = self._events.get_nowait()
        except queue.Empty:
            return 0

        batch = [first]
        while True:
            try:
                batch.append(self._events.get_nowait())
            except queue.Empty:
                break

        for event in batch:
            self._dispatch(event, callbacks)
        return len(batch)

    def close(self) -> None:
        """Stop watching everything."""
        if self._closed:
            return
        self._closed = True
        self._observer.stop()
        self._observer.join()
        with self._lock:
            self._watches.clear()
            self._scheduled.clear()

    def __enter__(self) -> Monitor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()