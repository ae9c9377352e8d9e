"""Memoizing cache of installation metadata with per-key call coalescing."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path

import structlog

from runtimeprobe.probe.schema import Metadata

logger = structlog.get_logger()


class InstallationCache:
    """Computes metadata at most once per installation path.

    Design:
    - One lock guards the entry and in-flight maps; the loader runs outside it,
      so distinct paths probe in parallel
    - Concurrent misses on one path share a Future; only the first caller loads
    - A failed load caches nothing and hands the same exception to every waiter
    - No eviction: the key space is the installations a session references
    """

    def __init__(self, loader: Callable[[Path], Metadata]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._entries: dict[Path, Metadata] = {}
        self._in_flight: dict[Path, Future[Metadata]] = {}

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return Path(path) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def cached_paths(self) -> list[Path]:
        with self._lock:
            return list(self._entries)

    def get(self, path: Path | str) -> Metadata:
        """Return cached metadata for ``path``, loading it on first request."""
        key = Path(path)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                logger.debug("installation_cache_hit", path=str(key))
                return dict(cached)
            future = self._in_flight.get(key)
            owner = future is None
            if future is None:
                future = Future()
                self._in_flight[key] = future

        if not owner:
            logger.debug("installation_cache_wait", path=str(key))
            return dict(future.result())

        try:
            metadata = self._loader(key)
        except BaseException as e:
            with self._lock:
                del self._in_flight[key]
            future.set_exception(e)
            raise

        with self._lock:
            self._entries[key] = metadata
            del self._in_flight[key]
        future.set_result(metadata)
        return dict(metadata)
