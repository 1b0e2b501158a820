"""Lazily built, single-flight documentation index.

The first caller of :meth:`DocumentIndex.ensure_ready` starts one build on a
worker thread. Every caller that arrives while it runs waits on the same
future, so the documentation tree is parsed at most once per build no
matter how many requests hit a cold index at the same time.
"""

from __future__ import annotations

import logging
import threading
from concurrent import futures
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from docindex.config import AppConfig
from docindex.index.indexer import BuildResult, Indexer, IndexStats
from docindex.ingestion.renderer import Renderer
from docindex.models import DocumentNode

LOGGER = logging.getLogger(__name__)

Loader = Callable[[], BuildResult]


class IndexState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class IndexUnavailableError(RuntimeError):
    """The documentation index could not be built."""


class IndexBuildTimeout(IndexUnavailableError):
    """The build did not complete within the configured timeout."""


class DocumentIndex:
    """Owns the built document tree and its build state."""

    def __init__(self, loader: Loader, *, build_timeout: float | None = 30.0) -> None:
        self._loader = loader
        self.build_timeout = build_timeout
        self._lock = threading.Lock()
        self._state = IndexState.NOT_LOADED
        self._future: Optional[futures.Future] = None
        self._roots: Tuple[DocumentNode, ...] = ()
        self._stats: Optional[IndexStats] = None
        self._error: Optional[BaseException] = None
        self._build_count = 0

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        renderer: Renderer | None = None,
        *,
        base_dir: Path | None = None,
    ) -> "DocumentIndex":
        indexer = Indexer(config, renderer, base_dir=base_dir)
        return cls(indexer.build, build_timeout=config.build_timeout)

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._error

    @property
    def stats(self) -> Optional[IndexStats]:
        return self._stats

    @property
    def build_count(self) -> int:
        return self._build_count

    @property
    def roots(self) -> Tuple[DocumentNode, ...]:
        """Published roots; empty until the first successful build."""
        return self._roots

    def ensure_ready(self) -> None:
        """Block until the index is built, starting the build if needed.

        Raises:
            IndexUnavailableError: if the build failed or timed out.
        """
        with self._lock:
            if self._state is IndexState.READY:
                return
            if self._state is IndexState.LOADING and self._future is not None:
                future = self._future
            else:
                future = self._start_build()
        self._wait(future)

    def get_documents(self) -> List[DocumentNode]:
        self.ensure_ready()
        return list(self._roots)

    def find(self, path: str) -> Optional[DocumentNode]:
        """Return the node at ``path`` anywhere in the tree."""
        self.ensure_ready()
        wanted = path.strip("/")
        for root in self._roots:
            for node in root.walk():
                if node.path == wanted:
                    return node
        return None

    def invalidate(self) -> None:
        """Drop the built tree so the next access rebuilds it."""
        with self._lock:
            if self._state is IndexState.LOADING:
                LOGGER.debug("Build in progress, ignoring invalidate")
                return
            self._state = IndexState.NOT_LOADED
            self._future = None
            self._roots = ()
            self._error = None

    def _start_build(self) -> futures.Future:
        # Caller holds self._lock
        future: futures.Future = futures.Future()
        self._future = future
        self._state = IndexState.LOADING
        self._error = None
        self._build_count += 1
        worker = threading.Thread(
            target=self._run_build,
            args=(future,),
            name=f"docindex-build-{self._build_count}",
            daemon=True,
        )
        worker.start()
        return future

    def _run_build(self, future: futures.Future) -> None:
        LOGGER.info("Building documentation index")
        try:
            result = self._loader()
        except Exception as exc:
            LOGGER.exception("Indexing failed: %s", exc)
            self._finish(future, error=exc)
        else:
            LOGGER.info(
                "Documentation index ready: %d loaded, %d skipped, %d failed",
                result.stats.loaded,
                result.stats.skipped,
                result.stats.failed,
            )
            self._finish(future, result=result)

    def _finish(
        self,
        future: futures.Future,
        *,
        result: Optional[BuildResult] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if future is not self._future or future.done():
                LOGGER.warning("Discarding the outcome of an abandoned index build")
                return
            if error is not None:
                self._error = error
                self._roots = ()
                self._state = IndexState.FAILED
                future.set_exception(error)
                return
            assert result is not None
            self._roots = tuple(result.roots)
            self._stats = result.stats
            self._state = IndexState.READY
            future.set_result(None)

    def _abandon(self, future: futures.Future) -> None:
        with self._lock:
            if future is not self._future or future.done():
                return
            error = IndexBuildTimeout(
                f"Documentation index build did not finish within {self.build_timeout}s"
            )
            LOGGER.error("%s", error)
            self._error = error
            self._roots = ()
            self._state = IndexState.FAILED
            future.set_exception(error)

    def _wait(self, future: futures.Future) -> None:
        try:
            future.result(timeout=self.build_timeout)
        except futures.TimeoutError:
            self._abandon(future)
            error = future.exception()
        except Exception as exc:
            error = exc
        else:
            return

        if error is None:
            # The build completed while the timeout was being handled
            return
        if isinstance(error, IndexUnavailableError):
            raise error
        raise IndexUnavailableError(f"Documentation index unavailable: {error}") from error
