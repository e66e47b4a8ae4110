"""Bounded worker pool that inlines requests in parallel."""

import logging
import os
import queue
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import cast

from lingobox.core.errors import InlineExecutionError
from lingobox.i18n.inliner import create_translation_inliner
from lingobox.i18n.models import I18nOptions, InlineRequest, TransformResult
from lingobox.i18n.protocols import InlinerProtocol


logger = logging.getLogger(__name__)

_SHUTDOWN = object()


@dataclass
class _Envelope:
    """Item pushed onto the result channel by a worker."""

    request: InlineRequest
    result: TransformResult | None = None
    error: BaseException | None = None


def default_worker_count() -> int:
    """Leave one CPU for the orchestrating thread."""
    return max(1, (os.cpu_count() or 2) - 1)


class WorkerPool:
    """Fixed set of worker threads pulling requests from a queue.

    Results, or the exception raised while handling a request, are pushed
    onto ``results``. ``shutdown`` sends one sentinel per worker and joins.
    """

    def __init__(
        self, inliner: InlinerProtocol, i18n: I18nOptions, max_workers: int
    ) -> None:
        self.inliner = inliner
        self.i18n = i18n
        self.requests: queue.Queue[object] = queue.Queue()
        self.results: queue.Queue[_Envelope] = queue.Queue()
        self._workers = [
            threading.Thread(
                target=self._worker_loop, name=f"lingobox-inline-{i}", daemon=True
            )
            for i in range(max_workers)
        ]
        for worker in self._workers:
            worker.start()
        logger.debug("Started inline worker pool with %d worker(s)", max_workers)

    @property
    def size(self) -> int:
        return len(self._workers)

    def submit(self, request: InlineRequest) -> None:
        self.requests.put(request)

    def _worker_loop(self) -> None:
        while True:
            item = self.requests.get()
            try:
                if item is _SHUTDOWN:
                    return
                request = cast(InlineRequest, item)
                try:
                    result = self.inliner.inline(request, self.i18n)
                except Exception as e:
                    self.results.put(_Envelope(request=request, error=e))
                else:
                    self.results.put(_Envelope(request=request, result=result))
            finally:
                self.requests.task_done()

    def shutdown(self) -> None:
        for _ in self._workers:
            self.requests.put(_SHUTDOWN)
        for worker in self._workers:
            worker.join()
        logger.debug("Inline worker pool stopped")


class BundleActionExecutor:
    """Run inline requests on a lazily created worker pool.

    ``inline_all`` yields one ``TransformResult`` per request in completion
    order. ``stop`` must be called once the executor is no longer needed; it
    is idempotent.
    """

    def __init__(
        self,
        i18n: I18nOptions,
        max_workers: int | None = None,
        inliner: InlinerProtocol | None = None,
    ) -> None:
        self.i18n = i18n
        self.max_workers = max_workers
        self.inliner = inliner or create_translation_inliner()
        self._pool: WorkerPool | None = None
        self._lock = threading.Lock()
        self._stopped = False

    def __enter__(self) -> "BundleActionExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _ensure_pool(self, request_count: int) -> WorkerPool:
        with self._lock:
            if self._stopped:
                raise InlineExecutionError("Inline executor has been stopped")
            if self._pool is None:
                limit = self.max_workers or default_worker_count()
                self._pool = WorkerPool(
                    self.inliner, self.i18n, max(1, min(limit, request_count))
                )
            return self._pool

    def inline(self, request: InlineRequest) -> TransformResult:
        """Inline a single request and wait for its result."""
        return next(self.inline_all([request]))

    def inline_all(
        self, requests: Iterable[InlineRequest]
    ) -> Iterator[TransformResult]:
        """Submit all requests and yield results as they complete.

        Raises:
            InlineExecutionError: If a worker fails while handling a request
        """
        pending = list(requests)
        if not pending:
            return iter(())
        pool = self._ensure_pool(len(pending))
        for request in pending:
            pool.submit(request)
        return self._collect(pool, len(pending))

    @staticmethod
    def _collect(pool: WorkerPool, expected: int) -> Iterator[TransformResult]:
        for _ in range(expected):
            envelope = pool.results.get()
            if envelope.error is not None:
                raise InlineExecutionError(
                    f"Unable to inline '{envelope.request.filename}': {envelope.error}",
                    {"file": envelope.request.filename},
                ) from envelope.error
            if envelope.result is None:
                raise InlineExecutionError(
                    f"No result produced for '{envelope.request.filename}'",
                    {"file": envelope.request.filename},
                )
            yield envelope.result

    def stop(self) -> None:
        """Release the worker pool."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown()


def create_bundle_action_executor(
    i18n: I18nOptions,
    max_workers: int | None = None,
    inliner: InlinerProtocol | None = None,
) -> BundleActionExecutor:
    """Create inline executor instance."""
    return BundleActionExecutor(i18n, max_workers, inliner)
