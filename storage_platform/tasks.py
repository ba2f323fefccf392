"""Background work for table operations.

Each :class:`BackgroundTask` runs on its own short-lived thread. Tasks are not
queued or ordered relative to each other: two tasks started back to back may
finish in either order. Cancellation is not supported; ``cancel()`` exists so
callers can rely on a stable contract and always returns ``False``.

Results that must reach the screen are posted to a :class:`UiDispatcher`,
which the interactive context drains on its own thread.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_task_ids = itertools.count(1)


class UiDispatcher:
    """Queue of callables waiting to run on the interactive context."""

    def __init__(self):
        self._pending: queue.SimpleQueue = queue.SimpleQueue()

    def post(self, callback: Callable[[], None]) -> None:
        self._pending.put(callback)

    def drain(self) -> int:
        """Run every queued callable on the calling thread; return how many ran."""
        ran = 0
        while True:
            try:
                callback = self._pending.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1


class BackgroundTask:
    """A fire-and-forget unit of work with an inspectable result.

    ``on_success`` is never called on the worker thread; it is posted to
    *dispatcher*. Failures are logged and kept on the task.
    """

    def __init__(
        self,
        fn: Callable[[], Any],
        *,
        name: str = "task",
        dispatcher: Optional[UiDispatcher] = None,
        on_success: Optional[Callable[[Any], None]] = None,
    ):
        self.id = next(_task_ids)
        self.name = name
        self._fn = fn
        self._dispatcher = dispatcher
        self._on_success = on_success
        self._future: Future = Future()
        self._thread = threading.Thread(
            target=self._run, name=f"{name}-{self.id}", daemon=True
        )

    @classmethod
    def spawn(cls, fn: Callable[[], Any], **kwargs) -> "BackgroundTask":
        task = cls(fn, **kwargs)
        task.start()
        return task

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        self._future.set_running_or_notify_cancel()
        try:
            value = self._fn()
        except Exception as exc:
            logger.warning("Background %s #%d failed: %s", self.name, self.id, exc, exc_info=True)
            self._future.set_exception(exc)
            return

        # Post before resolving so that anyone waiting on the task can drain
        # the dispatcher and see the update.
        if self._on_success is not None:
            if self._dispatcher is not None:
                self._dispatcher.post(lambda: self._on_success(value))
            else:
                logger.debug("No dispatcher for %s #%d; dropping UI update", self.name, self.id)
        self._future.set_result(value)

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Any:
        """Wait for the task and return its value (re-raises its failure)."""
        return self._future.result(timeout)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        return self._future.exception(timeout)

    def cancel(self) -> bool:
        """Tasks always run to completion."""
        return False

    def __await__(self):
        return asyncio.wrap_future(self._future).__await__()
