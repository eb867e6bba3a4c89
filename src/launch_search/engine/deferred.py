"""Rate-limited assignment of expensive resources to displayed rows.

Rows are displayed immediately with a placeholder; their icons are
assigned a few at a time, one batch per event-loop turn, so a large
result list never stalls the loop.
"""

import asyncio
import weakref
from collections import deque
from collections.abc import Callable, Iterable
from typing import Any

from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

AssignCallback = Callable[[Any, Any], None]


class DeferredResourceLoader:
    """Queue of (placeholder, resource) pairs drained in fixed-size batches.

    Placeholders are held weakly; one that has been garbage collected, or
    whose assignment raises ``ReferenceError``, is skipped. While paused no
    work is scheduled, but the queue is kept until :meth:`cancel`.

    Attributes:
        batch_size: Assignments performed per event-loop turn.
        name: Label used in log messages.
    """

    def __init__(self, assign: AssignCallback, batch_size: int, name: str = "loader") -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._assign = assign
        self.batch_size = batch_size
        self.name = name
        self._queue: deque[tuple[weakref.ref, Any]] = deque()
        self._handle: asyncio.Handle | None = None
        self._paused = False
        self.skipped = 0

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def idle(self) -> bool:
        """True when nothing is queued."""
        return not self._queue

    def enqueue(self, placeholder: Any, resource: Any) -> None:
        """Queue one assignment and schedule draining."""
        self._queue.append((weakref.ref(placeholder), resource))
        self._schedule()

    def replace(self, items: Iterable[tuple[Any, Any]]) -> None:
        """Discard the current queue and queue ``items`` instead."""
        self.cancel()
        for placeholder, resource in items:
            self._queue.append((weakref.ref(placeholder), resource))
        self._schedule()

    def cancel(self) -> None:
        """Drop every queued assignment."""
        if self._queue:
            logger.debug("%s: discarding %d queued assignments", self.name, len(self._queue))
        self._queue.clear()
        self._unschedule()

    def pause(self) -> None:
        self._paused = True
        self._unschedule()

    def resume(self) -> None:
        self._paused = False
        self._schedule()

    def drain_once(self) -> int:
        """Perform up to ``batch_size`` assignments now.

        Returns:
            Number of assignments performed.
        """
        assigned = 0
        while self._queue and assigned < self.batch_size:
            ref, resource = self._queue.popleft()
            placeholder = ref()
            if placeholder is None:
                self.skipped += 1
                continue
            try:
                self._assign(placeholder, resource)
            except ReferenceError:
                self.skipped += 1
                continue
            except Exception:
                logger.warning("%s: resource assignment failed", self.name, exc_info=True)
                continue
            assigned += 1
        return assigned

    async def wait_idle(self) -> None:
        """Wait until the queue is empty or the loader is paused."""
        while self._queue and not self._paused:
            await asyncio.sleep(0)

    def _schedule(self) -> None:
        if self._paused or self._handle is not None or not self._queue:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Without a loop the owner drains explicitly via drain_once().
            return
        self._handle = loop.call_soon(self._tick)

    def _unschedule(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        if self._paused:
            return
        self.drain_once()
        self._schedule()
