from __future__ import annotations
import asyncio
from collections import deque
from typing import Deque, Optional

from .base import Executor, Work


class DeferredExecutor(Executor):
    """
    Single-threaded FIFO queue. Nothing runs while the submitter is still
    scheduling; join() drains the queue, including work queued during the drain.
    """

    def __init__(self):
        self._queue: Deque[Work] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def submit(self, work: Work) -> None:
        self._queue.append(work)

    def join(self) -> None:
        while self._queue:
            work = self._queue.popleft()
            work()

    def shutdown(self) -> None:
        self._queue.clear()


class EventLoopExecutor(Executor):
    """Schedules work as asyncio callbacks (call_soon) on a private loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._owns_loop = loop is None
        self.loop = loop or asyncio.new_event_loop()
        self._pending = 0
        self._error: Optional[BaseException] = None
        self._idle: Optional[asyncio.Future] = None

    def submit(self, work: Work) -> None:
        self._pending += 1
        self.loop.call_soon(self._run, work)

    def _run(self, work: Work) -> None:
        try:
            if self._error is None:
                work()
        except Exception as e:
            self._error = e
        finally:
            self._pending -= 1
            if self._pending == 0 and self._idle is not None and not self._idle.done():
                self._idle.set_result(None)

    async def _wait_idle(self) -> None:
        if self._pending == 0:
            return
        self._idle = self.loop.create_future()
        await self._idle

    def join(self) -> None:
        self.loop.run_until_complete(self._wait_idle())
        self._idle = None
        if self._error is not None:
            err, self._error = self._error, None
            raise err

    def shutdown(self) -> None:
        if self._owns_loop and not self.loop.is_closed():
            self.loop.close()
