from __future__ import annotations
import threading
from collections import deque
from typing import Deque, List

from .base import Executor, Work


class WorkerPoolExecutor(Executor):
    """
    N worker threads pulling from one shared queue.

    Workers start on the first submit. After join() is called a worker leaves
    only when the queue is empty and no other worker is busy, since a busy
    worker may still submit more work. The first exception raised by a unit of
    work is re-raised from join(); work still queued after a failure is dropped.
    """

    def __init__(self, workers: int = 4, name: str = "Worker"):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.workers = workers
        self.name = name
        self._cond = threading.Condition()
        self._queue: Deque[Work] = deque()
        self._threads: List[threading.Thread] = []
        self._errors: List[BaseException] = []
        self._busy = 0
        self._draining = False
        self._closed = False

    def submit(self, work: Work) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("executor_shut_down")
            self._queue.append(work)
            if not self._threads:
                self._start()
            self._cond.notify()

    def _start(self) -> None:
        for i in range(self.workers):
            t = threading.Thread(target=self._loop, name=f"{self.name} {i}", daemon=True)
            self._threads.append(t)
            t.start()

    def _loop(self) -> None:
        while True:
            with self._cond:
                while not self._queue:
                    if self._closed or (self._draining and self._busy == 0):
                        self._cond.notify_all()
                        return
                    self._cond.wait()
                work = self._queue.popleft()
                self._busy += 1
                failed = bool(self._errors)
            try:
                if not failed:
                    work()
            except Exception as e:
                with self._cond:
                    self._errors.append(e)
            finally:
                with self._cond:
                    self._busy -= 1
                    self._cond.notify_all()

    def join(self) -> None:
        with self._cond:
            self._draining = True
            self._cond.notify_all()
            threads = list(self._threads)
        for t in threads:
            t.join()
        with self._cond:
            self._threads = []
            self._draining = False
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]

    def shutdown(self) -> None:
        with self._cond:
            self._closed = True
            self._queue.clear()
            self._cond.notify_all()
            threads = list(self._threads)
        for t in threads:
            t.join()
        self._threads = []
