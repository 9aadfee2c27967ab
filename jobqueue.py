import queue
from typing import Iterable

from job import Job

class JobQueue:
    """Hands each job to exactly one caller of take().

    Every job is loaded up front, so an empty queue means the work is
    exhausted rather than late.
    """

    def __init__(self, jobs: Iterable[Job]):
        self._queue: queue.SimpleQueue[Job] = queue.SimpleQueue()
        self._total = 0

        for job in jobs:
            self._queue.put(job)
            self._total += 1

    def take(self) -> Job | None:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __iter__(self):
        while (job := self.take()) is not None:
            yield job

    def __len__(self):
        return self._total
