import queue
import shutil
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from job import Job
from jobqueue import JobQueue
from backrlog import get_logger
from progress import ProgressTracker, ProgressRenderer, DEFAULT_POLL_INTERVAL
from errorlist import ErrorAggregator, directory_creation_error, copy_error

logger = get_logger("workerpool")

RESULT_POLL_SECONDS = 0.1

@dataclass (frozen=True)
class JobResult:
    job: Job
    worker: int
    error: str | None = None


def copy_job(job: Job) -> str | None:
    """Copy one file, returning an error entry instead of raising on OSError."""
    try:
        job.destination_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Cannot create {job.destination_path.parent}: {e}")
        return directory_creation_error(job, e)

    try:
        shutil.copyfile(job.source_path, job.destination_path)
        shutil.copymode(job.source_path, job.destination_path)
    except OSError as e:
        logger.warning(f"Cannot copy {job}: {e}")
        return copy_error(job, e)

    logger.debug(f"Copied {job}")
    return None


class WorkerPool:
    """Drains one shared JobQueue with a fixed number of worker threads.

    Workers only take jobs and report a JobResult per job on a results
    channel. The thread that calls run() owns the bookkeeping: it counts
    progress and collects errors as the results arrive.
    """

    def __init__(self, jobs: Iterable[Job], worker_count: int, progress: bool = False, interval: float = DEFAULT_POLL_INTERVAL):
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")

        self.worker_count = worker_count
        self.progress = progress
        self.interval = interval

        self.queue = JobQueue(jobs)
        self.tracker = ProgressTracker(len(self.queue))
        self.errors = ErrorAggregator()
        self.processed: defaultdict[int, list[Job]] = defaultdict(list)

        self._results: queue.SimpleQueue[JobResult] = queue.SimpleQueue()

    @property
    def total(self) -> int:
        return self.tracker.total

    @property
    def completed(self) -> int:
        return self.tracker.completed

    def _work(self, worker: int):
        for job in self.queue:
            self._results.put(JobResult(job=job, worker=worker, error=copy_job(job)))

    def _record(self, result: JobResult):
        self.processed[result.worker].append(result.job)

        if result.error is not None:
            self.errors.append(result.error)

        self.tracker.increment()

    def _collect(self, futures):
        while not self.tracker.finished:
            try:
                result = self._results.get(timeout=RESULT_POLL_SECONDS)
            except queue.Empty:
                if all(future.done() for future in futures):
                    break
                continue

            self._record(result)

        # a worker may report right before it exits
        while True:
            try:
                self._record(self._results.get_nowait())
            except queue.Empty:
                break

    def run(self) -> list[str]:
        if self.total == 0:
            return []

        logger.info(f"Backing up {self.total} files with {self.worker_count} worker(s)")

        renderer = ProgressRenderer(self.tracker, interval=self.interval) if self.progress else None

        if renderer is not None:
            renderer.start()

        try:
            with ThreadPoolExecutor(max_workers=self.worker_count, thread_name_prefix="backr-worker") as executor:
                futures = [executor.submit(self._work, worker) for worker in range(self.worker_count)]

                self._collect(futures)

                for f in as_completed(futures):
                    f.result()
        finally:
            if renderer is not None:
                renderer.stop()

        return self.errors.entries()


def backup(jobs: Iterable[Job], worker_count: int, progress: bool = False, interval: float = DEFAULT_POLL_INTERVAL) -> list[str]:
    return WorkerPool(jobs, worker_count, progress=progress, interval=interval).run()
