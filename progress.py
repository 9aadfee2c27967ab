import threading

from tqdm import tqdm

DEFAULT_POLL_INTERVAL = 5.0

class ProgressTracker:
    """Count of finished jobs, successful or not, out of a fixed total."""

    def __init__(self, total: int):
        if total < 0:
            raise ValueError(f"total must not be negative, got {total}")

        self._lock = threading.Lock()
        self._total = total
        self._completed = 0

    def increment(self) -> int:
        with self._lock:
            if self._completed >= self._total:
                raise RuntimeError(f"Progress overrun: {self._completed + 1} of {self._total} jobs completed")

            self._completed += 1
            return self._completed

    @property
    def total(self) -> int:
        return self._total

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def percent(self) -> float:
        if self._total == 0:
            return 100.0

        return self.completed / self._total * 100

    @property
    def finished(self) -> bool:
        return self.percent >= 100


class ProgressRenderer:
    """Polls a ProgressTracker from a daemon thread and draws a tqdm bar.

    The poll is deliberately slow so drawing never competes with the copy
    threads. The bar closes itself once the tracker reaches 100 percent,
    or when stop() is called.
    """

    def __init__(self, tracker: ProgressTracker, interval: float = DEFAULT_POLL_INTERVAL, desc: str = "Backup"):
        self.tracker = tracker
        self.interval = interval
        self.desc = desc

        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="backr-progress", daemon=True)
        self._bar = None

    def start(self):
        self._bar = tqdm(total=self.tracker.total, desc=self.desc, unit="file", ncols=100)
        self._thread.start()
        return self

    def stop(self):
        self._stop.set()

        if self._thread.is_alive():
            self._thread.join()

        if self._bar is not None:
            self._draw()
            self._bar.close()
            self._bar = None

    def _draw(self):
        self._bar.n = self.tracker.completed
        self._bar.refresh()

    def _run(self):
        while True:
            self._draw()

            if self.tracker.finished:
                break

            if self._stop.wait(self.interval):
                break

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()
