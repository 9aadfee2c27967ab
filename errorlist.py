import threading
from pathlib import Path

from job import Job


def enumeration_error(directory: Path, cause: BaseException) -> str:
    return f"Error: Failed to read {str(directory)!r}.\n{cause}"


def entry_read_error(path: Path, cause: BaseException) -> str:
    return f"Error: Failed to read a path at {str(path)!r}. Skipping!\n{cause}"


def directory_creation_error(job: Job, cause: BaseException) -> str:
    return (f"Error: Failed to create {str(job.destination_path.parent)!r} "
            f"for {str(job.source_path)!r}\n{cause}")


def copy_error(job: Job, cause: BaseException) -> str:
    return f"Error: Failed to copy {str(job.source_path)!r} -> {str(job.destination_path)!r}\n{cause}"


class ErrorAggregator:
    """Append-only error list that is safe to feed from several threads."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: list[str] = []

    def append(self, entry: str):
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __bool__(self):
        return len(self) > 0
