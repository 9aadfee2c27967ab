from pathlib import Path
from dataclasses import dataclass

@dataclass (frozen=True)
class Job:
    source_path: Path
    destination_path: Path

    def __str__(self):
        return f"{self.source_path} -> {self.destination_path}"
