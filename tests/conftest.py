from pathlib import Path

import pytest

from job import Job


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    source = tmp_path / "src"
    (source / "sub").mkdir(parents=True, exist_ok=True)

    (source / "a.txt").write_text("a.txt")
    (source / "sub" / "b.txt").write_text("sub/b.txt")
    (source / "sub" / "c.log").write_text("sub/c.log")

    return source


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    return tmp_path / "dst"


@pytest.fixture
def make_jobs(tmp_path: Path):
    def _make_jobs(count: int, nested: bool = True) -> list[Job]:
        source = tmp_path / "jobs_src"
        source.mkdir(parents=True, exist_ok=True)

        jobs = []
        for i in range(count):
            src_file = source / f"file{i}.txt"
            src_file.write_text(f"file{i}.txt")

            dst_file = tmp_path / "jobs_dst" / (f"dir{i % 3}" if nested else "") / src_file.name
            jobs.append(Job(source_path=src_file, destination_path=dst_file))

        return jobs

    return _make_jobs
