import shutil
from pathlib import Path

import pytest

import workerpool
from job import Job
from pathfilter import PathFilter
from walker import walk
from workerpool import WorkerPool, backup


@pytest.mark.parametrize("worker_count", [1, 2, 3, 8])
def test_every_job_processed_exactly_once(make_jobs, worker_count: int):
    jobs = make_jobs(40)

    pool = WorkerPool(jobs, worker_count)
    errors = pool.run()

    assert errors == []
    assert pool.completed == len(jobs)

    handled = [job for worker_jobs in pool.processed.values() for job in worker_jobs]
    assert len(handled) == len(jobs)
    assert set(handled) == set(jobs)
    assert set(pool.processed.keys()) <= set(range(worker_count))

    for job in jobs:
        assert job.destination_path.read_text() == job.source_path.read_text()


def test_more_workers_than_jobs(make_jobs):
    jobs = make_jobs(2)

    pool = WorkerPool(jobs, 6)

    assert pool.run() == []
    assert pool.completed == 2


def test_backup_scenario(source_tree: Path, destination: Path):
    jobs, errors = walk(source_tree, destination, PathFilter(r".*\.txt$"), match_directories=False)
    assert len(jobs) == 2

    pool = WorkerPool(jobs, 2)
    errors.extend(pool.run())

    assert errors == []
    assert pool.completed == 2
    assert (destination / "a.txt").read_text() == "a.txt"
    assert (destination / "sub" / "b.txt").read_text() == "sub/b.txt"
    assert not (destination / "sub" / "c.log").exists()


def test_empty_job_list():
    pool = WorkerPool([], 4)

    assert pool.run() == []
    assert pool.completed == 0
    assert pool.total == 0


def test_zero_workers_rejected(make_jobs):
    with pytest.raises(ValueError):
        WorkerPool(make_jobs(1), 0)


def test_overwrites_existing_destination(make_jobs):
    jobs = make_jobs(1)
    jobs[0].destination_path.parent.mkdir(parents=True)
    jobs[0].destination_path.write_text("stale")

    assert backup(jobs, 1) == []
    assert jobs[0].destination_path.read_text() == "file0.txt"


def test_directory_creation_failure(make_jobs, tmp_path: Path):
    good = make_jobs(3, nested=False)

    blocker = tmp_path / "blocker"
    blocker.write_text("a file where a directory should be")
    bad = [Job(source_path=good[0].source_path, destination_path=blocker / "nested" / "file0.txt")]

    pool = WorkerPool(good + bad, 2)
    errors = pool.run()

    assert pool.completed == 4
    assert len(errors) == 1
    assert str(bad[0].source_path) in errors[0]
    assert str(blocker / "nested") in errors[0]

    for job in good:
        assert job.destination_path.is_file()


def test_copy_failure_per_job(make_jobs, tmp_path: Path):
    jobs = make_jobs(6)
    missing = [
        Job(source_path=tmp_path / "missing" / f"gone{i}.txt", destination_path=tmp_path / "jobs_dst" / f"gone{i}.txt")
        for i in range(3)
    ]

    pool = WorkerPool(jobs + missing, 3)
    errors = pool.run()

    assert pool.completed == 9
    assert len(errors) == 3

    for job in missing:
        referencing = [error for error in errors if str(job.source_path) in error and str(job.destination_path) in error]
        assert len(referencing) == 1

    for job in jobs:
        assert job.destination_path.is_file()


def test_copy_error_from_shutil(make_jobs, monkeypatch):
    jobs = make_jobs(4)
    real_copy = shutil.copyfile

    def copy(src, dst):
        if Path(src).name == "file2.txt":
            raise OSError(28, "No space left on device")
        return real_copy(src, dst)

    monkeypatch.setattr(workerpool.shutil, "copyfile", copy)

    errors = backup(jobs, 2)

    assert len(errors) == 1
    assert "file2.txt" in errors[0]
    assert "No space left on device" in errors[0]


def test_worker_defect_is_raised(make_jobs, monkeypatch):
    jobs = make_jobs(5)
    real_copy_job = workerpool.copy_job

    def copy_job(job):
        if job.source_path.name == "file3.txt":
            raise RuntimeError("broken worker")
        return real_copy_job(job)

    monkeypatch.setattr(workerpool, "copy_job", copy_job)

    pool = WorkerPool(jobs, 2)

    with pytest.raises(RuntimeError, match="broken worker"):
        pool.run()

    assert pool.completed == 4


def test_progress_bar_is_torn_down(make_jobs):
    jobs = make_jobs(10)

    pool = WorkerPool(jobs, 3, progress=True, interval=0.01)

    assert pool.run() == []
    assert pool.tracker.finished


def test_directory_at_destination_is_a_copy_error(tmp_path: Path):
    source = tmp_path / "s" / "x"
    source.parent.mkdir()
    source.write_text("x")

    destination = tmp_path / "d" / "x"
    destination.mkdir(parents=True)

    pool = WorkerPool([Job(source_path=source, destination_path=destination)], 1)
    errors = pool.run()

    assert pool.completed == 1
    assert len(errors) == 1
    assert str(source) in errors[0]
    assert str(destination) in errors[0]
    assert not (destination / "x").exists()


def test_copy_keeps_permission_bits(make_jobs):
    jobs = make_jobs(1)
    jobs[0].source_path.chmod(0o640)

    assert backup(jobs, 1) == []
    assert jobs[0].destination_path.stat().st_mode & 0o777 == 0o640
