import os
from pathlib import Path

from job import Job
from backrlog import get_logger
from pathfilter import PathFilter
from errorlist import enumeration_error, entry_read_error

logger = get_logger("walker")


def destination_is_newer(source: os.DirEntry, destination: Path) -> bool:
    try:
        destination_mtime = destination.stat().st_mtime_ns
    except OSError:
        # unreachable destinations are copied
        return False

    # equal timestamps still copy
    return destination_mtime > source.stat().st_mtime_ns


def walk(source_dir: Path, destination_dir: Path, path_filter: PathFilter, update: bool = False,
         match_directories: bool = True) -> tuple[list[Job], list[str]]:
    """Collect copy jobs for everything under source_dir that matches path_filter.

    Directories are only entered when their own path matches, unless
    match_directories is False, in which case every directory is entered and
    only files are filtered.

    Nothing raised by the filesystem stops the walk. An unreadable directory
    costs only its own subtree and an unreadable entry only itself; both are
    returned as error strings next to the jobs.
    """
    jobs: list[Job] = []
    errors: list[str] = []

    pending = [(Path(source_dir), Path(destination_dir))]

    while pending:
        source, destination = pending.pop()

        try:
            entries = os.scandir(source)
        except OSError as e:
            logger.warning(f"Cannot list {source}: {e}")
            errors.append(enumeration_error(source, e))
            continue

        subdirectories = []

        with entries:
            while True:
                try:
                    entry = next(entries)
                except StopIteration:
                    break
                except OSError as e:
                    logger.warning(f"Stopped reading {source} midway: {e}")
                    errors.append(entry_read_error(source, e))
                    break

                matched = path_filter.matches(entry.path)

                if not matched and match_directories:
                    continue

                child_source = Path(entry.path)
                child_destination = destination / entry.name

                try:
                    if entry.is_file():
                        if not matched:
                            continue

                        if update and destination_is_newer(entry, child_destination):
                            logger.debug(f"Skipping {child_source}, {child_destination} is newer")
                            continue

                        jobs.append(Job(source_path=child_source, destination_path=child_destination))
                    elif entry.is_dir():
                        subdirectories.append((child_source, child_destination))
                    else:
                        logger.debug(f"Skipping {child_source}, neither a file nor a directory")
                except OSError as e:
                    logger.warning(f"Cannot read {child_source}: {e}")
                    errors.append(entry_read_error(child_source, e))

        # reversed so subdirectories are popped in the order they were listed
        pending.extend(reversed(subdirectories))

    return jobs, errors
