import os
from pathlib import Path

from backrlog import get_logger

logger = get_logger("permissions")

PROBE_FILENAME = "CanIWriteHere?.txt"


def can_read(source: Path) -> bool:
    try:
        with os.scandir(source):
            pass
    except OSError as e:
        logger.error(f"Failed to read the source directory {source}: {e}")
        return False

    return True


def can_write(destination: Path) -> bool:
    """Probe the destination with a throwaway file, creating it if it is missing."""
    if not destination.exists():
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"You do not have write permissions for {destination}: {e}")
            return False

        return True

    probe = destination / PROBE_FILENAME

    try:
        probe.touch()
    except OSError as e:
        logger.error(f"You do not have write permissions for {destination}: {e}")
        return False

    try:
        probe.unlink()
    except OSError as e:
        logger.warning(f"Failed to delete the test file {probe}, verify the backup after completion: {e}")

    return True


def check_permissions(source: Path, destination: Path) -> bool:
    read_ok = can_read(Path(source))
    write_ok = can_write(Path(destination))

    return read_ok and write_ok
