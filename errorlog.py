from pathlib import Path

from backrlog import get_logger

logger = get_logger("errorlog")

DEFAULT_LOG_NAME = "backr_log.txt"
NO_ERRORS_ENTRY = "** Backr completed without error"


def write_log(errors: list[str], log_path: Path, quiet: bool = False, force_log: bool = False) -> Path | None:
    """Write the collected errors to log_path, one entry per line.

    Returns the path written, or None when nothing was written. If the file
    can't be written the entries are dumped to stdout instead.
    """
    entries = list(errors)

    if not entries:
        if not force_log:
            if not quiet:
                print("** There are no errors to report, so creating a log will be skipped")
            return None

        entries.append(NO_ERRORS_ENTRY)

    log_path = Path(log_path)

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)

        with open(log_path, "w", encoding="utf-8") as file:
            for entry in entries:
                file.write(f"{entry}\n")
    except OSError as e:
        logger.error(f"Failed to write log file {log_path}: {e}")

        if not quiet:
            print("** Dumping errors to stdout\n")
            for entry in entries:
                print(entry)

        return None

    if not quiet:
        print(f"** Wrote log to {log_path}")

    return log_path
