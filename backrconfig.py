import re
import argparse
import configparser
from pathlib import Path
from dataclasses import dataclass

from backrlog import get_logger
from errorlog import DEFAULT_LOG_NAME
from progress import DEFAULT_POLL_INTERVAL
from pathfilter import PathFilter, DEFAULT_PATTERN, MATCH_ALL_PATTERN

logger = get_logger("config")

CONFIG_FILENAME = "config.ini"
CONFIG_SECTION = "backup"

DEFAULT_SOURCE = "./"
DEFAULT_THREADS = 2

CONFIG_PARAMS: list[tuple[str, type]] = [
    ("source", str),
    ("destination", str),
    ("regex", str),
    ("threads", int),
    ("update", bool),
    ("progress", bool),
    ("quiet", bool),
    ("forcelog", bool),
    ("log", str),
    ("interval", float),
    ("matchfilesonly", bool),
]

class ConfigError(ValueError):
    pass


@dataclass (frozen=True)
class BackupConfig:
    source: Path
    destination: Path
    log: Path
    path_filter: PathFilter
    threads: int = DEFAULT_THREADS
    update: bool = False
    progress: bool = False
    quiet: bool = False
    force_log: bool = False
    interval: float = DEFAULT_POLL_INTERVAL
    match_directories: bool = True


def get_config_param(config_filename, config_section, cast_to, param_name):
    try:
        raw = config_section[param_name]

        if cast_to is bool:
            return config_section.getboolean(param_name)

        return cast_to(raw)
    except configparser.Error as e:
        raise ConfigError(f"Failed to read {param_name} from {config_filename}: {e}") from e
    except ValueError as e:
        raise ConfigError(f"{param_name} in {config_filename} is not a valid {cast_to.__name__}: {config_section.get(param_name)!r}") from e


def read_config_file(config_filename=CONFIG_FILENAME, section=CONFIG_SECTION) -> dict:
    config_path = Path(config_filename)

    if not config_path.is_file():
        logger.debug(f"{config_filename} not found, using command line values and defaults")
        return {}

    config = configparser.ConfigParser(interpolation=None)

    try:
        config.read(config_path, encoding="utf-8")
    except configparser.Error as e:
        raise ConfigError(f"Failed to parse {config_filename}: {e}") from e

    if not config.has_section(section):
        logger.debug(f"{config_filename} has no [{section}] section")
        return {}

    import_section = config[section]

    return {
        param_name: get_config_param(config_filename, import_section, cast_to, param_name)
        for param_name, cast_to in CONFIG_PARAMS
        if param_name in import_section
    }


def resolve_config(args: argparse.Namespace, file_values: dict | None = None) -> BackupConfig:
    """Merge command line values over config file values over defaults."""
    file_values = file_values or {}

    def pick(cli_value, param_name, default):
        if cli_value is not None:
            return cli_value

        return file_values.get(param_name, default)

    destination = pick(args.destination, "destination", None)

    if destination is None or str(destination).strip() == "":
        raise ConfigError("A destination is required, pass -d/--destination or set it in the config file")

    source = Path(pick(args.source, "source", DEFAULT_SOURCE))

    # the source directory itself is recreated inside the destination
    destination = Path(destination) / source.resolve().name

    pattern = MATCH_ALL_PATTERN if args.backup_all else pick(args.regex, "regex", DEFAULT_PATTERN)

    try:
        path_filter = PathFilter(pattern)
    except re.error as e:
        raise ConfigError(f"Invalid regex {pattern!r}: {e}") from e

    threads = pick(args.threads, "threads", DEFAULT_THREADS)

    if threads < 1:
        raise ConfigError(f"threads must be at least 1, got {threads}")

    interval = pick(args.interval, "interval", DEFAULT_POLL_INTERVAL)

    if interval <= 0:
        raise ConfigError(f"interval must be positive, got {interval}")

    progress = pick(args.progress, "progress", False)
    quiet = pick(args.quiet, "quiet", False)

    if progress and quiet:
        raise ConfigError("progress and quiet can't be used together")

    log = pick(args.log, "log", "")
    log = Path(log) if str(log).strip() != "" else destination / DEFAULT_LOG_NAME

    return BackupConfig(
        source=source,
        destination=destination,
        log=log,
        path_filter=path_filter,
        threads=threads,
        update=pick(args.update, "update", False),
        progress=progress,
        quiet=quiet,
        force_log=pick(args.force_log, "forcelog", False),
        interval=interval,
        match_directories=not pick(args.match_files_only, "matchfilesonly", False))
