import sys
import argparse

from colorama import Fore
from colorama import Style

from walker import walk
from workerpool import backup
from errorlog import write_log
from permissions import check_permissions
from backrlog import logger, configure_logging
from pathfilter import DEFAULT_PATTERN
from backrconfig import ConfigError, CONFIG_FILENAME, DEFAULT_SOURCE, DEFAULT_THREADS, read_config_file, resolve_config

__version__ = "0.5.0"

def build_parser():
    parser = argparse.ArgumentParser(prog="backr", description="Backs up user data.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-s", "--source", type=str, help=f"The directory to back up. Default: {DEFAULT_SOURCE}")
    parser.add_argument("-d", "--destination", type=str, help="Where the backup is written. Required, here or in the config file")
    parser.add_argument("-l", "--log", type=str, help="Where errors are logged. Default: DESTINATION/backr_log.txt")
    parser.add_argument("-t", "--threads", type=int, help=f"Number of threads used to copy files. Default: {DEFAULT_THREADS}")
    parser.add_argument("-c", "--config", type=str, default=CONFIG_FILENAME, help=f"Config file with a [backup] section. Default: {CONFIG_FILENAME}")
    parser.add_argument("-u", "--update", action="store_true", default=None,
                        help="Keep destination files that are newer than their source instead of overwriting them")
    parser.add_argument("-L", "--force-log", action="store_true", default=None, help="Write a log even if there are no errors to report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every file that is copied or skipped")
    parser.add_argument("--interval", type=float, help="Seconds between progress bar refreshes. Default: 5")
    parser.add_argument("--match-files-only", action="store_true", default=None,
                        help="Apply the regex to files only and search every directory")

    filters = parser.add_mutually_exclusive_group()
    filters.add_argument("-r", "--regex", type=str, help=f"Only back up files and directories matching this regex. Default: {DEFAULT_PATTERN}")
    filters.add_argument("-a", "--backup-all", action="store_true", help="Back up everything, ignoring the regex")

    output = parser.add_mutually_exclusive_group()
    output.add_argument("-p", "--progress", action="store_true", default=None, help="Display a progress bar during the backup")
    output.add_argument("-q", "--quiet", action="store_true", default=None, help="Don't print anything to stdout")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args, read_config_file(args.config))
    except ConfigError as e:
        print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}", file=sys.stderr)
        return 2

    configure_logging(quiet=config.quiet, verbose=args.verbose)

    if not check_permissions(config.source, config.destination):
        logger.error(f"Permission check failed for {config.source} -> {config.destination}")
        return 1

    if not config.quiet:
        print(f"** {config.source} is being used as the source directory\n"
              f"** {config.destination} is being used as the destination directory\n"
              f"** Searching for files to backup...")

    jobs, errors = walk(config.source, config.destination, config.path_filter, config.update,
                        match_directories=config.match_directories)

    queue_len = len(jobs)

    if not config.quiet:
        print(f"** {queue_len} files to backup and {len(errors)} read errors.")
        print("** Starting backup")

    backup_errors = backup(jobs, config.threads, progress=config.progress, interval=config.interval)
    errors.extend(backup_errors)

    if not config.quiet:
        color = Fore.GREEN if not errors else Fore.RED

        print(f"{color}** Files Backed Up: {queue_len - len(backup_errors)}{Style.RESET_ALL}")
        print(f"{color}** Total errors: {len(errors)}{Style.RESET_ALL}")

    write_log(errors, config.log, quiet=config.quiet, force_log=config.force_log)

    return 0 if not errors else 1


if __name__ == "__main__":
    sys.exit(main())
