import logging
import logging.config

CONSOLE_HANDLER = "stdout"

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "[%(asctime)s .%(msecs)03d|%(levelname)s|%(name)s|%(filename)s:%(lineno)d] %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            }
        },
        "handlers": {
            CONSOLE_HANDLER: {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "stream": "ext://sys.stdout",
                "level": "WARNING",
            },
        },
        "loggers": {
            "root": {
                "level": "DEBUG",
                "handlers": [
                    CONSOLE_HANDLER,
                ],
            }
        },
    }
)

logger = logging.getLogger("backr")


def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)


def configure_logging(quiet: bool = False, verbose: bool = False):
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    for handler in logging.getLogger().handlers:
        if handler.get_name() == CONSOLE_HANDLER:
            handler.setLevel(level)
