import logging
import logging.config

from rich.console import Console

# Command output goes to stdout; logs stay on stderr.
LOG_CONSOLE = Console(stderr=True)


def _logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                # RichHandler renders time and level itself
                "format": "%(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "class": "rich.logging.RichHandler",
                "formatter": "default",
                "level": "DEBUG",
                "console": "ext://utils.log.LOG_CONSOLE",
                "rich_tracebacks": True,
                "show_time": True,
                "show_path": False,
                "log_time_format": "%Y-%m-%d %H:%M:%S",
            },
        },
        "loggers": {
            "matplotlib": {"level": "WARNING"},
            "": {
                "handlers": ["default"],
                "level": level,
            },
        },
    }


def configure_logging(level: str | int = "INFO") -> None:
    """Route all application logs through a single Rich console handler."""
    if isinstance(level, int):
        level = logging.getLevelName(level)
    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    logging.config.dictConfig(_logging_config(level))
