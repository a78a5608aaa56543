# Standard library imports
from collections.abc import MutableMapping
from functools import lru_cache
import logging
import sys
from typing import Any

# Local application imports
from votetrack.settings import settings

ROOT_LOGGER_NAME = "votetrack"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter that colours records by level when writing to a terminal.
    """

    GREY = "\x1b[38;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    LEVEL_COLOURS = {
        logging.DEBUG: GREY,
        logging.INFO: GREY,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def __init__(self, use_colour: bool = True) -> None:
        super().__init__(CONSOLE_FORMAT)
        self.use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colour:
            return message
        colour = self.LEVEL_COLOURS.get(record.levelno, self.GREY)
        return f"{colour}{message}{self.RESET}"


def _qualified_name(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


@lru_cache
def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Get a logger namespaced under ``votetrack``.

    Handlers are attached once to the ``votetrack`` root logger; child loggers
    propagate to it, so every module shares one console handler. In
    production Sentry's logging integration picks records up from there.

    Args:
        name: Short or dotted logger name, e.g. ``"services.import"``
        level: Optional logging level override

    Returns:
        A configured logger instance
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root_level = logging.DEBUG if settings.DEBUG_MODE else logging.INFO
        root.setLevel(root_level)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ConsoleFormatter(use_colour=sys.stdout.isatty()))
        root.addHandler(console_handler)
        root.propagate = False

    logger = logging.getLogger(_qualified_name(name))
    if level is not None:
        logger.setLevel(level)
    return logger


class LoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that appends ``key=value`` context to every message.
    """

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        if self.extra:
            context_str = " ".join(f"{k}={v}" for k, v in self.extra.items())
            msg = f"{msg} [{context_str}]"
        return msg, kwargs


def get_contextual_logger(name: str, **context: Any) -> LoggerAdapter:
    """
    Get a logger whose messages carry the given context, e.g. the id of the
    motion being tallied or the size of an import batch.
    """
    return LoggerAdapter(get_logger(name), context)
