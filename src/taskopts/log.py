# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Console logging for taskopts.

Libraries using taskopts do not need to call anything from here; without
:func:`setup_logging` the records of the ``taskopts`` loggers propagate to
whatever the application configured. Command line front ends can call
:func:`setup_logging` (or :func:`taskopts.config.setup_logging_from_config`)
to get a colored stderr handler.
"""

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
from enum import Enum, IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import Any, TextIO, cast

TRACE = 5
NOTICE = 25

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(NOTICE, "NOTICE")


@unique
class ColorMode(Enum):
    """Decides whether the console handler emits ANSI escape codes."""

    ALWAYS = "always"
    #: Colors only if the stream is a tty and ``NO_COLOR`` is unset.
    AUTO = "auto"
    NEVER = "never"


def resolve_color_mode(mode: ColorMode, stream: TextIO = sys.stderr) -> bool:
    if sys.platform == "win32":
        return False

    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.AUTO:
            return os.getenv("NO_COLOR") is None and stream.isatty()
        case ColorMode.NEVER:
            return False


@unique
class Loglevel(IntEnum):
    """The loglevels understood by taskopts.

    Python's ``logging`` constants are extended by ``NOTICE``,
    which sits between ``INFO`` and ``WARNING``, and ``TRACE``,
    which is used for very chatty debug output such as
    the conversion of single command line tokens.
    """

    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    NOTICE = NOTICE
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Converts a numeric value (e.g. ``10``) or a case insensitive
        level name (e.g. ``debug``) to a Loglevel.
        """
        if string.isnumeric():
            return cls(int(string))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


def setup_logging(
    level: Loglevel | None = None,
    color_mode: ColorMode = ColorMode.AUTO,
    logger_name: str = "taskopts",
) -> None:
    """Attaches a stderr handler to the ``taskopts`` logger.

    Records are handed over through a queue to a listener thread, so that
    emitting them never blocks on the terminal. Calling this function again
    replaces the previously attached handlers.

    :param level: The loglevel of the console handler. If this argument
                  is None, the env variable ``TASKOPTS_LOGLEVEL`` is read;
                  the fallback is ``WARNING``.
    :param color_mode: The color mode to use for the console.
    :param logger_name: The logger the handler is attached to.
    """
    if level is None:
        raw = os.getenv("TASKOPTS_LOGLEVEL")
        level = Loglevel.from_str(raw) if raw is not None else Loglevel.WARNING

    logger = logging.getLogger(logger_name)
    # NOTSET would defer to the level of the root logger.
    logger.setLevel(1)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    stop_stderr_log_handler(logger_name)
    add_stderr_log_handler(logger_name, level, resolve_color_mode(color_mode))


# Running listeners, keyed by logger name.
_listeners: dict[str, QueueListener] = {}


def add_stderr_log_handler(logger_name: str, level: Loglevel, colored: bool) -> None:
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(_ConsoleFormatter(colored))

    queue: Queue[Any] = Queue()
    listener = QueueListener(queue, stderr_handler, respect_handler_level=True)
    listener.start()
    _listeners[logger_name] = listener

    logging.getLogger(logger_name).addHandler(QueueHandler(queue))


def stop_stderr_log_handler(logger_name: str) -> None:
    """Stops the listener thread of `logger_name`, flushing pending records."""
    if (listener := _listeners.pop(logger_name, None)) is not None:
        listener.stop()


@atexit.register
def _stop_listeners() -> None:
    for logger_name in list(_listeners):
        stop_stderr_log_handler(logger_name)


_RESET = "\033[0m"
_BOLD = "\033[1m"
_RED = "\033[31m"

_LEVEL_STYLES = {
    TRACE: "\033[0;38;5;245m",
    logging.DEBUG: "\033[0;38;5;245m",
    NOTICE: _BOLD,
    logging.WARNING: "\033[33m",
    logging.ERROR: _RED,
    logging.CRITICAL: _RED + _BOLD,
}


class _ConsoleFormatter(logging.Formatter):
    """Formats records as ``<timestamp> <logger>: <message>``."""

    def __init__(self, colored: bool = False) -> None:
        super().__init__()
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.datetime.fromtimestamp(record.created).strftime("%b %d %H:%M:%S.%f")
        data = record.getMessage()

        if self.colored:
            data = f"{_LEVEL_STYLES.get(record.levelno, '')}{data}{_RESET}"

        msg = f"{timestamp[:-3]} {record.name}: {data}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


class Logger(logging.Logger):
    """A logger with the additional ``trace`` and ``notice`` levels."""

    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    def notice(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(NOTICE):
            self._log(NOTICE, msg, args, **kwargs)


logging.setLoggerClass(Logger)


def get_logger(name: str) -> Logger:
    return cast(Logger, logging.getLogger(name))
