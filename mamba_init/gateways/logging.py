# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Configure logging for mamba_init."""

import logging
import sys
from functools import cache
from logging import DEBUG, INFO, WARN, Formatter, StreamHandler, getLogger

log = getLogger(__name__)

TRACE = 5  # TRACE LOG LEVEL

_VERBOSITY_LEVELS = {
    0: WARN,  # standard output
    1: WARN,  # -v, detailed output
    2: INFO,  # -vv, info logging
    3: DEBUG,  # -vvv, debug logging
    4: TRACE,  # -vvvv, trace logging
}

_FORMATTER = Formatter("%(levelname)s %(name)s:%(funcName)s(%(lineno)d): %(message)s")

# Labels log messages with log level TRACE (5) as "TRACE"
logging.addLevelName(TRACE, "TRACE")


class StdStreamHandler(StreamHandler):
    """Log StreamHandler that always writes to the current sys stream."""

    terminator = "\n"

    def __init__(self, sys_stream):
        """
        Args:
            sys_stream: stream name, either "stdout" or "stderr" (attribute of module sys)
        """
        super().__init__(getattr(sys, sys_stream))
        self.sys_stream = sys_stream
        del self.stream

    def __getattr__(self, attr):
        # always get current sys.stdout/sys.stderr, unless self.stream has been set explicitly
        if attr == "stream":
            return getattr(sys, self.sys_stream)
        return super().__getattribute__(attr)

    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            stream.write(msg)
            terminator = getattr(record, "terminator", self.terminator)
            stream.write(terminator)
            self.flush()
        except Exception:
            self.handleError(record)


@cache
def initialize_logging():
    # 'mamba_init' gets level WARN and does not propagate to root.
    getLogger("mamba_init").setLevel(WARN)
    set_log_level(WARN)
    initialize_std_loggers()


def initialize_std_loggers():
    # Set up special loggers 'mamba_init.stdout'/'mamba_init.stderr' which output directly
    # to the corresponding sys streams and don't propagate.
    formatter = Formatter("%(message)s")

    for stream in ("stdout", "stderr"):
        logger = getLogger(f"mamba_init.{stream}")
        logger.handlers = []
        logger.setLevel(INFO)
        handler = StdStreamHandler(stream)
        handler.setLevel(INFO)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False


def attach_stderr_handler(level=WARN, logger_name="mamba_init", formatter=None):
    # get old stderr logger
    logr = getLogger(logger_name)
    old_stderr_handler = next(
        (handler for handler in logr.handlers if handler.name == "stderr"), None
    )

    # create new stderr logger
    new_stderr_handler = StdStreamHandler("stderr")
    new_stderr_handler.name = "stderr"
    new_stderr_handler.setLevel(level)
    new_stderr_handler.setFormatter(formatter or _FORMATTER)

    # do the switch
    if old_stderr_handler:
        logr.removeHandler(old_stderr_handler)
    logr.addHandler(new_stderr_handler)
    logr.setLevel(level)
    logr.propagate = False


def set_log_level(level=WARN):
    attach_stderr_handler(level=level, logger_name="mamba_init")


def set_verbosity(verbosity: int):
    level = _VERBOSITY_LEVELS[min(max(verbosity, 0), 4)]
    set_log_level(level)
    log.debug("verbosity set to %d", verbosity)
