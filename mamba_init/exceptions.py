# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""mamba_init exceptions."""

from __future__ import annotations

import json
import sys
from logging import getLogger
from traceback import format_exception, format_exception_only

from . import MambaError, MambaExitZero
from .base.constants import COMPATIBLE_SHELLS
from .common.compat import dals


class ArgumentError(MambaError):
    return_code = 2

    def __init__(self, message, **kwargs):
        super().__init__(message, **kwargs)


class MambaSystemExit(MambaExitZero, SystemExit):
    pass


class SelfExeResolutionError(MambaError):
    def __init__(self, attempted):
        message = dals(
            """
            Could not find the location of the running mamba executable.
            Attempted strategies: %(attempted)s
            """
        )
        super().__init__(message, attempted=", ".join(attempted) or "none")


class PathTranslationError(MambaError):
    def __init__(self, command, path, reason):
        message = dals(
            """
            Could not find bash, or use cygpath to convert a Windows path to Unix.
              command: %(command)s
              path: %(path)s
              reason: %(reason)s
            """
        )
        super().__init__(message, command=command, path=path, reason=reason)


class UnsupportedShellError(MambaError):
    def __init__(self, shell):
        message = "Support for shell '%(shell)s' is not implemented. Available shells: %(available)s"
        super().__init__(
            message, shell=str(shell), available=", ".join(COMPATIBLE_SHELLS)
        )


class PlatformNotSupportedError(MambaError):
    def __init__(self, shell, platform):
        message = "%(shell)s can only be initialized on Windows (current platform: %(platform)s)."
        super().__init__(message, shell=str(shell), platform=platform)


class OperationNotSupportedError(MambaError):
    def __init__(self, operation, target):
        message = "'%(operation)s' is not supported for %(target)s."
        super().__init__(message, operation=operation, target=target)


class ConfigurationLoadError(MambaError):
    def __init__(self, path, reason):
        message = "Unable to load configuration file.\n  path: %(path)s\n  reason: %(reason)s\n"
        super().__init__(message, path=path, reason=reason)


def print_mamba_exception(exc_val, exc_tb=None, *, verbosity=0, json_output=False):
    if verbosity >= 3:
        print(_format_exc(exc_val, exc_tb), file=sys.stderr)
    elif json_output:
        rc = getattr(exc_val, "return_code", None)
        logger = getLogger("mamba_init.stdout" if rc else "mamba_init.stderr")
        exc_json = json.dumps(exc_val.dump_map(), indent=2, sort_keys=True, default=str)
        logger.info("%s\n" % exc_json)
    else:
        stderrlog = getLogger("mamba_init.stderr")
        stderrlog.error("\n%r\n", exc_val)


def _format_exc(exc_val=None, exc_tb=None):
    if exc_val is None:
        exc_type, exc_val, exc_tb = sys.exc_info()
    else:
        exc_type = type(exc_val)
    if exc_tb:
        formatted_exception = format_exception(exc_type, exc_val, exc_tb)
    else:
        formatted_exception = format_exception_only(exc_type, exc_val)
    return "".join(formatted_exception)
