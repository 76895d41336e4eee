# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Locate the executable of the running mamba process.

The resolved path is embedded into generated shell code on every run, so each strategy is
cheap: a symlink read or a single OS call.  Strategies are plain callables returning a path or
``None``; :func:`get_self_exe_path` tries them in order.
"""

from __future__ import annotations

import ctypes
import os
import sys
from logging import getLogger
from os.path import abspath, isfile, realpath
from shutil import which
from typing import TYPE_CHECKING

from .common.compat import on_mac, on_sun, on_win
from .exceptions import SelfExeResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Callable, Optional

    Strategy = Callable[[], Optional[str]]

log = getLogger(__name__)

CONSOLE_SCRIPT_NAME = "mamba-init"

# initial buffer sizes; both grow on demand
WIN_MAX_PATH = 260
DARWIN_PATH_MAX = 1024


def console_script_path() -> str | None:
    """The console-script launcher that started a non-frozen install."""
    if getattr(sys, "frozen", False):
        return None
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or argv0 == "-c" or argv0.endswith((".py", ".pyw")):
        return None
    candidates = [argv0, which(argv0)]
    if on_win:
        candidates.append(argv0 + ".exe")
    for candidate in candidates:
        if candidate and isfile(candidate):
            return candidate
    return None


def installed_console_script() -> str | None:
    if getattr(sys, "frozen", False):
        return None
    return which(CONSOLE_SCRIPT_NAME)


def proc_self_exe() -> str | None:
    link = "/proc/self/path/a.out" if on_sun else "/proc/self/exe"
    try:
        return os.readlink(link)
    except OSError as e:
        log.debug("could not read %s: %r", link, e)
        return None


def windows_module_file_name() -> str | None:  # pragma: unix no cover
    get_module_file_name = ctypes.windll.kernel32.GetModuleFileNameW
    size = WIN_MAX_PATH
    while True:
        buffer = ctypes.create_unicode_buffer(size)
        length = get_module_file_name(None, buffer, size)
        if length == 0:
            log.debug("GetModuleFileNameW failed: %s", ctypes.GetLastError())
            return None
        if length < size:
            # a full buffer means the path may have been truncated
            return buffer.value
        size *= 2


def darwin_executable_path() -> str | None:  # pragma: no cover
    ns_get_executable_path = ctypes.CDLL(None)._NSGetExecutablePath
    size = ctypes.c_uint32(DARWIN_PATH_MAX)
    buffer = ctypes.create_string_buffer(size.value)
    if ns_get_executable_path(buffer, ctypes.byref(size)) == -1:
        # size now holds the required length
        buffer = ctypes.create_string_buffer(size.value)
        if ns_get_executable_path(buffer, ctypes.byref(size)) != 0:
            return None
    return os.fsdecode(buffer.value)


def default_strategies() -> tuple[Strategy, ...]:
    if on_win:
        native = windows_module_file_name
    elif on_mac:
        native = darwin_executable_path
    else:
        native = proc_self_exe
    return console_script_path, installed_console_script, native


def get_self_exe_path(strategies: Iterable[Strategy] | None = None) -> str:
    """Return the absolute, symlink-resolved path of the running mamba executable."""
    if strategies is None:
        strategies = default_strategies()
    attempted = []
    for strategy in strategies:
        attempted.append(strategy.__name__)
        path = strategy()
        if path:
            resolved = realpath(abspath(path))
            log.debug("%s resolved the executable to %s", strategy.__name__, resolved)
            return resolved
    raise SelfExeResolutionError(attempted)
