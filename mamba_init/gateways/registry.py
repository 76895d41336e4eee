# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Read and write string values under the Windows registry."""

from __future__ import annotations

from errno import ENOENT
from logging import getLogger

from ..common.compat import on_win

if on_win:  # pragma: unix no cover
    import winreg

log = getLogger(__name__)


def _split_target(target_path):
    # HKEY_CURRENT_USER\Software\Microsoft\Command Processor\AutoRun
    main_key, the_rest = target_path.split("\\", 1)
    subkey_str, value_name = the_rest.rsplit("\\", 1)
    return getattr(winreg, main_key), subkey_str, value_name


def read_windows_registry(target_path):  # pragma: unix no cover
    """Return ``(value, value_type)``, or ``(None, None)`` if the value does not exist."""
    main_key, subkey_str, value_name = _split_target(target_path)

    try:
        key = winreg.OpenKey(main_key, subkey_str, 0, winreg.KEY_READ)
    except OSError as e:
        if e.errno != ENOENT:
            raise
        return None, None

    try:
        value_value, value_type = winreg.QueryValueEx(key, value_name)
        if isinstance(value_value, str):
            value_value = value_value.strip()
        return value_value, value_type
    except FileNotFoundError:
        # [WinError 2] The system cannot find the file specified
        return None, None
    finally:
        winreg.CloseKey(key)


def write_windows_registry(target_path, value_value, value_type=None):  # pragma: unix no cover
    main_key, subkey_str, value_name = _split_target(target_path)
    if value_type is None:
        value_type = winreg.REG_EXPAND_SZ
    try:
        key = winreg.OpenKey(main_key, subkey_str, 0, winreg.KEY_WRITE)
    except OSError as e:
        if e.errno != ENOENT:
            raise
        key = winreg.CreateKey(main_key, subkey_str)
    try:
        log.debug("setting %s to %r", target_path, value_value)
        winreg.SetValueEx(key, value_name, 0, value_type, value_value)
    finally:
        winreg.CloseKey(key)
