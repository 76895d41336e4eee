# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Common compatibility code."""
# Try to keep compat small because it's imported by everything
# This module should contain ONLY stdlib imports.

import builtins
import sys
from textwrap import dedent

on_win = bool(sys.platform == "win32")
on_mac = bool(sys.platform == "darwin")
on_linux = bool(sys.platform == "linux")
on_sun = sys.platform.startswith("sunos")


def open_utf8(file, mode="r", buffering=-1, encoding=None, errors=None, newline=None):
    if "b" in mode:
        return builtins.open(
            file, str(mode), buffering=buffering, errors=errors, newline=newline
        )
    else:
        return builtins.open(
            file,
            str(mode),
            buffering=buffering,
            encoding=encoding or "utf-8",
            errors=errors,
            newline=newline,
        )


def ensure_text_type(value) -> str:
    try:
        return value.decode("utf-8")
    except AttributeError:  # pragma: no cover
        # AttributeError: '<>' object has no attribute 'decode'
        # In this case assume already text_type and do nothing
        return value
    except UnicodeDecodeError:  # pragma: no cover
        return value.decode("utf-8", errors="replace")


def dals(string):
    """dedent and left-strip"""
    return dedent(string).lstrip()


BOOLISH_TRUE = ("true", "yes", "on", "y", "1")
BOOLISH_FALSE = ("false", "off", "n", "no", "non", "none", "0", "")


def boolify(value):
    """Convert a config or environment value to a bool.

    Examples:
        >>> boolify("yes"), boolify("OFF"), boolify(1)
        (True, False, True)
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    normalized = str(value).strip().lower()
    if normalized in BOOLISH_TRUE:
        return True
    if normalized in BOOLISH_FALSE:
        return False
    raise ValueError(f"The value {value!r} cannot be boolified.")
