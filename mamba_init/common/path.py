# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Common path utilities."""

from __future__ import annotations

import os
from os.path import abspath, expanduser, expandvars, join
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Union

    PathType = Union[str, os.PathLike]


def expand(path: PathType) -> str:
    return abspath(expanduser(expandvars(os.fspath(path))))


def home_directory() -> str:
    return expanduser("~")


def home_join(*parts: str, home: str | None = None) -> str:
    return join(home or home_directory(), *parts)


def sh_single_quote(value: str) -> str:
    """Quote ``value`` for POSIX shells so it is taken literally.

    Examples:
        >>> sh_single_quote("/opt/conda")
        "'/opt/conda'"
        >>> sh_single_quote("it's")
        "'it'\\\\''s'"
    """
    return "'%s'" % value.replace("'", "'\\''")


def backslash_to_forwardslash(path: str) -> str:
    return path.replace("\\", "/")
