# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Shell initialization for the mamba environment manager."""

from __future__ import annotations

import sys
from os.path import abspath, dirname
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

__all__ = (
    "__name__",
    "__version__",
    "__author__",
    "__license__",
    "__summary__",
    "MAMBA_INIT_PACKAGE_ROOT",
    "MambaError",
    "MambaExitZero",
)

__name__ = "mamba_init"
__version__ = "0.3.0"
__author__ = "QuantStack and Mamba Contributors"
__license__ = "BSD-3-Clause"
__summary__ = __doc__

#: The mamba_init package directory; bundled hook scripts live in its ``shell`` folder.
MAMBA_INIT_PACKAGE_ROOT = abspath(dirname(__file__))


class MambaError(Exception):
    return_code: int = 1

    def __init__(self, message: str | None, caused_by: Any = None, **kwargs):
        self.message = message or ""
        self._kwargs = kwargs
        self._caused_by = caused_by
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}: {self}"

    def __str__(self) -> str:
        try:
            return str(self.message) % self._kwargs
        except Exception:
            debug_message = "\n".join(
                (
                    "class: " + self.__class__.__name__,
                    "message:",
                    self.message,
                    "kwargs:",
                    str(self._kwargs),
                    "",
                )
            )
            print(debug_message, file=sys.stderr)
            raise

    def dump_map(self) -> dict[str, Any]:
        result = {k: v for k, v in vars(self).items() if not k.startswith("_")}
        result.update(
            exception_type=str(type(self)),
            exception_name=self.__class__.__name__,
            message=str(self),
            error=repr(self),
            caused_by=repr(self._caused_by),
            **self._kwargs,
        )
        return result


class MambaExitZero(MambaError):
    return_code = 0
