# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Best-effort guess of the interactive shell the user is running."""

from __future__ import annotations

import os
from logging import getLogger
from ntpath import basename as nt_basename
from typing import TYPE_CHECKING

from .base.constants import ShellKind

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

# checked in order after the explicit ``shell`` variable
_VERSION_MARKERS = (
    ("BASH_VERSION", ShellKind.BASH),
    ("ZSH_VERSION", ShellKind.ZSH),
    ("XONSH_VERSION", ShellKind.XONSH),
    ("CMDEXTVERSION", ShellKind.CMD_EXE),
    ("PSModulePath", ShellKind.POWERSHELL),
)


def _shell_from_name(name: str) -> ShellKind | None:
    # ntpath.basename splits on both separators, so '/bin/zsh' and 'C:\...\bash.exe' both work
    name = nt_basename(name.strip()).lower()
    if name.endswith(".exe") and name != "cmd.exe":
        name = name[: -len(".exe")]
    for kind in ShellKind:
        if name == kind.value:
            return kind
    return None


def guess_shell(environ: Mapping[str, str] | None = None) -> ShellKind | None:
    """Return the likely current shell, or ``None`` if it cannot be determined.

    Only a suggestion; never use the result to drive irreversible actions unconfirmed.
    """
    environ = os.environ if environ is None else environ

    shell = environ.get("shell", "")
    if shell:
        kind = _shell_from_name(shell)
        if kind is not None:
            return kind

    for marker, kind in _VERSION_MARKERS:
        if environ.get(marker):
            return kind

    log.debug("could not determine the current shell")
    return None
