# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Ask external interpreters to translate paths and to locate shell profiles."""

from __future__ import annotations

import os
from logging import getLogger
from os.path import dirname, join
from shutil import which
from typing import TYPE_CHECKING

from ..base.constants import POWERSHELL_CANDIDATES, POWERSHELL_PROFILE_VAR
from ..exceptions import PathTranslationError
from .subprocess import run_command

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Callable

    from .subprocess import Response

log = getLogger(__name__)


def cygpath_command() -> str:
    # If the user drives mamba from MSYS2 with msys2 packages in their environment, the
    # conversion has to happen relative to the actual shell. Setting CYGPATH to e.g.
    # /usr/bin/cygpath.exe makes sure that one is used.
    if "CYGPATH" in os.environ:
        return os.environ["CYGPATH"]
    bash = which("bash")
    return join(dirname(bash), "cygpath") if bash else "cygpath"


def native_path_to_unix(
    path: str,
    is_a_path_env: bool = False,
    run: Callable[[list[str]], Response] = run_command,
) -> str:
    """Convert a Windows path (or ``;``-joined path list) to its Unix spelling via cygpath.

    Failing to convert is fatal: embedding a native path into a script that expects the
    other convention would break the user's shell.
    """
    command = cygpath_command()
    args = [command, path]
    if is_a_path_env:
        args.append("--path")

    response = run(args)
    if not response.ok:
        reason = response.error or response.stderr.strip() or f"exit code {response.rc}"
        raise PathTranslationError(command, path, f"{response.status}: {reason}")
    return response.stdout.rstrip()


def find_powershell_profile(
    candidates: Iterable[str] = POWERSHELL_CANDIDATES,
    run: Callable[[list[str]], Response] = run_command,
) -> tuple[str, str]:
    """Return ``(exe, profile_path)`` for the first PowerShell that reports a profile.

    There are several places PowerShell can store its profile, depending on whether it is
    Windows PowerShell, PowerShell Core on Windows, or PowerShell Core on macOS/Linux.  The
    easiest way to resolve it is to ask each possible installation where its profile is.
    Returns ``("", "")`` if no candidate answers.
    """
    for exe in candidates:
        response = run([exe, "-NoProfile", "-Command", POWERSHELL_PROFILE_VAR])
        if not response.ok:
            log.debug("%s did not report a profile (%s)", exe, response.status)
            continue
        profile_path = response.stdout.strip()
        if profile_path:
            log.info("found powershell at %s and user profile at %s", exe, profile_path)
            return exe, profile_path
    log.info("no powershell installation reported a profile path")
    return "", ""
