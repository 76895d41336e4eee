# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Helpers for running helper executables (cygpath, powershell) as subprocesses."""

from __future__ import annotations

import os
from collections import namedtuple
from enum import Enum
from logging import getLogger
from subprocess import PIPE, Popen

from ..common.compat import dals, ensure_text_type

log = getLogger(__name__)


class ProcessStatus(Enum):
    FAILED_TO_START = "failed to start"
    EXITED_WITH_ERROR = "exited with error"
    SUCCEEDED = "succeeded"

    def __str__(self) -> str:
        return self.value


_Response = namedtuple("Response", ("status", "stdout", "stderr", "rc", "error"))


class Response(_Response):
    """Structured outcome of one subprocess invocation.

    ``rc`` is ``None`` and ``error`` holds the ``OSError`` when the process never started.
    """

    __slots__ = ()

    @property
    def ok(self) -> bool:
        return self.status is ProcessStatus.SUCCEEDED


def _format_output(command_str, rc, stdout, stderr):
    return dals(
        """
    $ %s
    ==> exit code: %s <==
    ==> stdout <==
    %s
    ==> stderr <==
    %s
    """
    ) % (command_str, rc, stdout, stderr)


def run_command(args, env=None, cwd=None) -> Response:
    """Run ``args`` to completion, capturing stdout and stderr.

    Blocks until the child exits; no timeout is applied.  Never raises for a missing
    executable or a non-zero exit code; inspect ``Response.status`` instead.
    """
    command_str = " ".join(args)
    log.debug("executing>> %s", command_str)
    try:
        p = Popen(
            list(args),
            stdin=PIPE,
            stdout=PIPE,
            stderr=PIPE,
            env=env if env is not None else os.environ.copy(),
            cwd=cwd,
        )
    except OSError as e:
        log.debug("%s failed to start: %r", args[0], e)
        return Response(ProcessStatus.FAILED_TO_START, "", "", None, e)

    stdout, stderr = p.communicate()
    stdout = ensure_text_type(stdout) if stdout else ""
    stderr = ensure_text_type(stderr) if stderr else ""
    rc = p.returncode

    if rc != 0:
        log.debug(_format_output(command_str, rc, stdout, stderr))
        return Response(ProcessStatus.EXITED_WITH_ERROR, stdout, stderr, rc, None)
    return Response(ProcessStatus.SUCCEEDED, stdout, stderr, rc, None)
