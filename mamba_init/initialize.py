# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Sequence of steps to initialize a shell for mamba.

The general pattern is to build a "plan", which is a list of dicts, each dict representing one
step: the name of a function in this module and the keyword arguments to call it with.  Every
shell-specific fact (target path, generated block, rendered hook script) is computed while the
plan is built, so anything that can fail (resolving the executable, translating a path, an
unsupported platform) fails before the first write.  The plan is then run step by step and
each step records its :class:`Result`.

    [
        {
            "function": "install_asset",
            "kwargs": {
                "target_path": "/home/me/micromamba/etc/profile.d/mamba.sh",
                "content": "...",
            },
            "result": "modified",
        },
        {
            "function": "init_rc_file",
            "kwargs": {
                "target_path": "/home/me/.bashrc",
                "content": "# >>> mamba initialize >>>\\n...",
                "reverse": False,
            },
            "result": "no change",
        },
    ]

Running several invocations against the same startup file concurrently is not supported;
writes are neither locked nor atomic.
"""

from __future__ import annotations

import sys
from logging import getLogger
from os.path import isdir
from typing import TYPE_CHECKING

from .base.constants import CMD_EXE_AUTORUN_TARGET, ShellKind
from .bootstrap import install_asset, make_bootstrap_plan  # noqa: F401
from .common.compat import on_mac, on_win
from .common.path import expand, home_join
from .editor import (  # noqa: F401
    Result,
    init_cmd_exe_registry,
    init_powershell_profile,
    init_rc_file,
)
from .exceptions import OperationNotSupportedError, PlatformNotSupportedError
from .gateways.external import find_powershell_profile
from .reporters import confirm_yn
from .self_exe import get_self_exe_path
from .templates import cmd_exe_hook_invocation, init_block_content, powershell_content

if TYPE_CHECKING:
    from typing import Callable, TextIO

    from .base.context import Context

    Planner = Callable[..., list]

log = getLogger(__name__)


def _rc_file_name(shell: ShellKind) -> str:
    if shell is ShellKind.BASH:
        # login shells on macOS and the Windows bash ports read .bash_profile, not .bashrc
        return ".bash_profile" if (on_mac or on_win) else ".bashrc"
    return {
        ShellKind.ZSH: ".zshrc",
        ShellKind.POSIX: ".profile",
        ShellKind.XONSH: ".xonshrc",
    }[shell]


def _plan_rc_file(root_prefix, shell, mamba_exe, *, reverse, home):
    target_path = home_join(_rc_file_name(shell), home=home)
    # removal only matches the markers, so skip generating (and translating) the block
    content = ""
    if not reverse:
        content = init_block_content(root_prefix, shell, mamba_exe, on_win=on_win)
    return [
        {
            "function": "init_rc_file",
            "kwargs": {"target_path": target_path, "content": content, "reverse": reverse},
        }
    ]


def _plan_powershell_profile(root_prefix, shell, mamba_exe, *, reverse, home):
    exe, profile_path = find_powershell_profile()
    if not profile_path:
        log.warning("Could not find any PowerShell installation to initialize.")
    else:
        log.debug("initializing the profile of %s", exe)
    content = "" if reverse else powershell_content(root_prefix, mamba_exe)
    return [
        {
            "function": "init_powershell_profile",
            "kwargs": {"target_path": profile_path, "content": content, "reverse": reverse},
        }
    ]


def _plan_cmd_exe_registry(root_prefix, shell, mamba_exe, *, reverse, home):
    if not on_win:
        raise PlatformNotSupportedError(shell, sys.platform)
    if reverse:
        raise OperationNotSupportedError("deinit", "the cmd.exe AutoRun registry value")
    return [
        {
            "function": "init_cmd_exe_registry",
            "kwargs": {
                "target_path": CMD_EXE_AUTORUN_TARGET,
                "hook_string": cmd_exe_hook_invocation(root_prefix),
                "reverse": reverse,
            },
        }
    ]


SHELL_PLANNERS: dict[ShellKind, Planner] = {
    ShellKind.BASH: _plan_rc_file,
    ShellKind.ZSH: _plan_rc_file,
    ShellKind.POSIX: _plan_rc_file,
    ShellKind.XONSH: _plan_rc_file,
    ShellKind.POWERSHELL: _plan_powershell_profile,
    ShellKind.CMD_EXE: _plan_cmd_exe_registry,
}
if set(SHELL_PLANNERS) != set(ShellKind):
    raise NotImplementedError(
        "no planner for shell(s): %s"
        % ", ".join(str(kind) for kind in set(ShellKind) - set(SHELL_PLANNERS))
    )


def make_initialize_plan(
    root_prefix: str,
    shell: ShellKind,
    mamba_exe: str,
    *,
    reverse: bool = False,
    home: str | None = None,
) -> list[dict]:
    shell = ShellKind.parse(shell)
    planner = SHELL_PLANNERS[shell]
    edit_steps = planner(root_prefix, shell, mamba_exe, reverse=reverse, home=home)
    if reverse:
        return edit_steps
    return make_bootstrap_plan(root_prefix, shell, mamba_exe) + edit_steps


def run_plan(plan: list[dict], *, context: Context) -> None:
    """Run the steps in order, stopping at the first one that fails for lack of permissions.

    Steps after a failed one are marked :attr:`Result.NOT_RUN`, so a startup file is never
    pointed at hook scripts that could not be installed.
    """
    for position, step in enumerate(plan):
        previous_result = step.get("result", None)
        if previous_result in (Result.MODIFIED, Result.NO_CHANGE):
            continue
        try:
            result = globals()[step["function"]](**step.get("kwargs", {}), context=context)
        except OSError as e:
            log.info("%s: %r", step["function"], e, exc_info=True)
            result = Result.NEEDS_SUDO
        step["result"] = result
        if result == Result.NEEDS_SUDO:
            for skipped in plan[position + 1 :]:
                skipped.setdefault("result", Result.NOT_RUN)
            break


def print_plan_results(plan: list[dict], stream: TextIO | None = None) -> None:
    if not stream:
        stream = sys.stdout
    for step in plan:
        print(
            "%s\n  %s\n" % (step["kwargs"]["target_path"] or "<no target>", step.get("result")),
            file=stream,
        )

    changed = any(step.get("result") == Result.MODIFIED for step in plan)
    if changed:
        print(
            "\n==> For changes to take effect, close and re-open your current shell. <==\n",
            file=stream,
        )
    else:
        print("No action taken.", file=stream)


def init_shell(
    shell: ShellKind,
    root_prefix: str | None = None,
    *,
    context: Context,
    reverse: bool = False,
    mamba_exe: str | None = None,
    home: str | None = None,
) -> int:
    """Add (or with ``reverse``, remove) mamba's block in the startup file of ``shell``.

    Returns 1 when a step could not be completed for lack of permissions, else 0.
    """
    shell = ShellKind.parse(shell)
    root_prefix = expand(root_prefix) if root_prefix else context.root_prefix

    if not (reverse or context.dry_run or context.always_yes) and isdir(root_prefix):
        confirm_yn(
            "Prefix at %s already exists, use as root prefix" % root_prefix, context=context
        )

    if mamba_exe is None and not reverse:
        mamba_exe = get_self_exe_path()
    log.info(
        "%s shell %s with root prefix %s",
        "Removing" if reverse else "Initializing",
        shell,
        root_prefix,
    )

    plan = make_initialize_plan(root_prefix, shell, mamba_exe, reverse=reverse, home=home)
    run_plan(plan, context=context)
    print_plan_results(plan)

    if any(step["result"] == Result.NEEDS_SUDO for step in plan):
        print(
            "Operation failed: insufficient permissions to modify every target.",
            file=sys.stderr,
        )
        return 1
    return 0
