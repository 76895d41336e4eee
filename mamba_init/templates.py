# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Generate the text of the marker block written into each shell's startup file.

Every function here is pure: the same root prefix, shell and executable always give the same
text, which is what makes re-running init observably idempotent.  The blocks do not embed the
hook itself; they ask the executable to print it at shell start-up (``shell hook``).
"""

from __future__ import annotations

from os.path import join
from typing import TYPE_CHECKING

from .activate import PosixActivator
from .base.constants import (
    MANAGED_BLOCK_NOTICE,
    MANAGED_PS_BLOCK_NOTICE,
    PS_MARKERS,
    RC_MARKERS,
    ShellKind,
)
from .common.compat import on_win as _on_win
from .common.path import backslash_to_forwardslash, sh_single_quote

if TYPE_CHECKING:
    from typing import Callable


def rcfile_content(
    root_prefix: str,
    shell: ShellKind,
    mamba_exe: str,
    *,
    on_win: bool = _on_win,
    path_conversion: Callable[[str], str] | None = None,
) -> str:
    shell = ShellKind.parse(shell)
    posix = PosixActivator()

    if on_win:
        # bash on Windows (MSYS2, Git Bash, Cygwin) expects unix-style paths
        if path_conversion is None:
            from .gateways.external import native_path_to_unix as path_conversion
        mamba_exe = path_conversion(mamba_exe)
        root_prefix = path_conversion(root_prefix)
        lines = [
            RC_MARKERS.begin,
            MANAGED_BLOCK_NOTICE,
            posix.export_var("MAMBA_EXE", mamba_exe) + ";",
            posix.export_var("MAMBA_ROOT_PREFIX", root_prefix) + ";",
            'eval "$(%s shell hook --shell %s --prefix %s)"'
            % (sh_single_quote(mamba_exe), shell, sh_single_quote(root_prefix)),
            RC_MARKERS.end,
        ]
        return "\n".join(lines) + "\n"

    # fallbacks go through the exported variable so the prefix is quoted only once
    hook_source = posix.hook_source_path("$MAMBA_ROOT_PREFIX")
    lines = [
        RC_MARKERS.begin,
        MANAGED_BLOCK_NOTICE,
        posix.export_var("MAMBA_EXE", mamba_exe) + ";",
        posix.export_var("MAMBA_ROOT_PREFIX", root_prefix) + ";",
        '__mamba_setup="$(%s shell hook --shell %s --prefix %s 2> /dev/null)"'
        % (sh_single_quote(mamba_exe), shell, sh_single_quote(root_prefix)),
        "if [ $? -eq 0 ]; then",
        '    eval "$__mamba_setup"',
        "else",
        '    if [ -f "%s" ]; then' % hook_source,
        '        . "%s"' % hook_source,
        "    else",
        '        export PATH="%s:$PATH"' % join("$MAMBA_ROOT_PREFIX", "bin"),
        "    fi",
        "fi",
        "unset __mamba_setup",
        RC_MARKERS.end,
    ]
    return "\n".join(lines) + "\n"


def xonsh_content(root_prefix: str, mamba_exe: str, *, on_win: bool = _on_win) -> str:
    if on_win:
        # xonsh strings treat backslashes as escapes
        mamba_exe = backslash_to_forwardslash(mamba_exe)
        root_prefix = backslash_to_forwardslash(root_prefix)
    hook_cmd = '$("%s" shell hook -s xonsh -p "%s")' % (mamba_exe, root_prefix)
    lines = [
        RC_MARKERS.begin,
        MANAGED_BLOCK_NOTICE,
        '$MAMBA_EXE = "%s"' % mamba_exe,
        '$MAMBA_ROOT_PREFIX = "%s"' % root_prefix,
        "import sys as _sys",
        "from types import ModuleType as _ModuleType",
        '_mod = _ModuleType("xontrib.mamba",',
        "                   'Autogenerated from %s')" % hook_cmd,
        '__xonsh__.execer.exec($("%s" "shell" "hook" -s xonsh -p "%s"),'
        % (mamba_exe, root_prefix),
        "                      glbs=_mod.__dict__,",
        "                      filename='%s')" % hook_cmd,
        '_sys.modules["xontrib.mamba"] = _mod',
        "del _sys, _mod, _ModuleType",
        RC_MARKERS.end,
    ]
    return "\n".join(lines) + "\n"


def powershell_content(root_prefix: str, mamba_exe: str) -> str:
    lines = [
        PS_MARKERS.begin,
        MANAGED_PS_BLOCK_NOTICE,
        '$Env:MAMBA_ROOT_PREFIX = "%s"' % root_prefix,
        '$Env:MAMBA_EXE = "%s"' % mamba_exe,
        "(& \"%s\" 'shell' 'hook' -s 'powershell' -p \"%s\") | Out-String | Invoke-Expression"
        % (mamba_exe, root_prefix),
        PS_MARKERS.end,
    ]
    return "\n".join(lines) + "\n"


def cmd_exe_hook_invocation(root_prefix: str) -> str:
    """The quoted hook script path stored as one command of the cmd.exe AutoRun value."""
    return '"%s"' % join(root_prefix, "condabin", "mamba_hook.bat")


def init_block_content(
    root_prefix: str,
    shell: ShellKind,
    mamba_exe: str,
    *,
    on_win: bool = _on_win,
    path_conversion: Callable[[str], str] | None = None,
) -> str:
    shell = ShellKind.parse(shell)
    if shell.is_posix_family:
        return rcfile_content(
            root_prefix, shell, mamba_exe, on_win=on_win, path_conversion=path_conversion
        )
    elif shell is ShellKind.XONSH:
        return xonsh_content(root_prefix, mamba_exe, on_win=on_win)
    elif shell is ShellKind.POWERSHELL:
        return powershell_content(root_prefix, mamba_exe)
    elif shell is ShellKind.CMD_EXE:
        return cmd_exe_hook_invocation(root_prefix)
    raise NotImplementedError(shell)
