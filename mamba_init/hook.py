# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Print the hook that the generated startup blocks evaluate at shell start-up."""

from __future__ import annotations

from os.path import join
from typing import TYPE_CHECKING

from .activate import PowerShellActivator
from .base.constants import PSM1_EXPORTS_MARKER, ShellKind
from .bootstrap import materialize, read_template, render_asset
from .self_exe import get_self_exe_path

if TYPE_CHECKING:
    from .base.context import Context


def get_hook_contents(
    shell: ShellKind, *, context: Context, mamba_exe: str | None = None
) -> str:
    """Return the hook text for ``shell``.

    cmd.exe cannot evaluate printed text, so for it the hook scripts are installed into the
    root prefix instead and the returned text tells the user how to call them.
    """
    shell = ShellKind.parse(shell)
    if mamba_exe is None:
        mamba_exe = get_self_exe_path()
    root_prefix = context.root_prefix

    if shell.is_posix_family:
        return render_asset(read_template("mamba.sh"), root_prefix, mamba_exe, shell)
    elif shell is ShellKind.XONSH:
        return render_asset(read_template("mamba.xsh"), root_prefix, mamba_exe, shell)
    elif shell is ShellKind.POWERSHELL:
        psm1 = read_template("Mamba.psm1")
        psm1 = psm1[: psm1.find(PSM1_EXPORTS_MARKER)] if PSM1_EXPORTS_MARKER in psm1 else psm1
        exe_line = PowerShellActivator().export_var("MAMBA_EXE", mamba_exe)
        return exe_line + "\n" + psm1
    elif shell is ShellKind.CMD_EXE:
        materialize(root_prefix, shell, mamba_exe, context=context)
        return "Hook installed, now 'manually' execute:\n\n       CALL \"%s\"\n" % join(
            root_prefix, "condabin", "mamba_hook.bat"
        )
    raise NotImplementedError(shell)
