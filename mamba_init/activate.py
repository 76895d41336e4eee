# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Per-shell facts shared by the hook installer and the init block generators.

Activation itself (stacking environment variables when entering or leaving an environment) is
done by the hook scripts at shell run time.  This module only knows, for each shell, how to
assign a variable, where the hook script lives under the root prefix, and which bundled
script files make up the hook.
"""

from __future__ import annotations

from os.path import join
from typing import TYPE_CHECKING

from .base.constants import ShellKind
from .common.compat import on_win
from .common.path import backslash_to_forwardslash, sh_single_quote

if TYPE_CHECKING:
    from typing import ClassVar


class _Activator:
    shells: ClassVar[tuple[ShellKind, ...]]
    export_var_tmpl: ClassVar[str]
    #: (bundled template name, path relative to the root prefix); the first is the hook source
    assets: ClassVar[tuple[tuple[str, tuple[str, ...]], ...]]

    def export_var(self, name: str, value: str) -> str:
        return self.export_var_tmpl % (name, value)

    def hook_source_path(self, root_prefix: str) -> str:
        _, relative_parts = self.assets[0]
        return join(root_prefix, *relative_parts)


class PosixActivator(_Activator):
    shells = (ShellKind.BASH, ShellKind.ZSH, ShellKind.POSIX)
    export_var_tmpl = "export %s=%s"
    assets = (("mamba.sh", ("etc", "profile.d", "mamba.sh")),)

    def export_var(self, name: str, value: str) -> str:
        # single quotes keep '$' and '`' in paths literal
        return self.export_var_tmpl % (name, sh_single_quote(value))


class XonshActivator(_Activator):
    shells = (ShellKind.XONSH,)
    export_var_tmpl = '$%s = "%s"'
    assets = (("mamba.xsh", ("etc", "profile.d", "mamba.xsh")),)

    def export_var(self, name: str, value: str) -> str:
        if on_win:
            value = backslash_to_forwardslash(value)
        return self.export_var_tmpl % (name, value)


class PowerShellActivator(_Activator):
    shells = (ShellKind.POWERSHELL,)
    export_var_tmpl = '$Env:%s = "%s"'
    assets = (
        ("mamba_hook.ps1", ("condabin", "mamba_hook.ps1")),
        ("Mamba.psm1", ("condabin", "Mamba.psm1")),
    )


class CmdExeActivator(_Activator):
    shells = (ShellKind.CMD_EXE,)
    export_var_tmpl = '@SET "%s=%s"'
    assets = (
        ("mamba_hook.bat", ("condabin", "mamba_hook.bat")),
        ("micromamba.bat", ("condabin", "micromamba.bat")),
        ("_mamba_activate.bat", ("condabin", "_mamba_activate.bat")),
    )


activator_map: dict[ShellKind, type[_Activator]] = {
    shell: activator
    for activator in (PosixActivator, XonshActivator, PowerShellActivator, CmdExeActivator)
    for shell in activator.shells
}


def activator_for(shell: ShellKind) -> _Activator:
    return activator_map[ShellKind.parse(shell)]()
