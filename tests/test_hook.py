# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
from os.path import isfile, join

import pytest

from mamba_init.base.constants import (
    MAMBA_EXE_PLACEHOLDER,
    PSM1_EXPORTS_MARKER,
    ROOT_PREFIX_PLACEHOLDER,
)
from mamba_init.common.compat import on_win
from mamba_init.hook import get_hook_contents

MAMBA_EXE = "/opt/conda/bin/mamba"


@pytest.mark.parametrize("shell", ["bash", "zsh", "posix"])
@pytest.mark.skipif(on_win, reason="posix quoting of native paths")
def test_posix_hook(shell, context):
    hook = get_hook_contents(shell, context=context, mamba_exe=MAMBA_EXE)

    assert f"export MAMBA_EXE='{MAMBA_EXE}'" in hook
    assert f"export MAMBA_ROOT_PREFIX='{context.root_prefix}'" in hook
    assert "__mamba_exe()" in hook
    assert MAMBA_EXE_PLACEHOLDER not in hook
    assert ROOT_PREFIX_PLACEHOLDER not in hook


def test_xonsh_hook(context):
    hook = get_hook_contents("xonsh", context=context, mamba_exe=MAMBA_EXE)

    assert '$MAMBA_EXE = "' in hook
    assert MAMBA_EXE_PLACEHOLDER not in hook
    assert ROOT_PREFIX_PLACEHOLDER not in hook


def test_powershell_hook_stops_at_exports(context):
    hook = get_hook_contents("pwsh", context=context, mamba_exe=MAMBA_EXE)

    assert hook.startswith(f'$Env:MAMBA_EXE = "{MAMBA_EXE}"\n')
    assert PSM1_EXPORTS_MARKER not in hook
    assert "Export-ModuleMember" not in hook
    assert "function Invoke-Mamba" in hook


def test_cmd_exe_hook_installs_scripts(root_prefix, context):
    hook = get_hook_contents("cmd.exe", context=context, mamba_exe=MAMBA_EXE)

    hook_bat = join(root_prefix, "condabin", "mamba_hook.bat")
    assert hook == "Hook installed, now 'manually' execute:\n\n       CALL \"%s\"\n" % hook_bat
    assert isfile(hook_bat)
    assert isfile(join(root_prefix, "condabin", "micromamba.bat"))


def test_hook_resolves_executable(mocker, context):
    get_self_exe_path = mocker.patch(
        "mamba_init.hook.get_self_exe_path", return_value="/usr/local/bin/mamba"
    )

    hook = get_hook_contents("bash", context=context)

    get_self_exe_path.assert_called_once_with()
    assert "/usr/local/bin/mamba" in hook
