# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
from os.path import join

import pytest

from mamba_init.activate import (
    CmdExeActivator,
    PosixActivator,
    PowerShellActivator,
    XonshActivator,
    activator_for,
    activator_map,
)
from mamba_init.base.constants import ShellKind
from mamba_init.exceptions import UnsupportedShellError


def test_every_shell_has_an_activator():
    assert set(activator_map) == set(ShellKind)


@pytest.mark.parametrize(
    "shell, activator_cls",
    [
        ("bash", PosixActivator),
        ("sh", PosixActivator),
        ("xonsh", XonshActivator),
        ("pwsh", PowerShellActivator),
        ("cmd", CmdExeActivator),
    ],
)
def test_activator_for(shell, activator_cls):
    assert type(activator_for(shell)) is activator_cls


def test_activator_for_unknown_shell():
    with pytest.raises(UnsupportedShellError):
        activator_for("tcsh")


def test_posix_export_var_is_quoted():
    activator = PosixActivator()
    assert activator.export_var("MAMBA_EXE", "/opt/conda/bin/mamba") == (
        "export MAMBA_EXE='/opt/conda/bin/mamba'"
    )
    assert activator.export_var("MAMBA_ROOT_PREFIX", "/opt/$HOME") == (
        "export MAMBA_ROOT_PREFIX='/opt/$HOME'"
    )


def test_xonsh_export_var_on_windows(mocker):
    mocker.patch("mamba_init.activate.on_win", True)
    assert XonshActivator().export_var("MAMBA_EXE", "C:\\mamba\\mamba.exe") == (
        '$MAMBA_EXE = "C:/mamba/mamba.exe"'
    )


def test_windows_export_vars():
    assert PowerShellActivator().export_var("MAMBA_EXE", "C:\\m.exe") == (
        '$Env:MAMBA_EXE = "C:\\m.exe"'
    )
    assert CmdExeActivator().export_var("MAMBA_EXE", "C:\\m.exe") == '@SET "MAMBA_EXE=C:\\m.exe"'


def test_hook_source_path():
    assert PosixActivator().hook_source_path("/opt/conda") == join(
        "/opt/conda", "etc", "profile.d", "mamba.sh"
    )
    assert CmdExeActivator().hook_source_path("C:\\mamba") == join(
        "C:\\mamba", "condabin", "mamba_hook.bat"
    )
