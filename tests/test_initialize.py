# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
import io
import os
from os.path import isdir, isfile, join

import pytest

from mamba_init.base.constants import RC_MARKERS, ShellKind
from mamba_init.editor import Result, make_diff
from mamba_init.exceptions import (
    MambaSystemExit,
    OperationNotSupportedError,
    PathTranslationError,
    PlatformNotSupportedError,
    SelfExeResolutionError,
    UnsupportedShellError,
)
from mamba_init.initialize import (
    SHELL_PLANNERS,
    init_shell,
    make_initialize_plan,
    print_plan_results,
    run_plan,
)

MAMBA_EXE = "/opt/conda/bin/mamba"


@pytest.fixture
def unix_host(mocker):
    mocker.patch("mamba_init.initialize.on_win", False)
    mocker.patch("mamba_init.initialize.on_mac", False)


@pytest.fixture
def windows_host(mocker):
    mocker.patch("mamba_init.initialize.on_win", True)


@pytest.fixture
def registry(mocker):
    read = mocker.patch(
        "mamba_init.gateways.registry.read_windows_registry", return_value=("echo hi", 2)
    )
    write = mocker.patch("mamba_init.gateways.registry.write_windows_registry")
    return read, write


@pytest.fixture
def powershell_profile(mocker, home):
    profile = join(home, "Documents", "PowerShell", "profile.ps1")
    mocker.patch(
        "mamba_init.initialize.find_powershell_profile", return_value=("pwsh", profile)
    )
    return profile


def listdir_recursive(path):
    return sorted(
        join(dirpath, filename)
        for dirpath, _, filenames in os.walk(path)
        for filename in filenames
    )


def test_every_shell_kind_has_a_planner():
    assert set(SHELL_PLANNERS) == set(ShellKind)


def test_init_bash(unix_host, home, root_prefix, context, capsys):
    rc = init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home)

    assert rc == 0
    with open(join(home, ".bashrc")) as fh:
        content = fh.read()
    assert content.count(RC_MARKERS.begin) == 1
    assert f"export MAMBA_EXE='{MAMBA_EXE}';" in content
    assert f"export MAMBA_ROOT_PREFIX='{root_prefix}';" in content
    assert isfile(join(root_prefix, "etc", "profile.d", "mamba.sh"))

    out = capsys.readouterr().out
    assert join(home, ".bashrc") in out
    assert "For changes to take effect" in out


@pytest.mark.parametrize(
    "shell, rc_name",
    [("zsh", ".zshrc"), ("posix", ".profile"), ("xonsh", ".xonshrc")],
)
def test_rc_file_targets(unix_host, home, context, shell, rc_name):
    init_shell(shell, context=context, mamba_exe=MAMBA_EXE, home=home)
    assert isfile(join(home, rc_name))


def test_bash_targets_bash_profile_on_macos(mocker, home, context):
    mocker.patch("mamba_init.initialize.on_win", False)
    mocker.patch("mamba_init.initialize.on_mac", True)

    init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home)

    assert isfile(join(home, ".bash_profile"))
    assert not isfile(join(home, ".bashrc"))


def test_reinit_is_idempotent(unix_host, home, context, capsys):
    yes = context.replace(always_yes=True)
    init_shell("zsh", context=yes, mamba_exe=MAMBA_EXE, home=home)
    with open(join(home, ".zshrc")) as fh:
        first = fh.read()
    capsys.readouterr()

    init_shell("zsh", context=yes, mamba_exe=MAMBA_EXE, home=home)

    with open(join(home, ".zshrc")) as fh:
        assert fh.read() == first
    assert "No action taken." in capsys.readouterr().out


def test_existing_root_prefix_declined(unix_host, home, root_prefix, context, monkeypatch):
    os.makedirs(root_prefix)
    monkeypatch.setattr("sys.stdin", io.StringIO("n\n"))

    with pytest.raises(MambaSystemExit) as exc:
        init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home)

    assert exc.value.return_code == 0
    assert listdir_recursive(home) == []
    assert listdir_recursive(root_prefix) == []


def test_existing_root_prefix_accepted(unix_host, home, root_prefix, context, monkeypatch):
    os.makedirs(root_prefix)
    monkeypatch.setattr("sys.stdin", io.StringIO("y\n"))

    assert init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home) == 0
    assert isfile(join(home, ".bashrc"))


def test_reverse_restores_rc_file(unix_host, home, root_prefix, context, mocker):
    original = "export EDITOR=vim\n"
    with open(join(home, ".zshrc"), "w") as fh:
        fh.write(original)
    init_shell("zsh", context=context, mamba_exe=MAMBA_EXE, home=home)

    # removal neither prompts for the existing prefix nor needs the executable
    mocker.patch("mamba_init.initialize.confirm_yn", side_effect=AssertionError)
    mocker.patch("mamba_init.initialize.get_self_exe_path", side_effect=AssertionError)
    assert init_shell("zsh", context=context, reverse=True, home=home) == 0

    with open(join(home, ".zshrc")) as fh:
        assert fh.read() == original
    # hook scripts stay in the root prefix
    assert isfile(join(root_prefix, "etc", "profile.d", "mamba.sh"))


@pytest.mark.parametrize("shell", list(ShellKind))
def test_dry_run_writes_nothing(
    shell, mocker, tmp_path, home, root_prefix, dry_run_context, registry, powershell_profile
):
    if shell is ShellKind.CMD_EXE:
        mocker.patch("mamba_init.initialize.on_win", True)
    else:
        mocker.patch("mamba_init.initialize.on_win", False)
    _, write = registry

    rc = init_shell(shell, context=dry_run_context, mamba_exe=MAMBA_EXE, home=home)

    assert rc == 0
    assert listdir_recursive(home) == []
    assert not isdir(root_prefix)
    write.assert_not_called()


def test_dry_run_reports_real_content(unix_host, tmp_path, context, dry_run_context, capsys):
    dry_home = tmp_path / "dry-home"
    real_home = tmp_path / "real-home"
    dry_home.mkdir()
    real_home.mkdir()

    init_shell("bash", context=dry_run_context, mamba_exe=MAMBA_EXE, home=str(dry_home))
    reported = capsys.readouterr().out
    init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=str(real_home))

    with open(real_home / ".bashrc") as fh:
        assert make_diff("", fh.read()) in reported
    with open(join(context.root_prefix, "etc", "profile.d", "mamba.sh")) as fh:
        assert make_diff("", fh.read()) in reported


def test_cmd_exe_on_windows(windows_host, home, root_prefix, context, registry):
    _, write = registry

    assert init_shell("cmd.exe", context=context, mamba_exe=MAMBA_EXE, home=home) == 0

    hook = '"%s"' % join(root_prefix, "condabin", "mamba_hook.bat")
    write.assert_called_once()
    target_path, value, value_type = write.call_args.args
    assert value == "echo hi & " + hook
    assert value_type == 2
    assert isfile(join(root_prefix, "condabin", "micromamba.bat"))


def test_cmd_exe_requires_windows(unix_host, home, root_prefix, context, registry):
    _, write = registry

    with pytest.raises(PlatformNotSupportedError):
        init_shell("cmd.exe", context=context, mamba_exe=MAMBA_EXE, home=home)

    assert not isdir(root_prefix)
    write.assert_not_called()


def test_cmd_exe_reverse_is_not_supported(windows_host, home, context, registry):
    with pytest.raises(OperationNotSupportedError):
        init_shell("cmd", context=context, reverse=True, home=home)


def test_unknown_shell(home, context):
    with pytest.raises(UnsupportedShellError):
        init_shell("fish", context=context, mamba_exe=MAMBA_EXE, home=home)


def test_powershell_profile(home, context, powershell_profile):
    assert init_shell("powershell", context=context, mamba_exe=MAMBA_EXE, home=home) == 0

    with open(powershell_profile) as fh:
        content = fh.read()
    assert content.count("#region mamba initialize") == 1
    assert f'$Env:MAMBA_EXE = "{MAMBA_EXE}"' in content


def test_powershell_without_interpreter(mocker, home, root_prefix, context, capsys):
    mocker.patch("mamba_init.initialize.find_powershell_profile", return_value=("", ""))

    assert init_shell("powershell", context=context, mamba_exe=MAMBA_EXE, home=home) == 0

    assert "<no target>" in capsys.readouterr().out
    assert listdir_recursive(home) == []
    # the hook scripts are still installed
    assert isfile(join(root_prefix, "condabin", "Mamba.psm1"))


def test_resolution_failure_aborts_before_writing(unix_host, mocker, home, root_prefix, context):
    mocker.patch(
        "mamba_init.initialize.get_self_exe_path",
        side_effect=SelfExeResolutionError(["proc_self_exe"]),
    )

    with pytest.raises(SelfExeResolutionError):
        init_shell("bash", context=context, home=home)

    assert listdir_recursive(home) == []
    assert not isdir(root_prefix)


def test_translation_failure_aborts_before_writing(
    windows_host, mocker, home, root_prefix, context
):
    mocker.patch(
        "mamba_init.gateways.external.native_path_to_unix",
        side_effect=PathTranslationError("cygpath", MAMBA_EXE, "failed to start"),
    )

    with pytest.raises(PathTranslationError):
        init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home)

    assert listdir_recursive(home) == []
    assert not isdir(root_prefix)


def test_permission_error_needs_sudo(unix_host, mocker, home, context, capsys):
    mocker.patch("mamba_init.initialize.init_rc_file", side_effect=PermissionError("denied"))

    assert init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home) == 1
    captured = capsys.readouterr()
    assert "%s\n  %s\n" % (join(home, ".bashrc"), Result.NEEDS_SUDO) in captured.out
    assert "insufficient permissions" in captured.err


def test_unwritable_root_prefix_leaves_rc_file_alone(
    unix_host, home, root_prefix, context, capsys
):
    # a regular file where the root prefix directory should go
    with open(root_prefix, "w") as fh:
        fh.write("not a directory\n")

    assert init_shell("bash", context=context, mamba_exe=MAMBA_EXE, home=home) == 1

    assert not isfile(join(home, ".bashrc"))
    out = capsys.readouterr().out
    assert Result.NEEDS_SUDO in out
    assert Result.NOT_RUN in out


def test_run_plan_stops_at_first_failure(mocker, context):
    mocker.patch(
        "mamba_init.initialize.install_asset", side_effect=PermissionError("denied")
    )
    init_rc_file = mocker.patch("mamba_init.initialize.init_rc_file")
    plan = [
        {"function": "install_asset", "kwargs": {"target_path": "/x/etc/profile.d/mamba.sh"}},
        {"function": "init_rc_file", "kwargs": {"target_path": "/x", "content": ""}},
    ]

    run_plan(plan, context=context)

    init_rc_file.assert_not_called()
    assert [step["result"] for step in plan] == [Result.NEEDS_SUDO, Result.NOT_RUN]


def test_make_initialize_plan(unix_host, home, root_prefix):
    plan = make_initialize_plan(root_prefix, "bash", MAMBA_EXE, home=home)
    assert [step["function"] for step in plan] == ["install_asset", "init_rc_file"]

    plan = make_initialize_plan(root_prefix, "bash", MAMBA_EXE, reverse=True, home=home)
    assert [step["function"] for step in plan] == ["init_rc_file"]
    assert plan[0]["kwargs"]["reverse"] is True


def test_run_plan_skips_finished_steps(mocker, context):
    init_rc_file = mocker.patch("mamba_init.initialize.init_rc_file")
    plan = [
        {
            "function": "init_rc_file",
            "kwargs": {"target_path": "/x", "content": "", "reverse": False},
            "result": Result.NO_CHANGE,
        }
    ]

    run_plan(plan, context=context)

    init_rc_file.assert_not_called()


def test_print_plan_results():
    stream = io.StringIO()
    plan = [{"function": "init_rc_file", "kwargs": {"target_path": "/x"}, "result": "modified"}]

    print_plan_results(plan, stream)

    assert stream.getvalue().startswith("/x\n  modified\n")
