# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
from os.path import abspath, join
from pathlib import Path

from mamba_init.common.path import (
    backslash_to_forwardslash,
    expand,
    home_join,
    sh_single_quote,
)


def test_expand(monkeypatch, tmp_path):
    monkeypatch.setenv("MAMBA_TEST_DIR", str(tmp_path))
    assert expand("$MAMBA_TEST_DIR/x") == join(str(tmp_path), "x")
    assert expand(Path("relative")) == abspath("relative")


def test_home_join(monkeypatch, tmp_path):
    assert home_join(".bashrc", home=str(tmp_path)) == join(str(tmp_path), ".bashrc")

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert home_join(".zshrc") == join(str(tmp_path), ".zshrc")


def test_sh_single_quote():
    assert sh_single_quote("/opt/conda") == "'/opt/conda'"
    assert sh_single_quote("/opt/$HOME/`x`") == "'/opt/$HOME/`x`'"
    assert sh_single_quote("it's") == "'it'\\''s'"


def test_backslash_to_forwardslash():
    assert backslash_to_forwardslash("C:\\Users\\me") == "C:/Users/me"
