# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
import pytest

from mamba_init.base.context import Context

MAMBA_EXE = "/opt/conda/bin/mamba"


@pytest.fixture
def root_prefix(tmp_path):
    return str(tmp_path / "micromamba")


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return str(path)


@pytest.fixture
def context(root_prefix):
    return Context(root_prefix=root_prefix)


@pytest.fixture
def dry_run_context(context):
    return context.replace(dry_run=True)


@pytest.fixture
def verbose_context(context):
    return context.replace(verbosity=1)
