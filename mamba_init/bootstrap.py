# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Write the per-shell hook scripts into the root prefix.

The scripts are bundled with the package under ``mamba_init/shell`` and treated as opaque
text; the only edit made to them is replacing the root-prefix and executable placeholder lines
with the shell's own variable assignment.  Unlike the startup files, assets are owned whole and
regenerated in place on every run.
"""

from __future__ import annotations

from logging import getLogger
from os.path import join
from typing import TYPE_CHECKING

from . import MAMBA_INIT_PACKAGE_ROOT
from .activate import activator_for
from .base.constants import MAMBA_EXE_PLACEHOLDER, ROOT_PREFIX_PLACEHOLDER, ShellKind
from .editor import Result, print_diff
from .gateways.disk import read_text, write_text

if TYPE_CHECKING:
    from .base.context import Context

log = getLogger(__name__)

ASSETS: dict[ShellKind, tuple[tuple[str, tuple[str, ...]], ...]] = {
    kind: activator_for(kind).assets for kind in ShellKind
}


def read_template(name: str) -> str:
    return read_text(join(MAMBA_INIT_PACKAGE_ROOT, "shell", name))


def render_asset(template: str, root_prefix: str, mamba_exe: str, shell: ShellKind) -> str:
    activator = activator_for(shell)
    return template.replace(
        ROOT_PREFIX_PLACEHOLDER, activator.export_var("MAMBA_ROOT_PREFIX", root_prefix)
    ).replace(MAMBA_EXE_PLACEHOLDER, activator.export_var("MAMBA_EXE", mamba_exe))


def install_asset(target_path: str, content: str, *, context: Context) -> str:
    original_content = read_text(target_path)
    if content == original_content:
        return Result.NO_CHANGE

    print_diff(target_path, original_content, content, context)
    if not context.dry_run:
        write_text(target_path, content)
    return Result.MODIFIED


def make_bootstrap_plan(root_prefix: str, shell: ShellKind, mamba_exe: str) -> list[dict]:
    shell = ShellKind.parse(shell)
    plan = []
    for template_name, relative_parts in ASSETS[shell]:
        plan.append(
            {
                "function": "install_asset",
                "kwargs": {
                    "target_path": join(root_prefix, *relative_parts),
                    "content": render_asset(
                        read_template(template_name), root_prefix, mamba_exe, shell
                    ),
                },
            }
        )
    return plan


def materialize(
    root_prefix: str, shell: ShellKind, mamba_exe: str, *, context: Context
) -> list[dict]:
    """Install the hook scripts for ``shell`` under ``root_prefix`` and return the run plan."""
    from .initialize import run_plan

    plan = make_bootstrap_plan(root_prefix, shell, mamba_exe)
    log.debug("installing %d hook script(s) for %s into %s", len(plan), shell, root_prefix)
    run_plan(plan, context=context)
    return plan
