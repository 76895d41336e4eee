# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
This file should hold most string literals and magic numbers used throughout the code base.
The exception is if a literal is specifically meant to be private to and isolated within a module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING

from ..common.compat import on_win

if TYPE_CHECKING:
    from typing import Final


class ShellKind(Enum):
    BASH = "bash"
    ZSH = "zsh"
    POSIX = "posix"
    XONSH = "xonsh"
    POWERSHELL = "powershell"
    CMD_EXE = "cmd.exe"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | ShellKind) -> ShellKind:
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        normalized = SHELL_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            from ..exceptions import UnsupportedShellError

            raise UnsupportedShellError(value)

    @property
    def is_posix_family(self) -> bool:
        return self in POSIX_FAMILY


SHELL_ALIASES: Final = {
    "cmd": "cmd.exe",
    "pwsh": "powershell",
    "sh": "posix",
}

POSIX_FAMILY: Final = frozenset((ShellKind.BASH, ShellKind.ZSH, ShellKind.POSIX))

COMPATIBLE_SHELLS: Final = tuple(kind.value for kind in ShellKind)


@dataclass(frozen=True)
class MarkerPair:
    """Literal begin/end sentinel lines delimiting the block owned by ``mamba init``."""

    begin: str
    end: str

    @cached_property
    def pattern(self) -> re.Pattern:
        return re.compile(
            re.escape(self.begin)
            + r"(?:\n|\r\n)?"
            + r"([\s\S]*?)"
            + re.escape(self.end)
            + r"(?:\n|\r\n)?"
        )


RC_MARKERS: Final = MarkerPair("# >>> mamba initialize >>>", "# <<< mamba initialize <<<")
PS_MARKERS: Final = MarkerPair("#region mamba initialize", "#endregion")

MANAGED_BLOCK_NOTICE: Final = "# !! Contents within this block are managed by 'mamba init' !!"
MANAGED_PS_BLOCK_NOTICE: Final = (
    "# !! Contents within this block are managed by 'mamba shell init' !!"
)

CMD_EXE_REGISTRY_KEY: Final = "HKEY_CURRENT_USER\\Software\\Microsoft\\Command Processor"
CMD_EXE_AUTORUN_VALUE: Final = "AutoRun"
CMD_EXE_AUTORUN_TARGET: Final = f"{CMD_EXE_REGISTRY_KEY}\\{CMD_EXE_AUTORUN_VALUE}"

# matches a quoted prior hook invocation inside the AutoRun value
CMD_EXE_HOOK_RE: Final = re.compile(r'("[^"]*?mamba[-_]hook\.bat")', re.IGNORECASE)
REPLACE_ME_TOKEN: Final = "__MAMBA_REPLACE_ME_123__"

ROOT_PREFIX_PLACEHOLDER: Final = "__MAMBA_INSERT_ROOT_PREFIX__"
MAMBA_EXE_PLACEHOLDER: Final = "__MAMBA_INSERT_MAMBA_EXE__"
PSM1_EXPORTS_MARKER: Final = "## EXPORTS ##"

POWERSHELL_CANDIDATES: Final = ("powershell", "pwsh", "pwsh-preview")
POWERSHELL_PROFILE_VAR: Final = "$PROFILE.CurrentUserAllHosts"

DEFAULT_ROOT_PREFIX: Final = "~/micromamba"

SEARCH_PATH: tuple[str, ...]

if on_win:  # pragma: no cover
    SEARCH_PATH = (
        "C:/ProgramData/mamba/.mambarc",
        "C:/ProgramData/mamba/mambarc",
    )
else:
    SEARCH_PATH = (
        "/etc/mamba/.mambarc",
        "/etc/mamba/mambarc",
    )

SEARCH_PATH += (
    "$MAMBA_ROOT_PREFIX/.mambarc",
    "$XDG_CONFIG_HOME/mamba/.mambarc",
    "$XDG_CONFIG_HOME/mamba/mambarc",
    "~/.config/mamba/.mambarc",
    "~/.config/mamba/mambarc",
    "~/.mambarc",
    "$MAMBARC",
)
