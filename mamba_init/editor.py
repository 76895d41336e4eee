# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Idempotent edits of shell startup files and of the cmd.exe AutoRun registry value.

Only the marker-delimited region is ever touched; everything around it is kept byte for byte.
Each ``init_*`` function returns a :class:`Result` and writes only when the computed content
differs from what is already there (and never in dry-run mode).
"""

from __future__ import annotations

from difflib import unified_diff
from logging import getLogger
from typing import TYPE_CHECKING

from .base.constants import (
    CMD_EXE_HOOK_RE,
    PS_MARKERS,
    RC_MARKERS,
    REPLACE_ME_TOKEN,
)
from .exceptions import OperationNotSupportedError
from .gateways.disk import read_text, write_text

if TYPE_CHECKING:
    from typing import Callable

    from .base.constants import MarkerPair
    from .base.context import Context

log = getLogger(__name__)


class Result:
    NEEDS_SUDO = "needs sudo"
    MODIFIED = "modified"
    NO_CHANGE = "no change"
    NOT_RUN = "not run"


def make_diff(old: str, new: str) -> str:
    return "\n".join(unified_diff(old.splitlines(), new.splitlines()))


def print_diff(target_path: str, old: str, new: str, context: Context) -> None:
    if context.verbosity or context.dry_run:
        print("\n")
        print(target_path)
        # undecodable bytes read from the file are shown as replacement characters
        diff = make_diff(old, new).encode("utf-8", "surrogateescape")
        print(diff.decode("utf-8", "replace"))


def _ends_with_separator(text: str) -> bool:
    # a blank line, or a lone line ending in an otherwise empty file; a block written right
    # after a line keeps that line's own ending
    return text.endswith("\n") and (text == "\n" or text[:-1].endswith("\n"))


def apply_marker_block(
    content: str, markers: MarkerPair, new_block: str, reverse: bool = False
) -> str:
    """Splice ``new_block`` over the marker region of ``content``, or remove the region.

    Examples:
        >>> apply_marker_block("a\\n", RC_MARKERS, "# >>> mamba initialize >>>\\nx\\n"
        ...                    "# <<< mamba initialize <<<\\n", reverse=True)
        'a\\n'

    """
    matches = list(markers.pattern.finditer(content))

    if reverse:
        pieces = []
        position = 0
        for match in matches:
            before = content[position : match.start()]
            if match.end() == len(content) and _ends_with_separator(before):
                # drop the separator that injection put in front of a trailing block
                before = before[:-1]
            pieces.append(before)
            position = match.end()
        pieces.append(content[position:])
        return "".join(pieces)

    if not matches:
        return content + "\n" + new_block

    first, duplicates = matches[0], matches[1:]
    pieces = [content[: first.start()], new_block]
    position = first.end()
    for match in duplicates:
        log.debug("removing duplicated '%s' block", markers.begin)
        pieces.append(content[position : match.start()])
        position = match.end()
    pieces.append(content[position:])
    return "".join(pieces)


def _init_marker_file(
    target_path: str,
    markers: MarkerPair,
    content: str,
    reverse: bool,
    context: Context,
) -> str:
    original_content = read_text(target_path)
    new_content = apply_marker_block(original_content, markers, content, reverse=reverse)

    if new_content == original_content:
        return Result.NO_CHANGE

    print_diff(target_path, original_content, new_content, context)
    if not context.dry_run:
        write_text(target_path, new_content)
    return Result.MODIFIED


def init_rc_file(
    target_path: str, content: str, reverse: bool = False, *, context: Context
) -> str:
    return _init_marker_file(target_path, RC_MARKERS, content, reverse, context)


def init_powershell_profile(
    target_path: str, content: str, reverse: bool = False, *, context: Context
) -> str:
    if not target_path:
        log.warning(
            "No PowerShell profile could be located; nothing to %s.",
            "remove" if reverse else "update",
        )
        return Result.NO_CHANGE
    return _init_marker_file(target_path, PS_MARKERS, content, reverse, context)


def apply_autorun_value(prev_value: str, hook_string: str) -> str:
    """Merge ``hook_string`` into an ``&``-joined cmd.exe AutoRun value.

    Examples:
        >>> apply_autorun_value('echo hi & "C:\\\\old\\\\mamba-hook.bat"', '"C:\\\\new\\\\mamba_hook.bat"')
        'echo hi & "C:\\\\new\\\\mamba_hook.bat"'
        >>> apply_autorun_value("", '"C:\\\\new\\\\mamba_hook.bat"')
        '"C:\\\\new\\\\mamba_hook.bat"'

    """
    # a plain string replace keeps backslashes in hook_string literal
    new_value = CMD_EXE_HOOK_RE.sub(REPLACE_ME_TOKEN, prev_value, count=1)
    new_value = new_value.replace(REPLACE_ME_TOKEN, hook_string)
    if hook_string not in new_value:
        if new_value:
            new_value += " & " + hook_string
        else:
            new_value = hook_string
    return new_value


def init_cmd_exe_registry(
    target_path: str,
    hook_string: str,
    reverse: bool = False,
    *,
    context: Context,
    read: Callable[[str], tuple] | None = None,
    write: Callable[..., None] | None = None,
) -> str:
    # HKEY_CURRENT_USER\Software\Microsoft\Command Processor\AutoRun
    if reverse:
        raise OperationNotSupportedError("deinit", "the cmd.exe AutoRun registry value")

    if read is None or write is None:
        from .gateways.registry import read_windows_registry, write_windows_registry

        read = read or read_windows_registry
        write = write or write_windows_registry

    prev_value, value_type = read(target_path)
    prev_value = prev_value or ""
    new_value = apply_autorun_value(prev_value, hook_string)

    if new_value == prev_value:
        return Result.NO_CHANGE

    print_diff(target_path, prev_value, new_value, context)
    if not context.dry_run:
        print("Adding to cmd.exe AUTORUN: %s" % new_value)
        write(target_path, new_value, value_type)
    return Result.MODIFIED
