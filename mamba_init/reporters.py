# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Interactive console helpers."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from . import MambaError
from .exceptions import MambaSystemExit

if TYPE_CHECKING:
    from .base.context import Context


def prompt(message="Proceed", choices=("yes", "no"), default="yes") -> str:
    """
    Implementation of a prompt dialog
    """
    assert default in choices, default
    options = []

    for option in choices:
        if option == default:
            options.append(f"[{option[0]}]")
        else:
            options.append(option[0])

    message = "{} ({})? ".format(message, "/".join(options))
    choices = {alt: choice for choice in choices for alt in [choice, choice[0]]}
    choices[""] = default
    while True:
        # input() would print the prompt to stderr when stdout is redirected
        sys.stdout.write(message)
        sys.stdout.flush()
        try:
            user_choice = sys.stdin.readline().strip().lower()
        except OSError as e:
            raise MambaError(f"cannot read from stdin: {e}")
        if user_choice not in choices:
            print(f"Invalid choice: {user_choice}")
        else:
            sys.stdout.write("\n")
            sys.stdout.flush()
            return choices[user_choice]


def confirm_yn(message: str = "Proceed", default="yes", *, context: Context) -> bool:
    """
    Display a "yes/no" confirmation input
    """
    if context.always_yes:
        return True

    try:
        choice = prompt(message, choices=("yes", "no"), default=default)
    except KeyboardInterrupt:  # pragma: no cover
        raise MambaSystemExit("\nOperation aborted.  Exiting.")

    if choice == "no":
        raise MambaSystemExit("OK, exiting.")

    return True
