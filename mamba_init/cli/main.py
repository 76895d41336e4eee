# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Entry point for the `mamba-init shell` sub-commands.

Prepares the user's startup files for running mamba, and prints the shell hook they evaluate.
"""

from __future__ import annotations

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter
from logging import getLogger
from typing import TYPE_CHECKING

from .. import __version__
from ..base.constants import COMPATIBLE_SHELLS
from ..common.compat import dals

if TYPE_CHECKING:
    from argparse import Namespace, _SubParsersAction

    from ..base.constants import ShellKind
    from ..base.context import Context
    from ..exception_handler import ExceptionHandler

log = getLogger(__name__)


def _add_common_arguments(p: ArgumentParser) -> None:
    p.add_argument(
        "-s",
        "--shell",
        metavar="SHELL",
        help=(
            "The shell to use. Guessed from the environment when not given. "
            f"Available shells: {', '.join(COMPATIBLE_SHELLS)}"
        ),
    )
    p.add_argument(
        "-p",
        "--prefix",
        "--root-prefix",
        dest="prefix",
        metavar="PATH",
        help="The root prefix holding mamba's hook scripts (default: ~/micromamba).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verbosity",
        default=None,
        help=(
            "Can be used multiple times. Once for detailed output, twice for INFO logging, "
            "thrice for DEBUG logging, four times for TRACE logging."
        ),
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Report errors as json.",
    )


def configure_parser_shell(sub_parsers: _SubParsersAction) -> ArgumentParser:
    summary = "Set up mamba for shell interaction."
    p = sub_parsers.add_parser(
        "shell",
        help=summary,
        description=summary,
        formatter_class=RawDescriptionHelpFormatter,
    )
    shell_sub_parsers = p.add_subparsers(
        metavar="COMMAND",
        dest="shell_cmd",
        required=True,
    )

    epilog = dals(
        """
        A block delimited by '# >>> mamba initialize >>>' and '# <<< mamba initialize <<<'
        (or '#region mamba initialize' and '#endregion' for PowerShell) is added to the
        shell's startup file.  Re-running replaces that block; nothing outside it is changed.
        For cmd.exe the hook is added to the AutoRun registry value instead.

        To see the changes that would be made without making them, use '--dry-run'.

        IMPORTANT: most shells need to be closed and restarted for changes to take effect.
        """
    )
    init = shell_sub_parsers.add_parser(
        "init",
        help="Add mamba's initialization block to the shell's startup file.",
        description="Add mamba's initialization block to the shell's startup file.",
        epilog=epilog,
        formatter_class=RawDescriptionHelpFormatter,
    )
    _add_common_arguments(init)
    init.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Only display what would have been done.",
    )
    init.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation.",
    )

    deinit = shell_sub_parsers.add_parser(
        "deinit",
        help="Remove mamba's initialization block from the shell's startup file.",
        description="Remove mamba's initialization block from the shell's startup file.",
    )
    _add_common_arguments(deinit)
    deinit.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Only display what would have been done.",
    )

    hook = shell_sub_parsers.add_parser(
        "hook",
        help="Print the shell code evaluated at shell start-up.",
        description="Print the shell code evaluated at shell start-up.",
    )
    _add_common_arguments(hook)

    return p


def generate_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="mamba-init",
        description="Initialize shells for the mamba environment manager.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"mamba-init {__version__}",
        help="Show the mamba-init version number and exit.",
    )
    sub_parsers = parser.add_subparsers(
        metavar="COMMAND",
        dest="cmd",
        required=True,
    )
    configure_parser_shell(sub_parsers)
    return parser


def select_shell(requested: str | None) -> ShellKind:
    from ..base.constants import ShellKind
    from ..exceptions import ArgumentError
    from ..shell_detect import guess_shell

    if requested:
        return ShellKind.parse(requested)

    guessed = guess_shell()
    if guessed is None:
        raise ArgumentError(
            "Could not determine the current shell. Please pass one with '-s/--shell'."
        )
    log.info("no shell given, using detected shell '%s'", guessed)
    return guessed


def execute(args: Namespace, parser: ArgumentParser, context: Context | None = None) -> int:
    from ..base.context import build_context
    from ..gateways.logging import set_verbosity
    from ..hook import get_hook_contents
    from ..initialize import init_shell

    if context is None:
        context = build_context(args)
    set_verbosity(context.verbosity)
    shell = select_shell(args.shell)

    if args.shell_cmd == "init":
        return init_shell(shell, context=context)
    elif args.shell_cmd == "deinit":
        return init_shell(shell, context=context, reverse=True)
    elif args.shell_cmd == "hook":
        sys.stdout.write(get_hook_contents(shell, context=context))
        return 0
    raise NotImplementedError(args.shell_cmd)


def _main(*args, exception_handler: ExceptionHandler | None = None) -> int:
    from ..base.context import build_context
    from ..gateways.logging import initialize_logging

    initialize_logging()
    parser = generate_parser()
    parsed_args = parser.parse_args(args)
    context = build_context(parsed_args)
    if exception_handler is not None:
        # errors raised from here on are reported the way the invocation asked for
        exception_handler.verbosity = context.verbosity
        exception_handler.json_output = context.json
    return execute(parsed_args, parser, context)


def main(*args) -> int:
    # mamba_init.common.compat contains only stdlib imports
    from ..common.compat import ensure_text_type
    from ..exception_handler import mamba_exception_handler

    # cleanup argv
    args = args or sys.argv[1:]  # drop executable/script
    args = tuple(ensure_text_type(s) for s in args)

    return mamba_exception_handler(_main, *args)
