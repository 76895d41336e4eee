# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Error handling and error reporting."""

import sys
from logging import getLogger

from .common.compat import ensure_text_type

log = getLogger(__name__)


class ExceptionHandler:
    def __init__(self, verbosity=0, json_output=False):
        self.verbosity = verbosity
        self.json_output = json_output

    def __call__(self, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseException:
            _, exc_val, exc_tb = sys.exc_info()
            return self.handle_exception(exc_val, exc_tb)

    def write_out(self, *content):
        from .gateways.logging import initialize_std_loggers

        initialize_std_loggers()
        getLogger("mamba_init.stderr").info("\n".join(content))

    def handle_exception(self, exc_val, exc_tb):
        from . import MambaError

        if isinstance(exc_val, MambaError):
            return self.handle_application_exception(exc_val, exc_tb)
        if isinstance(exc_val, KeyboardInterrupt):
            self._print_mamba_exception(MambaError("KeyboardInterrupt"), None)
            return 1
        if isinstance(exc_val, SystemExit):
            log.debug("exiting with code %r", exc_val.code)
            return exc_val.code
        return self.handle_unexpected_exception(exc_val, exc_tb)

    def handle_application_exception(self, exc_val, exc_tb):
        self._print_mamba_exception(exc_val, exc_tb)
        return exc_val.return_code

    def _print_mamba_exception(self, exc_val, exc_tb):
        from .exceptions import print_mamba_exception
        from .gateways.logging import initialize_std_loggers

        initialize_std_loggers()
        print_mamba_exception(
            exc_val, exc_tb, verbosity=self.verbosity, json_output=self.json_output
        )

    def handle_unexpected_exception(self, exc_val, exc_tb):
        from .exceptions import _format_exc

        command = " ".join(ensure_text_type(s) for s in sys.argv)
        message_builder = [
            "",
            "# >>>>>>>>>>>>>>>>>>>>>> ERROR REPORT <<<<<<<<<<<<<<<<<<<<<<",
            "",
        ]
        message_builder.extend(
            "    " + line for line in _format_exc(exc_val, exc_tb).splitlines()
        )
        message_builder.extend(
            [
                "",
                "`$ %s`" % command,
                "",
                "An unexpected error has occurred. mamba-init has prepared the above report.",
                "",
            ]
        )
        self.write_out(*message_builder)
        rc = getattr(exc_val, "return_code", None)
        return rc if rc is not None else 1


def mamba_exception_handler(func, *args, **kwargs):
    """Run ``func``, turning any exception into a printed report and a return code.

    ``func`` receives the handler as ``exception_handler`` so that it can switch the report
    format once the invocation's verbosity and json settings are known.
    """
    exception_handler = ExceptionHandler()
    return_value = exception_handler(
        func, *args, exception_handler=exception_handler, **kwargs
    )
    return return_value
