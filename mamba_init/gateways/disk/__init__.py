# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
import os
from errno import EEXIST
from logging import getLogger
from os.path import dirname, isdir, isfile

from ...common.compat import open_utf8

log = getLogger(__name__)


def mkdir_p(path):
    try:
        log.debug("making directory %s", path)
        if path:
            os.makedirs(path)
            return isdir(path) and path
    except OSError as e:
        if e.errno == EEXIST and isdir(path):
            return path
        else:
            raise


def read_text(path):
    """Return the file's text, or an empty string when it does not exist.

    Line endings are returned untranslated so CRLF files round-trip unchanged, and bytes
    that are not UTF-8 are carried through as surrogate escapes.
    """
    if not path or not isfile(path):
        return ""
    with open_utf8(path, newline="", errors="surrogateescape") as fh:
        return fh.read()


def write_text(path, content):
    mkdir_p(dirname(path))
    log.debug("writing %s", path)
    with open_utf8(path, "w", newline="", errors="surrogateescape") as fh:
        fh.write(content)
