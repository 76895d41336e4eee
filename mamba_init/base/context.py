# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Execution context for one invocation.

The context is built once, before any shell-specific step runs, from (in increasing order of
precedence) the YAML rc files on the search path, ``MAMBA_*`` environment variables, and the
parsed command line.  It is immutable and passed explicitly to every operation.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from logging import getLogger
from os.path import expanduser, isfile
from typing import TYPE_CHECKING

import ruamel.yaml

from ..common.compat import boolify, open_utf8
from ..common.path import expand
from ..common.serialize import yaml_safe_load
from .constants import DEFAULT_ROOT_PREFIX, SEARCH_PATH

if TYPE_CHECKING:
    from argparse import Namespace
    from collections.abc import Iterable, Mapping
    from typing import Any

log = getLogger(__name__)

_ENV_VAR_RE = re.compile(r"\$\{?(\w+)\}?")

_PARAMETERS = {
    "root_prefix": str,
    "dry_run": boolify,
    "always_yes": boolify,
    "verbosity": int,
    "json": boolify,
}


@dataclass(frozen=True)
class Context:
    root_prefix: str
    dry_run: bool = False
    always_yes: bool = False
    verbosity: int = 0
    json: bool = False

    def __post_init__(self):
        object.__setattr__(self, "root_prefix", expand(self.root_prefix))

    def replace(self, **changes) -> Context:
        return replace(self, **changes)


def expand_search_path(
    search_path: Iterable[str], environ: Mapping[str, str]
) -> tuple[str, ...]:
    """Expand ``$VAR`` and ``~`` in each entry, dropping entries that use unset variables."""
    expanded = []
    for entry in search_path:
        names = _ENV_VAR_RE.findall(entry)
        if any(not environ.get(name) for name in names):
            continue
        path = _ENV_VAR_RE.sub(lambda m: environ[m.group(1)], entry)
        expanded.append(expanduser(path))
    return tuple(expanded)


def load_rc_file(path: str) -> dict[str, Any]:
    from ..exceptions import ConfigurationLoadError

    with open_utf8(path) as fh:
        try:
            data = yaml_safe_load(fh.read())
        except ruamel.yaml.YAMLError as e:
            raise ConfigurationLoadError(path, e)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationLoadError(path, "top level of the file must be a mapping")
    return data


def _coerce(source: str, key: str, value: Any) -> Any:
    from ..exceptions import ConfigurationLoadError

    try:
        return _PARAMETERS[key](value)
    except (TypeError, ValueError) as e:
        raise ConfigurationLoadError(source, f"invalid value for '{key}': {e}")


def build_context(
    argparse_args: Namespace | None = None,
    environ: Mapping[str, str] | None = None,
    search_path: Iterable[str] | None = None,
) -> Context:
    environ = os.environ if environ is None else environ
    search_path = SEARCH_PATH if search_path is None else search_path
    values: dict[str, Any] = {"root_prefix": DEFAULT_ROOT_PREFIX}

    for path in expand_search_path(search_path, environ):
        if not isfile(path):
            continue
        log.debug("loading configuration from %s", path)
        for key, value in load_rc_file(path).items():
            if key in _PARAMETERS:
                values[key] = _coerce(path, key, value)
            else:
                log.debug("ignoring unknown configuration key '%s' in %s", key, path)

    for key in _PARAMETERS:
        env_name = f"MAMBA_{key.upper()}"
        if environ.get(env_name):
            values[key] = _coerce(env_name, key, environ[env_name])

    if argparse_args is not None:
        cli_values = {
            "root_prefix": getattr(argparse_args, "prefix", None),
            "dry_run": getattr(argparse_args, "dry_run", None),
            "always_yes": getattr(argparse_args, "yes", None),
            "verbosity": getattr(argparse_args, "verbosity", None),
            "json": getattr(argparse_args, "json", None),
        }
        for key, value in cli_values.items():
            # store_true flags left at False do not override lower-precedence sources
            if value is not None and value is not False:
                values[key] = _coerce("command line", key, value)

    return Context(**values)
