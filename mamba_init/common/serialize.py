# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""YAML serialization utilities."""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

import ruamel.yaml

if TYPE_CHECKING:
    from typing import Any


@cache
def _yaml() -> ruamel.yaml.YAML:
    parser = ruamel.yaml.YAML(typ="safe", pure=True)
    parser.default_flow_style = False
    return parser


def yaml_safe_load(string: str) -> Any:
    """
    Examples:
        >>> yaml_safe_load("key: value")
        {'key': 'value'}

    """
    return _yaml().load(string)
