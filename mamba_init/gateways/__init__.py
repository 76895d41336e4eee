# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Gateways isolate interaction of this package with the outside world.  Disk manipulation,
subprocess calls, the Windows registry, and logging handlers are all examples.  Included
modules are also sometimes referred to as "IO code".

Gateways should generally only import from ``mamba_init.common`` and ``mamba_init.base``.
"""
