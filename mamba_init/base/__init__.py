# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Code in ``mamba_init.base`` is the lowest level of the application stack.  It is loaded and
executed virtually every time the application is executed.  Any code within, and any of its
imports, must be highly performant.

``mamba_init.base.constants`` holds the string literals and enums shared by every module, and
``mamba_init.base.context`` builds the read-only execution context for one invocation.
"""
