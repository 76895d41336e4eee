# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause

import os
import sys

from setuptools import find_packages, setup

if not sys.version_info[:2] >= (3, 9):
    sys.exit(
        f"mamba-init is only meant for Python 3.9 and up. "
        f"current version: {sys.version_info.major}.{sys.version_info.minor}"
    )


# When executing setup.py, we need to be able to import ourselves, this
# means that we need to add the project root to the sys.path.
src_dir = here = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, src_dir)
import mamba_init  # noqa: E402

long_description = """
mamba-init integrates the mamba environment manager into interactive shells. It
writes (and removes) a small, clearly delimited initialization block in the
startup files of bash, zsh, POSIX sh, xonsh and PowerShell, or in the cmd.exe
AutoRun registry value, and installs the hook scripts that block loads. Running
it again replaces the block in place; nothing outside the block is touched.
"""
install_requires = [
    "ruamel.yaml >=0.17",
]


setup(
    name="mamba-init",
    version=mamba_init.__version__,
    author=mamba_init.__author__,
    license=mamba_init.__license__,
    description=mamba_init.__summary__,
    long_description=long_description,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    packages=find_packages(include=("mamba_init", "mamba_init.*")),
    package_data={
        "mamba_init": ["shell/*"],
    },
    entry_points={
        "console_scripts": [
            "mamba-init=mamba_init.cli.main:main",
        ],
    },
    install_requires=install_requires,
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    python_requires=">=3.9",
    zip_safe=False,
)
