# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of lcovmerger 1.0+main, a merging tool for lcov coverage data.
#
# _____________________________________________________________________________
#
# Copyright (c) 2024 the lcovmerger authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

"""
Script to generate the installer for lcovmerger.
"""

import os
import time

from runpy import run_path
from setuptools import setup, find_packages


version = run_path("./lcovmerger/version.py")["__version__"]
if version.endswith("+main"):
    # Add a default if environment is not set
    os.environ["TIMESTAMP"] = os.environ.get("TIMESTAMP", str(int(time.time())))
    # ...and use this timestamp.
    version = version.replace("+main", f".dev{os.environ['TIMESTAMP']}+main")
# read the contents of your README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="lcovmerger",
    version=version,
    description="Merge lcov coverage records of sharded test runs",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    platforms=["any"],
    python_requires=">=3.8",
    packages=find_packages(include=["lcovmerger*"]),
    install_requires=[
        "colorlog",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "nox",
            "pytest",
            "ruff",
        ],
    },
)
