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

"""Merge lcov coverage records of independent test runs."""

from .coverage import (
    BranchCoverage,
    CovData,
    CoverageStat,
    FileCoverage,
    LineCoverage,
)
from .exceptions import LcovMergeAssertionError
from .merging import (
    DEFAULT_MERGE_OPTIONS,
    MergeOptions,
    get_merge_options,
    insert_file_coverage,
    merge_all,
    merge_covdata,
    merge_file,
)
from .version import __version__

__all__ = [
    "BranchCoverage",
    "CovData",
    "CoverageStat",
    "DEFAULT_MERGE_OPTIONS",
    "FileCoverage",
    "LcovMergeAssertionError",
    "LineCoverage",
    "MergeOptions",
    "__version__",
    "get_merge_options",
    "insert_file_coverage",
    "merge_all",
    "merge_covdata",
    "merge_file",
]
