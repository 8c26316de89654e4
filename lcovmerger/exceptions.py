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

"""Exceptions used in lcovmerger."""


class LcovMergeAssertionError(AssertionError):
    """Exception for data merge errors."""
