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
Merge coverage data.

The merge functions take two coverage items describing the same thing
and return the combined coverage as a new object.
The inputs are never changed, so records can be merged in parallel
as long as nobody is still adding entries to them.

Every kind of coverage detail is merged with its own policy:

* function declaration lines: the right record wins (``OVERWRITE``),
* function execution counts and line counts: summed (``SUM``),
* branches: executed if executed in any of the records (``OR``).

``SUM`` and ``OR`` are commutative and associative.
``OVERWRITE`` is associative, so folding records in a fixed order
always gives the same result.

The summary counters of a merged record are always derived from the
merged detail, adding the counters of the inputs would count lines,
branches and functions present in both records twice.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Dict, Iterable, Mapping, TypeVar

from .coverage import BranchCoverage, CovData, FileCoverage, LineCoverage
from .exceptions import LcovMergeAssertionError
from .options import Options

LOGGER = logging.getLogger("lcovmerger")


@dataclass
class MergeOptions:
    """Data class to store the merge options."""

    strict_line_checksum: bool = False


DEFAULT_MERGE_OPTIONS = MergeOptions()


def get_merge_options(options: Options) -> MergeOptions:
    """Get the merge options from the configuration."""
    return MergeOptions(
        strict_line_checksum=bool(options.get("merge_strict_line_checksum"))
    )


_Key = TypeVar("_Key", int, str)
_T = TypeVar("_T")


def _merge_dict(
    left: Mapping[_Key, _T],
    right: Mapping[_Key, _T],
    merge_item: Callable[[_T, _T], _T],
) -> Dict[_Key, _T]:
    """
    Helper function to merge items in a dictionary.

    The result contains the union of the keys, ordered by key.

    Example:
    >>> _merge_dict(dict(b=3, a=2), dict(c=5, b=1), lambda a, b: a + b)
    {'a': 2, 'b': 4, 'c': 5}
    """
    merged = dict(left)
    for key, right_item in right.items():
        if key in merged:
            merged[key] = merge_item(merged[key], right_item)
        else:
            merged[key] = right_item

    return dict(sorted(merged.items()))


def merge_function_linenos(left: FileCoverage, right: FileCoverage) -> Dict[str, int]:
    """
    Merge the function declaration lines (``OVERWRITE``).

    If a function is declared in both records, the line of ``right`` is used.
    """
    return _merge_dict(
        left.function_linenos,
        right.function_linenos,
        lambda _left_lineno, right_lineno: right_lineno,
    )


def merge_function_executions(
    left: FileCoverage, right: FileCoverage
) -> Dict[str, int]:
    """Merge the function execution counts (``SUM``)."""
    return _merge_dict(
        left.function_executions,
        right.function_executions,
        lambda left_count, right_count: left_count + right_count,
    )


def merge_lines(
    left: FileCoverage,
    right: FileCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> Dict[int, LineCoverage]:
    """Merge the line coverage (``SUM``)."""
    return _merge_dict(
        left.lines,
        right.lines,
        lambda left_line, right_line: merge_line(left_line, right_line, options),
    )


def merge_branches(
    left: FileCoverage,
    right: FileCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> Dict[int, BranchCoverage]:
    """Merge the branch coverage (``OR``)."""
    return _merge_dict(
        left.branches,
        right.branches,
        lambda left_branch, right_branch: merge_branch(
            left_branch, right_branch, options
        ),
    )


def merge_line(
    left: LineCoverage,
    right: LineCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> LineCoverage:
    """
    Merge LineCoverage information.

    Precondition: both objects must have same lineno.

    Examples:
    >>> merge_line(LineCoverage(3, 2), LineCoverage(3, 5, "abc"))
    LineCoverage(lineno=3, count=7, checksum='abc')
    """
    if left.lineno != right.lineno:
        raise LcovMergeAssertionError("Line number must be equal.")

    # If both checksums exists compare them if only one exists, use it.
    checksum = left.checksum
    if left.checksum is not None and right.checksum is not None:
        if left.checksum != right.checksum:
            if options.strict_line_checksum:
                raise LcovMergeAssertionError(
                    f"Checksum of line {left.lineno} must be equal, "
                    f"got {left.checksum!r} and {right.checksum!r}."
                )
            LOGGER.warning(
                f"Line {left.lineno} has different checksums "
                f"({left.checksum!r} and {right.checksum!r}), using the first one."
            )
    elif right.checksum is not None:
        checksum = right.checksum

    return LineCoverage(left.lineno, left.count + right.count, checksum)


def merge_branch(
    left: BranchCoverage,
    right: BranchCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> BranchCoverage:
    """
    Merge BranchCoverage information.

    The block and branch numbers of ``left`` are kept.

    Precondition: both objects must have same lineno.

    Examples:
    >>> left = BranchCoverage(4, "0", "0", False, 0)
    >>> right = BranchCoverage(4, "0", "0", True, 3)
    >>> merged = merge_branch(left, right)
    >>> merged.was_executed
    True
    >>> merged.count
    3
    """
    if left.lineno != right.lineno:
        raise LcovMergeAssertionError("Line number must be equal.")

    return BranchCoverage(
        left.lineno,
        left.blockno,
        left.branchno,
        left.was_executed or right.was_executed,
        left.count + right.count,
    )


def merge_file(
    left: FileCoverage,
    right: FileCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> FileCoverage:
    """
    Merge FileCoverage information into a new record.

    Precondition: both objects have same filename.
    The merged record uses the filename of ``right``.
    """

    if left.filename != right.filename:
        raise LcovMergeAssertionError(
            f"Filename must be equal, got {left.filename!r} and {right.filename!r}."
        )

    LOGGER.debug(f"Merging coverage data of {right.filename}")
    merged = FileCoverage(right.filename)
    merged.add_all_function_linenos(merge_function_linenos(left, right))
    merged.add_all_function_executions(merge_function_executions(left, right))
    merged.add_all_branches(merge_branches(left, right, options))
    merged.add_all_lines(merge_lines(left, right, options))
    merged.update_counters()

    return merged


def insert_file_coverage(
    target: CovData,
    file: FileCoverage,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> FileCoverage:
    """
    Insert FileCoverage into CovData.

    The target dictionary is updated in place,
    the record saved in the target is returned.
    """
    if file.filename in target:
        merged = merge_file(target[file.filename], file, options)
    else:
        merged = file.copy()
        merged.update_counters()
    target[file.filename] = merged
    return merged


def merge_covdata(
    left: CovData,
    right: CovData,
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> CovData:
    """Merge CovData information into a new dictionary."""
    merged: CovData = {}
    for filecov in left.values():
        insert_file_coverage(merged, filecov, options)
    for filecov in right.values():
        insert_file_coverage(merged, filecov, options)

    return dict(sorted(merged.items()))


def merge_all(
    records: Iterable[FileCoverage],
    options: MergeOptions = DEFAULT_MERGE_OPTIONS,
) -> CovData:
    """Fold all records into one record per file, in the given order."""
    covdata: CovData = {}
    count = 0
    for filecov in records:
        insert_file_coverage(covdata, filecov, options)
        count += 1

    LOGGER.debug(f"Merged {count} records into {len(covdata)} files.")
    return dict(sorted(covdata.items()))
