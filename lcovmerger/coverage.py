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
The lcovmerger coverage data model.

This module represents the core data structures
and should not have dependencies on any other lcovmerger module.

The data model should contain the exact same information
as an lcov tracefile record (``SF:`` ... ``end_of_record``).

The types ending with ``*Coverage``
contain per-file/-line/-branch coverage.

The type ``CoverageStat`` reports aggregated metrics/percentages.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    Dict,
    Iterator,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

_Key = TypeVar("_Key", int, str)
_T = TypeVar("_T")


def _sorted_view(items: Dict[_Key, _T]) -> Mapping[_Key, _T]:
    """Read-only copy of a coverage dictionary, ordered by key."""
    return MappingProxyType(dict(sorted(items.items())))


@dataclass(frozen=True)
class LineCoverage:
    r"""Represent coverage information about a line.

    Args:
        lineno (int):
            The line number.
        count (int):
            How often this line was executed.
        checksum (str, optional):
            Checksum of the source line, None if not available.
    """

    lineno: int
    count: int
    checksum: Optional[str] = None

    @property
    def is_covered(self) -> bool:
        """Return True if the line was executed at least once."""
        return self.count > 0


@dataclass(frozen=True)
class BranchCoverage:
    r"""Represent coverage information about a branch.

    Branches are identified by their line number only,
    the block and branch numbers are informational.

    Args:
        lineno (int):
            The line number.
        blockno (str, optional):
            The block number. None if unknown.
        branchno (str, optional):
            The branch number. None if unknown.
        was_executed (bool):
            Whether this branch was ever taken.
        count (int, optional):
            Number of times this branch was taken.
    """

    lineno: int
    blockno: Optional[str]
    branchno: Optional[str]
    was_executed: bool
    count: int = 0

    @staticmethod
    def from_taken(
        lineno: int,
        blockno: Optional[str],
        branchno: Optional[str],
        taken: Optional[str],
    ) -> BranchCoverage:
        """Create a branch from the ``taken`` column of a ``BRDA`` record.

        A ``-`` means that the branch was never executed:
        >>> BranchCoverage.from_taken(3, "0", "1", "-")
        BranchCoverage(lineno=3, blockno='0', branchno='1', was_executed=False, count=0)
        >>> BranchCoverage.from_taken(3, "0", "1", "4").was_executed
        True
        """
        if taken is None or taken == "-":
            return BranchCoverage(lineno, blockno, branchno, False, 0)
        count = int(taken)
        return BranchCoverage(lineno, blockno, branchno, count > 0, count)

    @property
    def is_covered(self) -> bool:
        """Return True if the branch was taken."""
        return self.was_executed


@dataclass
class CoverageStat:
    """A single coverage metric, e.g. the line coverage percentage of a file."""

    covered: int
    """How many elements were covered."""

    total: int
    """How many elements there were in total."""

    @staticmethod
    def new_empty() -> CoverageStat:
        """Create a empty coverage statistic."""
        return CoverageStat(0, 0)

    @property
    def percent(self) -> Optional[float]:
        """Percentage of covered elements, equivalent to ``self.percent_or(None)``"""
        return self.percent_or(None)

    def percent_or(self, default: _T) -> Union[float, _T]:
        """Percentage of covered elements.

        Coverage is rounded to one decimal:
        >>> CoverageStat(1234, 10000).percent_or("default")
        12.3
        >>> CoverageStat(2, 3).percent_or("default")
        66.7

        Coverage is capped at 99.9% unless everything is covered:
        >>> CoverageStat(9999, 10000).percent_or("default")
        99.9
        >>> CoverageStat(10000, 10000).percent_or("default")
        100.0

        If there are no elements, percentage is NaN and the default will be returned:
        >>> CoverageStat(0, 0).percent_or("default")
        'default'
        """
        if not self.total:
            return default

        # Return 100% only if covered == total.
        if self.covered == self.total:
            return 100.0

        # There is at least one uncovered item.
        # Round to 1 decimal and clamp to max 99.9%.
        ratio = self.covered / self.total
        return min(99.9, round(ratio * 100.0, 1))

    def __iadd__(self, other: CoverageStat) -> CoverageStat:
        self.covered += other.covered
        self.total += other.total
        return self


class FileCoverage:
    r"""Represent coverage information about a file.

    A record is filled entry by entry while a single report is read,
    afterwards it is only read (e.g. by the merge functions).
    The summary counters are not updated by the ``add_*`` functions,
    call :meth:`update_counters` to derive them from the detail.

    Args:
        filename (str):
            The file path.
    """

    __slots__ = (
        "filename",
        "_function_linenos",
        "_function_executions",
        "_lines",
        "_branches",
        "_views",
        "functions_found",
        "functions_hit",
        "branches_found",
        "branches_hit",
        "lines_hit",
        "lines_found",
    )

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self._function_linenos: Dict[str, int] = {}
        self._function_executions: Dict[str, int] = {}
        self._lines: Dict[int, LineCoverage] = {}
        self._branches: Dict[int, BranchCoverage] = {}
        # Sorted views, dropped when the detail changes.
        self._views: Dict[str, Mapping] = {}

        self.functions_found = 0
        self.functions_hit = 0
        self.branches_found = 0
        self.branches_hit = 0
        self.lines_hit = 0
        self.lines_found = 0

    def copy(self) -> FileCoverage:
        """Get a copy of the record which can be changed independently."""
        other = FileCoverage(self.filename)
        other._function_linenos.update(self._function_linenos)
        other._function_executions.update(self._function_executions)
        other._lines.update(self._lines)
        other._branches.update(self._branches)

        other.functions_found = self.functions_found
        other.functions_hit = self.functions_hit
        other.branches_found = self.branches_found
        other.branches_hit = self.branches_hit
        other.lines_hit = self.lines_hit
        other.lines_found = self.lines_found
        return other

    def __repr__(self) -> str:
        return (
            f"FileCoverage({self.filename!r}, functions={len(self._function_linenos)}, "
            f"lines={len(self._lines)}, branches={len(self._branches)})"
        )

    @property
    def function_linenos(self) -> Mapping[str, int]:
        """The declaration line of each function, ordered by name."""
        return self._view("function_linenos", self._function_linenos)

    @property
    def function_executions(self) -> Mapping[str, int]:
        """The execution count of each function, ordered by name."""
        return self._view("function_executions", self._function_executions)

    @property
    def lines(self) -> Mapping[int, LineCoverage]:
        """The instrumented lines, ordered by line number."""
        return self._view("lines", self._lines)

    @property
    def branches(self) -> Mapping[int, BranchCoverage]:
        """The branches, ordered by line number."""
        return self._view("branches", self._branches)

    def _view(self, name: str, items: Dict[_Key, _T]) -> Mapping[_Key, _T]:
        view = self._views.get(name)
        if view is None:
            view = self._views[name] = _sorted_view(items)
        return view

    def iter_lines(self) -> Iterator[LineCoverage]:
        """Iterate over the lines in ascending order."""
        for lineno in sorted(self._lines):
            yield self._lines[lineno]

    def iter_branches(self) -> Iterator[BranchCoverage]:
        """Iterate over the branches in ascending order."""
        for lineno in sorted(self._branches):
            yield self._branches[lineno]

    def add_function_lineno(self, name: str, lineno: int) -> None:
        self._function_linenos[name] = lineno
        self._views.pop("function_linenos", None)

    def add_all_function_linenos(self, function_linenos: Mapping[str, int]) -> None:
        self._function_linenos.update(function_linenos)
        self._views.pop("function_linenos", None)

    def add_function_execution(self, name: str, count: int) -> None:
        self._function_executions[name] = count
        self._views.pop("function_executions", None)

    def add_all_function_executions(
        self, function_executions: Mapping[str, int]
    ) -> None:
        self._function_executions.update(function_executions)
        self._views.pop("function_executions", None)

    def add_line(self, line: LineCoverage) -> None:
        self._lines[line.lineno] = line
        self._views.pop("lines", None)

    def add_all_lines(self, lines: Mapping[int, LineCoverage]) -> None:
        self._lines.update(lines)
        self._views.pop("lines", None)

    def add_branch(self, branch: BranchCoverage) -> None:
        self._branches[branch.lineno] = branch
        self._views.pop("branches", None)

    def add_all_branches(self, branches: Mapping[int, BranchCoverage]) -> None:
        self._branches.update(branches)
        self._views.pop("branches", None)

    def update_counters(self) -> None:
        """Derive the summary counters from the coverage detail."""
        self.functions_found = len(self._function_linenos)
        self.functions_hit = len(self._function_executions)
        self.branches_found = len(self._branches)
        self.branches_hit = sum(
            1 for branch in self._branches.values() if branch.was_executed
        )
        self.lines_found = len(self._lines)
        self.lines_hit = sum(1 for line in self._lines.values() if line.count > 0)

    def line_coverage(self) -> CoverageStat:
        """Return the line coverage statistic of the file."""
        return CoverageStat(covered=self.lines_hit, total=self.lines_found)

    def branch_coverage(self) -> CoverageStat:
        """Return the branch coverage statistic of the file."""
        return CoverageStat(covered=self.branches_hit, total=self.branches_found)

    def function_coverage(self) -> CoverageStat:
        """Return the function coverage statistic of the file.

        Only functions with a non-zero execution count are covered.
        """
        covered = sum(1 for count in self._function_executions.values() if count > 0)
        return CoverageStat(covered=covered, total=self.functions_found)


CovData = Dict[str, FileCoverage]
