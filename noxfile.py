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

import os

import nox


DEFAULT_TEST_DIRECTORIES = ["lcovmerger", "tests"]
DEFAULT_LINT_ARGUMENTS = ["noxfile.py", "setup.py"] + DEFAULT_TEST_DIRECTORIES

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


@nox.session(python=False)
def qa(session: nox.Session) -> None:
    """Run the quality tests."""
    for session_id in ["lint", "tests"]:
        session.log(f"Notify session {session_id}")
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run the linters."""
    session.notify("ruff_check")
    session.notify("ruff_format")


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Run ruff check command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = DEFAULT_LINT_ARGUMENTS
    session.run("ruff", "check", *args)


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Run ruff format command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["--diff", *DEFAULT_LINT_ARGUMENTS]
    session.run("ruff", "format", *args)


@nox.session
def tests(session: nox.Session) -> None:
    """Run the tests."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    requirements = ["pytest"]
    if use_coverage:
        requirements += ["coverage", "pytest-cov"]
    session.install(*requirements)
    session.install("-e", ".[test]")

    args = ["-m", "pytest", "--doctest-modules"]
    if use_coverage:
        args += ["--cov=lcovmerger", "--cov-branch"]
    args += session.posargs
    if "--" not in args:
        args += ["--"] + DEFAULT_TEST_DIRECTORIES

    # Delay the session failure,
    # even if command fail we want to get the coverage report.
    try:
        session.run("python", *args)
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")
