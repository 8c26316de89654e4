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

import logging
import os
import sys
from typing import Dict, Optional
from colorlog import ColoredFormatter

from .options import Options

LOGGER = logging.getLogger("lcovmerger")
DEFAULT_LOGGING_HANDLER = logging.StreamHandler(sys.stderr)

LOG_FORMAT = "(%(levelname)s) %(message)s"
COLOR_LOG_FORMAT = f"%(log_color)s{LOG_FORMAT}"


def __colored_formatter(options: Optional[Options] = None) -> ColoredFormatter:
    """Configure the colored logging formatter."""
    if options is not None:
        force_color = bool(options.get("force_color"))
        no_color = bool(options.get("no_color"))
    else:
        force_color = False
        no_color = False

    return ColoredFormatter(
        COLOR_LOG_FORMAT,
        datefmt=None,
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "blue",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={},
        style="%",
        force_color=force_color,
        no_color=no_color,
        stream=sys.stderr,
    )


def _ci_logging_prefixes() -> Optional[Dict[int, str]]:
    """Get the annotation prefixes of the CI system we are running on."""
    if "TF_BUILD" in os.environ:
        return {
            logging.WARNING: "##vso[task.logissue type=warning]",
            logging.ERROR: "##vso[task.logissue type=error]",
        }
    if "GITHUB_ACTIONS" in os.environ:
        return {
            logging.WARNING: "::warning::",
            logging.ERROR: "::error::",
        }
    return None


class CiFormatter(logging.Formatter):
    """Formatter to format messages to be captured by the CI system"""

    def __init__(self, prefixes: Dict[int, str]) -> None:
        super().__init__(fmt=LOG_FORMAT)
        self.prefixes = prefixes

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno in self.prefixes:
            return f"{self.prefixes[record.levelno]}{super().format(record)}"
        return ""


def configure_logging() -> None:
    """Configure the logging module.

    Not called by the library itself, applications opt in to it.
    """
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter())
    logging.basicConfig(level=logging.INFO, handlers=[DEFAULT_LOGGING_HANDLER])

    ci_logging_prefixes = _ci_logging_prefixes()
    if ci_logging_prefixes is not None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CiFormatter(ci_logging_prefixes))
        logging.getLogger().addHandler(handler)


def update_logging(options: Options) -> None:
    """Update the logger configuration depending on the options."""
    if options.get("verbose"):
        LOGGER.setLevel(logging.DEBUG)

    # Update the formatter of the default logger depending on options
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter(options))
