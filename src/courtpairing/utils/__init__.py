"""Shared utilities for Court Pairing."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import sys
from datetime import datetime
from typing import Optional

from dateutil.parser import isoparse

from courtpairing.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

PACKAGE_LOGGER_NAME = "courtpairing"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.WARNING
        package_logger.setLevel(level)
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger that reports through the package handler.

    Args:
        name: Module name, normally ``__name__``

    Returns:
        The configured logger
    """
    _configure_package_logger()
    return logging.getLogger(name)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Serialize an optional timestamp to ISO 8601."""
    return value.isoformat() if value is not None else None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an optional ISO 8601 timestamp."""
    return isoparse(value) if value else None


__all__ = ["setup_logger", "format_datetime", "parse_datetime", "PACKAGE_LOGGER_NAME"]
