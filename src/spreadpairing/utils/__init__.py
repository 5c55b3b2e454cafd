"""Shared helpers for Spread Pairing: logging setup and id generation."""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
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
import uuid

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "SPREADPAIRING_LOG_LEVEL"


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger writing to stderr.

    The level defaults to WARNING and can be raised or lowered with the
    ``SPREADPAIRING_LOG_LEVEL`` environment variable. Handlers are attached
    once per logger so repeated imports do not duplicate output.

    Args:
        name: Logger name, normally the calling module's ``__name__``

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        logger.setLevel(getattr(logging, level, logging.WARNING))
        logger.propagate = False
    return logger


def generate_id(prefix: str) -> str:
    """Generate a unique id such as ``competitor_1f2e3d4c``."""
    return f"{prefix.lower()}_{uuid.uuid4().hex[:8]}"
