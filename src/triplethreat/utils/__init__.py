"""Shared utilities: logging setup and identifier generation."""

# Triple Threat
# Copyright (C) 2025  Triple Threat developers
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
import random
import uuid
from typing import Optional

from triplethreat.constants import LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"


def _resolve_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger attached to the shared package handler.

    The ``triplethreat`` root logger gets a single stream handler the first
    time any module asks for a logger; the level comes from the
    ``TRIPLETHREAT_LOG_LEVEL`` environment variable.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    root = logging.getLogger("triplethreat")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_resolve_level())
    return logging.getLogger(name)


def generate_id(prefix: str, rng: Optional[random.Random] = None) -> str:
    """Generate a unique identifier.

    With an ``rng`` the identifier is derived from it, so a seeded generator
    yields reproducible ids.

    Args:
        prefix: Short type prefix, e.g. ``"match"``
        rng: Optional random source

    Returns:
        Identifier of the form ``<prefix>-<32 hex digits>``
    """
    if rng is None:
        value = uuid.uuid4()
    else:
        value = uuid.UUID(int=rng.getrandbits(128), version=4)
    return f"{prefix}-{value.hex}"
