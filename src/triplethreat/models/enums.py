"""Enumerations shared by the tournament models."""

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

from enum import Enum
from typing import Dict, Tuple


class Track(str, Enum):
    """The three parallel game tracks played every round."""

    SMASH = "smash"
    CHESS = "chess"
    PING_PONG = "ping_pong"

    @property
    def display_name(self) -> str:
        return TRACK_NAMES[self]


# Fixed priority order used wherever tracks are checked in sequence
TRACK_ORDER: Tuple[Track, ...] = (Track.SMASH, Track.CHESS, Track.PING_PONG)

TRACK_NAMES: Dict[Track, str] = {
    Track.SMASH: "Smash Bros",
    Track.CHESS: "Speed Chess",
    Track.PING_PONG: "Ping-Pong",
}


def other_tracks(track: Track) -> Tuple[Track, ...]:
    """Return the two tracks other than ``track``, in priority order."""
    return tuple(t for t in TRACK_ORDER if t != track)
