"""Match data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from triplethreat.models.enums import Track


@dataclass(frozen=True)
class Match:
    """A single match in one track.

    Attributes
    ----------
    id : str
        Unique match identifier.
    round_number : int
        Round the match belongs to (1-indexed).
    track : Track
        Game track being played.
    player1_id : str
        First competitor.
    player2_id : str
        Second competitor.
    winner_id : str or None
        Winner, None until the outcome is recorded.
    is_dominant : bool
        Whether the win met the decisive-margin condition (worth more points).
    is_catch_up : bool
        True for extra matches scheduled after the main schedule.
    shortfall_id : str or None
        Catch-up only: the competitor short of their quota.
    second_shortfall_id : str or None
        Catch-up only: set when two shortfall competitors play each other.
    volunteer_id : str or None
        Catch-up only: quota-complete competitor helping out.
    is_volunteer_exhausted : bool
        The volunteer had to be a same-track rematch.
    is_volunteer_forced : bool
        The volunteer was picked at random ignoring every exclusion.
    is_rematch : bool
        The shortfall competitor already faced the volunteer in this track
        when the match was booked. A forced volunteer may or may not be one.
    declined_volunteer_ids : tuple of str
        Volunteers who declined this match so far.
    """

    id: str
    round_number: int
    track: Track
    player1_id: str
    player2_id: str
    winner_id: Optional[str] = None
    is_dominant: bool = False
    is_catch_up: bool = False
    shortfall_id: Optional[str] = None
    second_shortfall_id: Optional[str] = None
    volunteer_id: Optional[str] = None
    is_volunteer_exhausted: bool = False
    is_volunteer_forced: bool = False
    is_rematch: bool = False
    declined_volunteer_ids: Tuple[str, ...] = ()

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def player_ids(self) -> Tuple[str, str]:
        return (self.player1_id, self.player2_id)

    def involves(self, competitor_id: str) -> bool:
        return competitor_id in (self.player1_id, self.player2_id)

    def opponent_of(self, competitor_id: str) -> str:
        """Return the other competitor of the match."""
        if competitor_id == self.player1_id:
            return self.player2_id
        if competitor_id == self.player2_id:
            return self.player1_id
        raise ValueError(f"{competitor_id} does not play in match {self.id}")

    def stat_recipients(self) -> Tuple[str, ...]:
        """Competitors whose records are updated by this match's result.

        Main-schedule matches update both sides. Catch-up matches only update
        the shortfall competitor(s); volunteers are helpers.
        """
        if not self.is_catch_up:
            return self.player_ids
        return tuple(
            cid for cid in (self.shortfall_id, self.second_shortfall_id) if cid
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "track": self.track.value,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "winner_id": self.winner_id,
            "is_dominant": self.is_dominant,
            "is_catch_up": self.is_catch_up,
            "shortfall_id": self.shortfall_id,
            "second_shortfall_id": self.second_shortfall_id,
            "volunteer_id": self.volunteer_id,
            "is_volunteer_exhausted": self.is_volunteer_exhausted,
            "is_volunteer_forced": self.is_volunteer_forced,
            "is_rematch": self.is_rematch,
            "declined_volunteer_ids": list(self.declined_volunteer_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            round_number=data["round_number"],
            track=Track(data["track"]),
            player1_id=data["player1_id"],
            player2_id=data["player2_id"],
            winner_id=data.get("winner_id"),
            is_dominant=data.get("is_dominant", False),
            is_catch_up=data.get("is_catch_up", False),
            shortfall_id=data.get("shortfall_id"),
            second_shortfall_id=data.get("second_shortfall_id"),
            volunteer_id=data.get("volunteer_id"),
            is_volunteer_exhausted=data.get("is_volunteer_exhausted", False),
            is_volunteer_forced=data.get("is_volunteer_forced", False),
            is_rematch=data.get("is_rematch", False),
            declined_volunteer_ids=tuple(data.get("declined_volunteer_ids", ())),
        )

