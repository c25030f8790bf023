"""Data model for tournament round."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from triplethreat.constants import ROUND_CATCH_UP, ROUND_MAIN
from triplethreat.models.match import Match
from triplethreat.type_hints import RoundKind


@dataclass(frozen=True)
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    kind : str
        ``"main"`` for a pairing round, ``"catch_up"`` for the shortfall round.
    matches : tuple of Match
        Up to one match per track for main rounds; any number for catch-up.
    is_completed : bool
        Indicates whether the round's results have been finalized.
    """

    round_number: int
    kind: RoundKind = ROUND_MAIN
    matches: Tuple[Match, ...] = ()
    is_completed: bool = False

    @property
    def is_catch_up(self) -> bool:
        return self.kind == ROUND_CATCH_UP

    @property
    def pending_matches(self) -> Tuple[Match, ...]:
        return tuple(m for m in self.matches if not m.is_decided)

    def find_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def with_match(self, updated: Match) -> "RoundData":
        """Return a copy with the match of the same id replaced."""
        return replace(
            self,
            matches=tuple(updated if m.id == updated.id else m for m in self.matches),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "kind": self.kind,
            "matches": [m.to_dict() for m in self.matches],
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            kind=data.get("kind", ROUND_MAIN),
            matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
            is_completed=data.get("is_completed", False),
        )
