"""Diagnostic matchmaking log records.

The log explains every pairing decision of a round. It is informational
only: nothing in the pairing algorithm reads it back.
"""

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
from typing import Any, Dict, List, Tuple

from triplethreat.models.enums import Track


@dataclass(frozen=True)
class MatchmakingLogEntry:
    """Why one pair was chosen for one track."""

    round_number: int
    track: Track
    player1_name: str
    player2_name: str
    player1_record: str
    player2_record: str
    reason: str
    details: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "track": self.track.value,
            "player1_name": self.player1_name,
            "player2_name": self.player2_name,
            "player1_record": self.player1_record,
            "player2_record": self.player2_record,
            "reason": self.reason,
            "details": list(self.details),
        }


@dataclass(frozen=True)
class SkippedTrack:
    """A track that could not be filled this round."""

    track: Track
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"track": self.track.value, "reason": self.reason}


@dataclass(frozen=True)
class MatchmakingLog:
    """All log entries for one round."""

    round_number: int
    entries: Tuple[MatchmakingLogEntry, ...] = ()
    skipped_tracks: Tuple[SkippedTrack, ...] = ()

    def format_lines(self) -> List[str]:
        """Render the log as human readable lines."""
        lines = [f"Round {self.round_number}"]
        for entry in self.entries:
            lines.append(
                f"  {entry.track.display_name}: {entry.player1_name} "
                f"[{entry.player1_record}] vs {entry.player2_name} "
                f"[{entry.player2_record}] - {entry.reason}"
            )
            lines.extend(f"      {detail}" for detail in entry.details)
        for skipped in self.skipped_tracks:
            lines.append(f"  {skipped.track.display_name}: skipped - {skipped.reason}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "entries": [e.to_dict() for e in self.entries],
            "skipped_tracks": [s.to_dict() for s in self.skipped_tracks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchmakingLog":
        return cls(
            round_number=data["round_number"],
            entries=tuple(
                MatchmakingLogEntry(
                    round_number=e["round_number"],
                    track=Track(e["track"]),
                    player1_name=e["player1_name"],
                    player2_name=e["player2_name"],
                    player1_record=e["player1_record"],
                    player2_record=e["player2_record"],
                    reason=e["reason"],
                    details=tuple(e.get("details", ())),
                )
                for e in data.get("entries", [])
            ),
            skipped_tracks=tuple(
                SkippedTrack(track=Track(s["track"]), reason=s["reason"])
                for s in data.get("skipped_tracks", [])
            ),
        )
