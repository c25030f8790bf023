"""Competitor snapshot model."""

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

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from triplethreat.constants import MATCHES_PER_TRACK, TOTAL_MATCH_QUOTA
from triplethreat.models.enums import TRACK_ORDER, Track


@dataclass(frozen=True)
class TrackStats:
    """A competitor's record in one track.

    Attributes
    ----------
    wins : int
        Matches won in the track.
    losses : int
        Matches lost in the track.
    matches_played : int
        Matches played in the track (quota is 3).
    dominant_wins : int
        Wins that met the track's decisive-margin condition.
    opponents : tuple of str
        Opponent ids in the order they were faced. Never holds an id twice.
    buchholz : int
        Sum of the current points of ``opponents``. Derived, see
        :func:`triplethreat.tournament.standings.compute_standings_scores`.
    """

    wins: int = 0
    losses: int = 0
    matches_played: int = 0
    dominant_wins: int = 0
    opponents: Tuple[str, ...] = ()
    buchholz: int = 0

    @property
    def net(self) -> int:
        """Wins minus losses."""
        return self.wins - self.losses

    @property
    def remaining(self) -> int:
        return max(0, MATCHES_PER_TRACK - self.matches_played)

    @property
    def is_complete(self) -> bool:
        return self.matches_played >= MATCHES_PER_TRACK

    @property
    def record_label(self) -> str:
        return (
            f"{self.wins}W-{self.losses}L "
            f"({self.matches_played}/{MATCHES_PER_TRACK} played)"
        )

    def has_faced(self, opponent_id: str) -> bool:
        return opponent_id in self.opponents

    def with_result(
        self, opponent_id: str, won: bool, dominant: bool = False
    ) -> "TrackStats":
        """Return a copy with one more match against ``opponent_id``.

        A repeat opponent (catch-up rematch) counts as a match but is not
        listed twice.
        """
        opponents = self.opponents
        if opponent_id not in opponents:
            opponents = opponents + (opponent_id,)
        return replace(
            self,
            wins=self.wins + (1 if won else 0),
            losses=self.losses + (0 if won else 1),
            matches_played=self.matches_played + 1,
            dominant_wins=self.dominant_wins + (1 if won and dominant else 0),
            opponents=opponents,
        )

    def without_result(
        self,
        opponent_id: str,
        won: bool,
        dominant: bool = False,
        drop_opponent: bool = True,
    ) -> "TrackStats":
        """Return a copy with one match against ``opponent_id`` taken back."""
        opponents = self.opponents
        if drop_opponent:
            opponents = tuple(o for o in opponents if o != opponent_id)
        return replace(
            self,
            wins=self.wins - (1 if won else 0),
            losses=self.losses - (0 if won else 1),
            matches_played=self.matches_played - 1,
            dominant_wins=self.dominant_wins - (1 if won and dominant else 0),
            opponents=opponents,
        )

    def adjusted(
        self, wins: int = 0, losses: int = 0, dominant_wins: int = 0
    ) -> "TrackStats":
        """Return a copy with the counters shifted by the given deltas.

        Used when a recorded outcome is corrected; matches played and the
        opponent list stay as they are.
        """
        return replace(
            self,
            wins=self.wins + wins,
            losses=self.losses + losses,
            dominant_wins=self.dominant_wins + dominant_wins,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "matches_played": self.matches_played,
            "dominant_wins": self.dominant_wins,
            "opponents": list(self.opponents),
            "buchholz": self.buchholz,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackStats":
        return cls(
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            matches_played=data.get("matches_played", 0),
            dominant_wins=data.get("dominant_wins", 0),
            opponents=tuple(data.get("opponents", ())),
            buchholz=data.get("buchholz", 0),
        )


def _empty_tracks() -> Dict[Track, TrackStats]:
    return {track: TrackStats() for track in TRACK_ORDER}


@dataclass(frozen=True)
class Competitor:
    """Immutable snapshot of one competitor.

    The core never mutates a competitor; state transitions build new
    snapshots with :func:`dataclasses.replace`. Aggregate record, match count
    and dominant wins are derived from the three tracks so they can never
    drift from the per-track counters.

    Attributes
    ----------
    id : str
        Unique identifier.
    name : str
        Full name.
    nickname : str
        Gamertag shown in logs; falls back to ``name``.
    total_points : int
        Aggregate points, including anything the caller adds (bets, bonuses).
    bets_received : int
        How many bets were placed on this competitor. Final tie-break signal.
    buchholz : int
        Aggregate opponent strength, derived.
    tracks : dict of Track to TrackStats
        Per-track records. Always holds all three tracks.
    """

    id: str
    name: str
    nickname: str = ""
    total_points: int = 0
    bets_received: int = 0
    buchholz: int = 0
    tracks: Dict[Track, TrackStats] = field(default_factory=_empty_tracks)

    def __post_init__(self) -> None:
        # Fill in missing tracks so lookups never fail
        if any(track not in self.tracks for track in TRACK_ORDER):
            tracks = _empty_tracks()
            tracks.update({Track(k): v for k, v in self.tracks.items()})
            object.__setattr__(self, "tracks", tracks)

    @property
    def display_name(self) -> str:
        return self.nickname or self.name

    def track(self, track: Track) -> TrackStats:
        return self.tracks[track]

    @property
    def wins(self) -> int:
        return sum(stats.wins for stats in self.tracks.values())

    @property
    def losses(self) -> int:
        return sum(stats.losses for stats in self.tracks.values())

    @property
    def matches_played(self) -> int:
        return sum(stats.matches_played for stats in self.tracks.values())

    @property
    def dominant_wins(self) -> int:
        return sum(stats.dominant_wins for stats in self.tracks.values())

    @property
    def is_quota_complete(self) -> bool:
        return self.matches_played >= TOTAL_MATCH_QUOTA

    def has_faced(self, opponent_id: str, track: Track) -> bool:
        return self.tracks[track].has_faced(opponent_id)

    def has_met_anywhere(self, opponent_id: str) -> bool:
        return any(stats.has_faced(opponent_id) for stats in self.tracks.values())

    def cross_track_encounters(
        self, opponent_id: str, excluding: Optional[Track] = None
    ) -> int:
        """Count the tracks (other than ``excluding``) where the two have met."""
        return sum(
            1
            for track, stats in self.tracks.items()
            if track != excluding and stats.has_faced(opponent_id)
        )

    def with_track(self, track: Track, stats: TrackStats) -> "Competitor":
        tracks = dict(self.tracks)
        tracks[track] = stats
        return replace(self, tracks=tracks)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize competitor to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "nickname": self.nickname,
            "total_points": self.total_points,
            "bets_received": self.bets_received,
            "buchholz": self.buchholz,
            "tracks": {t.value: s.to_dict() for t, s in self.tracks.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        """Deserialize competitor from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            nickname=data.get("nickname", ""),
            total_points=data.get("total_points", 0),
            bets_received=data.get("bets_received", 0),
            buchholz=data.get("buchholz", 0),
            tracks={
                Track(k): TrackStats.from_dict(v)
                for k, v in data.get("tracks", {}).items()
            },
        )

    def __repr__(self) -> str:
        return (
            f"Competitor(id={self.id}, name={self.display_name}, "
            f"points={self.total_points}, played={self.matches_played})"
        )
