"""Immutable tournament snapshot threaded through the state transitions."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from triplethreat.constants import PHASE_REGISTRATION
from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import TRACK_ORDER, Track
from triplethreat.models.match import Match
from triplethreat.models.matchmaking_log import MatchmakingLog
from triplethreat.models.round_data import RoundData
from triplethreat.models.tournament_config import TournamentConfig


def _no_champions() -> Dict[Track, Optional[str]]:
    return {track: None for track in TRACK_ORDER}


@dataclass(frozen=True)
class TournamentState:
    """Snapshot of a whole tournament.

    The caller owns the canonical value and replaces it with whatever a
    :class:`~triplethreat.tournament.round_manager.RoundManager` transition
    returns.
    """

    config: TournamentConfig = field(default_factory=TournamentConfig)
    competitors: Tuple[Competitor, ...] = ()
    rounds: Tuple[RoundData, ...] = ()
    phase: str = PHASE_REGISTRATION
    current_round: int = 0
    total_rounds: int = 0
    champion_ids: Dict[Track, Optional[str]] = field(default_factory=_no_champions)
    playoff_seeds: Tuple[str, ...] = ()
    matchmaking_logs: Tuple[MatchmakingLog, ...] = ()

    def all_matches(self) -> List[Match]:
        return [match for round_data in self.rounds for match in round_data.matches]

    def competitor(self, competitor_id: str) -> Optional[Competitor]:
        for competitor in self.competitors:
            if competitor.id == competitor_id:
                return competitor
        return None

    def get_round(self, round_number: int) -> Optional[RoundData]:
        for round_data in self.rounds:
            if round_data.round_number == round_number:
                return round_data
        return None

    @property
    def latest_round(self) -> Optional[RoundData]:
        return self.rounds[-1] if self.rounds else None

    def with_round(self, updated: RoundData) -> "TournamentState":
        """Return a copy with the round of the same number replaced."""
        return replace(
            self,
            rounds=tuple(
                updated if r.round_number == updated.round_number else r
                for r in self.rounds
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole tournament to dictionary."""
        return {
            "config": self.config.to_dict(),
            "competitors": [c.to_dict() for c in self.competitors],
            "rounds": [r.to_dict() for r in self.rounds],
            "phase": self.phase,
            "current_round": self.current_round,
            "total_rounds": self.total_rounds,
            "champion_ids": {t.value: cid for t, cid in self.champion_ids.items()},
            "playoff_seeds": list(self.playoff_seeds),
            "matchmaking_logs": [log.to_dict() for log in self.matchmaking_logs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize a tournament from dictionary."""
        champions = _no_champions()
        champions.update({Track(k): v for k, v in data.get("champion_ids", {}).items()})
        return cls(
            config=TournamentConfig.from_dict(data.get("config", {})),
            competitors=tuple(
                Competitor.from_dict(c) for c in data.get("competitors", [])
            ),
            rounds=tuple(RoundData.from_dict(r) for r in data.get("rounds", [])),
            phase=data.get("phase", PHASE_REGISTRATION),
            current_round=data.get("current_round", 0),
            total_rounds=data.get("total_rounds", 0),
            champion_ids=champions,
            playoff_seeds=tuple(data.get("playoff_seeds", [])),
            matchmaking_logs=tuple(
                MatchmakingLog.from_dict(log) for log in data.get("matchmaking_logs", [])
            ),
        )
