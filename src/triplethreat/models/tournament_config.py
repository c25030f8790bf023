"""TournamentConfig data class."""

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

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from triplethreat.constants import (
    CHAMPION_BONUS,
    COMPETITORS_PER_ROUND,
    DOMINANT_WIN_POINTS,
    MATCHES_PER_TRACK,
    MAX_COMPETITORS,
    MIN_COMPETITORS,
    NUM_TRACKS,
    PLAYOFF_SIZE,
    WIN_POINTS,
)
from triplethreat.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)


def calculate_total_rounds(competitor_count: int) -> int:
    """Rounds needed for every competitor to reach the full quota.

    Each round seats six competitors (three tracks, two per track).
    """
    target_matches = MATCHES_PER_TRACK * NUM_TRACKS
    return math.ceil(competitor_count * target_matches / COMPETITORS_PER_ROUND)


@dataclass(frozen=True)
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    min_competitors : int
        Smallest roster the tournament can start with.
    max_competitors : int
        Largest roster the tournament can start with.
    win_points : int
        Points for a regular win.
    dominant_win_points : int
        Points for a dominant win.
    champion_bonus : int
        Points added to each track champion at the reveal.
    playoff_size : int
        Competitors seeded into the playoffs.
    """

    name: str = "Triple Threat"
    min_competitors: int = MIN_COMPETITORS
    max_competitors: int = MAX_COMPETITORS
    win_points: int = WIN_POINTS
    dominant_win_points: int = DOMINANT_WIN_POINTS
    champion_bonus: int = CHAMPION_BONUS
    playoff_size: int = PLAYOFF_SIZE

    def __post_init__(self) -> None:
        if self.min_competitors < 2:
            raise InvalidConfigurationException(
                f"min_competitors must be at least 2, got {self.min_competitors}"
            )
        if self.max_competitors < self.min_competitors:
            raise InvalidConfigurationException(
                f"max_competitors ({self.max_competitors}) is below "
                f"min_competitors ({self.min_competitors})"
            )
        if self.win_points <= 0 or self.dominant_win_points < self.win_points:
            raise InvalidConfigurationException(
                "Points must satisfy 0 < win_points <= dominant_win_points"
            )
        if self.champion_bonus < 0 or self.playoff_size < 0:
            raise InvalidConfigurationException(
                "champion_bonus and playoff_size cannot be negative"
            )

    def points_for(self, is_dominant: bool) -> int:
        return self.dominant_win_points if is_dominant else self.win_points

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "min_competitors": self.min_competitors,
            "max_competitors": self.max_competitors,
            "win_points": self.win_points,
            "dominant_win_points": self.dominant_win_points,
            "champion_bonus": self.champion_bonus,
            "playoff_size": self.playoff_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Triple Threat"),
            min_competitors=data.get("min_competitors", MIN_COMPETITORS),
            max_competitors=data.get("max_competitors", MAX_COMPETITORS),
            win_points=data.get("win_points", WIN_POINTS),
            dominant_win_points=data.get("dominant_win_points", DOMINANT_WIN_POINTS),
            champion_bonus=data.get("champion_bonus", CHAMPION_BONUS),
            playoff_size=data.get("playoff_size", PLAYOFF_SIZE),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TournamentConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise MissingConfigurationException(f"Config file not found: {path}")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidConfigurationException(
                f"Config file {path} is not valid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Config file {path} must contain a JSON object"
            )
        return cls.from_dict(data)
