from triplethreat.models.competitor import Competitor, TrackStats
from triplethreat.models.enums import TRACK_NAMES, TRACK_ORDER, Track, other_tracks
from triplethreat.models.match import Match
from triplethreat.models.matchmaking_log import (
    MatchmakingLog,
    MatchmakingLogEntry,
    SkippedTrack,
)
from triplethreat.models.round_data import RoundData
from triplethreat.models.tournament_config import (
    TournamentConfig,
    calculate_total_rounds,
)
from triplethreat.models.tournament_state import TournamentState

__all__ = [
    "Competitor",
    "TrackStats",
    "Track",
    "TRACK_ORDER",
    "TRACK_NAMES",
    "other_tracks",
    "Match",
    "MatchmakingLog",
    "MatchmakingLogEntry",
    "SkippedTrack",
    "RoundData",
    "TournamentConfig",
    "calculate_total_rounds",
    "TournamentState",
]
