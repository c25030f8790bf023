"""Type hints used in Triple Threat."""

from typing import Dict, Literal, Optional, Sequence, Tuple

# Tournament phase literals (for type hints)
Phase = Literal[
    "registration", "swiss", "catch_up", "champions_reveal", "playoff_seeding"
]

# Round kind literals
RoundKind = Literal["main", "catch_up"]

# Competitor identity
CompetitorId = str
# A pair of competitor ids
PairIds = Tuple[CompetitorId, CompetitorId]
# All matches played or scheduled so far
MatchHistory = Sequence["Match"]
# Champion per track
ChampionIds = Dict["Track", Optional[CompetitorId]]

#  LocalWords:  PairIds MatchHistory
