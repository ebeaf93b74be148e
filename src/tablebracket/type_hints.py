"""Type hints used in Table Bracket."""

from typing import Dict, List, Literal, Optional, Tuple

# Bracket side literals (for serialized data)
BracketSideName = Literal["winners", "losers", "finals"]
BracketTypeName = Literal["single", "double"]
GrandFinalModeName = Literal["single_reset", "no_reset"]

# Which side of a match a player occupies
SlotNumber = Literal[1, 2]

# Possible origin of a losers-bracket player: (winners round 1 match index, drop round)
Origin = Tuple[int, int]

# Serialized snapshot data
MatchData = Dict[str, object]
BracketData = Dict[str, object]

MaybePlayer = Optional["Player"]
Players = List["Player"]

#  LocalWords:  MatchData BracketData
