from tablebracket.models.player import BYE, Player
from tablebracket.models.tournament import (
    Bracket,
    BracketSide,
    BracketType,
    GrandFinalMode,
    Match,
    SlotRef,
    TablePool,
    TableSettings,
    TournamentConfig,
)

__all__ = [
    "BYE",
    "Player",
    "Bracket",
    "BracketSide",
    "BracketType",
    "GrandFinalMode",
    "Match",
    "SlotRef",
    "TablePool",
    "TableSettings",
    "TournamentConfig",
]
