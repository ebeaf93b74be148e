from tablebracket.models.tournament.bracket import Bracket
from tablebracket.models.tournament.match import (
    BracketSide,
    BracketType,
    GrandFinalMode,
    Match,
    SlotRef,
)
from tablebracket.models.tournament.tables import TablePool, TableSettings
from tablebracket.models.tournament.tournament_config import TournamentConfig

__all__ = [
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
