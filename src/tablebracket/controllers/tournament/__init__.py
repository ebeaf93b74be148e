from tablebracket.controllers.tournament.result_recorder import ResultRecorder
from tablebracket.controllers.tournament.round_manager import (
    RoundManager,
    RoundStatus,
    RoundSummary,
)

__all__ = ["ResultRecorder", "RoundManager", "RoundStatus", "RoundSummary"]
