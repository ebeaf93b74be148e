from tablebracket.brackets.builder import build_bracket
from tablebracket.brackets.engine import BracketEngine
from tablebracket.brackets.loser_routing import (
    LoserRouting,
    could_have_met,
    plan_loser_routing,
)

__all__ = [
    "BracketEngine",
    "LoserRouting",
    "build_bracket",
    "could_have_met",
    "plan_loser_routing",
]
