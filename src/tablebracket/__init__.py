"""Table Bracket: single and double elimination brackets with table scheduling."""

# Table Bracket
# Copyright (C) 2025  Table Bracket developers
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

from tablebracket.brackets import BracketEngine
from tablebracket.models import (
    BYE,
    Bracket,
    BracketSide,
    BracketType,
    GrandFinalMode,
    Match,
    Player,
    TablePool,
    TournamentConfig,
)
from tablebracket.scheduling import MatchScheduler
from tablebracket.tournament import Tournament

__version__ = "0.1.0"

__all__ = [
    "BYE",
    "Bracket",
    "BracketEngine",
    "BracketSide",
    "BracketType",
    "GrandFinalMode",
    "Match",
    "MatchScheduler",
    "Player",
    "TablePool",
    "Tournament",
    "TournamentConfig",
]
