"""TournamentConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from tablebracket.constants import (
    DEFAULT_BRACKET_TYPE,
    DEFAULT_GAME_TYPE,
    DEFAULT_GRAND_FINAL_MODE,
    DEFAULT_LB_AGGRESSIVENESS,
    DEFAULT_RACE_LOSERS,
    DEFAULT_RACE_WINNERS,
)
from tablebracket.exceptions import InvalidConfigurationException
from tablebracket.models.tournament.match import BracketType, GrandFinalMode


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    bracket_type : BracketType
        Single or double elimination.
    grand_final_mode : GrandFinalMode
        Whether the losers-bracket champion can force a reset.
    race_winners : int or None
        Racks needed to win a winners-bracket or grand final match. None
        disables race checks.
    race_losers : int or None
        Racks needed to win a losers-bracket or reset match. Falls back to
        ``race_winners`` when None.
    lb_aggressiveness : float
        Multiplier on losers-bracket scheduling scores.
    shuffle_players : bool
        Shuffle the roster before seeding.
    seed : int or None
        Seed for the shuffle, for reproducible brackets.
    description : str
        Free text shown to the host.
    game_type : str
        Game played, e.g. "Nine Ball".
    """

    name: str = "Untitled Tournament"
    bracket_type: BracketType = BracketType(DEFAULT_BRACKET_TYPE)
    grand_final_mode: GrandFinalMode = GrandFinalMode(DEFAULT_GRAND_FINAL_MODE)
    race_winners: Optional[int] = DEFAULT_RACE_WINNERS
    race_losers: Optional[int] = DEFAULT_RACE_LOSERS
    lb_aggressiveness: float = DEFAULT_LB_AGGRESSIVENESS
    shuffle_players: bool = False
    seed: Optional[int] = None
    description: str = ""
    game_type: str = DEFAULT_GAME_TYPE

    def validate(self) -> None:
        """Check the settings are usable.

        Raises:
            InvalidConfigurationException: On a non-positive race or
                aggressiveness
        """
        for label, race in (("Winners race", self.race_winners), ("Losers race", self.race_losers)):
            if race is None:
                continue
            if isinstance(race, bool) or not isinstance(race, int) or race <= 0:
                raise InvalidConfigurationException(
                    f"{label} must be a positive whole number, got {race!r}"
                )
        if not self.lb_aggressiveness or self.lb_aggressiveness <= 0:
            raise InvalidConfigurationException(
                f"Losers bracket aggressiveness must be positive, got {self.lb_aggressiveness!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "bracket_type": self.bracket_type.value,
            "grand_final_mode": self.grand_final_mode.value,
            "race_winners": self.race_winners,
            "race_losers": self.race_losers,
            "lb_aggressiveness": self.lb_aggressiveness,
            "shuffle_players": self.shuffle_players,
            "seed": self.seed,
            "description": self.description,
            "game_type": self.game_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            bracket_type=BracketType(data.get("bracket_type", DEFAULT_BRACKET_TYPE)),
            grand_final_mode=GrandFinalMode(
                data.get("grand_final_mode", DEFAULT_GRAND_FINAL_MODE)
            ),
            race_winners=data.get("race_winners", DEFAULT_RACE_WINNERS),
            race_losers=data.get("race_losers", DEFAULT_RACE_LOSERS),
            lb_aggressiveness=data.get("lb_aggressiveness", DEFAULT_LB_AGGRESSIVENESS),
            shuffle_players=data.get("shuffle_players", False),
            seed=data.get("seed"),
            description=data.get("description", ""),
            game_type=data.get("game_type", DEFAULT_GAME_TYPE),
        )
