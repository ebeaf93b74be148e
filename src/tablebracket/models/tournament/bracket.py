"""Bracket snapshot: every match of one tournament stage."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional

from tablebracket.exceptions import MatchNotFoundException
from tablebracket.models.player.base_player import Player
from tablebracket.models.tournament.match import (
    BracketSide,
    BracketType,
    GrandFinalMode,
    Match,
)


@dataclass
class Bracket:
    """All matches of a tournament, grouped by bracket side and round.

    Attributes
    ----------
    bracket_type : BracketType
        Single or double elimination.
    grand_final_mode : GrandFinalMode
        Whether a bracket reset may be played.
    bracket_size : int
        Smallest power of two that holds every player.
    players : list of Player
        Entrants in seeding order (byes excluded).
    winners : list of list of Match
        Winners-bracket rounds, ``winners[0]`` is round 1.
    losers : list of list of Match
        Losers-bracket rounds. Empty for single elimination.
    finals : list of Match
        Grand final, followed by the reset when the mode has one.
    loser_orderings : list of str
        Routing ordering picked for each winners round from round 2 on.
    """

    bracket_type: BracketType
    grand_final_mode: GrandFinalMode
    bracket_size: int
    players: List[Player] = field(default_factory=list)
    winners: List[List[Match]] = field(default_factory=list)
    losers: List[List[Match]] = field(default_factory=list)
    finals: List[Match] = field(default_factory=list)
    loser_orderings: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._index: Dict[int, Match] = {m.id: m for m in self.matches()}

    @property
    def is_double(self) -> bool:
        return self.bracket_type == BracketType.DOUBLE

    @property
    def winners_round_count(self) -> int:
        return len(self.winners)

    @property
    def losers_round_count(self) -> int:
        return len(self.losers)

    def matches(self) -> Iterator[Match]:
        """Iterate over all matches in id order."""
        for round_matches in self.winners:
            yield from round_matches
        for round_matches in self.losers:
            yield from round_matches
        yield from self.finals

    def find(self, match_id: int) -> Optional[Match]:
        return self._index.get(match_id)

    def get(self, match_id: int) -> Match:
        """Get a match by id.

        Raises:
            MatchNotFoundException: If no match has this id
        """
        match = self._index.get(match_id)
        if match is None:
            raise MatchNotFoundException(match_id)
        return match

    def round_matches(self, side: BracketSide, round_number: int) -> List[Match]:
        """Matches of one round, or an empty list if the round does not exist."""
        if side == BracketSide.FINALS:
            return [m for m in self.finals if m.round == round_number]
        rounds = self.winners if side == BracketSide.WINNERS else self.losers
        if 1 <= round_number <= len(rounds):
            return rounds[round_number - 1]
        return []

    @property
    def grand_final(self) -> Optional[Match]:
        for match in self.finals:
            if match.is_grand_final:
                return match
        return None

    @property
    def reset_match(self) -> Optional[Match]:
        for match in self.finals:
            if match.is_grand_final_reset:
                return match
        return None

    @property
    def deciding_match(self) -> Match:
        """The match whose winner wins the tournament if it is the last one played."""
        if self.is_double:
            return self.grand_final
        return self.winners[-1][0]

    def table_occupant(self, table_number: int) -> Optional[Match]:
        """Match currently on ``table_number``, derived from match state."""
        for match in self.matches():
            if match.table == table_number:
                return match
        return None

    def copy(self) -> "Bracket":
        """Copy with independent Match objects. Players are shared."""
        return Bracket(
            bracket_type=self.bracket_type,
            grand_final_mode=self.grand_final_mode,
            bracket_size=self.bracket_size,
            players=list(self.players),
            winners=[[replace(m) for m in r] for r in self.winners],
            losers=[[replace(m) for m in r] for r in self.losers],
            finals=[replace(m) for m in self.finals],
            loser_orderings=list(self.loser_orderings),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bracket to dictionary."""
        return {
            "bracket_type": self.bracket_type.value,
            "grand_final_mode": self.grand_final_mode.value,
            "bracket_size": self.bracket_size,
            "players": [p.to_dict() for p in self.players],
            "winners": [[m.to_dict() for m in r] for r in self.winners],
            "losers": [[m.to_dict() for m in r] for r in self.losers],
            "finals": [m.to_dict() for m in self.finals],
            "loser_orderings": list(self.loser_orderings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bracket":
        """Deserialize bracket from dictionary."""
        return cls(
            bracket_type=BracketType(data["bracket_type"]),
            grand_final_mode=GrandFinalMode(data["grand_final_mode"]),
            bracket_size=data["bracket_size"],
            players=[Player.from_dict(p) for p in data.get("players", [])],
            winners=[[Match.from_dict(m) for m in r] for r in data.get("winners", [])],
            losers=[[Match.from_dict(m) for m in r] for r in data.get("losers", [])],
            finals=[Match.from_dict(m) for m in data.get("finals", [])],
            loser_orderings=list(data.get("loser_orderings", [])),
        )
