"""Match data class and bracket enums."""

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
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from tablebracket.constants import (
    BRACKET_LABELS,
    DOUBLE_ELIMINATION,
    FINALS,
    GRAND_FINAL_NO_RESET,
    GRAND_FINAL_SINGLE_RESET,
    LOSERS,
    SINGLE_ELIMINATION,
    WINNERS,
)
from tablebracket.models.player.base_player import Player, is_bye, is_real_player


class BracketSide(str, Enum):
    """Which part of the bracket a match belongs to."""

    WINNERS = WINNERS
    LOSERS = LOSERS
    FINALS = FINALS

    @property
    def label(self) -> str:
        return BRACKET_LABELS[self.value]


class BracketType(str, Enum):
    SINGLE = SINGLE_ELIMINATION
    DOUBLE = DOUBLE_ELIMINATION


class GrandFinalMode(str, Enum):
    """How the grand final is played.

    SINGLE_RESET gives the losers-bracket champion a second match (the
    "bracket reset") when they win the first grand final.
    """

    SINGLE_RESET = GRAND_FINAL_SINGLE_RESET
    NO_RESET = GRAND_FINAL_NO_RESET


class SlotRef(NamedTuple):
    """Target of an advancing player: a match id and slot (1 or 2)."""

    match_id: int
    slot: int

    def to_list(self):
        return [self.match_id, self.slot]


def _slot_ref(data) -> Optional[SlotRef]:
    if data is None:
        return None
    return SlotRef(int(data[0]), int(data[1]))


def _player(data) -> Optional[Player]:
    if data is None:
        return None
    return Player.from_dict(data)


@dataclass
class Match:
    """A single match of the bracket.

    Attributes
    ----------
    id : int
        Unique, stable match id.
    bracket : BracketSide
        Winners, losers or finals.
    round : int
        1-based round within its bracket side.
    number : int
        1-based position within its round.
    slot1, slot2 : Player or None
        Participants. ``BYE`` for a bye, None while unresolved.
    winner : Player or None
        None until the match is decided.
    score1, score2 : int or None
        Racks won by each slot. Only set for matches decided by play.
    winner_to, loser_to : SlotRef or None
        Where the winner and loser advance. Fixed at generation.
    is_grand_final, is_grand_final_reset : bool
        Grand final markers.
    is_void : bool
        The match will never be played (unneeded reset, bye-vs-bye).
    table : int or None
        Table number hosting the match while it is in play.
    """

    id: int
    bracket: BracketSide
    round: int
    number: int
    slot1: Optional[Player] = None
    slot2: Optional[Player] = None
    winner: Optional[Player] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    winner_to: Optional[SlotRef] = None
    loser_to: Optional[SlotRef] = None
    is_grand_final: bool = False
    is_grand_final_reset: bool = False
    is_void: bool = False
    table: Optional[int] = None

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    @property
    def is_played(self) -> bool:
        """Decided over the table, not by a bye."""
        return self.winner is not None and self.score1 is not None

    @property
    def is_ready(self) -> bool:
        """Two real players are known and the match still has to be played."""
        return (
            is_real_player(self.slot1)
            and is_real_player(self.slot2)
            and self.winner is None
            and not self.is_void
        )

    @property
    def is_final(self) -> bool:
        return self.is_grand_final or self.is_grand_final_reset

    @property
    def has_bye(self) -> bool:
        return is_bye(self.slot1) or is_bye(self.slot2)

    @property
    def loser(self) -> Optional[Player]:
        if self.winner is None:
            return None
        if self.winner == self.slot1:
            return self.slot2
        return self.slot1

    @property
    def players(self) -> Tuple[Player, ...]:
        """Real players currently in the match."""
        return tuple(p for p in (self.slot1, self.slot2) if is_real_player(p))

    @property
    def label(self) -> str:
        if self.is_grand_final_reset:
            return "GF Reset"
        if self.is_grand_final:
            return "GF"
        return f"{self.bracket.label} R{self.round} #{self.number}"

    def get_slot(self, slot: int) -> Optional[Player]:
        return self.slot1 if slot == 1 else self.slot2

    def set_slot(self, slot: int, player: Optional[Player]) -> None:
        if slot == 1:
            self.slot1 = player
        else:
            self.slot2 = player

    def clear_result(self) -> None:
        self.winner = None
        self.score1 = None
        self.score2 = None

    def __str__(self) -> str:
        left = self.slot1.name if self.slot1 else "TBD"
        right = self.slot2.name if self.slot2 else "TBD"
        text = f"{self.label}: {left} vs {right}"
        if self.is_played:
            text += f" ({self.score1}-{self.score2})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "bracket": self.bracket.value,
            "round": self.round,
            "number": self.number,
            "slot1": self.slot1.to_dict() if self.slot1 else None,
            "slot2": self.slot2.to_dict() if self.slot2 else None,
            "winner": self.winner.to_dict() if self.winner else None,
            "score1": self.score1,
            "score2": self.score2,
            "winner_to": self.winner_to.to_list() if self.winner_to else None,
            "loser_to": self.loser_to.to_list() if self.loser_to else None,
            "is_grand_final": self.is_grand_final,
            "is_grand_final_reset": self.is_grand_final_reset,
            "is_void": self.is_void,
            "table": self.table,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            bracket=BracketSide(data["bracket"]),
            round=data["round"],
            number=data["number"],
            slot1=_player(data.get("slot1")),
            slot2=_player(data.get("slot2")),
            winner=_player(data.get("winner")),
            score1=data.get("score1"),
            score2=data.get("score2"),
            winner_to=_slot_ref(data.get("winner_to")),
            loser_to=_slot_ref(data.get("loser_to")),
            is_grand_final=data.get("is_grand_final", False),
            is_grand_final_reset=data.get("is_grand_final_reset", False),
            is_void=data.get("is_void", False),
            table=data.get("table"),
        )
