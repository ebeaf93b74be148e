"""Round management for brackets.

This module answers round-level questions about a bracket snapshot: which
rounds are finished, which are being played and which round a bracket side
is currently on.
"""

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
from typing import List, Optional

from tablebracket.models.tournament import Bracket, BracketSide, Match


class RoundStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PLAY = "in_play"
    COMPLETE = "complete"


@dataclass
class RoundSummary:
    side: BracketSide
    round_number: int
    status: RoundStatus
    decided: int
    total: int

    @property
    def label(self) -> str:
        return f"{self.side.label} R{self.round_number}"


def _is_settled(match: Match) -> bool:
    return match.is_decided or match.is_void


class RoundManager:
    """Reports round progress for one bracket snapshot.

    This class is responsible for:
    - Telling whether a round is complete
    - Telling which round each bracket side is on
    - Summarizing progress for display
    """

    def __init__(self, bracket: Bracket):
        """Initialize the round manager.

        Args:
            bracket: Snapshot to report on. It is only read.
        """
        self.bracket = bracket

    def _rounds(self, side: BracketSide) -> List[List[Match]]:
        if side == BracketSide.WINNERS:
            return self.bracket.winners
        if side == BracketSide.LOSERS:
            return self.bracket.losers
        return [self.bracket.round_matches(side, 1), self.bracket.round_matches(side, 2)]

    def status(self, side: BracketSide, round_number: int) -> RoundStatus:
        """Status of one round. A round that does not exist counts as complete."""
        matches = self.bracket.round_matches(side, round_number)
        if all(_is_settled(m) for m in matches):
            return RoundStatus.COMPLETE
        if any(_is_settled(m) or m.is_ready or m.table is not None for m in matches):
            return RoundStatus.IN_PLAY
        return RoundStatus.NOT_STARTED

    def is_round_complete(self, side: BracketSide, round_number: int) -> bool:
        return self.status(side, round_number) == RoundStatus.COMPLETE

    def current_round(self, side: BracketSide) -> Optional[int]:
        """First round of ``side`` that is not complete, or None when all are."""
        for round_number, matches in enumerate(self._rounds(side), start=1):
            if matches and not all(_is_settled(m) for m in matches):
                return round_number
        return None

    def summary(self) -> List[RoundSummary]:
        """Progress of every round, winners first, then losers, then finals."""
        summaries = []
        for side in (BracketSide.WINNERS, BracketSide.LOSERS, BracketSide.FINALS):
            for round_number, matches in enumerate(self._rounds(side), start=1):
                if not matches:
                    continue
                summaries.append(
                    RoundSummary(
                        side=side,
                        round_number=round_number,
                        status=self.status(side, round_number),
                        decided=sum(1 for m in matches if _is_settled(m)),
                        total=len(matches),
                    )
                )
        return summaries
