"""Assignment of ready matches to tables.

The scheduler never keeps state between calls. Which match is on which table
is read from ``Match.table`` on the snapshot it is given, so calling it twice
on the same snapshot gives the same answer.
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

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from tablebracket.constants import (
    DEFAULT_LB_AGGRESSIVENESS,
    PRIORITY_BASE,
    PRIORITY_DEFERRED_PENALTY,
    PRIORITY_PARALLEL_OFFSET,
    PRIORITY_ROUND_STEP,
    PRIORITY_WAIT_OFFSET,
)
from tablebracket.controllers.tournament import RoundManager
from tablebracket.exceptions import (
    DoubleAssignmentException,
    InvalidConfigurationException,
    MatchNotReadyException,
)
from tablebracket.models.tournament import Bracket, BracketSide, Match, TablePool
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)

PriorityKey = Tuple[int, float, int, int, int]


@dataclass(frozen=True)
class Selection:
    """Outcome of picking the next match.

    Attributes
    ----------
    match : Match or None
        Chosen match, None when nothing is ready.
    relaxed : bool
        Every ready match had a player already on a table, so the pick was
        made from the unfiltered list.
    excluded : int
        Number of ready matches skipped for having a busy player.
    """

    match: Optional[Match]
    relaxed: bool = False
    excluded: int = 0


@dataclass(frozen=True)
class Assignment:
    table_number: int
    match: Optional[Match]
    relaxed: bool = False


class MatchScheduler:
    """Decides which ready match goes to which free table.

    Example:
        >>> scheduler = MatchScheduler(lb_aggressiveness=1.0)
        >>> bracket, assignments = scheduler.auto_assign(bracket, pool)
    """

    def __init__(self, lb_aggressiveness: float = DEFAULT_LB_AGGRESSIVENESS):
        """Initialize the scheduler.

        Args:
            lb_aggressiveness: Multiplier on losers-bracket scores. Above 1
                favors the losers bracket, below 1 favors the winners bracket.

        Raises:
            InvalidConfigurationException: If the multiplier is not positive
        """
        if not lb_aggressiveness or lb_aggressiveness <= 0:
            raise InvalidConfigurationException(
                f"Losers bracket aggressiveness must be positive, got {lb_aggressiveness!r}"
            )
        self.lb_aggressiveness = lb_aggressiveness

    # ========== Queries ==========

    def ready_matches(self, bracket: Bracket) -> Iterator[Match]:
        """Matches that can start now and are not on a table."""
        for match in bracket.matches():
            if match.is_ready and match.table is None:
                yield match

    def waiting_matches(self, bracket: Bracket) -> List[Match]:
        """Ready matches, most urgent first."""
        rounds = RoundManager(bracket)
        return sorted(
            self.ready_matches(bracket),
            key=lambda m: self.priority(m, bracket, rounds),
        )

    def score(
        self, match: Match, bracket: Bracket, rounds: Optional[RoundManager] = None
    ) -> float:
        """Urgency score of a non-final match. Higher plays first.

        Winners round ``r`` scores ``10000 - 100 r``. Losers rounds slot in
        just below the winners round they run alongside, or below every
        winners round while the winners round they wait for is still open.
        """
        if match.bracket == BracketSide.WINNERS:
            return PRIORITY_BASE - PRIORITY_ROUND_STEP * match.round

        rounds = rounds or RoundManager(bracket)
        r = match.round
        if r == 1:
            value = PRIORITY_BASE - PRIORITY_ROUND_STEP - PRIORITY_PARALLEL_OFFSET
        elif r % 2 == 0:
            value = (
                PRIORITY_BASE
                - PRIORITY_ROUND_STEP * (r // 2 + 1)
                - PRIORITY_PARALLEL_OFFSET
            )
        else:
            waits_for = math.ceil(r / 2)
            value = PRIORITY_BASE - PRIORITY_ROUND_STEP * waits_for - PRIORITY_WAIT_OFFSET
            if not rounds.is_round_complete(BracketSide.WINNERS, waits_for):
                value -= PRIORITY_DEFERRED_PENALTY
        return value * self.lb_aggressiveness

    def priority(
        self, match: Match, bracket: Bracket, rounds: Optional[RoundManager] = None
    ) -> PriorityKey:
        """Sort key for ``match``; lower sorts first.

        Finals form their own tier ahead of everything else. Within a tier,
        higher scores come first, then lower round, match number and id.
        """
        if match.is_final:
            return (0, 0.0, match.round, match.number, match.id)
        return (1, -self.score(match, bracket, rounds), match.round, match.number, match.id)

    def occupied_players(self, bracket: Bracket) -> Set[str]:
        """Names of players currently sitting at a table."""
        busy: Set[str] = set()
        for match in bracket.matches():
            if match.table is not None:
                busy.update(p.name for p in match.players)
        return busy

    def select_next(
        self,
        ready: Iterable[Match],
        occupied_players: Set[str],
        bracket: Bracket,
    ) -> Selection:
        """Pick the most urgent match whose players are both free.

        If every ready match involves a busy player, the most urgent match
        is picked anyway and the selection is marked ``relaxed``.
        """
        rounds = RoundManager(bracket)
        ordered = sorted(ready, key=lambda m: self.priority(m, bracket, rounds))
        if not ordered:
            return Selection(None)

        free = [
            m for m in ordered if not any(p.name in occupied_players for p in m.players)
        ]
        excluded = len(ordered) - len(free)
        if free:
            return Selection(free[0], relaxed=False, excluded=excluded)

        logger.warning(
            f"All {len(ordered)} ready matches have a player at another table; "
            f"falling back to {ordered[0].label}"
        )
        return Selection(ordered[0], relaxed=True, excluded=excluded)

    def free_tables(self, bracket: Bracket, pool: TablePool) -> List[int]:
        busy = {m.table for m in bracket.matches() if m.table is not None}
        return [number for number in pool.numbers if number not in busy]

    # ========== Transitions ==========

    def assign(
        self, bracket: Bracket, pool: TablePool, table_number: int, match_id: int
    ) -> Bracket:
        """Put a ready match on an empty table.

        Returns:
            New bracket with ``Match.table`` set

        Raises:
            TableNotFoundException: If the table does not exist
            MatchNotFoundException: If the match does not exist
            MatchNotReadyException: If the match cannot be played yet
            DoubleAssignmentException: If the table is busy or the match is
                already on a table
        """
        table = pool.get(table_number)
        match = bracket.get(match_id)
        if match.table is not None:
            raise DoubleAssignmentException(
                f"{match.label} is already on table {match.table}"
            )
        if not match.is_ready:
            raise MatchNotReadyException(f"{match.label} is not ready to be played")
        occupant = bracket.table_occupant(table_number)
        if occupant is not None:
            raise DoubleAssignmentException(
                f"{table.name} is already hosting {occupant.label}"
            )

        updated = bracket.copy()
        updated.get(match_id).table = table_number
        logger.info(f"Assigned {match} to {table.name}")
        return updated

    def release(self, bracket: Bracket, table_number: int) -> Bracket:
        """Clear a table. Releasing an empty table changes nothing."""
        occupant = bracket.table_occupant(table_number)
        if occupant is None:
            return bracket
        updated = bracket.copy()
        updated.get(occupant.id).table = None
        logger.info(f"Released table {table_number} ({occupant.label})")
        return updated

    def recommend(self, bracket: Bracket, pool: TablePool) -> List[Assignment]:
        """One suggestion per free table, in table order.

        Each suggestion counts as seated when choosing for the next table.
        """
        ready = list(self.ready_matches(bracket))
        busy = self.occupied_players(bracket)
        assignments = []
        for table_number in self.free_tables(bracket, pool):
            selection = self.select_next(ready, busy, bracket)
            assignments.append(
                Assignment(table_number, selection.match, selection.relaxed)
            )
            if selection.match is not None:
                ready.remove(selection.match)
                busy.update(p.name for p in selection.match.players)
        return assignments

    def auto_assign(
        self, bracket: Bracket, pool: TablePool
    ) -> Tuple[Bracket, List[Assignment]]:
        """Seat matches on free tables that allow automatic assignment.

        Nothing happens while the pool's global switch is off.
        """
        if not pool.global_auto_assign:
            return bracket, []

        eligible = TablePool(
            tables=tuple(t for t in pool.tables if t.auto_assign),
            global_auto_assign=True,
        )
        applied = []
        for assignment in self.recommend(bracket, eligible):
            if assignment.match is None:
                continue
            bracket = self.assign(bracket, pool, assignment.table_number, assignment.match.id)
            applied.append(assignment)
        return bracket, applied
