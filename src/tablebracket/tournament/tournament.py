"""Main Tournament class - orchestrates bracket and table operations.

This is the host-facing interface. It owns the current bracket snapshot and
table pool and hands them to the engine and the scheduler.
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

from typing import Any, Dict, List, Optional, Sequence

from tablebracket.brackets import BracketEngine
from tablebracket.constants import DEFAULT_TABLE_COUNT
from tablebracket.controllers.tournament import RoundManager, RoundSummary
from tablebracket.exceptions import TournamentStateException
from tablebracket.models.player import Player
from tablebracket.models.tournament import (
    Bracket,
    Match,
    TablePool,
    TournamentConfig,
)
from tablebracket.scheduling import Assignment, MatchScheduler
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized parts:
    - BracketEngine: builds the bracket and propagates results
    - MatchScheduler: decides which match goes to which table
    - RoundManager: reports round progress

    Every change replaces ``self.bracket`` or ``self.tables`` with a new
    snapshot. When an operation fails the previous snapshot stays in place.
    Automatic table assignment only runs when :meth:`reevaluate` is called.
    """

    def __init__(
        self,
        config: Optional[TournamentConfig] = None,
        table_count: int = DEFAULT_TABLE_COUNT,
        tables: Optional[TablePool] = None,
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        config: Tournament settings, defaults to a double-elimination setup
        table_count: Number of tables when ``tables`` is not given
        tables: Existing table pool

        Raises
        ------
        InvalidConfigurationException: On unusable settings or table count
        """
        self.config = config or TournamentConfig()
        self.config.validate()
        self.engine = BracketEngine.from_config(self.config)
        self.scheduler = MatchScheduler(self.config.lb_aggressiveness)
        self.tables = tables or TablePool.create(table_count)
        self.bracket: Optional[Bracket] = None

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def is_started(self) -> bool:
        return self.bracket is not None

    @property
    def players(self) -> List[Player]:
        if self.bracket is None:
            return []
        return list(self.bracket.players)

    def _require_bracket(self) -> Bracket:
        if self.bracket is None:
            raise TournamentStateException("Tournament has not been started")
        return self.bracket

    # ========== Bracket ==========

    def start(self, players: Sequence[Player]) -> Bracket:
        """Generate the bracket.

        Raises:
            TournamentStateException: If the tournament is already running
            InvalidPlayerDataException: If the roster is too small
            DuplicatePlayerException: If two players share a name
        """
        if self.bracket is not None:
            raise TournamentStateException("Tournament has already been started")
        self.bracket = self.engine.generate(
            players,
            grand_final_mode=self.config.grand_final_mode,
            bracket_type=self.config.bracket_type,
        )
        logger.info(f"Started '{self.name}' with {len(self.bracket.players)} players")
        return self.bracket

    def submit_score(self, match_id: int, score1: int, score2: int) -> Bracket:
        """Record a result. The table hosting the match is freed."""
        self.bracket = self.engine.apply_result(
            self._require_bracket(), match_id, score1, score2
        )
        return self.bracket

    def edit_score(self, match_id: int, score1: int, score2: int) -> Bracket:
        self.bracket = self.engine.edit_result(
            self._require_bracket(), match_id, score1, score2
        )
        return self.bracket

    def undo_score(self, match_id: int) -> Bracket:
        self.bracket = self.engine.undo_result(self._require_bracket(), match_id)
        return self.bracket

    def get_match(self, match_id: int) -> Match:
        return self._require_bracket().get(match_id)

    def round_summary(self) -> List[RoundSummary]:
        return RoundManager(self._require_bracket()).summary()

    def is_complete(self) -> bool:
        return self.bracket is not None and self.engine.is_complete(self.bracket)

    def champion(self) -> Optional[Player]:
        if self.bracket is None:
            return None
        return self.engine.champion(self.bracket)

    def standings(self) -> List[List[Player]]:
        return self.engine.final_standings(self._require_bracket())

    # ========== Tables ==========

    def waiting_matches(self) -> List[Match]:
        return self.scheduler.waiting_matches(self._require_bracket())

    def table_match(self, table_number: int) -> Optional[Match]:
        """Match currently on a table."""
        self.tables.get(table_number)
        if self.bracket is None:
            return None
        return self.bracket.table_occupant(table_number)

    def assign_match(self, table_number: int, match_id: int) -> Bracket:
        self.bracket = self.scheduler.assign(
            self._require_bracket(), self.tables, table_number, match_id
        )
        return self.bracket

    def release_table(self, table_number: int) -> Bracket:
        self.tables.get(table_number)
        self.bracket = self.scheduler.release(self._require_bracket(), table_number)
        return self.bracket

    def recommendations(self) -> List[Assignment]:
        return self.scheduler.recommend(self._require_bracket(), self.tables)

    def reevaluate(self) -> List[Assignment]:
        """Run automatic assignment on the current state.

        Call after every change. Calling again without a change assigns
        nothing new.
        """
        if self.bracket is None:
            return []
        self.bracket, applied = self.scheduler.auto_assign(self.bracket, self.tables)
        for assignment in applied:
            logger.debug(
                f"Auto-assigned {assignment.match.label} to table {assignment.table_number}"
            )
        return applied

    def add_table(self, name: Optional[str] = None) -> TablePool:
        self.tables = self.tables.add_table(name)
        return self.tables

    def remove_table(self, table_number: int) -> TablePool:
        """Remove a table, sending its match back to the waiting list."""
        pool = self.tables.remove_table(table_number)
        if self.bracket is not None:
            self.bracket = self.scheduler.release(self.bracket, table_number)
        self.tables = pool
        return self.tables

    def resize_tables(self, count: int) -> TablePool:
        """Change the number of tables. Matches on dropped tables go back to waiting."""
        pool = self.tables.resize(count)
        if self.bracket is not None:
            for number in self.tables.numbers:
                if pool.find(number) is None:
                    self.bracket = self.scheduler.release(self.bracket, number)
        self.tables = pool
        return self.tables

    def rename_table(self, table_number: int, name: str) -> TablePool:
        self.tables = self.tables.rename_table(table_number, name)
        return self.tables

    def toggle_table_auto_assign(self, table_number: int) -> TablePool:
        self.tables = self.tables.toggle_auto_assign(table_number)
        return self.tables

    def set_global_auto_assign(self, enabled: bool) -> TablePool:
        self.tables = self.tables.set_global_auto_assign(enabled)
        return self.tables

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "config": self.config.to_dict(),
            "tables": self.tables.to_dict(),
            "bracket": self.bracket.to_dict() if self.bracket else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary containing tournament data

        Returns:
            Reconstructed Tournament object
        """
        config = TournamentConfig.from_dict(data.get("config", {}))
        tournament = cls(config=config, tables=TablePool.from_dict(data["tables"]))
        if data.get("bracket"):
            tournament.bracket = Bracket.from_dict(data["bracket"])
        return tournament
