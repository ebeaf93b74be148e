"""Bracket engine: generation and result propagation.

Every public operation takes a bracket snapshot and returns a new one. The
input snapshot is never modified, also when an operation fails.
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

import random
from typing import List, Optional, Sequence

from tablebracket.brackets.builder import build_bracket
from tablebracket.controllers.tournament import ResultRecorder
from tablebracket.exceptions import TournamentStateException
from tablebracket.models.player import Player, is_real_player, validate_roster
from tablebracket.models.tournament import (
    Bracket,
    BracketType,
    GrandFinalMode,
    TournamentConfig,
)
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)


class BracketEngine:
    """Generates brackets and applies results to them.

    Example:
        >>> engine = BracketEngine(race_winners=7, race_losers=5)
        >>> bracket = engine.generate(create_players(["A", "B", "C", "D"]))
        >>> bracket = engine.apply_result(bracket, 1, 7, 3)
    """

    def __init__(
        self,
        race_winners: Optional[int] = None,
        race_losers: Optional[int] = None,
        shuffle: bool = False,
        seed: Optional[int] = None,
    ):
        """Initialize the engine.

        Args:
            race_winners: Race limit for winners and grand final matches, None
                to accept any decisive score
            race_losers: Race limit for losers and reset matches
            shuffle: Shuffle the roster before seeding
            seed: Seed for the shuffle
        """
        self.recorder = ResultRecorder(race_winners, race_losers)
        self.shuffle = shuffle
        self.seed = seed

    @classmethod
    def from_config(cls, config: TournamentConfig) -> "BracketEngine":
        return cls(
            race_winners=config.race_winners,
            race_losers=config.race_losers,
            shuffle=config.shuffle_players,
            seed=config.seed,
        )

    # ========== Generation ==========

    def generate(
        self,
        players: Sequence[Player],
        grand_final_mode: GrandFinalMode = GrandFinalMode.SINGLE_RESET,
        bracket_type: BracketType = BracketType.DOUBLE,
    ) -> Bracket:
        """Build a bracket for ``players`` and resolve first-round byes.

        Args:
            players: At least two players with distinct names
            grand_final_mode: Whether a reset match is created
            bracket_type: Single or double elimination

        Returns:
            The new bracket

        Raises:
            InvalidPlayerDataException: If fewer than two players are given
            DuplicatePlayerException: If two players share a name
        """
        roster = validate_roster(players)
        if self.shuffle:
            random.Random(self.seed).shuffle(roster)

        bracket = build_bracket(roster, bracket_type, grand_final_mode)
        self.recorder.resolve_all_byes(bracket)
        logger.info(
            f"Generated {bracket_type.value} elimination bracket for "
            f"{len(roster)} players (size {bracket.bracket_size})"
        )
        return bracket

    # ========== Results ==========

    def apply_result(
        self, bracket: Bracket, match_id: int, score1: int, score2: int
    ) -> Bracket:
        """Record the result of a ready match.

        Returns:
            New bracket with the winner and loser advanced

        Raises:
            MatchNotFoundException: If the match does not exist
            DuplicateResultException: If the match is already decided
            TournamentStateException: If the match is void
            MissingOpponentException: If a slot has no real player
            InvalidResultException: If the scores are tied, negative or
                break the race limit
            SlotConflictException: If a target slot holds another player
        """
        updated = bracket.copy()
        match = updated.get(match_id)
        self.recorder.validate_new_result(match, score1, score2)
        self.recorder.record(updated, match, score1, score2)
        return updated

    def edit_result(
        self, bracket: Bracket, match_id: int, score1: int, score2: int
    ) -> Bracket:
        """Change the result of a played match.

        With the same winner only the scores change. With a different winner
        the previous advancement is taken back first.

        Raises:
            MatchNotFoundException: If the match does not exist
            TournamentStateException: If the match has not been played
            InvalidResultException: If the scores are invalid
            ResultConflictException: If a downstream match was already played
        """
        updated = bracket.copy()
        match = updated.get(match_id)
        if not match.is_played:
            raise TournamentStateException(
                f"Match {match.label} has no played result to edit"
            )
        self.recorder.validate_scores(match, score1, score2)

        new_winner = match.slot1 if score1 > score2 else match.slot2
        if new_winner == match.winner:
            match.score1 = score1
            match.score2 = score2
            logger.info(f"{match.label}: score corrected to {score1}-{score2}")
            return updated

        previous_winner = match.winner
        self.recorder.clear(updated, match)
        self.recorder.record(updated, match, score1, score2)
        logger.info(f"{match.label}: winner changed from {previous_winner} to {new_winner}")
        return updated

    def undo_result(self, bracket: Bracket, match_id: int) -> Bracket:
        """Remove the result of a played match.

        Raises:
            MatchNotFoundException: If the match does not exist
            TournamentStateException: If the match has not been played
            ResultConflictException: If a downstream match was already played
        """
        updated = bracket.copy()
        match = updated.get(match_id)
        if not match.is_played:
            raise TournamentStateException(
                f"Match {match.label} has no played result to undo"
            )
        self.recorder.clear(updated, match)
        logger.info(f"{match.label}: result undone")
        return updated

    # ========== Completion ==========

    def is_complete(self, bracket: Bracket) -> bool:
        """Whether the tournament has been decided.

        Every match that will be played must be decided, and the reset must
        be void exactly when the winners-bracket champion won the grand final.
        """
        for match in bracket.matches():
            if not match.is_void and not match.is_decided:
                return False

        grand_final = bracket.grand_final
        reset = bracket.reset_match
        if grand_final is not None and reset is not None:
            champion_held = grand_final.winner == grand_final.slot1
            if reset.is_void != champion_held:
                return False
        return True

    def champion(self, bracket: Bracket) -> Optional[Player]:
        """Tournament winner, or None while undecided."""
        if not self.is_complete(bracket):
            return None
        reset = bracket.reset_match
        if reset is not None and not reset.is_void:
            return reset.winner
        return bracket.deciding_match.winner

    def final_standings(self, bracket: Bracket) -> List[List[Player]]:
        """Placement groups, best first.

        Players knocked out in the same round share a place. The first two
        groups are the champion and the runner-up once the tournament is
        complete. Players still alive are not listed.
        """
        standings: List[List[Player]] = []
        champion = self.champion(bracket)
        if champion is not None:
            standings.append([champion])
            runner_up = self._runner_up(bracket, champion)
            if runner_up is not None:
                standings.append([runner_up])

        rounds = bracket.losers if bracket.is_double else bracket.winners[:-1]
        for matches in reversed(rounds):
            out = [m.loser for m in matches if m.is_decided and is_real_player(m.loser)]
            if out:
                standings.append(sorted(out, key=lambda p: p.name))
        return standings

    def _runner_up(self, bracket: Bracket, champion: Player) -> Optional[Player]:
        deciding = bracket.deciding_match
        reset = bracket.reset_match
        if reset is not None and not reset.is_void:
            deciding = reset
        for player in deciding.players:
            if player != champion:
                return player
        return None

