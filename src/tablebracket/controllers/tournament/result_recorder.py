"""Result recording and validation for brackets.

This module handles recording match results with proper validation, moving
players along the bracket links and taking results back again.
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

from typing import Optional

from tablebracket.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    MissingOpponentException,
    ResultConflictException,
    SlotConflictException,
    TournamentStateException,
)
from tablebracket.models.player import BYE, Player, is_bye, is_real_player
from tablebracket.models.tournament import Bracket, BracketSide, Match, SlotRef
from tablebracket.utils import setup_logger
from tablebracket.utils.validation import validate_scores

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating scores against the race limits
    - Advancing winners and losers along the bracket links
    - Resolving byes as soon as they meet a known slot
    - Retracting results, refusing when a played match would change

    The recorder mutates the bracket it is given. Callers pass a copy.
    """

    def __init__(
        self, race_winners: Optional[int] = None, race_losers: Optional[int] = None
    ):
        """Initialize the result recorder.

        Args:
            race_winners: Racks needed in winners and grand final matches, or
                None for no race check
            race_losers: Racks needed in losers and reset matches, falls back
                to ``race_winners``
        """
        self.race_winners = race_winners
        self.race_losers = race_losers

    def race_for(self, match: Match) -> Optional[int]:
        """Race limit that applies to ``match``."""
        if match.bracket == BracketSide.LOSERS or match.is_grand_final_reset:
            return self.race_losers or self.race_winners
        return self.race_winners

    # ========== Validation ==========

    def validate_scores(self, match: Match, score1: int, score2: int) -> None:
        """Check a score line for ``match``.

        Raises:
            InvalidResultException: If the scores are invalid for this match
        """
        result = validate_scores(score1, score2, self.race_for(match))
        if not result:
            logger.error(f"Rejected score for {match.label}: {result.error_message}")
            raise InvalidResultException(f"{match.label}: {result.error_message}")

    def validate_new_result(self, match: Match, score1: int, score2: int) -> None:
        """Check that ``match`` can take a first result.

        Raises:
            DuplicateResultException: If the match is already decided
            TournamentStateException: If the match is void
            MissingOpponentException: If a slot has no real player
            InvalidResultException: If the scores are invalid
        """
        if match.is_void:
            logger.error(f"Cannot record a result for void match {match.label}")
            raise TournamentStateException(f"Match {match.label} will not be played")
        if match.is_decided:
            logger.error(f"Result for {match.label} is already recorded")
            raise DuplicateResultException(
                f"Match {match.label} already has a result; edit it instead"
            )
        if not (is_real_player(match.slot1) and is_real_player(match.slot2)):
            logger.error(f"Cannot record {match.label}: opponent not known yet")
            raise MissingOpponentException(
                f"Match {match.label} does not have two players yet"
            )
        self.validate_scores(match, score1, score2)

    # ========== Recording ==========

    def record(self, bracket: Bracket, match: Match, score1: int, score2: int) -> None:
        """Store a validated result and advance both players."""
        match.score1 = score1
        match.score2 = score2
        match.winner = match.slot1 if score1 > score2 else match.slot2
        match.table = None
        logger.info(
            f"{match.label}: {match.winner} beat {match.loser} "
            f"{max(score1, score2)}-{min(score1, score2)}"
        )
        self.advance(bracket, match)

    def advance(self, bracket: Bracket, match: Match) -> None:
        """Move the winner and loser of a decided match to their next slots."""
        if match.is_grand_final:
            self._settle_reset(bracket, match)
            return
        if match.winner_to is not None:
            self.place(bracket, match.winner_to, match.winner)
        if match.loser_to is not None:
            self.place(bracket, match.loser_to, match.loser)

    def place(self, bracket: Bracket, ref: SlotRef, player: Player) -> None:
        """Put ``player`` into a slot and resolve a bye the move completes.

        Raises:
            SlotConflictException: If the slot holds a different player
        """
        target = bracket.get(ref.match_id)
        current = target.get_slot(ref.slot)
        if current is not None and current != player:
            raise SlotConflictException(
                f"Cannot place {player} into {target.label} slot {ref.slot}: "
                f"already holds {current}"
            )
        target.set_slot(ref.slot, player)
        self.resolve_bye(bracket, target)

    def resolve_bye(self, bracket: Bracket, match: Match) -> None:
        """Decide a match automatically when a bye meets a known slot.

        A bye against a bye is void and passes a bye on.
        """
        if match.is_decided or match.slot1 is None or match.slot2 is None:
            return
        if not match.has_bye:
            return
        if is_bye(match.slot1) and is_bye(match.slot2):
            match.winner = BYE
            match.is_void = True
            logger.debug(f"{match.label}: bye against bye, match void")
        else:
            match.winner = match.slot2 if is_bye(match.slot1) else match.slot1
            logger.debug(f"{match.label}: {match.winner} advances on a bye")
        self.advance(bracket, match)

    def resolve_all_byes(self, bracket: Bracket) -> None:
        for match in list(bracket.matches()):
            self.resolve_bye(bracket, match)

    def _settle_reset(self, bracket: Bracket, grand_final: Match) -> None:
        reset = bracket.reset_match
        if reset is None:
            return
        if grand_final.winner == grand_final.slot2:
            reset.slot1 = grand_final.slot1
            reset.slot2 = grand_final.slot2
            reset.is_void = False
            logger.info(f"{grand_final.winner} forces a bracket reset")
        else:
            reset.is_void = True

    # ========== Retraction ==========

    def retract(self, bracket: Bracket, match: Match) -> None:
        """Take back everything a decided match pushed downstream.

        Downstream matches that were decided by a bye or not decided at all
        are unwound recursively. The match's own result is left for the
        caller to clear.

        Raises:
            ResultConflictException: If a downstream match was already played
        """
        if match.is_grand_final:
            self._retract_reset(bracket, match)
            return
        if match.winner_to is not None:
            self._remove(bracket, match, match.winner_to, match.winner)
        if match.loser_to is not None:
            self._remove(bracket, match, match.loser_to, match.loser)

    def _remove(self, bracket: Bracket, source: Match, ref: SlotRef, player) -> None:
        target = bracket.get(ref.match_id)
        if target.get_slot(ref.slot) != player:
            return
        if target.is_played:
            logger.error(
                f"Cannot change {source.label}: {target.label} has already been played"
            )
            raise ResultConflictException(
                source.id,
                target.id,
                f"Changing {source.label} would alter {target.label}, "
                "which has already been played",
            )
        if target.is_decided:
            self.retract(bracket, target)
            target.clear_result()
            target.is_void = False
        target.set_slot(ref.slot, None)
        if target.table is not None:
            logger.info(f"{target.label} lost a player, releasing table {target.table}")
            target.table = None

    def _retract_reset(self, bracket: Bracket, grand_final: Match) -> None:
        reset = bracket.reset_match
        if reset is None:
            return
        if reset.is_played:
            logger.error("Cannot change the grand final: the reset has been played")
            raise ResultConflictException(
                grand_final.id,
                reset.id,
                "Changing the grand final would alter the reset, which has "
                "already been played",
            )
        reset.slot1 = None
        reset.slot2 = None
        reset.is_void = False
        reset.table = None

    def clear(self, bracket: Bracket, match: Match) -> None:
        """Retract a played match and remove its result."""
        self.retract(bracket, match)
        match.clear_result()
