"""Construction of the bracket topology.

All matches are created up front. Later rounds start out as placeholders with
empty slots and are filled as results come in. Every match knows where its
winner and loser go, and those links never change.
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

from itertools import count
from typing import List, Sequence

from tablebracket.brackets.loser_routing import LoserRouting, plan_loser_routing
from tablebracket.models.player import BYE, Player
from tablebracket.models.tournament import (
    Bracket,
    BracketSide,
    BracketType,
    GrandFinalMode,
    Match,
    SlotRef,
)
from tablebracket.utils import bit_reversed_order, next_power_of_two, setup_logger

logger = setup_logger(__name__)


def losers_round_count(bracket_size: int) -> int:
    """Number of losers-bracket rounds: ``2W - 2`` for ``W`` winners rounds."""
    winners_rounds = bracket_size.bit_length() - 1
    return max(2 * winners_rounds - 2, 0)


def losers_round_size(bracket_size: int, losers_round: int) -> int:
    """Match count of a losers round: ``bracket_size / 2^(ceil(r/2) + 1)``."""
    return bracket_size >> ((losers_round + 1) // 2 + 1)


def seed_first_round(players: Sequence[Player], bracket_size: int) -> List[tuple]:
    """Slot pairs for winners round 1.

    Byes go to the matches in bit-reversed order, so they are spread evenly
    over both halves of the bracket and never meet each other. In a bye match
    the player takes slot 1.
    """
    match_count = bracket_size // 2
    bye_count = bracket_size - len(players)
    bye_matches = set(bit_reversed_order(match_count)[:bye_count])

    remaining = iter(players)
    pairs = []
    for index in range(match_count):
        if index in bye_matches:
            pairs.append((next(remaining), BYE))
        else:
            pairs.append((next(remaining), next(remaining)))
    return pairs


def build_bracket(
    players: Sequence[Player],
    bracket_type: BracketType = BracketType.DOUBLE,
    grand_final_mode: GrandFinalMode = GrandFinalMode.SINGLE_RESET,
) -> Bracket:
    """Build a bracket with every match and link in place.

    Byes are seeded but not yet resolved.

    Args:
        players: Validated roster in seeding order
        bracket_type: Single or double elimination
        grand_final_mode: Whether a reset match is created

    Returns:
        The new Bracket
    """
    bracket_size = next_power_of_two(len(players))
    winners_rounds = bracket_size.bit_length() - 1
    double = bracket_type == BracketType.DOUBLE
    ids = count(1)

    winners: List[List[Match]] = []
    for round_number in range(1, winners_rounds + 1):
        winners.append(
            [
                Match(next(ids), BracketSide.WINNERS, round_number, number)
                for number in range(1, (bracket_size >> round_number) + 1)
            ]
        )

    for match, (slot1, slot2) in zip(winners[0], seed_first_round(players, bracket_size)):
        match.slot1 = slot1
        match.slot2 = slot2

    losers: List[List[Match]] = []
    finals: List[Match] = []
    routing = LoserRouting()
    if double:
        for round_number in range(1, losers_round_count(bracket_size) + 1):
            losers.append(
                [
                    Match(next(ids), BracketSide.LOSERS, round_number, number)
                    for number in range(
                        1, losers_round_size(bracket_size, round_number) + 1
                    )
                ]
            )
        finals.append(
            Match(next(ids), BracketSide.FINALS, 1, 1, is_grand_final=True)
        )
        if grand_final_mode == GrandFinalMode.SINGLE_RESET:
            finals.append(
                Match(next(ids), BracketSide.FINALS, 2, 1, is_grand_final_reset=True)
            )
        routing = plan_loser_routing(bracket_size)

    _link_winners(winners, losers, finals, routing, double)
    _link_losers(losers, finals)

    bracket = Bracket(
        bracket_type=bracket_type,
        grand_final_mode=grand_final_mode,
        bracket_size=bracket_size,
        players=list(players),
        winners=winners,
        losers=losers,
        finals=finals,
        loser_orderings=[
            routing.orderings[k] for k in sorted(routing.orderings)
        ],
    )
    logger.debug(
        f"Built {bracket_type.value} bracket of size {bracket_size}: "
        f"{len(winners)} WB rounds, {len(losers)} LB rounds"
    )
    return bracket


def _link_winners(winners, losers, finals, routing: LoserRouting, double: bool) -> None:
    last = len(winners)
    for round_number, round_matches in enumerate(winners, start=1):
        for index, match in enumerate(round_matches):
            if round_number < last:
                match.winner_to = SlotRef(
                    winners[round_number][index // 2].id, index % 2 + 1
                )
            elif double:
                match.winner_to = SlotRef(finals[0].id, 1)

            if not double:
                continue
            if not losers:
                # Two-player bracket: the loser goes straight to the grand final
                match.loser_to = SlotRef(finals[0].id, 2)
            elif round_number == 1:
                match.loser_to = SlotRef(losers[0][index // 2].id, index % 2 + 1)
            else:
                target = routing.target_for(round_number, index)
                match.loser_to = SlotRef(losers[2 * round_number - 3][target].id, 2)


def _link_losers(losers, finals) -> None:
    last = len(losers)
    for round_number, round_matches in enumerate(losers, start=1):
        for index, match in enumerate(round_matches):
            if round_number == last:
                match.winner_to = SlotRef(finals[0].id, 2)
            elif round_number % 2 == 1:
                match.winner_to = SlotRef(losers[round_number][index].id, 1)
            else:
                match.winner_to = SlotRef(
                    losers[round_number][index // 2].id, index % 2 + 1
                )
