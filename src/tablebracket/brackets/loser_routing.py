"""Routing of winners-bracket losers into the losers bracket.

A player who drops out of the winners bracket is described by an origin
``(index, drop_round)``: the winners round 1 match they started in and the
winners round they lost. Two players could have met before exactly when they
dropped in different rounds and their round 1 matches merge at the earlier of
those rounds. A losers-bracket slot is described by the set of origins its
occupant could have (its profile).

For each winners round from 2 on, the losers are fed into the losers bracket
in one of a few fixed orderings. The ordering that leaves the fewest possible
rematches in the entry round, and then in the round after it, is kept.
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

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from tablebracket.constants import LOSER_ORDERINGS
from tablebracket.exceptions import ConfigurationException
from tablebracket.type_hints import Origin
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)

Profile = FrozenSet[Origin]


def ordering_indices(name: str, count: int) -> List[int]:
    """Winners match index feeding each losers match for a named ordering.

    ``result[m]`` is the winners-bracket match whose loser enters losers
    match ``m``.

    Raises:
        ConfigurationException: On an unknown ordering name
    """
    half = count // 2
    if name == "natural":
        return list(range(count))
    if name == "reverse":
        return [count - 1 - m for m in range(count)]
    if name == "half_shift":
        return [(m + half) % count for m in range(count)]
    if name == "reverse_half_shift":
        return [(count - 1 - m + half) % count for m in range(count)]
    raise ConfigurationException(f"Unknown loser ordering: {name}")


def drop_profile(match_index: int, drop_round: int) -> Profile:
    """Possible origins of the loser of winners round ``drop_round`` match ``match_index``."""
    width = 1 << (drop_round - 1)
    start = match_index * width
    return frozenset((index, drop_round) for index in range(start, start + width))


def could_have_met(a: Origin, b: Origin) -> bool:
    """Whether two players with these origins met in the winners bracket."""
    index_a, drop_a = a
    index_b, drop_b = b
    return drop_a != drop_b and (index_a ^ index_b).bit_length() + 1 == min(drop_a, drop_b)


def _meeting_key(index: int, meet_round: int) -> int:
    # Match index in the round before the meeting; round 1 uses the index itself
    return index >> (meet_round - 2) if meet_round >= 2 else index


def profiles_could_meet(first: Profile, second: Profile) -> bool:
    """Whether any origin in ``first`` could have met any origin in ``second``."""
    if not first or not second:
        return False
    by_drop: Dict[int, List[int]] = {}
    for index, drop in second:
        by_drop.setdefault(drop, []).append(index)

    keys: Dict[Tuple[int, int], set] = {}
    for index, drop in first:
        for other_drop, indices in by_drop.items():
            if other_drop == drop:
                continue
            meet_round = min(drop, other_drop)
            cache_key = (other_drop, meet_round)
            if cache_key not in keys:
                keys[cache_key] = {_meeting_key(i, meet_round) for i in indices}
            own = _meeting_key(index, meet_round)
            # Round 1 opponents share the index; later opponents come from sibling matches
            target = own if meet_round == 1 else own ^ 1
            if target in keys[cache_key]:
                return True
    return False


def count_possible_rematches(pairs: Iterable[Tuple[Profile, Profile]]) -> int:
    """Number of matches whose two slots could hold players that already met."""
    return sum(1 for first, second in pairs if profiles_could_meet(first, second))


@dataclass
class LoserRouting:
    """Routing decided for one bracket size.

    Attributes
    ----------
    orderings : dict of int to str
        Ordering name chosen for each winners round from 2 on.
    feeds : dict of int to list of int
        For each winners round ``k`` from 2 on, ``feeds[k][m]`` is the winners
        match whose loser enters losers round ``2k - 2`` match ``m``.
    entry_rematches : dict of int to int
        Possible rematches left in each entry round by the chosen ordering.
    """

    orderings: Dict[int, str] = field(default_factory=dict)
    feeds: Dict[int, List[int]] = field(default_factory=dict)
    entry_rematches: Dict[int, int] = field(default_factory=dict)

    def target_for(self, winners_round: int, match_index: int) -> int:
        """Losers match index receiving the loser of a winners match."""
        return self.feeds[winners_round].index(match_index)


def _merge_pairs(profiles: Sequence[Profile]) -> List[Tuple[Profile, Profile]]:
    return [(profiles[i], profiles[i + 1]) for i in range(0, len(profiles), 2)]


def _winner_profiles(pairs: Sequence[Tuple[Profile, Profile]]) -> List[Profile]:
    return [first | second for first, second in pairs]


def choose_ordering(
    survivors: Sequence[Profile],
    drops: Sequence[Profile],
    candidates: Sequence[str] = LOSER_ORDERINGS,
) -> Tuple[str, List[int], Tuple[int, int]]:
    """Pick the ordering for one entry round.

    Args:
        survivors: Profiles of the losers-bracket players entering on slot 1
        drops: Profiles of the winners round losers, by winners match index
        candidates: Ordering names in preference order

    Returns:
        Tuple of (name, feed indices, (entry rematches, next round rematches))
    """
    count = len(drops)
    best = None
    for name in candidates:
        feed = ordering_indices(name, count)
        entry = [(survivors[m], drops[feed[m]]) for m in range(count)]
        entry_score = count_possible_rematches(entry)
        next_score = 0
        if count > 1:
            next_score = count_possible_rematches(_merge_pairs(_winner_profiles(entry)))
        score = (entry_score, next_score)
        if best is None or score < best[2]:
            best = (name, feed, score)
    return best


def plan_loser_routing(bracket_size: int) -> LoserRouting:
    """Decide the loser routing for a double-elimination bracket.

    Args:
        bracket_size: Power of two, at least 4

    Returns:
        The routing for every winners round from 2 on
    """
    routing = LoserRouting()
    winners_rounds = bracket_size.bit_length() - 1
    if winners_rounds < 2:
        return routing

    # Losers round 1 pairs the losers of winners round 1 matches 2i and 2i+1
    first_round = [
        drop_profile(index, 1) for index in range(bracket_size // 2)
    ]
    survivors = _winner_profiles(_merge_pairs(first_round))

    for winners_round in range(2, winners_rounds + 1):
        count = bracket_size >> winners_round
        drops = [drop_profile(j, winners_round) for j in range(count)]
        name, feed, score = choose_ordering(survivors, drops)
        routing.orderings[winners_round] = name
        routing.feeds[winners_round] = feed
        routing.entry_rematches[winners_round] = score[0]
        logger.debug(
            f"WB R{winners_round} losers routed with {name} ordering "
            f"(possible rematches {score[0]}/{score[1]})"
        )

        entered = _winner_profiles(
            [(survivors[m], drops[feed[m]]) for m in range(count)]
        )
        if count > 1:
            survivors = _winner_profiles(_merge_pairs(entered))
        else:
            survivors = entered

    return routing
