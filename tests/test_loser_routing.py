import itertools
from collections import Counter

import pytest

from tablebracket.brackets import could_have_met, plan_loser_routing
from tablebracket.brackets.builder import losers_round_count, losers_round_size
from tablebracket.brackets.loser_routing import (
    choose_ordering,
    drop_profile,
    ordering_indices,
    profiles_could_meet,
)
from tablebracket.exceptions import ConfigurationException
from tablebracket.models.player import create_players
from tablebracket.models.tournament import BracketSide


def test_ordering_indices():
    assert ordering_indices("natural", 4) == [0, 1, 2, 3]
    assert ordering_indices("reverse", 4) == [3, 2, 1, 0]
    assert ordering_indices("half_shift", 4) == [2, 3, 0, 1]
    assert ordering_indices("reverse_half_shift", 4) == [1, 0, 3, 2]
    assert ordering_indices("reverse", 1) == [0]


def test_unknown_ordering():
    with pytest.raises(ConfigurationException):
        ordering_indices("zigzag", 4)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ((0, 1), (0, 2), True),
        ((0, 1), (1, 2), False),
        ((1, 2), (0, 3), True),
        ((1, 2), (3, 3), False),
        ((0, 1), (0, 1), False),
        ((5, 3), (7, 4), True),
    ],
)
def test_could_have_met(first, second, expected):
    assert could_have_met(first, second) is expected
    assert could_have_met(second, first) is expected


def test_drop_profile():
    assert drop_profile(1, 1) == {(1, 1)}
    assert drop_profile(1, 3) == {(4, 3), (5, 3), (6, 3), (7, 3)}


def test_profiles_could_meet_agrees_with_pairwise_check():
    size = 16
    profiles = []
    for drop_round in range(1, 5):
        for index in range(size >> drop_round):
            profiles.append(drop_profile(index, drop_round))
    # Merged profiles, as seen by losers-bracket survivors
    profiles.extend(a | b for a, b in zip(profiles[:8:2], profiles[1:8:2]))
    profiles.extend(a | b for a, b in zip(profiles[:4], profiles[8:12]))

    for first, second in itertools.combinations(profiles, 2):
        brute = any(could_have_met(a, b) for a in first for b in second)
        assert profiles_could_meet(first, second) is brute


def test_empty_profiles_never_meet():
    assert not profiles_could_meet(frozenset(), drop_profile(0, 2))


def test_choose_ordering_prefers_fewer_rematches():
    survivors = [drop_profile(0, 1) | drop_profile(1, 1), drop_profile(2, 1) | drop_profile(3, 1)]
    drops = [drop_profile(0, 2), drop_profile(1, 2)]
    name, feed, score = choose_ordering(survivors, drops)
    assert name == "reverse"
    assert feed == [1, 0]
    assert score[0] == 0
    # Natural ordering alone would pair the winners round 2 loser with their round 1 victim
    name, feed, score = choose_ordering(survivors, drops, candidates=["natural"])
    assert score[0] == 2


@pytest.mark.parametrize("size", [4, 8, 16, 32, 64])
def test_early_entry_rounds_are_rematch_free(size):
    routing = plan_loser_routing(size)
    winners_rounds = size.bit_length() - 1
    assert sorted(routing.orderings) == list(range(2, winners_rounds + 1))
    for winners_round in range(2, winners_rounds - 1):
        assert routing.entry_rematches[winners_round] == 0


def test_feeds_are_permutations():
    routing = plan_loser_routing(64)
    for winners_round, feed in routing.feeds.items():
        assert sorted(feed) == list(range(64 >> winners_round))
        for index in feed:
            assert feed[routing.target_for(winners_round, index)] == index


def test_no_routing_below_four():
    assert plan_loser_routing(2).orderings == {}


def test_four_player_rematch_cannot_be_avoided():
    assert plan_loser_routing(4).entry_rematches == {2: 1}


@pytest.mark.parametrize("size, expected", [(2, 0), (4, 2), (8, 4), (64, 10)])
def test_losers_round_count(size, expected):
    assert losers_round_count(size) == expected


def test_losers_round_size():
    assert [losers_round_size(64, r) for r in range(1, 11)] == [16, 16, 8, 8, 4, 4, 2, 2, 1, 1]


@pytest.mark.parametrize("count", [4, 8, 13, 32, 64])
def test_every_slot_has_one_feeder(engine, count):
    bracket = engine.generate(create_players([f"P{n}" for n in range(1, count + 1)]))
    targets = Counter()
    for match in bracket.matches():
        for ref in (match.winner_to, match.loser_to):
            if ref is not None:
                targets[ref] += 1
    assert max(targets.values()) == 1

    for matches in bracket.losers:
        for match in matches:
            assert targets[(match.id, 1)] == 1
            assert targets[(match.id, 2)] == 1


def test_first_losers_round_feeders_are_distinct(engine):
    bracket = engine.generate(create_players([f"P{n}" for n in range(1, 65)]))
    feeders = {}
    for match in bracket.round_matches(BracketSide.WINNERS, 1):
        feeders.setdefault(match.loser_to.match_id, []).append(match.number)
    assert len(feeders) == 16
    assert all(len(numbers) == 2 for numbers in feeders.values())
