import json

import pytest

from tablebracket.models.tournament import BracketType, GrandFinalMode
from tablebracket.testing import RandomBracketGenerator, RBGConfig, ResultPattern


def _run(**kwargs):
    return RandomBracketGenerator(RBGConfig(**kwargs)).generate_complete_tournament()


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_sixteen_players(seed):
    report = _run(num_players=16, num_tables=4, seed=seed)

    assert report.matches_played in (30, 31)
    assert report.validation.is_valid
    assert report.champion == report.standings[0][0]
    assert sum(len(group) for group in report.standings) == 16
    assert all(r > 3 for r in report.rematches_by_round)


@pytest.mark.parametrize("seed", [3, 11])
def test_sixty_four_players_avoid_early_rematches(seed):
    report = _run(num_players=64, num_tables=8, seed=seed)

    assert report.matches_played in (126, 127)
    assert report.validation.is_valid
    assert all(r > 6 for r in report.rematches_by_round)
    assert report.relaxed_selections == 0


@pytest.mark.parametrize("pattern", list(ResultPattern))
def test_result_patterns(pattern):
    report = _run(num_players=11, num_tables=3, seed=5, result_pattern=pattern)
    assert report.matches_played in (20, 21)
    assert report.validation.is_valid


def test_single_elimination_simulation():
    report = _run(num_players=10, num_tables=2, seed=2, bracket_type=BracketType.SINGLE)
    assert report.matches_played == 9
    assert report.rematches == []


def test_no_reset_simulation():
    report = _run(num_players=6, num_tables=1, seed=9, grand_final_mode=GrandFinalMode.NO_RESET)
    assert report.matches_played == 10
    assert report.champion is not None


def test_simulation_is_reproducible():
    first = _run(num_players=12, num_tables=3, seed=21, shuffle_players=True)
    second = _run(num_players=12, num_tables=3, seed=21, shuffle_players=True)
    assert first.to_dict() == second.to_dict()


def test_created_player_names_are_padded():
    players = RandomBracketGenerator(RBGConfig(num_players=12)).create_players()
    assert players[0].name == "Player 01"
    assert players[-1].name == "Player 12"


def test_json_export():
    generator = RandomBracketGenerator(RBGConfig(num_players=5, num_tables=2, seed=4))
    report = generator.generate_complete_tournament()
    data = json.loads(generator.export_json_format(report))

    assert data["champion"] == report.champion
    assert data["validation"] == report.validation.summary
    assert data["tournament"]["config"]["name"] == "RBG 5 players"
