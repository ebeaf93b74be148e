import pytest

from tablebracket.brackets import BracketEngine
from tablebracket.models.player import create_players
from tablebracket.scheduling import MatchScheduler


@pytest.fixture
def engine():
    return BracketEngine()


@pytest.fixture
def scheduler():
    return MatchScheduler()


@pytest.fixture
def four_players():
    return create_players(["A", "B", "C", "D"])


@pytest.fixture
def eight_players():
    return create_players([f"P{n}" for n in range(1, 9)])
