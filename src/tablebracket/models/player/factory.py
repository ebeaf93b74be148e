"""Factory helpers for building tournament rosters."""

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

from typing import Any, Dict, Iterable, List, Optional

from tablebracket.constants import MIN_PLAYERS
from tablebracket.exceptions import (
    DuplicatePlayerException,
    InvalidPlayerDataException,
)
from tablebracket.models.player.base_player import Player
from tablebracket.utils import setup_logger
from tablebracket.utils.validation import validate_phone, validate_player_name_strict

logger = setup_logger(__name__)

DEMO_PLAYERS = [
    ("Alice Johnson", "555-0101"),
    ("Bob Smith", "555-0102"),
    ("Carol Davis", "555-0103"),
    ("David Wilson", "555-0104"),
    ("Emma Brown", "555-0105"),
    ("Frank Miller", "555-0106"),
    ("Grace Taylor", "555-0107"),
    ("Henry Clark", "555-0108"),
    ("Alsa Clark", "555-0109"),
]


class PlayerFactory:
    """Factory for creating validated Player instances.

    Example:
        >>> factory = PlayerFactory(strict=True)
        >>> player = factory.create_player(name="Jane Smith", phone="555-0199")
    """

    def __init__(self, strict: bool = True):
        """Initialize the PlayerFactory.

        Args:
            strict: Whether to raise on invalid optional data (phone)
                instead of dropping it with a warning
        """
        self.strict = strict

    def create_player(self, name: str, phone: Optional[str] = None) -> Player:
        """Create a Player after validating its data.

        Raises:
            InvalidPlayerDataException: If the name is empty or reserved, or
                the phone is invalid and strict mode is on
        """
        name = validate_player_name_strict(name)

        if phone and self.strict:
            phone_result = validate_phone(phone)
            if not phone_result:
                raise InvalidPlayerDataException(
                    f"Invalid player data: {phone_result.error_message}"
                )

        return Player(name=name, phone=phone)

    def create_from_dict(self, data: Dict[str, Any]) -> Player:
        """Create a player from dictionary data.

        Raises:
            InvalidPlayerDataException: If required fields are missing
        """
        if "name" not in data:
            raise InvalidPlayerDataException("Player name is required")
        return self.create_player(name=data["name"], phone=data.get("phone"))

    def create_batch(self, player_data_list: List[Dict[str, Any]]) -> List[Player]:
        """Create a roster from a list of dictionaries.

        Raises:
            InvalidPlayerDataException: If any entry is invalid
            DuplicatePlayerException: If two entries share a name
        """
        players = [self.create_from_dict(data) for data in player_data_list]
        ensure_unique_names(players)
        return players


def ensure_unique_names(players: Iterable[Player]) -> None:
    """Reject rosters where two players share a name (case-insensitive).

    Raises:
        DuplicatePlayerException: Naming the first duplicate found
    """
    seen = set()
    for player in players:
        key = player.name.strip().lower()
        if key in seen:
            raise DuplicatePlayerException(f"Duplicate player name: {player.name}")
        seen.add(key)


def validate_roster(players: List[Player]) -> List[Player]:
    """Check a roster can seed a bracket and return it as a list.

    Raises:
        InvalidPlayerDataException: If fewer than two players are given or a
            player uses the reserved bye name
        DuplicatePlayerException: If two players share a name
    """
    players = list(players)
    if len(players) < MIN_PLAYERS:
        raise InvalidPlayerDataException(
            f"At least {MIN_PLAYERS} players are required, got {len(players)}"
        )
    for player in players:
        validate_player_name_strict(player.name)
    ensure_unique_names(players)
    return players


# Global factory instance for convenience
default_factory = PlayerFactory(strict=False)


def create_player(**kwargs) -> Player:
    """Convenience function to create a player using the default factory.

    Example:
        >>> player = create_player(name="John Doe")
    """
    return default_factory.create_player(**kwargs)


def create_player_from_dict(data: Dict[str, Any]) -> Player:
    """Convenience function to create a player from dict using default factory."""
    return default_factory.create_from_dict(data)


def create_players(names: Iterable[str]) -> List[Player]:
    """Create a roster from plain names."""
    players = [default_factory.create_player(name=name) for name in names]
    ensure_unique_names(players)
    return players


def generate_demo_players() -> List[Player]:
    """Demo roster for trying out the tool."""
    return [Player(name=name, phone=phone) for name, phone in DEMO_PLAYERS]
