"""Player identity used as a match participant."""

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
from typing import Any, Dict, Optional

from tablebracket.constants import BYE_NAME
from tablebracket.utils import setup_logger
from tablebracket.utils.validation import validate_phone

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Player:
    """Represents a player in the tournament.

    Players are immutable and identified by name, which is unique within a
    tournament. The phone number is contact data only and takes no part in
    equality.

    Attributes:
        name: Player's display name
        phone: Sanitized contact phone number, or None
    """

    name: str
    phone: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.phone is None:
            return

        result = validate_phone(self.phone)
        if result.is_valid:
            object.__setattr__(self, "phone", result.sanitized_value)
        else:
            logger.warning(
                f"Invalid phone number for {self.name}: {self.phone} - "
                f"{result.error_message}"
            )
            object.__setattr__(self, "phone", None)

    @property
    def is_bye(self) -> bool:
        """Whether this player is the bye placeholder."""
        return self.name.lower() == BYE_NAME.lower()

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"name": self.name, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        if data.get("name", "").lower() == BYE_NAME.lower():
            return BYE
        return cls(name=data["name"], phone=data.get("phone"))


# The bye sentinel. Compare with ``player.is_bye`` rather than identity.
BYE = Player(BYE_NAME)


def is_bye(player: Optional[Player]) -> bool:
    """Check if a slot holds the bye placeholder."""
    return player is not None and player.is_bye


def is_real_player(player: Optional[Player]) -> bool:
    """Check if a slot holds an actual competitor."""
    return player is not None and not player.is_bye
