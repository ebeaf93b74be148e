from tablebracket.models.player.base_player import (
    BYE,
    Player,
    is_bye,
    is_real_player,
)
from tablebracket.models.player.factory import (
    PlayerFactory,
    create_player,
    create_player_from_dict,
    create_players,
    ensure_unique_names,
    generate_demo_players,
    validate_roster,
)

__all__ = [
    "Player",
    "BYE",
    "is_bye",
    "is_real_player",
    "PlayerFactory",
    "create_player",
    "create_player_from_dict",
    "create_players",
    "ensure_unique_names",
    "generate_demo_players",
    "validate_roster",
]
