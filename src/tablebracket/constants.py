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

# --- Constants ---

# Reserved player name for bye slots (compared case-insensitively)
BYE_NAME = "BYE"

# Minimum number of players for a bracket
MIN_PLAYERS = 2

# Bracket sides
WINNERS = "winners"
LOSERS = "losers"
FINALS = "finals"

# Short labels used in logs and match labels
BRACKET_LABELS = {
    WINNERS: "WB",
    LOSERS: "LB",
    FINALS: "GF",
}

# Bracket types
SINGLE_ELIMINATION = "single"
DOUBLE_ELIMINATION = "double"
DEFAULT_BRACKET_TYPE = DOUBLE_ELIMINATION

# Grand final modes
GRAND_FINAL_SINGLE_RESET = "single_reset"
GRAND_FINAL_NO_RESET = "no_reset"
DEFAULT_GRAND_FINAL_MODE = GRAND_FINAL_SINGLE_RESET

# Race limits (racks needed to win a match)
DEFAULT_RACE_WINNERS = 7
DEFAULT_RACE_LOSERS = 5

# Game played when none is given
DEFAULT_GAME_TYPE = "Nine Ball"

# Orderings for routing winners-bracket losers into the losers bracket,
# in preference order when several avoid the same number of rematches
LOSER_ORDERINGS = ("reverse", "half_shift", "reverse_half_shift", "natural")

# --- Scheduling priority ---

# Winners round r scores PRIORITY_BASE - PRIORITY_ROUND_STEP * r
PRIORITY_BASE = 10000
PRIORITY_ROUND_STEP = 100
# Losers round that may run alongside its winners round
PRIORITY_PARALLEL_OFFSET = 10
# Losers round that waits for its winners round to finish
PRIORITY_WAIT_OFFSET = 50
# Extra penalty while that winners round is still outstanding
PRIORITY_DEFERRED_PENALTY = 5000

# Multiplier applied to losers-bracket scores (>1 favors losers bracket)
DEFAULT_LB_AGGRESSIVENESS = 1.0

# --- Tables ---

STREAM_TABLE_NAME = "Stream"
DEFAULT_TABLE_COUNT = 1


def default_table_name(table_number: int) -> str:
    """Get the default name for a table based on its number.

    Table 1 is the stream table, the others are "Table X" where X is
    table_number - 1.
    """
    if table_number == 1:
        return STREAM_TABLE_NAME
    return f"Table {table_number - 1}"
