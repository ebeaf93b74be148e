"""Shared helpers for Table Bracket."""

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

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a module logger with the package handler attached once.

    Args:
        name: Logger name, normally ``__name__``
        level: Level used when the package logger is configured the first time

    Returns:
        The configured logger
    """
    package_logger = logging.getLogger("tablebracket")
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(level)
    return logging.getLogger(name)


def next_power_of_two(value: int) -> int:
    """Smallest power of two greater than or equal to ``value`` (minimum 2)."""
    if value <= 2:
        return 2
    return 1 << (value - 1).bit_length()


def bit_reversed_order(count: int) -> list[int]:
    """Indices 0..count-1 ordered by their bit-reversed value.

    ``count`` must be a power of two. Consecutive entries land in opposite
    halves of the range, which spreads byes evenly over a bracket.
    """
    bits = max(count.bit_length() - 1, 0)

    def reverse(index: int) -> int:
        result = 0
        for _ in range(bits):
            result = (result << 1) | (index & 1)
            index >>= 1
        return result

    return sorted(range(count), key=reverse)
