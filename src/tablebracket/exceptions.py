"""Exceptions for use in Table Bracket"""

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


# ========== Base Application Exception ==========


class TableBracketException(Exception):
    """Base exception for all Table Bracket errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(TableBracketException):
    """Base exception for rejected input.

    The snapshot the operation was called with is left unchanged.
    """

    pass


# ========== Player Exceptions ==========


class PlayerException(ValidationException):
    """Base exception for player-related errors."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when two players share the same name."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(ValidationException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when the tournament is in an invalid state for the requested operation."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a requested match does not exist."""

    def __init__(self, match_id: int):
        super().__init__(f"Match {match_id} does not exist")
        self.match_id = match_id


# ========== Result Exceptions ==========


class ResultException(ValidationException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (tied, negative or over the race)."""

    pass


class MissingOpponentException(ResultException):
    """Raised when a result is submitted for a match without two real players."""

    pass


class DuplicateResultException(ResultException):
    """Raised when recording a result for a match that is already decided."""

    pass


class ResultConflictException(ResultException):
    """Raised when changing a result would overwrite a completed downstream match.

    Attributes:
        match_id: The match whose result was being changed
        conflicting_match_id: The completed downstream match
    """

    def __init__(self, match_id: int, conflicting_match_id: int, message: str):
        super().__init__(message)
        self.match_id = match_id
        self.conflicting_match_id = conflicting_match_id


# ========== Table Exceptions ==========


class TableException(ValidationException):
    """Base exception for table assignment errors."""

    pass


class TableNotFoundException(TableException):
    """Raised when a requested table does not exist."""

    def __init__(self, table_number: int):
        super().__init__(f"Table {table_number} does not exist")
        self.table_number = table_number


class MatchNotReadyException(TableException):
    """Raised when assigning a match that is not ready to be played."""

    pass


# ========== Structural Exceptions ==========


class BracketIntegrityException(TableBracketException):
    """Base exception for broken bracket invariants.

    These indicate a defect in the caller or in the engine and are never
    corrected silently.
    """

    pass


class SlotConflictException(BracketIntegrityException):
    """Raised when placing a player into a slot already held by another player."""

    pass


class DoubleAssignmentException(BracketIntegrityException):
    """Raised when a match would sit on two tables or a table would host two matches."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TableBracketException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException, ValidationException):
    """Raised when configuration data is invalid."""

    pass
