from tablebracket.validation.bracket_checker import (
    BracketValidator,
    ValidationReport,
    Violation,
    ViolationType,
    find_rematches,
    winners_meetings,
)

__all__ = [
    "BracketValidator",
    "ValidationReport",
    "Violation",
    "ViolationType",
    "find_rematches",
    "winners_meetings",
]
