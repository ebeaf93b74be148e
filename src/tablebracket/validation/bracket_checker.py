"""Bracket checker - internal validation of bracket snapshots.

This module checks a bracket against the structural rules the engine is
supposed to keep (round and match counts, links, slot contents, table use)
and reports losers-bracket rematches.
"""

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
from enum import Enum
from typing import Dict, List, Optional, Set

from tablebracket.brackets.builder import losers_round_count, losers_round_size
from tablebracket.models.player import is_real_player
from tablebracket.models.tournament import Bracket, BracketSide, Match
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)


class ViolationType(Enum):
    """Types of bracket rule violations."""

    STRUCTURE = "STRUCTURE"  # Topology is wrong
    STATE = "STATE"  # Slots or results disagree with the links
    TABLE = "TABLE"  # Table use breaks the one-match, one-table rules
    REMATCH = "REMATCH"  # Two players meet again in the losers bracket


@dataclass
class Violation:
    """A single failed check."""

    check: str
    violation_type: ViolationType
    description: str
    match_id: Optional[int] = None


@dataclass
class ValidationReport:
    """Complete validation report for a bracket."""

    checks_run: int
    violations: List[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """No violation other than rematches."""
        return not any(v.violation_type != ViolationType.REMATCH for v in self.violations)

    @property
    def rematches(self) -> List[Violation]:
        return [v for v in self.violations if v.violation_type == ViolationType.REMATCH]

    @property
    def summary(self) -> str:
        if not self.violations:
            return f"All {self.checks_run} checks passed"
        return (
            f"{len(self.violations)} violation(s) in {self.checks_run} checks, "
            f"{len(self.rematches)} rematch(es)"
        )


def winners_meetings(bracket: Bracket) -> Set[frozenset]:
    """Pairs of player names that have faced each other in the winners bracket."""
    met = set()
    for round_matches in bracket.winners:
        for match in round_matches:
            if is_real_player(match.slot1) and is_real_player(match.slot2):
                met.add(frozenset((match.slot1.name, match.slot2.name)))
    return met


def find_rematches(bracket: Bracket) -> List[Match]:
    """Losers-bracket matches whose players already met in the winners bracket."""
    met = winners_meetings(bracket)
    found = []
    for round_matches in bracket.losers:
        for match in round_matches:
            if is_real_player(match.slot1) and is_real_player(match.slot2):
                if frozenset((match.slot1.name, match.slot2.name)) in met:
                    found.append(match)
    return found


class BracketValidator:
    """Runs every check against a bracket snapshot."""

    CHECKS = (
        "check_round_counts",
        "check_links",
        "check_slots",
        "check_tables",
        "check_rematches",
    )

    def validate(self, bracket: Bracket) -> ValidationReport:
        report = ValidationReport(checks_run=len(self.CHECKS))
        for name in self.CHECKS:
            report.violations.extend(getattr(self, name)(bracket))
        if report.is_valid:
            logger.debug(report.summary)
        else:
            logger.warning(report.summary)
        return report

    def check_round_counts(self, bracket: Bracket) -> List[Violation]:
        violations = []
        winners_rounds = bracket.bracket_size.bit_length() - 1
        if bracket.winners_round_count != winners_rounds:
            violations.append(
                Violation(
                    "round_counts",
                    ViolationType.STRUCTURE,
                    f"Expected {winners_rounds} WB rounds, found {bracket.winners_round_count}",
                )
            )
        for r, matches in enumerate(bracket.winners, start=1):
            expected = bracket.bracket_size >> r
            if len(matches) != expected:
                violations.append(
                    Violation(
                        "round_counts",
                        ViolationType.STRUCTURE,
                        f"WB R{r} should have {expected} matches, found {len(matches)}",
                    )
                )

        if not bracket.is_double:
            if bracket.losers or bracket.finals:
                violations.append(
                    Violation(
                        "round_counts",
                        ViolationType.STRUCTURE,
                        "Single elimination bracket has losers or finals matches",
                    )
                )
            return violations

        expected_losers = losers_round_count(bracket.bracket_size)
        if bracket.losers_round_count != expected_losers:
            violations.append(
                Violation(
                    "round_counts",
                    ViolationType.STRUCTURE,
                    f"Expected {expected_losers} LB rounds, found {bracket.losers_round_count}",
                )
            )
        for r, matches in enumerate(bracket.losers, start=1):
            expected = losers_round_size(bracket.bracket_size, r)
            if len(matches) != expected:
                violations.append(
                    Violation(
                        "round_counts",
                        ViolationType.STRUCTURE,
                        f"LB R{r} should have {expected} matches, found {len(matches)}",
                    )
                )
        if bracket.grand_final is None:
            violations.append(
                Violation("round_counts", ViolationType.STRUCTURE, "Grand final is missing")
            )
        return violations

    def check_links(self, bracket: Bracket) -> List[Violation]:
        """Every link points at an existing match and no slot has two feeders."""
        violations = []
        feeders: Dict[tuple, int] = {}
        for match in bracket.matches():
            for ref in (match.winner_to, match.loser_to):
                if ref is None:
                    continue
                target = bracket.find(ref.match_id)
                if target is None or ref.slot not in (1, 2):
                    violations.append(
                        Violation(
                            "links",
                            ViolationType.STRUCTURE,
                            f"{match.label} links to missing slot {tuple(ref)}",
                            match.id,
                        )
                    )
                    continue
                if target.id <= match.id:
                    violations.append(
                        Violation(
                            "links",
                            ViolationType.STRUCTURE,
                            f"{match.label} links backwards to {target.label}",
                            match.id,
                        )
                    )
                key = tuple(ref)
                if key in feeders:
                    violations.append(
                        Violation(
                            "links",
                            ViolationType.STRUCTURE,
                            f"{target.label} slot {ref.slot} has two feeders",
                            target.id,
                        )
                    )
                feeders[key] = match.id
        return violations

    def check_slots(self, bracket: Bracket) -> List[Violation]:
        """Decided results sit in their target slots and no one is in two live matches."""
        violations = []
        live: Dict[str, int] = {}
        for match in bracket.matches():
            if match.is_decided and not match.is_grand_final:
                for ref, player in ((match.winner_to, match.winner), (match.loser_to, match.loser)):
                    if ref is None:
                        continue
                    target = bracket.find(ref.match_id)
                    if target is not None and target.get_slot(ref.slot) != player:
                        violations.append(
                            Violation(
                                "slots",
                                ViolationType.STATE,
                                f"{player} from {match.label} is missing in {target.label}",
                                match.id,
                            )
                        )
            if match.is_played and match.winner not in (match.slot1, match.slot2):
                violations.append(
                    Violation(
                        "slots",
                        ViolationType.STATE,
                        f"Winner of {match.label} is not one of its players",
                        match.id,
                    )
                )
            if match.is_decided or match.is_void:
                continue
            for player in match.players:
                if player.name in live:
                    violations.append(
                        Violation(
                            "slots",
                            ViolationType.STATE,
                            f"{player} is in two undecided matches",
                            match.id,
                        )
                    )
                live[player.name] = match.id
        return violations

    def check_tables(self, bracket: Bracket) -> List[Violation]:
        violations = []
        tables: Dict[int, int] = {}
        seated: Set[str] = set()
        for match in bracket.matches():
            if match.table is None:
                continue
            if match.table in tables:
                violations.append(
                    Violation(
                        "tables",
                        ViolationType.TABLE,
                        f"Table {match.table} hosts two matches",
                        match.id,
                    )
                )
            tables[match.table] = match.id
            if match.is_decided:
                violations.append(
                    Violation(
                        "tables",
                        ViolationType.TABLE,
                        f"Decided match {match.label} is still on table {match.table}",
                        match.id,
                    )
                )
            for player in match.players:
                if player.name in seated:
                    violations.append(
                        Violation(
                            "tables",
                            ViolationType.TABLE,
                            f"{player} is seated at two tables",
                            match.id,
                        )
                    )
                seated.add(player.name)
        return violations

    def check_rematches(self, bracket: Bracket) -> List[Violation]:
        return [
            Violation(
                "rematches",
                ViolationType.REMATCH,
                f"{match.label}: {match.slot1} and {match.slot2} already met",
                match.id,
            )
            for match in find_rematches(bracket)
        ]
