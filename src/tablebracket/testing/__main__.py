"""Unified Testing CLI for Table Bracket.

This module provides an interactive command-line interface for the testing
functionality in Table Bracket.
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

import argparse
import json
import sys
import time
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from tablebracket.exceptions import TableBracketException
from tablebracket.models.tournament import BracketType, GrandFinalMode
from tablebracket.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "generate": {
        "description": "Simulate random tournaments (RBG)",
        "options": {
            "--players": "Number of players (default: 32)",
            "--tables": "Number of tables (default: 4)",
            "--bracket": "Bracket type (single/double)",
            "--grand-final": "Grand final mode (single_reset/no_reset)",
            "--pattern": "Result pattern (random/favorites/close)",
            "--aggressiveness": "Losers bracket aggressiveness (default: 1.0)",
            "--seed": "Random seed for reproducibility",
            "--output": "Output file path (JSON)",
        },
    },
    "validate": {
        "description": "Validate a saved tournament bracket",
        "options": {
            "--file": "Tournament file to validate (JSON)",
            "--detailed": "Show every violation",
        },
    },
    "unit": {
        "description": "Run unit tests (pytest)",
        "options": {
            "--module": "Specific module to test (e.g. engine, scheduler)",
            "--verbose": "Verbose output",
        },
    },
    "benchmark": {
        "description": "Performance benchmarking",
        "options": {
            "--size": "Players per tournament (default: 64)",
            "--tables": "Number of tables (default: 8)",
            "--iterations": "Number of iterations (default: 5)",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {
            "<command>": "Command name to get help for",
        },
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}+---------------------------------------------------------------+
|                                                               |
|                  TABLE BRACKET TEST - CLI                     |
|                                                               |
+---------------------------------------------------------------+{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None

    return NestedCompleter.from_nested_dict(completions)


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate (RBG) command."""
    from tablebracket.testing.rbg import RandomBracketGenerator, RBGConfig, ResultPattern

    print(f"\n{Colors.BOLD}Simulating tournament...{Colors.ENDC}")

    config = RBGConfig(
        num_players=args.players,
        num_tables=args.tables,
        bracket_type=BracketType(args.bracket),
        grand_final_mode=GrandFinalMode(args.grand_final),
        result_pattern=ResultPattern(args.pattern),
        lb_aggressiveness=args.aggressiveness,
        seed=args.seed,
    )
    rbg = RandomBracketGenerator(config)
    report = rbg.generate_complete_tournament()

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rbg.export_json_format(report), encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Tournament Simulated:{Colors.ENDC}")
    print(f"  Players: {report.num_players}")
    print(f"  Matches played: {report.matches_played}")
    print(f"  Champion: {report.champion}")
    print(f"  Relaxed selections: {report.relaxed_selections}")

    if report.rematches:
        print(f"  {Colors.WARNING}Rematches: {len(report.rematches)}{Colors.ENDC}")
        for lb_round, count in sorted(report.rematches_by_round.items()):
            print(f"    LB R{lb_round}: {count}")
    else:
        print(f"  {Colors.OKGREEN}Rematches: 0{Colors.ENDC}")

    if report.validation is not None:
        colour = Colors.OKGREEN if report.validation.is_valid else Colors.FAIL
        print(f"  {colour}{report.validation.summary}{Colors.ENDC}")
    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validation command."""
    from tablebracket.tournament import Tournament
    from tablebracket.validation import BracketValidator

    if not args.file:
        print(f"{Colors.FAIL}Error: --file required{Colors.ENDC}")
        return 1

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"{Colors.FAIL}Error: File not found: {file_path}{Colors.ENDC}")
        return 1

    print(f"\n{Colors.BOLD}Validating tournament: {file_path}{Colors.ENDC}")
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Simulator exports wrap the tournament in a report
    tournament = Tournament.from_dict(data.get("tournament", data))
    if tournament.bracket is None:
        print(f"{Colors.FAIL}Error: Tournament has no bracket yet{Colors.ENDC}")
        return 1

    report = BracketValidator().validate(tournament.bracket)
    print(f"\n{Colors.BOLD}Validation Results:{Colors.ENDC}")
    print(f"  Summary: {report.summary}")
    if args.detailed:
        print(f"\n{Colors.BOLD}Violations:{Colors.ENDC}")
        for violation in report.violations:
            print(f"  - [{violation.violation_type.value}] {violation.description}")
    return 0 if report.is_valid else 1


def run_unit_command(args: argparse.Namespace) -> int:
    """Run unit tests using pytest."""
    import subprocess

    print(f"\n{Colors.BOLD}Running unit tests...{Colors.ENDC}")
    pytest_args = ["pytest"]
    if args.module and args.module != "all":
        pytest_args.append(f"tests/test_{args.module}.py")
    else:
        pytest_args.append("tests/")
    if args.verbose:
        pytest_args.append("-v")
    result = subprocess.run(pytest_args)
    return result.returncode


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmarks."""
    from tablebracket.testing.rbg import RandomBracketGenerator, RBGConfig

    print(f"\n{Colors.BOLD}Running performance benchmark...{Colors.ENDC}")
    print(f"Tournament size: {args.size} players, {args.tables} tables")
    print(f"Iterations: {args.iterations}\n")

    times = []
    for i in range(args.iterations):
        config = RBGConfig(
            num_players=args.size,
            num_tables=args.tables,
            seed=42 + i,
            validate_with_checker=False,
        )
        rbg = RandomBracketGenerator(config)
        start = time.perf_counter()
        rbg.generate_complete_tournament()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"  Iteration {i+1}/{args.iterations}: {elapsed*1000:.2f}ms")

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {sum(times) / len(times) * 1000:.2f}ms")
    print(f"  Min: {min(times) * 1000:.2f}ms")
    print(f"  Max: {max(times) * 1000:.2f}ms")
    return 0


def create_generate_parser() -> argparse.ArgumentParser:
    """Create parser for generate subcommand."""
    parser = argparse.ArgumentParser(description="Simulate random tournaments")
    add_generate_arguments(parser)
    return parser


def add_generate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--players", type=int, default=32, help="Number of players")
    parser.add_argument("--tables", type=int, default=4, help="Number of tables")
    parser.add_argument(
        "--bracket",
        choices=[t.value for t in BracketType],
        default=BracketType.DOUBLE.value,
        help="Bracket type",
    )
    parser.add_argument(
        "--grand-final",
        choices=[m.value for m in GrandFinalMode],
        default=GrandFinalMode.SINGLE_RESET.value,
        help="Grand final mode",
    )
    parser.add_argument(
        "--pattern",
        choices=["random", "favorites", "close"],
        default="random",
        help="Result pattern",
    )
    parser.add_argument(
        "--aggressiveness", type=float, default=1.0, help="Losers bracket aggressiveness"
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Output file path")


def create_validate_parser() -> argparse.ArgumentParser:
    """Create parser for validate subcommand."""
    parser = argparse.ArgumentParser(description="Validate a saved tournament")
    add_validate_arguments(parser)
    return parser


def add_validate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file", help="Tournament file (JSON)")
    parser.add_argument("--detailed", action="store_true", help="Show violations")


def create_unit_parser() -> argparse.ArgumentParser:
    """Create parser for unit subcommand."""
    parser = argparse.ArgumentParser(description="Run unit tests")
    add_unit_arguments(parser)
    return parser


def add_unit_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--module", help="Module to test")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")


def create_benchmark_parser() -> argparse.ArgumentParser:
    """Create parser for benchmark subcommand."""
    parser = argparse.ArgumentParser(description="Performance benchmarking")
    add_benchmark_arguments(parser)
    return parser


def add_benchmark_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--size", type=int, default=64, help="Players per tournament")
    parser.add_argument("--tables", type=int, default=8, help="Number of tables")
    parser.add_argument("--iterations", type=int, default=5, help="Iterations")


COMMAND_RUNNERS = {
    "generate": (create_generate_parser, run_generate_command),
    "validate": (create_validate_parser, run_validate_command),
    "unit": (create_unit_parser, run_unit_command),
    "benchmark": (create_benchmark_parser, run_benchmark_command),
}


def create_main_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="python -m tablebracket.testing",
        description="Table Bracket testing tools",
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Run in interactive mode"
    )
    subparsers = parser.add_subparsers(title="commands")

    generate = subparsers.add_parser("generate", help=COMMANDS["generate"]["description"])
    add_generate_arguments(generate)
    generate.set_defaults(func=run_generate_command)

    validate = subparsers.add_parser("validate", help=COMMANDS["validate"]["description"])
    add_validate_arguments(validate)
    validate.set_defaults(func=run_validate_command)

    unit = subparsers.add_parser("unit", help=COMMANDS["unit"]["description"])
    add_unit_arguments(unit)
    unit.set_defaults(func=run_unit_command)

    benchmark = subparsers.add_parser(
        "benchmark", help=COMMANDS["benchmark"]["description"]
    )
    add_benchmark_arguments(benchmark)
    benchmark.set_defaults(func=run_benchmark_command)
    return parser


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict({"prompt": "#00aa00 bold"})
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("bracket-test> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")
            if command not in COMMAND_RUNNERS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            create_parser, runner = COMMAND_RUNNERS[command]
            try:
                runner(create_parser().parse_args(parts[1:]))
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except TableBracketException as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode, or interactive mode with -i or no command."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive or not hasattr(args, "func"):
        return run_interactive_mode()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
