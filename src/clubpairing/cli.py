"""Command-line shell for Club Pairing.

Every sub-command loads the club from a JSON state file, runs one engine
command and saves the club again if anything changed. ``shell`` keeps the
club in memory and accepts the same sub-commands interactively.
"""

# Club Pairing
# Copyright (C) 2025  Club Pairing developers
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
import shlex
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from dateutil import parser as date_parser
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from clubpairing.constants import APP_NAME
from clubpairing.controllers.club import Club
from clubpairing.exceptions import ClubPairingException
from clubpairing.models.command_result import CommandResult
from clubpairing.models.enums import AgeGroup, ErrorKind, GameResult
from clubpairing.models.player import Player
from clubpairing.storage import default_state_path, load_club, save_club
from clubpairing.utils import set_verbose, setup_logger
from clubpairing.utils.export import format_points, standings_filename

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


DIVISIONS = [group.value for group in AgeGroup]
RESULT_TOKENS = ["1-0", "0.5-0.5", "1/2-1/2", "0-1"]

# Command definitions with their options, used by help and autocomplete
COMMANDS = {
    "add": {
        "description": "Register a player",
        "options": {
            "<name>": "Player name",
            "--age": "Age group (u9/u11/u13)",
            "--dob": "Date of birth, derives the age group when --age is omitted",
            "--rating": "Initial rating (default 1200)",
            "--active": "Make the player eligible straight away",
        },
    },
    "remove": {
        "description": "Remove a player not playing in an active division",
        "options": {"<player>": "Row number, id or exact name"},
    },
    "toggle": {
        "description": "Toggle a player's eligibility",
        "options": {"<player>": "Row number, id or exact name"},
    },
    "players": {
        "description": "List registered players",
        "options": {"--division": "Only this age group"},
    },
    "start": {
        "description": "Start a division with its eligible players",
        "options": {"<division>": "u9/u11/u13"},
    },
    "pairings": {
        "description": "Show the current round's boards",
        "options": {"<division>": "u9/u11/u13"},
    },
    "result": {
        "description": "Enter a board result",
        "options": {
            "<division>": "u9/u11/u13",
            "<board>": "Board number (1-based)",
            "<result>": "1-0, 0.5-0.5 or 0-1",
        },
    },
    "next": {
        "description": "Pair the next round once every result is in",
        "options": {"<division>": "u9/u11/u13"},
    },
    "standings": {
        "description": "Show the division standings",
        "options": {"<division>": "u9/u11/u13"},
    },
    "export": {
        "description": "Write the standings as CSV",
        "options": {"<division>": "u9/u11/u13", "--output": "CSV file path"},
    },
    "archive": {
        "description": "Close a division's tournament",
        "options": {"<division>": "u9/u11/u13"},
    },
    "clear": {
        "description": "Delete every player and tournament",
        "options": {"--yes": "Confirm"},
    },
    "help": {"description": "Show help for a command", "options": {}},
    "exit": {"description": "Leave the interactive shell", "options": {}},
}


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:12}{Colors.ENDC} - {info['description']}")
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
            print(f"  {Colors.OKCYAN}{option:12}{Colors.ENDC} {description}")
    print()


def report(result: CommandResult, success_message: str = "") -> int:
    """Print a command outcome and turn it into an exit code."""
    if not result:
        print(f"{Colors.FAIL}Error: {result.message}{Colors.ENDC}")
        return 1
    if result.error is ErrorKind.ALREADY_DECIDED:
        print(f"{Colors.WARNING}{result.message}{Colors.ENDC}")
    elif success_message or result.message:
        print(f"{Colors.OKGREEN}{success_message or result.message}{Colors.ENDC}")
    return 0


# ========== Argument Types ==========


def parse_division(value: str) -> AgeGroup:
    try:
        return AgeGroup.parse(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"unknown division {value!r}, expected one of {', '.join(DIVISIONS)}"
        )


def parse_result(value: str) -> GameResult:
    result = GameResult.parse(value)
    if result is None:
        raise argparse.ArgumentTypeError(
            f"unknown result {value!r}, expected one of {', '.join(RESULT_TOKENS)}"
        )
    return result


def parse_birth_date(value: str) -> date:
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError(f"unreadable date {value!r}")


def resolve_player(club: Club, ref: str) -> Optional[Player]:
    """Find a player by listing row number, id, or exact name."""
    players = club.registry.players()
    if ref.isdigit() and 1 <= int(ref) <= len(players):
        return players[int(ref) - 1]
    player = club.registry.find(ref)
    if player is not None:
        return player
    named = [p for p in players if p.name == ref]
    if len(named) == 1:
        return named[0]
    return None


# ========== Commands ==========


def run_add_command(club: Club, args: argparse.Namespace) -> int:
    result = club.add_player(
        " ".join(args.name),
        age_group=args.age,
        initial_rating=args.rating,
        date_of_birth=args.dob,
    )
    if result and args.active:
        club.set_eligible(result.value.id, True)
    return report(result)


def run_remove_command(club: Club, args: argparse.Namespace) -> int:
    player = resolve_player(club, args.player)
    if player is None:
        print(f"{Colors.FAIL}Error: no player {args.player!r}{Colors.ENDC}")
        return 1
    return report(club.remove_player(player.id))


def run_toggle_command(club: Club, args: argparse.Namespace) -> int:
    player = resolve_player(club, args.player)
    if player is None:
        print(f"{Colors.FAIL}Error: no player {args.player!r}{Colors.ENDC}")
        return 1
    result = club.toggle_eligible(player.id)
    state = "active" if result and result.value.is_active else "inactive"
    return report(result, f"{player.name} is now {state}")


def run_players_command(club: Club, args: argparse.Namespace) -> int:
    players = club.registry.players()
    if not players:
        print("No players added yet.")
        return 0
    print(f"\n{Colors.BOLD}{'#':>3}  {'Active':6}  {'Name':24}  {'Age':4}  {'Rating':>6}{Colors.ENDC}")
    for row, p in enumerate(players, start=1):
        if args.division and p.age_group != args.division:
            continue
        mark = "x" if p.is_active else ""
        print(f"{row:>3}  {mark:^6}  {p.name:24}  {p.age_group.label:4}  {p.rating:>6}")
    print()
    return 0


def run_start_command(club: Club, args: argparse.Namespace) -> int:
    code = report(club.start_tournament(args.division))
    if code == 0:
        print_pairings(club, args.division)
    return code


def print_pairings(club: Club, division: AgeGroup) -> int:
    tournament = club.tournament(division)
    if tournament is None or tournament.current_round is None:
        print("No active tournament.")
        return 1
    names = {p.id: p.name for p in club.registry}
    current = tournament.current_round
    print(f"\n{Colors.BOLD}{division.label} - Round {tournament.round_number}{Colors.ENDC}")
    print(f"{'Board':>5}  {'White':24}  {'Black':24}  Result")
    for board, pairing in enumerate(current.pairings, start=1):
        black = names.get(pairing.black, pairing.black) if pairing.black else "-"
        print(
            f"{board:>5}  {names.get(pairing.white, pairing.white):24}  "
            f"{black:24}  {pairing.result_display}"
        )
    if tournament.pending_boards():
        print(f"{Colors.FAIL}{tournament.pending_boards()} game(s) pending{Colors.ENDC}")
    print()
    return 0


def run_pairings_command(club: Club, args: argparse.Namespace) -> int:
    return print_pairings(club, args.division)


def run_result_command(club: Club, args: argparse.Namespace) -> int:
    result = club.submit_result(args.division, args.board - 1, args.result)
    code = report(result, f"Board {args.board}: {args.result.display}")
    if code == 0:
        for player_id, (old, new) in result.value.rating_changes.items():
            print(f"  {club.registry.get(player_id).name}: {old} -> {new} ({new - old:+d})")
    if code == 0 and club.is_round_complete(args.division):
        print(f"{Colors.OKCYAN}Round complete, ready for the next round{Colors.ENDC}")
    return code


def run_next_command(club: Club, args: argparse.Namespace) -> int:
    code = report(club.advance_round(args.division))
    if code == 0:
        print_pairings(club, args.division)
    return code


def run_standings_command(club: Club, args: argparse.Namespace) -> int:
    result = club.get_standings(args.division)
    if not result:
        return report(result)
    print(f"\n{Colors.BOLD}{args.division.label} Standings{Colors.ENDC}")
    print(f"{'#':>3}  {'Name':24}  {'Pts':>4}  {'Rating':>6}")
    for row in result.value:
        print(f"{row.rank:>3}  {row.name:24}  {format_points(row.points):>4}  {row.rating:>6}")
    print()
    return 0


def run_export_command(club: Club, args: argparse.Namespace) -> int:
    result = club.export_standings_csv(args.division)
    if not result:
        return report(result)
    output = Path(args.output or standings_filename(args.division))
    try:
        output.write_text(result.value, encoding="utf-8")
    except OSError as e:
        logger.error("Could not write %s: %s", output, e)
        print(f"{Colors.FAIL}Error: could not write {output}: {e}{Colors.ENDC}")
        return 1
    print(f"{Colors.OKGREEN}Standings saved to: {output}{Colors.ENDC}")
    return 0


def run_archive_command(club: Club, args: argparse.Namespace) -> int:
    return report(club.archive(args.division), f"{args.division.label} archived")


def run_clear_command(club: Club, args: argparse.Namespace) -> int:
    if not args.yes:
        print(f"{Colors.WARNING}Refusing to clear without --yes{Colors.ENDC}")
        return 1
    return report(club.clear_all(), "Cleared all players and tournaments")


# ========== Parsers ==========


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="clubpairing",
        description=f"{APP_NAME}: Swiss pairings, results and Elo for club divisions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clubpairing add Alice --age u11 --active
  clubpairing start u11
  clubpairing result u11 1 1-0
  clubpairing next u11
  clubpairing standings u11
  clubpairing shell
        """,
    )
    parser.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Club state file (default: per-user app data folder)",
    )
    parser.add_argument(
        "--k-factor",
        type=int,
        default=None,
        help="Change the Elo K constant stored with the club",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command")

    add_parser = subparsers.add_parser("add", help=COMMANDS["add"]["description"])
    add_parser.add_argument("name", nargs="+")
    add_parser.add_argument("--age", type=parse_division)
    add_parser.add_argument("--dob", type=parse_birth_date)
    add_parser.add_argument("--rating", type=int)
    add_parser.add_argument("--active", action="store_true")
    add_parser.set_defaults(func=run_add_command, mutates=True)

    remove_parser = subparsers.add_parser("remove", help=COMMANDS["remove"]["description"])
    remove_parser.add_argument("player")
    remove_parser.set_defaults(func=run_remove_command, mutates=True)

    toggle_parser = subparsers.add_parser("toggle", help=COMMANDS["toggle"]["description"])
    toggle_parser.add_argument("player")
    toggle_parser.set_defaults(func=run_toggle_command, mutates=True)

    players_parser = subparsers.add_parser(
        "players", help=COMMANDS["players"]["description"]
    )
    players_parser.add_argument("--division", type=parse_division)
    players_parser.set_defaults(func=run_players_command, mutates=False)

    for name, func, mutates in (
        ("start", run_start_command, True),
        ("pairings", run_pairings_command, False),
        ("next", run_next_command, True),
        ("standings", run_standings_command, False),
        ("archive", run_archive_command, True),
    ):
        division_parser = subparsers.add_parser(name, help=COMMANDS[name]["description"])
        division_parser.add_argument("division", type=parse_division)
        division_parser.set_defaults(func=func, mutates=mutates)

    result_parser = subparsers.add_parser("result", help=COMMANDS["result"]["description"])
    result_parser.add_argument("division", type=parse_division)
    result_parser.add_argument("board", type=int)
    result_parser.add_argument("result", type=parse_result)
    result_parser.set_defaults(func=run_result_command, mutates=True)

    export_parser = subparsers.add_parser("export", help=COMMANDS["export"]["description"])
    export_parser.add_argument("division", type=parse_division)
    export_parser.add_argument("--output")
    export_parser.set_defaults(func=run_export_command, mutates=False)

    clear_parser = subparsers.add_parser("clear", help=COMMANDS["clear"]["description"])
    clear_parser.add_argument("--yes", action="store_true")
    clear_parser.set_defaults(func=run_clear_command, mutates=True)

    shell_parser = subparsers.add_parser("shell", help="Interactive mode with autocomplete")
    shell_parser.set_defaults(func=None, mutates=False)

    return parser


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    division_completer = WordCompleter(DIVISIONS)
    completions = {}
    for cmd, info in COMMANDS.items():
        options = [o for o in info["options"] if o.startswith("--")]
        if "<division>" in info["options"]:
            completions[cmd] = division_completer
        elif options:
            completions[cmd] = WordCompleter(options)
        else:
            completions[cmd] = None
    completions["result"] = NestedCompleter.from_nested_dict(
        {division: None for division in DIVISIONS}
    )
    return NestedCompleter.from_nested_dict(completions)


def execute(club: Club, state_path: Path, args: argparse.Namespace) -> int:
    """Run one parsed command and save the club if it changed state."""
    code = args.func(club, args)
    if code == 0 and args.mutates:
        save_club(club, state_path)
    return code


def run_interactive_mode(club: Club, state_path: Path) -> int:
    """Run in interactive mode with autocomplete."""
    parser = create_parser()
    style = Style.from_dict({"prompt": "#00aa00 bold"})
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    print(f"{Colors.OKBLUE}{APP_NAME}{Colors.ENDC} - state file {state_path}")
    print(f"Type {Colors.BOLD}help{Colors.ENDC} to see all available commands\n")

    while True:
        try:
            user_input = session.prompt("club> ").strip()
            if not user_input:
                continue
            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if user_input in ["help", "?"]:
                print_commands_list()
                continue
            if user_input.startswith("help "):
                print_command_help(user_input.split()[1])
                continue

            try:
                args = parser.parse_args(shlex.split(user_input))
                if args.command in (None, "shell"):
                    print_commands_list()
                    continue
                execute(club, state_path, args)
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except ClubPairingException as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the clubpairing CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_verbose(True)

    state_path = args.state or default_state_path()
    try:
        club = load_club(state_path)
    except ClubPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    if args.k_factor is not None and args.k_factor != club.config.k_factor:
        club.config.k_factor = args.k_factor
        club.result_recorder.k_factor = args.k_factor
        save_club(club, state_path)
        logger.info("K factor set to %d", args.k_factor)

    if args.command is None or args.command == "shell":
        if args.command is None and args.k_factor is not None:
            return 0
        return run_interactive_mode(club, state_path)

    try:
        return execute(club, state_path, args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ClubPairingException as e:
        logger.error("Command failed: %s", e, exc_info=True)
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
