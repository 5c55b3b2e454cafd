"""Testing CLI for Spread Pairing.

This module provides an interactive command-line console for generating
random tournaments, inspecting their standings, running what-if simulations
and asking the policy advisor for a recommendation.
"""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
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
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from spreadpairing.constants import POLICY_NAMES
from spreadpairing.exceptions import SpreadPairingException
from spreadpairing.models.policy import PairingKind, PairingPolicy
from spreadpairing.models.standing import Standing
from spreadpairing.pairing.advisor import (
    PAIRING_GOALS,
    QUICK_RECOMMENDATIONS,
    DirectorIntent,
    analyze_policy,
    goal_score_label,
    recommend_policy,
)
from spreadpairing.simulation.draft import ScoreDraft
from spreadpairing.testing.rtg import (
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    RTGConfig,
    check_tournament_integrity,
    count_rematches,
)
from spreadpairing.utils import setup_logger

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
        "description": "Generate and play a random tournament (RTG)",
        "options": {
            "--players": "Number of players (default: 16)",
            "--rounds": "Number of rounds (default: 7)",
            "--policy": "Pairing policy (" + "/".join(POLICY_NAMES) + ")",
            "--no-rematch-avoidance": "Allow rematches without searching",
            "--gibsonize": "Pair clinched competitors apart",
            "--distribution": "Rating distribution (uniform/normal/skewed/club)",
            "--pattern": "Result pattern (realistic/balanced/upset_friendly/random)",
            "--seed": "Random seed for reproducibility",
            "--output": "Write the tournament to a JSON file",
        },
    },
    "standings": {
        "description": "Show standings of the last generated tournament",
        "options": {
            "--round": "Standings entering this round (default: final)",
            "--top": "Only show the first N rows",
        },
    },
    "whatif": {
        "description": "Simulate a round of the last tournament with draft scores",
        "options": {
            "--round": "Round to simulate (default: last round)",
            "--player1-score": "Draft score for player 1 (default: 400)",
            "--player2-score": "Draft score for player 2 (default: 350)",
        },
    },
    "recommend": {
        "description": "Recommend a pairing policy for a tournament",
        "options": {
            "--players": "Expected field size (default: 32)",
            "--rounds": "Planned rounds (default: 7)",
            "--level": "Competitive level (elite/competitive/casual)",
            "--aim": "Primary aim (suspense/fairness/no-repeats)",
            "--goals": "Comma separated goal ids (" + ",".join(PAIRING_GOALS) + ")",
            "--quick": "Preset (" + "/".join(QUICK_RECOMMENDATIONS) + ")",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}

AIMS = {
    "suspense": "Max suspense",
    "fairness": "Max fairness",
    "no-repeats": "No repeats",
}

# Last tournament generated in this process, used by standings and whatif
SESSION: Dict[str, Any] = {}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}+---------------------------------------------------------------+
|                                                               |
|                     SPREAD TEST - CLI                         |
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
            print(f"  {Colors.OKCYAN}{option:24}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        # Support both "/command" and "command"
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


def print_standings(standings: List[Standing], top: Optional[int] = None) -> None:
    rows = standings[:top] if top else standings
    print(f"\n{Colors.BOLD}{'#':>3}  {'Name':<16}{'W-L-D':>9}{'Pts':>6}{'Spread':>8}{'Rtg':>6}{Colors.ENDC}")
    for standing in rows:
        record = f"{standing.wins}-{standing.losses}-{standing.draws}"
        print(
            f"{standing.rank:>3}  {standing.name:<16}{record:>9}"
            f"{standing.points:>6.1f}{standing.spread:>+8d}{standing.rating:>6}"
        )
    print()


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate (RTG) command."""
    print(f"\n{Colors.BOLD}Generating tournament...{Colors.ENDC}")

    policy = PairingPolicy(
        kind=PairingKind.parse(args.policy),
        avoid_rematches=not args.no_rematch_avoidance,
        gibsonization=args.gibsonize,
    )
    config = RTGConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        policy=policy,
        rating_distribution=RatingDistribution(args.distribution),
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
    )
    rtg = RandomTournamentGenerator(config)
    tournament_data = rtg.generate_complete_tournament()
    SESSION["rtg"] = rtg
    SESSION["tournament"] = tournament_data

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rtg.export_json_format(tournament_data), encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Tournament Generated:{Colors.ENDC}")
    print(f"  Policy: {policy.kind.display_name}")
    print(f"  Players: {len(tournament_data['competitors'])}")
    print(f"  Rounds: {len(tournament_data['rounds'])}")
    print(f"  Rematches: {count_rematches(tournament_data)}")

    issues = check_tournament_integrity(tournament_data)
    if issues:
        print(f"  {Colors.FAIL}Integrity issues: {len(issues)}{Colors.ENDC}")
        for issue in issues:
            print(f"    {issue}")
        return 1
    print(f"  {Colors.OKGREEN}Integrity checks passed{Colors.ENDC}")
    return 0


def _require_tournament() -> Optional[Dict[str, Any]]:
    tournament = SESSION.get("tournament")
    if tournament is None:
        print(f"{Colors.FAIL}Error: run 'generate' first{Colors.ENDC}")
    return tournament


def run_standings_command(args: argparse.Namespace) -> int:
    """Print standings of the current tournament."""
    tournament = _require_tournament()
    if tournament is None:
        return 1
    manager = SESSION["rtg"].round_manager
    standings = manager.standings(tournament["history"], before_round=args.round)
    label = f"entering round {args.round}" if args.round else "final"
    print(f"\n{Colors.BOLD}Standings ({label}):{Colors.ENDC}")
    print_standings(standings, args.top)
    return 0


def run_whatif_command(args: argparse.Namespace) -> int:
    """Simulate one round of the current tournament with draft scores."""
    tournament = _require_tournament()
    if tournament is None:
        return 1
    history = tournament["history"]
    manager = SESSION["rtg"].round_manager
    round_number = args.round or history.rounds_paired

    draft = ScoreDraft(
        history.matches_for_round(round_number),
        default_scores=(args.player1_score, args.player2_score),
    )
    projected = manager.simulate_round(history, round_number, draft.scores())

    print(
        f"\n{Colors.BOLD}What-if for round {round_number} "
        f"(every player 1 scores {args.player1_score}-{args.player2_score}):{Colors.ENDC}\n"
    )
    for entry in projected:
        change = f"{entry.rank_change:+d}" if entry.rank_change else ""
        tags = ", ".join(entry.tags)
        color = Colors.OKGREEN if entry.rank_change > 0 else Colors.ENDC
        if entry.rank_change < 0:
            color = Colors.WARNING
        print(
            f"  {entry.rank:>3}  {entry.standing.name:<16}{color}{change:>5}{Colors.ENDC}"
            f"  {Colors.OKCYAN}{tags}{Colors.ENDC}"
        )
    print()
    return 0


def run_recommend_command(args: argparse.Namespace) -> int:
    """Ask the policy advisor for a recommendation."""
    if args.quick:
        kind, description = QUICK_RECOMMENDATIONS[args.quick]
        print(f"\n{Colors.BOLD}Recommended: {kind.display_name}{Colors.ENDC}")
        print(f"  {description}")
        print_policy_goals(kind)
        return 0

    goals = [goal.strip() for goal in (args.goals or "").split(",") if goal.strip()]
    intent = DirectorIntent(
        primary=AIMS.get(args.aim, ""),
        player_count=args.players,
        rounds=args.rounds,
        competitive_level=args.level,
        priority_goals=goals,
    )
    recommendation = recommend_policy(intent)

    print(f"\n{Colors.BOLD}Recommended: {recommendation.primary.display_name}{Colors.ENDC}")
    print(f"  {recommendation.reasoning}")
    alternatives = ", ".join(kind.display_name for kind in recommendation.alternatives)
    print(f"  Alternatives: {alternatives}")
    for warning in recommendation.warnings:
        print(f"  {Colors.WARNING}{warning}{Colors.ENDC}")
    print_policy_goals(recommendation.primary)
    return 0


def print_policy_goals(kind: PairingKind) -> None:
    analysis = analyze_policy(kind)
    print(f"\n  {Colors.BOLD}Goal scores (overall {analysis.overall_score}/10):{Colors.ENDC}")
    for goal_id, score in analysis.goals.items():
        name = PAIRING_GOALS[goal_id].name
        print(f"    {name:18}{score:>3}  {goal_score_label(score)}")
    print()


def add_generate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--players", type=int, default=16, help="Number of players")
    parser.add_argument("--rounds", type=int, default=7, help="Number of rounds")
    parser.add_argument("--policy", choices=list(POLICY_NAMES), default="swiss")
    parser.add_argument("--no-rematch-avoidance", action="store_true")
    parser.add_argument("--gibsonize", action="store_true")
    parser.add_argument(
        "--distribution",
        choices=[d.value for d in RatingDistribution],
        default="normal",
    )
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default="realistic",
    )
    parser.add_argument("--seed", type=int)
    parser.add_argument("--output")


def add_standings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--round", type=int)
    parser.add_argument("--top", type=int)


def add_whatif_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--round", type=int)
    parser.add_argument("--player1-score", type=int, default=400)
    parser.add_argument("--player2-score", type=int, default=350)


def add_recommend_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--players", type=int, default=32)
    parser.add_argument("--rounds", type=int, default=7)
    parser.add_argument(
        "--level", choices=["elite", "competitive", "casual"], default="competitive"
    )
    parser.add_argument("--aim", choices=list(AIMS))
    parser.add_argument("--goals")
    parser.add_argument("--quick", choices=list(QUICK_RECOMMENDATIONS))


SUBCOMMANDS = {
    "generate": (add_generate_arguments, run_generate_command),
    "standings": (add_standings_arguments, run_standings_command),
    "whatif": (add_whatif_arguments, run_whatif_command),
    "recommend": (add_recommend_arguments, run_recommend_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create parser for a single subcommand (used by interactive mode)."""
    add_arguments, _ = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="spread-test",
        description="Testing CLI for Spread Pairing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  spread-test

  # Generate tournament
  spread-test generate --players 24 --rounds 7 --policy fonte-swiss --seed 7

  # Recommend a policy
  spread-test recommend --players 12 --level casual --aim suspense
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, func) in SUBCOMMANDS.items():
        sub = subparsers.add_parser(command, help=COMMANDS[command]["description"])
        add_arguments(sub)
        sub.set_defaults(func=func)
    return parser


def execute_command(command: str, args_list: List[str]) -> int:
    """Parse and run one interactive command line."""
    if command == "help":
        if args_list:
            print_command_help(args_list[0].lstrip("/"))
        else:
            print_commands_list()
        return 0
    _, func = SUBCOMMANDS[command]
    args = create_command_parser(command).parse_args(args_list)
    return func(args)


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            user_input = session.prompt("spread-test> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q", "/exit"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")
            if command == "exit":
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                execute_command(command, parts[1:])
            except SystemExit:
                # argparse exits on bad arguments
                continue
            except SpreadPairingException as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.warning("Command '%s' failed: %s", command, e)

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        try:
            return args.func(args)
        except SpreadPairingException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return 1
    parser.print_help()
    return 0


def main() -> int:
    """Main entry point for spread-test CLI."""
    if len(sys.argv) == 1:
        return run_interactive_mode()
    return run_standard_mode()


if __name__ == "__main__":
    sys.exit(main())
