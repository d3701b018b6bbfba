#!/usr/bin/env python3
"""
Minesweeper AI - Main entry point.

Usage:
    python main.py watch [--solver {easy,medium,hard}] [--games N]
    python main.py evaluate [--solver {easy,medium,hard}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from game import BoardConfig, GameSession, GameState
from solvers import SOLVERS, HintService
from evaluation import EvaluationConfig, Evaluator


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command line flags."""
    mines = args.mines if args.mines is not None else int(args.size * args.size * 0.15)
    return BoardConfig(size=args.size, num_mines=mines)


def watch(args: argparse.Namespace) -> None:
    """Watch a solver play, one turn at a time."""
    config = board_config(args)
    session = GameSession(config, seed=args.seed)
    solver = SOLVERS[args.solver](seed=args.seed)
    hints = HintService(seed=args.seed)

    print(f"Board: {config.size}x{config.size} with {config.num_mines} mines")
    wins = 0

    for game in range(args.games):
        session.reset()
        solver.reset()

        for _ in range(args.hints):
            result = session.hint(hints)
            print(f"Hint: {result.status.value} ({hints.remaining(session.hints_used)} left)")

        while session.is_playing:
            turn = session.play(solver)
            if turn.is_noop:
                break
            moves = ", ".join(
                f"{a.kind.name.lower()} ({a.row},{a.col}) via {a.reason}"
                for a in turn.actions
            )
            print(f"\n=== Game {game + 1}/{args.games} | Turn {session.turns_played} ===")
            print(f"Flags left: {session.flags_left} | {moves}")
            print(session.board.render())
            time.sleep(args.delay)

        if session.game_state == GameState.WON:
            wins += 1
            print("\n*** WIN! ***")
        else:
            print(f"\n*** {session.game_state.name} ***")

    print(f"\n=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific solver."""
    config = EvaluationConfig(board=board_config(args), num_games=args.games, seed=args.seed)
    solver = SOLVERS[args.solver](seed=args.seed)

    print(f"\nEvaluating {args.solver} over {args.games} games...")
    results = Evaluator(config).evaluate(solver)

    print(f"Results for {args.solver}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg turns: {results['avg_turns']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")
    print(f"  Avg guesses: {results['avg_guesses']:.1f}")


def compare(args: argparse.Namespace) -> None:
    """Compare all solver tiers."""
    config = EvaluationConfig(board=board_config(args), num_games=args.games, seed=args.seed)
    solvers = {name: cls(seed=args.seed) for name, cls in SOLVERS.items()}
    results = Evaluator(config).compare(solvers)

    print("\n" + "=" * 50)
    print("Solver Comparison Results")
    print("=" * 50)
    print(f"{'Solver':<10} {'Win Rate':<12} {'Avg Turns':<12} {'Avg Guesses':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<10} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_turns']:>10.1f} "
            f"{metrics['avg_guesses']:>10.1f}"
        )


def positive_int(value: str) -> int:
    """Argument type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--size", type=int, default=10, help="Board size (NxN)")
    parser.add_argument(
        "--mines", type=int, default=None, help="Number of mines (default: ~15%% of cells)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Minesweeper AI - Watch, evaluate and compare solver tiers"
    )
    parser.add_argument("--verbose", action="store_true", help="Log solver decisions")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch a solver play")
    watch_parser.add_argument("--solver", choices=sorted(SOLVERS), default="medium")
    watch_parser.add_argument("--games", type=positive_int, default=1, help="Number of games")
    watch_parser.add_argument("--delay", type=float, default=0.3, help="Delay between turns")
    watch_parser.add_argument("--hints", type=int, default=0, help="Hints to use before playing")
    add_board_arguments(watch_parser)

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a solver")
    eval_parser.add_argument("--solver", choices=sorted(SOLVERS), default="medium")
    eval_parser.add_argument("--games", type=positive_int, default=100, help="Number of games to play")
    add_board_arguments(eval_parser)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all solver tiers")
    compare_parser.add_argument("--games", type=positive_int, default=100, help="Number of games per solver")
    add_board_arguments(compare_parser)
    return parser


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "watch":
        watch(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
