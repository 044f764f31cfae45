"""CLI entry point for the Mastermind solver."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from .analysis import analyze_games
from .combinatorics import universe_size
from .errors import InvalidArgument
from .game import GameConfig
from .runner import GameSession, iter_all_codes, result_from_stats
from .solver import GameSolver


def parse_secret(secret_str: str, config: GameConfig) -> list:
    """Parse secret from comma-separated symbols."""
    secret = [x.strip() for x in secret_str.split(',')]
    if len(secret) != config.code_length:
        raise InvalidArgument(f"Secret must have {config.code_length} values")
    unknown = [x for x in secret if x not in config.alphabet]
    if unknown:
        raise InvalidArgument(f"Secret values must be among: {''.join(config.alphabet)}")
    if not config.allow_repetition and len(set(secret)) != len(secret):
        raise InvalidArgument("Duplicate symbols not allowed in this game")
    return secret


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def write_tree(solver: GameSolver, output_path: Path):
    """Build the decision tree and save it as JSON."""
    tree = solver.build_tree()
    with open(output_path, 'w') as f:
        json.dump({"config": asdict(solver.config), **tree.to_dict()}, f)

    print(f"Decision tree: {len(tree)} nodes, {len(tree.leaves())} leaves, "
          f"{len(tree.unresolved())} unresolved")
    print(f"Root guess: {tree.root.guess}")
    print(f"Tree saved to: {output_path}")


def run_all_codes(config: GameConfig, output_path: Path):
    """Solve every possible secret and print the aggregate analysis."""
    total = universe_size(len(config.alphabet), config.code_length, config.allow_repetition)
    results = []

    with open(output_path, 'a') as f:
        for index, (secret, stats, duration) in enumerate(iter_all_codes(config)):
            results.append(stats)
            result = result_from_stats(config, secret, stats, duration)
            f.write(json.dumps(asdict(result)) + '\n')
            if (index + 1) % 50 == 0 or index + 1 == total:
                print(f"\r  [{index + 1}/{total}] games simulated", end="", flush=True)
    print()

    analysis = analyze_games(results)
    print("=" * 60)
    print("ANALYSIS")
    print("=" * 60)
    for key, value in asdict(analysis).items():
        print(f"{key:>26}: {value}")
    print(f"\nResults saved to: {output_path}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Mastermind solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a known secret
  python -m mastermind_solver.main --secret "2,7,9"

  # Solve 10 random secrets
  python -m mastermind_solver.main --runs 10 --seed 1

  # Solve every possible secret and print the analysis
  python -m mastermind_solver.main --all

  # Precompute the decision tree
  python -m mastermind_solver.main --tree --output outputs/tree.json
        """
    )

    # Game configuration
    game_group = parser.add_argument_group('game configuration')
    game_group.add_argument('--symbols', type=str, default='123456789',
                            help='Alphabet, one character per symbol (default: 123456789)')
    game_group.add_argument('--length', type=int, default=3,
                            help='Code length (default: 3)')
    game_group.add_argument('--allow-repetition', action='store_true',
                            help='Allow repeated symbols (tree building only)')
    game_group.add_argument('--max-turns', type=int, default=12,
                            help='Maximum turns (default: 12)')
    game_group.add_argument('--secret', type=str, default=None,
                            help='Predefined secret as comma-separated symbols (e.g., "2,7,9")')

    # Execution
    exec_group = parser.add_argument_group('execution')
    exec_group.add_argument('--runs', type=int, default=1,
                            help='Number of games to run (default: 1)')
    exec_group.add_argument('--all', action='store_true',
                            help='Play every possible secret once')
    exec_group.add_argument('--tree', action='store_true',
                            help='Build the decision tree instead of playing')
    exec_group.add_argument('--output', type=str, default=None,
                            help='Output file (default: outputs/results_TIMESTAMP.jsonl)')
    exec_group.add_argument('--seed', type=int, default=None,
                            help='Random seed for reproducibility')
    exec_group.add_argument('--verbose', action='store_true',
                            help='Verbose logging')

    args = parser.parse_args(argv)

    if args.length < 1:
        parser.error("--length must be at least 1")

    if args.runs < 1:
        parser.error("--runs must be at least 1")

    if not args.allow_repetition and len(args.symbols) < args.length:
        parser.error(f"Need at least {args.length} symbols when repetition is not allowed")

    if args.allow_repetition and not args.tree:
        parser.error("Solving with repeated symbols is not supported; use --tree")

    configure_logging(args.verbose)

    game_config = GameConfig(
        alphabet=tuple(args.symbols),
        code_length=args.length,
        allow_repetition=args.allow_repetition,
        max_turns=args.max_turns
    )

    # Parse secret if provided
    predefined_secret = None
    if args.secret:
        try:
            predefined_secret = parse_secret(args.secret, game_config)
        except InvalidArgument as e:
            parser.error(str(e))
        print(f"Using predefined secret: {predefined_secret}")

    # Setup output file
    if args.output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        suffix = "json" if args.tree else "jsonl"
        prefix = "tree" if args.tree else "results"
        output_path = Path("outputs") / f"{prefix}_{timestamp}.{suffix}"
    else:
        output_path = Path(args.output)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"Config: {len(game_config.alphabet)} symbols, length {game_config.code_length}, "
          f"repetition={'yes' if game_config.allow_repetition else 'no'}, "
          f"max_turns={game_config.max_turns}")
    size = universe_size(len(game_config.alphabet), game_config.code_length,
                         game_config.allow_repetition)
    print(f"Universe: {size} codes")
    print(f"Output: {output_path}")
    print()

    if args.tree:
        write_tree(GameSolver(game_config), output_path)
        return

    if args.all:
        run_all_codes(game_config, output_path)
        return

    results_summary = {"wins": 0, "losses": 0}

    with open(output_path, 'a') as f:
        for run in range(1, args.runs + 1):
            print(f"Game {run}/{args.runs}")

            seed = None if args.seed is None else args.seed + run
            session = GameSession(game_config, secret=predefined_secret, seed=seed)
            result = session.run()

            outcome_key = {"win": "wins", "loss": "losses"}[result.outcome]
            results_summary[outcome_key] += 1

            # Write result
            f.write(json.dumps(asdict(result)) + '\n')
            f.flush()

            if result.outcome == "win":
                print(f"  Won in {result.total_turns} turns")
            else:
                print(f"  Lost after {result.total_turns} turns")

            if args.verbose:
                print(f"  Secret: {result.secret}")
                for turn, guess in enumerate(result.stats['attempted_guesses'], 1):
                    print(f"    Turn {turn}: {list(guess)}")

            print()

    # Final summary
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Total games: {args.runs}")
    print(f"Wins: {results_summary['wins']} ({results_summary['wins']/args.runs*100:.1f}%)")
    print(f"Losses: {results_summary['losses']} ({results_summary['losses']/args.runs*100:.1f}%)")
    print(f"\nResults saved to: {output_path}")


if __name__ == '__main__':
    sys.exit(main())
