"""Orchestrator for solving every secret across several game configurations."""

import argparse
import json
import logging
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from .analysis import analyze_games
from .game import GameConfig
from .runner import iter_all_codes, result_from_stats


def run_single_config(config: GameConfig, output_file: Path) -> dict:
    """
    Play every secret of one configuration.

    Runs in its own process; the solver and oracle are built inside
    iter_all_codes, so nothing is shared between configurations.

    Returns:
        Summary dict with results
    """
    start_time = time.time()
    results = []
    with open(output_file, 'w') as f:
        for secret, stats, game_duration in iter_all_codes(config):
            results.append(stats)
            result = result_from_stats(config, secret, stats, game_duration)
            f.write(json.dumps(asdict(result)) + '\n')
    duration = time.time() - start_time

    analysis = analyze_games(results)
    return {
        'config': config.label,
        'status': 'success',
        'games': len(results),
        'analysis': asdict(analysis),
        'total_duration': round(duration, 2),
        'output_file': str(output_file),
    }


def parse_lengths(lengths_str: str) -> list[int]:
    """Parse comma-separated code lengths."""
    try:
        lengths = [int(x.strip()) for x in lengths_str.split(',')]
    except ValueError as e:
        raise ValueError(f"Invalid lengths format: {e}")
    if not lengths or any(k < 1 for k in lengths):
        raise ValueError("Lengths must be positive integers")
    return lengths


def main(argv=None):
    """Main orchestrator entry point."""
    parser = argparse.ArgumentParser(
        description="Solve every secret for several code lengths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Lengths 2, 3 and 4 over the digits 1-9, in parallel
  python -m mastermind_solver.orchestrator --lengths "2,3,4" --parallel

  # Smaller alphabet
  python -m mastermind_solver.orchestrator --symbols 123456 --lengths "2,3"
        """
    )

    parser.add_argument('--lengths', type=str, required=True,
                        help='Comma-separated code lengths (e.g., "2,3,4")')
    parser.add_argument('--symbols', type=str, default='123456789',
                        help='Alphabet, one character per symbol (default: 123456789)')
    parser.add_argument('--max-turns', type=int, default=12,
                        help='Maximum turns (default: 12)')
    parser.add_argument('--parallel', action='store_true',
                        help='Run configurations in parallel (default: sequential)')
    parser.add_argument('--output-dir', type=str, default='outputs',
                        help='Output directory (default: outputs)')
    parser.add_argument('--batch-name', type=str, default=None,
                        help='Batch name (default: orchestrator_TIMESTAMP)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose logging')

    args = parser.parse_args(argv)

    try:
        lengths = parse_lengths(args.lengths)
    except ValueError as e:
        parser.error(str(e))

    too_long = [k for k in lengths if k > len(args.symbols)]
    if too_long:
        parser.error(f"Lengths {too_long} exceed the {len(args.symbols)} available symbols")

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.batch_name:
        batch_name = args.batch_name
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        batch_name = f"orchestrator_{timestamp}"

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    configs = [GameConfig(alphabet=tuple(args.symbols), code_length=k,
                          allow_repetition=False, max_turns=args.max_turns)
               for k in lengths]

    print("=" * 70)
    print("MASTERMIND SOLVER - ORCHESTRATOR")
    print("=" * 70)
    print(f"Batch name: {batch_name}")
    print(f"Configurations: {', '.join(c.label for c in configs)}")
    print(f"Execution: {'parallel' if args.parallel else 'sequential'}")
    print(f"Output directory: {output_dir}")
    print("=" * 70)
    print()

    tasks = [(config, output_dir / f"{batch_name}_{config.label}.jsonl") for config in configs]
    results = []

    if args.parallel:
        print("Running configurations in parallel...")
        with ProcessPoolExecutor(max_workers=len(tasks)) as executor:
            futures = {executor.submit(run_single_config, *task): task[0].label for task in tasks}

            for future in as_completed(futures):
                label = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    print(f"✗ {label}: Unexpected error - {str(e)[:80]}")
                    results.append({'config': label, 'status': 'error', 'error': str(e)})
                    continue
                results.append(result)
                print(f"✓ {label}: {result['games']} games, "
                      f"avg guesses: {result['analysis']['avg_guesses']:.2f}")
    else:
        print("Running configurations sequentially...")
        for i, task in enumerate(tasks, 1):
            label = task[0].label
            print(f"[{i}/{len(tasks)}] Solving {label}...")
            try:
                result = run_single_config(*task)
            except Exception as e:
                print(f"  ✗ error: {str(e)[:80]}")
                results.append({'config': label, 'status': 'error', 'error': str(e)})
                continue
            results.append(result)
            print(f"  ✓ {result['games']} games, avg guesses: {result['analysis']['avg_guesses']:.2f}")
            print()

    summary = {
        'batch_name': batch_name,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'config': {
            'symbols': args.symbols,
            'lengths': lengths,
            'max_turns': args.max_turns,
        },
        'execution': {'parallel': args.parallel},
        'results': results,
    }

    summary_file = output_dir / f"{batch_name}_summary.json"
    with open(summary_file, 'w') as f:
        json.dump(summary, f, indent=2)

    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)

    successful = [r for r in results if r['status'] == 'success']
    failed = [r for r in results if r['status'] != 'success']

    for r in successful:
        a = r['analysis']
        print(f"  {r['config']:15s} games: {r['games']:5d}  avg: {a['avg_guesses']:5.2f}  "
              f"median: {a['median']:4.1f}  max: {a['max_guesses']:3d}  unresolved: {a['unresolved']}")

    if failed:
        print(f"\nFailed configurations ({len(failed)}/{len(results)}):")
        for r in failed:
            print(f"  {r['config']:15s} {r.get('error', 'Unknown')[:50]}")

    print(f"\nSummary saved to: {summary_file}")
    print("=" * 70)

    return 0 if not failed else 1


if __name__ == '__main__':
    sys.exit(main())
