"""Report generator for Mastermind solver results."""

import argparse
import json
import sys
from pathlib import Path
from datetime import datetime
from glob import glob
from typing import Optional
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib
from tabulate import tabulate

from .analysis import GameStats
from .game import GameConfig

# Use non-interactive backend for matplotlib
matplotlib.use('Agg')


def load_results(input_patterns: list[str], filter_config: Optional[str] = None,
                 filter_outcome: Optional[str] = None) -> pd.DataFrame:
    """
    Load results from JSONL files and return as DataFrame.

    Args:
        input_patterns: List of glob patterns for input files
        filter_config: Optional configuration label filter (e.g. "9x3-norep")
        filter_outcome: Optional outcome filter (win/loss)

    Returns:
        DataFrame with flattened result records
    """
    records = []

    for pattern in input_patterns:
        files = glob(pattern)
        for file_path in files:
            try:
                with open(file_path, 'r') as f:
                    for line in f:
                        line = line.strip()
                        if not line:
                            continue
                        result = json.loads(line)
                        config = GameConfig(**result['config'])
                        stats = GameStats.from_dict(result['stats'])

                        # Flatten result for DataFrame
                        record = {
                            'file': Path(file_path).name,
                            'config': config.label,
                            'num_symbols': len(config.alphabet),
                            'code_length': config.code_length,
                            'max_turns': config.max_turns,
                            'outcome': result['outcome'],
                            'total_turns': len(stats.attempted_guesses),
                            'repeated_guesses': len(stats.repeated_guesses),
                            'duration_seconds': result['duration_seconds'],
                            'secret': ''.join(str(s) for s in result['secret']),
                            'timestamp': result['timestamp'],
                        }

                        # Apply filters
                        if filter_config and record['config'] != filter_config:
                            continue
                        if filter_outcome and record['outcome'] != filter_outcome:
                            continue

                        records.append(record)

            except (OSError, KeyError, TypeError, json.JSONDecodeError) as e:
                print(f"Warning: Failed to load {file_path}: {e}", file=sys.stderr)
                continue

    if not records:
        raise ValueError("No valid result records found")

    return pd.DataFrame(records)


def calculate_statistics(df: pd.DataFrame) -> pd.DataFrame:
    """
    Calculate aggregate statistics per configuration.

    Returns:
        DataFrame with columns: config, total_games, wins, losses, win_rate,
                                avg_turns_when_won, median_turns, min_turns, max_turns,
                                repeat_guess_games, avg_duration
    """
    stats = []

    for label in df['config'].unique():
        config_df = df[df['config'] == label]

        total_games = len(config_df)
        wins = len(config_df[config_df['outcome'] == 'win'])
        losses = len(config_df[config_df['outcome'] == 'loss'])

        win_rate = wins / total_games if total_games > 0 else 0

        # Only calculate turn stats for wins
        win_df = config_df[config_df['outcome'] == 'win']
        avg_turns = win_df['total_turns'].mean() if len(win_df) > 0 else 0
        median_turns = float(win_df['total_turns'].median()) if len(win_df) > 0 else 0
        min_turns = int(win_df['total_turns'].min()) if len(win_df) > 0 else 0
        max_turns = int(win_df['total_turns'].max()) if len(win_df) > 0 else 0

        stats.append({
            'config': label,
            'total_games': total_games,
            'wins': wins,
            'losses': losses,
            'win_rate': win_rate,
            'avg_turns_when_won': round(avg_turns, 2),
            'median_turns': median_turns,
            'min_turns': min_turns,
            'max_turns': max_turns,
            'repeat_guess_games': int((config_df['repeated_guesses'] > 0).sum()),
            'avg_duration': round(config_df['duration_seconds'].mean(), 4),
        })

    stats_df = pd.DataFrame(stats)
    stats_df = stats_df.sort_values('avg_turns_when_won', ascending=True)
    return stats_df


def turn_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """Number of won games per (config, turns) pair, one column per config."""
    win_df = df[df['outcome'] == 'win']
    return win_df.groupby(['total_turns', 'config']).size().unstack(fill_value=0)


def generate_html_report(df: pd.DataFrame, stats_df: pd.DataFrame, output_path: Path):
    """Generate HTML report with a turn distribution chart."""

    fig_dir = output_path.parent / f"{output_path.stem}_files"
    fig_dir.mkdir(exist_ok=True)

    # Turns-to-win histogram per configuration
    plt.figure(figsize=(10, 6))
    distribution = turn_distribution(df)
    if len(distribution) > 0:
        distribution.plot(kind='bar', ax=plt.gca())
        plt.xlabel('Turns to Win')
        plt.ylabel('Games')
        plt.title('Turn Distribution for Winning Games')
        plt.tight_layout()
    plt.savefig(fig_dir / 'turn_distribution.png', dpi=100)
    plt.close()

    rows = ""
    for _, row in stats_df.iterrows():
        rows += f"""                <tr>
                    <td><strong>{row['config']}</strong></td>
                    <td>{row['total_games']}</td>
                    <td class="win">{row['wins']}</td>
                    <td class="loss">{row['losses']}</td>
                    <td>{row['win_rate']*100:.1f}%</td>
                    <td>{row['avg_turns_when_won']:.2f}</td>
                    <td>{row['median_turns']:.1f}</td>
                    <td>{row['min_turns']}-{row['max_turns']}</td>
                    <td>{row['repeat_guess_games']}</td>
                </tr>
"""

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Mastermind Solver Report</title>
    <style>
        body {{ font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; max-width: 1200px; margin: 0 auto; padding: 20px; }}
        table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
        th, td {{ padding: 10px; text-align: left; border-bottom: 1px solid #ddd; }}
        th {{ background-color: #667eea; color: white; }}
        img {{ max-width: 100%; height: auto; }}
        .win {{ color: #28a745; }}
        .loss {{ color: #dc3545; }}
    </style>
</head>
<body>
    <h1>Mastermind Solver Report</h1>
    <p>Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>
    <p>Total Games: {len(df)} | Configurations: {len(stats_df)}</p>

    <h2>Summary Statistics</h2>
    <table>
        <thead>
            <tr>
                <th>Config</th><th>Games</th><th>Wins</th><th>Losses</th><th>Win Rate</th>
                <th>Avg Turns (Wins)</th><th>Median</th><th>Min-Max</th><th>Repeat-Guess Games</th>
            </tr>
        </thead>
        <tbody>
{rows}        </tbody>
    </table>

    <h2>Turn Distribution (Winning Games)</h2>
    <img src="{output_path.stem}_files/turn_distribution.png" alt="Turn Distribution">
</body>
</html>
"""

    with open(output_path, 'w') as f:
        f.write(html_content)

    print(f"HTML report saved to: {output_path}")
    print(f"Supporting files in: {fig_dir}")


def generate_markdown_report(df: pd.DataFrame, stats_df: pd.DataFrame, output_path: Path):
    """Generate Markdown report."""

    md_content = f"""# Mastermind Solver Report

**Generated:** {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
**Total Games:** {len(df)}
**Configurations:** {len(stats_df)}

## Summary Statistics

"""

    md_content += stats_df.to_markdown(index=False)

    md_content += "\n\n## Turn Distribution (Winning Games)\n\n"
    md_content += turn_distribution(df).to_markdown()
    md_content += "\n"

    with open(output_path, 'w') as f:
        f.write(md_content)

    print(f"Markdown report saved to: {output_path}")


def generate_csv_report(stats_df: pd.DataFrame, output_path: Path):
    """Generate CSV report."""
    stats_df.to_csv(output_path, index=False)
    print(f"CSV report saved to: {output_path}")


def generate_terminal_report(df: pd.DataFrame, stats_df: pd.DataFrame):
    """Print report to terminal."""

    print("\n" + "=" * 100)
    print("MASTERMIND SOLVER REPORT")
    print("=" * 100)
    print(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Total Games: {len(df)} | Configurations: {len(stats_df)}")
    print("=" * 100)

    print("\nSUMMARY STATISTICS")
    print("-" * 100)

    table_data = []
    for _, row in stats_df.iterrows():
        table_data.append([
            row['config'],
            row['total_games'],
            row['wins'],
            row['losses'],
            f"{row['win_rate']*100:.1f}%",
            f"{row['avg_turns_when_won']:.2f}" if row['wins'] > 0 else '-',
            f"{row['median_turns']:.1f}" if row['wins'] > 0 else '-',
            f"{row['min_turns']}-{row['max_turns']}" if row['wins'] > 0 else '-',
            row['repeat_guess_games'],
        ])

    headers = ['Config', 'Games', 'Wins', 'Losses', 'Win Rate', 'Avg Turns', 'Median',
               'Min-Max', 'Repeat Games']

    print(tabulate(table_data, headers=headers, tablefmt='grid'))
    print("=" * 100 + "\n")


def main(argv=None):
    """Main reporter entry point."""
    parser = argparse.ArgumentParser(
        description="Generate reports from Mastermind solver results",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate all report formats
  python -m mastermind_solver.reporter --input "outputs/*.jsonl" \\
    --format html,markdown,csv,terminal

  # Filter by configuration
  python -m mastermind_solver.reporter --input "outputs/*.jsonl" \\
    --filter-config 9x3-norep --format terminal
        """
    )

    parser.add_argument('--input', type=str, action='append',
                        default=None,
                        help='Input glob pattern(s) for JSONL files (default: outputs/*.jsonl)')
    parser.add_argument('--format', type=str, default='terminal',
                        help='Output format(s): html,markdown,csv,terminal (comma-separated, default: terminal)')
    parser.add_argument('--output', type=str, default=None,
                        help='Output basename (default: reports/report_TIMESTAMP)')
    parser.add_argument('--filter-config', type=str, default=None,
                        help='Filter by configuration label (e.g. 9x3-norep)')
    parser.add_argument('--filter-outcome', type=str, choices=['win', 'loss'],
                        help='Filter by outcome')

    args = parser.parse_args(argv)

    if args.input is None:
        args.input = ['outputs/*.jsonl']

    formats = [f.strip().lower() for f in args.format.split(',')]
    valid_formats = {'html', 'markdown', 'csv', 'terminal'}
    invalid = set(formats) - valid_formats
    if invalid:
        parser.error(f"Invalid format(s): {', '.join(invalid)}")

    if args.output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_basename = f"reports/report_{timestamp}"
    else:
        output_basename = args.output

    output_path = Path(output_basename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        df = load_results(args.input, args.filter_config, args.filter_outcome)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(df)} result(s) from {len(df['file'].unique())} file(s)")

    stats_df = calculate_statistics(df)

    for fmt in formats:
        if fmt == 'html':
            generate_html_report(df, stats_df, output_path.with_suffix('.html'))
        elif fmt == 'markdown':
            generate_markdown_report(df, stats_df, output_path.with_suffix('.md'))
        elif fmt == 'csv':
            generate_csv_report(stats_df, output_path.with_suffix('.csv'))
        elif fmt == 'terminal':
            generate_terminal_report(df, stats_df)

    print("\nReport generation complete!")


if __name__ == '__main__':
    main()
