"""Clutch leaderboard pipeline entry point."""

import argparse
import sys

import pandas as pd

from .attribute import attribute_playbyplay
from .classify import classify_playbyplay
from .efficiency import compute_efficiency
from .fetch import _log_error, fetch_playbyplay, load_playbyplay
from .leaderboard import aggregate_clutch_scores, explode_contributions, rank_leaderboard, total_clutch_scores
from .preprocess import preprocess_playbyplay
from .values import EventValueTable, load_event_values
from .write import write_clutch_scores, write_efficiency, write_player_totals


def run_pipeline(playbyplay: pd.DataFrame, values: EventValueTable) -> dict[str, pd.DataFrame]:
    """
    Score raw play-by-play rows.

    Args:
        playbyplay: Raw play-by-play DataFrame
        values: Weight table used for clutch scoring

    Returns:
        Dict with 'clutch_scores', 'player_totals' and 'efficiency' DataFrames
    """
    events = preprocess_playbyplay(playbyplay)
    classified = classify_playbyplay(events)

    attributed = attribute_playbyplay(classified, values)
    contributions = explode_contributions(attributed)
    clutch_scores = rank_leaderboard(aggregate_clutch_scores(contributions))

    return {
        "clutch_scores": clutch_scores,
        "player_totals": total_clutch_scores(clutch_scores),
        "efficiency": compute_efficiency(classified),
    }


def main(
    input_path: str | None = None,
    game_id: str | None = None,
    week: int | None = None,
    output_dir: str = "output",
    weights_path: str | None = None,
    top: int = 10,
) -> int:
    """
    Run the pipeline over a CSV file/directory or a single live game.

    Args:
        input_path: CSV file or directory of CSV files
        game_id: NBA game ID to fetch instead of reading CSVs
        week: Week of the season for a fetched game
        output_dir: Directory for the JSON outputs (default "output")
        weights_path: Optional JSON file of tag weight overrides
        top: Rows to print from each leaderboard (default 10)

    Returns:
        Process exit status
    """
    try:
        values = load_event_values(weights_path) if weights_path else EventValueTable()
    except (OSError, ValueError) as e:
        _log_error(f"Could not load weights: {e}")
        return 1

    if game_id is not None:
        print(f"Fetching play-by-play for game {game_id}...")
        playbyplay = fetch_playbyplay(game_id, week if week is not None else 0)
    elif input_path is not None:
        print(f"Reading play-by-play from {input_path}...")
        playbyplay = load_playbyplay(input_path)
    else:
        _log_error("No input given: pass --input or --game-id")
        return 1

    if playbyplay is None:
        _log_error("No play-by-play data loaded")
        return 1

    results = run_pipeline(playbyplay, values)

    print(f"Top {top} players by adjusted clutch score:")
    print(results["clutch_scores"].head(top).to_string(index=False))
    print(f"Top {top} players by overall clutch score:")
    print(results["player_totals"].head(top).to_string(index=False))

    write_clutch_scores(results["clutch_scores"], output_dir)
    write_player_totals(results["player_totals"], output_dir)
    write_efficiency(results["efficiency"], output_dir)
    print(
        f"Pipeline complete. Wrote {len(results['clutch_scores'])} clutch rows and "
        f"{len(results['efficiency'])} efficiency rows to {output_dir}"
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="NBA clutch leaderboard pipeline")
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Play-by-play CSV file or directory of CSV files",
    )
    parser.add_argument(
        "--game-id",
        type=str,
        default=None,
        help="Fetch a single game from the NBA API instead of reading CSVs",
    )
    parser.add_argument(
        "--week",
        type=int,
        default=None,
        help="Week of the season for --game-id (default: unknown phase)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="Output directory (default: output)",
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=None,
        help="JSON file mapping event tags to eWPA weight overrides",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Rows to print from each leaderboard (default: 10)",
    )

    args = parser.parse_args()
    sys.exit(main(
        input_path=args.input,
        game_id=args.game_id,
        week=args.week,
        output_dir=args.output_dir,
        weights_path=args.weights,
        top=args.top,
    ))
