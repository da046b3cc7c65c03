"""Write module for outputting leaderboards to JSON files."""

import json
import os
import tempfile
from pathlib import Path

import pandas as pd


def _records(df: pd.DataFrame) -> list[dict]:
    """DataFrame rows as JSON-safe dicts (nulls become None)."""
    return json.loads(df.to_json(orient="records"))


def write_clutch_scores(scores: pd.DataFrame, output_dir: str = "output") -> Path:
    """
    Write output/clutch_scores.json, one entry per (player, season type).

    Args:
        scores: Ranked clutch leaderboard
        output_dir: Base output directory (default "output")

    Returns:
        Path of the written file
    """
    path = Path(output_dir) / "clutch_scores.json"
    _write_json_atomic(path, _records(scores))
    return path


def write_player_totals(totals: pd.DataFrame, output_dir: str = "output") -> Path:
    """Write output/player_totals.json with each player's all-phase clutch score."""
    path = Path(output_dir) / "player_totals.json"
    _write_json_atomic(path, _records(totals))
    return path


def write_efficiency(efficiency: pd.DataFrame, output_dir: str = "output") -> Path:
    """
    Write output/efficiency.json with usage rate, true shooting and win percentage.

    Args:
        efficiency: Output of compute_efficiency
        output_dir: Base output directory (default "output")

    Returns:
        Path of the written file
    """
    path = Path(output_dir) / "efficiency.json"
    _write_json_atomic(path, _records(efficiency))
    return path


def _write_json_atomic(file_path: Path, records: list[dict]) -> None:
    """
    Write records as JSON through a temp file in the target directory, then rename.

    Readers see either the old file or the complete new one. The temp file is
    removed if the write or the rename fails.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_name = tempfile.mkstemp(dir=file_path.parent, prefix=".tmp_", suffix=".json")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(temp_fd, "w") as f:
            json.dump(records, f, indent=2)
        os.replace(temp_path, file_path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
