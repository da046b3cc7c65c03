"""Play-by-play input: CSV files on disk or a live game through the NBA API."""

import re
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd
import requests
from nba_api.stats.endpoints.playbyplayv3 import PlayByPlayV3

PLAYBYPLAY_COLUMNS = [
    "PERIOD",
    "PCTIMESTRING",
    "EVENTMSGTYPE",
    "EVENTMSGACTIONTYPE",
    "HOMEDESCRIPTION",
    "VISITORDESCRIPTION",
    "PLAYER1_ID",
    "PLAYER1_NAME",
    "PLAYER2_ID",
    "PLAYER2_NAME",
    "PLAYER3_ID",
    "PLAYER3_NAME",
    "TEAM_ID",
    "SCOREMARGIN",
    "WEEK_OF_SEASON",
]


def _log_error(msg: str) -> None:
    """Log timestamped error to stderr."""
    timestamp = datetime.now().isoformat()
    print(f"[{timestamp}] {msg}", file=sys.stderr, flush=True)


def _ensure_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Add any missing play-by-play columns as nulls."""
    for col in PLAYBYPLAY_COLUMNS:
        if col not in df.columns:
            df[col] = None
    return df


def load_playbyplay(path: str) -> Optional[pd.DataFrame]:
    """
    Read play-by-play rows from a CSV file or a directory of CSV files.

    A path ending in ".csv" is read as a single table; any other path is
    treated as a directory whose *.csv files are read and concatenated.

    Args:
        path: CSV file or directory path

    Returns:
        DataFrame with the play-by-play columns, or None if nothing could be read
    """
    source = Path(path)
    if source.suffix.lower() == ".csv":
        files = [source] if source.is_file() else []
    elif source.is_dir():
        files = sorted(source.glob("*.csv"))
    else:
        files = []

    if not files:
        _log_error(f"No CSV input found at {path}")
        return None

    frames = []
    for csv_file in files:
        try:
            frames.append(pd.read_csv(csv_file))
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            _log_error(f"Skipping unreadable file {csv_file}: {e}")

    if not frames:
        return None

    df = pd.concat(frames, ignore_index=True)
    print(f"Loaded {len(df)} play-by-play rows from {len(frames)} file(s)")
    return _ensure_columns(df)


_V3_CLOCK = re.compile(r"^PT(?:(\d+)M)?(\d+(?:\.\d+)?)S$")


def _parse_v3_clock(clock_str: str) -> str:
    """Turn a V3 'PT04M30.00S' clock into 'M:SS'; anything else is returned as text."""
    match = _V3_CLOCK.match(clock_str) if isinstance(clock_str, str) else None
    if match is None:
        return str(clock_str)
    minutes = int(match.group(1) or 0)
    # fractional seconds are truncated
    return f"{minutes}:{int(float(match.group(2))):02d}"


def _running_score_margins(score_home, score_away) -> list[str]:
    """
    SCOREMARGIN strings from V3 running scores.

    V3 only fills scoreHome/scoreAway on scoring actions, so a blank score
    carries the last known score forward from 0-0. Margins are home minus
    away, with "TIE" when level.
    """
    home = pd.to_numeric(pd.Series(score_home), errors="coerce").ffill().fillna(0)
    away = pd.to_numeric(pd.Series(score_away), errors="coerce").ffill().fillna(0)
    margins = []
    for h, a in zip(home, away):
        margin = int(h) - int(a)
        margins.append("TIE" if margin == 0 else str(margin))
    return margins


def _map_v3_to_v2_columns(df: pd.DataFrame, week_of_season: int) -> pd.DataFrame:
    """
    Map PlayByPlayV3 columns onto the V2 layout the classifier reads.

    V3 has a single 'description' field, a running score instead of a
    margin, and only the primary participant, so PLAYER2/PLAYER3 are null.
    """
    column_map = {
        "period": "PERIOD",
        "clock": "PCTIMESTRING",
        "actionType": "EVENTMSGTYPE",
        "subType": "EVENTMSGACTIONTYPE",
        "personId": "PLAYER1_ID",
        "playerName": "PLAYER1_NAME",
        "teamId": "TEAM_ID",
        "description": "HOMEDESCRIPTION",
    }
    df = df.rename(columns=column_map)

    if "PCTIMESTRING" in df.columns:
        df["PCTIMESTRING"] = df["PCTIMESTRING"].apply(_parse_v3_clock)

    if "scoreHome" in df.columns and "scoreAway" in df.columns:
        df["SCOREMARGIN"] = _running_score_margins(df["scoreHome"].tolist(), df["scoreAway"].tolist())

    # personId 0 marks team or game events with no player
    if "PLAYER1_ID" in df.columns:
        df["PLAYER1_ID"] = df["PLAYER1_ID"].where(df["PLAYER1_ID"] != 0)

    df["WEEK_OF_SEASON"] = week_of_season
    return _ensure_columns(df)


def fetch_playbyplay(game_id: str, week_of_season: int, delay: float = 1.5) -> Optional[pd.DataFrame]:
    """
    Fetch play-by-play data for a single game with retry logic.

    Args:
        game_id: Game ID string
        week_of_season: Week of the season the game was played in
        delay: Delay in seconds before making the API call (default 1.5)

    Returns:
        DataFrame in the V2 play-by-play layout, or None on failure
    """
    max_retries = 1
    for attempt in range(max_retries + 1):
        try:
            time.sleep(delay)
            response = PlayByPlayV3(
                game_id=game_id, start_period=1, end_period=10
            )
            df = response.play_by_play.get_data_frame()
            return _map_v3_to_v2_columns(df, week_of_season)
        except requests.exceptions.RequestException as e:
            _log_error(f"Error fetching play-by-play for {game_id}: {e}")

            if attempt < max_retries:
                time.sleep(5)
            else:
                return None
        except Exception as e:
            _log_error(f"Unexpected error fetching play-by-play for {game_id}: {e}")
            return None
