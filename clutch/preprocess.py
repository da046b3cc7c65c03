"""Preprocessing: clock, score margin and season phase helpers plus clutch pre-filters."""

import pandas as pd

from clutch.fetch import _log_error

# Returned by clock_to_seconds when the clock cannot be read
CLOCK_SENTINEL = -1

LATE_CLOCK_SECONDS = 10
CLUTCH_WINDOW_SECONDS = 300
MAX_CLUTCH_MARGIN = 6
MIN_CLUTCH_PERIOD = 4

# Three-pointers allow the wider margin, so it bounds IS_CLOSE_MARGIN
CLOSE_MARGIN_THREE = 3
CLOSE_MARGIN_TWO = 2

REGULAR_SEASON = "Regular Season"
PLAYOFFS = "Playoffs"
FINALS = "Finals"
UNKNOWN = "Unknown"

_TIE_TOKEN = "TIE"

ID_COLUMNS = ("PLAYER1_ID", "PLAYER2_ID", "PLAYER3_ID", "TEAM_ID", "POSSESSION_TEAM_ID")


def _parse_clock_part(part) -> int | None:
    """Parse one clock component as a non-negative int, or None."""
    if part is None or pd.isna(part):
        return None
    if isinstance(part, float):
        if not part.is_integer():
            return None
        part = int(part)
    s = str(part).strip()
    if not s:
        return None
    try:
        value = int(s)
    except ValueError:
        return None
    return value if value >= 0 else None


def clock_to_seconds(clock, seconds=None) -> int:
    """
    Convert a game clock to seconds remaining in the period.

    Accepts either a single "MM:SS" string or a pre-split minutes/seconds
    pair (pass the minutes as ``clock`` and the seconds as ``seconds``).

    Args:
        clock: "MM:SS" string, or the minutes part when ``seconds`` is given
        seconds: Seconds part of a pre-split clock

    Returns:
        Seconds remaining, or CLOCK_SENTINEL when the clock is missing or malformed
    """
    if seconds is None:
        if clock is None or not isinstance(clock, str):
            return CLOCK_SENTINEL
        parts = clock.strip().split(":")
        if len(parts) != 2:
            return CLOCK_SENTINEL
        clock, seconds = parts

    minutes_int = _parse_clock_part(clock)
    seconds_int = _parse_clock_part(seconds)
    if minutes_int is None or seconds_int is None or seconds_int >= 60:
        return CLOCK_SENTINEL
    return minutes_int * 60 + seconds_int


def is_late_clock(seconds_remaining) -> bool:
    """True when the clock reads inside (0, 10] seconds; the sentinel never qualifies."""
    if seconds_remaining is None or pd.isna(seconds_remaining):
        return False
    return 0 < int(seconds_remaining) <= LATE_CLOCK_SECONDS


def normalize_score_margin(value) -> int:
    """
    Parse a SCOREMARGIN field into a signed integer.

    "TIE" maps to 0. Anything else that does not parse as an integer also
    maps to 0, so a malformed margin never drops or fails its row.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return 0
    s = str(value).strip()
    if s.upper() == _TIE_TOKEN:
        return 0
    try:
        return int(s)
    except ValueError:
        try:
            return int(float(s))
        except (ValueError, OverflowError):
            return 0


def season_phase(week_of_season) -> str:
    """Map a 1-based week of the season to its phase."""
    if week_of_season is None or pd.isna(week_of_season):
        return UNKNOWN
    try:
        week = int(week_of_season)
    except (ValueError, TypeError):
        return UNKNOWN
    if 1 <= week <= 24:
        return REGULAR_SEASON
    if 25 <= week <= 30:
        return PLAYOFFS
    if 31 <= week <= 33:
        return FINALS
    return UNKNOWN


def preprocess_playbyplay(df: pd.DataFrame) -> pd.DataFrame:
    """
    Derive clutch context columns and keep only high-leverage events.

    Adds SEASON_TYPE, SECONDS_REMAINING, SCOREMARGIN_INT, IS_LATE_CLOCK and
    IS_CLOSE_MARGIN, then keeps rows in the 4th period or later with a
    readable clock at or under five minutes and a margin of six or less.

    Args:
        df: Play-by-play DataFrame in the PlayByPlayV2 column layout

    Returns:
        New filtered DataFrame with the derived columns
    """
    df = df.copy()
    if df.empty:
        for col in ("SEASON_TYPE", "SECONDS_REMAINING", "SCOREMARGIN_INT",
                    "IS_LATE_CLOCK", "IS_CLOSE_MARGIN"):
            df[col] = pd.Series(dtype=object)
        return df

    for col in ID_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")

    df["SEASON_TYPE"] = df["WEEK_OF_SEASON"].apply(season_phase)
    df["SECONDS_REMAINING"] = df["PCTIMESTRING"].apply(clock_to_seconds).astype(int)
    df["SCOREMARGIN_INT"] = df["SCOREMARGIN"].apply(normalize_score_margin).astype(int)
    df["IS_LATE_CLOCK"] = df["SECONDS_REMAINING"].apply(is_late_clock)
    df["IS_CLOSE_MARGIN"] = df["SCOREMARGIN_INT"].abs() <= CLOSE_MARGIN_THREE

    total = len(df)
    unreadable = int((df["SECONDS_REMAINING"] == CLOCK_SENTINEL).sum())
    if unreadable:
        _log_error(f"Warning: {unreadable} of {total} rows have an unreadable clock and were excluded")

    period_mask = pd.to_numeric(df["PERIOD"], errors="coerce") >= MIN_CLUTCH_PERIOD
    clock_mask = (df["SECONDS_REMAINING"] >= 0) & (df["SECONDS_REMAINING"] <= CLUTCH_WINDOW_SECONDS)
    margin_mask = df["SCOREMARGIN_INT"].abs() <= MAX_CLUTCH_MARGIN

    filtered = df[period_mask & clock_mask & margin_mask].reset_index(drop=True)
    print(
        f"Kept {len(filtered)} of {total} events "
        f"(period: {int((~period_mask).sum())} dropped, "
        f"clock: {int((period_mask & ~clock_mask).sum())} dropped, "
        f"margin: {int((period_mask & clock_mask & ~margin_mask).sum())} dropped)"
    )
    return filtered
