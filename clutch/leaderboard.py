"""Clutch leaderboard: per-player eWPA totals adjusted for game importance."""

import pandas as pd

from clutch.attribute import SLOTS
from clutch.preprocess import FINALS, PLAYOFFS, REGULAR_SEASON, UNKNOWN

SEASON_MULTIPLIERS = {
    REGULAR_SEASON: 1.0,
    PLAYOFFS: 1.5,
    FINALS: 2.0,
    UNKNOWN: 1.0,
}

CLUTCH_COLUMNS = ["PLAYER_ID", "PLAYER_NAME", "SEASON_TYPE", "Total_eWPA", "Adjusted_eWPA"]
TOTAL_COLUMNS = ["PLAYER_ID", "PLAYER_NAME", "Total_ClutchScore"]


def season_multiplier(season_type: str) -> float:
    return SEASON_MULTIPLIERS.get(season_type, 1.0)


def explode_contributions(df: pd.DataFrame) -> pd.DataFrame:
    """
    Fan attributed tag rows out to one row per credited participant.

    Rows whose participant is unknown or whose credit is zero are dropped.

    Args:
        df: Output of attribute_playbyplay

    Returns:
        DataFrame with SEASON_TYPE, PLAYER_ID, PLAYER_NAME, EVENT_TYPE, eWPA
    """
    frames = []
    for slot in SLOTS:
        frames.append(pd.DataFrame({
            "SEASON_TYPE": df["SEASON_TYPE"],
            "PLAYER_ID": df[f"PLAYER{slot}_ID"],
            "PLAYER_NAME": df[f"PLAYER{slot}_NAME"],
            "EVENT_TYPE": df["EVENT_TYPE"],
            "eWPA": df[f"PLAYER{slot}_eWPA"].astype(float),
        }))
    contributions = pd.concat(frames, ignore_index=True)
    keep = contributions["PLAYER_ID"].notna() & (contributions["eWPA"] != 0.0)
    return contributions[keep].reset_index(drop=True)


def aggregate_clutch_scores(contributions: pd.DataFrame) -> pd.DataFrame:
    """
    Sum eWPA per (player, season type) and apply the season multiplier.

    Args:
        contributions: Output of explode_contributions

    Returns:
        DataFrame with PLAYER_ID, PLAYER_NAME, SEASON_TYPE, Total_eWPA, Adjusted_eWPA
    """
    if contributions.empty:
        return pd.DataFrame(columns=CLUTCH_COLUMNS)

    scores = (
        contributions.groupby(["PLAYER_ID", "PLAYER_NAME", "SEASON_TYPE"], sort=False, dropna=False)["eWPA"]
        .sum()
        .reset_index()
        .rename(columns={"eWPA": "Total_eWPA"})
    )
    scores["Adjusted_eWPA"] = scores["Total_eWPA"] * scores["SEASON_TYPE"].map(season_multiplier)
    return scores[CLUTCH_COLUMNS]


def rank_leaderboard(df: pd.DataFrame, column: str = "Adjusted_eWPA") -> pd.DataFrame:
    """Order rows by ``column`` descending; ties keep their existing order."""
    return df.sort_values(column, ascending=False, kind="stable").reset_index(drop=True)


def total_clutch_scores(scores: pd.DataFrame) -> pd.DataFrame:
    """Sum Adjusted_eWPA across season types into one ranked row per player."""
    if scores.empty:
        return pd.DataFrame(columns=TOTAL_COLUMNS)
    totals = (
        scores.groupby(["PLAYER_ID", "PLAYER_NAME"], sort=False, dropna=False)["Adjusted_eWPA"]
        .sum()
        .reset_index()
        .rename(columns={"Adjusted_eWPA": "Total_ClutchScore"})
    )
    return rank_leaderboard(totals, "Total_ClutchScore")
