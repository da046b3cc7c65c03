"""Possession-based efficiency: usage rate, true shooting and win percentage."""

import pandas as pd

from clutch.classify import EventTags, SLOT_PRIMARY, tag_family

# Free throws count as 0.44 of a possession
FTA_POSSESSION_FACTOR = 0.44

COUNTER_COLUMNS = ["PTS", "FGA", "FTA", "TOV", "WIN"]

# Tag family -> (points, field goal attempt, free throw attempt, turnover)
_FAMILY_COUNTS = {
    "Made 3-Point Shot": (3, 1, 0, 0),
    "Missed 3-Point Shot": (0, 1, 0, 0),
    "Made 2-Point Shot": (2, 1, 0, 0),
    "Missed 2-Point Shot": (0, 1, 0, 0),
    "Made Free Throw": (1, 0, 1, 0),
    "Missed Free Throw": (0, 0, 1, 0),
    "Turnover": (0, 0, 0, 1),
}

EFFICIENCY_COLUMNS = [
    "PLAYER_ID", "PLAYER_NAME", "SEASON_TYPE", "TEAM_ID",
    "PTS", "FGA", "FTA", "TOV", "WINS", "GAMES",
    "TEAM_FGA", "TEAM_FTA", "TEAM_TOV",
    "UsageRate", "TSPercentage", "WinPercentage",
]


def event_counters(tags: EventTags, score_margin) -> dict[str, int]:
    """
    Box-score counters for one classified event.

    Only tags credited to the primary participant count. WIN is 1 when the
    score margin is positive, a stand-in for the game result.
    """
    counts = {"PTS": 0, "FGA": 0, "FTA": 0, "TOV": 0}
    for tag, slot in tags:
        if slot != SLOT_PRIMARY:
            continue
        pts, fga, fta, tov = _FAMILY_COUNTS.get(tag_family(tag), (0, 0, 0, 0))
        counts["PTS"] += pts
        counts["FGA"] += fga
        counts["FTA"] += fta
        counts["TOV"] += tov
    margin = 0 if score_margin is None or pd.isna(score_margin) else score_margin
    counts["WIN"] = 1 if margin > 0 else 0
    return counts


def _counters_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Attach the per-event counters to a classified DataFrame."""
    counters = [
        event_counters(tags, margin)
        for tags, margin in zip(df["EVENT_TAGS"], df["SCOREMARGIN_INT"])
    ]
    counts = pd.DataFrame(counters, index=df.index, columns=COUNTER_COLUMNS)
    return pd.concat([df, counts], axis=1)


def usage_rate(fga, fta, tov, team_fga, team_fta, team_tov) -> float:
    """Share of team possessions used by the player, as a percentage."""
    if fga == 0 or team_fga == 0:
        return 0.0
    player = fga + FTA_POSSESSION_FACTOR * fta + tov
    team = team_fga + FTA_POSSESSION_FACTOR * team_fta + team_tov
    return 100 * player / team


def true_shooting_pct(pts, fga, fta) -> float:
    """
    Points per true shooting attempt.

    Returns 0.0 unless the player has both field goal and free throw attempts.
    """
    if fga == 0 or fta == 0:
        return 0.0
    return pts / (2 * (fga + FTA_POSSESSION_FACTOR * fta))


def win_pct(wins, games) -> float:
    if games == 0:
        return 0.0
    return wins / games


def aggregate_player_efficiency(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sum counters per (player, season type, team) for the primary participant.

    Args:
        df: Output of classify_playbyplay

    Returns:
        DataFrame with PLAYER_ID, PLAYER_NAME, SEASON_TYPE, TEAM_ID, PTS, FGA,
        FTA, TOV, WINS and GAMES (events observed)
    """
    keys = ["PLAYER_ID", "PLAYER_NAME", "SEASON_TYPE", "TEAM_ID"]
    rows = _counters_frame(df).rename(columns={"PLAYER1_ID": "PLAYER_ID", "PLAYER1_NAME": "PLAYER_NAME"})
    rows = rows[rows["PLAYER_ID"].notna()]
    if rows.empty:
        return pd.DataFrame(columns=keys + ["PTS", "FGA", "FTA", "TOV", "WINS", "GAMES"])

    rows = rows.assign(GAMES=1).rename(columns={"WIN": "WINS"})
    return (
        rows.groupby(keys, sort=False, dropna=False)[["PTS", "FGA", "FTA", "TOV", "WINS", "GAMES"]]
        .sum()
        .reset_index()
    )


def aggregate_team_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Sum field goal attempts, free throw attempts and turnovers per TEAM_ID."""
    rows = _counters_frame(df)
    rows = rows[rows["TEAM_ID"].notna()]
    if rows.empty:
        return pd.DataFrame(columns=["TEAM_ID", "TEAM_FGA", "TEAM_FTA", "TEAM_TOV"])
    return (
        rows.groupby("TEAM_ID", sort=False)[["FGA", "FTA", "TOV"]]
        .sum()
        .rename(columns={"FGA": "TEAM_FGA", "FTA": "TEAM_FTA", "TOV": "TEAM_TOV"})
        .reset_index()
    )


def compute_efficiency(df: pd.DataFrame) -> pd.DataFrame:
    """
    Player efficiency with team totals joined in.

    Args:
        df: Output of classify_playbyplay

    Returns:
        DataFrame with EFFICIENCY_COLUMNS, one row per (player, season type, team)
    """
    players = aggregate_player_efficiency(df)
    if players.empty:
        return pd.DataFrame(columns=EFFICIENCY_COLUMNS)

    teams = aggregate_team_totals(df)
    if teams.empty:
        merged = players.assign(TEAM_FGA=0, TEAM_FTA=0, TEAM_TOV=0)
    else:
        merged = players.merge(teams, on="TEAM_ID", how="left")
    for col in ("TEAM_FGA", "TEAM_FTA", "TEAM_TOV"):
        merged[col] = merged[col].fillna(0).astype(int)

    merged["UsageRate"] = [
        usage_rate(r.FGA, r.FTA, r.TOV, r.TEAM_FGA, r.TEAM_FTA, r.TEAM_TOV)
        for r in merged.itertuples(index=False)
    ]
    merged["TSPercentage"] = [
        true_shooting_pct(r.PTS, r.FGA, r.FTA) for r in merged.itertuples(index=False)
    ]
    merged["WinPercentage"] = [
        win_pct(r.WINS, r.GAMES) for r in merged.itertuples(index=False)
    ]
    return merged[EFFICIENCY_COLUMNS]
