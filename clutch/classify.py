"""Event classification: map play-by-play rows to clutch event tags."""

import re

import pandas as pd

from clutch.preprocess import CLOSE_MARGIN_THREE, CLOSE_MARGIN_TWO, is_late_clock

SLOT_PRIMARY = 1
SLOT_SECONDARY = 2
SLOT_TERTIARY = 3

OTHER = "Other"
LATE_CLOCK_SUFFIX = " (Late Clock)"
CLUTCH_MARGIN_SUFFIX = " (Clutch Margin)"

OFFENSIVE = "Offensive"
DEFENSIVE = "Defensive"

# Descriptions are upper-cased before any pattern is applied.
_THREE_POINT = re.compile(r"\b3PT\b")
_TWO_POINT = re.compile(r"\b(DUNK|LAYUP|SHOT)\b(?! CLOCK)")
_MISS = re.compile(r"\bMISS\b")
_FREE_THROW = re.compile(r"\bFREE THROW\b")

# (marker, tag, slot credited, needs a named participant)
MARKER_RULES: tuple[tuple[re.Pattern, str, int, bool], ...] = (
    (re.compile(r"\bAST\b"), "Assist", SLOT_SECONDARY, False),
    (re.compile(r"\bSTEAL\b"), "Steal", SLOT_SECONDARY, False),
    (re.compile(r"\bBLOCK\b"), "Block", SLOT_TERTIARY, False),
    (re.compile(r"\bTURNOVER\b"), "Turnover", SLOT_PRIMARY, True),
    (re.compile(r"\bREBOUND\b"), "Rebound", SLOT_PRIMARY, True),
)

EventTags = list[tuple[str, int | None]]


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _normalize_description(description) -> str:
    return "" if _is_missing(description) else str(description).upper()


def _any_match(pattern: re.Pattern, descriptions: tuple[str, str]) -> bool:
    return any(pattern.search(d) for d in descriptions if d)


def _with_late_clock(tag: str, late_clock: bool) -> str:
    return tag + LATE_CLOCK_SUFFIX if late_clock else tag


def tag_family(tag: str) -> str:
    """Strip the late-clock or clutch-margin suffix from a tag."""
    for suffix in (LATE_CLOCK_SUFFIX, CLUTCH_MARGIN_SUFFIX):
        if tag.endswith(suffix):
            return tag[: -len(suffix)]
    return tag


def _shot_tag(descriptions: tuple[str, str], late_clock: bool, abs_margin: int) -> str | None:
    """Made/missed 2- or 3-point tag for a field goal, or None if not a shot."""
    if _any_match(_THREE_POINT, descriptions):
        points, threshold = 3, CLOSE_MARGIN_THREE
    elif _any_match(_TWO_POINT, descriptions):
        points, threshold = 2, CLOSE_MARGIN_TWO
    else:
        return None

    outcome = "Missed" if _any_match(_MISS, descriptions) else "Made"
    tag = f"{outcome} {points}-Point Shot"
    if late_clock and abs_margin <= threshold:
        return tag + CLUTCH_MARGIN_SUFFIX
    return _with_late_clock(tag, late_clock)


def classify_event(
    event_msg_type,
    event_msg_action_type,
    home_description,
    visitor_description,
    seconds_remaining,
    score_margin,
    player1_name=None,
    player2_name=None,
    player3_name=None,
    rebound_side: str | None = None,
) -> EventTags:
    """
    Classify a single play-by-play event into one or more clutch tags.

    Every marker rule is checked on its own, so a made shot can carry its
    assist, or a turnover its steal. Only the shot outcome (made/missed,
    two/three) and the free-throw outcome are either/or decisions.

    Args:
        event_msg_type: EVENTMSGTYPE code; a null code yields only "Other"
        event_msg_action_type: EVENTMSGACTIONTYPE; shots need it present
        home_description: HOMEDESCRIPTION text
        visitor_description: VISITORDESCRIPTION text
        seconds_remaining: Seconds left in the period (CLOCK_SENTINEL if unknown)
        score_margin: Signed score margin
        player1_name: Primary participant name
        player2_name: Secondary participant name
        player3_name: Tertiary participant name
        rebound_side: "Offensive" or "Defensive" when possession is known

    Returns:
        Ordered list of (tag, slot) pairs; never empty. "Other" has slot None.
    """
    if _is_missing(event_msg_type):
        return [(OTHER, None)]

    late_clock = is_late_clock(seconds_remaining)
    abs_margin = 0 if _is_missing(score_margin) else abs(int(score_margin))
    descriptions = (
        _normalize_description(home_description),
        _normalize_description(visitor_description),
    )
    has_participant = any(
        not _is_missing(name) for name in (player1_name, player2_name, player3_name)
    )

    tags: EventTags = []

    for marker, tag, slot, needs_participant in MARKER_RULES:
        if not _any_match(marker, descriptions):
            continue
        if needs_participant and not has_participant:
            continue
        if tag == "Rebound" and rebound_side in (OFFENSIVE, DEFENSIVE):
            tag = f"{rebound_side} Rebound"
        tags.append((_with_late_clock(tag, late_clock), slot))

    if not _is_missing(event_msg_action_type):
        shot = _shot_tag(descriptions, late_clock, abs_margin)
        if shot is not None:
            tags.append((shot, SLOT_PRIMARY))

    if _any_match(_FREE_THROW, descriptions):
        outcome = "Missed" if _any_match(_MISS, descriptions) else "Made"
        tags.append((_with_late_clock(f"{outcome} Free Throw", late_clock), SLOT_PRIMARY))

    if not tags:
        return [(OTHER, None)]
    return tags


def _rebound_side(row: pd.Series) -> str | None:
    """Offensive/defensive side of a rebound from POSSESSION_TEAM_ID, if present."""
    possession = row.get("POSSESSION_TEAM_ID")
    team = row.get("TEAM_ID")
    if _is_missing(possession) or _is_missing(team):
        return None
    return OFFENSIVE if int(possession) == int(team) else DEFENSIVE


def _classify_row(row: pd.Series) -> EventTags:
    return classify_event(
        row.get("EVENTMSGTYPE"),
        row.get("EVENTMSGACTIONTYPE"),
        row.get("HOMEDESCRIPTION"),
        row.get("VISITORDESCRIPTION"),
        row.get("SECONDS_REMAINING"),
        row.get("SCOREMARGIN_INT"),
        row.get("PLAYER1_NAME"),
        row.get("PLAYER2_NAME"),
        row.get("PLAYER3_NAME"),
        rebound_side=_rebound_side(row),
    )


def classify_playbyplay(df: pd.DataFrame) -> pd.DataFrame:
    """
    Attach EVENT_TAGS, a list of (tag, slot) pairs, to every preprocessed row.

    Rows are classified independently of one another.
    """
    df = df.copy()
    tags = [_classify_row(row) for _, row in df.iterrows()]
    df["EVENT_TAGS"] = pd.Series(tags, index=df.index, dtype=object)
    return df
