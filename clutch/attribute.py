"""Credit each tag's weight to the participant slot the tag names."""

import pandas as pd

from clutch.classify import EventTags, SLOT_PRIMARY, SLOT_SECONDARY, SLOT_TERTIARY
from clutch.values import EventValueTable

SLOTS = (SLOT_PRIMARY, SLOT_SECONDARY, SLOT_TERTIARY)


def attribute_event(tags: EventTags, values: EventValueTable) -> dict[int, float]:
    """
    Sum an event's tag weights per participant slot.

    Each tag credits exactly one slot. Tags without a slot ("Other") and
    zero-weight tags add nothing.

    Args:
        tags: (tag, slot) pairs from classify_event
        values: Weight table

    Returns:
        Dict of slot number to the weight credited to that participant
    """
    credits = {slot: 0.0 for slot in SLOTS}
    for tag, slot in tags:
        if slot not in credits:
            continue
        weight = values.get(tag)
        if weight == 0.0:
            continue
        credits[slot] += weight
    return credits


def attribute_playbyplay(df: pd.DataFrame, values: EventValueTable) -> pd.DataFrame:
    """
    Explode classified rows to one row per tag and assign its weight.

    Adds EVENT_TYPE, SLOT, eWPA and PLAYER1_eWPA..PLAYER3_eWPA, where only
    the slot the tag targets receives the tag's weight.

    Args:
        df: Output of classify_playbyplay
        values: Weight table

    Returns:
        New DataFrame with one row per (event, tag)
    """
    exploded = df.explode("EVENT_TAGS", ignore_index=True)
    pairs = exploded["EVENT_TAGS"].tolist()
    exploded["EVENT_TYPE"] = [tag for tag, _ in pairs]
    exploded["SLOT"] = pd.Series([slot for _, slot in pairs], index=exploded.index, dtype=object)
    exploded["eWPA"] = exploded["EVENT_TYPE"].map(values.get).astype(float)

    for slot in SLOTS:
        credited = exploded["SLOT"] == slot
        exploded[f"PLAYER{slot}_eWPA"] = exploded["eWPA"].where(credited, 0.0)

    return exploded.drop(columns=["EVENT_TAGS"])
