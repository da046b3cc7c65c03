"""Expected win-probability added (eWPA) weights per event tag."""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

# Rebounds carry the average of the offensive and defensive weights when
# the side cannot be told apart.
DEFAULT_EVENT_VALUES: Mapping[str, float] = MappingProxyType({
    "Assist": 0.010,
    "Steal": 0.022,
    "Block": 0.011,
    "Turnover": -0.021,
    "Rebound": 0.0115,
    "Offensive Rebound": 0.017,
    "Defensive Rebound": 0.006,
    "Made 3-Point Shot": 0.040,
    "Missed 3-Point Shot": -0.040,
    "Made 2-Point Shot": 0.020,
    "Missed 2-Point Shot": -0.020,
    "Made Free Throw": 0.005,
    "Missed Free Throw": -0.015,

    "Assist (Late Clock)": 0.020,
    "Steal (Late Clock)": 0.044,
    "Block (Late Clock)": 0.022,
    "Turnover (Late Clock)": -0.042,
    "Rebound (Late Clock)": 0.020,
    "Offensive Rebound (Late Clock)": 0.030,
    "Defensive Rebound (Late Clock)": 0.010,
    "Made 3-Point Shot (Late Clock)": 0.050,
    "Missed 3-Point Shot (Late Clock)": -0.050,
    "Made 2-Point Shot (Late Clock)": 0.030,
    "Missed 2-Point Shot (Late Clock)": -0.030,
    "Made Free Throw (Late Clock)": 0.010,
    "Missed Free Throw (Late Clock)": -0.030,

    "Made 3-Point Shot (Clutch Margin)": 0.100,
    "Missed 3-Point Shot (Clutch Margin)": -0.100,
    "Made 2-Point Shot (Clutch Margin)": 0.060,
    "Missed 2-Point Shot (Clutch Margin)": -0.060,
})


class EventValueTable:
    """
    Read-only tag → weight lookup.

    Built once and passed into the scoring stages so callers can swap in
    a different weight set. Tags with no entry are worth 0.0.
    """

    def __init__(self, values: Mapping[str, float] | None = None):
        source = DEFAULT_EVENT_VALUES if values is None else values
        self._values = MappingProxyType({str(k): float(v) for k, v in source.items()})

    def get(self, tag: str) -> float:
        return self._values.get(tag, 0.0)

    def __getitem__(self, tag: str) -> float:
        return self.get(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)


def load_event_values(path: str) -> EventValueTable:
    """
    Build a value table from the defaults plus overrides in a JSON file.

    The file must hold a single JSON object mapping tag names to numbers.
    Entries replace the default weight for that tag or add a new tag.

    Args:
        path: Path to the JSON overrides file

    Returns:
        EventValueTable with the merged weights

    Raises:
        ValueError: If the file is not a JSON object of numeric weights
    """
    with open(Path(path)) as f:
        try:
            overrides = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Weights file {path} is not valid JSON: {e}") from e

    if not isinstance(overrides, dict):
        raise ValueError(f"Weights file {path} must contain a JSON object")

    merged = dict(DEFAULT_EVENT_VALUES)
    for tag, weight in overrides.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValueError(f"Weight for {tag!r} must be a number, got {weight!r}")
        merged[tag] = float(weight)
    return EventValueTable(merged)
