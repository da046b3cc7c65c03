"""Shared test fixtures for play-by-play data."""

import pandas as pd
import pytest

from clutch.values import EventValueTable

GSW = 1610612744
LAL = 1610612747

CURRY = 201939
GREEN = 203110
JAMES = 2544
DAVIS = 203076


@pytest.fixture
def sample_playbyplay_data() -> pd.DataFrame:
    """Late-game PlayByPlayV2 rows plus a few that the clutch filters drop."""
    return pd.DataFrame({
        "PERIOD": [4, 4, 4, 4, 4, 4, 2, 4, 4, 5, 4],
        "PCTIMESTRING": [
            "0:08", "2:30", "1:15", "1:14", "0:05", "0:05",
            "5:00", "bad", "3:00", "0:30", "4:00",
        ],
        "EVENTMSGTYPE": [1, 5, 2, 4, 3, 3, 1, 1, 1, 1, 9],
        "EVENTMSGACTIONTYPE": [79, 1, 6, 0, 11, 12, 1, 1, 1, 1, 1],
        "HOMEDESCRIPTION": [
            "Curry 3PT Pullup Jump Shot (30 PTS) (Green 7 AST)",
            "Curry STEAL (2 STL)",
            "Green BLOCK (1 BLK)",
            "Green REBOUND (Off:0 Def:5)",
            None,
            None,
            "Curry 3PT Jump Shot (10 PTS)",
            "Curry 3PT Jump Shot (12 PTS)",
            "Curry 3PT Jump Shot (14 PTS)",
            "Curry 26' 3PT Jump Shot (33 PTS)",
            "Warriors Timeout: Regular (Full 1 Short 0)",
        ],
        "VISITORDESCRIPTION": [
            None,
            "James Bad Pass Turnover (P3.T4)",
            "MISS Davis 2' Driving Layup",
            None,
            "James Free Throw 1 of 2 (20 PTS)",
            "MISS James Free Throw 2 of 2",
            None,
            None,
            None,
            None,
            None,
        ],
        "PLAYER1_ID": [CURRY, JAMES, DAVIS, GREEN, JAMES, JAMES, CURRY, CURRY, CURRY, CURRY, None],
        "PLAYER1_NAME": [
            "Stephen Curry", "LeBron James", "Anthony Davis", "Draymond Green",
            "LeBron James", "LeBron James", "Stephen Curry", "Stephen Curry",
            "Stephen Curry", "Stephen Curry", None,
        ],
        "PLAYER2_ID": [GREEN, CURRY, None, None, None, None, None, None, None, None, None],
        "PLAYER2_NAME": [
            "Draymond Green", "Stephen Curry", None, None, None, None,
            None, None, None, None, None,
        ],
        "PLAYER3_ID": [None, None, GREEN, None, None, None, None, None, None, None, None],
        "PLAYER3_NAME": [
            None, None, "Draymond Green", None, None, None,
            None, None, None, None, None,
        ],
        "TEAM_ID": [GSW, LAL, LAL, GSW, LAL, LAL, GSW, GSW, GSW, GSW, GSW],
        "SCOREMARGIN": ["2", "-1", "TIE", "TIE", "1", "1", "3", "3", "12", "3", None],
        "WEEK_OF_SEASON": [10, 10, 10, 10, 10, 10, 10, 10, 10, 27, 10],
    })


@pytest.fixture
def value_table() -> EventValueTable:
    """Default eWPA weights."""
    return EventValueTable()
