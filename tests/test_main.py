"""Tests for the main pipeline orchestrator."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

from clutch.main import main, run_pipeline
from clutch.values import EventValueTable

from conftest import CURRY


class TestRunPipeline:
    """Tests for the in-memory pipeline."""

    def test_outputs(self, sample_playbyplay_data, value_table):
        """Test that all three result tables are produced."""
        results = run_pipeline(sample_playbyplay_data, value_table)

        assert set(results) == {"clutch_scores", "player_totals", "efficiency"}
        assert results["clutch_scores"].iloc[0]["PLAYER_ID"] == CURRY
        assert results["clutch_scores"].iloc[0]["Adjusted_eWPA"] == pytest.approx(0.122)
        assert len(results["efficiency"]) == 5

    def test_idempotent(self, sample_playbyplay_data, value_table):
        """Test that running twice gives identical results."""
        first = run_pipeline(sample_playbyplay_data, value_table)
        second = run_pipeline(sample_playbyplay_data, value_table)
        for key in first:
            pd.testing.assert_frame_equal(first[key], second[key])

    def test_alternate_weights(self, sample_playbyplay_data):
        """Test that an injected weight table drives the scores."""
        results = run_pipeline(sample_playbyplay_data, EventValueTable({"Block": 1.0}))
        scores = results["clutch_scores"]
        assert len(scores) == 1
        assert scores.iloc[0]["PLAYER_NAME"] == "Draymond Green"
        assert scores.iloc[0]["Total_eWPA"] == 1.0

    def test_partition_independent(self, sample_playbyplay_data, value_table):
        """Test that splitting the input does not change the efficiency table."""
        whole = run_pipeline(sample_playbyplay_data, value_table)["efficiency"]
        reordered = sample_playbyplay_data.iloc[::-1].reset_index(drop=True)
        parts = run_pipeline(reordered, value_table)["efficiency"]

        keys = ["PLAYER_ID", "SEASON_TYPE", "TEAM_ID"]
        pd.testing.assert_frame_equal(
            whole.sort_values(keys).reset_index(drop=True),
            parts.sort_values(keys).reset_index(drop=True),
        )


class TestMain:
    """Tests for the command line entry point."""

    def test_main_writes_outputs(self, sample_playbyplay_data):
        """Test a full run from a CSV file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            csv_path = Path(tmpdir) / "pbp.csv"
            sample_playbyplay_data.to_csv(csv_path, index=False)
            out_dir = Path(tmpdir) / "output"

            status = main(input_path=str(csv_path), output_dir=str(out_dir))

            assert status == 0
            for name in ("clutch_scores.json", "player_totals.json", "efficiency.json"):
                assert (out_dir / name).exists()

            with open(out_dir / "clutch_scores.json") as f:
                scores = json.load(f)
            assert scores[0]["PLAYER_ID"] == CURRY
            assert scores[0]["Adjusted_eWPA"] == pytest.approx(0.122)

    def test_main_with_weights_file(self, sample_playbyplay_data):
        """Test that --weights overrides are applied."""
        with tempfile.TemporaryDirectory() as tmpdir:
            csv_path = Path(tmpdir) / "pbp.csv"
            sample_playbyplay_data.to_csv(csv_path, index=False)
            weights_path = Path(tmpdir) / "weights.json"
            weights_path.write_text(json.dumps({"Rebound": 5.0}))
            out_dir = Path(tmpdir) / "output"

            status = main(input_path=str(csv_path), output_dir=str(out_dir), weights_path=str(weights_path))

            assert status == 0
            with open(out_dir / "clutch_scores.json") as f:
                scores = json.load(f)
            assert scores[0]["PLAYER_NAME"] == "Draymond Green"

    def test_main_bad_weights_file(self, sample_playbyplay_data):
        """Test that an unreadable weights file fails the run."""
        with tempfile.TemporaryDirectory() as tmpdir:
            weights_path = Path(tmpdir) / "weights.json"
            weights_path.write_text("[]")

            status = main(input_path=tmpdir, output_dir=tmpdir, weights_path=str(weights_path))

            assert status == 1

    def test_main_missing_input(self):
        """Test that a missing input path fails without writing outputs."""
        with tempfile.TemporaryDirectory() as tmpdir:
            status = main(input_path=str(Path(tmpdir) / "missing.csv"), output_dir=tmpdir)

            assert status == 1
            assert not (Path(tmpdir) / "clutch_scores.json").exists()

    def test_main_requires_a_source(self):
        """Test that main needs either an input path or a game id."""
        assert main() == 1

    @patch("clutch.main.fetch_playbyplay")
    def test_main_fetches_game(self, mock_fetch, sample_playbyplay_data):
        """Test the live-game path."""
        mock_fetch.return_value = sample_playbyplay_data

        with tempfile.TemporaryDirectory() as tmpdir:
            status = main(game_id="0022500001", week=10, output_dir=tmpdir)

            assert status == 0
            mock_fetch.assert_called_once_with("0022500001", 10)
            assert (Path(tmpdir) / "efficiency.json").exists()

    @patch("clutch.main.fetch_playbyplay")
    def test_main_fetch_failure(self, mock_fetch):
        """Test that a failed fetch fails the run."""
        mock_fetch.return_value = None

        with tempfile.TemporaryDirectory() as tmpdir:
            assert main(game_id="0022500001", week=10, output_dir=tmpdir) == 1
