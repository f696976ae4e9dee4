"""Tests for the batch CLI."""

import json

from tradecoach.cli import main


class TestCli:
    def test_random_batch(self, tmp_path):
        assert main(["--count", "2", "--seed", "3", "--output", str(tmp_path)]) == 0
        assert (tmp_path / "runs" / "run_001.json").exists()
        assert (tmp_path / "runs" / "run_002.json").exists()
        assert (tmp_path / "decisions" / "run_002.csv").exists()
        assert "Runs: 2" in (tmp_path / "summary.txt").read_text()

    def test_custom_batch(self, tmp_path):
        rc = main(["--count", "1", "--seed", "5", "--output", str(tmp_path), "--custom",
                   "--market", "bearish", "--emotions", "fear,hope"])
        assert rc == 0
        data = json.loads((tmp_path / "runs" / "run_001.json").read_text())
        assert data["scenario"]["market_condition"] == "bearish"
        assert data["trader_state"]["current_emotional_state"]["primary"] in ("fear", "hope")

    def test_custom_without_emotions_fails(self, tmp_path):
        assert main(["--count", "1", "--output", str(tmp_path), "--custom"]) == 1

    def test_verbose(self, tmp_path, capsys):
        assert main(["--count", "1", "--seed", "2", "--output", str(tmp_path), "--verbose"]) == 0
        assert "Run #1" in capsys.readouterr().out
