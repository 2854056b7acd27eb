"""
Tests for the command line interface.

Tests cover:
- indicators, check and rank commands
- Text and JSON output
- Exit codes on bad input
"""

import json
from datetime import date, timedelta

import pytest

import cli
from config import loader


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """No config file on the search path."""
    monkeypatch.setattr(loader, "CONFIG_PATHS", [])
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TRADEHEALTH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TRADEHEALTH_SCAN_WORKERS", raising=False)


@pytest.fixture
def write_quotations(tmp_path):
    """Write a CSV file of rising daily quotations."""

    def factory(name: str, days: int = 40, step: float = 0.5):
        lines = ["date,open,high,low,close,volume"]
        start = date(2024, 1, 1)
        for i in range(days):
            close = 50 + i * step
            lines.append(
                f"{(start + timedelta(days=i)).isoformat()},{close:.2f},{close + 1:.2f},{close - 1:.2f},{close:.2f},{1000 + i * 10}"
            )
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return factory


class TestIndicatorsCommand:
    """Test the indicators command."""

    def test_text(self, write_quotations, capsys):
        assert cli.main(["indicators", write_quotations("acme.csv")]) == 0

        out = capsys.readouterr().out
        assert "## ACME - 2024-02-09" in out
        assert "| sma10 |" in out
        assert "| bollinger_band_width_threshold |" in out

    def test_json(self, write_quotations, capsys):
        assert cli.main(["indicators", write_quotations("acme.csv"), "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "ACME"
        assert data["date"] == "2024-02-09"
        assert "bollinger_band_width_threshold" in data

    def test_short_history(self, write_quotations, capsys):
        assert cli.main(["indicators", write_quotations("acme.csv", days=5)]) == 1
        assert "at least 10 required" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert cli.main(["indicators", str(tmp_path / "missing.csv")]) == 1
        assert "Error" in capsys.readouterr().err


class TestCheckCommand:
    """Test the check command."""

    def test_text(self, write_quotations, capsys):
        assert cli.main(["check", write_quotations("acme.csv"), "--start", "2024-02-01"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("## ACME since 2024-02-01")

    def test_json_by_date(self, write_quotations, capsys):
        path = write_quotations("acme.csv")
        assert cli.main(["check", path, "-s", "2024-02-01", "-p", "confirmations", "-f", "json", "--by-date"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["profile"] == "confirmations"
        assert all(group["date"] >= "2024-02-01" for group in data["dates"])

    def test_start_after_newest_quotation(self, write_quotations, capsys):
        assert cli.main(["check", write_quotations("acme.csv"), "--start", "2025-01-01"]) == 1
        assert "Error" in capsys.readouterr().err


class TestRankCommand:
    """Test the rank command."""

    def test_rank(self, write_quotations, capsys):
        slow = write_quotations("slow.csv", days=80, step=0.1)
        fast = write_quotations("fast.csv", days=80, step=1.0)
        assert cli.main(["rank", slow, fast, "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        symbols = [item["symbol"] for item in data["instruments"]]
        assert symbols == ["FAST", "SLOW"]
        assert data["instruments"][0]["rs_number"] == 100

    def test_skips_unreadable_files(self, write_quotations, tmp_path, capsys):
        path = write_quotations("acme.csv")
        assert cli.main(["rank", path, str(tmp_path / "missing.csv")]) == 0
        assert "Skipping" in capsys.readouterr().err
