"""Tests for the leadradar command line."""

import pytest
from click.testing import CliRunner

from lead_radar.cli.main import cli
from lead_radar.core.models import SignalStatus
from lead_radar.storage import SignalDatabase

from helpers import make_signal, EXAMPLE_CONTENT


@pytest.fixture
def db_path(temp_data_dir):
    return str(temp_data_dir / "signals.db")


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    return CliRunner()


class TestCli:
    """Tests for CLI commands."""

    def test_init(self, runner, db_path):
        result = runner.invoke(cli, ["init", "--db", db_path])
        assert result.exit_code == 0
        assert "Database initialized" in result.output

    def test_signals_empty(self, runner, db_path):
        result = runner.invoke(cli, ["signals", "--db", db_path])
        assert result.exit_code == 0
        assert "No signals found" in result.output

    def test_signals_listed(self, runner, db_path):
        SignalDatabase(db_path).insert_signal(make_signal(title="GPU prices"))
        result = runner.invoke(cli, ["signals", "--db", db_path])
        assert result.exit_code == 0
        assert "GPU prices" in result.output

    def test_score(self, runner, db_path):
        SignalDatabase(db_path).insert_signal(make_signal(content=EXAMPLE_CONTENT))
        result = runner.invoke(cli, ["score", "--db", db_path])
        assert result.exit_code == 0
        assert "Scored 1 signals" in result.output

    def test_lead_not_found(self, runner, db_path):
        result = runner.invoke(cli, ["lead", "99", "--db", db_path])
        assert result.exit_code == 0
        assert "not found" in result.output

    def test_status(self, runner, db_path):
        """Status changes are persisted."""
        db = SignalDatabase(db_path)
        signal_id = db.insert_signal(make_signal())

        result = runner.invoke(cli, ["status", str(signal_id), "contacted", "--db", db_path])

        assert result.exit_code == 0
        assert db.get_signal(signal_id).status == SignalStatus.CONTACTED

    def test_status_rejects_unknown_value(self, runner, db_path):
        result = runner.invoke(cli, ["status", "1", "archived", "--db", db_path])
        assert result.exit_code != 0

    def test_respond_uses_fallback(self, runner, db_path):
        """Without an API key the fallback outreach is stored."""
        db = SignalDatabase(db_path)
        signal_id = db.insert_signal(make_signal(content="H100s are too expensive"))

        result = runner.invoke(cli, ["respond", str(signal_id), "--db", db_path])

        assert result.exit_code == 0
        assert len(db.list_responses(signal_id=signal_id)) == 1

    def test_chat_single_message(self, runner, db_path):
        SignalDatabase(db_path).insert_signal(make_signal(title="GPU prices"))
        result = runner.invoke(cli, ["chat", "show signals", "--db", db_path])
        assert result.exit_code == 0
        assert "signals_results" in result.output
