"""Tests for the pair and status commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stockerbot import __version__
from stockerbot.cli.commands import app
from stockerbot.pairing.errors import PairingTimeout
from stockerbot.pairing.types import BotIdentity, PairingResult

runner = CliRunner()

TOKEN = "123456:ABCDEFGHIJKLMNOPQRSTUV"


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "config.json"
    monkeypatch.setattr("stockerbot.config.loader.get_config_path", lambda: path)
    return path


@pytest.fixture
def pairing_calls(monkeypatch) -> list[dict]:
    """Replace the live handshake with one that pairs user 42 at once."""
    calls: list[dict] = []

    async def fake_start_pairing(token, **kwargs):
        calls.append({"token": token, **kwargs})
        return PairingResult(
            token=token,
            owner_id=42,
            username="alice",
            bot=BotIdentity(username="TestBot", probed=True),
        )

    monkeypatch.setattr("stockerbot.pairing.start_pairing", fake_start_pairing)
    return calls


# ── pair ────────────────────────────────────────────────────────────


class TestPair:
    def test_pair_with_token_saves_owner(self, config_path: Path, pairing_calls):
        result = runner.invoke(app, ["pair", "--token", TOKEN])

        assert result.exit_code == 0, result.output
        assert "Paired" in result.output
        assert pairing_calls[0]["token"] == TOKEN
        assert pairing_calls[0]["timeout"] == 60.0

        saved = json.loads(config_path.read_text())
        assert saved["telegram"]["ownerId"] == 42
        assert saved["telegram"]["token"] == TOKEN
        assert saved["telegram"]["username"] == "alice"

    def test_timeout_option_overrides_config(self, config_path: Path, pairing_calls):
        result = runner.invoke(app, ["pair", "--token", TOKEN, "--timeout", "5"])

        assert result.exit_code == 0, result.output
        assert pairing_calls[0]["timeout"] == 5.0

    def test_reuses_saved_token(self, config_path: Path, pairing_calls):
        config_path.write_text(json.dumps({"telegram": {"token": TOKEN}}))

        result = runner.invoke(app, ["pair"], input="y\n")

        assert result.exit_code == 0, result.output
        assert pairing_calls[0]["token"] == TOKEN

    def test_timeout_exits_nonzero_without_saving(self, config_path: Path, monkeypatch):
        async def timing_out(token, **kwargs):
            raise PairingTimeout("Pairing timed out after 60s", timeout=60)

        monkeypatch.setattr("stockerbot.pairing.start_pairing", timing_out)

        result = runner.invoke(app, ["pair", "--token", TOKEN])

        assert result.exit_code == 1
        assert "timed out" in result.output
        assert not config_path.exists()

    def test_unexpected_error_exits_nonzero(self, config_path: Path, monkeypatch):
        async def broken(token, **kwargs):
            raise ConnectionError("network unreachable")

        monkeypatch.setattr("stockerbot.pairing.start_pairing", broken)

        result = runner.invoke(app, ["pair", "--token", TOKEN])

        assert result.exit_code == 1
        assert "Pairing failed" in result.output
        assert not config_path.exists()


# ── status ──────────────────────────────────────────────────────────


class TestStatus:
    def test_unpaired(self, config_path: Path):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Not paired" in result.output

    def test_paired(self, config_path: Path):
        config_path.write_text(json.dumps({
            "telegram": {"token": TOKEN, "ownerId": 42, "username": "alice"},
        }))

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "42" in result.output
        assert "alice" in result.output
        assert TOKEN not in result.output


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
