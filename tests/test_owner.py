"""Tests for owner binding."""

from stockerbot.config.schema import Config
from stockerbot.pairing.owner import bind_owner, get_owner, is_owner
from stockerbot.pairing.types import PairingResult


def _paired(owner_id: int = 42, username: str = "alice") -> Config:
    config = Config()
    config.telegram.token = "123:abc"
    config.telegram.owner_id = owner_id
    config.telegram.username = username
    return config


class TestGetOwner:
    def test_unpaired(self):
        assert get_owner(Config()) is None

    def test_paired(self):
        owner = get_owner(_paired())
        assert owner.owner_id == 42
        assert owner.username == "alice"

    def test_empty_username_becomes_none(self):
        assert get_owner(_paired(username="")).username is None


class TestIsOwner:
    def test_nobody_passes_when_unpaired(self):
        assert not is_owner(Config(), 42)

    def test_matching_id(self):
        assert is_owner(_paired(), 42)

    def test_string_id(self):
        assert is_owner(_paired(), "42")

    def test_other_id(self):
        assert not is_owner(_paired(), 43)

    def test_garbage_id(self):
        assert not is_owner(_paired(), "alice")
        assert not is_owner(_paired(), None)


class TestBindOwner:
    def test_records_result(self):
        config = Config()
        bind_owner(config, PairingResult(token="123:new", owner_id=555, username="bob"))

        assert config.telegram.token == "123:new"
        assert config.telegram.owner_id == 555
        assert config.telegram.username == "bob"
        assert config.telegram.is_paired

    def test_replaces_previous_owner(self):
        config = _paired()
        bind_owner(config, PairingResult(token="123:abc", owner_id=7))

        assert config.telegram.owner_id == 7
        assert config.telegram.username == ""
        assert is_owner(config, 7)
        assert not is_owner(config, 42)
