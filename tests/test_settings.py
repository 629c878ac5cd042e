"""Tests for configuration loading and validation."""

import json

import pytest

from shu_net_keeper.constants import DEFAULT_CHECK_INTERVAL, DEFAULT_CHECK_URL, USER_AGENT
from shu_net_keeper.errors import ConfigError, ValidationError
from shu_net_keeper.models import Credentials
from shu_net_keeper.settings import load_config, validate_config

SMTP = {
    "server": "smtp.example.com",
    "port": 465,
    "sender": "sender@example.com",
    "password": "pw",
    "receiver": "receiver@example.com",
}


class TestUsername:
    @pytest.mark.parametrize("username", ["1234567", "123456789", "1234567a", "", "１２３４５６７８"])
    def test_rejected(self, username):
        with pytest.raises(ValidationError) as excinfo:
            Credentials(username=username, secret="pw")
        assert excinfo.value.field == "username"

    def test_accepted(self):
        assert Credentials(username="20231234", secret="pw").username == "20231234"

    def test_non_string_rejected(self, raw_config):
        raw_config["username"] = 12345678
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValidationError):
            Credentials(username="12345678", secret="")

    def test_secret_hidden_from_repr(self):
        assert "topsecret" not in repr(Credentials(username="12345678", secret="topsecret"))


class TestValidateConfig:
    def test_defaults(self):
        config = validate_config({"username": "12345678", "password": "pw"})

        assert config.interval == DEFAULT_CHECK_INTERVAL
        assert config.check.url == DEFAULT_CHECK_URL
        assert config.check.timeout_seconds == 5
        assert config.check.retries == 5
        assert config.http.user_agent == USER_AGENT
        assert config.log_level == "INFO"
        assert config.notify_on_every_login is False
        assert config.smtp is None

    def test_overrides(self, raw_config):
        config = validate_config(raw_config)

        assert config.interval == 60
        assert config.check.url == "http://check.invalid/"
        assert config.check.retries == 3
        assert config.username == "12345678"

    @pytest.mark.parametrize("interval", [0, -5, "60", True, 1.5])
    def test_invalid_interval(self, raw_config, interval):
        raw_config["interval"] = interval
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_invalid_retries(self, raw_config):
        raw_config["check"]["retries"] = 0
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_smtp_ignored_when_disabled(self, raw_config):
        raw_config["smtp"] = {"server": ""}
        assert validate_config(raw_config).smtp is None

    def test_smtp_validated_when_enabled(self, raw_config):
        raw_config["smtp_enabled"] = True
        raw_config["smtp"] = dict(SMTP)

        smtp = validate_config(raw_config).smtp

        assert smtp.server == "smtp.example.com"
        assert smtp.port == 465
        assert smtp.receiver == "receiver@example.com"

    def test_smtp_section_required_when_enabled(self, raw_config):
        raw_config["smtp_enabled"] = True
        with pytest.raises(ConfigError):
            validate_config(raw_config)

    @pytest.mark.parametrize(
        "key,value",
        [("port", 0), ("port", 70000), ("port", None), ("sender", "not-an-email"), ("receiver", ""), ("server", None)],
    )
    def test_smtp_field_errors(self, raw_config, key, value):
        raw_config["smtp_enabled"] = True
        raw_config["smtp"] = dict(SMTP, **{key: value})
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_root_must_be_object(self):
        with pytest.raises(ConfigError):
            validate_config(["not", "a", "dict"])


class TestLoadConfig:
    def test_reads_json_file(self, tmp_path, raw_config):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(raw_config), encoding="utf-8")

        assert load_config(path).interval == 60

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="parse"):
            load_config(path)


class TestSectionTypes:
    @pytest.mark.parametrize("key,value", [("check", ["x"]), ("http", "fast"), ("check", 5)])
    def test_non_object_section_rejected(self, raw_config, key, value):
        raw_config[key] = value
        with pytest.raises(ValidationError) as excinfo:
            validate_config(raw_config)
        assert excinfo.value.field == key

    def test_non_object_smtp_section_rejected(self, raw_config):
        raw_config["smtp_enabled"] = True
        raw_config["smtp"] = "smtp.example.com"
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_null_section_uses_defaults(self, raw_config):
        raw_config["http"] = None
        assert validate_config(raw_config).http.timeout_seconds == 8

    @pytest.mark.parametrize("key", ["smtp_enabled", "notify_on_every_login"])
    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_flags_must_be_booleans(self, raw_config, key, value):
        raw_config[key] = value
        with pytest.raises(ValidationError):
            validate_config(raw_config)

    def test_boolean_flags_accepted(self, raw_config):
        raw_config["notify_on_every_login"] = True
        raw_config["smtp_enabled"] = False
        assert validate_config(raw_config).notify_on_every_login is True
