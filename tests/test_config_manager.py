"""Unit tests for services/config_manager.py.

The environment is passed in as a plain dict and ``.env`` loading is
disabled, so nothing here depends on the machine running the tests.
"""

import json

import pytest

from services.config_manager import ConfigManager, ConfigurationError


def _config(tmp_path, environ=None, file_data=None) -> ConfigManager:
    path = tmp_path / "config.json"
    if file_data is not None:
        path.write_text(json.dumps(file_data))
    return ConfigManager(str(path), environ=environ or {}, load_env_file=False)


def test_defaults_apply_when_unset(tmp_path) -> None:
    config = _config(tmp_path)

    assert config.check_interval == 300.0
    assert config.kick_request_delay == 3.0
    assert config.request_timeout == 15.0
    assert config.database_path == "bot_data.db"
    assert config.log_level == "INFO"
    assert config.log_channel_id is None
    assert config.webhook_url is None


def test_environment_overrides_file(tmp_path) -> None:
    config = _config(
        tmp_path,
        environ={"CHECK_INTERVAL": "60"},
        file_data={"CHECK_INTERVAL": 120, "DATABASE_PATH": "from_file.db"},
    )

    assert config.check_interval == 60.0
    assert config.database_path == "from_file.db"


def test_empty_environment_value_falls_through(tmp_path) -> None:
    config = _config(tmp_path, environ={"LOG_LEVEL": ""}, file_data={"LOG_LEVEL": "DEBUG"})
    assert config.log_level == "DEBUG"


def test_platform_credentials_from_environment(tmp_path) -> None:
    config = _config(tmp_path, environ={
        "TWITCH_CLIENT_ID": "cid",
        "TWITCH_CLIENT_SECRET": "secret",
        "YOUTUBE_API_KEY": "ytkey",
    })

    assert config.get_platform_credentials("twitch") == {"client_id": "cid", "client_secret": "secret"}
    assert config.twitch_client_id == "cid"
    assert config.twitch_client_secret == "secret"
    assert config.youtube_api_key == "ytkey"


def test_platform_credentials_from_file(tmp_path) -> None:
    config = _config(tmp_path, file_data={"platforms": {"youtube": {"api_key": "filekey"}}})
    assert config.youtube_api_key == "filekey"


def test_validate_reports_missing_keys(tmp_path) -> None:
    config = _config(tmp_path, environ={"DISCORD_TOKEN": "token"})

    assert config.missing_required() == ["DISCORD_CLIENT_ID"]
    with pytest.raises(ConfigurationError, match="DISCORD_CLIENT_ID"):
        config.validate()


def test_validate_passes_with_required_keys(tmp_path) -> None:
    config = _config(tmp_path, environ={"DISCORD_TOKEN": "token", "DISCORD_CLIENT_ID": "123"})
    config.validate()


def test_unreadable_file_is_ignored(tmp_path) -> None:
    (tmp_path / "config.json").write_text("{not json")
    config = ConfigManager(str(tmp_path / "config.json"), environ={}, load_env_file=False)

    assert config.check_interval == 300.0


def test_log_channel_id_is_int(tmp_path) -> None:
    config = _config(tmp_path, environ={"LOG_CHANNEL_ID": "1234"})
    assert config.log_channel_id == 1234
