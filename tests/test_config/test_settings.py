# tests/test_config/test_settings.py
import json
import os
import pytest
from pathlib import Path
from pydantic_settings import SettingsConfigDict
from tokenresolver.config.settings import App, CONFIG_FILE, settings_load
from tokenresolver.lib.errors import ConfigError
from tokenresolver.models.dataModel import TokenConfig


def app_load(json_file: Path | None) -> App:
    """Load settings reading JSON from `json_file` instead of the user config."""

    class FileApp(App):
        model_config = SettingsConfigDict(json_file=json_file)

    return FileApp()


def setup_function():
    for k in list(os.environ):
        if k.startswith("TKR_"):
            del os.environ[k]


def teardown_function():
    for k in list(os.environ):
        if k.startswith("TKR_"):
            del os.environ[k]


def test_app_default_settings():
    app = app_load(None)
    assert app.beQuiet is False
    assert app.token_open == "{"
    assert app.token_close == "}"
    assert app.token_separators == ["|"]
    assert app.token_min_segments == 2
    assert app.token_max_segments is None
    assert app.token_segment_pattern == r"\w"
    assert app.on_missing == "raise"


def test_app_env_override():
    os.environ["TKR_BEQUIET"] = "true"
    os.environ["TKR_TOKEN_OPEN"] = "<<"
    os.environ["TKR_TOKEN_CLOSE"] = ">>"
    os.environ["TKR_TOKEN_SEPARATORS"] = '["|", ":"]'
    os.environ["TKR_TOKEN_MIN_SEGMENTS"] = "3"
    os.environ["TKR_TOKEN_MAX_SEGMENTS"] = "5"
    os.environ["TKR_ON_MISSING"] = "keep"

    app = App()
    assert app.beQuiet is True
    assert app.token_open == "<<"
    assert app.token_close == ">>"
    assert app.token_separators == ["|", ":"]
    assert app.token_min_segments == 3
    assert app.token_max_segments == 5
    assert app.on_missing == "keep"


def test_app_invalid_on_missing_env():
    os.environ["TKR_ON_MISSING"] = "ignore"
    with pytest.raises(ConfigError):
        settings_load()


def test_token_config_from_defaults():
    assert App().token_config() == TokenConfig()


def test_token_config_from_env():
    os.environ["TKR_TOKEN_OPEN"] = "<<"
    os.environ["TKR_TOKEN_CLOSE"] = ">>"
    os.environ["TKR_TOKEN_SEPARATORS"] = '[":"]'
    config = App().token_config()
    assert config == TokenConfig(open="<<", close=">>", separators=[":"])


def test_token_config_invalid_values_raise_config_error():
    os.environ["TKR_TOKEN_MIN_SEGMENTS"] = "3"
    os.environ["TKR_TOKEN_MAX_SEGMENTS"] = "2"
    with pytest.raises(ConfigError):
        App().token_config()


def test_json_config_file(tmp_path: Path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"token_open": "[[", "token_close": "]]"}))
    app = app_load(config_file)
    assert app.token_open == "[["
    assert app.token_close == "]]"


def test_env_overrides_json_config_file(tmp_path: Path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"token_open": "[["}))
    os.environ["TKR_TOKEN_OPEN"] = "<<"
    assert app_load(config_file).token_open == "<<"


def test_config_file_location():
    assert CONFIG_FILE.name == "config.json"
    assert "tokenresolver" in str(CONFIG_FILE)
