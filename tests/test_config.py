"""Tests for configuration loading."""

import pytest

from yandex_ai_chat.utils import config as config_module
from yandex_ai_chat.utils.config import Config, get_config, load_config
from yandex_ai_chat.utils.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("YANDEX_FOLDER_ID", "YANDEX_API_KEY", "POLL_MAX_ATTEMPTS", "SETTINGS_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    return monkeypatch


def test_defaults_without_settings_file(clean_env, tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config.is_configured is False
    assert config.poll_max_attempts == 30
    assert config.poll_interval_seconds == 2.0
    assert config.text_generation.temperature == 0.3
    assert config.text_generation.max_tokens == 2000
    assert config.prompt_history_max_entries == 500


def test_credentials_and_overrides_from_env(clean_env, tmp_path):
    clean_env.setenv("YANDEX_FOLDER_ID", "b1gfolder")
    clean_env.setenv("YANDEX_API_KEY", "AQVN-secret")
    clean_env.setenv("POLL_MAX_ATTEMPTS", "5")

    config = load_config(tmp_path / "missing.yaml")

    assert config.is_configured is True
    assert config.poll_max_attempts == 5
    assert get_config() is config


def test_yaml_sections(clean_env, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "text_generation:\n"
        "  model: yandexgpt-lite\n"
        "speech:\n"
        "  lang: en-US\n",
        encoding="utf-8",
    )

    config = load_config(settings)

    assert config.text_generation.model == "yandexgpt-lite"
    assert config.text_generation.temperature == 0.3
    assert config.speech.lang == "en-US"


def test_invalid_settings_raise(clean_env, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("text_generation:\n  temperature: hot\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(settings)


def test_get_config_before_load(clean_env):
    with pytest.raises(ConfigurationError):
        get_config()


@pytest.mark.parametrize(
    "folder_id, api_key",
    [("", "key"), ("folder", ""), ("  ", "key"), ("folder", "   ")],
)
def test_missing_credential_means_not_configured(folder_id, api_key):
    config = Config(YANDEX_FOLDER_ID=folder_id, YANDEX_API_KEY=api_key)

    assert config.is_configured is False
