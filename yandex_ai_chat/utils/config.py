"""Configuration management for the Yandex AI chat orchestrator."""

import os
from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_SETTINGS_PATH = Path("config/settings.yaml")


class TextGenerationConfig(BaseModel):
    """Configuration for the YandexGPT completion endpoint."""
    endpoint: str = "https://llm.api.cloud.yandex.net/foundationModels/v1/completion"
    model: str = "yandexgpt-5.1-pro"
    temperature: float = 0.3
    max_tokens: int = 2000


class ImageGenerationConfig(BaseModel):
    """Configuration for the YandexART async generation endpoints."""
    endpoint: str = "https://llm.api.cloud.yandex.net/foundationModels/v1/imageGenerationAsync"
    operation_endpoint: str = "https://llm.api.cloud.yandex.net/operations/"
    model: str = "yandex-art"


class SpeechConfig(BaseModel):
    """Configuration for SpeechKit recognition."""
    endpoint: str = "https://stt.api.cloud.yandex.net/speech/v1/stt:recognize"
    lang: str = "ru-RU"
    format: str = "oggopus"
    sample_rate_hertz: int = 16000


class Config(BaseModel):
    """Main application configuration."""

    # Credentials (both required before any orchestration can run)
    yandex_folder_id: str = Field(default="", alias="YANDEX_FOLDER_ID")
    yandex_api_key: str = Field(default="", alias="YANDEX_API_KEY")

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Timeout Settings
    timeout_yandex_gpt_seconds: float = Field(default=120.0, alias="TIMEOUT_YANDEX_GPT_SECONDS")
    timeout_yandex_art_seconds: float = Field(default=120.0, alias="TIMEOUT_YANDEX_ART_SECONDS")
    timeout_speechkit_seconds: float = Field(default=30.0, alias="TIMEOUT_SPEECHKIT_SECONDS")

    # Operation polling
    poll_max_attempts: int = Field(default=30, alias="POLL_MAX_ATTEMPTS")
    poll_interval_seconds: float = Field(default=2.0, alias="POLL_INTERVAL_SECONDS")

    # Prompt history
    prompt_history_path: Path = Field(
        default=Path.home() / ".yandex_ai_chat" / "prompt_history.json",
        alias="PROMPT_HISTORY_PATH",
    )
    prompt_history_max_entries: int = Field(default=500, alias="PROMPT_HISTORY_MAX_ENTRIES")

    # Service sections (from settings.yaml)
    text_generation: TextGenerationConfig = Field(default_factory=TextGenerationConfig)
    image_generation: ImageGenerationConfig = Field(default_factory=ImageGenerationConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)

    class Config:
        populate_by_name = True

    @property
    def is_configured(self) -> bool:
        """True when both the folder id and the API key are present."""
        return bool(self.yandex_folder_id.strip() and self.yandex_api_key.strip())


# Global config instance
_config: Optional[Config] = None


def load_config(settings_path: Optional[Path] = None) -> Config:
    """
    Load configuration from environment and the optional YAML settings file.

    Args:
        settings_path: Path to settings.yaml (defaults to $SETTINGS_PATH
            or config/settings.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    if settings_path is None:
        settings_path = Path(os.getenv("SETTINGS_PATH", DEFAULT_SETTINGS_PATH))

    try:
        settings = {}
        if settings_path.exists():
            with open(settings_path, "r", encoding="utf-8") as f:
                settings = yaml.safe_load(f) or {}
        else:
            logger.info(
                "Settings file not found, using defaults",
                extra={"settings_path": str(settings_path)}
            )

        config_data = {
            **os.environ,
            **settings,
        }

        _config = Config(**config_data)

    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")

    logger.info(
        "Configuration loaded successfully",
        extra={
            "environment": _config.app_env,
            "configured": _config.is_configured,
        }
    )

    return _config


def get_config() -> Config:
    """
    Get the current configuration instance.

    Raises:
        ConfigurationError: If config not loaded
    """
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config
