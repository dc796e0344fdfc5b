"""Yandex AI chat: prompt orchestration over YandexGPT and YandexART."""

__version__ = "1.0.0"
