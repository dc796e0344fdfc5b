"""API provider clients for Yandex Cloud services."""

from .yandex_gpt import YandexGPTClient
from .yandex_art import YandexARTClient
from .speechkit import SpeechKitClient

__all__ = [
    "YandexGPTClient",
    "YandexARTClient",
    "SpeechKitClient",
]
