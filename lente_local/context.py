from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from PyQt6.QtCore import QSettings

from .config import APPLICATION_NAME, ORGANIZATION_NAME, get_speech_language
from .gemini import GeminiGateway
from .geolocation import LocationRequester
from .speech import create_speech_recognizer
from .theme import ThemeStore


@dataclass
class AppContext:
    """Process-wide collaborators, built once and handed to the main window."""
    settings: Any
    theme_store: ThemeStore
    gateway: GeminiGateway
    location_requester: LocationRequester
    speech_recognizer: Optional[Any] = None


def create_context(settings: Optional[QSettings] = None) -> AppContext:
    settings = settings or QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
    return AppContext(
        settings=settings,
        theme_store=ThemeStore(settings),
        gateway=GeminiGateway(),
        location_requester=LocationRequester(),
        speech_recognizer=create_speech_recognizer(get_speech_language()),
    )
