from __future__ import annotations
import logging
import os
from typing import Optional


ORGANIZATION_NAME = "LenteLocal"
APPLICATION_NAME = "lente-local"
THEME_STORAGE_KEY = "local-lens-theme"
GEOLOCATION_TIMEOUT_MS = 10_000

DEFAULT_SEARCH_MODEL = "gemini-2.5-flash"
DEFAULT_DETAILS_MODEL = "gemini-2.5-pro"
DEFAULT_LANGUAGE = "pt-BR"


def get_api_key() -> Optional[str]:
    """Read the Gemini API key from environment.

    Environment variables: API_KEY, then GEMINI_API_KEY.
    Returns None if neither is set.
    """
    for name in ("API_KEY", "GEMINI_API_KEY"):
        key = (os.getenv(name) or "").strip()
        if key:
            return key
    return None


def get_search_model() -> str:
    """Model used for grounded searches (LENTE_SEARCH_MODEL)."""
    return (os.getenv("LENTE_SEARCH_MODEL") or "").strip() or DEFAULT_SEARCH_MODEL


def get_details_model() -> str:
    """Model used for the "tell me more" elaboration (LENTE_DETAILS_MODEL)."""
    return (os.getenv("LENTE_DETAILS_MODEL") or "").strip() or DEFAULT_DETAILS_MODEL


def get_speech_language() -> str:
    return (os.getenv("LENTE_SPEECH_LANG") or "").strip() or DEFAULT_LANGUAGE


def get_ui_language() -> str:
    """Return the interface language from environment.

    Environment variable: LENTE_LANGUAGE (values: pt-BR|en)
    Unknown values fall back to pt-BR.
    """
    lang = (os.getenv("LENTE_LANGUAGE") or "").strip()
    if lang not in {"pt-BR", "en"}:
        return DEFAULT_LANGUAGE
    return lang


def get_log_level() -> str:
    level = (os.getenv("LENTE_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def get_log_file() -> Optional[str]:
    path = (os.getenv("LENTE_LOG_FILE") or "").strip()
    return path if path else None
