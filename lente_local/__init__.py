"""
Lente Local: ask about places and get answers grounded on Google Maps.

A PyQt6 desktop app, split into focused modules:

- `gemini`      AI query gateway (search with maps grounding, elaboration)
- `geolocation` one-shot position requests
- `speech`      optional microphone speech-recognition capability
- `voice`       voice input controller on top of `speech`
- `theme`       persisted light/dark preference
- `viewmodel`   root state and request orchestration
- `ui`          search bar, result view, workers and styles
- `main_ui`     the main window

Entry point: `python -m lente_local`.
"""

__all__ = [
    "config",
    "context",
    "errors",
    "gemini",
    "geolocation",
    "i18n",
    "logger",
    "models",
    "speech",
    "theme",
    "utils",
    "viewmodel",
    "voice",
    "widgets",
]
