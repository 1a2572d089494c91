from __future__ import annotations
import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from .config import THEME_STORAGE_KEY
from .models import Theme
from .ui.styles import build_stylesheet

logger = logging.getLogger(__name__)


def system_prefers_dark() -> bool:
    """True when the OS reports a dark color scheme (Qt 6.5+)."""
    app = QGuiApplication.instance()
    if app is None:
        return False
    hints = QGuiApplication.styleHints()
    if not hasattr(hints, "colorScheme"):
        return False
    return hints.colorScheme() == Qt.ColorScheme.Dark


class ThemeStore(QObject):
    """The persisted light/dark preference.

    `storage` is a QSettings (or anything with value/setValue/sync).
    """

    theme_changed = pyqtSignal(object)  # Theme

    def __init__(self, storage: Any, prefers_dark: Callable[[], bool] = system_prefers_dark, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._storage = storage
        self._prefers_dark = prefers_dark
        self._theme = self._initial_theme()

    def _initial_theme(self) -> Theme:
        stored = self._storage.value(THEME_STORAGE_KEY)
        if stored in (Theme.LIGHT.value, Theme.DARK.value):
            return Theme(stored)
        if self._prefers_dark():
            return Theme.DARK
        return Theme.LIGHT

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> None:
        theme = Theme(theme)
        self._theme = theme
        self._storage.setValue(THEME_STORAGE_KEY, theme.value)
        self._storage.sync()
        logger.debug("Theme set to %s", theme.value)
        self.theme_changed.emit(theme)

    def toggle(self) -> None:
        self.set_theme(self._theme.toggled())


def apply_theme(app: QGuiApplication, theme: Theme) -> None:
    """Flag the application with the theme and restyle it."""
    app.setProperty("theme", theme.value)
    if hasattr(app, "setStyleSheet"):
        app.setStyleSheet(build_stylesheet(theme))
