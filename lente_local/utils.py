from __future__ import annotations
import logging

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


def elide_middle(s: str, n: int) -> str:
    if len(s) <= n: return s
    half = (n - 1)//2
    return s[:half] + "…" + s[-half:]

def elide_end(s: str, n: int) -> str:
    return s if len(s) <= n else s[:n - 1] + "…"

def center_on_screen(w: QWidget):
    g = w.screen().availableGeometry() if hasattr(w, 'screen') and w.screen() else None
    if not g:
        from PyQt6.QtWidgets import QApplication
        g = QApplication.primaryScreen().availableGeometry()
    w.move(int((g.width()-w.width())/2), int((g.height()-w.height())/4))

def open_url(url: str) -> bool:
    ok = QDesktopServices.openUrl(QUrl(url))
    if not ok:
        logger.warning("Could not open %s", url)
    return ok
